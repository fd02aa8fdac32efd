"""Cache key derivation for matching queries."""

from __future__ import annotations

from solbridge_core.models.matching import MatchQuery

MATCHES_KEY_PREFIX = "sellers"

# One active-allocations list per session, so its slot is a constant.
ACTIVE_ALLOCATIONS_KEY = "allocations:active"


def _number(value: float) -> str:
    # repr round-trips floats exactly; adding 0.0 folds -0.0 into 0.0
    return repr(float(value) + 0.0)


def derive_match_key(query: MatchQuery) -> str:
    """Return the cache key for a find-sellers query.

    Every field that shapes the result set is part of the key, so equal
    queries share a slot and distinct queries never collide.
    """
    return ":".join(
        (
            MATCHES_KEY_PREFIX,
            _number(query.required_energy),
            _number(query.max_price),
            "renewable" if query.renewable_preference else "any",
            _number(query.min_rating),
        )
    )
