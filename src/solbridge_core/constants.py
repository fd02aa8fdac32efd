"""Shared constants for the SolBridge matching client."""

from __future__ import annotations

# Request policy
DEFAULT_REQUEST_TIMEOUT_SECONDS = 10.0
TIMEOUT_MESSAGE = "Request timeout - backend is taking too long to respond"

# Cache TTLs per entry class (seconds)
MATCHES_CACHE_TTL_SECONDS = 5 * 60
ALLOCATIONS_CACHE_TTL_SECONDS = 60

# Find-sellers preference defaults
DEFAULT_RENEWABLE_PREFERENCE = False
DEFAULT_MIN_RATING = 3.0

# Per-operation fallback messages when the server gives none
FIND_SELLERS_FAILED = "Failed to fetch matches"
MATCH_DETAILS_FAILED = "Failed to fetch match details"
CREATE_ALLOCATION_FAILED = "Failed to create allocation"
ACTIVE_ALLOCATIONS_FAILED = "Failed to fetch allocations"
CANCEL_ALLOCATION_FAILED = "Failed to cancel allocation"
STATISTICS_FAILED = "Failed to fetch statistics"
ESTIMATE_FAILED = "Failed to calculate estimate"
