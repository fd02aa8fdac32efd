"""Outbound request descriptions for each matching endpoint."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Literal
from urllib.parse import quote

from solbridge_core import constants
from solbridge_core.models.matching import CostEstimateRequest, MatchQuery, SelectedMatch

HttpMethod = Literal["GET", "POST", "DELETE"]


@dataclass(frozen=True)
class Operation:
    """Everything needed to issue one call and report its failure."""

    name: str
    method: HttpMethod
    path: str
    fallback_message: str
    body: dict[str, Any] | None = None


def _segment(identifier: str | int) -> str:
    """Percent-encode an identifier as a single path segment."""
    return quote(str(identifier), safe="")


def find_sellers(query: MatchQuery) -> Operation:
    return Operation(
        name="find_sellers",
        method="POST",
        path="find-sellers",
        fallback_message=constants.FIND_SELLERS_FAILED,
        body=query.to_request_body(),
    )


def match_details(match_id: str | int) -> Operation:
    return Operation(
        name="get_match_details",
        method="GET",
        path=f"matches/{_segment(match_id)}",
        fallback_message=constants.MATCH_DETAILS_FAILED,
    )


def create_allocation(matches: Iterable[SelectedMatch]) -> Operation:
    return Operation(
        name="create_allocation",
        method="POST",
        path="allocate",
        fallback_message=constants.CREATE_ALLOCATION_FAILED,
        body={"matches": [m.to_allocation_item() for m in matches]},
    )


def active_allocations() -> Operation:
    return Operation(
        name="get_active_allocations",
        method="GET",
        path="allocations/active",
        fallback_message=constants.ACTIVE_ALLOCATIONS_FAILED,
    )


def cancel_allocation(allocation_id: str | int) -> Operation:
    return Operation(
        name="cancel_allocation",
        method="DELETE",
        path=f"allocations/{_segment(allocation_id)}",
        fallback_message=constants.CANCEL_ALLOCATION_FAILED,
    )


def matching_statistics() -> Operation:
    return Operation(
        name="get_matching_stats",
        method="GET",
        path="statistics",
        fallback_message=constants.STATISTICS_FAILED,
    )


def cost_estimate(request: CostEstimateRequest) -> Operation:
    return Operation(
        name="calculate_estimate",
        method="POST",
        path="estimate",
        fallback_message=constants.ESTIMATE_FAILED,
        body=request.to_request_body(),
    )
