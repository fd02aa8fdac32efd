"""Matching query and allocation request models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from solbridge_core.constants import DEFAULT_MIN_RATING, DEFAULT_RENEWABLE_PREFERENCE


class MatchQuery(BaseModel):
    """A buyer's requirement used to find compatible sellers.

    Field-wise equal queries are interchangeable: they hit the same
    cache slot and produce the same request body.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    required_energy: float = Field(gt=0, description="Energy required, in kWh")
    max_price: float = Field(ge=0, description="Price ceiling per kWh")
    renewable_preference: bool = Field(
        default=DEFAULT_RENEWABLE_PREFERENCE,
        description="Only match renewable sources",
    )
    min_rating: float = Field(
        default=DEFAULT_MIN_RATING, ge=0, le=5, description="Minimum seller rating"
    )

    def to_request_body(self) -> dict[str, Any]:
        """Return the find-sellers wire body."""
        return {
            "requiredKwh": self.required_energy,
            "maxPrice": self.max_price,
            "preferences": {
                "renewable": self.renewable_preference,
                "minRating": self.min_rating,
            },
        }


class SelectedMatch(BaseModel):
    """A match chosen by the buyer for allocation.

    Built straight from a find-sellers result item; unknown fields are ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    id: str = Field(min_length=1, description="Match identifier")
    seller_id: str = Field(min_length=1, description="Seller identifier")
    available_kwh: float = Field(gt=0, description="Energy to allocate from this seller")

    def to_allocation_item(self) -> dict[str, Any]:
        """Return one entry of the allocate wire body."""
        return {
            "match_id": self.id,
            "seller_id": self.seller_id,
            "allocated_kwh": self.available_kwh,
        }


class CostEstimateRequest(BaseModel):
    """Inputs for a cost estimate."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    required_kwh: float = Field(gt=0, description="Energy required, in kWh")
    max_price: float = Field(ge=0, description="Price ceiling per kWh")

    def to_request_body(self) -> dict[str, Any]:
        """Return the estimate wire body."""
        return {"requiredKwh": self.required_kwh, "maxPrice": self.max_price}
