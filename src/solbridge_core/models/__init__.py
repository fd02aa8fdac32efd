"""Domain models for the SolBridge matching client."""

from solbridge_core.models.cache import CacheClass, CacheEntry, CacheStats
from solbridge_core.models.matching import CostEstimateRequest, MatchQuery, SelectedMatch

__all__ = [
    "CacheClass",
    "CacheEntry",
    "CacheStats",
    "CostEstimateRequest",
    "MatchQuery",
    "SelectedMatch",
]
