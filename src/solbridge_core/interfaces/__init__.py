"""Public interface re-exports for solbridge_core."""

from solbridge_core.interfaces.cache import CacheStore

__all__ = ["CacheStore"]
