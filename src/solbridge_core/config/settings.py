"""Application settings using pydantic-settings."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from solbridge_core.constants import (
    ALLOCATIONS_CACHE_TTL_SECONDS,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    MATCHES_CACHE_TTL_SECONDS,
)


class Settings(BaseSettings):
    """Central configuration for the matching client."""

    model_config = SettingsConfigDict(env_prefix="SB_", env_file=".env")

    # --- Backend ---
    api_base_url: str = Field(
        default="https://sol-bridge.onrender.com",
        description="Root URL of the SolBridge backend",
    )
    matching_path_prefix: str = Field(
        default="/api/v1/matching",
        description="Path under the root where the matching endpoints live",
    )
    access_token: SecretStr | None = Field(
        default=None,
        description="Bearer token attached to every request (optional)",
    )

    # --- Requests ---
    request_timeout_seconds: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT_SECONDS,
        gt=0,
        description="Upper bound on the total duration of each call",
    )

    # --- Cache ---
    matches_cache_ttl_seconds: float = Field(
        default=MATCHES_CACHE_TTL_SECONDS,
        gt=0,
        description="TTL for find-sellers results",
    )
    allocations_cache_ttl_seconds: float = Field(
        default=ALLOCATIONS_CACHE_TTL_SECONDS,
        gt=0,
        description="TTL for the active allocations list",
    )
    cache_max_entries: int | None = Field(
        default=None,
        ge=1,
        description="Optional capacity bound; oldest entry is evicted when full",
    )

    # --- Observability ---
    log_level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format",
    )

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Normalize the root URL so path joining is predictable."""
        return value.rstrip("/")

    @field_validator("matching_path_prefix")
    @classmethod
    def normalize_prefix(cls, value: str) -> str:
        """Ensure the prefix has exactly one leading slash and no trailing one."""
        stripped = value.strip("/")
        return f"/{stripped}" if stripped else ""

    @property
    def matching_base_url(self) -> str:
        """Full base URL for the matching endpoints."""
        return f"{self.api_base_url}{self.matching_path_prefix}"
