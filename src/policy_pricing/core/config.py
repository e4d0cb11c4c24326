# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Configuration management using Pydantic Settings."""

from pathlib import Path

from beartype import beartype
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_RATES_FILE = Path(__file__).resolve().parent.parent / "data" / "pricing-rules.json"
DEFAULT_SLOW_QUOTE_THRESHOLD_MS = 50


class Settings(BaseSettings):
    """Application settings with immutable configuration."""

    model_config = SettingsConfigDict(
        env_file=None,
        env_file_encoding="utf-8",
        frozen=True,  # Immutable settings
        validate_default=True,
        extra="forbid",
    )

    # Rate tables
    rates_path: Path = Field(
        default=DEFAULT_RATES_FILE,
        description="Path to the pricing rules JSON document",
    )
    feature_dynamic_rates: bool | None = Field(
        default=None,
        description=(
            "Override for dynamicPricing.enabled applied when the rate file is "
            "loaded; None keeps the value from the file"
        ),
    )

    # Quote behaviour
    quote_validity_days: int = Field(
        default=30,
        ge=1,
        le=365,
        description="Number of days a quote stays valid after creation",
    )
    premium_floor_policy: str = Field(
        default="allow_negative",
        pattern="^(allow_negative|clamp_to_zero)$",
        description="Whether final premiums may go below zero after discounts",
    )
    slow_quote_threshold_ms: int = Field(
        default=DEFAULT_SLOW_QUOTE_THRESHOLD_MS,
        ge=1,
        le=10_000,
        description="Quote calculations slower than this are logged as warnings",
    )

    # Runtime
    log_level: str = Field(
        default="INFO",
        description="Logging level name",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls: type["Settings"], v: str) -> str:
        """Ensure the log level is one the logging module understands."""
        normalized = v.strip().upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return normalized


_settings: Settings | None = None


@beartype
def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


@beartype
def clear_settings_cache() -> None:
    """Clear settings cache (for testing)."""
    global _settings
    _settings = None
