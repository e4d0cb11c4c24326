"""Test configuration and fixtures for the pricing engine.

Fixtures build rate configurations from plain dictionaries shaped like the
``pricing-rules.json`` document, so every test states the exact tables it
prices against.
"""

import copy
import json
from collections.abc import Callable, Generator
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from policy_pricing.core.config import clear_settings_cache
from policy_pricing.models.quote import QuoteRequest
from policy_pricing.models.rate_configuration import RateConfiguration
from policy_pricing.services.rating import RatingEngine

# May falls in Q2, which the sample document leaves unconfigured.
FIXED_NOW = datetime(2025, 5, 15, 12, 0, tzinfo=timezone.utc)

SAMPLE_RULES: dict[str, Any] = {
    "baseRates": {
        "auto": {
            "base": "800",
            "coverage": {
                "250000": "1.0",
                "300000": "1.15",
                "400000": "1.35",
                "500000": "1.55",
            },
            "ageMultiplier": {
                "18-24": "1.8",
                "25-34": "1.2",
                "35-49": "1.0",
                "50-64": "0.95",
                "65+": "1.15",
            },
            "riskMultiplier": {
                "1": "0.85",
                "2": "1.0",
                "3": "1.2",
                "4": "1.5",
                "5": "2.0",
            },
        },
        "home": {
            "base": "1200",
            "coverage": {
                "500000": "1.0",
                "650000": "1.2",
                "750000": "1.35",
                "1000000": "1.7",
                "1200000": "2.0",
            },
            "ageMultiplier": {
                "18-34": "1.1",
                "35-49": "1.0",
                "50-64": "0.95",
                "65+": "1.05",
            },
            "riskMultiplier": {"1": "0.9", "2": "1.0", "3": "1.15"},
        },
        "life": {
            "base": "500",
            "coverage": {
                "250000": "1.0",
                "500000": "1.8",
                "750000": "2.5",
                "1000000": "3.2",
            },
            "ageMultiplier": {
                "18-24": "0.8",
                "25-34": "0.9",
                "35-49": "1.2",
                "50-64": "2.0",
                "65+": "3.5",
            },
            "riskMultiplier": {"1": "0.8", "2": "1.0", "3": "1.3"},
        },
    },
    "discounts": {
        "multiPolicy": "0.10",
        "loyaltyYears": {
            "1": "0.0",
            "2": "0.05",
            "3": "0.08",
            "5": "0.12",
            "10": "0.18",
        },
        "lowRisk": "0.10",
        "paperlessBilling": "0.02",
    },
    "dynamicPricing": {
        "enabled": True,
        "factors": {
            "seasonality": {"Q1": "1.0", "Q4": "1.1"},
            "marketConditions": "0.95",
            "claimsHistory": {"0": "1.0", "1": "1.05", "2": "1.15", "3+": "1.35"},
        },
    },
    "metadata": {
        "version": "test-1",
        "effectiveDate": "2025-01-01",
        "lastUpdated": "2025-01-01T00:00:00Z",
    },
}


@pytest.fixture(autouse=True)
def _reset_settings() -> Generator[None, None, None]:
    """Never leak cached settings between tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def rules_document() -> dict[str, Any]:
    """Mutable deep copy of the sample pricing rules."""
    return copy.deepcopy(SAMPLE_RULES)


@pytest.fixture
def rate_configuration(rules_document: dict[str, Any]) -> RateConfiguration:
    """Sample configuration with dynamic pricing enabled."""
    return RateConfiguration.model_validate(rules_document)


@pytest.fixture
def static_configuration(rate_configuration: RateConfiguration) -> RateConfiguration:
    """Sample configuration with dynamic pricing disabled."""
    return rate_configuration.with_dynamic_pricing(False)


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock frozen at ``FIXED_NOW``."""
    return lambda: FIXED_NOW


@pytest.fixture
def engine(
    rate_configuration: RateConfiguration, fixed_clock: Callable[[], datetime]
) -> RatingEngine:
    """Engine over the dynamic sample configuration."""
    return RatingEngine(rate_configuration, clock=fixed_clock)


@pytest.fixture
def make_request() -> Callable[..., QuoteRequest]:
    """Factory for quote requests with sensible defaults."""

    def _make(**overrides: Any) -> QuoteRequest:
        fields: dict[str, Any] = {
            "policy_type": "auto",
            "coverage_amount": 500000,
            "customer_age": 35,
            "risk_score": 2,
        }
        fields.update(overrides)
        return QuoteRequest(**fields)

    return _make


@pytest.fixture
def write_rules(tmp_path: Path) -> Callable[..., Path]:
    """Write a pricing rules document to a temporary file."""

    def _write(document: dict[str, Any] | str, name: str = "pricing-rules.json") -> Path:
        path = tmp_path / name
        text = document if isinstance(document, str) else json.dumps(document)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
