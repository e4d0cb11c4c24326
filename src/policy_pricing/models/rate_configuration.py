# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Rate configuration snapshot models.

A ``RateConfiguration`` is one immutable, versioned instance of every table
the rating engine reads: base rates with their coverage, age and risk
multipliers, the discount schedule and the dynamic pricing factors. It is
parsed from the ``pricing-rules.json`` document (camelCase keys) and shared
read-only by every concurrent quote calculation.
Every table is exposed as a read-only mapping, so a loaded snapshot cannot be
changed in place.
"""

from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from types import MappingProxyType

from beartype import beartype
from pydantic import Field, field_serializer, field_validator

from .base import AliasedModel

CLAIMS_HISTORY_BUCKETS = ("0", "1", "2", "3+")
QUARTERS = ("Q1", "Q2", "Q3", "Q4")


def _require_integer_keys(table: Mapping[str, Decimal], table_name: str) -> None:
    for key in table:
        try:
            int(key)
        except ValueError:
            raise ValueError(
                f"{table_name} keys must be whole numbers, got '{key}'"
            ) from None


def _freeze_table(table: Mapping[str, Decimal]) -> Mapping[str, Decimal]:
    return MappingProxyType(dict(table))


@beartype
class PolicyRates(AliasedModel):
    """Base rate and multiplier tables for a single policy type."""

    base: Decimal = Field(..., ge=Decimal("0"), description="Base rate")
    coverage_multipliers: Mapping[str, Decimal] = Field(
        default_factory=dict,
        alias="coverage",
        description="Coverage tier (amount as string) to multiplier",
    )
    age_multipliers: Mapping[str, Decimal] = Field(
        default_factory=dict,
        alias="ageMultiplier",
        description="Age bracket label to multiplier",
    )
    risk_multipliers: Mapping[str, Decimal] = Field(
        default_factory=dict,
        alias="riskMultiplier",
        description="Risk score (as string) to multiplier",
    )

    @field_validator("coverage_multipliers", "risk_multipliers")
    @classmethod
    def validate_numeric_keys(
        cls: type["PolicyRates"], v: Mapping[str, Decimal]
    ) -> Mapping[str, Decimal]:
        """Coverage tiers and risk scores are looked up by their integer text."""
        _require_integer_keys(v, "Multiplier table")
        return _freeze_table(v)

    @field_validator("age_multipliers")
    @classmethod
    def freeze_age_table(
        cls: type["PolicyRates"], v: Mapping[str, Decimal]
    ) -> Mapping[str, Decimal]:
        return _freeze_table(v)

    @field_serializer("coverage_multipliers", "age_multipliers", "risk_multipliers")
    def serialize_table(self, v: Mapping[str, Decimal]) -> dict[str, Decimal]:
        return dict(v)


@beartype
class DiscountSchedule(AliasedModel):
    """Fractional discounts, each applied independently to the adjusted rate."""

    multi_policy: Decimal = Field(
        default=Decimal("0"), ge=Decimal("0"), le=Decimal("1"), alias="multiPolicy"
    )
    loyalty_years: Mapping[str, Decimal] = Field(
        default_factory=dict,
        alias="loyaltyYears",
        description="Years-as-customer threshold to discount fraction",
    )
    low_risk: Decimal = Field(
        default=Decimal("0"), ge=Decimal("0"), le=Decimal("1"), alias="lowRisk"
    )
    paperless_billing: Decimal = Field(
        default=Decimal("0"),
        ge=Decimal("0"),
        le=Decimal("1"),
        alias="paperlessBilling",
    )

    @field_validator("loyalty_years")
    @classmethod
    def validate_loyalty_thresholds(
        cls: type["DiscountSchedule"], v: Mapping[str, Decimal]
    ) -> Mapping[str, Decimal]:
        """Thresholds must be whole years and fractions within [0, 1]."""
        _require_integer_keys(v, "loyaltyYears")
        for threshold, fraction in v.items():
            if fraction < 0 or fraction > 1:
                raise ValueError(
                    f"Loyalty discount for {threshold} years must be between 0 and 1"
                )
        return _freeze_table(v)

    @field_serializer("loyalty_years")
    def serialize_table(self, v: Mapping[str, Decimal]) -> dict[str, Decimal]:
        return dict(v)


@beartype
class DynamicFactors(AliasedModel):
    """Seasonality, market and claims-history factors."""

    seasonality: Mapping[str, Decimal] = Field(
        default_factory=dict, description="Quarter label (Q1..Q4) to multiplier"
    )
    market_conditions: Decimal = Field(
        default=Decimal("1.0"), gt=Decimal("0"), alias="marketConditions"
    )
    claims_history: Mapping[str, Decimal] = Field(
        default_factory=dict,
        alias="claimsHistory",
        description="Claims bucket (0, 1, 2, 3+) to multiplier",
    )

    @field_validator("seasonality")
    @classmethod
    def validate_quarters(
        cls: type["DynamicFactors"], v: Mapping[str, Decimal]
    ) -> Mapping[str, Decimal]:
        """Only calendar quarter labels are meaningful."""
        unknown = sorted(set(v) - set(QUARTERS))
        if unknown:
            raise ValueError(f"Unknown seasonality quarters: {unknown}")
        return _freeze_table(v)

    @field_validator("claims_history")
    @classmethod
    def validate_claims_buckets(
        cls: type["DynamicFactors"], v: Mapping[str, Decimal]
    ) -> Mapping[str, Decimal]:
        """Only the four claims-history buckets are meaningful."""
        unknown = sorted(set(v) - set(CLAIMS_HISTORY_BUCKETS))
        if unknown:
            raise ValueError(f"Unknown claims history buckets: {unknown}")
        return _freeze_table(v)

    @field_serializer("seasonality", "claims_history")
    def serialize_table(self, v: Mapping[str, Decimal]) -> dict[str, Decimal]:
        return dict(v)


@beartype
class DynamicPricingConfig(AliasedModel):
    """Dynamic pricing switch and its factor tables."""

    enabled: bool = Field(default=False)
    factors: DynamicFactors = Field(default_factory=DynamicFactors)


@beartype
class RateMetadata(AliasedModel):
    """Informational metadata about a rate file."""

    version: str = Field(default="unversioned", min_length=1, max_length=50)
    effective_date: date | None = Field(default=None, alias="effectiveDate")
    last_updated: datetime | None = Field(default=None, alias="lastUpdated")


@beartype
class RateConfiguration(AliasedModel):
    """Immutable snapshot of all rating data."""

    base_rates: Mapping[str, PolicyRates] = Field(..., alias="baseRates")
    discounts: DiscountSchedule = Field(default_factory=DiscountSchedule)
    dynamic_pricing: DynamicPricingConfig = Field(
        default_factory=DynamicPricingConfig, alias="dynamicPricing"
    )
    metadata: RateMetadata = Field(default_factory=RateMetadata)

    @field_validator("base_rates")
    @classmethod
    def freeze_base_rates(
        cls: type["RateConfiguration"], v: Mapping[str, PolicyRates]
    ) -> Mapping[str, PolicyRates]:
        """Policy types cannot be added or removed after load."""
        return MappingProxyType(dict(v))

    @field_serializer("base_rates")
    def serialize_base_rates(
        self, v: Mapping[str, PolicyRates]
    ) -> dict[str, PolicyRates]:
        return dict(v)

    @property
    @beartype
    def version(self) -> str:
        """Version label of this snapshot."""
        return self.metadata.version

    @beartype
    def with_dynamic_pricing(self, enabled: bool) -> "RateConfiguration":
        """Return a new snapshot with the dynamic pricing switch set."""
        if self.dynamic_pricing.enabled == enabled:
            return self
        dynamic_pricing = self.dynamic_pricing.model_copy(update={"enabled": enabled})
        return self.model_copy(update={"dynamic_pricing": dynamic_pricing})
