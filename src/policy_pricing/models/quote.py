# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Quote request, quote and rate table projection models."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from beartype import beartype
from pydantic import Field

from .base import AliasedModel


class PolicyType(str, Enum):
    """Policy types the engine can rate."""

    AUTO = "auto"
    HOME = "home"
    LIFE = "life"


class DiscountType(str, Enum):
    """Discounts that can contribute to a quote."""

    MULTI_POLICY = "multi_policy"
    LOYALTY = "loyalty"
    LOW_RISK = "low_risk"
    PAPERLESS_BILLING = "paperless_billing"


@beartype
class QuoteRequest(AliasedModel):
    """Caller-supplied inputs for a single quote calculation.

    Range rules for the four required fields are enforced by
    ``QuoteValidator`` so that callers receive one domain error naming the
    violated rule instead of a schema error.
    """

    policy_type: str = Field(..., alias="policyType")
    coverage_amount: int = Field(..., alias="coverageAmount")
    customer_age: int = Field(..., alias="customerAge")
    risk_score: int = Field(..., alias="riskScore")

    customer_id: str | None = Field(default=None, alias="customerId", max_length=100)
    multi_policy: bool = Field(default=False, alias="multiPolicy")
    loyalty_years: int = Field(default=0, ge=0, alias="loyaltyYears")
    paperless_bill: bool = Field(default=False, alias="paperlessBill")
    claims_history: int = Field(default=0, ge=0, alias="claimsHistory")


@beartype
class Factors(AliasedModel):
    """Every intermediate multiplier behind a quote, kept for audit."""

    base_multiplier: Decimal = Field(..., alias="baseMultiplier")
    coverage_multiplier: Decimal = Field(..., alias="coverageMultiplier")
    age_multiplier: Decimal = Field(..., alias="ageMultiplier")
    risk_multiplier: Decimal = Field(..., alias="riskMultiplier")
    dynamic_multiplier: Decimal = Field(..., alias="dynamicMultiplier")
    discount_amount: Decimal = Field(..., alias="discountAmount")


@beartype
class AppliedDiscount(AliasedModel):
    """One discount that contributed to the quote."""

    discount_type: DiscountType = Field(..., alias="discountType")
    rate: Decimal = Field(..., ge=Decimal("0"), le=Decimal("1"))
    amount: Decimal = Field(..., description="Rounded amount taken off the premium")


@beartype
class Quote(AliasedModel):
    """Priced quote returned to the caller."""

    quote_id: str = Field(..., alias="quoteId", pattern=r"^Q-[0-9a-f]{8}$")
    policy_type: str = Field(..., alias="policyType")
    coverage_amount: int = Field(..., alias="coverageAmount", gt=0)
    base_premium: Decimal = Field(..., alias="basePremium")
    adjusted_rate: Decimal = Field(..., alias="adjustedRate")
    discount_amount: Decimal = Field(..., alias="discountAmount")
    final_premium: Decimal = Field(..., alias="finalPremium")
    valid_until: datetime = Field(..., alias="validUntil")
    created_at: datetime = Field(..., alias="createdAt")
    factors: Factors = Field(...)
    applied_discounts: list[AppliedDiscount] = Field(
        default_factory=list, alias="appliedDiscounts"
    )
    rate_version: str = Field(..., alias="rateVersion")


@beartype
class RateSummary(AliasedModel):
    """Base rate and coverage tiers of one policy type."""

    policy_type: str = Field(..., alias="policyType")
    base_rate: Decimal = Field(..., alias="baseRate")
    coverage: dict[str, Decimal] = Field(default_factory=dict)


@beartype
class RatesSnapshot(AliasedModel):
    """Read-only view of the active rate tables."""

    rates: list[RateSummary] = Field(default_factory=list)
    version: str = Field(...)
    timestamp: datetime = Field(...)
