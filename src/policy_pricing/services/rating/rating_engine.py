# PolicyCore - Policy Decision Management System
# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.
"""Main rating engine that orchestrates all rating calculations.

The engine validates the request, resolves the four base lookups, applies
the optional dynamic multiplier and the discount stack, and emits a quote
carrying the full factor breakdown. A calculation reads the active rate
snapshot exactly once and otherwise works on local state only, so any number
of quotes can be priced concurrently while the configuration is reloaded.
"""

import uuid
from collections.abc import Callable
from datetime import date, datetime, timedelta, timezone

from beartype import beartype

from ...core.config import DEFAULT_SLOW_QUOTE_THRESHOLD_MS, Settings, get_settings
from ...core.logging_utils import get_logger
from ...core.result_types import Err, Ok, Result
from ...models.errors import ConfigurationError, ValidationError
from ...models.quote import Factors, Quote, QuoteRequest, RateSummary, RatesSnapshot
from ...models.rate_configuration import RateConfiguration
from ..performance_monitor import performance_monitor
from .discounts import DiscountCalculator
from .multiplier_table import NEUTRAL_MULTIPLIER
from .premium_policy import PremiumFloorPolicy, round_money
from .rate_tables import RateTableService
from .rule_resolver import RuleResolver
from .validator import QuoteValidator

logger = get_logger(__name__)

DEFAULT_QUOTE_VALIDITY_DAYS = 30


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@beartype
def generate_quote_id() -> str:
    """Short unique quote identifier, e.g. ``Q-1a2b3c4d``."""
    return f"Q-{uuid.uuid4().hex[:8]}"


class RatingEngine:
    """Turns quote requests into priced quotes."""

    @beartype
    def __init__(
        self,
        rate_tables: RateTableService | RateConfiguration,
        *,
        validator: QuoteValidator | None = None,
        floor_policy: PremiumFloorPolicy = PremiumFloorPolicy.ALLOW_NEGATIVE,
        quote_validity_days: int = DEFAULT_QUOTE_VALIDITY_DAYS,
        clock: Callable[[], datetime] = _utcnow,
        slow_quote_threshold_ms: int = DEFAULT_SLOW_QUOTE_THRESHOLD_MS,
    ) -> None:
        """Initialize rating engine.

        Args:
            rate_tables: Service holding the active snapshot, or a fixed
                snapshot for callers that never reload
            validator: Request validator (defaults to auto/home/life)
            floor_policy: Whether final premiums may go negative
            quote_validity_days: Days between creation and expiry of a quote
            clock: Source of the current UTC time
            slow_quote_threshold_ms: Duration above which a quote is logged
                as slow
        """
        if isinstance(rate_tables, RateConfiguration):
            rate_tables = RateTableService(rate_tables)
        if quote_validity_days < 1:
            raise ValueError("quote_validity_days must be at least 1")

        self._rate_tables = rate_tables
        self._validator = validator or QuoteValidator()
        self._floor_policy = floor_policy
        self._validity = timedelta(days=quote_validity_days)
        self._clock = clock
        self._resolver_cache: tuple[RateConfiguration, RuleResolver] | None = None
        self._timed_calculate = performance_monitor(
            "calculate_quote", max_duration_ms=slow_quote_threshold_ms
        )(self._calculate)

    @classmethod
    @beartype
    def from_settings(cls, settings: Settings | None = None) -> "RatingEngine":
        """Build an engine wired from application settings."""
        settings = settings or get_settings()
        return cls(
            RateTableService.from_settings(settings),
            floor_policy=PremiumFloorPolicy(settings.premium_floor_policy),
            quote_validity_days=settings.quote_validity_days,
            slow_quote_threshold_ms=settings.slow_quote_threshold_ms,
        )

    @property
    def rate_tables(self) -> RateTableService:
        """Service holding the active snapshot."""
        return self._rate_tables

    @property
    def floor_policy(self) -> PremiumFloorPolicy:
        """Policy applied to negative final premiums."""
        return self._floor_policy

    def _resolver_for(self, configuration: RateConfiguration) -> RuleResolver:
        cached = self._resolver_cache
        if cached is not None and cached[0] is configuration:
            return cached[1]

        resolver = RuleResolver(configuration)
        self._resolver_cache = (configuration, resolver)
        return resolver

    @beartype
    def calculate_quote(
        self, request: QuoteRequest, *, as_of: date | None = None
    ) -> Result[Quote, ValidationError | ConfigurationError]:
        """Price a quote request.

        Args:
            request: Quote inputs
            as_of: Pricing date for seasonality; defaults to today (UTC)

        Returns:
            Result containing the quote, the violated request rule, or the
            configuration error that prevented pricing
        """
        return self._timed_calculate(request, as_of)

    def _calculate(
        self, request: QuoteRequest, as_of: date | None
    ) -> Result[Quote, ValidationError | ConfigurationError]:
        validation = self._validator.validate(request)
        if isinstance(validation, Err):
            logger.warning(
                "Quote request rejected: field=%s reason=%s",
                validation.error.field,
                validation.error.message,
            )
            return validation

        configuration = self._rate_tables.active
        resolver = self._resolver_for(configuration)
        policy_type = request.policy_type

        base_rate_result = resolver.resolve_base_rate(policy_type)
        if isinstance(base_rate_result, Err):
            logger.error(
                "Rate configuration error (version %s): %s",
                configuration.version,
                base_rate_result.error.message,
            )
            return base_rate_result

        base_rate = base_rate_result.value
        coverage_multiplier = resolver.resolve_coverage_multiplier(
            policy_type, request.coverage_amount
        )
        age_multiplier = resolver.resolve_age_multiplier(policy_type, request.customer_age)
        risk_multiplier = resolver.resolve_risk_multiplier(policy_type, request.risk_score)

        base_premium = base_rate * coverage_multiplier * age_multiplier * risk_multiplier

        created_at = self._clock()
        pricing_date = as_of or created_at.date()

        dynamic_multiplier = NEUTRAL_MULTIPLIER
        if configuration.dynamic_pricing.enabled:
            dynamic_multiplier = resolver.resolve_dynamic_factor(request, pricing_date)

        adjusted_rate = base_premium * dynamic_multiplier

        discounts = DiscountCalculator.calculate(
            request, adjusted_rate, configuration.discounts
        )
        adjusted_amount = round_money(adjusted_rate)
        discount_amount = round_money(discounts.total)
        # final = adjusted - discount holds exactly on the emitted amounts
        final_premium = round_money(
            self._floor_policy.apply(adjusted_amount - discount_amount)
        )

        quote = Quote(
            quote_id=generate_quote_id(),
            policy_type=policy_type,
            coverage_amount=request.coverage_amount,
            base_premium=round_money(base_premium),
            adjusted_rate=adjusted_amount,
            discount_amount=discount_amount,
            final_premium=final_premium,
            valid_until=created_at + self._validity,
            created_at=created_at,
            factors=Factors(
                base_multiplier=base_rate,
                coverage_multiplier=coverage_multiplier,
                age_multiplier=age_multiplier,
                risk_multiplier=risk_multiplier,
                dynamic_multiplier=dynamic_multiplier,
                discount_amount=discount_amount,
            ),
            applied_discounts=discounts.applied(),
            rate_version=configuration.version,
        )

        logger.info(
            "Quote calculated: quote_id=%s policy_type=%s final_premium=%s "
            "dynamic_rates=%s rate_version=%s",
            quote.quote_id,
            policy_type,
            quote.final_premium,
            configuration.dynamic_pricing.enabled,
            configuration.version,
        )
        return Ok(quote)

    @beartype
    def get_rates(self) -> RatesSnapshot:
        """Base rate and coverage tiers of every configured policy type."""
        configuration = self._rate_tables.active
        rates = [
            RateSummary(
                policy_type=policy_type,
                base_rate=policy_rates.base,
                coverage=dict(policy_rates.coverage_multipliers),
            )
            for policy_type, policy_rates in sorted(configuration.base_rates.items())
        ]
        return RatesSnapshot(
            rates=rates,
            version=configuration.version,
            timestamp=self._clock(),
        )
