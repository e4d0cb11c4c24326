# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Discount stacking.

Every applicable discount is an independent fraction of the adjusted rate.
The fractions are summed, never compounded, so the total discount always
equals ``adjusted_rate × sum(applicable fractions)``. Nothing caps the total;
see ``PremiumFloorPolicy`` for what happens when it exceeds the rate.
Loyalty is only considered for customers with at least one year of tenure.
"""

from decimal import Decimal

from attrs import frozen
from beartype import beartype

from ...core.logging_utils import get_logger
from ...models.quote import AppliedDiscount, DiscountType, QuoteRequest
from ...models.rate_configuration import DiscountSchedule
from .premium_policy import ZERO, round_money

logger = get_logger(__name__)

LOW_RISK_SCORE = 1


@frozen
class DiscountLine:
    """A single applicable discount at full precision."""

    discount_type: DiscountType
    rate: Decimal
    amount: Decimal


@frozen
class DiscountBreakdown:
    """All applicable discounts and their total."""

    lines: tuple[DiscountLine, ...]
    total: Decimal

    @property
    def total_rate(self) -> Decimal:
        """Sum of the applied fractions."""
        return sum((line.rate for line in self.lines), ZERO)

    @beartype
    def applied(self) -> list[AppliedDiscount]:
        """Rounded, caller-facing view of the lines that reduced the premium."""
        return [
            AppliedDiscount(
                discount_type=line.discount_type,
                rate=line.rate,
                amount=round_money(line.amount),
            )
            for line in self.lines
            if line.rate > ZERO
        ]


@beartype
def best_loyalty_fraction(schedule: DiscountSchedule, loyalty_years: int) -> Decimal:
    """Highest fraction among all thresholds the customer meets or exceeds.

    The maximum over every qualifying threshold is taken, not the fraction of
    the closest threshold. No qualifying threshold means no discount.
    """
    qualifying = [
        fraction
        for threshold, fraction in schedule.loyalty_years.items()
        if int(threshold) <= loyalty_years
    ]
    return max(qualifying, default=ZERO)


class DiscountCalculator:
    """Resolve which discounts apply to a request and what they are worth."""

    @beartype
    @staticmethod
    def applicable_rates(
        request: QuoteRequest, schedule: DiscountSchedule
    ) -> list[tuple[DiscountType, Decimal]]:
        """Fractions of every discount the request qualifies for."""
        rates: list[tuple[DiscountType, Decimal]] = []

        if request.multi_policy:
            rates.append((DiscountType.MULTI_POLICY, schedule.multi_policy))

        if schedule.loyalty_years and request.loyalty_years > 0:
            rates.append(
                (
                    DiscountType.LOYALTY,
                    best_loyalty_fraction(schedule, request.loyalty_years),
                )
            )

        if request.risk_score == LOW_RISK_SCORE:
            rates.append((DiscountType.LOW_RISK, schedule.low_risk))

        if request.paperless_bill:
            rates.append((DiscountType.PAPERLESS_BILLING, schedule.paperless_billing))

        return rates

    @beartype
    @staticmethod
    def calculate(
        request: QuoteRequest,
        adjusted_rate: Decimal,
        schedule: DiscountSchedule,
    ) -> DiscountBreakdown:
        """Flat sum of independent fractional discounts against ``adjusted_rate``."""
        lines = tuple(
            DiscountLine(
                discount_type=discount_type,
                rate=rate,
                amount=adjusted_rate * rate,
            )
            for discount_type, rate in DiscountCalculator.applicable_rates(
                request, schedule
            )
        )
        total = sum((line.amount for line in lines), ZERO)

        logger.debug(
            "Discount calculated: multi_policy=%s loyalty_years=%s "
            "paperless_bill=%s risk_score=%s total_discount=%s",
            request.multi_policy,
            request.loyalty_years,
            request.paperless_bill,
            request.risk_score,
            total,
        )
        return DiscountBreakdown(lines=lines, total=total)
