# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Money rounding and the final premium floor policy.

Amounts are carried at full ``Decimal`` precision through the whole
calculation and rounded half-up to cents only when a quote is emitted.
"""

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from beartype import beartype

MONEY_QUANTUM = Decimal("0.01")
ZERO = Decimal("0")


@beartype
def round_money(amount: Decimal) -> Decimal:
    """Round a monetary amount half-up to two decimal places."""
    return amount.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


class PremiumFloorPolicy(str, Enum):
    """What happens when stacked discounts exceed the adjusted rate."""

    ALLOW_NEGATIVE = "allow_negative"
    CLAMP_TO_ZERO = "clamp_to_zero"

    @beartype
    def apply(self, premium: Decimal) -> Decimal:
        """Apply the floor to a final premium."""
        if self is PremiumFloorPolicy.CLAMP_TO_ZERO and premium < ZERO:
            return ZERO
        return premium
