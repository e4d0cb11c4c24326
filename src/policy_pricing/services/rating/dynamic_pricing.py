# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Dynamic pricing factor computation.

The dynamic multiplier is the product of three independently configured
factors: seasonality (calendar quarter of the pricing date), market
conditions (one global scalar) and claims history (bucketed claim count).
Missing seasonality or claims entries contribute a neutral ``1.0``.
"""

from datetime import date
from decimal import Decimal

from beartype import beartype

from ...core.logging_utils import get_logger
from ...models.rate_configuration import DynamicFactors
from .multiplier_table import MultiplierTable

logger = get_logger(__name__)


@beartype
def quarter_for(as_of: date) -> str:
    """Calendar quarter label (Q1..Q4) of ``as_of``."""
    return f"Q{(as_of.month - 1) // 3 + 1}"


@beartype
def claims_history_bucket(claims: int) -> str:
    """Bucket a claim count into "0", "1", "2" or "3+"."""
    if claims < 0:
        raise ValueError(f"Claims history cannot be negative: {claims}")
    if claims >= 3:
        return "3+"
    return str(claims)


@beartype
def compute_dynamic_multiplier(
    factors: DynamicFactors, claims_history: int, as_of: date
) -> Decimal:
    """Multiply seasonality, market conditions and claims-history factors."""
    quarter = quarter_for(as_of)
    claims_key = claims_history_bucket(claims_history)

    seasonality = MultiplierTable(factors.seasonality).lookup(quarter)
    claims_factor = MultiplierTable(factors.claims_history).lookup(claims_key)
    multiplier = seasonality * factors.market_conditions * claims_factor

    logger.debug(
        "Dynamic multiplier calculated: quarter=%s claims_bucket=%s "
        "seasonality=%s market=%s claims=%s multiplier=%s",
        quarter,
        claims_key,
        seasonality,
        factors.market_conditions,
        claims_factor,
        multiplier,
    )
    return multiplier
