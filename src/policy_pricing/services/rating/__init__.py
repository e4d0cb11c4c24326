# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Rating engine services package.

This package provides the rule-driven premium calculation:
- Rate configuration loading with atomic snapshot reloads
- Exact-match multiplier tables with neutral fallbacks
- Age brackets with per-policy alternate bracket mappings
- Dynamic pricing (seasonality, market conditions, claims history)
- Flat, uncompounded discount stacking
- Request validation
"""

from .age_brackets import AGE_BRACKETS, ALTERNATE_BRACKETS, AgeBracket
from .discounts import DiscountBreakdown, DiscountCalculator, best_loyalty_fraction
from .dynamic_pricing import (
    claims_history_bucket,
    compute_dynamic_multiplier,
    quarter_for,
)
from .multiplier_table import NEUTRAL_MULTIPLIER, MultiplierTable
from .premium_policy import PremiumFloorPolicy, round_money
from .rate_tables import RateTableService
from .rating_engine import RatingEngine
from .rule_resolver import RuleResolver
from .validator import QuoteValidator

__all__ = [
    # Main Engine
    "RatingEngine",
    # Lookups
    "RuleResolver",
    "MultiplierTable",
    "NEUTRAL_MULTIPLIER",
    "AgeBracket",
    "AGE_BRACKETS",
    "ALTERNATE_BRACKETS",
    # Dynamic pricing
    "compute_dynamic_multiplier",
    "quarter_for",
    "claims_history_bucket",
    # Discounts
    "DiscountCalculator",
    "DiscountBreakdown",
    "best_loyalty_fraction",
    # Premium policy
    "PremiumFloorPolicy",
    "round_money",
    # Validation
    "QuoteValidator",
    # Services
    "RateTableService",
]
