# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Domain models package for the pricing engine.

This package exports all Pydantic domain models with strict validation
and immutability.
"""

from .base import AliasedModel, BaseModelConfig
from .errors import (
    ConfigurationError,
    ErrorKind,
    RateConfigurationLoadError,
    ValidationError,
)
from .quote import (
    AppliedDiscount,
    DiscountType,
    Factors,
    PolicyType,
    Quote,
    QuoteRequest,
    RateSummary,
    RatesSnapshot,
)
from .rate_configuration import (
    DiscountSchedule,
    DynamicFactors,
    DynamicPricingConfig,
    PolicyRates,
    RateConfiguration,
    RateMetadata,
)

__all__ = [
    # Base models
    "BaseModelConfig",
    "AliasedModel",
    # Rate configuration
    "RateConfiguration",
    "PolicyRates",
    "DiscountSchedule",
    "DynamicPricingConfig",
    "DynamicFactors",
    "RateMetadata",
    # Quotes
    "PolicyType",
    "DiscountType",
    "QuoteRequest",
    "Quote",
    "Factors",
    "AppliedDiscount",
    "RateSummary",
    "RatesSnapshot",
    # Errors
    "ErrorKind",
    "ValidationError",
    "ConfigurationError",
    "RateConfigurationLoadError",
]
