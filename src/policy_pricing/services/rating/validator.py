# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Quote request validation.

Validation is pure and fails fast: the first violated rule is reported and
no rate table is consulted until every rule passes. Rules are checked in
this order: policy type, coverage amount, customer age, risk score.
"""

from collections.abc import Iterable

from beartype import beartype

from ...core.result_types import Err, Ok, Result
from ...models.errors import ValidationError
from ...models.quote import PolicyType, QuoteRequest

MIN_CUSTOMER_AGE = 18
MAX_CUSTOMER_AGE = 120
MIN_RISK_SCORE = 1
MAX_RISK_SCORE = 5

DEFAULT_POLICY_TYPES: tuple[str, ...] = tuple(p.value for p in PolicyType)


class QuoteValidator:
    """Check a quote request against the field rules."""

    @beartype
    def __init__(
        self, supported_policy_types: Iterable[str] = DEFAULT_POLICY_TYPES
    ) -> None:
        """Initialize validator.

        Args:
            supported_policy_types: Policy types that may be quoted
        """
        self._policy_types = tuple(supported_policy_types)

    @property
    def supported_policy_types(self) -> tuple[str, ...]:
        """Policy types accepted by this validator."""
        return self._policy_types

    @beartype
    def validate(self, request: QuoteRequest) -> Result[QuoteRequest, ValidationError]:
        """Return the request unchanged, or the first violated rule."""
        if request.policy_type not in self._policy_types:
            return Err(
                ValidationError(
                    field="policy_type",
                    message=(
                        f"invalid policy type: {request.policy_type} "
                        f"(must be {', '.join(self._policy_types)})"
                    ),
                    value=request.policy_type,
                )
            )

        if request.coverage_amount <= 0:
            return Err(
                ValidationError(
                    field="coverage_amount",
                    message="coverage amount must be greater than 0",
                    value=request.coverage_amount,
                )
            )

        if not MIN_CUSTOMER_AGE <= request.customer_age <= MAX_CUSTOMER_AGE:
            return Err(
                ValidationError(
                    field="customer_age",
                    message=(
                        f"customer age must be between {MIN_CUSTOMER_AGE} "
                        f"and {MAX_CUSTOMER_AGE}"
                    ),
                    value=request.customer_age,
                )
            )

        if not MIN_RISK_SCORE <= request.risk_score <= MAX_RISK_SCORE:
            return Err(
                ValidationError(
                    field="risk_score",
                    message=(
                        f"risk score must be between {MIN_RISK_SCORE} "
                        f"and {MAX_RISK_SCORE}"
                    ),
                    value=request.risk_score,
                )
            )

        return Ok(request)
