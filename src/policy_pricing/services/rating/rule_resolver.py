# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Pure rate table lookups over one configuration snapshot.

Only the base rate can fail: a policy type without a base rate entry means
the rate configuration is broken. Every multiplier lookup degrades to the
neutral ``1.0`` on a miss.
"""

from collections.abc import Mapping
from datetime import date
from decimal import Decimal

from attrs import frozen
from beartype import beartype

from ...core.result_types import Err, Ok, Result
from ...models.errors import ConfigurationError, ErrorKind
from ...models.quote import QuoteRequest
from ...models.rate_configuration import RateConfiguration
from .age_brackets import ALTERNATE_BRACKETS, candidate_labels
from .dynamic_pricing import compute_dynamic_multiplier
from .multiplier_table import EMPTY_TABLE, MultiplierTable


@frozen
class PolicyTables:
    """Multiplier tables of one policy type."""

    coverage: MultiplierTable
    age: MultiplierTable
    risk: MultiplierTable


_EMPTY_POLICY_TABLES = PolicyTables(EMPTY_TABLE, EMPTY_TABLE, EMPTY_TABLE)


class RuleResolver:
    """Lookup functions bound to a single ``RateConfiguration``."""

    @beartype
    def __init__(
        self,
        configuration: RateConfiguration,
        alternate_brackets: Mapping[str, Mapping[str, str]] = ALTERNATE_BRACKETS,
    ) -> None:
        """Initialize resolver.

        Args:
            configuration: Snapshot every lookup reads from
            alternate_brackets: Per-policy fallback bracket labels
        """
        self._configuration = configuration
        self._alternate_brackets = alternate_brackets
        self._tables = {
            policy_type: PolicyTables(
                coverage=MultiplierTable(rates.coverage_multipliers),
                age=MultiplierTable(rates.age_multipliers),
                risk=MultiplierTable(rates.risk_multipliers),
            )
            for policy_type, rates in configuration.base_rates.items()
        }

    @property
    def configuration(self) -> RateConfiguration:
        """Snapshot this resolver reads from."""
        return self._configuration

    def _policy_tables(self, policy_type: str) -> PolicyTables:
        return self._tables.get(policy_type, _EMPTY_POLICY_TABLES)

    @beartype
    def resolve_base_rate(self, policy_type: str) -> Result[Decimal, ConfigurationError]:
        """Base rate of ``policy_type``; missing entries are a configuration error."""
        rates = self._configuration.base_rates.get(policy_type)
        if rates is None:
            return Err(
                ConfigurationError(
                    kind=ErrorKind.RATE_TABLE_MISSING,
                    message=(
                        f"No base rate configured for policy type '{policy_type}' "
                        f"in rate configuration {self._configuration.version}"
                    ),
                    policy_type=policy_type,
                )
            )
        return Ok(rates.base)

    @beartype
    def resolve_coverage_multiplier(
        self, policy_type: str, coverage_amount: int
    ) -> Decimal:
        """Exact coverage tier multiplier; unlisted amounts are neutral."""
        return self._policy_tables(policy_type).coverage.lookup(str(coverage_amount))

    @beartype
    def resolve_age_multiplier(self, policy_type: str, age: int) -> Decimal:
        """Age bracket multiplier, trying the policy's alternate bracket second."""
        labels = candidate_labels(policy_type, age, self._alternate_brackets)
        return self._policy_tables(policy_type).age.lookup_first(labels)

    @beartype
    def resolve_risk_multiplier(self, policy_type: str, risk_score: int) -> Decimal:
        """Risk score multiplier; unlisted scores are neutral."""
        return self._policy_tables(policy_type).risk.lookup(str(risk_score))

    @beartype
    def resolve_dynamic_factor(self, request: QuoteRequest, as_of: date) -> Decimal:
        """Dynamic multiplier for ``request`` priced on ``as_of``.

        Callers only invoke this when dynamic pricing is enabled in the
        snapshot; otherwise the factor is ``1.0`` by definition.
        """
        return compute_dynamic_multiplier(
            self._configuration.dynamic_pricing.factors,
            request.claims_history,
            as_of,
        )
