# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Age bracket definitions and per-policy alternate bracket mappings."""

from collections.abc import Mapping
from types import MappingProxyType

from attrs import frozen
from beartype import beartype


@frozen
class AgeBracket:
    """Labeled, inclusive age range. ``max_age`` of None means open-ended."""

    label: str
    min_age: int
    max_age: int | None = None

    @beartype
    def contains(self, age: int) -> bool:
        """Check whether ``age`` falls inside this bracket."""
        if age < self.min_age:
            return False
        return self.max_age is None or age <= self.max_age


AGE_BRACKETS: tuple[AgeBracket, ...] = (
    AgeBracket("18-24", 18, 24),
    AgeBracket("25-34", 25, 34),
    AgeBracket("35-49", 35, 49),
    AgeBracket("50-64", 50, 64),
    AgeBracket("65+", 65),
)

# Rate files for some policy types price several brackets together. When the
# exact bracket is not configured, the aggregated label is tried instead.
ALTERNATE_BRACKETS: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "home": MappingProxyType({"18-24": "18-34", "25-34": "18-34"}),
    }
)


@beartype
def bracket_for_age(age: int) -> AgeBracket | None:
    """Return the bracket containing ``age``, or None below the youngest."""
    for bracket in AGE_BRACKETS:
        if bracket.contains(age):
            return bracket
    return None


@beartype
def candidate_labels(
    policy_type: str,
    age: int,
    alternates: Mapping[str, Mapping[str, str]] = ALTERNATE_BRACKETS,
) -> tuple[str, ...]:
    """Bracket labels to try for ``age``, most specific first."""
    bracket = bracket_for_age(age)
    if bracket is None:
        return ()

    labels = [bracket.label]
    alternate = alternates.get(policy_type, {}).get(bracket.label)
    if alternate is not None:
        labels.append(alternate)
    return tuple(labels)
