# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Exact-match multiplier lookup tables.

Rate files configure multipliers only for discrete keys (coverage tiers,
age brackets, risk scores). A key that is not configured is not an error:
the table answers with its default, the neutral multiplier ``1.0``. Values
are never interpolated between neighbouring keys.
"""

from collections.abc import Mapping
from decimal import Decimal
from types import MappingProxyType

from attrs import field, frozen
from beartype import beartype

NEUTRAL_MULTIPLIER = Decimal("1.0")


def _freeze(entries: Mapping[str, Decimal]) -> Mapping[str, Decimal]:
    return MappingProxyType(dict(entries))


@frozen
class MultiplierTable:
    """Read-only key to multiplier mapping with an explicit miss value."""

    entries: Mapping[str, Decimal] = field(converter=_freeze)
    default: Decimal = field(default=NEUTRAL_MULTIPLIER)

    @beartype
    def contains(self, key: str) -> bool:
        """Check whether ``key`` has a configured multiplier."""
        return key in self.entries

    @beartype
    def find(self, key: str) -> Decimal | None:
        """Return the configured multiplier or None on a miss."""
        return self.entries.get(key)

    @beartype
    def lookup(self, key: str) -> Decimal:
        """Return the configured multiplier, or the default on a miss."""
        return self.entries.get(key, self.default)

    @beartype
    def lookup_first(self, keys: tuple[str, ...]) -> Decimal:
        """Return the multiplier of the first configured key in ``keys``."""
        for key in keys:
            value = self.entries.get(key)
            if value is not None:
                return value
        return self.default

    def __len__(self) -> int:
        return len(self.entries)


EMPTY_TABLE = MultiplierTable({})
