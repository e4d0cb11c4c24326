# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Rating error payloads.

Two families exist. ``ValidationError`` is client-caused (a request field is
malformed or out of range) and is returned verbatim to the caller.
``ConfigurationError`` is operator-caused (the rate tables are missing or
broken) and maps to a server-side failure.
"""

from enum import Enum

from beartype import beartype
from pydantic import Field

from .base import BaseModelConfig


class ErrorKind(str, Enum):
    """Machine-readable error classification."""

    VALIDATION = "validation"
    RATE_TABLE_MISSING = "rate_table_missing"
    RATE_FILE_UNREADABLE = "rate_file_unreadable"
    RATE_FILE_INVALID = "rate_file_invalid"


@beartype
class ValidationError(BaseModelConfig):
    """A single violated request rule."""

    kind: ErrorKind = Field(default=ErrorKind.VALIDATION, frozen=True)
    field: str = Field(..., min_length=1, description="Offending request field")
    message: str = Field(..., min_length=1)
    value: str | int | None = Field(default=None, description="Rejected value")

    @property
    @beartype
    def is_client_error(self) -> bool:
        """Validation failures are always the caller's to fix."""
        return True

    def __str__(self) -> str:
        return self.message


@beartype
class ConfigurationError(BaseModelConfig):
    """Broken or incomplete rate configuration."""

    kind: ErrorKind = Field(...)
    message: str = Field(..., min_length=1)
    policy_type: str | None = Field(default=None)

    @property
    @beartype
    def is_client_error(self) -> bool:
        """Configuration failures are never the caller's fault."""
        return False

    def __str__(self) -> str:
        return self.message


class RateConfigurationLoadError(Exception):
    """Raised when no usable rate configuration can be produced at startup."""

    def __init__(self, error: ConfigurationError) -> None:
        super().__init__(error.message)
        self.error = error
