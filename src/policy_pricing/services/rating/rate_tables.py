# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Rate table loading and snapshot management.

This module reads the pricing rules document into an immutable
``RateConfiguration`` and holds the active snapshot. Readers take the
current reference without locking; a reload parses a complete new snapshot
first and only then swaps the reference, so no reader ever observes a
partially loaded configuration.
"""

import json
import threading
from decimal import Decimal
from pathlib import Path

from beartype import beartype
from pydantic import ValidationError as SchemaValidationError

from ...core.config import Settings, get_settings
from ...core.logging_utils import get_logger
from ...core.result_types import Err, Ok, Result
from ...models.errors import ConfigurationError, ErrorKind, RateConfigurationLoadError
from ...models.rate_configuration import RateConfiguration

logger = get_logger(__name__)


@beartype
class RateTableService:
    """Owner of the active rate configuration snapshot."""

    def __init__(
        self,
        configuration: RateConfiguration,
        *,
        source: Path | None = None,
        dynamic_rates_override: bool | None = None,
    ) -> None:
        """Initialize rate table service.

        Args:
            configuration: Initial snapshot
            source: File the snapshot was read from, reused by ``reload``
            dynamic_rates_override: Forces ``dynamicPricing.enabled`` on every
                snapshot this service loads; None keeps the file value
        """
        self._source = source
        self._dynamic_rates_override = dynamic_rates_override
        self._write_lock = threading.Lock()
        self._active = self._apply_override(configuration)

    @classmethod
    def from_file(
        cls, path: Path, *, dynamic_rates_override: bool | None = None
    ) -> "RateTableService":
        """Load the initial snapshot from ``path`` or raise."""
        result = cls.load_configuration(path)
        if isinstance(result, Err):
            logger.error("Failed to load rate configuration: %s", result.error.message)
            raise RateConfigurationLoadError(result.error)

        service = cls(
            result.value,
            source=path,
            dynamic_rates_override=dynamic_rates_override,
        )
        logger.info(
            "Loaded pricing rules from %s (version: %s, dynamic pricing: %s)",
            path,
            service.active.version,
            service.active.dynamic_pricing.enabled,
        )
        return service

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "RateTableService":
        """Load the snapshot named by application settings."""
        settings = settings or get_settings()
        return cls.from_file(
            settings.rates_path,
            dynamic_rates_override=settings.feature_dynamic_rates,
        )

    @staticmethod
    def parse_configuration(
        document: str | bytes,
    ) -> Result[RateConfiguration, ConfigurationError]:
        """Parse a pricing rules JSON document.

        Numbers are read as ``Decimal`` so that configured rates keep their
        exact textual value.
        """
        try:
            raw = json.loads(document, parse_float=Decimal)
        except json.JSONDecodeError as e:
            return Err(
                ConfigurationError(
                    kind=ErrorKind.RATE_FILE_INVALID,
                    message=f"Pricing rules are not valid JSON: {e}",
                )
            )

        if not isinstance(raw, dict):
            return Err(
                ConfigurationError(
                    kind=ErrorKind.RATE_FILE_INVALID,
                    message="Pricing rules document must be a JSON object",
                )
            )

        try:
            return Ok(RateConfiguration.model_validate(raw))
        except SchemaValidationError as e:
            return Err(
                ConfigurationError(
                    kind=ErrorKind.RATE_FILE_INVALID,
                    message=(
                        f"Pricing rules failed validation with "
                        f"{e.error_count()} error(s): {e}"
                    ),
                )
            )

    @staticmethod
    def load_configuration(path: Path) -> Result[RateConfiguration, ConfigurationError]:
        """Read and parse the pricing rules file at ``path``."""
        try:
            document = path.read_text(encoding="utf-8")
        except OSError as e:
            return Err(
                ConfigurationError(
                    kind=ErrorKind.RATE_FILE_UNREADABLE,
                    message=f"Cannot read pricing rules from {path}: {e}",
                )
            )
        return RateTableService.parse_configuration(document)

    @property
    def active(self) -> RateConfiguration:
        """Currently active snapshot."""
        return self._active

    @property
    def source(self) -> Path | None:
        """File the active snapshot was loaded from, if any."""
        return self._source

    def replace(self, configuration: RateConfiguration) -> RateConfiguration:
        """Swap in a new snapshot and return the previous one."""
        configuration = self._apply_override(configuration)
        with self._write_lock:
            previous = self._active
            self._active = configuration

        logger.info(
            "Rate configuration swapped: %s -> %s",
            previous.version,
            configuration.version,
        )
        return previous

    def reload(
        self, path: Path | None = None
    ) -> Result[RateConfiguration, ConfigurationError]:
        """Load a new snapshot and make it active.

        On failure the current snapshot stays active and the error is
        returned.
        """
        path = path or self._source
        if path is None:
            return Err(
                ConfigurationError(
                    kind=ErrorKind.RATE_FILE_UNREADABLE,
                    message="No pricing rules file configured for reload",
                )
            )

        result = self.load_configuration(path)
        if isinstance(result, Err):
            logger.error(
                "Rate configuration reload failed, keeping version %s: %s",
                self._active.version,
                result.error.message,
            )
            return result

        self.replace(result.value)
        self._source = path
        return Ok(self._active)

    def _apply_override(self, configuration: RateConfiguration) -> RateConfiguration:
        if self._dynamic_rates_override is None:
            return configuration
        return configuration.with_dynamic_pricing(self._dynamic_rates_override)
