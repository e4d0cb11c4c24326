# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Central logging utilities for the pricing engine.

This module enforces a consistent logging configuration across the
code-base and provides a helper for retrieving module-scoped loggers.

Key Features
------------
1. configure_logging(): idempotent initialization of the root logger; an
   explicit level on a later call still updates the root level.
2. get_logger(name): typed helper that always returns a configured logger.
3. level_from_name(name): maps a settings value such as ``"debug"`` onto the
   numeric logging level.
"""

from __future__ import annotations

import logging
from typing import Final

from beartype import beartype

__all__: Final = [
    "configure_logging",
    "get_logger",
    "level_from_name",
]

_DEFAULT_LOG_FORMAT: Final = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_ROOT_LOGGER_NAME: Final = "policy_pricing"
_is_configured: bool = False


@beartype
def level_from_name(name: str) -> int:
    """Translate a level name into a ``logging`` level, defaulting to INFO."""
    level = logging.getLevelName(name.strip().upper())
    if isinstance(level, int):
        return level
    return logging.INFO


@beartype
def configure_logging(
    *, level: int | None = None, fmt: str = _DEFAULT_LOG_FORMAT
) -> None:
    """Configure the root logger.

    Handlers and format are installed only on the first invocation, with
    INFO as the default level. Module loggers trigger that first call on
    import, so a later call with an explicit ``level`` (typically from the
    ``LOG_LEVEL`` setting) re-applies the level to the root logger.
    """
    global _is_configured
    if _is_configured:
        if level is not None:
            logging.getLogger().setLevel(level)
        return

    logging.basicConfig(level=logging.INFO if level is None else level, format=fmt)
    _is_configured = True


@beartype
def get_logger(name: str | None = None, *, level: int | None = None) -> logging.Logger:
    """Return a module-scoped logger that is guaranteed to be configured."""
    configure_logging()
    logger = logging.getLogger(name or _ROOT_LOGGER_NAME)
    if level is not None:
        logger.setLevel(level)
    return logger
