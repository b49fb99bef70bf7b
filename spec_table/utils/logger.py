"""Central logging configuration for the layout engine."""
from __future__ import annotations

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "SPEC_TABLE_LOG_LEVEL"
_DEFAULT_LEVEL = logging.WARNING
_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _configured_level() -> int:
    level_name = os.environ.get(LOG_LEVEL_ENV, "").upper()
    level = logging.getLevelName(level_name) if level_name else _DEFAULT_LEVEL
    return level if isinstance(level, int) else _DEFAULT_LEVEL


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger for ``name``, applying a basic handler on first use.

    The level defaults to WARNING and can be raised through
    ``SPEC_TABLE_LOG_LEVEL``.
    """
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=_configured_level(), format=_FORMAT)
    return logger
