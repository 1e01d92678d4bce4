"""Centralized logging setup and structured debug helpers."""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Dict, Optional

try:
    from constants import Constants
except ImportError:
    from src.constants import Constants

ENV_LOG_LEVEL = "MODVER_LOG_LEVEL"


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.environ.get(ENV_LOG_LEVEL) or "INFO").strip().upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Configure the root logger.

    The level comes from ``level``, then the MODVER_LOG_LEVEL environment
    variable, then INFO. Console output goes to stderr with
    ``Constants.LOG_FORMAT``; ``log_file`` adds a timestamped file handler.
    Calling this again replaces the handlers installed by a previous call.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_modver_handler", False):
            root.removeHandler(handler)
            handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
    console._modver_handler = True  # type: ignore[attr-defined]
    root.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        file_handler._modver_handler = True  # type: ignore[attr-defined]
        root.addHandler(file_handler)

    root.setLevel(_resolve_level(level))


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True if ``logger`` would emit DEBUG records."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured log records.

    None values are dropped so records only carry what was known.
    """
    return {key: value for key, value in fields.items() if value is not None}
