"""Process-wide default parent logger.

Purpose
-------
Hold the logger that classes fall back to when neither they nor any ancestor
configured a parent logger.

Contents
--------
* ``set_default_logger`` / ``default_logger`` / ``clear_default_logger`` /
  ``is_configured`` – state accessors.
* ``init_from_env`` – install a Rich console logger built from environment
  settings.

System Role
-----------
Host applications call one of the setters once during startup; the class
registry consults :func:`default_logger` lazily on each logger resolution.
"""

from __future__ import annotations

from typing import Any, Mapping

from ._state import clear_default_logger, default_logger, is_configured, set_default_logger


def init_from_env(environ: Mapping[str, str] | None = None, **kwargs: Any) -> Any:
    """Build a logger via :func:`lib_log_local.config.build_logger_from_env` and install it.

    Returns the installed logger.
    """

    from lib_log_local.config import build_logger_from_env

    logger = build_logger_from_env(environ, **kwargs)
    set_default_logger(logger)
    return logger


__all__ = [
    "clear_default_logger",
    "default_logger",
    "init_from_env",
    "is_configured",
    "set_default_logger",
]
