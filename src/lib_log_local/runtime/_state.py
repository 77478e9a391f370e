"""Process-wide default parent logger and access helpers."""

from __future__ import annotations

from threading import RLock
from typing import Any

_DEFAULT_LOGGER: Any = None
_STATE_LOCK = RLock()


def set_default_logger(logger: Any) -> None:
    """Install ``logger`` as the fallback parent for classes without one."""

    with _STATE_LOCK:
        global _DEFAULT_LOGGER
        _DEFAULT_LOGGER = logger


def clear_default_logger() -> None:
    """Remove the default logger if present."""

    with _STATE_LOCK:
        global _DEFAULT_LOGGER
        _DEFAULT_LOGGER = None


def default_logger() -> Any:
    """Return the default logger or ``None`` when none was installed."""

    with _STATE_LOCK:
        return _DEFAULT_LOGGER


def is_configured() -> bool:
    """Return ``True`` when a default logger has been installed."""

    with _STATE_LOCK:
        return _DEFAULT_LOGGER is not None


__all__ = [
    "clear_default_logger",
    "default_logger",
    "is_configured",
    "set_default_logger",
]
