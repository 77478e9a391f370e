"""Leveled logger port shared by parent loggers and local loggers.

Purpose
-------
Describe the capability set a parent logger must offer so a
:class:`~lib_log_local.application.local_logger.LocalLogger` can wrap it, and
which the local logger offers in turn so it can be wrapped again.

Contents
--------
* :class:`LeveledLoggerPort` – runtime-checkable protocol.

System Role
-----------
The only contract crossing the boundary between the override engine and the
logger that actually emits entries.
"""

from __future__ import annotations

from typing import Any, ContextManager, Mapping, Protocol, runtime_checkable

from lib_log_local.domain.levels import Severity


@runtime_checkable
class LeveledLoggerPort(Protocol):
    """Leveled logger with scoped level, label, and attribute primitives."""

    @property
    def level(self) -> Severity:
        """Return the severity currently in effect."""

    @property
    def label(self) -> str | None:
        """Return the label currently in effect."""

    @property
    def attributes(self) -> dict[str, Any]:
        """Return the attributes currently in effect."""

    def with_level(self, level: Any) -> ContextManager[Any]:
        """Apply ``level`` for the lifetime of the returned context manager."""

    def with_label(self, label: str | None) -> ContextManager[Any]:
        """Apply ``label`` for the lifetime of the returned context manager."""

    def tag(self, attributes: Mapping[Any, Any] | None = None, /, **kwargs: Any) -> ContextManager[Any]:
        """Add attributes for the lifetime of the returned context manager."""

    def add(self, severity: Any, message: Any = None, /, label: str | None = None, **attributes: Any) -> None:
        """Emit ``message`` at ``severity``."""

    def debug(self, message: Any = None, /, label: str | None = None, **attributes: Any) -> None: ...

    def info(self, message: Any = None, /, label: str | None = None, **attributes: Any) -> None: ...

    def warn(self, message: Any = None, /, label: str | None = None, **attributes: Any) -> None: ...

    def error(self, message: Any = None, /, label: str | None = None, **attributes: Any) -> None: ...

    def fatal(self, message: Any = None, /, label: str | None = None, **attributes: Any) -> None: ...

    def unknown(self, message: Any = None, /, label: str | None = None, **attributes: Any) -> None: ...

    def write(self, message: Any) -> None:
        """Append a raw message regardless of level."""


__all__ = ["LeveledLoggerPort"]
