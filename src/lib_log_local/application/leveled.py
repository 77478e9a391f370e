"""Shared leveled-logging surface.

Purpose
-------
Give every logger in the package the same convenience methods (per-severity
emitters, predicates and level setters) on top of a handful of primitives.

Contents
--------
* :class:`LeveledMethods` – mixin expecting ``level``, ``set_level``,
  ``_emit`` and ``write`` from the concrete class.

System Role
-----------
Keeps :class:`~lib_log_local.adapters.logger.Logger` and
:class:`~lib_log_local.application.local_logger.LocalLogger` interchangeable
wherever the leveled logger port is expected.
"""

from __future__ import annotations

from typing import Any

from lib_log_local.domain.levels import Severity


class LeveledMethods:
    """Mixin deriving the full leveled API from ``_emit`` and ``level``."""

    level: Severity

    def set_level(self, value: Any) -> None:  # pragma: no cover - overridden
        raise NotImplementedError

    def _emit(self, name: str, severity: Severity, message: Any, label: str | None, attributes: dict[str, Any]) -> None:
        raise NotImplementedError  # pragma: no cover - overridden

    def write(self, message: Any) -> None:  # pragma: no cover - overridden
        raise NotImplementedError

    def debug(self, message: Any = None, /, label: str | None = None, **attributes: Any) -> None:
        self._emit("debug", Severity.DEBUG, message, label, attributes)

    def info(self, message: Any = None, /, label: str | None = None, **attributes: Any) -> None:
        self._emit("info", Severity.INFO, message, label, attributes)

    def warn(self, message: Any = None, /, label: str | None = None, **attributes: Any) -> None:
        self._emit("warn", Severity.WARN, message, label, attributes)

    def error(self, message: Any = None, /, label: str | None = None, **attributes: Any) -> None:
        self._emit("error", Severity.ERROR, message, label, attributes)

    def fatal(self, message: Any = None, /, label: str | None = None, **attributes: Any) -> None:
        self._emit("fatal", Severity.FATAL, message, label, attributes)

    def unknown(self, message: Any = None, /, label: str | None = None, **attributes: Any) -> None:
        self._emit("unknown", Severity.UNKNOWN, message, label, attributes)

    warning = warn
    critical = fatal

    def log(self, severity: Any, message: Any = None, /, label: str | None = None, **attributes: Any) -> None:
        """Alias of ``add`` matching the stdlib argument order."""

        self.add(severity, message, label=label, **attributes)

    def add(self, severity: Any, message: Any = None, /, label: str | None = None, **attributes: Any) -> None:
        resolved = Severity.coerce(severity)
        self._emit("add", resolved, message, label, attributes)

    def __lshift__(self, message: Any) -> "LeveledMethods":
        self.write(message)
        return self

    def is_enabled_for(self, severity: Any) -> bool:
        """Return ``True`` when entries at ``severity`` would be emitted."""

        return Severity.coerce(severity) >= self.level

    def is_debug(self) -> bool:
        return self.is_enabled_for(Severity.DEBUG)

    def is_info(self) -> bool:
        return self.is_enabled_for(Severity.INFO)

    def is_warn(self) -> bool:
        return self.is_enabled_for(Severity.WARN)

    def is_error(self) -> bool:
        return self.is_enabled_for(Severity.ERROR)

    def is_fatal(self) -> bool:
        return self.is_enabled_for(Severity.FATAL)

    def is_unknown(self) -> bool:
        return self.is_enabled_for(Severity.UNKNOWN)

    def set_debug(self) -> None:
        self.set_level(Severity.DEBUG)

    def set_info(self) -> None:
        self.set_level(Severity.INFO)

    def set_warn(self) -> None:
        self.set_level(Severity.WARN)

    def set_error(self) -> None:
        self.set_level(Severity.ERROR)

    def set_fatal(self) -> None:
        self.set_level(Severity.FATAL)

    def set_unknown(self) -> None:
        self.set_level(Severity.UNKNOWN)


__all__ = ["LeveledMethods"]
