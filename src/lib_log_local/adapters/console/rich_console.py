"""Rich-powered console device implementing :class:`DevicePort`.

Purpose
-------
Render log entries as single console lines with per-severity styles.

Contents
--------
* :data:`_STYLE_MAP` - default severity-to-style mapping.
* :class:`RichConsoleDevice` - device built by :func:`lib_log_local.config.build_logger_from_env`.

System Role
-----------
Primary human-facing sink; honours colour overrides from the environment.
"""

from __future__ import annotations

from typing import Mapping

from rich.console import Console

from lib_log_local.application.ports.device import DevicePort
from lib_log_local.domain.events import LogEntry
from lib_log_local.domain.levels import Severity


_STYLE_MAP: Mapping[Severity, str] = {
    Severity.DEBUG: "dim",
    Severity.INFO: "cyan",
    Severity.WARN: "yellow",
    Severity.ERROR: "red",
    Severity.FATAL: "bold red",
    Severity.UNKNOWN: "magenta",
}

#: Default Rich styles keyed by :class:`Severity`.


class RichConsoleDevice(DevicePort):
    """Render log entries using Rich formatting with style overrides."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        styles: Mapping[Severity | str, str] | None = None,
    ) -> None:
        if console is not None:
            self._console = console
        else:
            self._console = Console(force_terminal=force_color or None, no_color=no_color, stderr=True)
        self._no_color = no_color
        merged = dict(_STYLE_MAP)
        for key, value in (styles or {}).items():
            merged[Severity.coerce(key)] = value
        self._style_map = merged

    @property
    def console(self) -> Console:
        return self._console

    def write(self, entry: LogEntry) -> None:
        """Print ``entry`` on the console.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> from io import StringIO
        >>> entry = LogEntry(datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), Severity.INFO, 'msg', 'app')
        >>> console = Console(file=StringIO(), record=True)
        >>> RichConsoleDevice(console=console).write(entry)
        >>> 'msg' in console.export_text()
        True
        """
        style = "" if self._no_color else self._style_map.get(entry.severity, "")
        self._console.print(self.format_line(entry), style=style, highlight=False, markup=False)

    @staticmethod
    def format_line(entry: LogEntry) -> str:
        """Return a human-friendly console line for ``entry``.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> entry = LogEntry(datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), Severity.WARN, 'msg', 'app', {'user.id': 7})
        >>> RichConsoleDevice.format_line(entry)
        '2025-09-30T12:00:00+00:00 ⚠     WARN app — msg user.id=7'
        """
        label = f" {entry.label}" if entry.label else ""
        attrs = "" if not entry.attributes else " " + " ".join(f"{key}={value}" for key, value in sorted(entry.attributes.items()))
        return f"{entry.timestamp.isoformat()} {entry.severity.icon} {entry.severity.label:>8}{label} — {entry.message}{attrs}"


__all__ = ["RichConsoleDevice"]
