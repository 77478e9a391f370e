"""Device port describing where finished log entries go.

Purpose
-------
Define the abstraction for sinks that persist or display :class:`LogEntry`
objects, letting the parent logger depend on a narrow protocol.

Contents
--------
* :class:`DevicePort` – runtime-checkable protocol with a single ``write``
  method.

System Role
-----------
Serialisation, transport, and persistence stay behind this boundary; the
logging core never inspects what a device does with an entry.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_local.domain.events import LogEntry


@runtime_checkable
class DevicePort(Protocol):
    """Accept a finished log entry."""

    def write(self, entry: LogEntry) -> None:
        """Persist or display ``entry``."""


__all__ = ["DevicePort"]
