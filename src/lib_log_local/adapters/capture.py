"""In-memory device retaining the most recent log entries.

Purpose
-------
Give tests and diagnostics a device whose output can be inspected without
parsing rendered text.

Contents
--------
* :class:`CaptureDevice` – bounded buffer with matching helpers.

System Role
-----------
Implements :class:`~lib_log_local.application.ports.device.DevicePort`; the
default device for examples and the test-suite.
"""

from __future__ import annotations

from collections import deque
from threading import Lock
from typing import Any, Deque, Iterator, Mapping

from lib_log_local.application.ports.device import DevicePort
from lib_log_local.domain.attributes import flatten
from lib_log_local.domain.events import LogEntry
from lib_log_local.domain.levels import Severity


class CaptureDevice(DevicePort):
    """Fixed-size buffer retaining the most recent :class:`LogEntry` objects."""

    def __init__(self, *, max_entries: int = 10_000) -> None:
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self._max_entries = max_entries
        self._buffer: Deque[LogEntry] = deque(maxlen=max_entries)
        self._lock = Lock()

    @property
    def max_entries(self) -> int:
        """Return the configured buffer size."""

        return self._max_entries

    def write(self, entry: LogEntry) -> None:
        """Append an entry, evicting the oldest one when full."""

        with self._lock:
            self._buffer.append(entry)

    @property
    def entries(self) -> list[LogEntry]:
        """Return a copy of the buffered entries, oldest first."""

        with self._lock:
            return list(self._buffer)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self._buffer)

    def clear(self) -> None:
        """Remove all buffered entries."""

        with self._lock:
            self._buffer.clear()

    def match(
        self,
        *,
        message: str | None = None,
        severity: Any = None,
        label: str | None = None,
        attributes: Mapping[Any, Any] | None = None,
    ) -> list[LogEntry]:
        """Return entries matching every given criterion.

        ``attributes`` matches when each given key is present with an equal
        value; other keys on the entry are ignored.
        """

        wanted_severity = None if severity is None else Severity.coerce(severity)
        wanted_attributes = flatten(attributes)
        found = []
        for entry in self.entries:
            if message is not None and entry.message != message:
                continue
            if wanted_severity is not None and entry.severity is not wanted_severity:
                continue
            if label is not None and entry.label != label:
                continue
            if any(entry.attributes.get(key, _MISSING) != value for key, value in wanted_attributes.items()):
                continue
            found.append(entry)
        return found

    def includes(self, **criteria: Any) -> bool:
        """Return ``True`` when :meth:`match` finds at least one entry."""

        return bool(self.match(**criteria))


_MISSING = object()


__all__ = ["CaptureDevice"]
