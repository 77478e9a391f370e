"""Concrete parent logger writing :class:`LogEntry` objects to devices.

Purpose
-------
Provide a leveled logger that satisfies
:class:`~lib_log_local.application.ports.leveled_logger.LeveledLoggerPort`, so
local loggers have something real to wrap.

Contents
--------
* :class:`Logger` – base level/label/global attributes plus scoped overrides
  held in a :class:`~lib_log_local.domain.context.ScopedContext`.

System Role
-----------
Outer layer: applies the severity filter, materialises attributes, and fans
entries out to the configured devices.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, ContextManager, Iterable, Iterator, Mapping

from lib_log_local.application.leveled import LeveledMethods
from lib_log_local.application.ports.device import DevicePort
from lib_log_local.domain.attributes import AttributeMap, delete, flatten, merge, resolve
from lib_log_local.domain.context import ScopedContext
from lib_log_local.domain.events import LogEntry
from lib_log_local.domain.levels import Severity

LOGGER = logging.getLogger(__name__)


def render_message(message: Any) -> str:
    """Turn a message argument into text.

    Zero-argument callables are evaluated here, which only happens once the
    severity filter has passed.

    Examples
    --------
    >>> render_message(lambda: "lazy")
    'lazy'
    >>> render_message(ValueError("boom"))
    'ValueError: boom'
    >>> render_message(None)
    ''
    """

    if callable(message) and not isinstance(message, BaseException):
        message = message()
    if message is None:
        return ""
    if isinstance(message, BaseException):
        return f"{type(message).__name__}: {message}"
    return str(message)


class Logger(LeveledMethods):
    """Leveled logger with global attributes and per-context overrides.

    Examples
    --------
    >>> from lib_log_local.adapters.capture import CaptureDevice
    >>> device = CaptureDevice()
    >>> logger = Logger(device, level="warn", label="app")
    >>> logger.info("hidden")
    >>> with logger.tag(request="r-1"):
    ...     logger.error("visible")
    >>> [(e.message, e.label, e.attributes) for e in device.entries]
    [('visible', 'app', {'request': 'r-1'})]
    """

    def __init__(
        self,
        device: DevicePort | None = None,
        *,
        level: Any = Severity.INFO,
        label: str | None = None,
        attributes: Mapping[Any, Any] | None = None,
        devices: Iterable[DevicePort] = (),
    ) -> None:
        self._devices: list[DevicePort] = [] if device is None else [device]
        self._devices.extend(devices)
        self._level = Severity.coerce(level)
        self._label = label
        self._global_attributes: AttributeMap = flatten(attributes)
        self._context = ScopedContext("lib_log_local_logger")

    @property
    def devices(self) -> tuple[DevicePort, ...]:
        """Return the devices entries are written to."""

        return tuple(self._devices)

    def add_device(self, device: DevicePort) -> None:
        """Attach another device."""

        self._devices.append(device)

    @property
    def level(self) -> Severity:
        """Return the scoped level override or, without one, the base level."""

        return self._context.current_severity() or self._level

    @level.setter
    def level(self, value: Any) -> None:
        self.set_level(value)

    def set_level(self, value: Any) -> None:
        """Change the base level; raises :class:`InvalidSeverity` on bad input."""

        self._level = Severity.coerce(value)

    def with_level(self, level: Any) -> ContextManager[Severity]:
        """Return a context manager applying ``level`` to the current execution unit only."""

        return self._context.severity(level)

    def silence(self, level: Any = Severity.ERROR) -> ContextManager[Severity]:
        """Raise the level to ``level`` (``ERROR`` by default) inside the block."""

        return self.with_level(level)

    log_at = with_level

    @property
    def label(self) -> str | None:
        """Return the scoped label override or the base label."""

        scoped = self._context.current_label()
        return scoped if scoped is not None else self._label

    @label.setter
    def label(self, value: str | None) -> None:
        self._label = value

    def set_label(self, value: str | None) -> None:
        self._label = value

    def with_label(self, label: str | None) -> ContextManager[str | None]:
        """Return a context manager applying ``label``; ``None`` changes nothing."""

        return self._context.label(label)

    @property
    def attributes(self) -> AttributeMap:
        """Return global attributes merged with the active scoped ones."""

        return merge(self._global_attributes, self._context.current_attributes())

    @property
    def global_attributes(self) -> AttributeMap:
        return dict(self._global_attributes)

    @contextmanager
    def tag(self, attributes: Mapping[Any, Any] | None = None, /, **kwargs: Any) -> Iterator[AttributeMap]:
        """Add attributes to every entry emitted inside the block by this execution unit."""

        with self._context.attributes(merge(flatten(attributes), flatten(kwargs))):
            yield self.attributes

    def tag_current(self, attributes: Mapping[Any, Any] | None = None, /, **kwargs: Any) -> bool:
        """Merge attributes into the innermost active :meth:`tag` block.

        Returns ``False`` when no block is active; the attributes are dropped.
        """

        return self._context.merge_into_current(merge(flatten(attributes), flatten(kwargs)))

    def tag_globally(self, attributes: Mapping[Any, Any] | None = None, /, **kwargs: Any) -> None:
        """Add attributes to every entry from every execution unit."""

        self._global_attributes = merge(self._global_attributes, merge(flatten(attributes), flatten(kwargs)))

    def untag_globally(self, *names: str) -> None:
        self._global_attributes = delete(self._global_attributes, *names)

    def write(self, message: Any) -> None:
        """Append ``message`` at ``UNKNOWN`` severity, which passes every level."""

        self.add(Severity.UNKNOWN, message)

    def _emit(self, name: str, severity: Severity, message: Any, label: str | None, attributes: dict[str, Any]) -> None:
        if severity < self.level:
            return
        entry = LogEntry(
            timestamp=datetime.now(timezone.utc),
            severity=severity,
            message=render_message(message),
            label=label if label is not None else self.label,
            attributes=resolve(merge(self.attributes, flatten(attributes))),
        )
        for device in self._devices:
            try:
                device.write(entry)
            except Exception as exc:  # noqa: BLE001
                LOGGER.error("Device %r raised an exception; continuing", device, exc_info=exc)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(level={self._level.name}, label={self._label!r}, devices={len(self._devices)})"


__all__ = ["Logger", "render_message"]
