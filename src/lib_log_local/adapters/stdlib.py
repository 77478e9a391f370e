"""Device forwarding entries to the stdlib :mod:`logging` module.

Purpose
-------
Let hosts that already configured stdlib handlers keep them as the actual
sink while using local loggers for level, label, and attribute composition.

Contents
--------
* :class:`StdlibLoggingDevice` – bridge from :class:`LogEntry` to
  :meth:`logging.Logger.log`.
"""

from __future__ import annotations

import logging

from lib_log_local.application.ports.device import DevicePort
from lib_log_local.domain.events import LogEntry


class StdlibLoggingDevice(DevicePort):
    """Forward entries to a :class:`logging.Logger`.

    The label and attributes travel in ``extra`` as ``label`` and
    ``attributes`` so formatters and filters can pick them up.
    """

    def __init__(self, logger: logging.Logger | str | None = None) -> None:
        if logger is None or isinstance(logger, str):
            logger = logging.getLogger(logger or "lib_log_local")
        self._logger = logger

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def write(self, entry: LogEntry) -> None:
        self._logger.log(
            entry.severity.to_python_level(),
            entry.message,
            extra={"label": entry.label, "attributes": dict(entry.attributes)},
        )


__all__ = ["StdlibLoggingDevice"]
