"""Protocols separating the override engine from concrete loggers and sinks."""

from __future__ import annotations

from .device import DevicePort
from .leveled_logger import LeveledLoggerPort

__all__ = ["DevicePort", "LeveledLoggerPort"]
