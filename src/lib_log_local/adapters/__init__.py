"""Outer layer: the concrete parent logger and its devices."""

from __future__ import annotations

from .capture import CaptureDevice
from .console import RichConsoleDevice
from .logger import Logger
from .stdlib import StdlibLoggingDevice

__all__ = ["CaptureDevice", "Logger", "RichConsoleDevice", "StdlibLoggingDevice"]
