"""Local loggers with scoped level, label, and attribute overrides.

A :class:`LocalLogger` wraps an existing parent logger and lets a component
override severity, label, and structured attributes without touching the
parent's configuration. Classes opt into a shared, inherited local logger via
:class:`LocalLoggerMixin`.
"""

from __future__ import annotations

from .adapters import CaptureDevice, Logger, RichConsoleDevice, StdlibLoggingDevice
from .application.decorators import log_attributes
from .application.local_logger import LocalLogger
from .application.registry import REGISTRY, ClassLoggerConfig, LocalLoggerMixin, LoggerRegistry
from .domain import InvalidSeverity, LogEntry, ScopedContext, Severity, coerce_severity
from .lib_log_local import hello_world, i_should_fail, local_logger, logdemo, summary_info
from .runtime import clear_default_logger, default_logger, init_from_env, set_default_logger

__all__ = [
    "CaptureDevice",
    "ClassLoggerConfig",
    "InvalidSeverity",
    "LocalLogger",
    "LocalLoggerMixin",
    "LogEntry",
    "Logger",
    "LoggerRegistry",
    "REGISTRY",
    "RichConsoleDevice",
    "ScopedContext",
    "Severity",
    "StdlibLoggingDevice",
    "clear_default_logger",
    "coerce_severity",
    "default_logger",
    "hello_world",
    "i_should_fail",
    "init_from_env",
    "local_logger",
    "log_attributes",
    "logdemo",
    "set_default_logger",
    "summary_info",
]
