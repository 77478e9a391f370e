"""Domain values and scoped state used by the local logger."""

from __future__ import annotations

from .attributes import AttributeMap, delete, flatten, merge, resolve
from .context import ScopedContext
from .events import LogEntry
from .levels import InvalidSeverity, Severity, coerce_severity

__all__ = [
    "AttributeMap",
    "InvalidSeverity",
    "LogEntry",
    "ScopedContext",
    "Severity",
    "coerce_severity",
    "delete",
    "flatten",
    "merge",
    "resolve",
]
