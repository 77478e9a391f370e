"""Domain record describing one emitted log line.

Purpose
-------
Provide an immutable, serialisable representation of what a parent logger
hands to its devices.

Contents
--------
* :class:`LogEntry` dataclass with serialisation helpers.

System Role
-----------
Devices only ever see :class:`LogEntry` objects, which keeps them independent
from the logger classes composing level, label and attributes.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

from .levels import Severity


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


@dataclass(slots=True, frozen=True)
class LogEntry:
    """Immutable log entry produced by :class:`~lib_log_local.adapters.logger.Logger`.

    Attributes
    ----------
    timestamp:
        Time of the entry in timezone-aware UTC.
    severity:
        :class:`Severity` of the entry.
    message:
        Rendered message; may be empty for attribute-only entries.
    label:
        Source label (program name) in effect when the entry was created.
    attributes:
        Flat, resolved attribute map.
    """

    timestamp: datetime
    severity: Severity
    message: str
    label: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        object.__setattr__(self, "attributes", dict(self.attributes))

    def to_dict(self) -> dict[str, Any]:
        """Serialize the entry to a dictionary with ISO8601 timestamps."""

        return {
            "timestamp": self.timestamp.isoformat(),
            "severity": self.severity.severity,
            "message": self.message,
            "label": self.label,
            "attributes": dict(self.attributes),
        }

    def to_json(self) -> str:
        """Serialize the entry to JSON with sorted keys for deterministic output."""

        return json.dumps(self.to_dict(), sort_keys=True, default=str)

    def replace(self, **changes: Any) -> "LogEntry":
        """Return a copied entry with ``changes`` applied."""

        return replace(self, **changes)


__all__ = ["LogEntry"]
