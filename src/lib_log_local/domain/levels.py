"""Severity ranks used by every logger in the package.

Purpose
-------
Offer a totally ordered severity enumeration (DEBUG < INFO < WARN < ERROR <
FATAL < UNKNOWN) together with a single coercion entry point that turns names,
strings, and integers into :class:`Severity` members.

Contents
--------
* :class:`Severity` enum with conversion helpers and presentation metadata.
* :class:`InvalidSeverity` raised for unrecognised input.
* :func:`coerce_severity` functional alias for :meth:`Severity.coerce`.

System Role
-----------
Level overrides are validated here at assignment time so configuration errors
surface immediately instead of on the first log call.
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import total_ordering
from typing import Any


class InvalidSeverity(ValueError):
    """Raised when a value cannot be coerced into a :class:`Severity`."""

    def __init__(self, value: Any) -> None:
        super().__init__(f"Unknown log level: {value!r}")
        self.value = value


@total_ordering
class Severity(Enum):
    """Enumerated severities ordered by rank.

    The numeric values line up with the stdlib :mod:`logging` constants so
    entries can be forwarded to stdlib handlers without translation tables.
    """

    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    FATAL = 50
    UNKNOWN = 60

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Severity):
            return self.value < other.value
        return NotImplemented

    @property
    def label(self) -> str:
        """Return the upper-case name written into log lines."""

        return self.name

    @property
    def severity(self) -> str:
        """Return the lowercase severity name for structured payloads."""

        return self.name.lower()

    @property
    def icon(self) -> str:
        """Return the unicode icon visualizing the level on colored consoles."""

        return _ICON_TABLE[self]

    def to_python_level(self) -> int:
        """Return the :mod:`logging` constant matching this severity."""

        return _PYTHON_LEVELS[self]

    @classmethod
    def from_python_level(cls, level: int) -> "Severity":
        """Translate a stdlib logging level into the nearest lower severity.

        Examples
        --------
        >>> Severity.from_python_level(logging.WARNING)
        <Severity.WARN: 30>
        >>> Severity.from_python_level(25)
        <Severity.INFO: 20>
        """

        found = cls.DEBUG
        for member in cls:
            if member.value <= level:
                found = member
        return found

    @classmethod
    def coerce(cls, value: Any) -> "Severity":
        """Return the :class:`Severity` described by ``value``.

        ``value`` may be a member, a case-insensitive name (``"warn"``,
        ``"Warning"``), a string holding digits, or an integer rank. ``None``
        is rejected; callers that support "no override" must check for it
        before coercing.

        Examples
        --------
        >>> Severity.coerce("debug")
        <Severity.DEBUG: 10>
        >>> Severity.coerce(40)
        <Severity.ERROR: 40>
        >>> Severity.coerce(Severity.coerce("critical"))
        <Severity.FATAL: 50>
        """

        if isinstance(value, Severity):
            return value
        if isinstance(value, bool):
            raise InvalidSeverity(value)
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError as exc:
                raise InvalidSeverity(value) from exc
        if isinstance(value, str):
            normalized = value.strip().upper()
            if normalized.isdigit():
                return cls.coerce(int(normalized))
            normalized = _ALIASES.get(normalized, normalized)
            try:
                return cls[normalized]
            except KeyError as exc:
                raise InvalidSeverity(value) from exc
        raise InvalidSeverity(value)


def coerce_severity(value: Any) -> Severity:
    """Functional alias of :meth:`Severity.coerce`."""

    return Severity.coerce(value)


_ALIASES = {
    "WARNING": "WARN",
    "CRITICAL": "FATAL",
    "ANY": "UNKNOWN",
}

_PYTHON_LEVELS = {
    Severity.DEBUG: logging.DEBUG,
    Severity.INFO: logging.INFO,
    Severity.WARN: logging.WARNING,
    Severity.ERROR: logging.ERROR,
    Severity.FATAL: logging.CRITICAL,
    Severity.UNKNOWN: logging.CRITICAL,
}

_ICON_TABLE = {
    Severity.DEBUG: "🐞",
    Severity.INFO: "ℹ",
    Severity.WARN: "⚠",
    Severity.ERROR: "✖",
    Severity.FATAL: "☠",
    Severity.UNKNOWN: "?",
}
# Console glyphs displayed by the Rich device per severity.


__all__ = ["InvalidSeverity", "Severity", "coerce_severity"]
