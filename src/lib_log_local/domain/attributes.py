"""Attribute map helpers shared by loggers and scopes.

Purpose
-------
Normalise caller-supplied log attributes into flat, string-keyed dictionaries
and combine them without mutating stored templates.

Contents
--------
* :func:`flatten` – turn nested mappings into dotted keys.
* :func:`merge` – right-biased merge returning a new dictionary.
* :func:`delete` – drop top-level (already flattened) keys.
* :func:`resolve` – evaluate zero-argument callables at emission time.

System Role
-----------
Every attribute template, scope overlay, and emitted entry passes through these
functions, so they never mutate their arguments.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

AttributeMap = dict[str, Any]

SEPARATOR = "."


def flatten(raw: Mapping[Any, Any] | None) -> AttributeMap:
    """Return ``raw`` with nested mappings collapsed into dotted keys.

    Keys are converted to strings. Non-mapping values, callables included, are
    kept as leaves and left unevaluated.

    Examples
    --------
    >>> flatten({"user": {"id": 1, "name": "ann"}, "ok": True})
    {'user.id': 1, 'user.name': 'ann', 'ok': True}
    >>> flatten(flatten({"a": {"b": 2}}))
    {'a.b': 2}
    """

    flat: AttributeMap = {}
    if not raw:
        return flat
    _flatten_into(flat, "", raw)
    return flat


def _flatten_into(target: AttributeMap, prefix: str, raw: Mapping[Any, Any]) -> None:
    for key, value in raw.items():
        name = f"{prefix}{key}"
        if isinstance(value, Mapping):
            _flatten_into(target, f"{name}{SEPARATOR}", value)
        else:
            target[name] = value


def merge(base: Mapping[str, Any] | None, overlay: Mapping[str, Any] | None) -> AttributeMap:
    """Return a new map holding ``base`` updated with ``overlay``.

    Examples
    --------
    >>> base = {"a": 1, "b": 2}
    >>> merge(base, {"b": 3})
    {'a': 1, 'b': 3}
    >>> base
    {'a': 1, 'b': 2}
    """

    merged: AttributeMap = dict(base) if base else {}
    if overlay:
        merged.update(overlay)
    return merged


def delete(attributes: Mapping[str, Any] | None, *names: Any) -> AttributeMap:
    """Return a copy of ``attributes`` without the given top-level keys.

    Only exact keys are removed; ``delete({"user.id": 1}, "user")`` keeps
    ``user.id``.
    """

    doomed = {str(name) for name in names}
    return {key: value for key, value in (attributes or {}).items() if key not in doomed}


def resolve(attributes: Mapping[str, Any] | None) -> AttributeMap:
    """Return ``attributes`` with callable leaves replaced by their result.

    Examples
    --------
    >>> resolve({"static": 1, "dynamic": lambda: "now"})
    {'static': 1, 'dynamic': 'now'}
    """

    return {key: value() if callable(value) else value for key, value in (attributes or {}).items()}


__all__ = ["AttributeMap", "SEPARATOR", "delete", "flatten", "merge", "resolve"]
