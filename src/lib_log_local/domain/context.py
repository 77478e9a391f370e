"""Scoped logging state built atop :mod:`contextvars`.

Purpose
-------
Keep per-execution-unit overrides (attribute overlays, a severity override and
a label override) isolated between threads and asyncio tasks while letting a
call stack push and pop them in strict LIFO order.

Contents
--------
* :class:`ScopedContext` – owner of three context variables with context
  managers and callable-based helpers for entering scopes.

System Role
-----------
Both :class:`~lib_log_local.application.local_logger.LocalLogger` and the
concrete :class:`~lib_log_local.adapters.logger.Logger` keep their temporary
state here, so a scope opened in one thread is never visible in another.
"""

from __future__ import annotations

import contextvars
import itertools
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Mapping, TypeVar

from .attributes import AttributeMap, flatten, merge
from .levels import Severity

R = TypeVar("R")

_IDS = itertools.count()


class ScopedContext:
    """Manage attribute, severity, and label overrides for the current execution unit.

    Each instance owns its own context variables; two loggers never share
    overlays. Threads start with an empty state and asyncio tasks receive a
    snapshot of the creating task's state, so changes made in one unit never
    leak into another.
    """

    _stack_var: contextvars.ContextVar[tuple[AttributeMap, ...]]
    _severity_var: contextvars.ContextVar[Severity | None]
    _label_var: contextvars.ContextVar[str | None]

    def __init__(self, name: str = "lib_log_local") -> None:
        ident = next(_IDS)
        self._stack_var = contextvars.ContextVar(f"{name}_attributes_{ident}", default=())
        self._severity_var = contextvars.ContextVar(f"{name}_severity_{ident}", default=None)
        self._label_var = contextvars.ContextVar(f"{name}_label_{ident}", default=None)

    @contextmanager
    def attributes(self, tags: Mapping[Any, Any] | None = None) -> Iterator[AttributeMap]:
        """Push ``flatten(tags)`` for the lifetime of the ``with`` block.

        Yields the merged attributes visible inside the scope.
        """

        stack = self._stack_var.get()
        token = self._stack_var.set(stack + (flatten(tags),))
        try:
            yield self.current_attributes()
        finally:
            self._stack_var.reset(token)

    def run_with_attributes(self, tags: Mapping[Any, Any] | None, func: Callable[..., R], *args: Any, **kwargs: Any) -> R:
        """Call ``func`` inside :meth:`attributes` and return its result."""

        with self.attributes(tags):
            return func(*args, **kwargs)

    def current_attributes(self) -> AttributeMap:
        """Return all overlays merged outermost to innermost."""

        merged: AttributeMap = {}
        for frame in self._stack_var.get():
            merged = merge(merged, frame)
        return merged

    @property
    def in_attribute_scope(self) -> bool:
        """Return ``True`` while at least one attribute scope is active."""

        return bool(self._stack_var.get())

    def merge_into_current(self, tags: Mapping[Any, Any] | None) -> bool:
        """Merge ``tags`` into the innermost active overlay.

        The merged tags disappear when that scope exits. Returns ``False`` and
        drops the tags when no scope is active.
        """

        stack = list(self._stack_var.get())
        if not stack:
            return False
        stack[-1] = merge(stack[-1], flatten(tags))
        self._stack_var.set(tuple(stack))
        return True

    @contextmanager
    def severity(self, level: Any) -> Iterator[Severity]:
        """Override the severity for the lifetime of the ``with`` block."""

        resolved = Severity.coerce(level)
        token = self._severity_var.set(resolved)
        try:
            yield resolved
        finally:
            self._severity_var.reset(token)

    def run_with_severity(self, level: Any, func: Callable[..., R], *args: Any, **kwargs: Any) -> R:
        """Call ``func`` inside :meth:`severity` and return its result."""

        with self.severity(level):
            return func(*args, **kwargs)

    def current_severity(self) -> Severity | None:
        """Return the active severity override, if any."""

        return self._severity_var.get()

    @contextmanager
    def label(self, value: str | None) -> Iterator[str | None]:
        """Override the label for the lifetime of the ``with`` block.

        ``None`` keeps whatever label is currently in effect.
        """

        if value is None:
            yield self._label_var.get()
            return
        token = self._label_var.set(value)
        try:
            yield value
        finally:
            self._label_var.reset(token)

    def current_label(self) -> str | None:
        """Return the active label override, if any."""

        return self._label_var.get()

    def clear(self) -> None:
        """Drop every override bound to the current execution unit.

        Pooled workers that reuse a thread across unrelated jobs call this
        between jobs.
        """

        self._stack_var.set(())
        self._severity_var.set(None)
        self._label_var.set(None)

    @staticmethod
    def isolated(func: Callable[..., R], *args: Any, **kwargs: Any) -> R:
        """Run ``func`` in a fresh, empty :class:`contextvars.Context`.

        Useful when a task is handed to an executor whose worker could
        otherwise inherit a snapshot of the submitting scope.
        """

        return contextvars.Context().run(func, *args, **kwargs)


__all__ = ["ScopedContext"]
