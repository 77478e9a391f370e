"""Local logger composing overrides on top of a shared parent logger.

Purpose
-------
Let a component log through an existing logger while overriding severity,
label, and attributes locally, without touching or copying the parent's
configuration.

Contents
--------
* :class:`LocalLogger` – proxy that resolves the effective level, label, and
  attributes on every call and then delegates emission to the parent.

System Role
-----------
Heart of the override engine. Constructor-level state is shared by every
caller of the instance; scoped state lives in a per-instance
:class:`~lib_log_local.domain.context.ScopedContext` and is private to the
calling thread or task.

Precedence
----------
Level: scoped override > local level > parent level. A permanent level set
while a scoped override is active takes effect only after the scope exits.
Label: scoped override > local label > parent label.
Attributes: call attributes > local attributes > parent attributes, also when
the parent is another local logger.
"""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from typing import Any, ContextManager, Iterator, Mapping

from lib_log_local.domain.attributes import AttributeMap, delete, flatten, merge, resolve
from lib_log_local.domain.context import ScopedContext
from lib_log_local.domain.levels import Severity

from .leveled import LeveledMethods
from .ports.leveled_logger import LeveledLoggerPort

_RESERVED_CALL_KEYS = ("label",)


class LocalLogger(LeveledMethods):
    """Proxy a parent logger with local level, label, and attribute overrides.

    Parameters
    ----------
    parent_logger:
        Logger performing the actual emission. It is referenced, never copied;
        several local loggers may share it and a local logger may itself be a
        parent.
    level:
        Optional local level; ``None`` defers to the parent.
    label:
        Optional local label; ``None`` defers to the parent.
    attributes:
        Optional permanent attribute template added to every entry emitted
        through this logger.

    Examples
    --------
    >>> from lib_log_local.adapters.capture import CaptureDevice
    >>> from lib_log_local.adapters.logger import Logger
    >>> device = CaptureDevice()
    >>> parent = Logger(device, level="warn")
    >>> local = LocalLogger(parent, level="debug", label="worker", attributes={"component": "jobs"})
    >>> local.debug("local")
    >>> parent.debug("parent")
    >>> [(e.message, e.label, e.attributes) for e in device.entries]
    [('local', 'worker', {'component': 'jobs'})]
    """

    def __init__(
        self,
        parent_logger: LeveledLoggerPort,
        *,
        level: Any = None,
        label: str | None = None,
        attributes: Mapping[Any, Any] | None = None,
    ) -> None:
        if parent_logger is None:
            raise ValueError("parent_logger is required")
        self._parent = parent_logger
        self._level: Severity | None = None if level is None else Severity.coerce(level)
        self._label = label
        self._attributes: AttributeMap = flatten(attributes)
        self._context = ScopedContext("lib_log_local_local")

    @property
    def parent_logger(self) -> LeveledLoggerPort:
        return self._parent

    # Level -----------------------------------------------------------------

    @property
    def level(self) -> Severity:
        """Return the scoped override, else the local level, else the parent's level."""

        scoped = self._context.current_severity()
        if scoped is not None:
            return scoped
        if self._level is not None:
            return self._level
        return Severity.coerce(self._parent.level)

    @level.setter
    def level(self, value: Any) -> None:
        self.set_level(value)

    @property
    def local_level(self) -> Severity | None:
        """Return the permanent local level, ``None`` when deferring to the parent."""

        return self._level

    def set_level(self, value: Any) -> None:
        """Set the permanent local level; ``None`` reverts to the parent's level."""

        self._level = None if value is None else Severity.coerce(value)

    @contextmanager
    def with_level(self, level: Any) -> Iterator[Severity]:
        """Apply ``level`` here and on the parent for the lifetime of the block.

        Code logging straight to the parent inside the block (in the same
        thread or task) sees the same level.
        """

        with self._context.severity(level) as resolved, self._parent.with_level(resolved):
            yield resolved

    @contextmanager
    def with_local_level(self, level: Any) -> Iterator[Severity]:
        """Apply ``level`` to entries routed through this logger only."""

        with self._context.severity(level) as resolved:
            yield resolved

    def silence(self, level: Any = Severity.ERROR) -> ContextManager[Severity]:
        """Shorthand for :meth:`with_level` defaulting to ``ERROR``."""

        return self.with_level(level)

    log_at = with_level

    # Label -----------------------------------------------------------------

    @property
    def label(self) -> str | None:
        """Return the scoped label, else the local label, else the parent's label."""

        scoped = self._context.current_label()
        if scoped is not None:
            return scoped
        if self._label is not None:
            return self._label
        return self._parent.label

    @label.setter
    def label(self, value: str | None) -> None:
        self.set_label(value)

    def set_label(self, value: str | None) -> None:
        self._label = value

    def with_label(self, label: str | None) -> ContextManager[str | None]:
        """Apply ``label`` to entries routed through this logger inside the block."""

        return self._context.label(label)

    # Attributes ------------------------------------------------------------

    @property
    def local_attributes(self) -> AttributeMap:
        """Return the active scoped attributes, else the permanent template.

        Parent attributes are not included; see :attr:`attributes`.
        """

        if self._context.in_attribute_scope:
            return self._context.current_attributes()
        return dict(self._attributes)

    @property
    def attributes(self) -> AttributeMap:
        """Return the parent's current attributes with local attributes on top."""

        return merge(self._parent.attributes, self.local_attributes)

    @contextmanager
    def tag_local(self, attributes: Mapping[Any, Any] | None = None, /, **kwargs: Any) -> Iterator[AttributeMap]:
        """Add attributes to entries routed through this logger inside the block.

        The first scope starts from the permanent template, nested scopes from
        the enclosing scope, so outer attributes stay visible. The parent's
        attributes are not touched.
        """

        added = merge(flatten(attributes), flatten(kwargs))
        if self._context.in_attribute_scope:
            overlay = added
        else:
            overlay = merge(self._attributes, added)
        with self._context.attributes(overlay):
            yield self.local_attributes

    def tag_local_current(self, attributes: Mapping[Any, Any] | None = None, /, **kwargs: Any) -> bool:
        """Merge attributes into the innermost active :meth:`tag_local` block.

        Without an active block the attributes are dropped and ``False`` is
        returned; use :meth:`add_local_tags` for permanent attributes.
        """

        return self._context.merge_into_current(merge(flatten(attributes), flatten(kwargs)))

    def tag(self, attributes: Mapping[Any, Any] | None = None, /, **kwargs: Any) -> ContextManager[Any]:
        """Forward to the parent's ``tag``; the attributes apply to all its callers."""

        return self._parent.tag(attributes, **kwargs)

    def add_local_tags(self, attributes: Mapping[Any, Any] | None = None, /, **kwargs: Any) -> None:
        """Merge attributes into the permanent template (not synchronised)."""

        self._attributes = merge(self._attributes, merge(flatten(attributes), flatten(kwargs)))

    def remove_local_tags(self, *names: str) -> None:
        """Remove keys from the permanent template (not synchronised)."""

        self._attributes = delete(self._attributes, *names)

    # Emission --------------------------------------------------------------

    @contextmanager
    def _compose(self, local: AttributeMap) -> Iterator[None]:
        with ExitStack() as stack:
            stack.enter_context(self._parent.with_level(self.level))
            stack.enter_context(self._parent.with_label(self.label))
            stack.enter_context(self._parent.tag(local))
            yield

    def _emit(self, name: str, severity: Severity, message: Any, label: str | None, attributes: dict[str, Any]) -> None:
        # Local attributes are also passed per call; the parent merges call
        # attributes over every tag scope, including a chained parent's own.
        local = resolve(self.local_attributes)
        forwarded = merge(delete(local, *_RESERVED_CALL_KEYS), attributes)
        with self._compose(local):
            if name == "add":
                self._parent.add(severity, message, label=label, **forwarded)
            else:
                getattr(self._parent, name)(message, label=label, **forwarded)

    def write(self, message: Any) -> None:
        """Append ``message`` at ``UNKNOWN`` severity through the parent's ``add``."""

        self._emit("add", Severity.UNKNOWN, message, None, {})

    def __getattr__(self, name: str) -> Any:
        """Forward unknown attributes to the parent logger.

        Raises :class:`AttributeError` unchanged when the parent lacks ``name``.
        """

        if name.startswith("__") or name in {"_parent", "_context", "_level", "_label", "_attributes"}:
            raise AttributeError(name)
        return getattr(self._parent, name)

    def __repr__(self) -> str:
        level = self._level.name if self._level is not None else None
        return f"{type(self).__name__}(parent={self._parent!r}, level={level}, label={self._label!r})"


__all__ = ["LocalLogger"]
