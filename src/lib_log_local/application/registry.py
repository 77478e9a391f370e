"""Per-class local logger configuration with inheritance along the MRO.

Purpose
-------
Store, for each participating class, a parent logger, level, label, and
attribute template, and resolve them along the class hierarchy into one
memoized :class:`~lib_log_local.application.local_logger.LocalLogger`.

Contents
--------
* :class:`ClassLoggerConfig` – mutable per-class record.
* :class:`LoggerRegistry` – class-to-record mapping with lookup rules.
* :func:`ancestors` – explicit ancestor lookup used by the registry.
* :class:`LocalLoggerMixin` – opt-in base class exposing ``logger`` on the
  class and its instances.
* :data:`REGISTRY` – process-wide registry used by the mixin.

System Role
-----------
Configuration-time state. Setters are expected at import or startup time and
are not synchronised against concurrent readers.

Lookup Rules
------------
Parent logger, level, label and setup callback come from the nearest
participating class that sets them (the class itself first). The setup
callback runs once on each freshly built logger, before it is memoized.
Attribute templates are merged from the most distant ancestor down to the
class, the class winning per key. When no class provides a parent logger the
process-wide default from :mod:`lib_log_local.runtime` is used; without that
the class has no logger.
"""

from __future__ import annotations

import logging
import weakref
from dataclasses import dataclass, field
from threading import RLock
from typing import Any, Callable, Mapping

from lib_log_local.domain.attributes import AttributeMap, flatten, merge
from lib_log_local.domain.levels import Severity
from lib_log_local.runtime._state import default_logger

from .local_logger import LocalLogger

LOGGER = logging.getLogger(__name__)

_UNSET: Any = object()


@dataclass(slots=True)
class ClassLoggerConfig:
    """Raw per-class settings; ``None`` means "inherit"."""

    parent_logger: Any = None
    level: Severity | None = None
    label: str | None = None
    attributes: AttributeMap | None = None
    setup: Callable[[LocalLogger], Any] | None = None
    logger: LocalLogger | None = field(default=None, repr=False)

    def forget(self) -> None:
        """Drop the memoized logger so the next access rebuilds it."""

        self.logger = None


def ancestors(cls: type, participates: Callable[[type], bool]) -> list[type]:
    """Return ``cls`` and its participating ancestors, nearest first.

    The method resolution order is walked and filtered with ``participates``.

    Examples
    --------
    >>> class A: pass
    >>> class B(A): pass
    >>> [k.__name__ for k in ancestors(B, lambda k: k is not object)]
    ['B', 'A']
    """

    return [klass for klass in cls.__mro__ if participates(klass)]


class LoggerRegistry:
    """Map classes to :class:`ClassLoggerConfig` records.

    Records are held in a :class:`weakref.WeakKeyDictionary` and disappear
    together with their class.
    """

    def __init__(self, *, default_provider: Callable[[], Any] = default_logger) -> None:
        self._configs: weakref.WeakKeyDictionary[type, ClassLoggerConfig] = weakref.WeakKeyDictionary()
        self._default_provider = default_provider
        self._lock = RLock()

    def register(self, cls: type) -> ClassLoggerConfig:
        """Make ``cls`` participate; returns its (possibly new) record."""

        with self._lock:
            config = self._configs.get(cls)
            if config is None:
                config = ClassLoggerConfig()
                self._configs[cls] = config
            return config

    def participates(self, cls: type) -> bool:
        return cls in self._configs

    def config(self, cls: type) -> ClassLoggerConfig:
        """Return the record for ``cls``, registering it on first access."""

        return self._configs.get(cls) or self.register(cls)

    def ancestors(self, cls: type) -> list[type]:
        return ancestors(cls, self.participates)

    # Setters ---------------------------------------------------------------

    def set_parent_logger(self, cls: type, value: Any) -> None:
        config = self.config(cls)
        config.parent_logger = value
        config.forget()

    def set_level(self, cls: type, value: Any) -> None:
        """Set the class level; raises :class:`InvalidSeverity` immediately on bad input."""

        config = self.config(cls)
        config.level = None if value is None else Severity.coerce(value)
        config.forget()

    def set_label(self, cls: type, value: str | None) -> None:
        config = self.config(cls)
        config.label = value
        config.forget()

    def set_attributes(self, cls: type, value: Mapping[Any, Any] | None) -> None:
        config = self.config(cls)
        config.attributes = None if value is None else flatten(value)
        config.forget()

    def set_setup(self, cls: type, value: Callable[[LocalLogger], Any] | None) -> None:
        """Store a callback run on each freshly built logger of ``cls``."""

        if value is not None and not callable(value):
            raise TypeError(f"logger setup must be callable, got {value!r}")
        config = self.config(cls)
        config.setup = value
        config.forget()

    def forget(self, cls: type) -> None:
        """Drop the memoized logger of ``cls`` only."""

        self.config(cls).forget()

    # Resolution ------------------------------------------------------------

    def _nearest(self, cls: type, name: str) -> Any:
        self.config(cls)
        for klass in self.ancestors(cls):
            value = getattr(self._configs[klass], name)
            if value is not None:
                return value
        return None

    def parent_logger(self, cls: type) -> Any:
        """Return the nearest configured parent logger, else the process default."""

        parent = self._nearest(cls, "parent_logger")
        if parent is None:
            parent = self._default_provider()
        return parent

    def level(self, cls: type) -> Severity | None:
        return self._nearest(cls, "level")

    def label(self, cls: type) -> str | None:
        return self._nearest(cls, "label")

    def setup(self, cls: type) -> Callable[[LocalLogger], Any] | None:
        return self._nearest(cls, "setup")

    def attributes(self, cls: type) -> AttributeMap:
        """Return attribute templates merged from the farthest ancestor down to ``cls``."""

        self.config(cls)
        merged: AttributeMap = {}
        for klass in reversed(self.ancestors(cls)):
            merged = merge(merged, self._configs[klass].attributes)
        return merged

    def logger(self, cls: type) -> LocalLogger | None:
        """Return the memoized local logger for ``cls``, building it when needed.

        Returns ``None`` when no parent logger can be resolved.
        """

        config = self.config(cls)
        if config.logger is not None:
            return config.logger
        parent = self.parent_logger(cls)
        if parent is None:
            LOGGER.debug("no parent logger resolvable for %s", cls.__qualname__)
            return None
        logger = LocalLogger(
            parent,
            level=self.level(cls),
            label=self.label(cls),
            attributes=self.attributes(cls),
        )
        setup = self.setup(cls)
        if setup is not None:
            setup(logger)
        config.logger = logger
        return logger


REGISTRY = LoggerRegistry()


class _ClassLoggerAccessor:
    """Descriptor returning the class logger from both the class and its instances."""

    def __get__(self, instance: Any, owner: type) -> LocalLogger | None:
        return REGISTRY.logger(owner)


class LocalLoggerMixin:
    """Give a class (and its subclasses) a shared local logger.

    Settings can be passed as class keyword arguments or changed later through
    the ``set_*`` class methods; ``None`` means "inherit".

    Examples
    --------
    >>> from lib_log_local.adapters.capture import CaptureDevice
    >>> from lib_log_local.adapters.logger import Logger
    >>> parent = Logger(CaptureDevice(), level="warn")
    >>> class Service(LocalLoggerMixin, parent_logger=parent, logger_level="debug",
    ...               logger_attributes={"component": "service"}):
    ...     pass
    >>> class Worker(Service, logger_attributes={"sub": "worker"}):
    ...     pass
    >>> Worker.logger.local_attributes
    {'component': 'service', 'sub': 'worker'}
    >>> Worker().logger is Worker.logger
    True
    """

    logger = _ClassLoggerAccessor()

    def __init_subclass__(
        cls,
        *,
        parent_logger: Any = _UNSET,
        logger_level: Any = _UNSET,
        logger_label: Any = _UNSET,
        logger_attributes: Any = _UNSET,
        logger_setup: Any = _UNSET,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        REGISTRY.register(cls)
        if parent_logger is not _UNSET:
            REGISTRY.set_parent_logger(cls, parent_logger)
        if logger_level is not _UNSET:
            REGISTRY.set_level(cls, logger_level)
        if logger_label is not _UNSET:
            REGISTRY.set_label(cls, logger_label)
        if logger_attributes is not _UNSET:
            REGISTRY.set_attributes(cls, logger_attributes)
        if logger_setup is not _UNSET:
            REGISTRY.set_setup(cls, logger_setup)

    @classmethod
    def set_parent_logger(cls, value: Any) -> None:
        REGISTRY.set_parent_logger(cls, value)

    @classmethod
    def set_logger_level(cls, value: Any) -> None:
        REGISTRY.set_level(cls, value)

    @classmethod
    def set_logger_label(cls, value: str | None) -> None:
        REGISTRY.set_label(cls, value)

    @classmethod
    def set_logger_attributes(cls, value: Mapping[Any, Any] | None) -> None:
        REGISTRY.set_attributes(cls, value)

    @classmethod
    def set_logger_setup(cls, value: Callable[[LocalLogger], Any] | None, *, parent_logger: Any = _UNSET) -> None:
        """Run ``value`` on every logger built for this class, optionally setting the parent too.

        The callback may change anything on the fresh logger (level, label,
        permanent tags). Subclasses without their own callback inherit it.
        """

        if parent_logger is not _UNSET:
            REGISTRY.set_parent_logger(cls, parent_logger)
        REGISTRY.set_setup(cls, value)

    @classmethod
    def parent_logger(cls) -> Any:
        return REGISTRY.parent_logger(cls)

    @classmethod
    def logger_level(cls) -> Severity | None:
        return REGISTRY.level(cls)

    @classmethod
    def logger_label(cls) -> str | None:
        return REGISTRY.label(cls)

    @classmethod
    def logger_attributes(cls) -> AttributeMap:
        return REGISTRY.attributes(cls)

    @classmethod
    def logger_setup(cls) -> Callable[[LocalLogger], Any] | None:
        return REGISTRY.setup(cls)


__all__ = [
    "REGISTRY",
    "ClassLoggerConfig",
    "LocalLoggerMixin",
    "LoggerRegistry",
    "ancestors",
]
