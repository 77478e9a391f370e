"""Decorator running a method inside local and parent attribute scopes.

Purpose
-------
Keep logging metadata out of business logic: a method decorated with
:func:`log_attributes` logs with extra attributes for the duration of each
call.

Contents
--------
* :func:`log_attributes` – decorator factory.

System Role
-----------
Thin convenience over :meth:`LocalLogger.tag_local` and the parent's ``tag``;
works on methods of classes deriving from
:class:`~lib_log_local.application.registry.LocalLoggerMixin` (anything with a
``logger`` attribute).
"""

from __future__ import annotations

import functools
from contextlib import ExitStack
from typing import Any, Callable, Mapping, TypeVar

from lib_log_local.domain.attributes import flatten

F = TypeVar("F", bound=Callable[..., Any])


def log_attributes(
    local: Mapping[Any, Any] | None = None,
    *,
    parent: Mapping[Any, Any] | None = None,
    setup: Callable[..., Any] | None = None,
) -> Callable[[F], F]:
    """Wrap a method so it runs inside attribute scopes.

    Parameters
    ----------
    local:
        Attributes added to entries routed through ``self.logger``.
    parent:
        Attributes added on the parent logger, visible to every caller of the
        parent (in the same thread or task) during the call.
    setup:
        Optional callable invoked as ``setup(self, *args, **kwargs)`` inside the
        scopes before the method runs; use it to add call-dependent attributes
        with ``self.logger.tag_local_current(...)`` or ``self.logger.tag_current(...)``.

    Examples
    --------
    >>> from lib_log_local.adapters.capture import CaptureDevice
    >>> from lib_log_local.adapters.logger import Logger
    >>> from lib_log_local.application.registry import LocalLoggerMixin
    >>> device = CaptureDevice()
    >>> class Job(LocalLoggerMixin, parent_logger=Logger(device)):
    ...     @log_attributes({"method": "run"})
    ...     def run(self, value):
    ...         self.logger.info("running")
    ...         return value * 2
    >>> Job().run(21)
    42
    >>> device.entries[-1].attributes
    {'method': 'run'}
    """

    static_local = flatten(local)
    static_parent = flatten(parent)

    def decorator(method: F) -> F:
        @functools.wraps(method)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
            logger = getattr(self, "logger", None)
            if logger is None:
                return method(self, *args, **kwargs)
            with ExitStack() as stack:
                stack.enter_context(logger.tag(static_parent))
                stack.enter_context(logger.tag_local(static_local))
                if setup is not None:
                    setup(self, *args, **kwargs)
                return method(self, *args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


__all__ = ["log_attributes"]
