"""Public façade wiring the local logger layers together.

Purpose
-------
Expose a small, ergonomic API for host applications: create local loggers on
top of an explicit or process-wide default parent, and run the demo used by
the CLI.

Contents
--------
* :func:`local_logger` – build a :class:`LocalLogger` for a parent or the
  default logger.
* :func:`logdemo` – emit a fixed set of entries showing the override rules.
* Scaffolding helpers (``hello_world``, ``i_should_fail``, ``summary_info``)
  used by the CLI smoke tests.

System Role
-----------
Outer edge of the package; everything here composes the domain, application
and adapter layers without adding policy of its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from rich.console import Console

from .adapters.capture import CaptureDevice
from .adapters.console.rich_console import RichConsoleDevice
from .adapters.logger import Logger
from .application.local_logger import LocalLogger
from .domain.events import LogEntry
from .domain.levels import Severity
from .runtime import default_logger


def local_logger(
    parent: Any = None,
    *,
    level: Any = None,
    label: str | None = None,
    attributes: Mapping[Any, Any] | None = None,
) -> LocalLogger | None:
    """Return a :class:`LocalLogger` wrapping ``parent`` or the default logger.

    Returns ``None`` when neither is available.
    """

    resolved = parent if parent is not None else default_logger()
    if resolved is None:
        return None
    return LocalLogger(resolved, level=level, label=label, attributes=attributes)


@dataclass(frozen=True)
class DemoResult:
    """Entries captured while :func:`logdemo` ran."""

    parent_level: Severity
    entries: tuple[LogEntry, ...]


def logdemo(
    *,
    parent_level: Any = Severity.WARN,
    console: Console | None = None,
    no_color: bool = False,
) -> DemoResult:
    """Emit a fixed sequence of entries through a parent and a local logger.

    The parent filters at ``parent_level``; the local logger logs at ``DEBUG``
    under its own label and attributes, so the console shows which entries
    pass which filter.
    """

    capture = CaptureDevice()
    console_device = RichConsoleDevice(console=console or Console(no_color=no_color), no_color=no_color)
    parent = Logger(console_device, level=parent_level, label="demo", devices=[capture])
    local = LocalLogger(parent, level=Severity.DEBUG, label="demo.local", attributes={"component": "logdemo"})

    local.debug("local logger passes its own DEBUG level")
    parent.debug("parent DEBUG entry is filtered by the parent level")
    with local.tag_local(request={"id": "r-1"}):
        local.info("scoped attributes are added locally")
        parent.warn("parent WARN entry does not see local attributes")
    with local.with_local_level(Severity.ERROR):
        local.warn("suppressed by the local-only level")
        parent.warn("parent WARN entry is unaffected by the local-only level")
    with local.with_level(Severity.ERROR):
        parent.warn("suppressed on the parent by with_level")
        local.error("ERROR passes both loggers inside with_level")
    local << "raw message appended through the local logger"

    return DemoResult(parent_level=parent.level, entries=tuple(capture.entries))


def hello_world() -> None:
    """Print the canonical smoke-test message used in docs and tests."""

    print("Hello World")


def i_should_fail() -> None:
    """Raise ``RuntimeError`` to exercise failure handling in the CLI."""

    raise RuntimeError("I should fail")


def summary_info() -> str:
    """Return the metadata banner used by the CLI entry point.

    Outputs
    -------
    str
        Multi-line banner ending with a newline.
    """

    from . import __init__conf__

    lines: list[str] = []

    def _capture(text: str) -> None:
        lines.append(text)

    __init__conf__.print_info(writer=_capture)
    return "".join(lines)


__all__ = [
    "DemoResult",
    "hello_world",
    "i_should_fail",
    "local_logger",
    "logdemo",
    "summary_info",
]
