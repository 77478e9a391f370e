"""Static package metadata surfaced by the CLI."""

from __future__ import annotations

from typing import Callable

name = "lib_log_local"
title = "Local loggers with scoped level, label, and attribute overrides"
version = "0.1.0"
author = "bitranox"
shell_command = "lib_log_local"


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Print the summary of the project metadata.

    Examples
    --------
    >>> print_info()  # doctest: +ELLIPSIS
    Info for lib_log_local:
    ...
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("author", author),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    text = "\n".join(lines) + "\n"
    if writer is None:
        print(text, end="")
    else:
        writer(text)


__all__ = ["author", "name", "print_info", "shell_command", "title", "version"]
