"""Console devices."""

from __future__ import annotations

from .rich_console import RichConsoleDevice

__all__ = ["RichConsoleDevice"]
