"""Environment-driven configuration helpers.

Purpose
-------
Translate environment variables (optionally loaded from a ``.env`` file) into
the settings used to build a default parent logger.

Contents
--------
* :data:`DOTENV_ENV_VAR` – toggle consulted by the CLI.
* :func:`should_use_dotenv` / :func:`enable_dotenv` – ``.env`` support.
* :class:`LoggerSettings`, :func:`settings_from_env`,
  :func:`build_logger_from_env` – default logger construction.

System Role
-----------
Outer-layer convenience; the override engine itself never reads the
environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv
from rich.console import Console

from .adapters.console.rich_console import RichConsoleDevice
from .adapters.logger import Logger
from .domain.levels import Severity

DOTENV_ENV_VAR = "LIB_LOG_LOCAL_USE_DOTENV"
LEVEL_ENV_VAR = "LOG_LOCAL_LEVEL"
LABEL_ENV_VAR = "LOG_LOCAL_LABEL"
FORCE_COLOR_ENV_VAR = "LOG_LOCAL_FORCE_COLOR"
NO_COLOR_ENV_VAR = "LOG_LOCAL_NO_COLOR"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

_DOTENV_PATH: Path | None = None
_DOTENV_LOADED = False


def _is_truthy(value: str | None) -> bool:
    return value is not None and value.strip().lower() in _TRUTHY


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether ``.env`` loading is requested.

    An explicit CLI flag wins over the environment toggle.

    Examples
    --------
    >>> should_use_dotenv(explicit=None, env_value="yes")
    True
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    """

    if explicit is not None:
        return explicit
    return _is_truthy(env_value)


def enable_dotenv(*, search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` into :data:`os.environ` without overriding existing values.

    Returns the resolved path of the loaded file or ``None`` when none exists.
    Subsequent calls return the cached result.
    """

    global _DOTENV_PATH, _DOTENV_LOADED
    if _DOTENV_LOADED:
        return _DOTENV_PATH
    if search_from is not None:
        candidate = _find_upwards(search_from)
    else:
        found = find_dotenv(usecwd=True)
        candidate = Path(found).resolve() if found else None
    if candidate is not None:
        load_dotenv(candidate, override=False)
    _DOTENV_PATH = candidate
    _DOTENV_LOADED = True
    return candidate


def _find_upwards(start: Path) -> Path | None:
    start = start.resolve()
    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_PATH, _DOTENV_LOADED
    _DOTENV_PATH = None
    _DOTENV_LOADED = False


@dataclass(frozen=True, slots=True)
class LoggerSettings:
    """Settings for the default parent logger."""

    level: Severity = Severity.INFO
    label: str | None = None
    force_color: bool = False
    no_color: bool = False


def _coerce_flag(name: str, value: str | None) -> bool:
    if value is None or not value.strip():
        return False
    normalized = value.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {value!r}")


def settings_from_env(environ: Mapping[str, str] | None = None) -> LoggerSettings:
    """Read :class:`LoggerSettings` from ``environ`` (defaults to :data:`os.environ`).

    Raises :class:`~lib_log_local.domain.levels.InvalidSeverity` for a bad
    ``LOG_LOCAL_LEVEL`` and :class:`ValueError` for malformed flags.
    """

    env = os.environ if environ is None else environ
    raw_level = env.get(LEVEL_ENV_VAR)
    level = Severity.coerce(raw_level) if raw_level else Severity.INFO
    return LoggerSettings(
        level=level,
        label=env.get(LABEL_ENV_VAR) or None,
        force_color=_coerce_flag(FORCE_COLOR_ENV_VAR, env.get(FORCE_COLOR_ENV_VAR)),
        no_color=_coerce_flag(NO_COLOR_ENV_VAR, env.get(NO_COLOR_ENV_VAR)),
    )


def build_logger_from_env(
    environ: Mapping[str, str] | None = None,
    *,
    console: Console | None = None,
) -> Logger:
    """Build a :class:`Logger` writing to a Rich console from environment settings."""

    settings = settings_from_env(environ)
    device = RichConsoleDevice(console=console, force_color=settings.force_color, no_color=settings.no_color)
    return Logger(device, level=settings.level, label=settings.label)


__all__ = [
    "DOTENV_ENV_VAR",
    "FORCE_COLOR_ENV_VAR",
    "LABEL_ENV_VAR",
    "LEVEL_ENV_VAR",
    "LoggerSettings",
    "NO_COLOR_ENV_VAR",
    "build_logger_from_env",
    "enable_dotenv",
    "settings_from_env",
    "should_use_dotenv",
]
