# topmark:header:start
#
#   project      : Whisker
#   file         : options.py
#   file_relpath : src/whisker/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Common CLI option utilities.

Centralizes reusable options (verbosity, color, config file, output format)
and their resolution logic, so commands and the group can stay thin.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Callable, ParamSpec, TypeVar

import click

from whisker.cli.errors import WhiskerConfigError, WhiskerFileNotFoundError, WhiskerUsageError
from whisker.config.io import ConfigLoadError, discover_config_file
from whisker.config.logging import get_logger
from whisker.config.model import MutableRegistrySettings
from whisker.registry import Registry

if TYPE_CHECKING:
    from whisker.config.logging import WhiskerLogger

P = ParamSpec("P")
R = TypeVar("R")

logger: WhiskerLogger = get_logger(__name__)


class OutputFormat(str, Enum):
    """Output formats for inspection commands."""

    TEXT = "text"
    JSON = "json"


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity from ``-v`` / ``-q`` counts.

    Returns:
        int: ``-1`` when quiet, ``0`` by default, otherwise the ``-v`` count.

    Raises:
        WhiskerUsageError: If both verbose and quiet flags are used.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise WhiskerUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if quiet_count > 0:
        return -1
    return verbose_count


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-v/--verbose`` and ``-q/--quiet`` counting options."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify up to twice for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress non-essential output.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the ``--no-color`` flag."""
    return click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        default=False,
        help="Disable ANSI colors in program output.",
    )(f)


def config_option(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--config PATH`` and ``--no-config`` options."""
    f = click.option(
        "--config",
        "config_path",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Read settings from this whisker.toml or pyproject.toml.",
    )(f)
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        default=False,
        help="Ignore discovered config files and use built-in defaults.",
    )(f)
    return f


def format_option(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--format [text|json]``."""
    return click.option(
        "--format",
        "output_format",
        type=click.Choice([v.value for v in OutputFormat]),
        default=OutputFormat.TEXT.value,
        show_default=True,
        help="Output format.",
    )(f)


def build_registry_from_options(config_path: Path | None, *, no_config: bool) -> Registry:
    """Build a `Registry` from ``--config`` / discovered config / defaults.

    Raises:
        WhiskerUsageError: If ``--config`` and ``--no-config`` are combined.
        WhiskerFileNotFoundError: If ``--config`` names a file that does not exist.
        WhiskerConfigError: If the config file is unreadable or malformed.
    """
    if config_path is not None and no_config:
        raise WhiskerUsageError("The '--config' and '--no-config' options are mutually exclusive.")
    if no_config:
        return Registry.from_settings()

    path: Path | None = config_path
    if path is None:
        path = discover_config_file(Path.cwd())
    elif not path.is_file():
        raise WhiskerFileNotFoundError(f"Config file not found: {path}")
    if path is None:
        logger.debug("No config file found; using defaults")
        return Registry.from_settings()

    try:
        draft: MutableRegistrySettings | None = MutableRegistrySettings.from_toml_file(path)
    except ConfigLoadError as exc:
        raise WhiskerConfigError(f"Cannot load config {exc.path}: {exc.reason}") from exc
    if draft is None:
        raise WhiskerConfigError(f"[tool.whisker] section missing in {path}")
    try:
        return Registry.from_settings(draft.freeze())
    except ValueError as exc:
        raise WhiskerConfigError(str(exc)) from exc
