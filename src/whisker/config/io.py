# topmark:header:start
#
#   project      : Whisker
#   file         : io.py
#   file_relpath : src/whisker/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""TOML configuration I/O.

Reads Whisker settings from ``whisker.toml`` or the ``[tool.whisker]`` table
of ``pyproject.toml``. Parsing is done with `tomlkit` and returned as plain
``dict`` structures; the small getters below extract typed values, logging
and ignoring anything malformed so a config typo never changes defaulting
behavior.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Final, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from whisker.config.logging import get_logger
from whisker.constants import PYPROJECT_TOML_NAME, WHISKER_TOML_NAME

if TYPE_CHECKING:
    from whisker.config.logging import WhiskerLogger

logger: WhiskerLogger = get_logger(__name__)

TomlTable = dict[str, Any]

CONFIG_FILE_NAMES: Final[tuple[str, ...]] = (WHISKER_TOML_NAME, PYPROJECT_TOML_NAME)


class ConfigLoadError(ValueError):
    """Raised when a configuration file cannot be read or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path: Path = path
        self.reason: str = reason


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document.

    Returns:
        TomlTable: The parsed TOML content as plain Python data.

    Raises:
        ConfigLoadError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.error("Error loading TOML from %s: %s", path, exc)
        raise ConfigLoadError(path, str(exc)) from exc
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as exc:
        logger.error("Error decoding TOML from %s: %s", path, exc)
        raise ConfigLoadError(path, str(exc)) from exc
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def extract_whisker_table(path: Path, data: TomlTable) -> TomlTable | None:
    """Return the Whisker settings table of a parsed config document.

    ``pyproject.toml`` carries settings under ``[tool.whisker]``; any other
    file is taken as a whole. Returns ``None`` when a ``pyproject.toml`` has
    no Whisker section.
    """
    if path.name != PYPROJECT_TOML_NAME:
        return data
    section: TomlTable = get_table_value(get_table_value(data, "tool"), "whisker")
    if not section:
        logger.debug("[tool.whisker] section missing in %s", path)
        return None
    return section


def discover_config_file(start: Path) -> Path | None:
    """Return the nearest config file walking upward from ``start``.

    In each directory ``whisker.toml`` wins over ``pyproject.toml``; a
    ``pyproject.toml`` only counts when it has a ``[tool.whisker]`` table.
    """
    current: Path = start.resolve()
    if current.is_file():
        current = current.parent
    for directory in (current, *current.parents):
        for name in CONFIG_FILE_NAMES:
            candidate: Path = directory / name
            if not candidate.is_file():
                continue
            if name == PYPROJECT_TOML_NAME:
                try:
                    data: TomlTable = load_toml_dict(candidate)
                except ConfigLoadError:
                    continue
                if extract_whisker_table(candidate, data) is None:
                    continue
            logger.debug("Discovered config file: %s", candidate)
            return candidate
    return None


# --- Getters ---


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table; a missing or non-table value yields an empty dict."""
    value: Any | None = table.get(key)
    return value if isinstance(value, dict) else {}


def get_int_value_or_none(table: TomlTable, key: str, *, where: str) -> int | None:
    """Return an optional int value, warning when present but not ``int``.

    ``bool`` is rejected since it is a subclass of ``int``.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    logger.warning("Expected int in %s.%s, got %s: %r", where, key, type(value).__name__, value)
    return None


def get_bool_value_or_none(table: TomlTable, key: str, *, where: str) -> bool | None:
    """Return an optional bool value, warning when present but not ``bool``."""
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    logger.warning("Expected bool in %s.%s, got %s: %r", where, key, type(value).__name__, value)
    return None


def get_string_value_or_none(table: TomlTable, key: str, *, where: str) -> str | None:
    """Return an optional string value, warning when present but not ``str``."""
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    logger.warning("Expected str in %s.%s, got %s: %r", where, key, type(value).__name__, value)
    return None


def get_string_map(table: TomlTable, key: str, *, where: str) -> dict[str, str]:
    """Return the string-valued entries of sub-table ``key``; others are skipped."""
    result: dict[str, str] = {}
    for name, value in get_table_value(table, key).items():
        if isinstance(value, str):
            result[name] = value
        else:
            logger.warning(
                "Expected str in %s.%s.%s, got %s", where, key, name, type(value).__name__
            )
    return result
