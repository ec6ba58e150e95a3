# topmark:header:start
#
#   project      : Whisker
#   file         : resolvers.py
#   file_relpath : src/whisker/registry/resolvers.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Built-in value resolvers.

A value resolver pulls a named member out of a runtime object. Every resolver
has the signature ``(value, key) -> object`` and reports "no such member" by
returning the `MISSING` sentinel, never by raising, so a typo in a template
degrades to empty output instead of aborting the render.
"""

from __future__ import annotations

import inspect
import sys
from collections.abc import Callable, Mapping
from typing import Any, Final

from whisker.config.logging import get_logger

logger = get_logger(__name__)

ValueGetter = Callable[[Any, str], Any]


class _Missing:
    """Type of the `MISSING` sentinel (singleton)."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __reduce__(self) -> str:
        return "MISSING"


MISSING: Final[Any] = _Missing()


_MAX_INDEX_DIGITS: Final[int] = len(str(sys.maxsize))


def _parse_index(key: str) -> int | None:
    # ASCII digits only; int() would also accept signs, whitespace and underscores.
    # Longer keys cannot index anything and may exceed the int conversion limit.
    if key.isascii() and key.isdecimal() and len(key) <= _MAX_INDEX_DIGITS:
        return int(key)
    return None


def get_from_sequence(value: Any, key: str) -> Any:
    """Resolve ``key`` as a non-negative integer index into a sequence."""
    if isinstance(value, (str, bytes, bytearray)):
        # text is atomic
        return MISSING
    index: int | None = _parse_index(key)
    if index is None or index >= len(value):
        return MISSING
    return value[index]


def _from_integer_key(value: Mapping[Any, Any], key: str) -> Any:
    index: int | None = _parse_index(key)
    if index is not None and index in value:
        return value[index]
    return MISSING


def get_from_str_mapping(value: dict[Any, Any], key: str) -> Any:
    """Resolve ``key`` in a dict.

    Plain dicts are usually string-keyed; a decimal key still falls back to
    its integer form so a dict and any other mapping holding the same data
    resolve alike.
    """
    if key in value:
        return value[key]
    return _from_integer_key(value, key)


def get_from_mapping(value: Mapping[Any, Any], key: str) -> Any:
    """Resolve ``key`` in a general mapping.

    The string key is tried first; a decimal key then falls back to its
    integer form so ``{1: "a"}`` answers ``"1"``.
    """
    if key in value:
        return value[key]
    return _from_integer_key(value, key)


def _callable_without_arguments(member: Callable[..., Any]) -> bool:
    try:
        signature = inspect.signature(member)
    except (TypeError, ValueError):
        return False
    for param in signature.parameters.values():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        if param.default is param.empty:
            return False
    return True


def get_member_by_name(value: Any, key: str) -> Any:
    """Resolve ``key`` as a public member of ``value``.

    Fields, properties, class and static attributes are all visible, including
    inherited ones. Methods are invoked only if they accept zero arguments;
    a method that needs arguments resolves to `MISSING` rather than guessing.
    Names starting with an underscore are not public and never resolve.
    """
    if not key or key.startswith("_") or not key.isidentifier():
        return MISSING
    try:
        member: Any = getattr(value, key)
    except AttributeError:
        return MISSING

    if inspect.isroutine(member):
        if not _callable_without_arguments(member):
            logger.debug("Member %r of %s requires arguments", key, type(value).__name__)
            return MISSING
        return member()
    return member


__all__ = [
    "MISSING",
    "ValueGetter",
    "get_from_mapping",
    "get_from_sequence",
    "get_from_str_mapping",
    "get_member_by_name",
]
