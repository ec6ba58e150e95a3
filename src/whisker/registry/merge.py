# topmark:header:start
#
#   project      : Whisker
#   file         : merge.py
#   file_relpath : src/whisker/registry/merge.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Table merging and freezing.

Default tables are never mutated: `merge_left` always builds a new ``dict``
and `freeze_mapping` wraps a private copy in a ``MappingProxyType`` so no
caller can add, remove or replace entries afterwards.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, TypeVar

from whisker.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from whisker.config.logging import WhiskerLogger

logger: WhiskerLogger = get_logger(__name__)

K = TypeVar("K")
V = TypeVar("V")


def merge_left(
    defaults: Mapping[K, V],
    overrides: Mapping[K, V | None] | None,
    *,
    protected: Iterable[K] = (),
) -> dict[K, V]:
    """Merge ``overrides`` on top of ``defaults``.

    Default keys keep their position; keys only present in ``overrides`` are
    appended in override order. An override value of ``None`` removes the key,
    unless the key is listed in ``protected``.

    Args:
        defaults (Mapping[K, V]): Base table (left untouched).
        overrides (Mapping[K, V | None] | None): Caller entries; ``None`` acts as
            an empty override.
        protected (Iterable[K]): Keys that can be replaced but never removed.

    Returns:
        dict[K, V]: A new merged table.
    """
    merged: dict[K, V] = dict(defaults)
    if not overrides:
        return merged

    keep: frozenset[K] = frozenset(protected)
    for key, value in overrides.items():
        if value is None:
            if key in keep:
                logger.warning("Ignoring removal of reserved entry %r", key)
                continue
            merged.pop(key, None)
        else:
            merged[key] = value
    return merged


def freeze_mapping(table: Mapping[K, V]) -> Mapping[K, V]:
    """Return a read-only view over a private copy of ``table``."""
    return MappingProxyType(dict(table))
