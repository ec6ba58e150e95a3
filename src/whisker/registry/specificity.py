# topmark:header:start
#
#   project      : Whisker
#   file         : specificity.py
#   file_relpath : src/whisker/registry/specificity.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Most-specific-type-first ordering for type-keyed tables.

Value resolvers and enumeration converters are keyed by type and consulted
in order; the first type the runtime value is an instance of wins. Ordering
subtypes before their supertypes makes the most precise handler win, and puts
``object`` (which everything is an instance of) last.

Specificity is only a partial order: two unrelated types have no defined
relative position. `order_by_specificity` breaks such ties by registration
order, so the result is deterministic without inventing a total order.

A comparison-based sort is not used here: with a partial order, a stable
sort may compare only unrelated neighbours and leave a supertype ahead of one
of its subtypes. Selection guarantees subtype-before-supertype for every input.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from whisker.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from whisker.config.logging import WhiskerLogger

logger: WhiskerLogger = get_logger(__name__)

V = TypeVar("V")


def is_more_specific(a: type, b: type) -> bool:
    """Return True if ``a`` is a strict subtype of ``b``.

    Virtual subclasses registered on ABCs count (``list`` is more specific than
    ``collections.abc.Sequence``).
    """
    if a is b:
        return False
    return issubclass(a, b) and not issubclass(b, a)


def compare_specificity(a: type, b: type) -> int:
    """Three-way comparator: ``-1`` if ``a`` sorts first, ``1`` if ``b`` does, else ``0``."""
    if is_more_specific(a, b):
        return -1
    if is_more_specific(b, a):
        return 1
    return 0


def order_by_specificity(types: Iterable[type]) -> list[type]:
    """Order ``types`` from most to least specific.

    Repeatedly takes the earliest remaining type that has no strict subtype
    among the remaining ones. Duplicates are dropped (first occurrence kept).

    Args:
        types (Iterable[type]): Types in registration order.

    Returns:
        list[type]: The same types, subtypes ahead of their supertypes.
    """
    pending: list[type] = list(dict.fromkeys(types))
    ordered: list[type] = []
    while pending:
        chosen: type = pending[0]
        for candidate in pending:
            if not any(is_more_specific(other, candidate) for other in pending):
                chosen = candidate
                break
        ordered.append(chosen)
        pending.remove(chosen)
    return ordered


def order_table(table: Mapping[type, V]) -> dict[type, V]:
    """Return ``table`` re-keyed in specificity order."""
    ordered: list[type] = order_by_specificity(table.keys())
    logger.trace("Specificity order: %s", [t.__qualname__ for t in ordered])
    return {key: table[key] for key in ordered}
