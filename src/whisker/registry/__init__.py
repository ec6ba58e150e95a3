# topmark:header:start
#
#   project      : Whisker
#   file         : __init__.py
#   file_relpath : src/whisker/registry/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Registry construction and dispatch.

Exports the frozen `Registry`, the `MISSING` sentinel and the building blocks
used to assemble it (merge, specificity ordering, pattern assembly).
"""

from __future__ import annotations

from whisker.registry.defaults import (
    DEFAULT_MAX_RECURSION_DEPTH,
    RESERVED_TOKEN_TYPES,
    STRUCTURAL_TOKEN_TYPES,
)
from whisker.registry.merge import freeze_mapping, merge_left
from whisker.registry.patterns import build_token_pattern
from whisker.registry.registry import Registry
from whisker.registry.resolvers import MISSING
from whisker.registry.specificity import (
    compare_specificity,
    is_more_specific,
    order_by_specificity,
)

__all__ = [
    "DEFAULT_MAX_RECURSION_DEPTH",
    "MISSING",
    "RESERVED_TOKEN_TYPES",
    "STRUCTURAL_TOKEN_TYPES",
    "Registry",
    "build_token_pattern",
    "compare_specificity",
    "freeze_mapping",
    "is_more_specific",
    "merge_left",
    "order_by_specificity",
]
