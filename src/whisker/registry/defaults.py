# topmark:header:start
#
#   project      : Whisker
#   file         : defaults.py
#   file_relpath : src/whisker/registry/defaults.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Built-in default tables.

These tables are the base every `Registry` merges caller overrides into.
They are module-level read-only views and are never mutated.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Any, Final

from whisker.registry.resolvers import (
    ValueGetter,
    get_from_mapping,
    get_from_sequence,
    get_from_str_mapping,
    get_member_by_name,
)
from whisker.tokens import (
    EscapedValueToken,
    InvertedToken,
    ParserOutput,
    PartialToken,
    RawValueToken,
    SectionToken,
    Tags,
    UnescapedValueToken,
)

TokenGetter = Callable[[str, Tags], ParserOutput]
TruthyCheck = Callable[[Any], "bool | None"]
EnumerationConverter = Callable[[Any], Iterable[Any]]

# Default escaped value and literal text: always present, never tag-introducing.
NAME_TOKEN_TYPE: Final[str] = "name"
TEXT_TOKEN_TYPE: Final[str] = "text"
RESERVED_TOKEN_TYPES: Final[tuple[str, ...]] = (NAME_TOKEN_TYPE, TEXT_TOKEN_TYPE)

# Section close, delimiter change, triple mustache and comment.
STRUCTURAL_TOKEN_TYPES: Final[tuple[str, ...]] = (
    re.escape("/"),
    re.escape("="),
    re.escape("{"),
    re.escape("!"),
)

DEFAULT_MAX_RECURSION_DEPTH: Final[int] = 256

DEFAULT_VALUE_GETTERS: Final[Mapping[type, ValueGetter]] = MappingProxyType(
    {
        Sequence: get_from_sequence,
        dict: get_from_str_mapping,
        Mapping: get_from_mapping,
        object: get_member_by_name,
    }
)

DEFAULT_TOKEN_GETTERS: Final[Mapping[str, TokenGetter]] = MappingProxyType(
    {
        "#": lambda s, tags: SectionToken(token_type=s, tags=tags),
        "^": lambda s, tags: InvertedToken(token_type=s),
        ">": lambda s, tags: PartialToken(token_type=s),
        "&": lambda s, tags: UnescapedValueToken(token_type=s),
        NAME_TOKEN_TYPE: lambda s, tags: EscapedValueToken(token_type=s),
        TEXT_TOKEN_TYPE: lambda s, tags: RawValueToken(token_type=s),
    }
)

DEFAULT_TRUTHY_CHECKS: Final[tuple[TruthyCheck, ...]] = ()

DEFAULT_ENUMERATION_CONVERTERS: Final[Mapping[type, EnumerationConverter]] = MappingProxyType({})
