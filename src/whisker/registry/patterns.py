# topmark:header:start
#
#   project      : Whisker
#   file         : patterns.py
#   file_relpath : src/whisker/registry/patterns.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Tag-recognition pattern assembly.

The tokenizer finds a tag's opening delimiter, skips whitespace and matches
`Registry.token_match_regex` at that position to learn which prefix (if any)
introduces the tag. The pattern is the alternation of every registered
prefix plus the structural markers the tokenizer handles itself.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from whisker.config.logging import get_logger
from whisker.registry.defaults import (
    NAME_TOKEN_TYPE,
    RESERVED_TOKEN_TYPES,
    STRUCTURAL_TOKEN_TYPES,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from whisker.config.logging import WhiskerLogger

logger: WhiskerLogger = get_logger(__name__)

_WHITESPACE_RE: re.Pattern[str] = re.compile(r"\s*")


def build_token_pattern(prefixes: Iterable[str]) -> re.Pattern[str]:
    """Compile the tag-recognition pattern for ``prefixes``.

    Reserved token types (``name``, ``text``) are skipped. Longer prefixes are
    tried first so ``##`` is not shadowed by ``#``; equal lengths keep their
    registration order. Structural markers are always appended, so the pattern
    is never empty.

    Args:
        prefixes (Iterable[str]): Keys of the merged prefix-handler table.

    Returns:
        re.Pattern[str]: The compiled alternation.
    """
    literal: list[str] = [p for p in prefixes if p and p not in RESERVED_TOKEN_TYPES]
    literal.sort(key=len, reverse=True)
    alternatives: list[str] = [re.escape(p) for p in literal]
    alternatives.extend(STRUCTURAL_TOKEN_TYPES)
    source: str = "|".join(alternatives)
    logger.debug("Token match pattern: %s", source)
    return re.compile(source)


def match_tag_type(pattern: re.Pattern[str], tag_body: str, pos: int = 0) -> str:
    """Return the prefix introducing the tag at ``pos``.

    Leading whitespace is skipped. When no alternative matches, the tag is a
    plain escaped interpolation and ``"name"`` is returned.
    """
    ws = _WHITESPACE_RE.match(tag_body, pos)
    start: int = ws.end() if ws else pos
    match = pattern.match(tag_body, start)
    if match is None:
        return NAME_TOKEN_TYPE
    return match.group(0)
