# topmark:header:start
#
#   project      : Whisker
#   file         : tokens.py
#   file_relpath : src/whisker/tokens.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Token nodes produced by tag-prefix handlers.

These are the small, immutable shapes a tokenizer receives from the
registry's prefix handlers. Rendering behavior lives with the renderer; a
token here only records which kind of tag produced it and, for sections, the
delimiters that were active when the section opened.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Tags:
    """Pair of opening and closing tag delimiters.

    Attributes:
        start: Opening delimiter (``{{`` by default).
        end: Closing delimiter (``}}`` by default).
    """

    start: str = "{{"
    end: str = "}}"

    def __str__(self) -> str:
        return f"{self.start} {self.end}"


DEFAULT_TAGS: Tags = Tags()


@dataclass(frozen=True)
class ParserOutput:
    """Base class for every token node.

    Attributes:
        token_type: The tag type that produced the token (a prefix such as
            ``#``, or one of the reserved kinds ``name`` / ``text``).
        content: Optional raw tag content (variable name, partial name or text).
    """

    token_type: str
    content: str = ""


@dataclass(frozen=True)
class SectionToken(ParserOutput):
    """Section opening tag (``{{#items}}``)."""

    tags: Tags = field(default=DEFAULT_TAGS)


@dataclass(frozen=True)
class InvertedToken(ParserOutput):
    """Inverted section opening tag (``{{^items}}``)."""


@dataclass(frozen=True)
class PartialToken(ParserOutput):
    """Partial include tag (``{{>name}}``)."""


@dataclass(frozen=True)
class UnescapedValueToken(ParserOutput):
    """Unescaped interpolation (``{{&name}}``)."""


@dataclass(frozen=True)
class EscapedValueToken(ParserOutput):
    """Default, HTML-escaped interpolation (``{{name}}``)."""


@dataclass(frozen=True)
class RawValueToken(ParserOutput):
    """Literal text between tags."""
