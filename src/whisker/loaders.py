# topmark:header:start
#
#   project      : Whisker
#   file         : loaders.py
#   file_relpath : src/whisker/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Template source loaders.

A loader maps a template name (or source key) to template source text. The
registry holds one loader for top-level templates and an optional one for
partials; tokenizers and renderers call `load()` when they need source text.

Loaders report "not found" by returning ``None`` so callers can decide whether
an unresolved partial is an error or empty output.
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from whisker.config.logging import get_logger
from whisker.constants import DEFAULT_PARTIAL_EXTENSION

if TYPE_CHECKING:
    from collections.abc import Mapping

    from whisker.config.logging import WhiskerLogger

logger: WhiskerLogger = get_logger(__name__)


@runtime_checkable
class TemplateLoader(Protocol):
    """Minimal interface for template source loaders."""

    def load(self, name: str) -> str | None:
        """Return the template source for ``name``, or ``None`` if unknown."""
        ...


class StringLoader:
    """Identity loader: the supplied name already is the template source."""

    def load(self, name: str) -> str | None:
        """Return ``name`` unchanged."""
        return name

    def __repr__(self) -> str:
        return "StringLoader()"


class DictLoader:
    """Loader backed by an in-memory name -> source mapping.

    The mapping is copied on construction and exposed read-only.
    """

    def __init__(self, templates: Mapping[str, str]) -> None:
        self._templates: Mapping[str, str] = MappingProxyType(dict(templates))

    @property
    def templates(self) -> Mapping[str, str]:
        """Read-only view of the known templates."""
        return self._templates

    def load(self, name: str) -> str | None:
        """Return the template registered under ``name`` or ``None``."""
        return self._templates.get(name)

    def __repr__(self) -> str:
        return f"DictLoader({sorted(self._templates)!r})"


class DirectoryLoader:
    """Loader reading ``<root>/<name><extension>`` files.

    Names resolving outside ``root`` are treated as unknown.

    Args:
        root (Path | str): Directory holding the template files.
        extension (str): File suffix appended to every name.
        encoding (str): Text encoding used to read files.
    """

    def __init__(
        self,
        root: Path | str,
        *,
        extension: str = DEFAULT_PARTIAL_EXTENSION,
        encoding: str = "utf-8",
    ) -> None:
        self.root: Path = Path(root).resolve()
        self.extension: str = extension
        self.encoding: str = encoding

    def _path_for(self, name: str) -> Path | None:
        candidate: Path = (self.root / f"{name}{self.extension}").resolve()
        if not candidate.is_relative_to(self.root):
            logger.warning("Template name %r escapes loader root %s", name, self.root)
            return None
        return candidate

    def load(self, name: str) -> str | None:
        """Read the template file for ``name``; ``None`` when it does not exist.

        Raises:
            OSError: If the file exists but cannot be read.
        """
        path: Path | None = self._path_for(name)
        if path is None or not path.is_file():
            logger.debug("No template file for %r under %s", name, self.root)
            return None
        return path.read_text(encoding=self.encoding)

    def __repr__(self) -> str:
        return f"DirectoryLoader({str(self.root)!r}, extension={self.extension!r})"


class CompositeLoader:
    """Chain of loaders; the first non-``None`` answer wins."""

    def __init__(self, *loaders: TemplateLoader) -> None:
        self._loaders: tuple[TemplateLoader, ...] = tuple(loaders)

    @property
    def loaders(self) -> tuple[TemplateLoader, ...]:
        """Loaders in consultation order."""
        return self._loaders

    def load(self, name: str) -> str | None:
        """Return the first template source found for ``name``."""
        for loader in self._loaders:
            source: str | None = loader.load(name)
            if source is not None:
                return source
        return None

    def __repr__(self) -> str:
        inner: str = ", ".join(repr(loader) for loader in self._loaders)
        return f"CompositeLoader({inner})"
