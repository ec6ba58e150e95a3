# topmark:header:start
#
#   project      : Whisker
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Pytest configuration for the Whisker test suite.

Notes:
    Tests should respect the immutable/mutable settings split: build settings
    with `whisker.config.MutableRegistrySettings`, then `freeze()` them before
    passing them to `whisker.registry.Registry.from_settings`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from whisker.registry import Registry

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """Undo `setup_logging()` side effects (CLI tests reconfigure the root logger)."""
    root = logging.getLogger()
    level: int = root.level
    handlers: list[logging.Handler] = root.handlers[:]
    try:
        yield
    finally:
        root.setLevel(level)
        for handler in root.handlers[:]:
            if handler not in handlers:
                root.removeHandler(handler)
        for handler in handlers:
            if handler not in root.handlers:
                root.addHandler(handler)


@pytest.fixture()
def default_registry() -> Registry:
    """Return a registry built from the built-in defaults only."""
    return Registry.from_settings()
