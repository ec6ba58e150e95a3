# topmark:header:start
#
#   project      : Whisker
#   file         : introspection.py
#   file_relpath : src/whisker/utils/introspection.py
#   license      : MIT
#   copyright    : (c) 2025 Whisker Authors
#
# topmark:header:end

"""Introspection helpers for Whisker."""

from __future__ import annotations

from inspect import getmodule
from typing import Any


def format_callable_pretty(obj: Any) -> str:
    """Return a human-friendly ``module.qualname`` for any callable.

    Handles functions, bound methods, lambdas, callable instances, and
    partials. Falls back to the callable's class name when needed, and uses
    ``inspect.getmodule`` as a last resort to resolve the module name.

    Args:
        obj: The callable object to describe.

    Returns:
        A string like ``"package.module.QualifiedName"`` or ``"QualifiedName"``
        if the module cannot be resolved.
    """
    mod_name: str | None = getattr(obj, "__module__", None)
    call_name: str | None = getattr(obj, "__qualname__", None)

    if call_name is None:
        call_name = getattr(obj, "__name__", None)
    if call_name is None:
        call_name = type(obj).__name__

    if not mod_name:
        mod = getmodule(obj)
        if mod is not None and getattr(mod, "__name__", None):
            mod_name = mod.__name__

    return f"{mod_name}.{call_name}" if mod_name else call_name
