"""Validation and identity rules for types and handlers."""

from __future__ import annotations

from collections.abc import Callable
from types import BuiltinMethodType, MethodType
from typing import Any


def is_valid_type(event_type: Any) -> bool:
    """A type key is any non-empty ``str``. No trimming is applied."""
    return isinstance(event_type, str) and event_type != ""


def is_valid_handler(handler: Any) -> bool:
    return callable(handler)


def same_handler(a: Callable, b: Callable) -> bool:
    """Return True if *a* and *b* are the same handler reference.

    Bound methods are rebuilt on every attribute access, so two of them are
    the same handler when they bind the same function to the same object.
    Everything else compares by identity, never by ``__eq__``.
    """
    if a is b:
        return True
    if isinstance(a, MethodType) and isinstance(b, MethodType):
        return a.__self__ is b.__self__ and a.__func__ is b.__func__
    if isinstance(a, BuiltinMethodType) and isinstance(b, BuiltinMethodType):
        # e.g. ``some_list.append``
        return a.__self__ is b.__self__ and a.__name__ == b.__name__
    return False


def index_of(handlers: list[Callable], handler: Callable) -> int:
    """Position of *handler* in *handlers*, or -1."""
    for i, candidate in enumerate(handlers):
        if same_handler(candidate, handler):
            return i
    return -1
