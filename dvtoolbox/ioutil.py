"""General-purpose I/O helpers."""

from __future__ import annotations

from typing import Callable, TypeVar

T = TypeVar("T")


def retry_if_interrupted(func: Callable[[], T]) -> T:
    """Call ``func`` until it finishes without raising :class:`InterruptedError`.

    Any other exception propagates unchanged.
    """
    while True:
        try:
            return func()
        except InterruptedError:
            continue