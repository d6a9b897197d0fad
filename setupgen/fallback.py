"""Ordered fallback resolution for values with several optional sources."""

from __future__ import annotations

from typing import Optional, TypeVar

T = TypeVar("T")


def is_present(value: object) -> bool:
    """Return True when ``value`` should win a fallback chain.

    ``None`` and blank strings are treated as absent; every other value,
    including ``0`` and ``False``, is present.
    """
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


def first_present(*sources: Optional[T]) -> Optional[T]:
    """Return the first present value among ``sources`` in priority order."""
    for candidate in sources:
        if is_present(candidate):
            return candidate
    return None


__all__ = ["first_present", "is_present"]
