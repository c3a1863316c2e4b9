"""Pure math utilities - no external dependencies."""

from __future__ import annotations


def clamp(v: float, a: float, b: float) -> float:
    """Clamp value v to range [a, b]."""
    return a if v < a else b if v > b else v


def wrap_index(index: int, step: int, length: int) -> int:
    """Move index by step inside a cyclic sequence of the given length.

    Lengths of 0 and 1 have nowhere to go, so the index comes back unchanged.
    """
    if length <= 1:
        return index
    return (index + step) % length
