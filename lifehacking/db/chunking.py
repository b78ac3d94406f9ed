"""Splitting helpers for store operations with hard size limits."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import TypeVar

T = TypeVar("T")


def chunked(items: Iterable[T], size: int) -> Iterator[list[T]]:
    """Yield consecutive groups of at most ``size`` items, preserving order.

    Empty input yields nothing, so callers issue no store call at all.
    """

    if size < 1:
        raise ValueError("Chunk size must be a positive integer")

    chunk: list[T] = []
    for item in items:
        chunk.append(item)
        if len(chunk) == size:
            yield chunk
            chunk = []
    if chunk:
        yield chunk


def unique_in_order(items: Iterable[T]) -> list[T]:
    """Return ``items`` without repeats, keeping the first occurrence of each."""

    return list(dict.fromkeys(items))


__all__ = ["chunked", "unique_in_order"]
