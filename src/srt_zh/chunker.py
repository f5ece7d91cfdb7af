"""Split subtitle sequences into fixed-size chunks."""

from __future__ import annotations

from typing import List, Sequence, TypeVar

T = TypeVar("T")


def split_chunks(items: Sequence[T], size: int) -> List[List[T]]:
    """
    Partition items into contiguous chunks of at most ``size`` elements.

    The last chunk may be shorter. Concatenating the result gives back
    the input in its original order.
    """
    if size < 1:
        raise ValueError(f"Chunk size must be >= 1, got {size}")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def chunk_starts(total: int, size: int) -> List[int]:
    """0-based start offsets of the chunks produced by ``split_chunks``."""
    if size < 1:
        raise ValueError(f"Chunk size must be >= 1, got {size}")
    return list(range(0, total, size))
