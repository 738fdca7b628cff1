"""
Allocator interface and the default heap allocator.

An allocator hands out fixed-size, zero-filled ``bytearray`` blocks and takes
them back. There is deliberately no resize operation: buffers grow by
allocating a larger block, copying, and freeing the old one, so any object
that can allocate and free can back a buffer.

Failure Contract:
- ``allocate`` returns ``None`` when it cannot provide a block; it never
  raises for an out-of-memory condition
- ``free`` is only ever called with a block the same allocator returned
- Blocks are never resized by their users
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..exceptions import ValidationError

__all__ = ["Allocator", "HeapAllocator", "default_allocator"]


@runtime_checkable
class Allocator(Protocol):  # pragma: no cover
    """
    Protocol for block allocators.

    Any object providing ``allocate`` and ``free`` with these signatures can
    back a buffer.
    """

    def allocate(self, size: int) -> bytearray | None:
        """Return a zero-filled block of exactly ``size`` bytes, or None."""

    def free(self, block: bytearray) -> None:
        """Take back a block previously returned by ``allocate``."""


class HeapAllocator:
    """
    Allocator backed by the Python heap.

    Blocks are plain ``bytearray`` objects. ``free`` drops the allocator's
    interest in the block; the memory is reclaimed by the interpreter once
    the last reference disappears.
    """

    def allocate(self, size: int) -> bytearray | None:
        if size < 0:
            raise ValidationError(
                f"block size must be >= 0, got {size}", details={"size": size}
            )
        try:
            return bytearray(size)
        except MemoryError:
            return None

    def free(self, block: bytearray) -> None:
        return None

    def __repr__(self) -> str:
        return "HeapAllocator()"


_DEFAULT_ALLOCATOR = HeapAllocator()


def default_allocator() -> HeapAllocator:
    """Return the process-wide default allocator."""
    return _DEFAULT_ALLOCATOR
