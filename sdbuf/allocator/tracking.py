"""
Accounting allocators.

``TrackingAllocator`` wraps another allocator and keeps allocation and free
counts plus byte totals, which makes leaks and double frees visible.
``BudgetAllocator`` refuses blocks past a fixed byte budget, modelling an
arena of limited size.
"""

from __future__ import annotations

from .._logging import scoped_logger
from ..exceptions import StateError, ValidationError
from .base import Allocator, default_allocator

__all__ = ["TrackingAllocator", "BudgetAllocator"]

log = scoped_logger("alloc")


class TrackingAllocator:
    """
    Allocator wrapper that records every allocation and free.

    Args:
        inner: Allocator that actually provides blocks. Defaults to the
            process-wide heap allocator.

    Attributes
    ----------
    allocs : int
        Number of successful allocations.
    frees : int
        Number of frees.
    failures : int
        Number of allocations the inner allocator refused.
    bytes_in_use : int
        Total size of blocks handed out and not yet freed.
    peak_bytes : int
        Highest value ``bytes_in_use`` has reached.

    Example:
        >>> tracker = TrackingAllocator()
        >>> buf = Buffer.make(b"hi", config=BufferConfig(allocator=tracker))
        >>> tracker.bytes_in_use
        19
        >>> buf.release()
        >>> tracker.balance
        0
    """

    def __init__(self, inner: Allocator | None = None):
        self._inner = inner if inner is not None else default_allocator()
        # id(block) -> block, keeps ids stable while the block is live
        self._live: dict[int, bytearray] = {}
        self.allocs = 0
        self.frees = 0
        self.failures = 0
        self.bytes_in_use = 0
        self.peak_bytes = 0

    @property
    def balance(self) -> int:
        """Positive = leaked blocks, zero = every block returned."""
        return self.allocs - self.frees

    @property
    def live_blocks(self) -> int:
        """Number of blocks currently handed out."""
        return len(self._live)

    def owns(self, block: bytearray) -> bool:
        """Whether ``block`` was handed out by this allocator and is still live."""
        return self._live.get(id(block)) is block

    def allocate(self, size: int) -> bytearray | None:
        block = self._inner.allocate(size)
        if block is None:
            self.failures += 1
            return None
        self._live[id(block)] = block
        self.allocs += 1
        self.bytes_in_use += len(block)
        self.peak_bytes = max(self.peak_bytes, self.bytes_in_use)
        return block

    def free(self, block: bytearray) -> None:
        if not self.owns(block):
            log.error("Free of unknown block", extra={"size": len(block)})
            raise StateError(
                "Block was not allocated here or was already freed",
                code="FOREIGN_FREE",
                details={"size": len(block)},
            )
        del self._live[id(block)]
        self.frees += 1
        self.bytes_in_use -= len(block)
        self._inner.free(block)

    def __repr__(self) -> str:
        return (
            f"TrackingAllocator(allocs={self.allocs}, frees={self.frees}, "
            f"bytes_in_use={self.bytes_in_use})"
        )


class BudgetAllocator(TrackingAllocator):
    """
    Tracking allocator that refuses to exceed a byte budget.

    An allocation that would push ``bytes_in_use`` past ``limit`` returns
    ``None`` without touching the inner allocator, exactly like an arena
    that has run out of room.

    Args:
        limit: Maximum number of bytes that may be in use at once.
        inner: Allocator that actually provides blocks.
    """

    def __init__(self, limit: int, inner: Allocator | None = None):
        if limit < 0:
            raise ValidationError(
                f"limit must be >= 0, got {limit}", details={"limit": limit}
            )
        super().__init__(inner)
        self.limit = limit

    @property
    def remaining(self) -> int:
        """Bytes that can still be allocated."""
        return self.limit - self.bytes_in_use

    def allocate(self, size: int) -> bytearray | None:
        if size > self.remaining:
            self.failures += 1
            log.warning(
                "Budget exhausted",
                extra={"requested": size, "remaining": self.remaining},
            )
            return None
        return super().allocate(size)

    def __repr__(self) -> str:
        return f"BudgetAllocator(limit={self.limit}, bytes_in_use={self.bytes_in_use})"
