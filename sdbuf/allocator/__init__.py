"""
Block allocators.

Buffers obtain their single header+payload block from an allocator that only
needs to allocate and free. Stock allocators:

- `HeapAllocator` - default, zero-filled ``bytearray`` blocks
- `TrackingAllocator` - counts allocations, frees and bytes in use
- `BudgetAllocator` - refuses blocks past a fixed byte budget
"""

from .base import Allocator, HeapAllocator, default_allocator
from .tracking import BudgetAllocator, TrackingAllocator

__all__ = [
    "Allocator",
    "BudgetAllocator",
    "HeapAllocator",
    "TrackingAllocator",
    "default_allocator",
]
