"""
sdbuf - growable byte strings in a single header-prefixed block.

Each buffer is one allocation laid out as ``[header][payload][0x00]``. The
header keeps ``length`` and ``capacity`` so both are O(1), and the trailing
NUL keeps the payload readable as a plain C string.

Quick Start
-----------

    >>> from sdbuf import Buffer
    >>>
    >>> buf = Buffer.make(b"Hello")
    >>> buf = buf.append_buffer(Buffer.make(b", ", 2))
    >>> buf = buf.append_cstring(b"world!")
    >>> bytes(buf)
    b'Hello, world!'
    >>> buf.release()

Always rebind to the returned handle. An operation that has to grow the
buffer moves it to a new block and invalidates the handle it was called on:

    >>> old = Buffer.make(b"abc")
    >>> new = old.append_bytes(b"def")
    >>> old.length
    Traceback (most recent call last):
    ...
    sdbuf.exceptions.exceptions.StateError: Buffer was relocated; use the handle returned by the operation


Allocation
----------

Blocks come from an allocator that only needs ``allocate(size)`` and
``free(block)``; growth is allocate + copy + free, never resize-in-place.

    >>> from sdbuf import BufferConfig, TrackingAllocator
    >>>
    >>> tracker = TrackingAllocator()
    >>> config = BufferConfig(allocator=tracker, growth="geometric")
    >>> buf = Buffer.make(b"", config=config)

When an allocator refuses a block, ``AllocationError`` is raised and the
handle the operation was called on stays valid.


Core Classes
------------

- `Buffer` - the buffer handle
- `BufferConfig` - allocator and growth policy
- `HeapAllocator`, `TrackingAllocator`, `BudgetAllocator` - stock allocators
- `SdbufError` and subclasses - error hierarchy
"""

from . import exceptions
from ._logging import setup_logging
from .allocator import (
    Allocator,
    BudgetAllocator,
    HeapAllocator,
    TrackingAllocator,
    default_allocator,
)
from .buffer import HEADER_SIZE, Buffer, release
from .config import BufferConfig, GrowthPolicy, default_config
from .exceptions import (
    AllocationError,
    SdbufError,
    StateError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    # Buffer
    "Buffer",
    "HEADER_SIZE",
    "release",
    # Configuration
    "BufferConfig",
    "GrowthPolicy",
    "default_config",
    # Allocators
    "Allocator",
    "BudgetAllocator",
    "HeapAllocator",
    "TrackingAllocator",
    "default_allocator",
    # Errors
    "exceptions",
    "SdbufError",
    "AllocationError",
    "StateError",
    "ValidationError",
    # Logging
    "setup_logging",
]
