"""
Buffer - growable byte string in a single header-prefixed block.

Each buffer owns exactly one block obtained from its allocator::

    [Header: length, capacity][payload: capacity bytes][0x00]

Reading the block from the first payload byte up to the terminator gives an
ordinary NUL-terminated byte string, so the payload can be handed read-only to
anything that expects one (``ctypes.string_at(buf.address)``, a read-only
``memoryview``, hashing) without copying.

Ownership Contract:
- Every mutating operation returns the handle to keep using:
  ``buf = buf.append_bytes(b"...")``
- When an operation has to relocate, the handle it was called on is
  invalidated; any later use raises ``StateError`` (``BUFFER_RELOCATED``)
- When an operation fails with ``AllocationError`` the handle it was called
  on is untouched and still owned by the caller
- ``release()`` frees the block; a released handle cannot be used again
- Views (``view()``, ``cstring()``, ``address``) are read-only and only
  valid until the handle they came from is invalidated

Growth:
- ``reserve`` never asks the allocator to resize. It allocates a new block,
  copies header and payload, and frees the old block
- Under the default "exact" policy the new capacity is exactly what was
  asked for; "geometric" doubles instead (see ``BufferConfig``)
"""

from __future__ import annotations

import ctypes
import operator
from collections.abc import Iterator
from typing import Any

from .._logging import scoped_logger
from ..allocator import Allocator
from ..config import BufferConfig, default_config
from ..exceptions import AllocationError, StateError, ValidationError
from . import _layout
from ._layout import HEADER_SIZE, block_size

__all__ = ["Buffer", "release"]

log = scoped_logger("buffer")

_RELEASED = "released"
_RELOCATED = "relocated"


def _allocate(allocator: Allocator, size: int) -> bytearray:
    """Get a block from ``allocator`` or raise AllocationError."""
    block = allocator.allocate(size)
    if block is None:
        log.warning("Allocator refused block", extra={"scope": "alloc", "requested": size})
        raise AllocationError(
            f"Could not allocate a block of {size} bytes",
            details={"requested": size, "allocator": repr(allocator)},
        )
    return block


def _byte_view(data: Any) -> memoryview:
    """Flat unsigned-byte view over a bytes-like object or Buffer."""
    if isinstance(data, Buffer):
        return data.view()
    return memoryview(data).cast("B")


def _checked_length(length: Any, available: int | None = None, name: str = "length") -> int:
    length = operator.index(length)
    if length < 0:
        raise ValidationError(
            f"{name} must be >= 0, got {length}", details={name: length}
        )
    if available is not None and length > available:
        raise ValidationError(
            f"{name} {length} exceeds the {available} bytes available in the source",
            details={name: length, "available": available},
        )
    return length


def _cstring_length(source: Any) -> int:
    """Number of bytes before the first NUL in ``source`` (or all of it)."""
    data = source if isinstance(source, (bytes, bytearray)) else bytes(_byte_view(source))
    end = data.find(b"\x00")
    return len(data) if end < 0 else end


def _cut_set(cut_set: Any) -> frozenset[int]:
    if isinstance(cut_set, str):
        raise TypeError("cut_set must be bytes-like, not str")
    return frozenset(_byte_view(cut_set))


class Buffer:
    """
    Growable byte string backed by one header-prefixed block.

    Construct with ``Buffer.make()``, ``Buffer.make_length()`` or
    ``Buffer.from_cstring()``. Rebind to the return value of every mutating
    method.

    Example:
        >>> buf = Buffer.make(b"Hello")
        >>> buf = buf.append_buffer(Buffer.make(b", ", 2))
        >>> buf = buf.append_cstring(b"world!")
        >>> bytes(buf)
        b'Hello, world!'
        >>> len(buf), buf.capacity
        (13, 13)
        >>> buf.release()
    """

    __slots__ = ("_block", "_config", "_allocator", "_state", "_overlay", "__weakref__")

    def __init__(self, block: bytearray, config: BufferConfig, allocator: Allocator):
        # Adopts an already initialised block; use the constructors instead.
        self._block: bytearray | None = block
        self._config = config
        self._allocator = allocator
        self._state: str | None = None
        self._overlay: ctypes.Array | None = None

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def make(
        cls,
        data: Any = None,
        length: int | None = None,
        *,
        config: BufferConfig | None = None,
    ) -> Buffer:
        """
        Create a buffer holding ``length`` bytes copied from ``data``.

        Args:
            data: Bytes-like object or Buffer to copy from. When None the
                payload is zero-filled.
            length: Number of bytes to take from ``data``. Defaults to all of
                it (or 0 when ``data`` is None).
            config: Allocation config. Defaults to ``default_config()``.

        Returns
        -------
            A new buffer with ``capacity == length``.

        Raises
        ------
            ValidationError: If ``length`` is negative or longer than ``data``.
            AllocationError: If the allocator refuses the block.
        """
        config = config if config is not None else default_config()
        if data is None:
            source = None
            length = _checked_length(0 if length is None else length)
        else:
            source = _byte_view(data)
            length = len(source) if length is None else _checked_length(length, len(source))

        allocator = config.resolve_allocator()
        block = _allocate(allocator, block_size(length))
        _layout.write_header(block, length, length)
        start = HEADER_SIZE
        if source is None:
            block[start : start + length + 1] = bytes(length + 1)
        else:
            block[start : start + length] = source[:length]
            block[start + length] = 0
        return cls(block, config, allocator)

    @classmethod
    def make_length(cls, length: int, *, config: BufferConfig | None = None) -> Buffer:
        """Create a zero-filled buffer of ``length`` bytes."""
        return cls.make(None, length, config=config)

    @classmethod
    def from_cstring(cls, source: Any, *, config: BufferConfig | None = None) -> Buffer:
        """Create a buffer from ``source`` up to (not including) its first NUL byte."""
        return cls.make(source, _cstring_length(source), config=config)

    def duplicate(self) -> Buffer:
        """Independent copy of the payload with ``capacity == length``."""
        return Buffer.make(self.view(), config=self._config)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def _live_block(self) -> bytearray:
        block = self._block
        if block is None:
            if self._state == _RELOCATED:
                raise StateError(
                    "Buffer was relocated; use the handle returned by the operation",
                    code="BUFFER_RELOCATED",
                )
            raise StateError("Buffer was released", code="BUFFER_RELEASED")
        return block

    def _detach(self, state: str) -> bytearray:
        block = self._live_block()
        self._block = None
        self._overlay = None
        self._state = state
        return block

    @property
    def released(self) -> bool:
        """True once the handle no longer owns a block (released or relocated)."""
        return self._block is None

    @property
    def config(self) -> BufferConfig:
        return self._config

    def release(self) -> None:
        """
        Free the block and invalidate this handle.

        Releasing an already released handle does nothing. Releasing a handle
        that was relocated raises StateError, since the block now belongs to
        the handle the relocating operation returned.
        """
        if self._state == _RELEASED:
            return
        block = self._detach(_RELEASED)
        log.debug("Releasing buffer", extra={"block": len(block)})
        self._allocator.free(block)

    # =========================================================================
    # Introspection
    # =========================================================================

    @property
    def length(self) -> int:
        """Number of payload bytes, excluding the terminator."""
        return _layout.read_length(self._live_block())

    @property
    def capacity(self) -> int:
        """Payload bytes the current block can hold without relocating."""
        return _layout.read_capacity(self._live_block())

    @property
    def available(self) -> int:
        """Free payload bytes (``capacity - length``, never negative)."""
        block = self._live_block()
        return max(_layout.read_capacity(block) - _layout.read_length(block), 0)

    @property
    def allocation_size(self) -> int:
        """Size of the whole block: header, capacity and terminator."""
        return block_size(self.capacity)

    def __len__(self) -> int:
        return self.length

    # =========================================================================
    # Growth
    # =========================================================================

    def reserve(self, additional: int) -> Buffer:
        """
        Make room for ``additional`` more payload bytes.

        Returns self when the room already exists. Otherwise the buffer is
        moved to a new block, this handle is invalidated and the new handle
        is returned. ``length`` is unchanged either way.

        Raises
        ------
            ValidationError: If ``additional`` is negative.
            AllocationError: If the allocator refuses the new block. This
                handle stays valid in that case.
        """
        additional = operator.index(additional)
        if additional < 0:
            raise ValidationError(
                f"additional must be >= 0, got {additional}",
                details={"additional": additional},
            )
        block = self._live_block()
        length = _layout.read_length(block)
        capacity = _layout.read_capacity(block)
        if capacity - length >= additional:
            return self

        needed = length + additional
        if self._config.growth == "geometric":
            new_capacity = max(needed, 2 * capacity)
        else:
            new_capacity = needed

        old_size = block_size(length)
        new_size = block_size(new_capacity)
        new_block = _allocate(self._allocator, new_size)
        new_block[:old_size] = block[:old_size]
        _layout.write_capacity(new_block, new_capacity)

        log.debug(
            "Relocating buffer",
            extra={"old_block": len(block), "new_block": new_size, "length": length},
        )
        self._detach(_RELOCATED)
        self._allocator.free(block)
        return Buffer(new_block, self._config, self._allocator)

    # =========================================================================
    # Mutation
    # =========================================================================

    def clear(self) -> Buffer:
        """Set the length to 0. Capacity and block are kept."""
        block = self._live_block()
        _layout.write_length(block, 0)
        block[HEADER_SIZE] = 0
        return self

    def append_bytes(self, data: Any, length: int | None = None) -> Buffer:
        """
        Append ``length`` bytes of ``data`` (all of it by default).

        Returns the handle to keep using; see ``reserve`` for relocation and
        failure behavior.
        """
        self._live_block()
        source = _byte_view(data)
        count = len(source) if length is None else _checked_length(length, len(source))
        if isinstance(data, Buffer):
            # data may be this very buffer, whose block is freed on relocation
            source = bytes(source[:count])

        buf = self.reserve(count)
        block = buf._block
        start = HEADER_SIZE + _layout.read_length(block)
        block[start : start + count] = source[:count]
        block[start + count] = 0
        _layout.write_length(block, start - HEADER_SIZE + count)
        return buf

    def append_buffer(self, other: Buffer) -> Buffer:
        """Append the payload of another buffer (which may be this one)."""
        if not isinstance(other, Buffer):
            raise TypeError(f"expected Buffer, got {type(other).__name__}")
        return self.append_bytes(other)

    def append_cstring(self, source: Any) -> Buffer:
        """Append ``source`` up to (not including) its first NUL byte."""
        return self.append_bytes(source, _cstring_length(source))

    def assign(self, data: Any, length: int | None = None) -> Buffer:
        """
        Replace the payload with ``length`` bytes of ``data``.

        Grows by exactly the shortfall when the capacity is too small; never
        shrinks the capacity.
        """
        block = self._live_block()
        source = _byte_view(data)
        count = len(source) if length is None else _checked_length(length, len(source))
        if isinstance(data, Buffer):
            source = bytes(source[:count])

        buf = self
        if _layout.read_capacity(block) < count:
            buf = self.reserve(count - _layout.read_length(block))
            block = buf._block
        block[HEADER_SIZE : HEADER_SIZE + count] = source[:count]
        block[HEADER_SIZE + count] = 0
        _layout.write_length(block, count)
        return buf

    def assign_cstring(self, source: Any) -> Buffer:
        """Replace the payload with ``source`` up to its first NUL byte."""
        return self.assign(source, _cstring_length(source))

    def trim(self, cut_set: Any) -> Buffer:
        """
        Strip bytes found in ``cut_set`` from both ends of the payload.

        Example:
            >>> buf = Buffer.make(b"Ab.;!...AHello World       ??")
            >>> bytes(buf.trim(b"Ab.;!. ?"))
            b'Hello World'
        """
        cut = _cut_set(cut_set)
        block = self._live_block()
        length = _layout.read_length(block)

        start = HEADER_SIZE
        end = HEADER_SIZE + length - 1
        while start <= end and block[start] in cut:
            start += 1
        while end > start and block[end] in cut:
            end -= 1
        count = 0 if start > end else end - start + 1

        if start != HEADER_SIZE:
            # RHS slice is copied before assignment, so overlap is safe
            block[HEADER_SIZE : HEADER_SIZE + count] = block[start : start + count]
        block[HEADER_SIZE + count] = 0
        _layout.write_length(block, count)
        return self

    # =========================================================================
    # Comparison
    # =========================================================================

    def equals(self, other: Buffer) -> bool:
        """Byte-exact payload comparison with another buffer."""
        if not isinstance(other, Buffer):
            raise TypeError(f"expected Buffer, got {type(other).__name__}")
        if self.length != other.length:
            return False
        return self.view() == other.view()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Buffer):
            return self.equals(other)
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self.to_bytes() == bytes(other)
        return NotImplemented

    # Mutable container
    __hash__ = None  # type: ignore[assignment]

    # =========================================================================
    # Read-only access
    # =========================================================================

    def view(self) -> memoryview:
        """Read-only view of the payload (terminator excluded)."""
        block = self._live_block()
        length = _layout.read_length(block)
        return memoryview(block)[HEADER_SIZE : HEADER_SIZE + length].toreadonly()

    def cstring(self) -> memoryview:
        """Read-only view of the payload followed by its NUL terminator."""
        block = self._live_block()
        length = _layout.read_length(block)
        return memoryview(block)[HEADER_SIZE : HEADER_SIZE + length + 1].toreadonly()

    @property
    def address(self) -> int:
        """
        Address of the first payload byte, for read-only C interop.

        ``ctypes.string_at(buf.address)`` reads the payload as a
        NUL-terminated string. Writing through the address is not supported.
        """
        block = self._live_block()
        if self._overlay is None:
            self._overlay = (ctypes.c_char * len(block)).from_buffer(block)
        return ctypes.addressof(self._overlay) + HEADER_SIZE

    def to_bytes(self) -> bytes:
        """Copy of the payload."""
        return bytes(self.view())

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __getitem__(self, key: int | slice) -> int | bytes:
        if isinstance(key, slice):
            return self.to_bytes()[key]
        return self.view()[key]

    def __iter__(self) -> Iterator[int]:
        return iter(self.to_bytes())

    def __repr__(self) -> str:
        if self._block is None:
            return f"Buffer(<{self._state}>)"
        return f"Buffer({self.to_bytes()!r}, length={self.length}, capacity={self.capacity})"


def release(buf: Buffer | None) -> None:
    """Release ``buf``; does nothing for None."""
    if buf is None:
        return
    buf.release()
