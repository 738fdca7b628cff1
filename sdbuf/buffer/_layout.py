"""
Block layout helpers.

A buffer block is laid out as::

    +--------+-----------------------------+------------+
    | Header | payload (capacity bytes)    | terminator |
    +--------+-----------------------------+------------+
             |
             +-> HEADER_SIZE, first payload byte

The header is two little-endian unsigned 64-bit integers: ``length`` then
``capacity``. The terminator slot after the last payload byte is always
``0x00`` once an operation has completed.
"""

import struct

__all__ = [
    "HEADER",
    "HEADER_SIZE",
    "block_size",
    "read_capacity",
    "read_length",
    "write_capacity",
    "write_header",
    "write_length",
]

HEADER = struct.Struct("<QQ")
HEADER_SIZE = HEADER.size

_FIELD = struct.Struct("<Q")
_LENGTH_OFFSET = 0
_CAPACITY_OFFSET = _FIELD.size


def block_size(capacity: int) -> int:
    """Bytes needed for a block holding ``capacity`` payload bytes."""
    return HEADER_SIZE + capacity + 1


def read_length(block: bytearray) -> int:
    return _FIELD.unpack_from(block, _LENGTH_OFFSET)[0]


def read_capacity(block: bytearray) -> int:
    return _FIELD.unpack_from(block, _CAPACITY_OFFSET)[0]


def write_length(block: bytearray, length: int) -> None:
    _FIELD.pack_into(block, _LENGTH_OFFSET, length)


def write_capacity(block: bytearray, capacity: int) -> None:
    _FIELD.pack_into(block, _CAPACITY_OFFSET, capacity)


def write_header(block: bytearray, length: int, capacity: int) -> None:
    HEADER.pack_into(block, 0, length, capacity)
