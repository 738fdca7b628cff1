"""Build strings: create, append, trim, and compare buffers.

This example shows:
- Building a string from pieces, rebinding after every growth
- Trimming a cut set from both ends
- Comparing buffers and reading them from C
"""

import ctypes

from sdbuf import Buffer

buf = Buffer.make(b"Hello")
buf = buf.append_buffer(Buffer.make(b", ", 2))
buf = buf.append_cstring(b"world!")
print(f"Payload:  {bytes(buf)!r}")
print(f"Length:   {buf.length}")
print(f"Capacity: {buf.capacity}")
print(f"Block:    {buf.allocation_size} bytes")

# The payload is NUL-terminated, so C sees the same string
print(f"From C:   {ctypes.string_at(buf.address)!r}")

# Trim removes any byte of the cut set from both ends
padded = Buffer.make(b"-_-Hello, world!-_-")
padded = padded.trim(b"-_")
print(f"\nTrimmed:  {bytes(padded)!r}")
print(f"Equal:    {padded == buf}")

# Reuse the block: assign overwrites, clear keeps capacity
padded = padded.assign(b"short")
print(f"\nAssigned: {bytes(padded)!r} (capacity {padded.capacity})")
padded = padded.clear()
print(f"Cleared:  {bytes(padded)!r} (capacity {padded.capacity})")

for b in (buf, padded):
    b.release()
