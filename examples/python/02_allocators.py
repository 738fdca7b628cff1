"""Allocators: track blocks, cap memory, and pick a growth policy.

This example shows:
- Counting allocations with TrackingAllocator
- Exact vs geometric growth
- Recovering from a refused allocation
"""

import sdbuf
from sdbuf import AllocationError, Buffer, BudgetAllocator, BufferConfig, TrackingAllocator

# Exact growth relocates on every append that does not fit
for growth in ("exact", "geometric"):
    tracker = TrackingAllocator()
    config = BufferConfig(allocator=tracker, growth=growth)

    buf = Buffer.make(b"", config=config)
    for _ in range(1000):
        buf = buf.append_bytes(b"x")
    buf.release()

    print(f"{growth:>9}: {tracker.allocs} allocations, peak {tracker.peak_bytes} bytes")

# A budget allocator refuses blocks past its limit
sdbuf.setup_logging("WARNING", format="human")
budget = BudgetAllocator(64)
buf = Buffer.make(b"fits", config=BufferConfig(allocator=budget))
try:
    buf = buf.append_bytes(b"y" * 100)
except AllocationError as e:
    print(f"\nRefused: {e.details['requested']} bytes ({e.code})")

# The original handle is still valid after the failure
print(f"Still usable: {bytes(buf)!r}")
buf.release()
print(f"Blocks in use: {budget.live_blocks}")
