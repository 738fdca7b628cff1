"""
Global pytest fixtures for sdbuf tests.

This module provides:
- Fault handling for crashes in ctypes interop tests
- Tracking/budget allocators for ownership and leak checks
- Buffer factories bound to a tracked config

=============================================================================
Allocation Accounting
=============================================================================

Every buffer made through the ``make`` fixture draws its blocks from the
test's ``tracker``. Tests that release everything they create can finish with
``tracker.balance == 0`` to prove no block leaked and none was freed twice.
"""

import faulthandler

import pytest

from sdbuf import Buffer, BudgetAllocator, BufferConfig, TrackingAllocator

# Trace native crashes (ctypes reads through buffer addresses)
faulthandler.enable()


# Payloads shared by property-style tests
SAMPLE_PAYLOADS = [
    b"",
    b"a",
    b"Hello",
    b"Hello, world!",
    b"  padded  ",
    b"\x00embedded\x00nul",
    bytes(range(256)),
    b"x" * 1000,
]


@pytest.fixture(autouse=True)
def _default_growth(monkeypatch):
    """Keep the environment from changing the default growth policy."""
    monkeypatch.delenv("SDBUF_GROWTH", raising=False)


@pytest.fixture
def tracker():
    """Fresh tracking allocator."""
    return TrackingAllocator()


@pytest.fixture
def config(tracker):
    """Exact-growth config drawing from ``tracker``."""
    return BufferConfig(allocator=tracker)


@pytest.fixture
def geometric_config(tracker):
    """Geometric-growth config drawing from ``tracker``."""
    return BufferConfig(allocator=tracker, growth="geometric")


@pytest.fixture
def make(config):
    """Factory: ``make(data=None, length=None)`` with the tracked config."""

    def _make(data=None, length=None):
        return Buffer.make(data, length, config=config)

    return _make


@pytest.fixture
def budget():
    """Factory: ``budget(limit)`` returns a config over a BudgetAllocator."""

    def _budget(limit):
        allocator = BudgetAllocator(limit)
        return allocator, BufferConfig(allocator=allocator)

    return _budget


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line("markers", "memory: marks memory/leak detection tests")
