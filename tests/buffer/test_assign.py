"""
Overwrite and clear tests.

Tests for assign(), assign_cstring() and clear().
"""

import pytest

from sdbuf import ValidationError


class TestAssign:
    """Tests for assign()."""

    def test_replaces_payload(self, make):
        """Assigning replaces the content."""
        buf = make(b"Hello").assign(b"Potato soup")

        assert bytes(buf) == b"Potato soup"
        assert buf.length == 11

    def test_grows_by_exact_shortfall(self, make):
        """Growth lands capacity exactly on the new length."""
        buf = make(b"Hello").assign(b"Potato soup")

        assert buf.capacity == 11

    def test_shorter_keeps_capacity(self, make, tracker):
        """A shorter assign keeps the block and never shrinks."""
        buf = make(b"Potato soup")

        same = buf.assign(b"Hello")

        assert same is buf
        assert bytes(same) == b"Hello"
        assert same.capacity == 11
        assert tracker.allocs == 1

    def test_shorter_writes_terminator(self, make):
        """Stale bytes after the new length are cut off by the terminator."""
        buf = make(b"Potato soup").assign(b"Hello")

        assert bytes(buf.cstring()) == b"Hello\x00"

    def test_fits_in_existing_slack(self, make, tracker):
        """No relocation while the new content fits in capacity."""
        buf = make(b"Potato soup").assign(b"Hi")

        buf = buf.assign(b"Hello world")

        assert bytes(buf) == b"Hello world"
        assert tracker.allocs == 1

    def test_empty(self, make):
        """Assigning nothing empties the buffer."""
        buf = make(b"Hello").assign(b"")

        assert buf.length == 0
        assert buf.capacity == 5

    def test_from_self(self, make):
        """A buffer can be assigned its own content."""
        buf = make(b"abc")

        assert bytes(buf.assign(buf)) == b"abc"

    def test_explicit_length(self, make):
        """length picks a prefix of the source."""
        buf = make(b"Hello").assign(b"abcdef", 3)

        assert bytes(buf) == b"abc"

    def test_negative_length_rejected(self, make):
        """Negative lengths raise ValidationError."""
        with pytest.raises(ValidationError):
            make(b"Hello").assign(b"abc", -2)


class TestAssignCString:
    """Tests for assign_cstring()."""

    def test_stops_at_nul(self, make):
        """Only bytes before the first NUL are used."""
        buf = make(b"Hello").assign_cstring(b"Pizza\x00extra")

        assert bytes(buf) == b"Pizza"


class TestClear:
    """Tests for clear()."""

    def test_empties_and_keeps_capacity(self, make):
        """length drops to 0, capacity stays, terminator at 0."""
        buf = make(b"Hello, world!")
        capacity = buf.capacity

        buf = buf.clear()

        assert buf.length == 0
        assert buf.capacity == capacity
        assert buf.cstring()[0] == 0

    def test_same_handle(self, make, tracker):
        """clear() never relocates."""
        buf = make(b"Hello")

        assert buf.clear() is buf
        assert tracker.allocs == 1

    def test_available_after_clear(self, make):
        """All capacity becomes available."""
        buf = make(b"Hello").clear()

        assert buf.available == 5
