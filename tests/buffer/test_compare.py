"""
Equality tests.

Tests for equals() and the == operator.
"""

import pytest

from tests.conftest import SAMPLE_PAYLOADS


class TestEquals:
    """Tests for equals()."""

    def test_different_content(self, make):
        """Hello and Pizza differ."""
        assert not make(b"Hello").equals(make(b"Pizza"))

    def test_duplicate_equal(self, make):
        """A buffer equals its duplicate."""
        buf = make(b"Hello")

        assert buf.equals(buf.duplicate())

    def test_length_mismatch(self, make):
        """Prefixes are not equal."""
        assert not make(b"Hell").equals(make(b"Hello"))

    def test_capacity_ignored(self, make):
        """Equal payloads compare equal regardless of capacity."""
        roomy = make(b"Hello, world!").assign(b"Hello")

        assert roomy.equals(make(b"Hello"))

    def test_byte_exact(self, make):
        """No case folding or normalization."""
        assert not make(b"hello").equals(make(b"Hello"))

    def test_embedded_nul_compared(self, make):
        """Bytes after an embedded NUL still count."""
        assert not make(b"a\x00b").equals(make(b"a\x00c"))

    def test_rejects_non_buffer(self, make):
        """equals() only compares buffers."""
        with pytest.raises(TypeError):
            make(b"a").equals(b"a")

    @pytest.mark.parametrize("payload", SAMPLE_PAYLOADS)
    def test_reflexive(self, make, payload):
        """equals(x, x) is always true."""
        buf = make(payload)

        assert buf.equals(buf)

    @pytest.mark.parametrize("left", SAMPLE_PAYLOADS[:4])
    @pytest.mark.parametrize("right", SAMPLE_PAYLOADS[:4])
    def test_symmetric(self, make, left, right):
        """equals(x, y) == equals(y, x)."""
        x, y = make(left), make(right)

        assert x.equals(y) == y.equals(x)


class TestEqualityOperator:
    """Tests for ==."""

    def test_buffers(self, make):
        """== between buffers delegates to equals()."""
        assert make(b"abc") == make(b"abc")
        assert make(b"abc") != make(b"abd")

    def test_bytes_like(self, make):
        """Buffers compare against bytes, bytearray and memoryview."""
        buf = make(b"abc")

        assert buf == b"abc"
        assert buf == bytearray(b"abc")
        assert buf == memoryview(b"abc")
        assert buf != b"abcd"

    def test_other_types(self, make):
        """Unrelated types are never equal."""
        assert make(b"abc") != "abc"
        assert make(b"") != 0

    def test_unhashable(self, make):
        """Buffers are mutable and cannot be hashed."""
        with pytest.raises(TypeError):
            hash(make(b"abc"))
