"""
Tests for the error hierarchy.

Tests that:
1. All error types are accessible and properly categorized
2. Error codes and details are set
3. Builtin base classes allow Pythonic handling
"""

import pytest


class TestErrorTypes:
    """Tests for error type hierarchy and accessibility."""

    def test_base_error_importable(self):
        """SdbufError is importable from sdbuf."""
        import sdbuf

        assert hasattr(sdbuf, "SdbufError")
        assert issubclass(sdbuf.SdbufError, Exception)

    def test_errors_importable(self):
        """Errors are importable from sdbuf.exceptions."""
        from sdbuf.exceptions import (
            AllocationError,
            SdbufError,
            StateError,
            ValidationError,
        )

        assert issubclass(AllocationError, SdbufError)
        assert issubclass(StateError, SdbufError)
        assert issubclass(ValidationError, SdbufError)

    def test_error_inheritance_chain(self):
        """Error classes have builtin bases for generic handling."""
        from sdbuf.exceptions import AllocationError, StateError, ValidationError

        assert issubclass(AllocationError, MemoryError)
        assert issubclass(StateError, RuntimeError)
        assert issubclass(ValidationError, ValueError)


class TestErrorAttributes:
    """Tests for code, details and original_code."""

    def test_default_codes(self):
        """Each error has a stable default code."""
        from sdbuf.exceptions import AllocationError, StateError, ValidationError

        assert AllocationError("x").code == "ALLOCATION_FAILED"
        assert StateError("x").code == "STATE_ERROR"
        assert ValidationError("x").code == "INVALID_ARGUMENT"

    def test_original_codes(self):
        """Numeric family codes are filled in."""
        from sdbuf.exceptions import AllocationError, StateError, ValidationError

        assert AllocationError("x").original_code == 100
        assert StateError("x").original_code == 200
        assert ValidationError("x").original_code == 900

    def test_details_default_empty(self):
        """details is an empty dict when not given."""
        from sdbuf.exceptions import SdbufError

        assert SdbufError("x").details == {}

    def test_repr(self):
        """repr shows message and code."""
        from sdbuf.exceptions import StateError

        err = StateError("gone", code="BUFFER_RELEASED")

        assert repr(err) == "StateError('gone', code='BUFFER_RELEASED')"


class TestRaisedErrors:
    """Errors raised by buffer operations."""

    def test_validation_catchable_as_value_error(self):
        """Bad lengths can be caught as ValueError."""
        from sdbuf import Buffer

        with pytest.raises(ValueError):
            Buffer.make(b"abc", 5)

    def test_catch_all(self):
        """SdbufError catches every library error."""
        import sdbuf

        buf = sdbuf.Buffer.make(b"abc")
        buf.release()

        with pytest.raises(sdbuf.SdbufError):
            buf.length
