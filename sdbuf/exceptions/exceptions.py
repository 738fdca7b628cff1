"""
sdbuf exceptions.

This module defines the exception hierarchy for sdbuf:

    SdbufError (base)
    ├── AllocationError - Allocator refused to hand out a block
    ├── StateError - Released or relocated buffer handle used
    └── ValidationError - Invalid parameter value

Usage:
    try:
        buf = buf.append_bytes(payload)
    except sdbuf.AllocationError:
        # buf is still the valid handle and still owned by the caller
        buf.release()
        raise
    except sdbuf.SdbufError as e:
        print(f"Error {e.code}: {e}")
        print(f"Details: {e.details}")

See Also
--------
    SdbufError : Base exception for all sdbuf errors.
"""

from typing import Any

__all__ = [
    # Base
    "SdbufError",
    # Allocation
    "AllocationError",
    # State
    "StateError",
    # Validation
    "ValidationError",
]


class SdbufError(Exception):
    """
    Base exception for all sdbuf errors.

    All sdbuf-specific exceptions inherit from this class, enabling:
    - Catch-all handling: ``except sdbuf.SdbufError``
    - Stable string-based error codes for programmatic handling
    - Structured details for debugging and logging

    Attributes
    ----------
    message : str
        Human-readable error description.
    code : str
        Stable, string-based error code (e.g., "ALLOCATION_FAILED").
        Use this for programmatic error handling.
    details : dict[str, Any]
        Structured context (e.g., {"requested": 4113, "capacity": 12}).
    original_code : int | None
        Numeric code of the error family (for logging).

    Example
    -------
    >>> try:
    ...     Buffer.make(b"abc", length=10)
    ... except sdbuf.SdbufError as e:
    ...     print(f"Error code: {e.code}")
    ...     print(f"Details: {e.details}")
    Error code: INVALID_ARGUMENT
    Details: {'length': 10, 'available': 3}
    """

    default_code = "INTERNAL_ERROR"
    family: int | None = None

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        original_code: int | None = None,
    ):
        super().__init__(message)
        self.code = code or self.default_code
        self.details = details or {}
        self.original_code = original_code if original_code is not None else self.family

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.args[0]!r}, code={self.code!r})"


# =============================================================================
# Allocation Errors
# =============================================================================


class AllocationError(SdbufError, MemoryError):
    """
    The allocator could not provide a block.

    Raised by construction and by every operation that may grow a buffer
    (``reserve``, ``append_*``, ``assign``). This is the only recoverable
    error kind: when it is raised from a growing operation, the handle the
    operation was called on is left intact and remains owned by the caller,
    who is still responsible for releasing it.

    Inherits from ``MemoryError`` so generic out-of-memory handlers catch it.

    Example:
        >>> allocator = BudgetAllocator(limit=64)
        >>> buf = Buffer.make(b"hello", config=BufferConfig(allocator=allocator))
        >>> try:
        ...     buf = buf.append_bytes(b"x" * 1024)
        ... except sdbuf.AllocationError as e:
        ...     print(e.details["requested"])
        1046
        >>> bytes(buf)  # still valid
        b'hello'
    """

    default_code = "ALLOCATION_FAILED"
    family = 100


# =============================================================================
# State Errors
# =============================================================================


class StateError(SdbufError, RuntimeError):
    """
    Invalid buffer handle state.

    Raised when an operation is attempted through a handle that no longer
    owns a block:
    - The buffer was released (code ``BUFFER_RELEASED``)
    - A growing operation relocated the buffer and returned a new handle
      (code ``BUFFER_RELOCATED``); rebind to the returned handle instead
    - A tracking allocator saw a block freed twice or freed by a stranger
    """

    default_code = "STATE_ERROR"
    family = 200


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(SdbufError, ValueError):
    """
    Invalid parameter value.

    Raised when a function receives an argument of the correct type
    but an inappropriate value (e.g., a negative length, or a length
    longer than the source it should be copied from).

    This exception inherits from both SdbufError and ValueError, so both work::

        except sdbuf.SdbufError:   # catches all sdbuf errors
        except ValueError:         # catches validation errors (Pythonic)

    Example:
        >>> buf.reserve(-1)
        ValidationError: additional must be >= 0, got -1
    """

    default_code = "INVALID_ARGUMENT"
    family = 900
