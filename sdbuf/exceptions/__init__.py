"""
sdbuf exceptions.

This module defines the exception hierarchy for sdbuf:

    SdbufError (base)
    ├── AllocationError - Allocator refused to hand out a block
    ├── StateError - Released or relocated buffer handle used
    └── ValidationError - Invalid parameter value
"""

from .exceptions import (
    AllocationError,
    SdbufError,
    StateError,
    ValidationError,
)

# =============================================================================
# Public API
# =============================================================================
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
