"""
Header-prefixed growable byte buffers.

Provides the `Buffer` handle type, the module-level `release` helper and the
block layout constant `HEADER_SIZE`.
"""

from ._layout import HEADER_SIZE
from .buffer import Buffer, release

__all__ = ["Buffer", "HEADER_SIZE", "release"]
