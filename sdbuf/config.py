"""Configuration for buffer allocation and growth."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Literal, get_args

from .allocator import Allocator, default_allocator
from .exceptions import ValidationError

# Capacity rule used when reserve() has to relocate
GrowthPolicy = Literal["exact", "geometric"]

__all__ = ["BufferConfig", "GrowthPolicy", "default_config"]

_GROWTH_POLICIES: tuple[str, ...] = get_args(GrowthPolicy)


def _check_growth(growth: str) -> None:
    if growth not in _GROWTH_POLICIES:
        raise ValidationError(
            f"growth must be one of {', '.join(_GROWTH_POLICIES)}, got {growth!r}",
            details={"growth": growth, "expected": list(_GROWTH_POLICIES)},
        )


@dataclass
class BufferConfig:
    r"""
    Configuration for buffer allocation and growth.

    Every buffer keeps the config it was constructed with. Relocations and
    duplicates reuse it, so all blocks of one logical buffer come from the
    same allocator.

    For creating variations without modifying the original, use ``.override()``:

        >>> base = BufferConfig()
        >>> fast = base.override(growth="geometric")  # New config, base unchanged

    Attributes
    ----------
        allocator: Object providing ``allocate(size)`` and ``free(block)``.
            Default is None, meaning the process-wide ``HeapAllocator``.

        growth: Capacity rule used when ``reserve`` must relocate.
            - "exact" (default): new capacity is exactly ``length + additional``.
              Every growth relocates; no slack is ever allocated.
            - "geometric": new capacity is ``max(length + additional,
              2 * capacity)``, giving amortized O(1) appends.
    """

    allocator: Allocator | None = None
    growth: GrowthPolicy = "exact"

    def __post_init__(self) -> None:
        _check_growth(self.growth)

    def resolve_allocator(self) -> Allocator:
        """Return the configured allocator, or the process default."""
        return self.allocator if self.allocator is not None else default_allocator()

    def override(self, **kwargs: Any) -> BufferConfig:
        """Return a copy with the given fields replaced."""
        return replace(self, **kwargs)


def default_config() -> BufferConfig:
    """
    Build the default config from the environment.

    ``SDBUF_GROWTH`` selects the growth policy (``exact`` when unset).
    """
    growth = os.environ.get("SDBUF_GROWTH", "exact").strip().lower()
    return BufferConfig(growth=growth)  # type: ignore[arg-type]
