from __future__ import annotations

import math
from typing import Tuple


class ExtentAccumulator:
    """Running min/max over value-space extents.

    Pairs are order-corrected before merging, so ``(5, 1)`` unions as
    ``(1, 5)``. Unioning the empty extent ``(inf, -inf)`` is a no-op.
    """

    __slots__ = ("min", "max")

    def __init__(self) -> None:
        self.min = math.inf
        self.max = -math.inf

    def union(self, extent: Tuple[float, float]) -> Tuple[float, float]:
        lo, hi = extent
        # the empty extent (inf, -inf) is not a reversed pair
        if lo > hi and math.isfinite(lo) and math.isfinite(hi):
            lo, hi = hi, lo
        if lo < self.min:
            self.min = lo
        if hi > self.max:
            self.max = hi
        return self.get()

    def get(self) -> Tuple[float, float]:
        return (self.min, self.max)

    def is_empty(self) -> bool:
        return self.min > self.max

    def reset(self) -> None:
        self.min = math.inf
        self.max = -math.inf

    def __repr__(self) -> str:
        return f"ExtentAccumulator(min={self.min}, max={self.max})"
