"""Scale-space helpers shared by the interval and symlog scales."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..format_utils import get_precision, nice, round_number


@dataclass
class IntervalNiceTicks:
    """Result of :func:`interval_scale_nice_ticks`."""

    interval: float
    interval_precision: int
    nice_tick_extent: List[float]


def contain(val: float, extent: Sequence[float]) -> bool:
    return extent[0] <= val <= extent[1]


def normalize(val: float, extent: Sequence[float]) -> float:
    """Map ``val`` to ``[0, 1]`` within ``extent``; 0.5 for a zero-width extent."""
    if extent[1] == extent[0]:
        return 0.5
    return (val - extent[0]) / (extent[1] - extent[0])


def scale(val: float, extent: Sequence[float]) -> float:
    """Inverse of :func:`normalize`."""
    return val * (extent[1] - extent[0]) + extent[0]


def get_interval_precision(interval: float) -> int:
    # two extra digits absorb float noise when stepping
    return get_precision(interval) + 2


def fix_extent(nice_tick_extent: List[float], extent: Sequence[float]) -> None:
    """Clamp ``nice_tick_extent`` in place so it lies within ``extent``."""
    if not math.isfinite(nice_tick_extent[0]):
        nice_tick_extent[0] = extent[0]
    if not math.isfinite(nice_tick_extent[1]):
        nice_tick_extent[1] = extent[1]
    for idx in (0, 1):
        nice_tick_extent[idx] = max(min(nice_tick_extent[idx], extent[1]), extent[0])
    if nice_tick_extent[0] > nice_tick_extent[1]:
        nice_tick_extent[0] = nice_tick_extent[1]


def interval_scale_nice_ticks(
    extent: Sequence[float],
    split_number: int,
    min_interval: Optional[float] = None,
    max_interval: Optional[float] = None,
) -> IntervalNiceTicks:
    """Pick a nice interval for ``extent`` and the tick extent aligned to it."""
    span = extent[1] - extent[0]
    interval = nice(span / split_number, True)
    if min_interval is not None and interval < min_interval:
        interval = min_interval
    if max_interval is not None and interval > max_interval:
        interval = max_interval
    precision = get_interval_precision(interval)
    nice_tick_extent = [
        round_number(math.ceil(extent[0] / interval) * interval, precision),
        round_number(math.floor(extent[1] / interval) * interval, precision),
    ]
    fix_extent(nice_tick_extent, extent)
    return IntervalNiceTicks(interval, precision, nice_tick_extent)
