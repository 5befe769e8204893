"""Linear interval scale.

Besides being a scale type of its own, it supplies the minor-tick and label
formatting routines that :class:`~pysymlog.scale.symlog.SymlogScale`
delegates to.
"""

from __future__ import annotations

import logging
import math
from typing import Any, List, Mapping, Optional, Sequence, Union

from ..config import DEFAULT_SPLIT_NUMBER, SAFE_TICK_LIMIT, NiceExtentOptions
from ..format_utils import add_commas, get_precision, round_number
from . import helper
from .base import Scale


@Scale.register_class
class IntervalScale(Scale):
    """Scale with evenly spaced ticks on nice 1-2-3-5 intervals."""

    type = "interval"

    def __init__(
        self,
        setting: Optional[Mapping[str, Any]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(setting, logger=logger)
        self._interval = 0.0
        self._interval_precision = 2
        self._nice_extent = [math.inf, -math.inf]

    def contain(self, val: float) -> bool:
        return helper.contain(val, self._extent)

    def normalize(self, val: float) -> float:
        return helper.normalize(val, self._extent)

    def scale(self, val: float) -> float:
        return helper.scale(val, self._extent)

    def get_interval(self) -> float:
        return self._interval

    def set_interval(self, interval: float) -> None:
        self._interval = interval
        # Drop the nice extent cache, it is derived from the interval.
        self._nice_extent = list(self._extent)
        self._interval_precision = helper.get_interval_precision(interval)

    def get_ticks(self, expand_to_niced_extent: bool = False) -> List[float]:
        """Tick values over the nice tick extent.

        With ``expand_to_niced_extent`` the first and last ticks are pushed out
        to whole intervals, otherwise the raw extent bounds are used.
        """
        interval = self._interval
        extent = self._extent
        nice_tick_extent = self._nice_extent
        precision = self._interval_precision

        ticks: List[float] = []
        if not interval:
            return ticks

        if extent[0] < nice_tick_extent[0]:
            if expand_to_niced_extent:
                ticks.append(round_number(nice_tick_extent[0] - interval, precision))
            else:
                ticks.append(extent[0])

        tick = nice_tick_extent[0]
        while tick <= nice_tick_extent[1]:
            ticks.append(tick)
            tick = round_number(tick + interval, precision)
            if tick == ticks[-1]:
                # out of float resolution, e.g. -3711126.9907707 + 2e-10
                break
            if len(ticks) > SAFE_TICK_LIMIT:
                self.logger.warning(
                    "tick safety limit %d exceeded, interval %r", SAFE_TICK_LIMIT, interval
                )
                return []

        last_nice_tick = ticks[-1] if ticks else nice_tick_extent[1]
        if extent[1] > last_nice_tick:
            if expand_to_niced_extent:
                ticks.append(round_number(last_nice_tick + interval, precision))
            else:
                ticks.append(extent[1])
        return ticks

    def get_minor_ticks(self, split_number: int) -> List[List[float]]:
        return self.minor_ticks_between(
            self.get_ticks(True), self._extent, split_number
        )

    @staticmethod
    def minor_ticks_between(
        ticks: Sequence[float], extent: Sequence[float], split_number: int
    ) -> List[List[float]]:
        """Split each gap between consecutive ``ticks`` into ``split_number`` parts.

        Returns one group per gap holding the interior points that fall
        strictly inside ``extent``.
        """
        minor_ticks: List[List[float]] = []
        for prev_tick, next_tick in zip(ticks, ticks[1:]):
            minor_interval = (next_tick - prev_tick) / split_number
            group = []
            for count in range(1, split_number):
                minor_tick = round_number(prev_tick + count * minor_interval)
                if extent[0] < minor_tick < extent[1]:
                    group.append(minor_tick)
            minor_ticks.append(group)
        return minor_ticks

    def get_label(
        self, tick: Optional[float], precision: Union[int, str, None] = None
    ) -> str:
        """Format a tick value with thousands separators.

        ``precision`` defaults to the precision of the value itself; ``"auto"``
        uses the interval precision.
        """
        if tick is None:
            return ""
        if precision is None:
            precision = get_precision(tick) or 0
        elif precision == "auto":
            precision = self._interval_precision
        return add_commas(round_number(tick, precision, return_str=True))

    def calc_nice_ticks(
        self,
        split_number: Optional[int] = None,
        min_interval: Optional[float] = None,
        max_interval: Optional[float] = None,
    ) -> None:
        split_number = split_number or DEFAULT_SPLIT_NUMBER
        extent = self._extent
        span = extent[1] - extent[0]
        if not math.isfinite(span):
            return
        if span < 0:
            extent.reverse()

        result = helper.interval_scale_nice_ticks(
            extent, split_number, min_interval, max_interval
        )
        self._interval_precision = result.interval_precision
        self._interval = result.interval
        self._nice_extent = result.nice_tick_extent

    def calc_nice_extent(self, options: Any = None) -> None:
        """Widen the extent to whole intervals unless fixed at either end."""
        opts = NiceExtentOptions.from_options(options)
        extent = self._extent
        if extent[0] == extent[1]:
            if extent[0] != 0:
                expand = abs(extent[0])
                if not opts.fix_max:
                    extent[1] += expand / 2
                    extent[0] -= expand / 2
                else:
                    extent[0] -= expand / 2
            else:
                extent[1] = 1
        if not math.isfinite(extent[1] - extent[0]):
            extent[0] = 0
            extent[1] = 1

        self.calc_nice_ticks(opts.split_number, opts.min_interval, opts.max_interval)

        interval = self._interval
        if not opts.fix_min:
            extent[0] = round_number(math.floor(extent[0] / interval) * interval)
        if not opts.fix_max:
            extent[1] = round_number(math.ceil(extent[1] / interval) * interval)
