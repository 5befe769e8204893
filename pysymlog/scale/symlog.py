"""Symmetric logarithmic axis scale.

Values are projected with the symlog transform (see :mod:`pysymlog.transform`)
and ticks are spaced evenly in the transformed space, so an axis can show
data spanning several orders of magnitude on both sides of zero.

The scale is driven in render-pass order: ``union_extent_from_data`` once per
series, then ``calc_nice_extent``, then ``get_ticks``. Instances are not
thread-safe.
"""

from __future__ import annotations

import logging
import math
from typing import Any, List, Mapping, Optional, Union

import numpy as np

from .. import transform
from ..config import (
    DEFAULT_BASE,
    DEFAULT_C,
    DEFAULT_SPLIT_NUMBER,
    SAFE_TICK_LIMIT,
    NiceExtentOptions,
    resolve_number,
)
from ..data import DataProvider
from ..format_utils import fmt_num, get_precision, round_number
from . import helper
from .base import Extent, Scale
from .extent import ExtentAccumulator
from .interval import IntervalScale


@Scale.register_class
class SymlogScale(Scale):
    """Axis scale using the symmetric logarithm transform.

    Attributes:
        base: Logarithm base, resolved by :meth:`initialize`.
        C: Small-value cutoff. ``inf`` until resolved from settings or data.
        initialized: Whether settings have been resolved.
    """

    type = "symlog"

    def __init__(
        self,
        setting: Optional[Mapping[str, Any]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(setting, logger=logger)
        self.base = DEFAULT_BASE
        self.C = math.inf
        self.initialized = False

        # value-space extent of everything unioned so far
        self._original_extent = ExtentAccumulator()
        # linear sibling providing minor ticks and labels
        self._interval_helper = IntervalScale(logger=self.logger)

        self._fix_min = False
        self._fix_max = False
        self._interval = 0.0
        self._interval_precision = 2
        self._nice_extent = [math.inf, -math.inf]
        self._nice_extent_value = [math.inf, -math.inf]
        self._split_number = DEFAULT_SPLIT_NUMBER
        self._data_precision: Optional[int] = None
        self._dim = "unknown"

    # ------------------------------------------------------------------
    # settings
    # ------------------------------------------------------------------

    def initialize(self, setting: Optional[Mapping[str, Any]] = None) -> None:
        """Resolve ``base`` and ``C`` from settings.

        Values that are not finite real numbers fall back to ``base=10`` and
        ``C=inf`` (derive from data). The same fallback applies to a base that
        is not positive or equals 1, and to a non-positive ``C``.
        """
        if setting is not None:
            self._setting = dict(setting)
        raw_base = self.get_setting("base")
        raw_c = self.get_setting("C")

        base = resolve_number(raw_base, DEFAULT_BASE)
        if base <= 0 or base == 1:
            base = DEFAULT_BASE
        c = resolve_number(raw_c, math.inf)
        if c <= 0:
            c = math.inf

        self.base = base
        self.C = c
        self.initialized = True
        self.logger.debug(
            "%s: settings base %r, C %r => %r, %r", self._dim, raw_base, raw_c, base, c
        )

    def resolve_settings(self) -> None:
        if not self.initialized:
            self.initialize()

    @property
    def data_precision(self) -> Optional[int]:
        """Largest decimal precision seen in unioned data, ``None`` before any."""
        return self._data_precision

    @property
    def display_precision(self) -> int:
        """Decimals used to display values.

        The data precision once known, otherwise one decimal less than ``C``
        carries. Either way the ``b**C - 1`` offset of the inverse transform
        rounds away.
        """
        if self._data_precision is not None:
            return self._data_precision
        return max(0, get_precision(self._c) - 1)

    @property
    def split_number(self) -> int:
        return self._split_number

    @property
    def _c(self) -> float:
        return self.C if math.isfinite(self.C) else DEFAULT_C

    # ------------------------------------------------------------------
    # conversions
    # ------------------------------------------------------------------

    def convert_value_to_scale(self, value: float) -> float:
        return transform.value_to_scale(self.base, value, self._c)

    def convert_scale_to_value(self, scale_value: float) -> float:
        return transform.scale_to_value(self.base, scale_value, self._c)

    def _display_value(self, scale_value: float) -> float:
        value = round_number(
            self.convert_scale_to_value(scale_value), self.display_precision
        )
        # no -0.0 for positions just below zero
        return value + 0.0

    # ------------------------------------------------------------------
    # extent
    # ------------------------------------------------------------------

    def _invalidate_nice_extent(self) -> None:
        self._nice_extent_value = [math.inf, -math.inf]

    def set_extent(self, start: float, end: float) -> None:
        """Set the extent from value-space bounds.

        ``(inf, -inf)`` resets the axis, including the extent accumulated by
        :meth:`union_extent`, and is stored as is.
        """
        self.resolve_settings()
        orig_start, orig_end = start, end
        if math.isfinite(start) and math.isfinite(end):
            start = self.convert_value_to_scale(start)
            end = self.convert_value_to_scale(end)
        elif start == math.inf and end == -math.inf:
            self._original_extent.reset()
        super().set_extent(start, end)
        self._invalidate_nice_extent()
        self.logger.debug(
            "%s: set_extent [%r, %r] => [%r, %r]",
            self._dim,
            orig_start,
            orig_end,
            start,
            end,
        )

    def get_extent(self) -> Extent:
        """Nice extent in value space, snapped to the display precision if fixed."""
        nice_value = self._nice_extent_value
        if not math.isfinite(nice_value[0]) or not math.isfinite(nice_value[1]):
            self.prepare_nice_extent()

        start, end = self._nice_extent_value
        if self._fix_min:
            start = round_number(start, self.display_precision)
        if self._fix_max:
            end = round_number(end, self.display_precision)
        self.logger.debug("%s: get_extent => [%r, %r]", self._dim, start, end)
        return (start, end)

    def get_scale_extent(self) -> Extent:
        """Current extent in scale space."""
        return super().get_extent()

    def get_nice_extent(self) -> Extent:
        """Nice extent in scale space."""
        return (self._nice_extent[0], self._nice_extent[1])

    def get_original_extent(self) -> Extent:
        """Accumulated raw value-space extent."""
        return self._original_extent.get()

    def union_extent(self, extent: Extent) -> None:
        """Merge a value-space extent and re-project the union to scale space.

        While only empty extents have been merged the current extent is kept.
        """
        self.resolve_settings()
        lo, hi = self._original_extent.union(extent)
        if self._original_extent.is_empty():
            return
        start = self.convert_value_to_scale(lo)
        end = self.convert_value_to_scale(hi)
        super().set_extent(start, end)
        self._invalidate_nice_extent()
        self.logger.debug(
            "%s: union_extent [%r, %r] => [%r, %r]",
            self._dim,
            extent[0],
            extent[1],
            start,
            end,
        )

    def union_extent_from_data(self, data: DataProvider, dim: str) -> None:
        """Union the extent of ``data`` on ``dim``, tracking its precision.

        Precision only ever increases; each increase shrinks ``C`` to
        ``1 / base ** (precision + 1)``.
        """
        self.resolve_settings()
        self._dim = dim
        max_precision = data.get_max_precision(dim)
        if self._data_precision is None or self._data_precision < max_precision:
            self.C = 1 / math.pow(self.base, max_precision + 1)
            self._data_precision = max_precision
            self.logger.debug(
                "%s: data precision %d, C %r, base %r",
                dim,
                max_precision,
                self.C,
                self.base,
            )
        self.union_extent(data.get_approximate_extent(dim))

    def prepare_nice_extent(self) -> None:
        """Round the extent outward to powers of ``base`` on both sides.

        Bounds are rounded to :attr:`display_precision` first. A negative end
        rounds toward zero with ``prev_pow``; ``next_pow`` would move it away
        from zero and leave the data above the nice extent, e.g.
        ``[-500, -37]`` would end at ``-100``.
        """
        extent = self._extent
        base = self.base
        precision = self.display_precision

        start = round_number(self.convert_scale_to_value(extent[0]), precision)
        end = round_number(self.convert_scale_to_value(extent[1]), precision)

        if start > 0:
            start = transform.prev_pow(base, start)
        elif start < 0:
            start = transform.next_pow(base, start)
        if end < 0:
            end = transform.prev_pow(base, end)
        else:
            end = transform.next_pow(base, end)

        # e.g. start 1e-8 with end 10
        if 0 < start < 1 and end > 1:
            start = 0.0
        # e.g. start -10 with end 1e-8
        if 0 < end < 1 and start < -1:
            end = 1.0

        self._nice_extent_value = [start, end]
        self._nice_extent = [
            self.convert_value_to_scale(start),
            self.convert_value_to_scale(end),
        ]
        self.logger.debug(
            "%s: nice extent [%r, %r] => [%r, %r]",
            self._dim,
            start,
            end,
            self._nice_extent[0],
            self._nice_extent[1],
        )

    # ------------------------------------------------------------------
    # ticks
    # ------------------------------------------------------------------

    def get_interval(self) -> float:
        return self._interval

    def set_interval(self, interval: float) -> None:
        """Set the scale-space tick interval directly."""
        if not math.isfinite(self._nice_extent[0]) or not math.isfinite(
            self._nice_extent[1]
        ):
            self.prepare_nice_extent()
        self._interval = interval
        self._interval_precision = get_precision(interval)

    def calc_nice_ticks(
        self,
        split_number: Optional[int] = None,
        min_interval: Optional[float] = None,
        max_interval: Optional[float] = None,
    ) -> None:
        """Split the nice extent into ``split_number`` equal scale-space steps.

        ``min_interval`` and ``max_interval`` are accepted for parity with
        :class:`IntervalScale` and not applied.
        """
        split_number = split_number or DEFAULT_SPLIT_NUMBER
        self.resolve_settings()
        self.prepare_nice_extent()

        start, end = self._nice_extent
        span = end - start
        if not math.isfinite(span) or span < 0:
            self.logger.debug("%s: degenerate span %r, interval unchanged", self._dim, span)
            return

        interval = span / split_number
        self._interval_precision = get_precision(interval)
        self._interval = interval
        self._split_number = split_number
        self.logger.debug(
            "%s: interval %r (precision %d) over [%r, %r]",
            self._dim,
            interval,
            self._interval_precision,
            start,
            end,
        )

    def calc_nice_extent(self, options: Any = None) -> None:
        """Compute nice extent and interval; ``options`` may be a mapping.

        Recognised keys are those of :class:`~pysymlog.config.NiceExtentOptions`.
        """
        opts = NiceExtentOptions.from_options(options)
        self.calc_nice_ticks(opts.split_number, opts.min_interval, opts.max_interval)
        self._fix_min = opts.fix_min
        self._fix_max = opts.fix_max

    def _push_tick(self, ticks: List[float], tick: float) -> None:
        """Append ``tick`` if its display value exceeds the last tick's.

        A ``0`` tick goes in first when the display values cross zero.
        """
        if not ticks:
            ticks.append(tick)
            return
        value = self._display_value(tick)
        last_value = self._display_value(ticks[-1])
        if last_value < 0 < value:
            ticks.append(0.0)
            last_value = 0.0
        if value > last_value:
            ticks.append(tick)

    def get_scale_ticks(self, expand_to_niced_extent: bool = False) -> List[float]:
        """Tick positions in scale space.

        Steps by the interval from the nice extent start. A ``0`` tick is
        inserted where the values cross zero, ticks whose rounded value repeats
        are collapsed, and the end bound is always represented. Returns an
        empty list when the interval is unset or more than
        ``SAFE_TICK_LIMIT`` steps would be taken.
        """
        extent = self._extent
        interval = self._interval
        nice_tick_extent = self._nice_extent

        ticks: List[float] = []
        if not interval:
            return ticks

        tick = nice_tick_extent[0]
        start = nice_tick_extent[0]
        if nice_tick_extent[0] < extent[0]:
            if not expand_to_niced_extent:
                start = extent[0]
            ticks.append(start)
            tick = tick + interval

        end = nice_tick_extent[1] if expand_to_niced_extent else extent[1]

        steps = 0
        while tick <= end:
            steps += 1
            if steps > SAFE_TICK_LIMIT:
                self.logger.warning(
                    "%s: more than %d ticks for interval %r, dropping all",
                    self._dim,
                    SAFE_TICK_LIMIT,
                    interval,
                )
                return []
            if tick >= start:
                self._push_tick(ticks, tick)
            last_tick = tick
            tick = tick + interval
            if tick == last_tick:
                # out of float resolution, e.g. -3711126.9907707 + 2e-10
                break

        if ticks:
            self._push_tick(ticks, end)

        self.logger.debug(
            "%s: scale ticks (expand=%s, interval %r) => %r",
            self._dim,
            expand_to_niced_extent,
            interval,
            ticks,
        )
        return ticks

    def get_ticks(self, expand_to_niced_extent: bool = False) -> List[float]:
        """Tick values for display, rounded to the display precision."""
        return [
            self._display_value(tick)
            for tick in self.get_scale_ticks(expand_to_niced_extent)
        ]

    def get_minor_ticks(self, split_number: int) -> List[List[float]]:
        """Minor tick values between each pair of major ticks.

        Ticks are split evenly in scale space by the interval scale, so they
        follow the logarithmic spacing on screen.
        """
        groups = self._interval_helper.minor_ticks_between(
            self.get_scale_ticks(True), self._extent, split_number
        )
        return [[self._display_value(tick) for tick in group] for group in groups]

    def get_label(
        self, tick: Optional[float], precision: Union[int, str, None] = None
    ) -> str:
        """Label for a value-space tick; ``"auto"`` uses the display precision."""
        if precision == "auto":
            precision = self.display_precision
        return self._interval_helper.get_label(tick, precision)

    # ------------------------------------------------------------------
    # positions
    # ------------------------------------------------------------------

    def contain(self, val: float) -> bool:
        return helper.contain(self.convert_value_to_scale(val), self._extent)

    def normalize(self, val: float) -> float:
        return helper.normalize(self.convert_value_to_scale(val), self._extent)

    def scale(self, val: float) -> float:
        return self.convert_scale_to_value(helper.scale(val, self._extent))

    def normalize_values(self, values) -> np.ndarray:
        """Vectorised :meth:`normalize` for a whole series."""
        positions = transform.values_to_scale(self.base, values, self._c)
        lo, hi = self._extent
        if hi == lo:
            return np.full_like(positions, 0.5)
        return (positions - lo) / (hi - lo)

    def __repr__(self) -> str:
        lo, hi = self._original_extent.get()
        return (
            f"SymlogScale(dim={self._dim!r}, base={fmt_num(self.base)}, "
            f"C={self.C!r}, extent=[{lo!r}, {hi!r}])"
        )
