"""Symmetric logarithm transform.

The transform follows Webber (2012), Measurement Science and Technology::

    y = sign(x) * log_b(1 + |x| / b**C)

where the constant ``C`` sets the resolution of the data around zero:
magnitudes below ``C`` collapse onto the zero position, everything else is
mapped logarithmically with continuity across zero.

Scalar functions mirror the vectorised ones (``values_to_scale`` /
``scales_to_values``), which project whole numpy arrays at once.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from .config import DEFAULT_C

logger = logging.getLogger(__name__)


def _pow(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        return math.inf


def log_base(base: float, value: float) -> float:
    """Logarithm of ``value`` in ``base``; NaN for non-positive values."""
    if not value > 0:
        return math.nan
    return math.log(value) / math.log(base)


def _floor_exponent(base: float, magnitude: float) -> int:
    exp = math.floor(log_base(base, magnitude))
    # the log ratio may land just below an exact power, e.g. log(1000) / log(10)
    if _pow(base, exp + 1) <= magnitude:
        exp += 1
    return exp


def _ceil_exponent(base: float, magnitude: float) -> int:
    exp = math.ceil(log_base(base, magnitude))
    if _pow(base, exp - 1) >= magnitude:
        exp -= 1
    return exp


def next_pow(base: float, value: float) -> float:
    """Round the magnitude of ``value`` up to an integer power of ``base``.

    The sign is preserved and ``0`` stays ``0``: ``next_pow(10, -37) == -100``.
    """
    if value == 0.0:
        return 0.0
    if not math.isfinite(value):
        return value
    sign = -1.0 if value < 0.0 else 1.0
    result = sign * _pow(base, _ceil_exponent(base, abs(value)))
    logger.debug("next_pow(%r, %r) => %r", base, value, result)
    return result


def prev_pow(base: float, value: float) -> float:
    """Round the magnitude of ``value`` down to an integer power of ``base``.

    The sign is preserved and ``0`` stays ``0``: ``prev_pow(10, -37) == -10``.
    """
    if value == 0.0:
        return 0.0
    if not math.isfinite(value):
        return value
    sign = -1.0 if value < 0.0 else 1.0
    result = sign * _pow(base, _floor_exponent(base, abs(value)))
    logger.debug("prev_pow(%r, %r) => %r", base, value, result)
    return result


def value_to_scale(base: float, value: float, C: float = DEFAULT_C) -> float:
    """Forward transform from value space to scale space.

    Magnitudes below ``C`` map to 0. Others are snapped to the nearest
    multiple of ``C`` (half up) to suppress sub-resolution noise.
    ``C`` must be non-zero.
    """
    if math.isnan(value):
        return value
    sign = 1.0
    if value < 0.0:
        sign = -1.0
        value = -value
    if math.isinf(value):
        return sign * math.inf

    if value < C:
        return 0.0
    rC = 1.0 / C
    scaled = value * rC
    if math.isfinite(scaled):
        value = math.floor(scaled + 0.5) / rC
    if value < C:
        return 0.0
    symlog = sign * log_base(base, 1.0 + value / _pow(base, C))
    logger.debug("value_to_scale(%r, %r, %r) => %r", base, sign * value, C, symlog)
    return symlog


def scale_to_value(base: float, symlog: float, C: float = DEFAULT_C) -> float:
    """Inverse transform from scale space to value space.

    The raw result is truncated toward zero to a multiple of ``C``. Combined
    with the half-up snap of :func:`value_to_scale` this makes round trips
    lossy for magnitudes close to ``C``. The zero position maps to exactly 0.
    """
    if symlog == 0.0:
        return 0.0
    if math.isnan(symlog):
        return symlog
    sign = 1.0
    if symlog < 0.0:
        sign = -1.0
        symlog = -symlog

    # x = sign(y) * (b**|y| * b**C - 1)
    mul1 = _pow(base, symlog)
    mul2 = _pow(base, C)
    raw = sign * (mul1 * mul2 - 1.0)
    if not math.isfinite(raw):
        return raw
    value = math.trunc(raw / C) * C
    logger.debug(
        "scale_to_value(%r, %r, %r) => %r [trunc((%r * %r * %r - 1) / %r) * %r]",
        base,
        sign * symlog,
        C,
        value,
        sign,
        mul1,
        mul2,
        C,
        C,
    )
    return value


def values_to_scale(base: float, values, C: float = DEFAULT_C) -> np.ndarray:
    """Vectorised :func:`value_to_scale` over an array of values."""
    values = np.asarray(values, dtype=float)
    sign = np.where(values < 0.0, -1.0, 1.0)
    magnitude = np.abs(values)
    rC = 1.0 / C
    with np.errstate(over="ignore", invalid="ignore"):
        scaled = magnitude * rC
        snapped = np.where(
            np.isfinite(scaled), np.floor(scaled + 0.5) / rC, magnitude
        )
        symlog = sign * (np.log(1.0 + snapped / np.power(base, C)) / np.log(base))
    return np.where((magnitude < C) | (snapped < C), 0.0, symlog)


def scales_to_values(base: float, positions, C: float = DEFAULT_C) -> np.ndarray:
    """Vectorised :func:`scale_to_value` over an array of scale positions."""
    positions = np.asarray(positions, dtype=float)
    sign = np.where(positions < 0.0, -1.0, 1.0)
    with np.errstate(over="ignore", invalid="ignore"):
        raw = sign * (np.power(base, np.abs(positions)) * np.power(base, C) - 1.0)
        value = np.where(np.isfinite(raw), np.trunc(raw / C) * C, raw)
    return np.where(positions == 0.0, 0.0, value)
