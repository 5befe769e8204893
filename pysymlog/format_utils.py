from __future__ import annotations

import math
import re
from typing import Optional, Union

_THOUSANDS = re.compile(r"(\d{1,3})(?=(?:\d{3})+(?!\d))")

MAX_PRECISION = 20


def _number_str(x: float) -> str:
    if isinstance(x, float) and x.is_integer() and abs(x) < 1e21:
        return str(int(x))
    return repr(x)


def get_precision(val: Union[float, int, str]) -> int:
    """Number of decimal places needed to print ``val`` exactly.

    Handles scientific notation, e.g. ``1e-7`` has precision 7 and
    ``1.5e-7`` has precision 8.
    """
    try:
        val = float(val)
    except (TypeError, ValueError):
        return 0
    if math.isnan(val):
        return 0
    if math.isinf(val):
        return 0

    if val > 1e-14:
        e = 1
        for i in range(15):
            if math.floor(val * e + 0.5) / e == val:
                return i
            e *= 10

    return _precision_from_repr(val)


def _precision_from_repr(val: float) -> int:
    text = _number_str(val).lower()
    e_index = text.find("e")
    exp = int(text[e_index + 1 :]) if e_index > 0 else 0
    significand = text[:e_index] if e_index > 0 else text
    if significand.endswith(".0"):
        significand = significand[:-2]
    dot_index = significand.find(".")
    decimals = 0 if dot_index < 0 else len(significand) - 1 - dot_index
    return max(0, decimals - exp)


def round_number(
    x: float, precision: Optional[int] = 10, return_str: bool = False
) -> Union[float, str]:
    """Round ``x`` to a fixed number of decimals.

    ``precision`` is clamped to ``[0, 20]``; ``None`` means 20. Non-finite
    values are returned unchanged.
    """
    if precision is None:
        precision = MAX_PRECISION
    precision = min(max(0, int(precision)), MAX_PRECISION)
    x = float(x)
    if not math.isfinite(x):
        return str(x) if return_str else x
    text = f"{x:.{precision}f}"
    return text if return_str else float(text)


def add_commas(x: Union[float, int, str, None]) -> str:
    """Insert thousands separators into the integer part of ``x``."""
    if x is None:
        return "-"
    if isinstance(x, str):
        try:
            float(x)
        except ValueError:
            return x
        text = x
    else:
        if isinstance(x, float) and math.isnan(x):
            return "-"
        text = _number_str(x) if isinstance(x, float) else str(x)
    head, dot, tail = text.partition(".")
    return _THOUSANDS.sub(r"\1,", head) + dot + tail


def quantity_exponent(val: float) -> int:
    """Exponent of the power of ten just below ``val``."""
    if val == 0:
        return 0
    exp = math.floor(math.log(val) / math.log(10))
    # log10 rounding may land one short, e.g. for 1000
    if val / 10**exp >= 10:
        exp += 1
    return exp


def nice(val: float, round_: bool = False) -> float:
    """Return a "nice" number approximately equal to ``val``.

    Uses the 1, 2, 3, 5, 10 ladder. With ``round_`` the closest candidate is
    chosen, otherwise the next candidate not below ``val``.
    """
    if val <= 0 or not math.isfinite(val):
        return 1.0
    exponent = quantity_exponent(val)
    exp10 = 10.0**exponent
    frac = val / exp10
    if round_:
        if frac < 1.5:
            nf = 1
        elif frac < 2.5:
            nf = 2
        elif frac < 4:
            nf = 3
        elif frac < 7:
            nf = 5
        else:
            nf = 10
    else:
        if frac < 1:
            nf = 1
        elif frac < 2:
            nf = 2
        elif frac < 3:
            nf = 3
        elif frac < 5:
            nf = 5
        else:
            nf = 10
    val = nf * exp10
    if exponent >= -20:
        return round_number(val, -exponent if exponent < 0 else 0)
    return val


def fmt_num(x: Optional[float]) -> str:
    if x is None:
        return "-"
    if isinstance(x, float) and (math.isnan(x) or math.isinf(x)):
        return "NaN"
    return f"{x:,.4g}"
