"""pysymlog package exports.

Preferred high-level API:
    from pysymlog import SymlogScale, ColumnData, ScaleConfig
"""

__version__ = "0.1.0"

from .config import NiceExtentOptions, ScaleConfig
from .data import ColumnData, DataProvider
from .scale import (
    IntervalScale,
    Scale,
    SymlogScale,
    create_scale,
    get_scale_class,
)
from .transform import (
    next_pow,
    prev_pow,
    scale_to_value,
    scales_to_values,
    value_to_scale,
    values_to_scale,
)
