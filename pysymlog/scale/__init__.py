"""Scale types. Importing this package registers all of them."""

from .base import Scale, create_scale, get_scale_class, registered_scale_types
from .extent import ExtentAccumulator
from .interval import IntervalScale
from .symlog import SymlogScale

__all__ = [
    "Scale",
    "IntervalScale",
    "SymlogScale",
    "ExtentAccumulator",
    "create_scale",
    "get_scale_class",
    "registered_scale_types",
]
