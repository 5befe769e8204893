"""Scale base class and scale-type registry.

A scale owns an extent ``(lo, hi)`` and a settings mapping. Concrete scale
types register themselves under their ``type`` name so that an axis can
instantiate them from configuration.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from ..data import DataProvider

logger = logging.getLogger(__name__)

Extent = Tuple[float, float]

_SCALE_CLASSES: Dict[str, Type["Scale"]] = {}


class Scale:
    """Base extent holder shared by all scale types.

    Attributes:
        type: Registry name of the scale type.
        logger: Logger used for diagnostics.
    """

    type: str = ""

    def __init__(
        self,
        setting: Optional[Mapping[str, Any]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._setting: Mapping[str, Any] = dict(setting or {})
        self._extent = [math.inf, -math.inf]
        self._is_blank = False
        self.logger = logger or logging.getLogger(type(self).__module__)

    def get_setting(self, name: str) -> Any:
        """Configured value for ``name`` or ``None``."""
        return self._setting.get(name)

    def parse(self, val: Any) -> Any:
        return val

    def get_extent(self) -> Extent:
        return (self._extent[0], self._extent[1])

    def set_extent(self, start: float, end: float) -> None:
        """Store a new extent; NaN bounds leave the current bound in place."""
        if not math.isnan(start):
            self._extent[0] = start
        if not math.isnan(end):
            self._extent[1] = end

    def union_extent(self, other: Extent) -> None:
        extent = self._extent
        if other[0] < extent[0]:
            extent[0] = other[0]
        if other[1] > extent[1]:
            extent[1] = other[1]

    def union_extent_from_data(self, data: DataProvider, dim: str) -> None:
        self.union_extent(data.get_approximate_extent(dim))

    def is_in_extent_range(self, value: float) -> bool:
        return self._extent[0] <= value <= self._extent[1]

    def is_blank(self) -> bool:
        return self._is_blank

    def set_blank(self, is_blank: bool) -> None:
        self._is_blank = is_blank

    @classmethod
    def register_class(cls, scale_cls: Type["Scale"]) -> Type["Scale"]:
        """Register ``scale_cls`` under its ``type`` name.

        Usable as a class decorator.

        Raises:
            ValueError: If the class does not declare a ``type``.
        """
        if not scale_cls.type:
            raise ValueError(f"{scale_cls.__name__} does not declare a scale type")
        _SCALE_CLASSES[scale_cls.type] = scale_cls
        logger.info("Registered scale type: %s", scale_cls.type)
        return scale_cls


def get_scale_class(scale_type: str) -> Type[Scale]:
    """Look up a registered scale class.

    Raises:
        KeyError: If no scale is registered under ``scale_type``.
    """
    try:
        return _SCALE_CLASSES[scale_type]
    except KeyError:
        raise KeyError(
            f"Unknown scale type '{scale_type}'. Registered: {sorted(_SCALE_CLASSES)}"
        ) from None


def registered_scale_types() -> list[str]:
    return sorted(_SCALE_CLASSES)


def create_scale(
    scale_type: str,
    setting: Optional[Mapping[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> Scale:
    """Instantiate the scale registered as ``scale_type``."""
    return get_scale_class(scale_type)(setting, logger=logger)
