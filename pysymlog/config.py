from __future__ import annotations

"""Configuration for symlog scales.

Kept apart from `pysymlog.scale` so the scale classes and the public API can
share defaults without import cycles.
"""

import logging
import math
import numbers
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

DEFAULT_BASE = 10.0
DEFAULT_C = 0.01
DEFAULT_SPLIT_NUMBER = 5
# Upper bound on generated ticks; protects against runaway zoom intervals.
SAFE_TICK_LIMIT = 10_000


def resolve_number(value: Any, default: float) -> float:
    """Return ``value`` as a float if it is a finite real number, else ``default``.

    Booleans are rejected even though they are ``numbers.Real``.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return default
    value = float(value)
    if not math.isfinite(value):
        return default
    return value


@dataclass
class ScaleConfig:
    """User-facing configuration of a symlog axis.

    Attributes:
        base: Logarithm base. ``None`` selects the default of 10.
        C: Small-value cutoff. ``None`` leaves it unresolved so it is derived
            from the precision of the data unioned into the scale.
        logger: Logger handed to the scale; defaults to the module logger.
        log_level: Level applied to ``logger`` when one is given.
    """

    base: Optional[float] = None
    C: Optional[float] = None
    logger: Optional[logging.Logger] = None
    log_level: int = logging.WARNING

    def validate(self) -> None:
        """Validate explicitly configured values.

        Raises:
            ValueError: If ``base`` or ``C`` is set to an unusable number.
        """
        if self.base is not None:
            if not math.isfinite(self.base) or self.base <= 0 or self.base == 1:
                raise ValueError("base must be a finite positive number other than 1")
        if self.C is not None:
            if not math.isfinite(self.C) or self.C <= 0:
                raise ValueError("C must be a finite positive number")

    def to_setting(self) -> Dict[str, Any]:
        """Mapping in the shape scales read through ``get_setting``."""
        setting: Dict[str, Any] = {}
        if self.base is not None:
            setting["base"] = self.base
        if self.C is not None:
            setting["C"] = self.C
        return setting

    def get_logger(self) -> logging.Logger:
        logger = self.logger or logging.getLogger("pysymlog")
        if self.logger is not None:
            logger.setLevel(self.log_level)
        return logger


@dataclass
class NiceExtentOptions:
    """Options for ``calc_nice_extent``.

    ``min_interval`` and ``max_interval`` are honoured by the linear interval
    scale; the symlog scale accepts and ignores them.
    """

    split_number: int = DEFAULT_SPLIT_NUMBER
    fix_min: bool = False
    fix_max: bool = False
    min_interval: Optional[float] = None
    max_interval: Optional[float] = None

    @classmethod
    def from_options(cls, opts: Any) -> "NiceExtentOptions":
        """Build options from ``None``, a mapping or an existing instance.

        Raises:
            TypeError: If ``opts`` is none of the supported shapes.
        """
        if opts is None:
            return cls()
        if isinstance(opts, cls):
            return opts
        if isinstance(opts, Mapping):
            return cls(
                split_number=opts.get("split_number") or DEFAULT_SPLIT_NUMBER,
                fix_min=bool(opts.get("fix_min", False)),
                fix_max=bool(opts.get("fix_max", False)),
                min_interval=opts.get("min_interval"),
                max_interval=opts.get("max_interval"),
            )
        raise TypeError(f"Unsupported nice extent options: {type(opts).__name__}")
