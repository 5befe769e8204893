"""Data providers for scales.

A scale only needs two answers from the data it is attached to: the maximum
decimal precision on a dimension and the approximate value extent. Anything
exposing ``get_max_precision`` and ``get_approximate_extent`` satisfies
:class:`DataProvider`; :class:`ColumnData` is the in-memory implementation.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Iterable, Mapping, Protocol, Tuple, runtime_checkable

import numpy as np

from .format_utils import get_precision

FrameLike = Any  # pandas.DataFrame or polars.DataFrame


@runtime_checkable
class DataProvider(Protocol):
    """Typed view of what a scale asks of series data."""

    def get_max_precision(self, dim: str) -> int: ...

    def get_approximate_extent(self, dim: str) -> Tuple[float, float]: ...


class ColumnData:
    """Column-oriented numeric data keyed by dimension name.

    Non-finite values are ignored for both precision and extent. An empty
    dimension reports ``(inf, -inf)``, the extent that unions to a no-op.
    """

    def __init__(self, columns: Mapping[str, Iterable[float]]):
        self._columns: Dict[str, np.ndarray] = {}
        for name, values in columns.items():
            arr = np.asarray(values, dtype=float).ravel()
            self._columns[str(name)] = arr[np.isfinite(arr)]
        self._precision_cache: Dict[str, int] = {}

    @classmethod
    def from_frame(cls, frame: FrameLike) -> "ColumnData":
        """Build from a pandas or polars DataFrame, keeping numeric columns.

        Both libraries are optional and imported lazily.
        """
        try:
            import pandas as pd  # type: ignore

            if isinstance(frame, pd.DataFrame):
                numeric = frame.select_dtypes(include="number")
                return cls({col: numeric[col].to_numpy() for col in numeric.columns})
        except ImportError:
            pass
        try:
            import polars as pl  # type: ignore

            if isinstance(frame, pl.DataFrame):
                return cls(
                    {
                        name: frame.get_column(name).to_numpy()
                        for name, dtype in frame.schema.items()
                        if dtype.is_numeric()
                    }
                )
        except ImportError:
            pass
        raise TypeError(f"Unsupported frame type: {type(frame).__name__}")

    @property
    def dimensions(self) -> list[str]:
        return list(self._columns)

    def _column(self, dim: str) -> np.ndarray:
        try:
            return self._columns[dim]
        except KeyError:
            raise KeyError(f"Unknown dimension '{dim}'") from None

    def get_max_precision(self, dim: str) -> int:
        if dim not in self._precision_cache:
            values = self._column(dim)
            # Precision is a property of distinct values only.
            self._precision_cache[dim] = max(
                (get_precision(v) for v in np.unique(values)), default=0
            )
        return self._precision_cache[dim]

    def get_approximate_extent(self, dim: str) -> Tuple[float, float]:
        values = self._column(dim)
        if len(values) == 0:
            return (math.inf, -math.inf)
        return (float(values.min()), float(values.max()))

    def __len__(self) -> int:
        return max((len(v) for v in self._columns.values()), default=0)

    def __repr__(self) -> str:
        return f"ColumnData(dims={self.dimensions})"
