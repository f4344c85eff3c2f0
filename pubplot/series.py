from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

import numpy as np

from pubplot.adapters import coerce_values, normalize_xy
from pubplot.axis import Axes
from pubplot.errors import InvalidSeriesData, MismatchedSeriesLength
from pubplot.primitives import RGBA, LineStyle, MarkerKind


class SeriesKind(Enum):
    LINE = "line"
    STEP = "step"
    SCATTER = "scatter"
    FILLED_REGION = "filled-region"


@dataclass(frozen=True)
class SeriesStyle:
    color: RGBA | None = None
    line_width: float | None = None
    line_style: LineStyle = LineStyle.SOLID
    dash: tuple[float, ...] | None = None
    marker: MarkerKind | None = None
    marker_size: float = 3.0
    marker_outline: RGBA | None = None

    def __post_init__(self) -> None:
        if self.line_width is not None and self.line_width <= 0:
            raise ValueError("line_width must be > 0")
        if self.marker_size <= 0:
            raise ValueError("marker_size must be > 0")

    def dash_pattern(self) -> tuple[float, ...] | None:
        if self.dash is not None:
            return self.dash
        return self.line_style.dash_pattern()


@dataclass(frozen=True)
class Series:
    """Immutable snapshot of one plotted data set.

    ``y2`` is only set for filled regions and holds the lower boundary.
    ``x_axis`` and ``y_axis`` pick the primary or secondary axis the series
    is scaled against.
    """

    kind: SeriesKind
    x: np.ndarray
    y: np.ndarray
    style: SeriesStyle = SeriesStyle()
    y2: np.ndarray | None = None
    label: str | None = None
    x_axis: Axes = Axes.X
    y_axis: Axes = Axes.Y

    def __post_init__(self) -> None:
        if self.x_axis.dimension is not Axes.X or self.y_axis.dimension is not Axes.Y:
            raise InvalidSeriesData(f"series cannot be placed on axes {self.x_axis.value}/{self.y_axis.value}")
        for name in ("x", "y", "y2"):
            arr = getattr(self, name)
            if arr is None:
                continue
            arr = np.asarray(arr)
            if arr.ndim != 1:
                raise InvalidSeriesData(f"{name} must be 1-D")
            if arr.flags.writeable or arr.dtype != np.float64 or arr.base is not None:
                arr = np.array(arr, dtype=np.float64, copy=True)
                arr.flags.writeable = False
            object.__setattr__(self, name, arr)
        if self.x.size != self.y.size:
            raise MismatchedSeriesLength(self.x.size, self.y.size)
        if self.kind is SeriesKind.FILLED_REGION:
            if self.y2 is None:
                raise InvalidSeriesData("filled region requires a lower boundary")
            if self.y2.size != self.x.size:
                raise MismatchedSeriesLength(self.x.size, self.y2.size, what="lower")
        elif self.y2 is not None:
            raise InvalidSeriesData(f"{self.kind.value} series does not take a lower boundary")

    def __len__(self) -> int:
        return int(self.x.size)

    @classmethod
    def line(cls, x: Any, y: Any, *, data: Any = None, style: SeriesStyle | None = None, label: str | None = None) -> "Series":
        xs, ys = normalize_xy(y, x=x, data=data)
        return cls(kind=SeriesKind.LINE, x=xs, y=ys, style=style or SeriesStyle(), label=label)

    @classmethod
    def step(cls, x: Any, y: Any, *, data: Any = None, style: SeriesStyle | None = None, label: str | None = None) -> "Series":
        xs, ys = normalize_xy(y, x=x, data=data)
        return cls(kind=SeriesKind.STEP, x=xs, y=ys, style=style or SeriesStyle(), label=label)

    @classmethod
    def step_from_edges(
        cls,
        edges: Any,
        y: Any,
        *,
        style: SeriesStyle | None = None,
        label: str | None = None,
    ) -> "Series":
        """Build a step series from ``len(y) + 1`` bin edges.

        The last value is repeated on the final edge so the last bin gets a
        horizontal run like every other bin.
        """
        xs = coerce_values(edges, label="edges")
        ys = coerce_values(y, label="y")
        if xs.size != ys.size + 1:
            raise MismatchedSeriesLength(xs.size, ys.size + 1)
        if ys.size > 0:
            ys = np.append(ys, ys[-1])
        else:
            xs = xs[:0]
        return cls(kind=SeriesKind.STEP, x=xs, y=ys, style=style or SeriesStyle(), label=label)

    @classmethod
    def scatter(cls, x: Any, y: Any, *, data: Any = None, style: SeriesStyle | None = None, label: str | None = None) -> "Series":
        xs, ys = normalize_xy(y, x=x, data=data)
        style = style or SeriesStyle(marker=MarkerKind.CIRCLE)
        if style.marker is None:
            raise InvalidSeriesData("scatter series requires a marker kind")
        return cls(kind=SeriesKind.SCATTER, x=xs, y=ys, style=style, label=label)

    @classmethod
    def filled_region(
        cls,
        x: Any,
        upper: Any,
        lower: Any = 0.0,
        *,
        data: Any = None,
        style: SeriesStyle | None = None,
        label: str | None = None,
    ) -> "Series":
        xs, ys = normalize_xy(upper, x=x, data=data)
        if isinstance(lower, (int, float, np.number)):
            low = np.full(xs.shape, float(lower), dtype=np.float64)
        else:
            low = coerce_values(lower, label="lower", data=data)
        return cls(kind=SeriesKind.FILLED_REGION, x=xs, y=ys, y2=low, style=style or SeriesStyle(), label=label)

    def on_axes(self, x_axis: Axes = Axes.X, y_axis: Axes = Axes.Y) -> "Series":
        return replace(self, x_axis=x_axis, y_axis=y_axis)

    def uses(self, axis: Axes) -> bool:
        return axis is (self.x_axis if axis.dimension is Axes.X else self.y_axis)

    def values(self, axis: Axes) -> np.ndarray:
        if axis.dimension is Axes.X:
            return self.x
        if self.y2 is not None:
            return np.concatenate([self.y, self.y2])
        return self.y

    def finite_mask(self) -> np.ndarray:
        mask = np.isfinite(self.x) & np.isfinite(self.y)
        if self.y2 is not None:
            mask &= np.isfinite(self.y2)
        return mask
