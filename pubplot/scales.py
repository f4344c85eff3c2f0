from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Sequence

import numpy as np

from pubplot.axis import AxisConfig, Axes, check_limits
from pubplot.errors import NoFiniteData
from pubplot.primitives import Rect
from pubplot.series import Series


LOGGER = logging.getLogger(__name__)

DEFAULT_PAD_FRACTION = 0.05
DEFAULT_ZERO_SPAN_MARGIN = 1.0
DEFAULT_RANGE = (0.0, 1.0)


@dataclass(frozen=True)
class AxisRange:
    vmin: float
    vmax: float

    def __post_init__(self) -> None:
        check_limits(self.vmin, self.vmax)

    @property
    def span(self) -> float:
        return self.vmax - self.vmin

    def contains(self, value: float, *, tol: float = 0.0) -> bool:
        return self.vmin - tol <= value <= self.vmax + tol


@dataclass(frozen=True)
class LimitPolicy:
    pad_fraction: float = DEFAULT_PAD_FRACTION
    zero_span_margin: float = DEFAULT_ZERO_SPAN_MARGIN

    def __post_init__(self) -> None:
        if self.pad_fraction < 0:
            raise ValueError("pad_fraction must be >= 0")
        if self.zero_span_margin <= 0:
            raise ValueError("zero_span_margin must be > 0")


def resolve_limits(
    config: AxisConfig,
    series: Sequence[Series],
    axis: Axes,
    *,
    policy: LimitPolicy = LimitPolicy(),
) -> AxisRange:
    """Final [min, max] range for one axis of a subplot.

    Explicit limits win. Otherwise the finite extent of every series placed on
    this axis is padded by ``policy.pad_fraction`` of its span.
    """
    if config.limits is not None:
        return AxisRange(*check_limits(*config.limits))

    lo = np.inf
    hi = -np.inf
    seen_values = False
    for s in series:
        if not s.uses(axis):
            continue
        values = s.values(axis)
        if values.size == 0:
            continue
        seen_values = True
        finite = values[np.isfinite(values)]
        if finite.size == 0:
            continue
        lo = min(lo, float(np.min(finite)))
        hi = max(hi, float(np.max(finite)))

    if not seen_values:
        return AxisRange(*DEFAULT_RANGE)
    if not np.isfinite(lo):
        raise NoFiniteData(f"{axis.value} axis has no finite values to scale")

    if lo == hi:
        delta = max(policy.zero_span_margin, abs(lo) * policy.pad_fraction)
        lo -= delta
        hi += delta
    else:
        pad = (hi - lo) * policy.pad_fraction
        lo -= pad
        hi += pad
    LOGGER.debug("resolved %s range: [%g, %g]", axis.value, lo, hi)
    return AxisRange(lo, hi)


@dataclass(frozen=True)
class AxisTransform:
    """Affine data-to-pixel map for one axis.

    ``direction`` is ``-1`` for the Y axis so larger values land higher on a
    top-left-origin canvas.
    """

    vmin: float
    vmax: float
    pixel_origin: float
    pixel_span: float
    direction: int = 1

    @classmethod
    def for_axis(cls, data_range: AxisRange, plot_area: Rect, axis: Axes) -> "AxisTransform":
        if axis.dimension is Axes.X:
            return cls(data_range.vmin, data_range.vmax, float(plot_area.x), float(plot_area.width), 1)
        return cls(data_range.vmin, data_range.vmax, float(plot_area.bottom), float(plot_area.height), -1)

    @property
    def scale(self) -> float:
        return self.pixel_span / (self.vmax - self.vmin) * self.direction

    def to_pixel(self, value: float) -> float:
        return self.pixel_origin + (float(value) - self.vmin) * self.scale

    def to_pixels(self, values: np.ndarray) -> np.ndarray:
        return self.pixel_origin + (np.asarray(values, dtype=np.float64) - self.vmin) * self.scale

    def to_data(self, pixel: float) -> float:
        return self.vmin + (float(pixel) - self.pixel_origin) / self.scale
