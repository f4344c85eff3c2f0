from __future__ import annotations

import numpy as np

from pubplot.primitives import RGBA, MarkerKind
from pubplot.raster.canvas import blend_mask


def draw_marker(
    dst: np.ndarray,
    x: int,
    y: int,
    *,
    color: RGBA,
    size: float = 3.0,
    kind: MarkerKind = MarkerKind.SQUARE,
    outline: RGBA | None = None,
) -> None:
    """Stamp one marker of radius ``size`` pixels centred on (x, y)."""
    radius = max(0, int(round(size)))
    shape = _marker_mask(kind, radius)
    if outline is not None and radius > 0:
        inner = np.zeros_like(shape)
        inner[1:-1, 1:-1] = _marker_mask(kind, radius - 1)
        blend_mask(dst, x - radius, y - radius, np.where(inner > 0, 0, shape).astype(np.uint8), outline)
        blend_mask(dst, x - radius, y - radius, inner, color)
        return
    blend_mask(dst, x - radius, y - radius, shape, color)


def _marker_mask(kind: MarkerKind, radius: int) -> np.ndarray:
    side = 2 * radius + 1
    if kind is MarkerKind.SQUARE:
        return np.full((side, side), 255, dtype=np.uint8)
    yy, xx = np.mgrid[-radius : radius + 1, -radius : radius + 1]
    inside = xx * xx + yy * yy <= radius * radius + radius
    return np.where(inside, 255, 0).astype(np.uint8)
