from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from pubplot.primitives import (
    RGBA,
    DrawPrimitive,
    MarkerPrimitive,
    Point,
    PolygonPrimitive,
    PolylinePrimitive,
    Rect,
    StrokeStyle,
)
from pubplot.scales import AxisTransform
from pubplot.series import Series, SeriesKind

if TYPE_CHECKING:
    from pubplot.backends.base import Canvas


def render_series(
    series: Series,
    tx: AxisTransform,
    ty: AxisTransform,
    *,
    color: RGBA,
    line_width: float,
    clip: Rect | None = None,
) -> list[DrawPrimitive]:
    """Pixel-space primitives for one series, in data order.

    Non-finite points break lines and steps into separate runs and are skipped
    by markers and fills.
    """
    if len(series) == 0:
        return []
    style = series.style
    stroke = StrokeStyle(color=color, width=float(style.line_width or line_width), dash=style.dash_pattern())

    if series.kind is SeriesKind.FILLED_REGION:
        return _filled_region(series, tx, ty, color=color, clip=clip)

    px = tx.to_pixels(series.x)
    py = ty.to_pixels(series.y)
    out: list[DrawPrimitive] = []
    if series.kind is SeriesKind.LINE:
        for start, stop in _contiguous_true_runs(series.finite_mask()):
            if stop - start < 2:
                continue
            points = tuple(zip(px[start:stop].tolist(), py[start:stop].tolist(), strict=True))
            out.append(PolylinePrimitive(points=points, stroke=stroke, clip=clip))
    elif series.kind is SeriesKind.STEP:
        for start, stop in _contiguous_true_runs(series.finite_mask()):
            if stop - start < 2:
                continue
            out.append(PolylinePrimitive(points=step_vertices(px[start:stop], py[start:stop]), stroke=stroke, clip=clip))

    if style.marker is not None:
        mask = series.finite_mask()
        for x, y in zip(px[mask].tolist(), py[mask].tolist(), strict=True):
            out.append(
                MarkerPrimitive(
                    center=(x, y),
                    kind=style.marker,
                    size=style.marker_size,
                    color=color,
                    outline=style.marker_outline,
                    clip=clip,
                )
            )
    return out


def render(
    series: Series,
    tx: AxisTransform,
    ty: AxisTransform,
    canvas: "Canvas",
    *,
    color: RGBA,
    line_width: float,
    clip: Rect | None = None,
) -> None:
    for primitive in render_series(series, tx, ty, color=color, line_width=line_width, clip=clip):
        canvas.draw_primitive(primitive)


def step_vertices(px: np.ndarray, py: np.ndarray) -> tuple[Point, ...]:
    """Step-after vertices snapped to whole pixels.

    Each value holds until the next sample, then a vertical riser joins the
    levels; snapping keeps risers and runs on exact pixel columns and rows.
    """
    sx = np.rint(px).tolist()
    sy = np.rint(py).tolist()
    points: list[Point] = [(sx[0], sy[0])]
    for i in range(1, len(sx)):
        points.append((sx[i], sy[i - 1]))
        points.append((sx[i], sy[i]))
    return tuple(points)


def _filled_region(
    series: Series,
    tx: AxisTransform,
    ty: AxisTransform,
    *,
    color: RGBA,
    clip: Rect | None,
) -> list[DrawPrimitive]:
    assert series.y2 is not None
    mask = series.finite_mask()
    if int(np.count_nonzero(mask)) < 2:
        return []
    px = tx.to_pixels(series.x[mask]).tolist()
    upper = ty.to_pixels(series.y[mask]).tolist()
    lower = ty.to_pixels(series.y2[mask]).tolist()
    points: list[Point] = list(zip(px, upper, strict=True))
    points.extend(zip(reversed(px), reversed(lower), strict=True))
    points.append(points[0])
    return [PolygonPrimitive(points=tuple(points), color=color, clip=clip)]


def _contiguous_true_runs(mask: np.ndarray) -> list[tuple[int, int]]:
    idx = np.flatnonzero(mask)
    if idx.size == 0:
        return []
    runs: list[tuple[int, int]] = []
    start = int(idx[0])
    prev = int(idx[0])
    for v in idx[1:]:
        iv = int(v)
        if iv == prev + 1:
            prev = iv
            continue
        runs.append((start, prev + 1))
        start = iv
        prev = iv
    runs.append((start, prev + 1))
    return runs
