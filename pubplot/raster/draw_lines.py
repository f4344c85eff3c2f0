from __future__ import annotations

import math

import numpy as np

from pubplot.primitives import RGBA
from pubplot.raster.canvas import draw_hline, draw_pixel, draw_vline


def draw_polyline(
    dst: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    color: RGBA,
    width: int = 1,
    dash: tuple[float, ...] | None = None,
) -> None:
    if xs.size < 2:
        return
    # Dash phase carries across vertices so patterns stay continuous along the path.
    phase = 0.0
    for i in range(xs.size - 1):
        phase = draw_line(
            dst,
            float(xs[i]),
            float(ys[i]),
            float(xs[i + 1]),
            float(ys[i + 1]),
            color=color,
            width=width,
            dash=dash,
            phase=phase,
        )


def draw_line(
    dst: np.ndarray,
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    *,
    color: RGBA,
    width: int = 1,
    dash: tuple[float, ...] | None = None,
    phase: float = 0.0,
) -> float:
    """Draw one segment and return the dash phase at its end.

    The segment is clipped to the buffer (grown by the brush radius) before
    rasterizing, so endpoints far off-canvas cost no more than visible ones.
    """
    if not all(math.isfinite(v) for v in (x0, y0, x1, y1)):
        return phase
    length = math.hypot(x1 - x0, y1 - y0)
    end_phase = phase + length
    radius = max(0, width // 2)
    h, w = dst.shape[:2]
    span = clip_segment(x0, y0, x1, y1, (-radius - 1, -radius - 1, w + radius, h + radius))
    if span is None:
        return end_phase
    t0, t1 = span
    phase += t0 * length
    ax = int(round(x0 + t0 * (x1 - x0)))
    ay = int(round(y0 + t0 * (y1 - y0)))
    bx = int(round(x0 + t1 * (x1 - x0)))
    by = int(round(y0 + t1 * (y1 - y0)))

    if dash is None and ay == by:
        for yy in range(ay - radius, ay + radius + 1):
            draw_hline(dst, min(ax, bx) - radius, max(ax, bx) + radius, yy, color)
        return end_phase
    if dash is None and ax == bx:
        for xx in range(ax - radius, ax + radius + 1):
            draw_vline(dst, xx, min(ay, by) - radius, max(ay, by) + radius, color)
        return end_phase

    dx = abs(bx - ax)
    sx = 1 if ax < bx else -1
    dy = -abs(by - ay)
    sy = 1 if ay < by else -1
    err = dx + dy

    while True:
        if dash is None or _dash_on(phase, dash):
            _draw_square_brush(dst, ax, ay, color=color, radius=radius)
        if ax == bx and ay == by:
            break
        e2 = 2 * err
        moved_x = moved_y = False
        if e2 >= dy:
            err += dy
            ax += sx
            moved_x = True
        if e2 <= dx:
            err += dx
            ay += sy
            moved_y = True
        phase += math.sqrt(2.0) if moved_x and moved_y else 1.0
    return end_phase


def clip_segment(
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    box: tuple[float, float, float, float],
) -> tuple[float, float] | None:
    """Liang-Barsky: parameter range ``(t0, t1)`` of the segment inside ``box``.

    ``box`` is ``(xmin, ymin, xmax, ymax)``. Returns ``None`` when the segment
    misses the box entirely.
    """
    xmin, ymin, xmax, ymax = box
    dx = x1 - x0
    dy = y1 - y0
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x0 - xmin), (dx, xmax - x0), (-dy, y0 - ymin), (dy, ymax - y0)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    return t0, t1


def _dash_on(phase: float, pattern: tuple[float, ...]) -> bool:
    period = sum(pattern)
    t = phase % period
    for i, length in enumerate(pattern):
        if t < length:
            return i % 2 == 0
        t -= length
    return True


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, radius: int) -> None:
    for yy in range(y - radius, y + radius + 1):
        for xx in range(x - radius, x + radius + 1):
            draw_pixel(dst, xx, yy, color)
