from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal, Sequence

import numpy as np
from PIL import Image

from pubplot.backends.base import Canvas
from pubplot.errors import EncodingError
from pubplot.primitives import RGBA, FontStyle, HAlign, MarkerKind, Point, Rect, StrokeStyle, VAlign
from pubplot.raster import draw_line, draw_marker, draw_polyline, draw_text_aligned, fill_polygon, new_canvas
from pubplot.raster.draw_text import DEFAULT_FONT_FAMILY


LOGGER = logging.getLogger(__name__)

RasterFormat = Literal["png", "jpeg"]


class RasterCanvas(Canvas):
    """RGBA pixel buffer backed by numpy; Pillow handles text, fills and encoding."""

    def __init__(self, width: int, height: int, background: RGBA = (255, 255, 255, 255)) -> None:
        self._pixels = new_canvas(width, height, background)

    def size(self) -> tuple[int, int]:
        return (int(self._pixels.shape[1]), int(self._pixels.shape[0]))

    def to_rgba(self) -> np.ndarray:
        return self._pixels.copy()

    def draw_line(self, start: Point, end: Point, stroke: StrokeStyle, *, clip: Rect | None = None) -> None:
        view, ox, oy = self._target(clip)
        if view.size == 0:
            return
        draw_line(
            view,
            float(np.rint(start[0])) - ox,
            float(np.rint(start[1])) - oy,
            float(np.rint(end[0])) - ox,
            float(np.rint(end[1])) - oy,
            color=stroke.color,
            width=_pixel_width(stroke.width),
            dash=stroke.dash,
        )

    def draw_polyline(self, points: Sequence[Point], stroke: StrokeStyle, *, clip: Rect | None = None) -> None:
        view, ox, oy = self._target(clip)
        if view.size == 0 or len(points) < 2:
            return
        pts = np.rint(np.asarray(points, dtype=np.float64))
        draw_polyline(view, pts[:, 0] - ox, pts[:, 1] - oy, stroke.color, width=_pixel_width(stroke.width), dash=stroke.dash)

    def fill_region(self, points: Sequence[Point], color: RGBA, *, clip: Rect | None = None) -> None:
        view, ox, oy = self._target(clip)
        if view.size == 0:
            return
        fill_polygon(view, [(x - ox, y - oy) for x, y in points], color)

    def draw_marker(
        self,
        center: Point,
        kind: MarkerKind,
        size: float,
        color: RGBA,
        *,
        outline: RGBA | None = None,
        clip: Rect | None = None,
    ) -> None:
        view, ox, oy = self._target(clip)
        if view.size == 0:
            return
        draw_marker(
            view,
            int(round(center[0])) - ox,
            int(round(center[1])) - oy,
            color=color,
            size=size,
            kind=kind,
            outline=outline,
        )

    def draw_text(
        self,
        anchor: Point,
        text: str,
        font: FontStyle,
        *,
        h_align: HAlign = "center",
        v_align: VAlign = "middle",
        rotation: int = 0,
        clip: Rect | None = None,
    ) -> None:
        view, ox, oy = self._target(clip)
        if view.size == 0:
            return
        draw_text_aligned(
            view,
            anchor[0] - ox,
            anchor[1] - oy,
            text,
            font.color,
            h_align=h_align,
            v_align=v_align,
            font_family=font.family or DEFAULT_FONT_FAMILY,
            font_size_px=font.size,
            rotate_deg=rotation,
        )

    def save(self, path: str | Path, fmt: RasterFormat = "png") -> None:
        image = Image.fromarray(self._pixels)
        if fmt == "jpeg":
            image = image.convert("RGB")
        try:
            image.save(str(path), format=fmt.upper())
        except (OSError, ValueError, KeyError) as exc:
            raise EncodingError(f"failed to write {fmt} image to {path}: {exc}") from exc
        LOGGER.info("wrote %dx%d %s image to %s", image.width, image.height, fmt, path)

    def _target(self, clip: Rect | None) -> tuple[np.ndarray, int, int]:
        if clip is None:
            return self._pixels, 0, 0
        h, w = self._pixels.shape[:2]
        x0 = min(w, max(0, clip.x))
        y0 = min(h, max(0, clip.y))
        x1 = min(w, max(x0, clip.right))
        y1 = min(h, max(y0, clip.bottom))
        return self._pixels[y0:y1, x0:x1], x0, y0


def _pixel_width(width: float) -> int:
    return max(1, int(round(width)))
