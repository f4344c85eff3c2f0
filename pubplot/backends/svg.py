from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence
import xml.etree.ElementTree as ET

from pubplot.backends.base import Canvas
from pubplot.errors import EncodingError
from pubplot.primitives import RGBA, FontStyle, HAlign, MarkerKind, Point, Rect, StrokeStyle, VAlign


LOGGER = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
DEFAULT_SVG_FONT_FAMILY = "DejaVu Sans, Helvetica, Arial, sans-serif"

_TEXT_ANCHOR = {"left": "start", "center": "middle", "right": "end"}
_BASELINE = {"top": "hanging", "middle": "central", "bottom": "text-after-edge"}


class SvgCanvas(Canvas):
    """Vector backend writing one SVG element per primitive."""

    def __init__(self, width: int, height: int, background: RGBA | None = (255, 255, 255, 255)) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("canvas width/height must be > 0")
        self._width = int(width)
        self._height = int(height)
        self._root = ET.Element(
            "svg",
            {
                "xmlns": SVG_NS,
                "width": str(self._width),
                "height": str(self._height),
                "viewBox": f"0 0 {self._width} {self._height}",
            },
        )
        self._defs = ET.SubElement(self._root, "defs")
        self._clip_ids: dict[Rect, str] = {}
        if background is not None:
            ET.SubElement(
                self._root,
                "rect",
                {"x": "0", "y": "0", "width": str(self._width), "height": str(self._height), **_fill_attrs(background)},
            )

    def size(self) -> tuple[int, int]:
        return (self._width, self._height)

    def to_markup(self) -> str:
        return ET.tostring(self._root, encoding="unicode")

    def save(self, path: str | Path) -> None:
        try:
            Path(path).write_text(self.to_markup(), encoding="utf-8")
        except OSError as exc:
            raise EncodingError(f"failed to write svg to {path}: {exc}") from exc
        LOGGER.info("wrote %dx%d svg to %s", self._width, self._height, path)

    def draw_line(self, start: Point, end: Point, stroke: StrokeStyle, *, clip: Rect | None = None) -> None:
        attrs = {
            "x1": _num(start[0]),
            "y1": _num(start[1]),
            "x2": _num(end[0]),
            "y2": _num(end[1]),
            **_stroke_attrs(stroke),
        }
        self._add("line", attrs, clip)

    def draw_polyline(self, points: Sequence[Point], stroke: StrokeStyle, *, clip: Rect | None = None) -> None:
        if len(points) < 2:
            return
        attrs = {"points": _points(points), "fill": "none", **_stroke_attrs(stroke)}
        attrs["stroke-linejoin"] = "miter"
        self._add("polyline", attrs, clip)

    def fill_region(self, points: Sequence[Point], color: RGBA, *, clip: Rect | None = None) -> None:
        if len(points) < 3:
            return
        self._add("polygon", {"points": _points(points), **_fill_attrs(color)}, clip)

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
        attrs = _fill_attrs(color)
        if outline is not None:
            attrs.update({"stroke": _rgb(outline), "stroke-opacity": _alpha(outline), "stroke-width": "1"})
        if kind is MarkerKind.CIRCLE:
            attrs.update({"cx": _num(center[0]), "cy": _num(center[1]), "r": _num(size)})
            self._add("circle", attrs, clip)
            return
        attrs.update(
            {
                "x": _num(center[0] - size),
                "y": _num(center[1] - size),
                "width": _num(2 * size),
                "height": _num(2 * size),
            }
        )
        self._add("rect", attrs, clip)

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
        if not text:
            return
        attrs = {
            "x": _num(anchor[0]),
            "y": _num(anchor[1]),
            "font-size": _num(font.size),
            "font-family": font.family or DEFAULT_SVG_FONT_FAMILY,
            "text-anchor": _TEXT_ANCHOR[h_align],
            "dominant-baseline": _BASELINE[v_align],
            **_fill_attrs(font.color),
        }
        if rotation % 360:
            # SVG rotates clockwise; text rotation is counter-clockwise.
            attrs["transform"] = f"rotate({_num(-rotation)} {_num(anchor[0])} {_num(anchor[1])})"
        elem = self._add("text", attrs, clip)
        elem.text = text

    def _add(self, tag: str, attrs: dict[str, str], clip: Rect | None) -> ET.Element:
        if clip is not None:
            attrs["clip-path"] = f"url(#{self._clip_id(clip)})"
        return ET.SubElement(self._root, tag, attrs)

    def _clip_id(self, clip: Rect) -> str:
        clip_id = self._clip_ids.get(clip)
        if clip_id is None:
            clip_id = f"clip{len(self._clip_ids)}"
            self._clip_ids[clip] = clip_id
            path = ET.SubElement(self._defs, "clipPath", {"id": clip_id})
            ET.SubElement(
                path,
                "rect",
                {"x": str(clip.x), "y": str(clip.y), "width": str(clip.width), "height": str(clip.height)},
            )
        return clip_id


def _num(value: float) -> str:
    out = f"{float(value):.3f}".rstrip("0").rstrip(".")
    return "0" if out in ("", "-0") else out


def _points(points: Sequence[Point]) -> str:
    return " ".join(f"{_num(x)},{_num(y)}" for x, y in points)


def _rgb(color: RGBA) -> str:
    return f"rgb({color[0]},{color[1]},{color[2]})"


def _alpha(color: RGBA) -> str:
    return _num(color[3] / 255.0)


def _fill_attrs(color: RGBA) -> dict[str, str]:
    return {"fill": _rgb(color), "fill-opacity": _alpha(color)}


def _stroke_attrs(stroke: StrokeStyle) -> dict[str, str]:
    attrs = {
        "stroke": _rgb(stroke.color),
        "stroke-opacity": _alpha(stroke.color),
        "stroke-width": _num(stroke.width),
    }
    if stroke.dash is not None:
        attrs["stroke-dasharray"] = " ".join(_num(d) for d in stroke.dash)
    return attrs
