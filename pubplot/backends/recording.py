from __future__ import annotations

from typing import Sequence

from pubplot.backends.base import Canvas
from pubplot.primitives import (
    RGBA,
    DrawPrimitive,
    FontStyle,
    HAlign,
    LinePrimitive,
    MarkerKind,
    MarkerPrimitive,
    Point,
    PolygonPrimitive,
    PolylinePrimitive,
    Rect,
    StrokeStyle,
    TextPrimitive,
    VAlign,
)


class RecordingCanvas(Canvas):
    """Keeps every primitive it receives, in order, without rasterizing."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("canvas width/height must be > 0")
        self._size = (int(width), int(height))
        self.primitives: list[DrawPrimitive] = []

    def size(self) -> tuple[int, int]:
        return self._size

    def clear(self) -> None:
        self.primitives.clear()

    def of_type(self, kind: type) -> list[DrawPrimitive]:
        return [p for p in self.primitives if isinstance(p, kind)]

    def draw_line(self, start: Point, end: Point, stroke: StrokeStyle, *, clip: Rect | None = None) -> None:
        self.primitives.append(LinePrimitive(start=start, end=end, stroke=stroke, clip=clip))

    def draw_polyline(self, points: Sequence[Point], stroke: StrokeStyle, *, clip: Rect | None = None) -> None:
        self.primitives.append(PolylinePrimitive(points=tuple(points), stroke=stroke, clip=clip))

    def fill_region(self, points: Sequence[Point], color: RGBA, *, clip: Rect | None = None) -> None:
        self.primitives.append(PolygonPrimitive(points=tuple(points), color=color, clip=clip))

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
        self.primitives.append(MarkerPrimitive(center=center, kind=kind, size=size, color=color, outline=outline, clip=clip))

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
        self.primitives.append(
            TextPrimitive(
                anchor=anchor,
                text=text,
                font=font,
                h_align=h_align,
                v_align=v_align,
                rotation=rotation,
                clip=clip,
            )
        )
