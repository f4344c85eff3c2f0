from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from pubplot.errors import DrawError
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


class Canvas(ABC):
    """Drawing surface the figure emits pixel-space primitives to.

    Every drawing call may carry a ``clip`` rectangle; nothing outside it may
    be touched. Implementations raise ``DrawError`` on failure.
    """

    @abstractmethod
    def size(self) -> tuple[int, int]:
        raise NotImplementedError

    @abstractmethod
    def draw_line(self, start: Point, end: Point, stroke: StrokeStyle, *, clip: Rect | None = None) -> None:
        raise NotImplementedError

    @abstractmethod
    def draw_polyline(self, points: Sequence[Point], stroke: StrokeStyle, *, clip: Rect | None = None) -> None:
        raise NotImplementedError

    @abstractmethod
    def fill_region(self, points: Sequence[Point], color: RGBA, *, clip: Rect | None = None) -> None:
        raise NotImplementedError

    @abstractmethod
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
        raise NotImplementedError

    @abstractmethod
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
        raise NotImplementedError

    def draw_primitive(self, primitive: DrawPrimitive) -> None:
        if isinstance(primitive, LinePrimitive):
            self.draw_line(primitive.start, primitive.end, primitive.stroke, clip=primitive.clip)
        elif isinstance(primitive, PolylinePrimitive):
            self.draw_polyline(primitive.points, primitive.stroke, clip=primitive.clip)
        elif isinstance(primitive, PolygonPrimitive):
            self.fill_region(primitive.points, primitive.color, clip=primitive.clip)
        elif isinstance(primitive, MarkerPrimitive):
            self.draw_marker(
                primitive.center,
                primitive.kind,
                primitive.size,
                primitive.color,
                outline=primitive.outline,
                clip=primitive.clip,
            )
        elif isinstance(primitive, TextPrimitive):
            self.draw_text(
                primitive.anchor,
                primitive.text,
                primitive.font,
                h_align=primitive.h_align,
                v_align=primitive.v_align,
                rotation=primitive.rotation,
                clip=primitive.clip,
            )
        else:
            raise DrawError(f"unsupported draw primitive: {type(primitive).__name__}")
