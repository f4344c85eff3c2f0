from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Union


RGBA = tuple[int, int, int, int]
Point = tuple[float, float]
HAlign = Literal["left", "center", "right"]
VAlign = Literal["top", "middle", "bottom"]


def coerce_color(color: tuple[int, int, int] | tuple[int, int, int, int], alpha: float = 1.0) -> RGBA:
    if len(color) == 3:
        r, g, b = color
        a = int(max(0.0, min(1.0, alpha)) * 255)
        return (int(r), int(g), int(b), a)
    if len(color) != 4:
        raise ValueError(f"color must have 3 or 4 channels, got {len(color)}")
    r, g, b, a = color
    out_a = int(max(0.0, min(1.0, alpha)) * a)
    return (int(r), int(g), int(b), out_a)


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("rect width/height must be >= 0")

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def contains(self, other: "Rect") -> bool:
        return self.x <= other.x and self.y <= other.y and other.right <= self.right and other.bottom <= self.bottom

    def intersects(self, other: "Rect") -> bool:
        return self.x < other.right and other.x < self.right and self.y < other.bottom and other.y < self.bottom

    def inset(self, left: int, top: int, right: int, bottom: int) -> "Rect":
        return Rect(
            x=self.x + left,
            y=self.y + top,
            width=max(0, self.width - left - right),
            height=max(0, self.height - top - bottom),
        )


class LineStyle(Enum):
    SOLID = "solid"
    DASHED = "dashed"
    SHORT_DASHED = "short-dashed"

    def dash_pattern(self) -> tuple[float, ...] | None:
        if self is LineStyle.DASHED:
            return (10.0, 10.0)
        if self is LineStyle.SHORT_DASHED:
            return (4.0, 4.0)
        return None


class MarkerKind(Enum):
    CIRCLE = "circle"
    SQUARE = "square"


@dataclass(frozen=True)
class StrokeStyle:
    color: RGBA
    width: float = 1.0
    dash: tuple[float, ...] | None = None

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError("stroke width must be > 0")
        if self.dash is not None and (len(self.dash) == 0 or any(d <= 0 for d in self.dash)):
            raise ValueError("dash pattern entries must be > 0")


@dataclass(frozen=True)
class FontStyle:
    size: float
    color: RGBA = (0, 0, 0, 255)
    family: str | None = None


@dataclass(frozen=True)
class LinePrimitive:
    start: Point
    end: Point
    stroke: StrokeStyle
    clip: Rect | None = None


@dataclass(frozen=True)
class PolylinePrimitive:
    points: tuple[Point, ...]
    stroke: StrokeStyle
    clip: Rect | None = None


@dataclass(frozen=True)
class PolygonPrimitive:
    points: tuple[Point, ...]
    color: RGBA
    clip: Rect | None = None


@dataclass(frozen=True)
class MarkerPrimitive:
    center: Point
    kind: MarkerKind
    size: float
    color: RGBA
    outline: RGBA | None = None
    clip: Rect | None = None


@dataclass(frozen=True)
class TextPrimitive:
    anchor: Point
    text: str
    font: FontStyle
    h_align: HAlign = "center"
    v_align: VAlign = "middle"
    rotation: int = 0
    clip: Rect | None = None


DrawPrimitive = Union[LinePrimitive, PolylinePrimitive, PolygonPrimitive, MarkerPrimitive, TextPrimitive]


def rect_polygon(rect: Rect) -> tuple[Point, ...]:
    x0, y0, x1, y1 = float(rect.x), float(rect.y), float(rect.right), float(rect.bottom)
    return ((x0, y0), (x1, y0), (x1, y1), (x0, y1), (x0, y0))
