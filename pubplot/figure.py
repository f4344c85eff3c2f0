from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from pathlib import Path
from typing import Sequence

import numpy as np

from pubplot.backends import Canvas, RasterCanvas, SvgCanvas
from pubplot.errors import DrawError, InvalidLayout
from pubplot.layout import GridLayout, Layout, SingleLayout
from pubplot.pipeline import SubplotPlan, plan_subplot
from pubplot.primitives import RGBA, Rect
from pubplot.scales import LimitPolicy
from pubplot.sizing import DEFAULT_DPI, DEFAULT_FIGURE_SIZE_IN, inches_to_pixels
from pubplot.subplot import Subplot, SubplotConfig
from pubplot.ticks import DEFAULT_DENSITY, TickDensity


LOGGER = logging.getLogger(__name__)


class FileFormat(Enum):
    PNG = "png"
    JPEG = "jpeg"
    SVG = "svg"

    @classmethod
    def from_path(cls, path: str | Path) -> "FileFormat":
        suffix = Path(path).suffix.lower().lstrip(".")
        if suffix == "jpg":
            suffix = "jpeg"
        try:
            return cls(suffix)
        except ValueError:
            raise ValueError(f"cannot infer image format from {str(path)!r}") from None


@dataclass(frozen=True)
class FigureStyle:
    face_color: RGBA = (255, 255, 255, 255)


@dataclass(frozen=True)
class FigureFormat:
    """Physical figure size; pixels are ``floor(inches * dpi)``."""

    size_in: tuple[float, float] = DEFAULT_FIGURE_SIZE_IN
    dpi: float = DEFAULT_DPI
    style: FigureStyle = field(default_factory=FigureStyle)

    @property
    def pixel_size(self) -> tuple[int, int]:
        return inches_to_pixels(self.size_in, self.dpi)

    def figure(self) -> "Figure":
        width, height = self.pixel_size
        return Figure(width=width, height=height, style=self.style)


@dataclass
class Figure:
    width: int = 675
    height: int = 500
    style: FigureStyle = field(default_factory=FigureStyle)
    density: TickDensity = DEFAULT_DENSITY
    limit_policy: LimitPolicy = field(default_factory=LimitPolicy)
    _layout: Layout | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be > 0")

    @property
    def layout(self) -> Layout | None:
        return self._layout

    def set_layout(self, layout: Layout) -> "Figure":
        self._layout = layout
        return self

    def subplot(self, subplot: Subplot | None = None) -> Subplot:
        """Use a single subplot filling the figure and return it."""
        subplot = subplot or Subplot()
        self._layout = SingleLayout(subplot)
        return subplot

    def subplots(
        self,
        rows: int,
        cols: int,
        *,
        config: SubplotConfig | None = None,
    ) -> list[Subplot]:
        if rows <= 0 or cols <= 0:
            raise ValueError("rows and cols must be > 0")
        panels = [Subplot(config) for _ in range(rows * cols)]
        self._layout = GridLayout(panels, rows=rows, cols=cols)
        return panels

    def plan(self, size: tuple[int, int] | None = None) -> list[SubplotPlan]:
        """Compute every subplot's ranges, ticks and primitives for a canvas of ``size``."""
        if self._layout is None:
            raise InvalidLayout("figure has no layout")
        width, height = size if size is not None else (self.width, self.height)
        total = Rect(0, 0, int(width), int(height))
        arranged = self._layout.arrange(total)
        LOGGER.debug("figure %dx%d arranged %d subplots", width, height, len(arranged))
        return [
            plan_subplot(subplot, rect, density=self.density, limit_policy=self.limit_policy)
            for subplot, rect in arranged
        ]

    def draw_to_backend(self, canvas: Canvas) -> None:
        """Draw every subplot onto ``canvas``.

        All subplots are planned before the first primitive is emitted, so a
        limits, ticks or layout failure leaves the canvas untouched.
        """
        plans = self.plan(canvas.size())
        for plan in plans:
            _emit(canvas, plan.primitives)

    def draw_file(self, fmt: FileFormat | str, path: str | Path) -> None:
        fmt = FileFormat(fmt) if isinstance(fmt, str) else fmt
        if fmt is FileFormat.SVG:
            svg = SvgCanvas(self.width, self.height, background=self.style.face_color)
            self.draw_to_backend(svg)
            svg.save(path)
            return
        raster = RasterCanvas(self.width, self.height, background=self.style.face_color)
        self.draw_to_backend(raster)
        raster.save(path, fmt.value)

    def save(self, path: str | Path) -> None:
        self.draw_file(FileFormat.from_path(path), path)

    def to_rgba(self) -> np.ndarray:
        raster = RasterCanvas(self.width, self.height, background=self.style.face_color)
        self.draw_to_backend(raster)
        return raster.to_rgba()


def _emit(canvas: Canvas, primitives: Sequence) -> None:
    for primitive in primitives:
        try:
            canvas.draw_primitive(primitive)
        except DrawError:
            raise
        except Exception as exc:
            raise DrawError(f"{type(canvas).__name__} failed to draw {type(primitive).__name__}: {exc}") from exc
