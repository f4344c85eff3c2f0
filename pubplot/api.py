from __future__ import annotations

from pubplot.figure import Figure, FigureStyle
from pubplot.primitives import RGBA
from pubplot.sizing import DEFAULT_ASPECT_RATIO, DEFAULT_DPI, resolve_figure_size


def figure(
    width: int | None = None,
    height: int | None = None,
    *,
    aspect_ratio: float = DEFAULT_ASPECT_RATIO,
    dpi: float = DEFAULT_DPI,
    face_color: RGBA = (255, 255, 255, 255),
) -> Figure:
    width, height = resolve_figure_size(width, height, aspect_ratio=aspect_ratio, dpi=dpi)
    return Figure(width=width, height=height, style=FigureStyle(face_color=face_color))
