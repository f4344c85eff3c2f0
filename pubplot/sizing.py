from __future__ import annotations

import math


DEFAULT_FIGURE_SIZE_IN = (6.75, 5.0)
DEFAULT_DPI = 100.0
DEFAULT_ASPECT_RATIO = DEFAULT_FIGURE_SIZE_IN[0] / DEFAULT_FIGURE_SIZE_IN[1]


def inches_to_pixels(size_in: tuple[float, float], dpi: float = DEFAULT_DPI) -> tuple[int, int]:
    if dpi <= 0:
        raise ValueError("dpi must be > 0")
    w_in, h_in = size_in
    if w_in <= 0 or h_in <= 0:
        raise ValueError("figure size must be > 0")
    return (max(1, int(math.floor(w_in * dpi))), max(1, int(math.floor(h_in * dpi))))


def resolve_figure_size(
    width: int | None = None,
    height: int | None = None,
    *,
    aspect_ratio: float = DEFAULT_ASPECT_RATIO,
    dpi: float = DEFAULT_DPI,
) -> tuple[int, int]:
    """Pixel size for a figure, deriving whichever dimension is missing.

    With neither given, the default page size at ``dpi`` is used, fitted to
    ``aspect_ratio``.
    """
    if aspect_ratio <= 0:
        raise ValueError("aspect_ratio must be > 0")
    if width is None and height is None:
        default_w, default_h = inches_to_pixels(DEFAULT_FIGURE_SIZE_IN, dpi)
        return _fit_aspect(default_w, default_h, aspect_ratio)
    if width is None:
        assert height is not None
        if height <= 0:
            raise ValueError("height must be > 0")
        return (max(1, int(round(height * aspect_ratio))), int(height))
    if height is None:
        if width <= 0:
            raise ValueError("width must be > 0")
        return (int(width), max(1, int(round(width / aspect_ratio))))
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be > 0")
    return (int(width), int(height))


def _fit_aspect(max_w: int, max_h: int, aspect_ratio: float) -> tuple[int, int]:
    w = max_w
    h = int(round(w / aspect_ratio))
    if h > max_h:
        h = max_h
        w = int(round(h * aspect_ratio))
    return (max(1, w), max(1, h))
