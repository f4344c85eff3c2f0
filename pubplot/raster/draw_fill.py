from __future__ import annotations

from typing import Sequence

import numpy as np
from PIL import Image, ImageDraw

from pubplot.primitives import RGBA, Point
from pubplot.raster.canvas import blend_mask


def fill_polygon(dst: np.ndarray, points: Sequence[Point], color: RGBA) -> None:
    """Fill a closed polygon; Pillow rasterizes the coverage mask."""
    if len(points) < 3:
        return
    h, w = dst.shape[:2]
    image = Image.new("L", (w, h), 0)
    ImageDraw.Draw(image).polygon([(float(x), float(y)) for x, y in points], fill=255)
    blend_mask(dst, 0, 0, np.asarray(image, dtype=np.uint8), color)
