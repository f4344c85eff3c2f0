from .base import Canvas
from .raster import RasterCanvas
from .recording import RecordingCanvas
from .svg import SvgCanvas

__all__ = ["Canvas", "RasterCanvas", "RecordingCanvas", "SvgCanvas"]
