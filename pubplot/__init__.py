from pubplot.api import figure
from pubplot.axis import AxisConfig, Axes, Grid, TickDirection, TickLabels, TickSpacing
from pubplot.backends import Canvas, RasterCanvas, RecordingCanvas, SvgCanvas
from pubplot.errors import (
    BadTickLabels,
    DrawError,
    EncodingError,
    InsufficientSpace,
    InvalidLayout,
    InvalidLimits,
    InvalidSeriesData,
    MismatchedSeriesLength,
    NoFiniteData,
    PlotError,
)
from pubplot.figure import FileFormat, Figure, FigureFormat, FigureStyle
from pubplot.layout import CustomLayout, FractionalArea, GridLayout, LayoutSpacing, SingleLayout, partition
from pubplot.pipeline import SubplotPlan
from pubplot.primitives import LineStyle, MarkerKind, Rect
from pubplot.scales import AxisRange, AxisTransform, LimitPolicy, resolve_limits
from pubplot.series import Series, SeriesKind, SeriesStyle
from pubplot.subplot import Subplot, SubplotBuilder, SubplotConfig, SubplotFormat
from pubplot.ticks import Tick, TickDensity, TickKind, format_tick_labels, major_ticks, minor_ticks

__all__ = [
    "AxisConfig",
    "AxisRange",
    "AxisTransform",
    "Axes",
    "BadTickLabels",
    "Canvas",
    "CustomLayout",
    "DrawError",
    "EncodingError",
    "FileFormat",
    "Figure",
    "FigureFormat",
    "FigureStyle",
    "FractionalArea",
    "Grid",
    "GridLayout",
    "InsufficientSpace",
    "InvalidLayout",
    "InvalidLimits",
    "InvalidSeriesData",
    "LayoutSpacing",
    "LimitPolicy",
    "LineStyle",
    "MarkerKind",
    "MismatchedSeriesLength",
    "NoFiniteData",
    "PlotError",
    "RasterCanvas",
    "RecordingCanvas",
    "Rect",
    "Series",
    "SeriesKind",
    "SeriesStyle",
    "SingleLayout",
    "Subplot",
    "SubplotBuilder",
    "SubplotConfig",
    "SubplotFormat",
    "SubplotPlan",
    "SvgCanvas",
    "Tick",
    "TickDensity",
    "TickDirection",
    "TickKind",
    "TickLabels",
    "TickSpacing",
    "figure",
    "format_tick_labels",
    "major_ticks",
    "minor_ticks",
    "partition",
    "resolve_limits",
]
