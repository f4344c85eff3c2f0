from __future__ import annotations


class PlotError(Exception):
    """Base class for every failure raised while building or drawing a figure.

    ``stage`` names the pipeline step that failed: ``series``, ``limits``,
    ``ticks``, ``layout``, ``draw`` or ``encode``.
    """

    stage = "plot"


class InvalidSeriesData(PlotError, ValueError):
    stage = "series"


class MismatchedSeriesLength(InvalidSeriesData):
    def __init__(self, x_len: int, y_len: int, *, what: str = "y") -> None:
        super().__init__(f"x and {what} length mismatch: {x_len} != {y_len}")
        self.x_len = x_len
        self.y_len = y_len


class InvalidLimits(PlotError, ValueError):
    stage = "limits"


class NoFiniteData(PlotError, ValueError):
    stage = "limits"


class BadTickLabels(PlotError, ValueError):
    stage = "ticks"


class InvalidLayout(PlotError, ValueError):
    stage = "layout"


class InsufficientSpace(PlotError):
    stage = "layout"


class DrawError(PlotError):
    stage = "draw"


class EncodingError(PlotError):
    stage = "encode"
