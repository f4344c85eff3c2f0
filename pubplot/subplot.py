from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from pubplot.axis import AxisConfig, Axes, Grid, TickDirection, TickLabels, TickSpacing
from pubplot.primitives import RGBA, LineStyle, MarkerKind, coerce_color
from pubplot.series import Series, SeriesStyle


DEFAULT_COLOR_CYCLE: tuple[RGBA, ...] = (
    (69, 133, 136, 255),
    (214, 93, 14, 255),
    (152, 151, 26, 255),
    (177, 98, 134, 255),
    (204, 36, 29, 255),
)
DEFAULT_FONT_SIZE_PX = 14.0
DEFAULT_LINE_WIDTH = 2
DEFAULT_TICK_LENGTH = 8
DEFAULT_FILL_ALPHA = 0.5


@dataclass(frozen=True)
class SubplotFormat:
    plot_color: RGBA = (255, 255, 255, 0)
    grid_color: RGBA = (191, 191, 191, 255)
    minor_grid_color: RGBA = (224, 224, 224, 255)
    line_color: RGBA = (0, 0, 0, 255)
    text_color: RGBA = (0, 0, 0, 255)
    line_width: int = DEFAULT_LINE_WIDTH
    grid_line_width: int = 1
    font_size: float = DEFAULT_FONT_SIZE_PX
    font_family: str | None = None
    tick_length: int = DEFAULT_TICK_LENGTH
    minor_tick_length: int | None = None
    tick_direction: TickDirection = TickDirection.INNER
    color_cycle: tuple[RGBA, ...] = DEFAULT_COLOR_CYCLE
    fill_alpha: float = DEFAULT_FILL_ALPHA

    def __post_init__(self) -> None:
        if self.line_width <= 0 or self.grid_line_width <= 0:
            raise ValueError("line widths must be > 0")
        if self.font_size <= 0:
            raise ValueError("font_size must be > 0")
        if self.tick_length < 0 or (self.minor_tick_length is not None and self.minor_tick_length < 0):
            raise ValueError("tick lengths must be >= 0")
        if not self.color_cycle:
            raise ValueError("color_cycle must not be empty")

    @classmethod
    def dark(cls) -> "SubplotFormat":
        fg = (168, 153, 132, 255)
        return cls(
            plot_color=(40, 40, 40, 255),
            grid_color=(64, 64, 64, 255),
            minor_grid_color=(52, 52, 52, 255),
            line_color=fg,
            text_color=fg,
        )

    @property
    def resolved_minor_tick_length(self) -> int:
        if self.minor_tick_length is not None:
            return self.minor_tick_length
        return self.tick_length // 2


@dataclass(frozen=True)
class SubplotConfig:
    title: str | None = None
    format: SubplotFormat = field(default_factory=SubplotFormat)
    x: AxisConfig = field(default_factory=AxisConfig)
    y: AxisConfig = field(default_factory=AxisConfig)
    x2: AxisConfig = field(default_factory=AxisConfig)
    y2: AxisConfig = field(default_factory=AxisConfig)

    def axis(self, axis: Axes) -> AxisConfig:
        return getattr(self, axis.value)

    def validate(self) -> None:
        for axis in Axes:
            self.axis(axis).validate()


class SubplotBuilder:
    """Collects subplot options; ``build`` validates them once."""

    def __init__(self) -> None:
        self._title: str | None = None
        self._format = SubplotFormat()
        self._axes: dict[Axes, dict[str, Any]] = {axis: {} for axis in Axes}

    def title(self, title: str | None) -> "SubplotBuilder":
        self._title = title
        return self

    def format(self, fmt: SubplotFormat) -> "SubplotBuilder":
        self._format = fmt
        return self

    def label(self, axis: Axes, label: str | None) -> "SubplotBuilder":
        self._axes[axis]["label"] = label
        return self

    def limits(self, axis: Axes, vmin: float, vmax: float) -> "SubplotBuilder":
        self._axes[axis]["limits"] = (float(vmin), float(vmax))
        return self

    def auto_limits(self, axis: Axes) -> "SubplotBuilder":
        self._axes[axis]["limits"] = None
        return self

    def major_ticks(self, axis: Axes, spacing: TickSpacing | Sequence[float]) -> "SubplotBuilder":
        self._axes[axis]["major_ticks"] = _as_spacing(spacing)
        return self

    def major_labels(self, axis: Axes, labels: TickLabels | Sequence[str]) -> "SubplotBuilder":
        self._axes[axis]["major_labels"] = _as_labels(labels)
        return self

    def minor_ticks(self, axis: Axes, spacing: TickSpacing | Sequence[float]) -> "SubplotBuilder":
        self._axes[axis]["minor_ticks"] = _as_spacing(spacing)
        return self

    def minor_labels(self, axis: Axes, labels: TickLabels | Sequence[str]) -> "SubplotBuilder":
        self._axes[axis]["minor_labels"] = _as_labels(labels)
        return self

    def grid(self, axis: Axes, grid: Grid) -> "SubplotBuilder":
        self._axes[axis]["grid"] = grid
        return self

    def spine(self, axis: Axes, visible: bool) -> "SubplotBuilder":
        self._axes[axis]["spine_visible"] = bool(visible)
        return self

    def opposite_spine(self, axis: Axes, visible: bool) -> "SubplotBuilder":
        """Show or hide the frame line across the plot area from ``axis``."""
        self._axes[axis.opposite]["spine_visible"] = bool(visible)
        return self

    def ticks_visible(self, axis: Axes, visible: bool) -> "SubplotBuilder":
        self._axes[axis]["ticks_visible"] = bool(visible)
        return self

    def build(self) -> "Subplot":
        axes = {axis.value: AxisConfig(**options) for axis, options in self._axes.items()}
        config = SubplotConfig(title=self._title, format=self._format, **axes)
        config.validate()
        return Subplot(config)


def _as_spacing(spacing: TickSpacing | Sequence[float]) -> TickSpacing:
    if isinstance(spacing, TickSpacing):
        return spacing
    return TickSpacing.manual(spacing)


def _as_labels(labels: TickLabels | Sequence[str]) -> TickLabels:
    if isinstance(labels, TickLabels):
        return labels
    return TickLabels.manual(labels)


class Subplot:
    """One set of axes: a frozen configuration plus an ordered list of series."""

    def __init__(self, config: SubplotConfig | None = None) -> None:
        config = config or SubplotConfig()
        config.validate()
        self._config = config
        self._series: list[Series] = []

    @staticmethod
    def builder() -> SubplotBuilder:
        return SubplotBuilder()

    @property
    def config(self) -> SubplotConfig:
        return self._config

    @property
    def series(self) -> tuple[Series, ...]:
        return tuple(self._series)

    def axis(self, axis: Axes) -> AxisConfig:
        return self._config.axis(axis)

    def add_series(self, series: Series) -> "Subplot":
        self._series.append(series)
        return self

    def _add(self, series: Series, secondary_x: bool, secondary_y: bool) -> "Subplot":
        return self.add_series(
            series.on_axes(Axes.X2 if secondary_x else Axes.X, Axes.Y2 if secondary_y else Axes.Y)
        )

    def plot(
        self,
        y: Any = None,
        *,
        x: Any = None,
        data: Any = None,
        label: str | None = None,
        color: tuple[int, int, int] | tuple[int, int, int, int] | None = None,
        width: float | None = None,
        alpha: float = 1.0,
        line_style: LineStyle = LineStyle.SOLID,
        marker: MarkerKind | None = None,
        marker_size: float = 3.0,
        secondary_x: bool = False,
        secondary_y: bool = False,
    ) -> "Subplot":
        style = SeriesStyle(
            color=_maybe_color(color, alpha),
            line_width=width,
            line_style=line_style,
            marker=marker,
            marker_size=marker_size,
        )
        return self._add(Series.line(x, y, data=data, style=style, label=label), secondary_x, secondary_y)

    def step(
        self,
        y: Any = None,
        *,
        x: Any = None,
        data: Any = None,
        label: str | None = None,
        color: tuple[int, int, int] | tuple[int, int, int, int] | None = None,
        width: float | None = None,
        alpha: float = 1.0,
        line_style: LineStyle = LineStyle.SOLID,
        secondary_x: bool = False,
        secondary_y: bool = False,
    ) -> "Subplot":
        style = SeriesStyle(color=_maybe_color(color, alpha), line_width=width, line_style=line_style)
        return self._add(Series.step(x, y, data=data, style=style, label=label), secondary_x, secondary_y)

    def step_edges(
        self,
        edges: Any,
        y: Any,
        *,
        label: str | None = None,
        color: tuple[int, int, int] | tuple[int, int, int, int] | None = None,
        width: float | None = None,
        alpha: float = 1.0,
        line_style: LineStyle = LineStyle.SOLID,
        secondary_x: bool = False,
        secondary_y: bool = False,
    ) -> "Subplot":
        style = SeriesStyle(color=_maybe_color(color, alpha), line_width=width, line_style=line_style)
        return self._add(Series.step_from_edges(edges, y, style=style, label=label), secondary_x, secondary_y)

    def scatter(
        self,
        y: Any = None,
        *,
        x: Any = None,
        data: Any = None,
        label: str | None = None,
        color: tuple[int, int, int] | tuple[int, int, int, int] | None = None,
        size: float = 3.0,
        alpha: float = 1.0,
        marker: MarkerKind = MarkerKind.CIRCLE,
        outline: tuple[int, int, int] | tuple[int, int, int, int] | None = None,
        secondary_x: bool = False,
        secondary_y: bool = False,
    ) -> "Subplot":
        style = SeriesStyle(
            color=_maybe_color(color, alpha),
            marker=marker,
            marker_size=size,
            marker_outline=_maybe_color(outline, 1.0),
        )
        return self._add(Series.scatter(x, y, data=data, style=style, label=label), secondary_x, secondary_y)

    def fill_between(
        self,
        upper: Any,
        lower: Any = 0.0,
        *,
        x: Any = None,
        data: Any = None,
        label: str | None = None,
        color: tuple[int, int, int] | tuple[int, int, int, int] | None = None,
        alpha: float | None = None,
        secondary_x: bool = False,
        secondary_y: bool = False,
    ) -> "Subplot":
        fill_alpha = self._config.format.fill_alpha if alpha is None else alpha
        style = SeriesStyle(color=_maybe_color(color, fill_alpha))
        return self._add(Series.filled_region(x, upper, lower, data=data, style=style, label=label), secondary_x, secondary_y)


def _maybe_color(
    color: tuple[int, int, int] | tuple[int, int, int, int] | None,
    alpha: float,
) -> RGBA | None:
    if color is None:
        return None
    return coerce_color(color, alpha)
