from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Mapping, Sequence

from pubplot.axis import Axes
from pubplot.decorations import AxisTicks, overlay, plot_area, underlay
from pubplot.primitives import DrawPrimitive, Rect, coerce_color
from pubplot.render import render_series
from pubplot.scales import AxisRange, AxisTransform, LimitPolicy, resolve_limits
from pubplot.series import Series, SeriesKind
from pubplot.subplot import Subplot, SubplotConfig
from pubplot.ticks import DEFAULT_DENSITY, TickDensity, axis_ticks


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubplotPlan:
    """Everything derived for one subplot during a single draw.

    ``ranges`` and ``tick_sets`` hold one entry per drawn axis: always X and
    Y, plus X2/Y2 when the secondary axis is in use.
    """

    subplot: Subplot
    rect: Rect
    plot_area: Rect
    ranges: Mapping[Axes, AxisRange]
    tick_sets: Mapping[Axes, AxisTicks]
    primitives: tuple[DrawPrimitive, ...]

    @property
    def x_range(self) -> AxisRange:
        return self.ranges[Axes.X]

    @property
    def y_range(self) -> AxisRange:
        return self.ranges[Axes.Y]

    @property
    def x_ticks(self) -> AxisTicks:
        return self.tick_sets[Axes.X]

    @property
    def y_ticks(self) -> AxisTicks:
        return self.tick_sets[Axes.Y]

    def range(self, axis: Axes) -> AxisRange | None:
        return self.ranges.get(axis)

    def ticks(self, axis: Axes) -> AxisTicks | None:
        return self.tick_sets.get(axis)


def drawn_axes(config: SubplotConfig, series: Sequence[Series]) -> tuple[Axes, ...]:
    """The primary axes plus each secondary axis with limits, a label or series."""
    out = [Axes.X, Axes.Y]
    for axis in (Axes.X2, Axes.Y2):
        cfg = config.axis(axis)
        if cfg.limits is not None or cfg.label or any(s.uses(axis) for s in series):
            out.append(axis)
    return tuple(out)


def resolve_ranges(
    config: SubplotConfig,
    series: Sequence[Series],
    axes: Sequence[Axes],
    *,
    policy: LimitPolicy = LimitPolicy(),
) -> dict[Axes, AxisRange]:
    """Limits for every drawn axis.

    An axis with neither explicit limits nor series of its own takes the range
    of the axis opposite it when that one has data.
    """

    def scaled(axis: Axes) -> bool:
        return config.axis(axis).limits is not None or any(s.uses(axis) for s in series)

    ranges: dict[Axes, AxisRange] = {}
    for axis in axes:
        if scaled(axis) or not scaled(axis.opposite):
            ranges[axis] = resolve_limits(config.axis(axis), series, axis, policy=policy)
    return {axis: ranges[axis] if axis in ranges else ranges[axis.opposite] for axis in axes}


def plan_subplot(
    subplot: Subplot,
    rect: Rect,
    *,
    density: TickDensity = DEFAULT_DENSITY,
    limit_policy: LimitPolicy = LimitPolicy(),
) -> SubplotPlan:
    """Resolve limits, ticks and transforms for ``subplot`` and emit its primitives.

    Pure with respect to the subplot: nothing computed here is stored on it.
    """
    config = subplot.config
    fmt = config.format
    series = subplot.series

    axes = drawn_axes(config, series)
    ranges = resolve_ranges(config, series, axes, policy=limit_policy)
    area = plot_area(rect, config, axes)

    ticks: dict[Axes, AxisTicks] = {}
    transforms: dict[Axes, AxisTransform] = {}
    for axis in axes:
        length = area.width if axis.dimension is Axes.X else area.height
        major, minor = axis_ticks(config.axis(axis), ranges[axis], length, density=density)
        ticks[axis] = AxisTicks(tuple(major), tuple(minor))
        transforms[axis] = AxisTransform.for_axis(ranges[axis], area, axis)

    primitives = underlay(area, config, transforms, ticks)
    cycle = 0
    for s in series:
        color = s.style.color
        if color is None:
            color = fmt.color_cycle[cycle % len(fmt.color_cycle)]
            cycle += 1
            if s.kind is SeriesKind.FILLED_REGION:
                color = coerce_color(color, fmt.fill_alpha)
        tx, ty = transforms[s.x_axis], transforms[s.y_axis]
        primitives.extend(render_series(s, tx, ty, color=color, line_width=fmt.line_width, clip=area))
    primitives.extend(overlay(rect, area, config, transforms, ticks))

    LOGGER.debug(
        "planned subplot at %s: %s, %d primitives",
        rect,
        ", ".join(f"{axis.value}=[{r.vmin:g}, {r.vmax:g}]" for axis, r in ranges.items()),
        len(primitives),
    )
    return SubplotPlan(
        subplot=subplot,
        rect=rect,
        plot_area=area,
        ranges=ranges,
        tick_sets=ticks,
        primitives=tuple(primitives),
    )
