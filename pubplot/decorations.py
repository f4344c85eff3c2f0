from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Collection, Mapping, Sequence

from pubplot.axis import AxisConfig, Axes, Grid, TickDirection
from pubplot.errors import InsufficientSpace
from pubplot.primitives import (
    DrawPrimitive,
    FontStyle,
    LinePrimitive,
    PolygonPrimitive,
    Rect,
    StrokeStyle,
    TextPrimitive,
    rect_polygon,
)
from pubplot.scales import AxisTransform
from pubplot.subplot import SubplotConfig, SubplotFormat
from pubplot.ticks import Tick


MIN_PLOT_SIZE = 2
Y_TICK_LABEL_LETTERS = 5
PRIMARY_AXES = (Axes.X, Axes.Y)

# Pixel direction pointing into the plot area from each axis' spine.
_INWARD = {Axes.X: -1.0, Axes.Y: 1.0, Axes.X2: 1.0, Axes.Y2: -1.0}
_TICK_LABEL_ALIGN = {
    Axes.X: ("center", "top"),
    Axes.Y: ("right", "middle"),
    Axes.X2: ("center", "bottom"),
    Axes.Y2: ("left", "middle"),
}


@dataclass(frozen=True)
class Gutters:
    left: int
    top: int
    right: int
    bottom: int


@dataclass(frozen=True)
class AxisTicks:
    majors: tuple[Tick, ...]
    minors: tuple[Tick, ...]


def letter_size(fmt: SubplotFormat) -> tuple[float, float]:
    return (0.6 * fmt.font_size, float(fmt.font_size))


def gutters(config: SubplotConfig, axes: Collection[Axes] = PRIMARY_AXES) -> Gutters:
    """Space around the plot area for title, labels and outward ticks.

    Sized from nominal letter metrics so every backend gets the same layout.
    Top and right grow only for the secondary axes listed in ``axes``.
    """
    fmt = config.format
    letter_w, letter_h = letter_size(fmt)
    pad = int(round(0.6 * letter_h))
    line_h = int(math.ceil(letter_h)) + pad
    number_w = int(math.ceil(Y_TICK_LABEL_LETTERS * letter_w)) + pad

    bottom = pad + _outer_extent(config.x, fmt)
    if _shows_tick_labels(config.x):
        bottom += line_h
    if config.x.label:
        bottom += line_h

    left = pad + _outer_extent(config.y, fmt)
    if _shows_tick_labels(config.y):
        left += number_w
    if config.y.label:
        left += line_h

    top = max(pad, int(letter_h) // 2)
    if Axes.X2 in axes:
        top = pad + _outer_extent(config.x2, fmt)
        if _shows_tick_labels(config.x2):
            top += line_h
        if config.x2.label:
            top += line_h
    if config.title:
        top += line_h

    # Room for the last x tick label to overhang the plot area.
    right = pad
    if _shows_tick_labels(config.x) or (Axes.X2 in axes and _shows_tick_labels(config.x2)):
        right = max(pad, int(math.ceil(2 * letter_w)))
    if Axes.Y2 in axes:
        secondary = pad + _outer_extent(config.y2, fmt)
        if _shows_tick_labels(config.y2):
            secondary += number_w
        if config.y2.label:
            secondary += line_h
        right = max(right, secondary)
    return Gutters(left=left, top=top, right=right, bottom=bottom)


def plot_area(subplot_rect: Rect, config: SubplotConfig, axes: Collection[Axes] = PRIMARY_AXES) -> Rect:
    g = gutters(config, axes)
    area = subplot_rect.inset(g.left, g.top, g.right, g.bottom)
    if area.width < MIN_PLOT_SIZE or area.height < MIN_PLOT_SIZE:
        raise InsufficientSpace(
            f"subplot of {subplot_rect.width}x{subplot_rect.height} px leaves no room for the plot area"
        )
    return area


def underlay(
    plot: Rect,
    config: SubplotConfig,
    transforms: Mapping[Axes, AxisTransform],
    ticks: Mapping[Axes, AxisTicks],
) -> list[DrawPrimitive]:
    """Plot background and grid lines, drawn beneath the data."""
    fmt = config.format
    out: list[DrawPrimitive] = []
    if fmt.plot_color[3] > 0:
        out.append(PolygonPrimitive(points=rect_polygon(plot), color=fmt.plot_color))

    minor_stroke = StrokeStyle(color=fmt.minor_grid_color, width=fmt.grid_line_width)
    major_stroke = StrokeStyle(color=fmt.grid_color, width=fmt.grid_line_width)
    for axis, transform in transforms.items():
        grid = config.axis(axis).grid
        if grid is Grid.NONE:
            continue
        if grid is Grid.FULL:
            out.extend(_grid_lines(axis, ticks[axis].minors, transform, plot, minor_stroke))
        out.extend(_grid_lines(axis, ticks[axis].majors, transform, plot, major_stroke))
    return out


def overlay(
    subplot_rect: Rect,
    plot: Rect,
    config: SubplotConfig,
    transforms: Mapping[Axes, AxisTransform],
    ticks: Mapping[Axes, AxisTicks],
) -> list[DrawPrimitive]:
    """Spines, tick marks, tick labels, axis labels and title, drawn above the data.

    Secondary axes get ticks and labels only when they appear in ``transforms``;
    their spines are the top and right frame lines and follow ``spine_visible``.
    """
    fmt = config.format
    _, letter_h = letter_size(fmt)
    pad = int(round(0.6 * letter_h))
    line_h = int(math.ceil(letter_h)) + pad
    font = FontStyle(size=fmt.font_size, color=fmt.text_color, family=fmt.font_family)
    spine = StrokeStyle(color=fmt.line_color, width=fmt.line_width)
    tick_stroke = StrokeStyle(color=fmt.line_color, width=max(1, fmt.line_width // 2))
    left, right = float(plot.x), float(plot.right)
    top, bottom = float(plot.y), float(plot.bottom)
    spines = {Axes.X: bottom, Axes.Y: left, Axes.X2: top, Axes.Y2: right}
    out: list[DrawPrimitive] = []

    if config.x.spine_visible:
        out.append(LinePrimitive((left, bottom), (right, bottom), spine))
    if config.y.spine_visible:
        out.append(LinePrimitive((left, top), (left, bottom), spine))
    if config.x2.spine_visible:
        out.append(LinePrimitive((left, top), (right, top), spine))
    if config.y2.spine_visible:
        out.append(LinePrimitive((right, top), (right, bottom), spine))

    major_len = fmt.tick_length
    minor_len = fmt.resolved_minor_tick_length
    for axis, transform in transforms.items():
        if not config.axis(axis).ticks_visible:
            continue
        for tick in ticks[axis].minors:
            out.append(_tick_mark(axis, transform.to_pixel(tick.position), spines[axis], minor_len, fmt.tick_direction, tick_stroke))
        for tick in ticks[axis].majors:
            out.append(_tick_mark(axis, transform.to_pixel(tick.position), spines[axis], major_len, fmt.tick_direction, tick_stroke))

    label_gap = pad / 2.0
    for axis, transform in transforms.items():
        offset = _outer_extent(config.axis(axis), fmt) + label_gap
        h_align, v_align = _TICK_LABEL_ALIGN[axis]
        for tick in ticks[axis].majors + ticks[axis].minors:
            if not tick.label:
                continue
            p = transform.to_pixel(tick.position)
            if axis is Axes.X:
                anchor = (p, bottom + offset)
            elif axis is Axes.Y:
                anchor = (left - offset, p)
            elif axis is Axes.X2:
                anchor = (p, top - offset)
            else:
                anchor = (right + offset, p)
            out.append(TextPrimitive(anchor, tick.label, font, h_align=h_align, v_align=v_align))

    center_x = (left + right) / 2.0
    center_y = (top + bottom) / 2.0
    if config.x.label:
        anchor = (center_x, float(subplot_rect.bottom) - label_gap)
        out.append(TextPrimitive(anchor, config.x.label, font, h_align="center", v_align="bottom"))
    if config.y.label:
        anchor = (float(subplot_rect.x) + label_gap + letter_h / 2.0, center_y)
        out.append(TextPrimitive(anchor, config.y.label, font, h_align="center", v_align="middle", rotation=90))
    if Axes.X2 in transforms and config.x2.label:
        rise = _outer_extent(config.x2, fmt) + label_gap
        if _shows_tick_labels(config.x2):
            rise += line_h
        anchor = (center_x, top - rise)
        out.append(TextPrimitive(anchor, config.x2.label, font, h_align="center", v_align="bottom"))
    if Axes.Y2 in transforms and config.y2.label:
        anchor = (float(subplot_rect.right) - label_gap - letter_h / 2.0, center_y)
        out.append(TextPrimitive(anchor, config.y2.label, font, h_align="center", v_align="middle", rotation=270))
    if config.title:
        anchor = (center_x, float(subplot_rect.y) + label_gap)
        out.append(TextPrimitive(anchor, config.title, font, h_align="center", v_align="top"))
    return out


def _shows_tick_labels(axis: AxisConfig) -> bool:
    majors = axis.major_ticks.kind != "none" and axis.major_labels.kind != "none"
    minors = axis.minor_ticks.kind != "none" and axis.minor_labels.kind != "none"
    return majors or minors


def _outer_extent(axis: AxisConfig, fmt: SubplotFormat) -> int:
    if not axis.ticks_visible or fmt.tick_direction is TickDirection.INNER:
        return 0
    return fmt.tick_length


def _grid_lines(
    axis: Axes,
    ticks: Sequence[Tick],
    transform: AxisTransform,
    plot: Rect,
    stroke: StrokeStyle,
) -> list[DrawPrimitive]:
    out: list[DrawPrimitive] = []
    for tick in ticks:
        p = transform.to_pixel(tick.position)
        if axis.dimension is Axes.X:
            out.append(LinePrimitive((p, float(plot.y)), (p, float(plot.bottom)), stroke, clip=plot))
        else:
            out.append(LinePrimitive((float(plot.x), p), (float(plot.right), p), stroke, clip=plot))
    return out


def _tick_mark(
    axis: Axes,
    position: float,
    spine: float,
    length: int,
    direction: TickDirection,
    stroke: StrokeStyle,
) -> LinePrimitive:
    inward = _INWARD[axis]
    inner = spine + inward * length if direction is not TickDirection.OUTER else spine
    outer = spine - inward * length if direction is not TickDirection.INNER else spine
    if axis.dimension is Axes.X:
        return LinePrimitive((position, inner), (position, outer), stroke)
    return LinePrimitive((inner, position), (outer, position), stroke)
