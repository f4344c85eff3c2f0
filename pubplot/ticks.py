from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
import logging
import math
from typing import Iterator, Sequence

import numpy as np

from pubplot.axis import AxisConfig, TickLabels, TickSpacing
from pubplot.errors import BadTickLabels
from pubplot.scales import AxisRange


LOGGER = logging.getLogger(__name__)

NICE_MULTIPLIERS = (5.0, 2.0, 1.0)
DEFAULT_MINOR_DIVISIONS = 4
MAX_LABEL_DECIMALS = 15
_INDEX_TOL = 1e-9
_MAX_CANDIDATES = 400


class TickKind(Enum):
    MAJOR = "major"
    MINOR = "minor"


@dataclass(frozen=True)
class Tick:
    position: float
    label: str | None
    kind: TickKind = TickKind.MAJOR


@dataclass(frozen=True)
class TickDensity:
    """Pixel density targets for automatic major ticks.

    An axis of ``L`` pixels accepts between ``lo = max(2, L // max_px_per_tick)``
    and ``lo * window_ratio`` ticks and prefers ``L / ideal_px_per_tick``.
    Consecutive 1-2-5 steps differ by at most 2.5x, so a ratio of 3 or more
    always leaves a nice step inside the window.
    """

    max_px_per_tick: float = 100.0
    ideal_px_per_tick: float = 80.0
    window_ratio: int = 3

    def __post_init__(self) -> None:
        if self.max_px_per_tick <= 0 or self.ideal_px_per_tick <= 0:
            raise ValueError("tick pixel spacing must be > 0")
        if self.window_ratio < 3:
            raise ValueError("window_ratio must be >= 3")

    def window(self, pixel_length: float) -> tuple[int, int]:
        lo = max(2, int(max(0.0, pixel_length) // self.max_px_per_tick))
        return lo, lo * self.window_ratio

    def ideal_count(self, pixel_length: float) -> float:
        lo, hi = self.window(pixel_length)
        return min(max(pixel_length / self.ideal_px_per_tick, float(lo)), float(hi))


DEFAULT_DENSITY = TickDensity()


def tick_count(data_range: AxisRange, step: float) -> int:
    first, last = _index_bounds(data_range.vmin, data_range.vmax, step)
    return max(0, last - first + 1)


def choose_major_step(
    data_range: AxisRange,
    pixel_length: float,
    *,
    density: TickDensity = DEFAULT_DENSITY,
) -> float:
    """Pick the 1-2-5 step whose tick count is nearest the ideal density.

    Only counts inside the density window compete; ties go to the smaller
    step.
    """
    lo, hi = density.window(pixel_length)
    ideal = density.ideal_count(pixel_length)

    best_step = None
    best_key: tuple[float, float, float] | None = None
    for step in _candidate_steps(data_range.span):
        n = tick_count(data_range, step)
        outside = float(max(lo - n, n - hi, 0))
        key = (outside, abs(n - ideal), step)
        if best_key is None or key < best_key:
            best_key = key
            best_step = step
        if n > hi:
            break
    assert best_step is not None
    LOGGER.debug("major step %g for span %g over %.1f px (window %d..%d)", best_step, data_range.span, pixel_length, lo, hi)
    return best_step


def major_tick_values(data_range: AxisRange, step: float) -> np.ndarray:
    first, last = _index_bounds(data_range.vmin, data_range.vmax, step)
    if last < first:
        return np.empty(0, dtype=np.float64)
    ticks = np.arange(first, last + 1, dtype=np.float64) * step
    # Normalize floating-point drift so values like 0.30000000000000004 become 0.3.
    ticks = np.round(ticks, _decimals_from_step(step) + 1)
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return np.clip(ticks, data_range.vmin, data_range.vmax)


def major_ticks(
    data_range: AxisRange,
    pixel_length: float,
    *,
    density: TickDensity = DEFAULT_DENSITY,
) -> list[Tick]:
    step = choose_major_step(data_range, pixel_length, density=density)
    values = major_tick_values(data_range, step)
    labels = format_tick_labels(values)
    return [Tick(float(v), label, TickKind.MAJOR) for v, label in zip(values.tolist(), labels, strict=True)]


def minor_tick_values(
    data_range: AxisRange,
    majors: Sequence[float],
    *,
    divisions: int = DEFAULT_MINOR_DIVISIONS,
) -> np.ndarray:
    """Subdivide the major step, skipping positions that land on a major.

    Minors are anchored on the first major and run out to both range bounds.
    """
    if divisions < 2:
        raise ValueError("minor divisions must be >= 2")
    major_arr = np.asarray(majors, dtype=np.float64)
    if major_arr.size < 2:
        return np.empty(0, dtype=np.float64)
    step = float(major_arr[1] - major_arr[0])
    if not step > 0:
        return np.empty(0, dtype=np.float64)

    anchor = float(major_arr[0])
    minor_step = step / divisions
    first = math.ceil((data_range.vmin - anchor) / minor_step - _INDEX_TOL)
    last = math.floor((data_range.vmax - anchor) / minor_step + _INDEX_TOL)
    if last < first:
        return np.empty(0, dtype=np.float64)
    idx = np.arange(first, last + 1, dtype=np.int64)
    idx = idx[np.mod(idx, divisions) != 0]
    values = anchor + idx.astype(np.float64) * minor_step
    values = np.round(values, _decimals_from_step(minor_step) + 1)
    values = np.clip(values, data_range.vmin, data_range.vmax)
    return _drop_coincident(values, major_arr, atol=minor_step * 1e-6)


def minor_ticks(
    data_range: AxisRange,
    majors: Sequence[Tick],
    *,
    divisions: int = DEFAULT_MINOR_DIVISIONS,
) -> list[Tick]:
    values = minor_tick_values(data_range, [t.position for t in majors], divisions=divisions)
    return [Tick(float(v), None, TickKind.MINOR) for v in values.tolist()]


def format_tick_labels(values: Sequence[float] | np.ndarray) -> list[str]:
    """Shortest uniform-precision labels that keep every tick distinct.

    A precision is accepted once labels are pairwise distinct and each one
    reads back within a millionth of the tick step.
    """
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return []
    uniq = np.unique(arr[np.isfinite(arr)])
    step = float(np.min(np.diff(uniq))) if uniq.size > 1 else None
    if step is not None:
        arr = np.where(np.abs(arr) <= step * 1e-9, 0.0, arr)
        tol = step * 1e-6
    else:
        tol = max(float(np.max(np.abs(uniq))) * 1e-6 if uniq.size else 0.0, 1e-12)

    nonzero = np.abs(uniq[uniq != 0.0])
    scientific = nonzero.size > 0 and (float(np.max(nonzero)) >= 1e6 or float(np.max(nonzero)) < 1e-4)

    labels: list[str] = []
    for decimals in range(MAX_LABEL_DECIMALS + 1):
        labels = [_format_value(float(v), decimals, scientific=scientific) for v in arr.tolist()]
        finite_labels = {label for label, v in zip(labels, arr.tolist(), strict=True) if np.isfinite(v)}
        if len(finite_labels) < uniq.size:
            continue
        if all(abs(float(label) - v) <= tol for label, v in zip(labels, arr.tolist(), strict=True) if np.isfinite(v)):
            break
    return labels


def axis_ticks(
    config: AxisConfig,
    data_range: AxisRange,
    pixel_length: float,
    *,
    density: TickDensity = DEFAULT_DENSITY,
    minor_divisions: int = DEFAULT_MINOR_DIVISIONS,
) -> tuple[list[Tick], list[Tick]]:
    """Major and minor ticks for one axis after applying its overrides."""
    auto_majors: np.ndarray | None = None

    def _auto_major_values() -> np.ndarray:
        nonlocal auto_majors
        if auto_majors is None:
            step = choose_major_step(data_range, pixel_length, density=density)
            auto_majors = major_tick_values(data_range, step)
        return auto_majors

    spacing = config.major_ticks
    if spacing.kind == "auto":
        major_values = _auto_major_values()
    else:
        major_values = _placed_values(spacing, data_range)
    major_labels = _labels_for(config.major_labels, spacing, major_values, data_range, what="major")
    majors = [Tick(float(v), label, TickKind.MAJOR) for v, label in zip(major_values.tolist(), major_labels, strict=True)]

    spacing = config.minor_ticks
    if spacing.kind == "auto":
        anchors = major_values if config.major_ticks.kind != "none" else _auto_major_values()
        if config.major_ticks.kind != "auto" and not _is_uniform(anchors):
            anchors = _auto_major_values()
        minor_values = minor_tick_values(data_range, anchors.tolist(), divisions=minor_divisions)
    else:
        minor_values = _placed_values(spacing, data_range)
    if major_values.size:
        minor_values = _drop_coincident(minor_values, major_values, atol=data_range.span * 1e-9)
    minor_labels = _labels_for(config.minor_labels, spacing, minor_values, data_range, what="minor")
    minors = [Tick(float(v), label, TickKind.MINOR) for v, label in zip(minor_values.tolist(), minor_labels, strict=True)]
    return majors, minors


def _placed_values(spacing: TickSpacing, data_range: AxisRange) -> np.ndarray:
    if spacing.kind == "none":
        return np.empty(0, dtype=np.float64)
    if spacing.kind == "count":
        return np.linspace(data_range.vmin, data_range.vmax, spacing.n, dtype=np.float64)
    values = np.asarray(spacing.values, dtype=np.float64)
    return values[_within(values, data_range)]


def _labels_for(
    labels: TickLabels,
    spacing: TickSpacing,
    values: np.ndarray,
    data_range: AxisRange,
    *,
    what: str,
) -> list[str | None]:
    if labels.kind == "none":
        return [None] * int(values.size)
    if labels.kind == "auto":
        return list(format_tick_labels(values))

    if spacing.kind == "manual":
        if len(labels.labels) != len(spacing.values):
            raise BadTickLabels(
                f"{len(labels.labels)} {what} tick labels given for {len(spacing.values)} manual positions"
            )
        placed = np.asarray(spacing.values, dtype=np.float64)
        keep = _within(placed, data_range)
        return [label for label, k in zip(labels.labels, keep.tolist(), strict=True) if k]
    if len(labels.labels) != values.size:
        raise BadTickLabels(f"{len(labels.labels)} {what} tick labels given for {values.size} ticks")
    return list(labels.labels)


def _within(values: np.ndarray, data_range: AxisRange) -> np.ndarray:
    tol = data_range.span * 1e-9
    return (values >= data_range.vmin - tol) & (values <= data_range.vmax + tol)


def _drop_coincident(values: np.ndarray, majors: np.ndarray, *, atol: float) -> np.ndarray:
    if values.size == 0 or majors.size == 0:
        return values
    hit = np.isclose(values[:, None], majors[None, :], rtol=0.0, atol=atol).any(axis=1)
    return values[~hit]


def _is_uniform(values: np.ndarray) -> bool:
    if values.size < 2:
        return False
    diffs = np.diff(values)
    return bool(np.allclose(diffs, diffs[0], rtol=1e-6, atol=0.0))


def _candidate_steps(span: float) -> Iterator[float]:
    exp = math.ceil(math.log10(span))
    yield float(10.0**exp)
    for _ in range(_MAX_CANDIDATES):
        exp -= 1
        base = 10.0**exp
        for mult in NICE_MULTIPLIERS:
            yield float(mult * base)


def _index_bounds(vmin: float, vmax: float, step: float) -> tuple[int, int]:
    first = math.ceil(vmin / step - _INDEX_TOL)
    last = math.floor(vmax / step + _INDEX_TOL)
    return first, last


def _format_value(value: float, decimals: int, *, scientific: bool) -> str:
    if not np.isfinite(value):
        return str(value)
    if scientific and value != 0.0:
        mantissa, exponent = f"{value:.{decimals}e}".split("e")
        if "." in mantissa:
            mantissa = mantissa.rstrip("0").rstrip(".")
        return f"{mantissa}e{int(exponent)}"
    out = f"{value:.{decimals}f}"
    # Only trim trailing zeros for fractional values (preserve integer zeros like 30, 40).
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    d = Decimal(repr(step)).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(12, decimals)
