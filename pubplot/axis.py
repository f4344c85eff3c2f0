from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Sequence

import numpy as np

from pubplot.errors import InvalidLimits


class Axes(Enum):
    """Data axes of a subplot. ``X2``/``Y2`` are the top and right secondary axes."""

    X = "x"
    Y = "y"
    X2 = "x2"
    Y2 = "y2"

    @property
    def dimension(self) -> "Axes":
        """The primary axis sharing this axis's direction."""
        if self is Axes.X2:
            return Axes.X
        if self is Axes.Y2:
            return Axes.Y
        return self

    @property
    def opposite(self) -> "Axes":
        """The axis drawn on the other side of the plot area."""
        return _OPPOSITE[self]

    @property
    def is_secondary(self) -> bool:
        return self in (Axes.X2, Axes.Y2)


_OPPOSITE = {Axes.X: Axes.X2, Axes.X2: Axes.X, Axes.Y: Axes.Y2, Axes.Y2: Axes.Y}


class Grid(Enum):
    NONE = "none"
    MAJOR = "major"
    FULL = "full"


class TickDirection(Enum):
    INNER = "inner"
    OUTER = "outer"
    BOTH = "both"


@dataclass(frozen=True)
class TickSpacing:
    """How tick positions are chosen along one axis."""

    kind: Literal["auto", "none", "count", "manual"] = "auto"
    n: int = 0
    values: tuple[float, ...] = ()

    @classmethod
    def auto(cls) -> "TickSpacing":
        return cls()

    @classmethod
    def none(cls) -> "TickSpacing":
        return cls(kind="none")

    @classmethod
    def count(cls, n: int) -> "TickSpacing":
        if n < 2:
            raise ValueError("tick count must be >= 2")
        return cls(kind="count", n=int(n))

    @classmethod
    def manual(cls, values: Sequence[float]) -> "TickSpacing":
        out = tuple(float(v) for v in values)
        if not all(np.isfinite(out)):
            raise ValueError("manual tick positions must be finite")
        return cls(kind="manual", values=out)


@dataclass(frozen=True)
class TickLabels:
    kind: Literal["auto", "none", "manual"] = "auto"
    labels: tuple[str, ...] = ()

    @classmethod
    def auto(cls) -> "TickLabels":
        return cls()

    @classmethod
    def none(cls) -> "TickLabels":
        return cls(kind="none")

    @classmethod
    def manual(cls, labels: Sequence[str]) -> "TickLabels":
        return cls(kind="manual", labels=tuple(str(v) for v in labels))


@dataclass(frozen=True)
class AxisConfig:
    label: str | None = None
    limits: tuple[float, float] | None = None
    major_ticks: TickSpacing = field(default_factory=TickSpacing.auto)
    major_labels: TickLabels = field(default_factory=TickLabels.auto)
    minor_ticks: TickSpacing = field(default_factory=TickSpacing.auto)
    minor_labels: TickLabels = field(default_factory=TickLabels.none)
    grid: Grid = Grid.NONE
    spine_visible: bool = True
    ticks_visible: bool = True
    scale: Literal["linear"] = "linear"

    def validate(self) -> None:
        if self.limits is not None:
            check_limits(*self.limits)
        if self.scale != "linear":
            raise ValueError(f"unsupported axis scale: {self.scale}")


def check_limits(vmin: float, vmax: float) -> tuple[float, float]:
    lo = float(vmin)
    hi = float(vmax)
    if not (np.isfinite(lo) and np.isfinite(hi)):
        raise InvalidLimits(f"axis limits must be finite, got ({lo}, {hi})")
    if not lo < hi:
        raise InvalidLimits(f"axis limits must satisfy min < max, got ({lo}, {hi})")
    return lo, hi
