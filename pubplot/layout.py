from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import logging
import math
from typing import TYPE_CHECKING, Sequence, Union

from pubplot.errors import InsufficientSpace, InvalidLayout
from pubplot.primitives import Rect

if TYPE_CHECKING:
    from pubplot.subplot import Subplot


LOGGER = logging.getLogger(__name__)

DEFAULT_OUTER_MARGIN = 2
DEFAULT_CELL_SPACING = 8
DEFAULT_MIN_SUBPLOT_SIZE = (16, 16)


@dataclass(frozen=True)
class LayoutSpacing:
    margin: int = DEFAULT_OUTER_MARGIN
    spacing: int = DEFAULT_CELL_SPACING
    min_subplot_size: tuple[int, int] = DEFAULT_MIN_SUBPLOT_SIZE

    def __post_init__(self) -> None:
        if self.margin < 0 or self.spacing < 0:
            raise ValueError("layout margin/spacing must be >= 0")
        if self.min_subplot_size[0] < 1 or self.min_subplot_size[1] < 1:
            raise ValueError("min_subplot_size must be >= 1")


@dataclass(frozen=True)
class FractionalArea:
    """Region of the figure in fractions of its size; y grows upward."""

    xmin: float
    xmax: float
    ymin: float
    ymax: float

    def __post_init__(self) -> None:
        for name in ("xmin", "xmax", "ymin", "ymax"):
            v = getattr(self, name)
            if not 0.0 <= v <= 1.0:
                raise InvalidLayout(f"fractional area {name} must be within [0, 1], got {v}")
        if not self.xmin < self.xmax or not self.ymin < self.ymax:
            raise InvalidLayout("fractional area must have min < max on both axes")

    def overlaps(self, other: "FractionalArea") -> bool:
        return self.xmin < other.xmax and other.xmin < self.xmax and self.ymin < other.ymax and other.ymin < self.ymax

    def to_rect(self, total: Rect) -> Rect:
        x0 = total.x + math.floor(self.xmin * total.width)
        x1 = total.x + math.floor(self.xmax * total.width)
        y0 = total.y + math.floor((1.0 - self.ymax) * total.height)
        y1 = total.y + math.floor((1.0 - self.ymin) * total.height)
        return Rect(x0, y0, x1 - x0, y1 - y0)


@dataclass(frozen=True)
class SingleStrategy:
    spacing: LayoutSpacing = field(default_factory=LayoutSpacing)


@dataclass(frozen=True)
class GridStrategy:
    rows: int | None = None
    cols: int | None = None
    aspect: float | None = None
    spacing: LayoutSpacing = field(default_factory=LayoutSpacing)


@dataclass(frozen=True)
class CustomStrategy:
    areas: tuple[FractionalArea, ...]
    spacing: LayoutSpacing = field(default_factory=LayoutSpacing)


Strategy = Union[SingleStrategy, GridStrategy, CustomStrategy]


def partition(total: Rect, subplot_count: int, strategy: Strategy) -> list[Rect]:
    """Split ``total`` into ``subplot_count`` disjoint rectangles."""
    if subplot_count < 0:
        raise InvalidLayout("subplot count must be >= 0")
    if subplot_count == 0:
        return []

    if isinstance(strategy, SingleStrategy):
        if subplot_count != 1:
            raise InvalidLayout("single layout holds exactly one subplot")
        m = strategy.spacing.margin
        rect = total.inset(m, m, m, m)
        _check_size(rect, strategy.spacing)
        return [rect]

    if isinstance(strategy, GridStrategy):
        aspect = strategy.aspect
        if aspect is None:
            aspect = total.width / total.height if total.height > 0 else 1.0
        rows, cols = grid_shape(subplot_count, rows=strategy.rows, cols=strategy.cols, aspect=aspect)
        return grid_cells(total, rows, cols, strategy.spacing)[:subplot_count]

    if isinstance(strategy, CustomStrategy):
        if len(strategy.areas) != subplot_count:
            raise InvalidLayout(f"{len(strategy.areas)} areas given for {subplot_count} subplots")
        _check_disjoint(strategy.areas)
        rects = [area.to_rect(total) for area in strategy.areas]
        for rect in rects:
            _check_size(rect, strategy.spacing)
        return rects

    raise InvalidLayout(f"unsupported layout strategy: {strategy!r}")


def grid_shape(count: int, *, rows: int | None = None, cols: int | None = None, aspect: float = 1.0) -> tuple[int, int]:
    """Rows and columns for ``count`` cells; ``aspect`` is the preferred cols/rows ratio."""
    if count < 1:
        raise InvalidLayout("grid needs at least one subplot")
    if rows is not None and rows < 1 or cols is not None and cols < 1:
        raise InvalidLayout("rows and cols must be > 0")
    if rows is not None and cols is not None:
        if rows * cols < count:
            raise InvalidLayout(f"{rows}x{cols} grid cannot hold {count} subplots")
        return rows, cols
    if rows is not None:
        return rows, math.ceil(count / rows)
    if cols is not None:
        return math.ceil(count / cols), cols
    if aspect <= 0:
        raise InvalidLayout("grid aspect must be > 0")
    cols = min(count, max(1, round(math.sqrt(count * aspect))))
    return math.ceil(count / cols), cols


def grid_cells(total: Rect, rows: int, cols: int, spacing: LayoutSpacing = LayoutSpacing()) -> list[Rect]:
    m = spacing.margin
    gap = spacing.spacing
    inner_w = total.width - 2 * m - gap * (cols - 1)
    inner_h = total.height - 2 * m - gap * (rows - 1)
    cell_w = inner_w // cols if inner_w > 0 else 0
    cell_h = inner_h // rows if inner_h > 0 else 0
    min_w, min_h = spacing.min_subplot_size
    if cell_w < min_w or cell_h < min_h:
        raise InsufficientSpace(
            f"{total.width}x{total.height} px is too small for a {rows}x{cols} grid "
            f"(cell {cell_w}x{cell_h}, need {min_w}x{min_h})"
        )
    cells: list[Rect] = []
    for r in range(rows):
        for c in range(cols):
            cells.append(Rect(total.x + m + c * (cell_w + gap), total.y + m + r * (cell_h + gap), cell_w, cell_h))
    LOGGER.debug("grid %dx%d cells of %dx%d px", rows, cols, cell_w, cell_h)
    return cells


def _check_size(rect: Rect, spacing: LayoutSpacing) -> None:
    min_w, min_h = spacing.min_subplot_size
    if rect.width < min_w or rect.height < min_h:
        raise InsufficientSpace(f"subplot area {rect.width}x{rect.height} px is below the {min_w}x{min_h} minimum")


def _check_disjoint(areas: Sequence[FractionalArea]) -> None:
    for i, a in enumerate(areas):
        for b in areas[i + 1 :]:
            if a.overlaps(b):
                raise InvalidLayout(f"fractional areas overlap: {a} and {b}")


class Layout(ABC):
    """Arrangement of subplots inside a figure."""

    @abstractmethod
    def subplots(self) -> list["Subplot"]:
        raise NotImplementedError

    @abstractmethod
    def strategy(self) -> Strategy:
        raise NotImplementedError

    def arrange(self, total: Rect) -> list[tuple["Subplot", Rect]]:
        subplots = self.subplots()
        rects = partition(total, len(subplots), self.strategy())
        return list(zip(subplots, rects, strict=True))


class SingleLayout(Layout):
    def __init__(self, subplot: "Subplot", *, spacing: LayoutSpacing | None = None) -> None:
        self._subplot = subplot
        self._spacing = spacing or LayoutSpacing()

    def subplots(self) -> list["Subplot"]:
        return [self._subplot]

    def strategy(self) -> Strategy:
        return SingleStrategy(self._spacing)


class GridLayout(Layout):
    """Subplots on an equal-cell grid, filled row-major.

    ``from_array`` pins subplots to explicit cells; ``None`` entries stay empty.
    """

    def __init__(
        self,
        subplots: Sequence["Subplot"],
        *,
        rows: int | None = None,
        cols: int | None = None,
        aspect: float | None = None,
        spacing: LayoutSpacing | None = None,
    ) -> None:
        self._subplots = list(subplots)
        self._rows = rows
        self._cols = cols
        self._aspect = aspect
        self._spacing = spacing or LayoutSpacing()
        self._positions: list[tuple[int, int]] | None = None

    @classmethod
    def from_array(
        cls,
        grid: Sequence[Sequence["Subplot | None"]],
        *,
        spacing: LayoutSpacing | None = None,
    ) -> "GridLayout":
        rows = len(grid)
        cols = max((len(row) for row in grid), default=0)
        if rows == 0 or cols == 0:
            raise InvalidLayout("grid array must have at least one row and column")
        subplots: list["Subplot"] = []
        positions: list[tuple[int, int]] = []
        for r, row in enumerate(grid):
            for c, subplot in enumerate(row):
                if subplot is None:
                    continue
                subplots.append(subplot)
                positions.append((r, c))
        layout = cls(subplots, rows=rows, cols=cols, spacing=spacing)
        layout._positions = positions
        return layout

    def subplots(self) -> list["Subplot"]:
        return list(self._subplots)

    def strategy(self) -> Strategy:
        return GridStrategy(rows=self._rows, cols=self._cols, aspect=self._aspect, spacing=self._spacing)

    def arrange(self, total: Rect) -> list[tuple["Subplot", Rect]]:
        if self._positions is None:
            return super().arrange(total)
        assert self._rows is not None and self._cols is not None
        cells = grid_cells(total, self._rows, self._cols, self._spacing)
        return [(s, cells[r * self._cols + c]) for s, (r, c) in zip(self._subplots, self._positions, strict=True)]


class CustomLayout(Layout):
    def __init__(
        self,
        entries: Sequence[tuple["Subplot", FractionalArea]],
        *,
        spacing: LayoutSpacing | None = None,
    ) -> None:
        self._entries = list(entries)
        self._spacing = spacing or LayoutSpacing()

    def subplots(self) -> list["Subplot"]:
        return [s for s, _ in self._entries]

    def strategy(self) -> Strategy:
        return CustomStrategy(tuple(area for _, area in self._entries), self._spacing)
