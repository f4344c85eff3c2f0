from __future__ import annotations

from decimal import Decimal
import unittest

import numpy as np

from pubplot import Axes, Series, SeriesKind, Subplot
from pubplot.adapters.normalize import coerce_values, normalize_xy
from pubplot.errors import InvalidLimits, InvalidSeriesData, MismatchedSeriesLength, PlotError
from pubplot.primitives import MarkerKind


class SeriesTests(unittest.TestCase):
    def test_mismatched_lengths_are_rejected(self) -> None:
        with self.assertRaises(MismatchedSeriesLength) as ctx:
            Series.line([1, 2, 3], [1, 2])
        self.assertEqual((ctx.exception.x_len, ctx.exception.y_len), (3, 2))
        self.assertIsInstance(ctx.exception, PlotError)
        self.assertEqual(ctx.exception.stage, "series")

    def test_subplot_rejects_mismatched_lengths_without_adding(self) -> None:
        sp = Subplot()
        with self.assertRaises(MismatchedSeriesLength):
            sp.plot(x=[1.0, 2.0, 3.0], y=[1.0, 2.0])
        self.assertEqual(sp.series, ())

    def test_series_owns_read_only_copies(self) -> None:
        x = np.array([0.0, 1.0, 2.0])
        y = np.array([3.0, 4.0, 5.0])
        s = Series.line(x, y)
        x[0] = 99.0
        y[:] = 0.0
        self.assertEqual(s.x.tolist(), [0.0, 1.0, 2.0])
        self.assertEqual(s.y.tolist(), [3.0, 4.0, 5.0])
        with self.assertRaises(ValueError):
            s.y[0] = 1.0

    def test_direct_construction_copies_read_only_views(self) -> None:
        base = np.arange(6, dtype=np.float64)
        view = base[:3]
        view.flags.writeable = False
        s = Series(kind=SeriesKind.LINE, x=view, y=np.array([1.0, 2.0, 3.0]))
        base[0] = 42.0
        self.assertEqual(s.x[0], 0.0)

    def test_x_defaults_to_sample_index(self) -> None:
        s = Series.line(None, [5.0, 6.0, 7.0])
        self.assertEqual(s.x.tolist(), [0.0, 1.0, 2.0])

    def test_empty_series_is_allowed(self) -> None:
        s = Series.line([], [])
        self.assertEqual(len(s), 0)

    def test_step_from_edges_repeats_last_value(self) -> None:
        s = Series.step_from_edges([0.0, 1.0, 2.0, 3.0], [4.0, 5.0, 6.0])
        self.assertIs(s.kind, SeriesKind.STEP)
        self.assertEqual(s.x.tolist(), [0.0, 1.0, 2.0, 3.0])
        self.assertEqual(s.y.tolist(), [4.0, 5.0, 6.0, 6.0])

    def test_step_from_edges_needs_one_more_edge(self) -> None:
        with self.assertRaises(MismatchedSeriesLength):
            Series.step_from_edges([0.0, 1.0, 2.0], [4.0, 5.0, 6.0])

    def test_filled_region_lower_boundary(self) -> None:
        s = Series.filled_region([0.0, 1.0, 2.0], [1.0, 2.0, 3.0])
        self.assertEqual(s.y2.tolist(), [0.0, 0.0, 0.0])
        self.assertEqual(s.values(Axes.Y).tolist(), [1.0, 2.0, 3.0, 0.0, 0.0, 0.0])
        with self.assertRaises(MismatchedSeriesLength):
            Series.filled_region([0.0, 1.0], [1.0, 2.0], [0.0])

    def test_only_filled_regions_take_a_lower_boundary(self) -> None:
        with self.assertRaises(InvalidSeriesData):
            Series(kind=SeriesKind.LINE, x=np.zeros(2), y=np.zeros(2), y2=np.zeros(2))

    def test_scatter_defaults_to_circles(self) -> None:
        s = Series.scatter([0.0, 1.0], [1.0, 2.0])
        self.assertIs(s.style.marker, MarkerKind.CIRCLE)

    def test_finite_mask(self) -> None:
        s = Series.line([0.0, 1.0, np.nan], [1.0, np.inf, 2.0])
        self.assertEqual(s.finite_mask().tolist(), [True, False, False])

    def test_series_axis_choice(self) -> None:
        s = Series.line([0.0, 1.0], [2.0, 3.0])
        self.assertTrue(s.uses(Axes.X) and s.uses(Axes.Y))
        moved = s.on_axes(Axes.X2, Axes.Y2)
        self.assertTrue(moved.uses(Axes.X2) and moved.uses(Axes.Y2))
        self.assertFalse(moved.uses(Axes.Y))
        self.assertEqual(moved.values(Axes.Y2).tolist(), [2.0, 3.0])
        with self.assertRaises(InvalidSeriesData):
            s.on_axes(Axes.Y, Axes.Y)

    def test_subplot_methods_place_series_on_secondary_axes(self) -> None:
        sp = Subplot()
        sp.plot([1.0, 2.0], secondary_y=True)
        sp.scatter([1.0, 2.0], secondary_x=True)
        sp.fill_between([1.0, 2.0])
        placed = [(s.x_axis, s.y_axis) for s in sp.series]
        self.assertEqual(placed, [(Axes.X, Axes.Y2), (Axes.X2, Axes.Y), (Axes.X, Axes.Y)])

    def test_builder_configures_secondary_axes(self) -> None:
        sp = Subplot.builder().label(Axes.Y2, "kelvin").limits(Axes.X2, 0.0, 10.0).opposite_spine(Axes.Y, False).build()
        self.assertEqual(sp.axis(Axes.Y2).label, "kelvin")
        self.assertEqual(sp.axis(Axes.X2).limits, (0.0, 10.0))
        self.assertFalse(sp.axis(Axes.Y2).spine_visible)
        self.assertTrue(sp.axis(Axes.Y).spine_visible)
        with self.assertRaises(InvalidLimits):
            Subplot.builder().limits(Axes.Y2, 1.0, 0.0).build()

    def test_builder_rejects_invalid_limits(self) -> None:
        with self.assertRaises(InvalidLimits):
            Subplot.builder().limits(Axes.X, 2.0, 2.0).build()

    def test_builder_sets_axis_options(self) -> None:
        sp = Subplot.builder().title("t").label(Axes.Y, "volts").limits(Axes.X, 0.0, 5.0).build()
        self.assertEqual(sp.config.title, "t")
        self.assertEqual(sp.axis(Axes.Y).label, "volts")
        self.assertEqual(sp.axis(Axes.X).limits, (0.0, 5.0))
        self.assertIsNone(sp.axis(Axes.Y).limits)


class NormalizeTests(unittest.TestCase):
    def test_normalize_decimal_and_none(self) -> None:
        x, y = normalize_xy([Decimal("1.5"), Decimal("2.25"), None, Decimal("3.5")])
        self.assertEqual(x.tolist(), [0.0, 1.0, 2.0, 3.0])
        self.assertEqual(y[:2].tolist(), [1.5, 2.25])
        self.assertTrue(np.isnan(y[2]))

    def test_non_numeric_values_raise(self) -> None:
        with self.assertRaises(InvalidSeriesData):
            coerce_values(["a", "b"], label="y")

    def test_column_name_needs_data(self) -> None:
        with self.assertRaises(InvalidSeriesData):
            normalize_xy("value")
        with self.assertRaises(InvalidSeriesData):
            normalize_xy(None, x=[1.0])

    def test_two_dimensional_input_raises(self) -> None:
        with self.assertRaises(InvalidSeriesData):
            coerce_values(np.zeros((2, 2)), label="y")

    def test_normalize_torch_tensor(self) -> None:
        try:
            import torch
        except Exception:
            self.skipTest("torch is not installed")

        _, y = normalize_xy(torch.tensor([1, 2, 3], dtype=torch.int64))
        self.assertEqual(y.dtype, np.float64)
        self.assertEqual(y.tolist(), [1.0, 2.0, 3.0])

    def test_normalize_pandas_columns(self) -> None:
        try:
            import pandas as pd
        except Exception:
            self.skipTest("pandas is not installed")

        df = pd.DataFrame({"t": [0, 1, 2], "value": [1.0, 2.0, 3.0]})
        x, y = normalize_xy("value", x="t", data=df)
        self.assertEqual(x.tolist(), [0.0, 1.0, 2.0])
        self.assertEqual(y.tolist(), [1.0, 2.0, 3.0])
        with self.assertRaises(InvalidSeriesData):
            normalize_xy("missing", data=df)

    def test_fill_between_accepts_column_names(self) -> None:
        try:
            import pandas as pd
        except Exception:
            self.skipTest("pandas is not installed")

        df = pd.DataFrame({"t": [0, 1], "hi": [2.0, 3.0], "lo": [1.0, 0.5]})
        sp = Subplot().fill_between("hi", "lo", x="t", data=df)
        self.assertEqual(sp.series[0].y2.tolist(), [1.0, 0.5])


if __name__ == "__main__":
    unittest.main()
