from __future__ import annotations

import unittest

from pubplot import CustomLayout, FractionalArea, GridLayout, Rect, SingleLayout, Subplot
from pubplot.errors import InsufficientSpace, InvalidLayout
from pubplot.layout import (
    CustomStrategy,
    GridStrategy,
    LayoutSpacing,
    SingleStrategy,
    grid_shape,
    partition,
)


TOTALS = [Rect(0, 0, 400, 300), Rect(0, 0, 1000, 200), Rect(10, 20, 640, 640), Rect(0, 0, 300, 900)]


class LayoutTests(unittest.TestCase):
    def test_grid_cells_are_disjoint_and_contained(self) -> None:
        for total in TOTALS:
            for count in range(1, 13):
                rects = partition(total, count, GridStrategy())
                self.assertEqual(len(rects), count)
                for i, a in enumerate(rects):
                    self.assertTrue(total.contains(a), msg=f"{a} not in {total}")
                    self.assertGreater(a.width, 0)
                    self.assertGreater(a.height, 0)
                    for b in rects[i + 1 :]:
                        self.assertFalse(a.intersects(b), msg=f"{a} overlaps {b}")

    def test_single_layout_insets_by_margin(self) -> None:
        rects = partition(Rect(0, 0, 400, 300), 1, SingleStrategy())
        self.assertEqual(rects, [Rect(2, 2, 396, 296)])

    def test_single_layout_holds_one_subplot(self) -> None:
        with self.assertRaises(InvalidLayout):
            partition(Rect(0, 0, 400, 300), 2, SingleStrategy())

    def test_too_small_figure_raises(self) -> None:
        with self.assertRaises(InsufficientSpace):
            partition(Rect(0, 0, 10, 10), 1, SingleStrategy())
        with self.assertRaises(InsufficientSpace):
            partition(Rect(0, 0, 100, 100), 9, GridStrategy(rows=3, cols=3, spacing=LayoutSpacing(spacing=30)))

    def test_zero_subplots_partition_to_nothing(self) -> None:
        self.assertEqual(partition(Rect(0, 0, 100, 100), 0, GridStrategy()), [])

    def test_grid_remainder_cells_stay_empty(self) -> None:
        rects = partition(Rect(0, 0, 400, 400), 3, GridStrategy(rows=2, cols=2))
        self.assertEqual(len(rects), 3)
        # Row-major fill: the third subplot starts the second row in the first column.
        self.assertEqual(rects[2].x, rects[0].x)
        self.assertGreater(rects[2].y, rects[0].y)

    def test_grid_cells_share_size(self) -> None:
        rects = partition(Rect(0, 0, 401, 303), 6, GridStrategy(rows=2, cols=3))
        self.assertEqual({(r.width, r.height) for r in rects}, {(rects[0].width, rects[0].height)})

    def test_grid_shape(self) -> None:
        self.assertEqual(grid_shape(1), (1, 1))
        self.assertEqual(grid_shape(4), (2, 2))
        self.assertEqual(grid_shape(3, aspect=3.0), (1, 3))
        self.assertEqual(grid_shape(3, aspect=1.0 / 3.0), (3, 1))
        self.assertEqual(grid_shape(5, rows=2), (2, 3))
        self.assertEqual(grid_shape(5, cols=2), (3, 2))
        with self.assertRaises(InvalidLayout):
            grid_shape(5, rows=2, cols=2)

    def test_fractional_area_maps_with_y_up(self) -> None:
        total = Rect(0, 0, 200, 100)
        top_left = FractionalArea(0.0, 0.5, 0.5, 1.0)
        self.assertEqual(top_left.to_rect(total), Rect(0, 0, 100, 50))
        bottom_right = FractionalArea(0.5, 1.0, 0.0, 0.5)
        self.assertEqual(bottom_right.to_rect(total), Rect(100, 50, 100, 50))

    def test_fractional_area_validation(self) -> None:
        with self.assertRaises(InvalidLayout):
            FractionalArea(0.5, 0.5, 0.0, 1.0)
        with self.assertRaises(InvalidLayout):
            FractionalArea(0.0, 1.5, 0.0, 1.0)

    def test_overlapping_custom_areas_are_rejected(self) -> None:
        areas = (FractionalArea(0.0, 0.6, 0.0, 1.0), FractionalArea(0.5, 1.0, 0.0, 1.0))
        with self.assertRaises(InvalidLayout):
            partition(Rect(0, 0, 400, 300), 2, CustomStrategy(areas))

    def test_touching_custom_areas_are_allowed(self) -> None:
        areas = (FractionalArea(0.0, 0.5, 0.0, 1.0), FractionalArea(0.5, 1.0, 0.0, 1.0))
        a, b = partition(Rect(0, 0, 400, 300), 2, CustomStrategy(areas))
        self.assertFalse(a.intersects(b))
        self.assertEqual(a.right, b.x)

    def test_layout_classes_pair_subplots_with_rects(self) -> None:
        total = Rect(0, 0, 400, 300)
        sp = Subplot()
        self.assertEqual(SingleLayout(sp).arrange(total), [(sp, Rect(2, 2, 396, 296))])

        a, b = Subplot(), Subplot()
        arranged = CustomLayout([(a, FractionalArea(0.0, 0.5, 0.0, 1.0)), (b, FractionalArea(0.5, 1.0, 0.0, 1.0))]).arrange(total)
        self.assertIs(arranged[0][0], a)
        self.assertIs(arranged[1][0], b)

    def test_grid_from_array_leaves_holes(self) -> None:
        a, b = Subplot(), Subplot()
        layout = GridLayout.from_array([[a, None], [None, b]])
        arranged = layout.arrange(Rect(0, 0, 400, 400))
        self.assertEqual([s for s, _ in arranged], [a, b])
        ra, rb = arranged[0][1], arranged[1][1]
        self.assertLess(ra.x, rb.x)
        self.assertLess(ra.y, rb.y)
        self.assertFalse(ra.intersects(rb))


if __name__ == "__main__":
    unittest.main()
