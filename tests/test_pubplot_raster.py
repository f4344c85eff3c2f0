from __future__ import annotations

import math
import time
import unittest

import numpy as np

from pubplot import Axes, RasterCanvas, Rect, Subplot, SvgCanvas, figure
from pubplot.primitives import FontStyle, MarkerKind, StrokeStyle
from pubplot.raster.canvas import new_canvas
from pubplot.raster.draw_fill import fill_polygon
from pubplot.raster.draw_lines import clip_segment, draw_line, draw_polyline
from pubplot.raster.draw_markers import draw_marker
from pubplot.raster.draw_text import draw_text as raster_draw_text
from pubplot.raster.draw_text import text_size as raster_text_size


WHITE = (255, 255, 255, 255)
BLUE = (20, 40, 220, 255)


class RasterTests(unittest.TestCase):
    def test_text_renderer_uses_antialias_coverage(self) -> None:
        canvas = new_canvas(220, 80, color=(0, 0, 0, 0))
        raster_draw_text(canvas, 10, 20, "Static 1-D Plot", WHITE, font_size_px=24.0)
        alpha = canvas[:, :, 3]
        self.assertTrue(np.any(alpha > 0))
        self.assertTrue(np.any((alpha > 0) & (alpha < 255)))
        # Transparent background should remain transparent outside rendered glyph coverage.
        self.assertEqual(int(canvas[0, 0, 3]), 0)

    def test_rotated_text_size_swaps_dimensions(self) -> None:
        w0, h0 = raster_text_size("value", font_size_px=18.0, rotate_deg=0)
        w1, h1 = raster_text_size("value", font_size_px=18.0, rotate_deg=90)
        self.assertEqual((w1, h1), (h0, w0))

    def test_text_rotation_must_be_quarter_turns(self) -> None:
        with self.assertRaises(ValueError):
            raster_text_size("value", rotate_deg=45)

    def test_dashed_line_leaves_gaps(self) -> None:
        canvas = new_canvas(100, 20, color=(0, 0, 0, 0))
        draw_line(canvas, 0, 10, 99, 10, color=BLUE, width=1, dash=(10.0, 10.0))
        row = canvas[10, :, 3]
        self.assertEqual(int(row[5]), 255)
        self.assertEqual(int(row[15]), 0)
        self.assertEqual(int(row[25]), 255)

    def test_dash_phase_continues_across_vertices(self) -> None:
        canvas = new_canvas(100, 40, color=(0, 0, 0, 0))
        draw_polyline(canvas, np.array([0, 5, 30]), np.array([10, 10, 10]), BLUE, width=1, dash=(10.0, 10.0))
        row = canvas[10, :, 3]
        # Second segment starts mid-dash, so the gap begins at x=10 as on a single segment.
        self.assertEqual(int(row[8]), 255)
        self.assertEqual(int(row[15]), 0)

    def test_clip_segment_parameter_range(self) -> None:
        self.assertEqual(clip_segment(-10.0, 5.0, 30.0, 5.0, (0.0, 0.0, 20.0, 10.0)), (0.25, 0.75))
        self.assertIsNone(clip_segment(-10.0, 50.0, 30.0, 60.0, (0.0, 0.0, 20.0, 10.0)))
        self.assertEqual(clip_segment(2.0, 2.0, 8.0, 8.0, (0.0, 0.0, 20.0, 10.0)), (0.0, 1.0))

    def test_far_off_canvas_segment_is_clipped(self) -> None:
        canvas = new_canvas(50, 50, color=(0, 0, 0, 0))
        started = time.perf_counter()
        phase = draw_line(canvas, 10, 10, 1e9, 4e8, color=BLUE, width=3, dash=(4.0, 2.0))
        self.assertLess(time.perf_counter() - started, 1.0)
        self.assertEqual(phase, math.hypot(1e9 - 10, 4e8 - 10))
        self.assertEqual(int(canvas[10, 10, 3]), 255)
        self.assertGreater(int(np.count_nonzero(canvas[:, 40:, 3])), 0)

    def test_segment_missing_canvas_advances_phase_only(self) -> None:
        canvas = new_canvas(20, 20, color=(0, 0, 0, 0))
        phase = draw_line(canvas, -100, -50, 100, -50, color=BLUE, dash=(3.0, 3.0), phase=1.0)
        self.assertEqual(phase, 201.0)
        self.assertEqual(int(np.count_nonzero(canvas[:, :, 3])), 0)

    def test_clipped_start_keeps_dash_phase(self) -> None:
        canvas = new_canvas(100, 20, color=(0, 0, 0, 0))
        draw_line(canvas, -15, 10, 99, 10, color=BLUE, width=1, dash=(10.0, 10.0))
        row = canvas[10, :, 3]
        # Pixel x sits at phase x + 15, as if the hidden part had been drawn.
        self.assertEqual(int(row[2]), 0)
        self.assertEqual(int(row[8]), 255)
        self.assertEqual(int(row[22]), 0)
        self.assertEqual(int(row[28]), 255)

    def test_wide_solid_line_covers_brush_rows(self) -> None:
        canvas = new_canvas(50, 50, color=(0, 0, 0, 0))
        draw_line(canvas, 5, 25, 45, 25, color=BLUE, width=3)
        self.assertTrue(np.all(canvas[24:27, 10, 3] == 255))
        self.assertEqual(int(canvas[22, 10, 3]), 0)

    def test_circle_markers_cover_less_than_squares(self) -> None:
        circle = new_canvas(30, 30, color=(0, 0, 0, 0))
        square = new_canvas(30, 30, color=(0, 0, 0, 0))
        draw_marker(circle, 15, 15, color=BLUE, size=4, kind=MarkerKind.CIRCLE)
        draw_marker(square, 15, 15, color=BLUE, size=4, kind=MarkerKind.SQUARE)
        self.assertEqual(int(np.count_nonzero(square[:, :, 3])), 81)
        self.assertLess(int(np.count_nonzero(circle[:, :, 3])), 81)
        self.assertEqual(int(circle[11, 11, 3]), 0)
        self.assertEqual(int(circle[15, 15, 3]), 255)

    def test_marker_outline_rings_the_fill(self) -> None:
        canvas = new_canvas(30, 30, color=(0, 0, 0, 0))
        draw_marker(canvas, 15, 15, color=BLUE, size=4, kind=MarkerKind.SQUARE, outline=(0, 0, 0, 255))
        self.assertEqual(tuple(canvas[11, 15, :3]), (0, 0, 0))
        self.assertEqual(tuple(canvas[15, 15, :3]), BLUE[:3])

    def test_fill_polygon_covers_interior_only(self) -> None:
        canvas = new_canvas(60, 60, color=WHITE)
        fill_polygon(canvas, [(10.0, 10.0), (50.0, 10.0), (50.0, 50.0), (10.0, 50.0)], BLUE)
        self.assertEqual(tuple(canvas[30, 30, :3]), BLUE[:3])
        self.assertEqual(tuple(canvas[5, 5, :3]), WHITE[:3])

    def test_translucent_fill_blends_with_background(self) -> None:
        canvas = new_canvas(20, 20, color=WHITE)
        fill_polygon(canvas, [(0.0, 0.0), (19.0, 0.0), (19.0, 19.0), (0.0, 19.0)], (0, 0, 0, 127))
        value = int(canvas[10, 10, 0])
        self.assertTrue(120 < value < 135)
        self.assertEqual(int(canvas[10, 10, 3]), 255)


class RasterCanvasTests(unittest.TestCase):
    def test_clip_confines_drawing(self) -> None:
        canvas = RasterCanvas(100, 100, background=WHITE)
        clip = Rect(20, 20, 30, 30)
        canvas.draw_line((0.0, 30.0), (99.0, 30.0), StrokeStyle(BLUE, width=1.0), clip=clip)
        canvas.draw_marker((20.0, 20.0), MarkerKind.SQUARE, 6.0, BLUE, clip=clip)
        pixels = canvas.to_rgba()
        self.assertEqual(tuple(pixels[30, 30, :3]), BLUE[:3])
        outside = np.ones((100, 100), dtype=bool)
        outside[20:50, 20:50] = False
        self.assertTrue(np.all(pixels[outside][:, :3] == 255))

    def test_far_diagonal_stays_inside_clip(self) -> None:
        canvas = RasterCanvas(100, 100, background=WHITE)
        clip = Rect(20, 20, 30, 30)
        started = time.perf_counter()
        canvas.draw_polyline([(25.0, 45.0), (1e7, -3e6)], StrokeStyle(BLUE, width=2.0), clip=clip)
        self.assertLess(time.perf_counter() - started, 1.0)
        pixels = canvas.to_rgba()
        outside = np.ones((100, 100), dtype=bool)
        outside[20:50, 20:50] = False
        self.assertTrue(np.all(pixels[outside][:, :3] == 255))
        self.assertEqual(tuple(pixels[45, 25, :3]), BLUE[:3])

    def test_data_far_outside_limits_renders_quickly(self) -> None:
        fig = figure(width=400, height=300)
        sp = fig.subplot(Subplot.builder().limits(Axes.X, 0.0, 1.0).limits(Axes.Y, 0.0, 1.0).build())
        sp.plot([0.5, 0.9], x=[0.5, 1e5], color=BLUE)
        started = time.perf_counter()
        frame = fig.to_rgba()
        self.assertLess(time.perf_counter() - started, 5.0)
        (plan,) = fig.plan()
        area = plan.plot_area
        hit = (frame[:, :, 0] == BLUE[0]) & (frame[:, :, 1] == BLUE[1]) & (frame[:, :, 2] == BLUE[2])
        self.assertTrue(np.any(hit))
        outside = np.ones(hit.shape, dtype=bool)
        outside[area.y : area.bottom, area.x : area.right] = False
        self.assertFalse(np.any(hit & outside))

    def test_to_rgba_returns_copy(self) -> None:
        canvas = RasterCanvas(10, 10)
        pixels = canvas.to_rgba()
        pixels[:] = 0
        self.assertEqual(int(canvas.to_rgba()[0, 0, 0]), 255)

    def test_text_alignment_anchors(self) -> None:
        canvas = RasterCanvas(200, 60, background=(0, 0, 0, 0))
        canvas.draw_text((100.0, 30.0), "1234", FontStyle(size=14.0, color=WHITE), h_align="right", v_align="middle")
        cols = np.flatnonzero(canvas.to_rgba()[:, :, 3].any(axis=0))
        self.assertTrue(cols.size > 0)
        self.assertLessEqual(int(cols.max()), 100)


class SvgCanvasTests(unittest.TestCase):
    def test_markup_has_clip_paths_and_styles(self) -> None:
        canvas = SvgCanvas(120, 80)
        clip = Rect(10, 10, 50, 40)
        canvas.draw_polyline([(0.0, 0.0), (100.0, 50.0)], StrokeStyle((255, 0, 0, 128), width=2.0, dash=(4.0, 4.0)), clip=clip)
        canvas.draw_polyline([(0.0, 10.0), (100.0, 10.0)], StrokeStyle(BLUE), clip=clip)
        canvas.draw_text((5.0, 40.0), "volts", FontStyle(size=14.0), rotation=90)
        markup = canvas.to_markup()
        self.assertEqual(markup.count("<clipPath"), 1)
        self.assertIn('stroke-dasharray="4 4"', markup)
        self.assertIn('stroke-opacity="0.502"', markup)
        self.assertIn('transform="rotate(-90 5 40)"', markup)
        self.assertIn(">volts</text>", markup)

    def test_markers_use_radius(self) -> None:
        canvas = SvgCanvas(50, 50, background=None)
        canvas.draw_marker((25.0, 25.0), MarkerKind.CIRCLE, 3.0, BLUE)
        canvas.draw_marker((10.0, 10.0), MarkerKind.SQUARE, 2.0, BLUE)
        markup = canvas.to_markup()
        self.assertIn('r="3"', markup)
        self.assertIn('width="4"', markup)


if __name__ == "__main__":
    unittest.main()
