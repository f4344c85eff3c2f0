from .canvas import blend_mask, draw_hline, draw_pixel, draw_vline, new_canvas
from .draw_fill import fill_polygon
from .draw_lines import draw_line, draw_polyline
from .draw_markers import draw_marker
from .draw_text import draw_text, draw_text_aligned, text_size

__all__ = [
    "blend_mask",
    "draw_hline",
    "draw_line",
    "draw_marker",
    "draw_pixel",
    "draw_polyline",
    "draw_text",
    "draw_text_aligned",
    "draw_vline",
    "fill_polygon",
    "new_canvas",
    "text_size",
]
