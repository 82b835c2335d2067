"""Execution layer: rasterizes primitives onto the grid."""

from .rasterizer import (
    line_points, draw_line, draw_circle, fill_box,
    fill_triangle, fill_background, flood_fill,
)
from .coordinate_mapper import CoordinateMapper

__all__ = [
    "line_points", "draw_line", "draw_circle", "fill_box",
    "fill_triangle", "fill_background", "flood_fill", "CoordinateMapper",
]
