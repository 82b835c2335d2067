"""
Coordinate mapping between the display surface and the grid.
Maps surface (screen pixel) positions to grid cells and back.
"""
import math
from typing import Tuple

from config import get_surface_size


class CoordinateMapper:
    """Maps surface coordinates to grid cell coordinates."""

    def __init__(self, grid_width: int, grid_height: int, surface_size: Tuple[int, int] = None):
        """
        Initialize with grid dimensions.

        Args:
            grid_width: Number of grid columns
            grid_height: Number of grid rows
            surface_size: (width, height) of the display surface in screen pixels
        """
        self.surface_width, self.surface_height = surface_size or get_surface_size()
        self.grid_width = grid_width
        self.grid_height = grid_height
        self.pixel_size = self._compute_pixel_size()

    def _compute_pixel_size(self) -> float:
        # Largest square cell that fits the grid on both axes
        return min(self.surface_width / self.grid_width, self.surface_height / self.grid_height)

    def update_grid_size(self, grid_width: int, grid_height: int) -> float:
        """Recompute the cell size after a resize. Returns the new pixel size."""
        self.grid_width = grid_width
        self.grid_height = grid_height
        self.pixel_size = self._compute_pixel_size()
        return self.pixel_size

    def surface_to_grid(self, surface_x: float, surface_y: float) -> Tuple[int, int]:
        """
        Convert a surface position to the grid cell under it.
        Positions outside the grid are clamped to the nearest edge cell.
        """
        x = math.floor(surface_x / self.pixel_size)
        y = math.floor(surface_y / self.pixel_size)
        return self.clamp_grid(x, y)

    def grid_to_surface(self, x: int, y: int) -> Tuple[int, int]:
        """Top-left surface corner of a grid cell."""
        return (math.floor(x * self.pixel_size), math.floor(y * self.pixel_size))

    def clamp_grid(self, x: int, y: int) -> Tuple[int, int]:
        """Clamp grid coordinates into [0, width) x [0, height)."""
        x_clamped = max(0, min(x, self.grid_width - 1))
        y_clamped = max(0, min(y, self.grid_height - 1))
        return (x_clamped, y_clamped)
