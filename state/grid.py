"""
Grid store for the canvas.
Owns the pixel colors and the "touched" bitmap; set_pixel is the only way
cells change outside of a snapshot restore.
"""
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Sequence, Tuple, Iterator

from config import DEFAULT_GRID_SIZE, MIN_DIMENSION, MAX_DIMENSION
from errors import ColorRangeError, DimensionError

COLOR_ERROR_MESSAGE = "Invalid color values. Each value must be between 0-255"


class Color(NamedTuple):
    """An RGB triple, each channel 0-255."""
    r: int
    g: int
    b: int

    @classmethod
    def coerce(cls, value: Sequence[int], keyword: str = "PIXEL") -> "Color":
        """
        Build a Color from any 3-sequence of integers.

        Raises:
            ColorRangeError: if the value is not three channels in [0, 255]
        """
        if len(value) != 3 or not all(0 <= int(c) <= 255 for c in value):
            raise ColorRangeError(keyword, COLOR_ERROR_MESSAGE)
        return cls(int(value[0]), int(value[1]), int(value[2]))

    @classmethod
    def from_hex(cls, hex_str: str) -> "Color":
        """Parse '#RRGGBB' or 'RRGGBB' (case-insensitive)."""
        val = str(hex_str).strip().lstrip('#')
        if len(val) != 6:
            raise ColorRangeError("PIXEL", f"Invalid hex color: {hex_str}")
        try:
            return cls(int(val[0:2], 16), int(val[2:4], 16), int(val[4:6], 16))
        except ValueError:
            raise ColorRangeError("PIXEL", f"Invalid hex color: {hex_str}")

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


WHITE = Color(255, 255, 255)


@dataclass(frozen=True)
class Snapshot:
    """Immutable copy of the grid and touched map at one point in time."""
    width: int
    height: int
    grid: Tuple[Tuple[Color, ...], ...]
    touched: Tuple[Tuple[bool, ...], ...]


def validate_dimensions(width: int, height: int) -> None:
    """Raise DimensionError unless both axes are within MIN..MAX_DIMENSION."""
    if not (isinstance(width, int) and isinstance(height, int)):
        raise DimensionError(width, height, MIN_DIMENSION, MAX_DIMENSION)
    if not (MIN_DIMENSION <= width <= MAX_DIMENSION and MIN_DIMENSION <= height <= MAX_DIMENSION):
        raise DimensionError(width, height, MIN_DIMENSION, MAX_DIMENSION)


class GridStore:
    """Row-major height x width matrix of colors plus a parallel touched map."""

    def __init__(self, width: int = DEFAULT_GRID_SIZE, height: int = DEFAULT_GRID_SIZE):
        self.width = 0
        self.height = 0
        self.grid: List[List[Color]] = []
        self.touched: List[List[bool]] = []
        # Change tracker notified on every successful write (see state.changes)
        self.tracker = None
        self.reset(width, height)

    def reset(self, width: int, height: int) -> None:
        """Replace the grid and touched map with fresh all-white state."""
        validate_dimensions(width, height)
        self.width, self.height = width, height
        self.grid = [[WHITE] * width for _ in range(height)]
        self.touched = [[False] * width for _ in range(height)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set_pixel(self, x: int, y: int, color: Sequence[int]) -> bool:
        """
        Write one cell.

        Returns:
            False (and changes nothing) if (x, y) is outside the grid, True otherwise
        """
        if not self.in_bounds(x, y):
            return False

        color = Color.coerce(color)
        old_color = self.grid[y][x]
        self.grid[y][x] = color
        self.touched[y][x] = True

        if self.tracker is not None:
            self.tracker.record(x, y, old_color, color)
        return True

    def get_pixel(self, x: int, y: int) -> Color:
        return self.grid[y][x]

    def is_touched(self, x: int, y: int) -> bool:
        return self.touched[y][x]

    def non_default_pixels(self) -> Iterator[Tuple[int, int, Color]]:
        """Yield (x, y, color) for every non-white cell, row by row."""
        for y, row in enumerate(self.grid):
            for x, color in enumerate(row):
                if color != WHITE:
                    yield x, y, color

    def snapshot(self) -> Snapshot:
        return Snapshot(
            width=self.width,
            height=self.height,
            grid=tuple(tuple(row) for row in self.grid),
            touched=tuple(tuple(row) for row in self.touched),
        )

    def restore(self, snapshot: Snapshot) -> None:
        """Load a snapshot without going through set_pixel (not a user change)."""
        self.width, self.height = snapshot.width, snapshot.height
        self.grid = [list(row) for row in snapshot.grid]
        self.touched = [list(row) for row in snapshot.touched]
