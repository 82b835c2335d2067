"""
Rasterization of drawing primitives onto a GridStore.
Every function is stateless and writes only through store.set_pixel, so
bounds checks, touched marking and change tracking stay in one place.
"""
from typing import Iterator, Sequence, Tuple

from errors import ParameterError
from state.grid import Color, GridStore

Point = Tuple[int, int]


def line_points(x1: int, y1: int, x2: int, y2: int) -> Iterator[Point]:
    """
    Yield the cells of a Bresenham line, both endpoints included.

    Endpoints are visited in canonical order (smaller (x, y) first) so a
    line and its reverse cover exactly the same cells.
    """
    if (x2, y2) < (x1, y1):
        x1, y1, x2, y2 = x2, y2, x1, y1

    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy

    x, y = x1, y1
    while True:
        yield x, y
        if x == x2 and y == y2:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy


def _clipped_range(low: int, high: int, size: int) -> range:
    # Inclusive [low, high] intersected with the grid axis [0, size)
    return range(max(low, 0), min(high, size - 1) + 1)


def draw_line(store: GridStore, x1: int, y1: int, x2: int, y2: int, color: Sequence[int]) -> int:
    """Draw a one-cell-wide line. Returns the number of cells written."""
    color = Color.coerce(color)
    return sum(1 for x, y in line_points(x1, y1, x2, y2) if store.set_pixel(x, y, color))


def draw_circle(store: GridStore, cx: int, cy: int, radius: int, color: Sequence[int]) -> int:
    """
    Draw a filled disk: every cell with dx^2 + dy^2 <= r^2.

    Raises:
        ParameterError: if radius is not positive
    """
    if radius <= 0:
        raise ParameterError("CIRCLE", "Invalid radius. Must be greater than 0")

    color = Color.coerce(color)
    r_squared = radius * radius
    written = 0
    for y in _clipped_range(cy - radius, cy + radius, store.height):
        dy = y - cy
        for x in _clipped_range(cx - radius, cx + radius, store.width):
            dx = x - cx
            if dx * dx + dy * dy <= r_squared and store.set_pixel(x, y, color):
                written += 1
    return written


def fill_box(store: GridStore, x1: int, y1: int, x2: int, y2: int, color: Sequence[int]) -> int:
    """Fill the rectangle spanned by two opposite corners, inclusive."""
    color = Color.coerce(color)
    start_x, end_x = min(x1, x2), max(x1, x2)
    start_y, end_y = min(y1, y2), max(y1, y2)
    written = 0
    for y in _clipped_range(start_y, end_y, store.height):
        for x in _clipped_range(start_x, end_x, store.width):
            if store.set_pixel(x, y, color):
                written += 1
    return written


def _double_area(ax: int, ay: int, bx: int, by: int, cx: int, cy: int) -> int:
    # Shoelace formula without the division by two
    return abs(ax * (by - cy) + bx * (cy - ay) + cx * (ay - by))


def fill_triangle(store: GridStore, p1: Point, p2: Point, p3: Point, color: Sequence[int]) -> int:
    """
    Fill a triangle, edges included.

    A cell is inside when the three sub-triangles it forms with each pair of
    vertices add up exactly to the whole triangle's area. Collinear vertices
    degenerate to the segment between them.
    """
    color = Color.coerce(color)
    (x1, y1), (x2, y2), (x3, y3) = p1, p2, p3
    area = _double_area(x1, y1, x2, y2, x3, y3)

    written = 0
    for y in _clipped_range(min(y1, y2, y3), max(y1, y2, y3), store.height):
        for x in _clipped_range(min(x1, x2, x3), max(x1, x2, x3), store.width):
            area1 = _double_area(x, y, x2, y2, x3, y3)
            area2 = _double_area(x1, y1, x, y, x3, y3)
            area3 = _double_area(x1, y1, x2, y2, x, y)
            if area == area1 + area2 + area3 and store.set_pixel(x, y, color):
                written += 1
    return written


def fill_background(store: GridStore, color: Sequence[int]) -> int:
    """Set every cell of the grid, whatever its current content."""
    color = Color.coerce(color)
    for y in range(store.height):
        for x in range(store.width):
            store.set_pixel(x, y, color)
    return store.width * store.height


def flood_fill(store: GridStore, x: int, y: int, color: Sequence[int]) -> int:
    """
    4-connected flood fill from a seed cell using an explicit stack.

    Spreads only through cells whose color equals the seed's original color.
    Returns the number of cells written (0 if the seed is out of bounds or
    already has the fill color).
    """
    color = Color.coerce(color)
    if not store.in_bounds(x, y):
        return 0

    target = store.get_pixel(x, y)
    if target == color:
        return 0

    written = 0
    stack = [(x, y)]
    while stack:
        cx, cy = stack.pop()
        if not store.in_bounds(cx, cy) or store.get_pixel(cx, cy) != target:
            continue
        store.set_pixel(cx, cy, color)
        written += 1
        stack.extend(((cx + 1, cy), (cx - 1, cy), (cx, cy + 1), (cx, cy - 1)))
    return written
