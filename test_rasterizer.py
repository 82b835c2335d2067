"""Tests for the rasterization algorithms."""
import pytest

from errors import ParameterError
from execution import rasterizer
from execution.rasterizer import line_points
from state.grid import WHITE, Color, GridStore

RED = (255, 0, 0)
BLUE = (0, 0, 255)


def colored_cells(store):
    return {(x, y) for x, y, _ in store.non_default_pixels()}


def test_horizontal_line_includes_both_endpoints():
    assert list(line_points(0, 0, 3, 0)) == [(0, 0), (1, 0), (2, 0), (3, 0)]


def test_single_point_line():
    assert list(line_points(4, 4, 4, 4)) == [(4, 4)]


def test_diagonal_line():
    assert list(line_points(0, 0, 3, 3)) == [(0, 0), (1, 1), (2, 2), (3, 3)]


@pytest.mark.parametrize("a, b", [
    ((0, 0), (2, 1)),
    ((0, 0), (7, 3)),
    ((1, 9), (8, 2)),
    ((5, 0), (0, 9)),
    ((3, 3), (3, 8)),
])
def test_line_is_symmetric(a, b):
    forward = set(line_points(*a, *b))
    backward = set(line_points(*b, *a))
    assert forward == backward
    assert a in forward and b in forward


def test_draw_line_clips_at_grid_edge():
    store = GridStore(5, 5)
    written = rasterizer.draw_line(store, 0, 0, 9, 0, RED)
    assert written == 5
    assert colored_cells(store) == {(x, 0) for x in range(5)}


def test_circle_radius_one():
    store = GridStore(10, 10)
    rasterizer.draw_circle(store, 5, 5, 1, RED)
    assert colored_cells(store) == {(5, 5), (4, 5), (6, 5), (5, 4), (5, 6)}


def test_circle_is_filled_disk():
    store = GridStore(20, 20)
    rasterizer.draw_circle(store, 10, 10, 3, RED)
    cells = colored_cells(store)
    assert (10, 10) in cells and (12, 12) in cells
    assert (13, 13) not in cells
    assert all((x - 10) ** 2 + (y - 10) ** 2 <= 9 for x, y in cells)


def test_circle_clipped_at_corner():
    store = GridStore(10, 10)
    assert rasterizer.draw_circle(store, 0, 0, 2, RED) == 6


@pytest.mark.parametrize("radius", [0, -3])
def test_circle_rejects_non_positive_radius(radius):
    store = GridStore(10, 10)
    with pytest.raises(ParameterError) as exc:
        rasterizer.draw_circle(store, 5, 5, radius, RED)
    assert exc.value.message == "Invalid radius. Must be greater than 0"
    assert not colored_cells(store)


def test_box_fill_normalizes_corners():
    store = GridStore(10, 10)
    assert rasterizer.fill_box(store, 3, 3, 1, 1, RED) == 9
    assert colored_cells(store) == {(x, y) for x in range(1, 4) for y in range(1, 4)}


def test_box_fill_overwrites_existing_content():
    store = GridStore(5, 5)
    store.set_pixel(2, 2, BLUE)
    rasterizer.fill_box(store, 0, 0, 4, 4, RED)
    assert store.get_pixel(2, 2) == Color(*RED)


def test_triangle_fill_is_edge_inclusive():
    store = GridStore(10, 10)
    assert rasterizer.fill_triangle(store, (0, 0), (4, 0), (0, 4), RED) == 15
    assert colored_cells(store) == {(x, y) for x in range(5) for y in range(5) if x + y <= 4}


def test_triangle_vertex_order_does_not_matter():
    a, b = GridStore(20, 20), GridStore(20, 20)
    rasterizer.fill_triangle(a, (2, 3), (15, 7), (6, 18), RED)
    rasterizer.fill_triangle(b, (6, 18), (2, 3), (15, 7), RED)
    assert colored_cells(a) == colored_cells(b)


def test_degenerate_triangle_stays_on_its_line():
    store = GridStore(10, 10)
    rasterizer.fill_triangle(store, (0, 0), (2, 2), (4, 4), RED)
    cells = colored_cells(store)
    assert cells == {(i, i) for i in range(5)}


def test_degenerate_triangle_with_repeated_vertex():
    store = GridStore(10, 10)
    rasterizer.fill_triangle(store, (1, 1), (1, 1), (1, 6), RED)
    assert colored_cells(store) == {(1, y) for y in range(1, 7)}


def test_background_covers_every_cell():
    store = GridStore(100, 100)
    assert rasterizer.fill_background(store, (10, 10, 10)) == 10000
    assert all(cell == Color(10, 10, 10) for row in store.grid for cell in row)
    assert all(t for row in store.touched for t in row)


def test_flood_fill_on_blank_grid_fills_everything():
    store = GridStore(30, 20)
    assert rasterizer.flood_fill(store, 7, 11, RED) == 600
    assert all(cell == Color(*RED) for row in store.grid for cell in row)


def test_flood_fill_same_color_is_noop():
    store = GridStore(10, 10)
    assert rasterizer.flood_fill(store, 0, 0, WHITE) == 0
    assert not any(t for row in store.touched for t in row)


def test_flood_fill_stops_at_boundary():
    store = GridStore(5, 5)
    rasterizer.draw_line(store, 2, 0, 2, 4, BLUE)
    assert rasterizer.flood_fill(store, 0, 0, RED) == 10
    assert store.get_pixel(1, 4) == Color(*RED)
    assert store.get_pixel(2, 2) == Color(*BLUE)
    assert store.get_pixel(3, 0) == WHITE


def test_flood_fill_is_four_connected():
    store = GridStore(3, 3)
    # Diagonal wall: (0,2) only touches the seed region through a corner
    rasterizer.draw_line(store, 0, 1, 1, 2, BLUE)
    rasterizer.flood_fill(store, 0, 0, RED)
    assert store.get_pixel(0, 2) == WHITE


def test_flood_fill_out_of_bounds_seed():
    store = GridStore(5, 5)
    assert rasterizer.flood_fill(store, 5, 5, RED) == 0


def test_flood_fill_large_grid_does_not_recurse():
    store = GridStore(300, 300)
    assert rasterizer.flood_fill(store, 150, 150, RED) == 90000


def test_huge_circle_only_visits_grid_cells():
    store = GridStore(10, 10)
    assert rasterizer.draw_circle(store, 5, 5, 10 ** 12, RED) == 100


def test_box_and_triangle_far_off_grid_are_clipped():
    store = GridStore(10, 10)
    assert rasterizer.fill_box(store, -10 ** 12, -10 ** 12, 10 ** 12, 10 ** 12, RED) == 100
    assert rasterizer.fill_triangle(store, (0, 0), (10 ** 12, 0), (0, 10 ** 12), BLUE) == 100
