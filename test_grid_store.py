"""Tests for the grid store and the Color value type."""
import pytest

from errors import ColorRangeError, DimensionError
from state.grid import WHITE, Color, GridStore


def test_new_grid_is_white_and_untouched():
    store = GridStore(4, 3)
    assert (store.width, store.height) == (4, 3)
    assert len(store.grid) == 3 and all(len(row) == 4 for row in store.grid)
    assert all(cell == WHITE for row in store.grid for cell in row)
    assert not any(t for row in store.touched for t in row)


def test_set_pixel_writes_color_and_marks_touched():
    store = GridStore(10, 10)
    assert store.set_pixel(3, 7, (10, 20, 30)) is True
    assert store.get_pixel(3, 7) == Color(10, 20, 30)
    assert store.is_touched(3, 7)
    assert not store.is_touched(7, 3)


def test_writing_white_still_marks_touched():
    store = GridStore(5, 5)
    store.set_pixel(1, 1, WHITE)
    assert store.get_pixel(1, 1) == WHITE
    assert store.is_touched(1, 1)


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (10, 0), (0, 10), (10, 10)])
def test_set_pixel_out_of_bounds_changes_nothing(x, y):
    store = GridStore(10, 10)
    before = store.snapshot()
    assert store.set_pixel(x, y, (0, 0, 0)) is False
    assert store.snapshot() == before


def test_set_pixel_rejects_invalid_color():
    store = GridStore(5, 5)
    with pytest.raises(ColorRangeError):
        store.set_pixel(0, 0, (0, 300, 0))
    assert store.get_pixel(0, 0) == WHITE


@pytest.mark.parametrize("width, height", [(0, 10), (10, 0), (1001, 10), (10, 1001), (-5, 5)])
def test_reset_rejects_out_of_range_dimensions(width, height):
    with pytest.raises(DimensionError):
        GridStore(width, height)


def test_reset_accepts_extreme_dimensions():
    store = GridStore(1, 1)
    store.reset(1000, 1)
    assert (store.width, store.height) == (1000, 1)


def test_snapshot_is_detached_from_grid():
    store = GridStore(3, 3)
    store.set_pixel(0, 0, (1, 2, 3))
    snap = store.snapshot()
    store.set_pixel(0, 0, (9, 9, 9))
    assert snap.grid[0][0] == Color(1, 2, 3)

    store.restore(snap)
    assert store.get_pixel(0, 0) == Color(1, 2, 3)
    store.set_pixel(0, 0, (4, 4, 4))
    assert snap.grid[0][0] == Color(1, 2, 3)


def test_non_default_pixels_are_row_major():
    store = GridStore(5, 5)
    store.set_pixel(4, 0, (1, 1, 1))
    store.set_pixel(0, 2, (2, 2, 2))
    store.set_pixel(1, 0, (3, 3, 3))
    assert list(store.non_default_pixels()) == [
        (1, 0, Color(3, 3, 3)),
        (4, 0, Color(1, 1, 1)),
        (0, 2, Color(2, 2, 2)),
    ]


def test_color_equality_is_structural():
    assert Color(1, 2, 3) == (1, 2, 3)
    assert Color.coerce([1, 2, 3]) == Color(1, 2, 3)
    assert len({Color(1, 2, 3), Color.coerce((1, 2, 3))}) == 1


def test_color_from_hex():
    assert Color.from_hex("#FF8000") == Color(255, 128, 0)
    assert Color.from_hex("00ff00").to_hex() == "#00ff00"
    with pytest.raises(ColorRangeError):
        Color.from_hex("#12345")
    with pytest.raises(ColorRangeError):
        Color.from_hex("#zzzzzz")


def test_out_of_range_color_instance_is_rejected():
    store = GridStore(5, 5)
    with pytest.raises(ColorRangeError):
        store.set_pixel(0, 0, Color(300, -1, 0))
    assert store.get_pixel(0, 0) == WHITE
    assert not store.is_touched(0, 0)
