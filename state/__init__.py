"""State management for the canvas: grid, history and change tracking."""

from .grid import Color, GridStore, Snapshot, WHITE
from .history import HistoryManager
from .changes import ChangeTracker, PixelChange

__all__ = [
    "Color", "GridStore", "Snapshot", "WHITE",
    "HistoryManager", "ChangeTracker", "PixelChange",
]
