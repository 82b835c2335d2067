"""
Change tracking: records which pixels a user changed between two points in a
session so they can be summarized for the agent.
"""
from dataclasses import dataclass
from typing import Dict, List, Tuple

from state.grid import Color


@dataclass(frozen=True)
class PixelChange:
    """A pixel that was set to a new color while tracking."""
    x: int
    y: int
    color: Color


class ChangeTracker:
    """Records distinct pixel writes, keyed by coordinate (last write wins)."""

    def __init__(self):
        self.is_tracking = False
        self._changes: Dict[Tuple[int, int], Color] = {}

    def start(self) -> None:
        self._changes.clear()
        self.is_tracking = True

    def stop(self) -> None:
        """Stop tracking; the recorded changes stay readable."""
        self.is_tracking = False

    def clear(self) -> None:
        self._changes.clear()
        self.is_tracking = False

    def record(self, x: int, y: int, old_color: Color, new_color: Color) -> None:
        if not self.is_tracking or old_color == new_color:
            return
        self._changes[(x, y)] = new_color

    def snapshot(self) -> List[PixelChange]:
        """Recorded changes ordered by (y, x)."""
        ordered = sorted(self._changes.items(), key=lambda item: (item[0][1], item[0][0]))
        return [PixelChange(x=x, y=y, color=color) for (x, y), color in ordered]

    def __len__(self) -> int:
        return len(self._changes)
