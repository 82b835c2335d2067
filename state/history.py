"""
Linear undo/redo history of grid snapshots.
"""
from typing import List

from config import HISTORY_LIMIT
from state.grid import GridStore, Snapshot
from utils.logger import get_logger

logger = get_logger(__name__)


class HistoryManager:
    """
    Branch-truncating history over a GridStore.

    Checkpoints are taken once per logical batch (a pointer stroke, a command
    script), never per pixel. Taking a checkpoint after an undo discards the
    redo branch.
    """

    def __init__(self, store: GridStore, limit: int = None):
        """
        Args:
            store: Grid store to snapshot and restore
            limit: Maximum number of snapshots kept (0 = unbounded, default from config)
        """
        self.store = store
        self.limit = HISTORY_LIMIT if limit is None else limit
        self.snapshots: List[Snapshot] = []
        self.current_step = -1
        self.checkpoint()

    def checkpoint(self) -> None:
        """Save the current grid, dropping anything after the cursor."""
        del self.snapshots[self.current_step + 1:]
        self.snapshots.append(self.store.snapshot())
        self.current_step = len(self.snapshots) - 1

        if self.limit and len(self.snapshots) > self.limit:
            overflow = len(self.snapshots) - self.limit
            del self.snapshots[:overflow]
            self.current_step -= overflow

    def undo(self) -> bool:
        if not self.can_undo:
            return False
        self.current_step -= 1
        self.store.restore(self.snapshots[self.current_step])
        logger.debug(f"Undo -> step {self.current_step}")
        return True

    def redo(self) -> bool:
        if not self.can_redo:
            return False
        self.current_step += 1
        self.store.restore(self.snapshots[self.current_step])
        logger.debug(f"Redo -> step {self.current_step}")
        return True

    def reset(self) -> None:
        """Forget all history and start over from the store's current state."""
        self.snapshots = []
        self.current_step = -1
        self.checkpoint()

    @property
    def can_undo(self) -> bool:
        return self.current_step > 0

    @property
    def can_redo(self) -> bool:
        return self.current_step < len(self.snapshots) - 1

    def __len__(self) -> int:
        return len(self.snapshots)
