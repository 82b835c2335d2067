"""
Minimal CLI interface for the canvas engine.
"""
import math

from errors import CanvasError
from protocol.prompt_builder import build_system_prompt, format_user_changes
from state.grid import WHITE, GridStore
from utils.logger import get_logger

logger = get_logger(__name__)

PREVIEW_COLUMNS = 50


def render_ascii(store: GridStore, max_columns: int = PREVIEW_COLUMNS) -> str:
    """
    Render the grid as text, '.' for white cells and '#' for anything else.
    Large grids are sampled down so the preview is at most max_columns wide.
    """
    step = max(1, math.ceil(store.width / max_columns))
    rows = []
    for y in range(0, store.height, step):
        row = store.grid[y]
        rows.append("".join('.' if row[x] == WHITE else '#' for x in range(0, store.width, step)))
    return "\n".join(rows)


class CLIInterface:
    """Simple CLI interface."""

    def __init__(self):
        self.prompt = "> "
        self.redraws = 0

    def get_input(self) -> str:
        """Get one line from the command line."""
        return input(self.prompt).strip()

    def display(self, message: str) -> None:
        """Display a message to the user."""
        print(message)
        logger.debug(f"UI: {message}")

    def display_error(self, message: str) -> None:
        print(f"ERROR: {message}")
        logger.error(f"UI Error: {message}")

    def display_success(self, message: str) -> None:
        print(f"✓ {message}")
        logger.info(f"UI Success: {message}")

    def on_render(self, store: GridStore) -> None:
        """Render callback; the terminal preview is only drawn on 'show'."""
        self.redraws += 1

    def show_help(self) -> None:
        help_text = """
Canvas Commands:
  - Any command script line, e.g. 'CIRCLE: (50,50) 10 (255,0,0)'
  - 'show' - Print an ASCII preview of the canvas
  - 'status' - Show canvas size, history and tracking state
  - 'undo' / 'redo' - Step through history
  - 'clear' - Blank the canvas (undoable)
  - 'resize W H' - New blank canvas of W x H cells (clears history)
  - 'fill X Y' - Flood fill from a cell with the current color
  - 'color #RRGGBB' - Set the current color
  - 'track start' / 'track stop' - Record pixel changes
  - 'changes' - List recorded pixel changes
  - 'prompt' - Print the agent system prompt for this canvas
  - 'quit' - Exit
        """
        self.display(help_text)

    def handle_special_command(self, command: str, session) -> bool:
        """
        Handle editor commands that are not part of the command script.

        Returns:
            True if command was handled, False otherwise
        """
        parts = command.strip().split()
        cmd = parts[0].lower() if parts else ""

        try:
            if cmd == "help":
                self.show_help()
            elif cmd == "show":
                self.display(render_ascii(session.store))
            elif cmd == "status":
                history = session.history
                self.display(
                    f"Canvas {session.width}x{session.height}, "
                    f"step {history.current_step + 1}/{len(history)}, "
                    f"tracking {'on' if session.tracker.is_tracking else 'off'} "
                    f"({len(session.tracker)} change(s))"
                )
            elif cmd == "undo":
                if not session.undo():
                    self.display("Nothing to undo.")
            elif cmd == "redo":
                if not session.redo():
                    self.display("Nothing to redo.")
            elif cmd == "clear":
                session.clear()
                self.display_success("Canvas cleared")
            elif cmd == "resize" and len(parts) == 3:
                session.resize(int(parts[1]), int(parts[2]))
            elif cmd == "fill" and len(parts) == 3:
                written = session.flood_fill(int(parts[1]), int(parts[2]), session.current_color)
                if written:
                    session.checkpoint()
                self.display_success(f"Filled {written} cell(s)")
            elif cmd == "color" and len(parts) == 2:
                color = session.set_color(parts[1])
                self.display_success(f"Color set to {color.to_hex()}")
            elif cmd == "track" and len(parts) == 2 and parts[1] in ("start", "stop"):
                if parts[1] == "start":
                    session.start_tracking()
                    self.display_success("Tracking started")
                else:
                    session.stop_tracking()
                    self.display_success("Tracking stopped")
            elif cmd == "changes":
                changes = session.get_changes()
                self.display(format_user_changes(changes) if changes else "No changes recorded.")
            elif cmd == "prompt":
                self.display(build_system_prompt(session.width, session.height))
            else:
                return False
        except (CanvasError, ValueError) as e:
            self.display_error(str(e))

        return True
