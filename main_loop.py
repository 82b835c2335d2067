"""
Main loop for the canvas engine.
Coordinates the grid, history, change tracking and the command protocol
for one editing session.
"""
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from config import DEFAULT_COLOR, DEFAULT_GRID_SIZE
from errors import CanvasError
from execution import rasterizer
from execution.coordinate_mapper import CoordinateMapper
from protocol.executor import ScriptResult, process_script
from protocol.prompt_builder import build_user_message
from state.capture import CanvasCapture, Dimensions, PixelEntry
from state.changes import ChangeTracker, PixelChange
from state.grid import WHITE, Color, GridStore, validate_dimensions
from state.history import HistoryManager
from utils.logger import get_logger

logger = get_logger(__name__)

RenderCallback = Callable[[GridStore], None]
ReportCallback = Callable[[str], None]

TOOLS = ("pencil", "eraser", "fill")


class CanvasSession:
    """One editing session: a grid, its history and an optional change-tracking session."""

    def __init__(self, width: int = DEFAULT_GRID_SIZE, height: int = DEFAULT_GRID_SIZE,
                 on_render: Optional[RenderCallback] = None,
                 on_report: Optional[ReportCallback] = None,
                 surface_size: Optional[Tuple[int, int]] = None):
        """
        Initialize the session.

        Args:
            width: Grid width in cells
            height: Grid height in cells
            on_render: Called with the store after every mutation batch
            on_report: Receives error reports and dimension-change notices
            surface_size: Display surface (width, height) used for pointer input
        """
        self.store = GridStore(width, height)
        self.tracker = ChangeTracker()
        self.store.tracker = self.tracker
        self.history = HistoryManager(self.store)
        self.mapper = CoordinateMapper(width, height, surface_size)
        self.on_render = on_render
        self.on_report = on_report

        self.current_tool = "pencil"
        self.current_color = Color.from_hex(DEFAULT_COLOR)
        self._stroke_active = False
        self._stroke_written = 0
        self._last_cell: Optional[Tuple[int, int]] = None
        self.running = False

    @property
    def width(self) -> int:
        return self.store.width

    @property
    def height(self) -> int:
        return self.store.height

    def _render(self) -> None:
        if self.on_render:
            self.on_render(self.store)

    def _report(self, text: str) -> None:
        logger.info(f"Report: {text}")
        if self.on_report:
            self.on_report(text)

    # --- direct drawing ---

    def set_pixel(self, x: int, y: int, color: Sequence[int]) -> bool:
        changed = self.store.set_pixel(x, y, color)
        if changed:
            self._render()
        return changed

    def draw_line(self, x1: int, y1: int, x2: int, y2: int, color: Sequence[int]) -> int:
        written = rasterizer.draw_line(self.store, x1, y1, x2, y2, color)
        self._render()
        return written

    def draw_circle(self, cx: int, cy: int, radius: int, color: Sequence[int]) -> int:
        written = rasterizer.draw_circle(self.store, cx, cy, radius, color)
        self._render()
        return written

    def fill_box(self, x1: int, y1: int, x2: int, y2: int, color: Sequence[int]) -> int:
        written = rasterizer.fill_box(self.store, x1, y1, x2, y2, color)
        self._render()
        return written

    def fill_triangle(self, p1, p2, p3, color: Sequence[int]) -> int:
        written = rasterizer.fill_triangle(self.store, p1, p2, p3, color)
        self._render()
        return written

    def fill_background(self, color: Sequence[int]) -> int:
        written = rasterizer.fill_background(self.store, color)
        self._render()
        return written

    def flood_fill(self, x: int, y: int, color: Sequence[int]) -> int:
        written = rasterizer.flood_fill(self.store, x, y, color)
        if written:
            self._render()
        return written

    # --- pointer strokes ---

    def set_color(self, color: Union[str, Sequence[int]]) -> Color:
        """Set the pencil color from '#RRGGBB' or an RGB triple."""
        self.current_color = Color.from_hex(color) if isinstance(color, str) else Color.coerce(color)
        return self.current_color

    def set_tool(self, tool: str) -> None:
        if tool not in TOOLS:
            raise ValueError(f"Unknown tool: {tool}. Expected one of {', '.join(TOOLS)}")
        self.current_tool = tool

    def _tool_color(self) -> Color:
        return WHITE if self.current_tool == "eraser" else self.current_color

    def begin_stroke(self, x: int, y: int) -> None:
        """Start a stroke at grid cell (x, y); cells off the grid snap to its edge."""
        x, y = self.mapper.clamp_grid(x, y)
        self._stroke_active = True
        self._last_cell = (x, y)
        if self.current_tool == "fill":
            self._stroke_written = rasterizer.flood_fill(self.store, x, y, self.current_color)
        else:
            self._stroke_written = int(self.store.set_pixel(x, y, self._tool_color()))
        if self._stroke_written:
            self._render()

    def extend_stroke(self, x: int, y: int) -> None:
        """Continue the active stroke to grid cell (x, y)."""
        if not self._stroke_active or self.current_tool == "fill":
            return
        x, y = self.mapper.clamp_grid(x, y)
        last_x, last_y = self._last_cell
        self._stroke_written += rasterizer.draw_line(self.store, last_x, last_y, x, y, self._tool_color())
        self._last_cell = (x, y)
        self._render()

    def end_stroke(self) -> None:
        """Finish the active stroke; the whole stroke becomes one undo step."""
        if not self._stroke_active:
            return
        self._stroke_active = False
        self._last_cell = None
        if self._stroke_written:
            self.history.checkpoint()
        else:
            logger.debug("Stroke wrote nothing; no checkpoint")
        self._stroke_written = 0

    def draw_stroke(self, cells: Iterable[Sequence[int]]) -> None:
        """Draw a complete stroke through a sequence of grid cells."""
        cells = [tuple(c) for c in cells]
        if not cells:
            return
        self.begin_stroke(*cells[0])
        for x, y in cells[1:]:
            self.extend_stroke(x, y)
        self.end_stroke()

    def pointer_down(self, surface_x: float, surface_y: float) -> None:
        self.begin_stroke(*self.mapper.surface_to_grid(surface_x, surface_y))

    def pointer_move(self, surface_x: float, surface_y: float) -> None:
        self.extend_stroke(*self.mapper.surface_to_grid(surface_x, surface_y))

    def pointer_up(self) -> None:
        self.end_stroke()

    # --- command scripts ---

    def process_commands(self, text: str) -> ScriptResult:
        """
        Run a command script as one batch.

        Failing lines are skipped and reported together; exactly one
        checkpoint is taken for the whole script.
        """
        result = process_script(self.store, text)
        self.history.checkpoint()
        self._render()
        if result.failed:
            self._report(result.report())
        return result

    # --- history ---

    def checkpoint(self) -> None:
        self.history.checkpoint()

    def undo(self) -> bool:
        if self.history.undo():
            self._render()
            return True
        return False

    def redo(self) -> bool:
        if self.history.redo():
            self._render()
            return True
        return False

    def clear(self) -> None:
        """Blank the canvas at its current size; undoable."""
        self.store.reset(self.store.width, self.store.height)
        self.history.checkpoint()
        self._render()

    def resize(self, width: int, height: int) -> None:
        """
        Replace the canvas with a blank one of a new size.

        History and any change-tracking session are discarded.

        Raises:
            DimensionError: if either axis is outside 1..1000
        """
        validate_dimensions(width, height)
        old_width, old_height = self.store.width, self.store.height

        self.store.reset(width, height)
        self.history.reset()
        self.tracker.clear()
        self.mapper.update_grid_size(width, height)
        logger.info(f"Canvas resized {old_width}x{old_height} -> {width}x{height}")

        self._render()
        self._report(
            f"Dimensions changed from (0-{old_width - 1}) to (0-{width - 1}) "
            f"and (0-{old_height - 1}) to (0-{height - 1})"
        )

    # --- change tracking ---

    def start_tracking(self) -> None:
        self.tracker.start()

    def stop_tracking(self) -> None:
        self.tracker.stop()

    def get_changes(self) -> List[PixelChange]:
        return self.tracker.snapshot()

    # --- capture / restore ---

    def capture_state(self) -> CanvasCapture:
        """Dimensions, cell size and all non-white pixels, for a remote agent."""
        return CanvasCapture(
            dimensions=Dimensions(width=self.store.width, height=self.store.height),
            pixel_size=self.mapper.pixel_size,
            pixels=[
                PixelEntry(x=x, y=y, color=tuple(color))
                for x, y, color in self.store.non_default_pixels()
            ],
        )

    def restore_state(self, capture: Union[CanvasCapture, dict]) -> None:
        """
        Rebuild the canvas from a capture.

        The restored canvas starts a fresh history, like a resize.

        Raises:
            pydantic.ValidationError: if a dict capture is malformed
        """
        if not isinstance(capture, CanvasCapture):
            capture = CanvasCapture.model_validate(capture)

        width, height = capture.dimensions.width, capture.dimensions.height
        self.tracker.clear()
        self.store.reset(width, height)
        self.mapper.update_grid_size(width, height)

        skipped = 0
        for pixel in capture.pixels:
            if not self.store.set_pixel(pixel.x, pixel.y, pixel.color):
                skipped += 1
        if skipped:
            logger.warning(f"Restore skipped {skipped} pixel(s) outside {width}x{height}")

        self.history.reset()
        self._render()

    # --- agent turns ---

    def begin_agent_turn(self, message: str) -> Tuple[str, CanvasCapture]:
        """
        Close the user's editing session before asking the agent.

        Returns:
            (message with the user's pixel edits appended, current canvas capture)
        """
        self.stop_tracking()
        return build_user_message(message, self.get_changes()), self.capture_state()

    def complete_agent_turn(self, response: str) -> ScriptResult:
        """Apply the agent's command script and start tracking the user again."""
        result = self.process_commands(response)
        self.start_tracking()
        return result

    # --- interactive loop ---

    def run_interactive_loop(self, input_handler, output_handler, special_command_handler=None):
        """
        Run the main interactive loop.

        Args:
            input_handler: Function that returns one input line
            output_handler: Function that displays messages to user
            special_command_handler: Optional function(command, session) -> bool for special commands
        """
        self.running = True

        output_handler("Canvas ready! Type commands such as 'LINE: (0,0) (9,9) (255,0,0)'.")
        output_handler("Type 'help' for editor commands, 'quit' to exit.\n")

        while self.running:
            try:
                line = input_handler()

                if not line:
                    continue

                if line.lower().strip() in ("quit", "exit"):
                    self.running = False
                    break

                if special_command_handler and special_command_handler(line, self):
                    continue

                result = self.process_commands(line)
                if result.executed:
                    output_handler(f"Executed {result.executed} command(s).")

            except KeyboardInterrupt:
                logger.info("Keyboard interrupt - stopping")
                output_handler("\nStopped by user.")
                self.running = False
                break
            except EOFError:
                logger.info("EOF - stopping")
                self.running = False
                break
            except CanvasError as e:
                logger.warning(f"Rejected: {e}")
                output_handler(f"\nError: {e}\n")

        output_handler("Canvas closed. Goodbye!")
