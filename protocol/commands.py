"""
Command grammar for the canvas script protocol.

Each keyword is registered with its pattern, a builder that validates the
matched numbers and an executor that rasterizes the result. New primitives
are added with register_command() without touching the existing entries.
"""
import re
from dataclasses import dataclass
from typing import Callable, ClassVar, Dict, List, Optional, Pattern, Tuple, Union

from errors import BoundsError, ColorRangeError, CommandError, FormatError, ParameterError
from execution import rasterizer
from state.grid import COLOR_ERROR_MESSAGE, Color, GridStore

Point = Tuple[int, int]

# Numbers may carry a sign so negative values fail the range checks
# (bounds, color, radius) with a specific message instead of a format error
_NUM = r"(-?\d+)"
_POINT = rf"\({_NUM},\s*{_NUM}\)"
_RGB = rf"\({_NUM},\s*{_NUM},\s*{_NUM}\)"


@dataclass(frozen=True)
class BackgroundCommand:
    keyword: ClassVar[str] = "BACKGROUND"
    color: Color


@dataclass(frozen=True)
class BoxFillCommand:
    keyword: ClassVar[str] = "BOX_FILL"
    start: Point
    end: Point
    color: Color


@dataclass(frozen=True)
class CircleCommand:
    keyword: ClassVar[str] = "CIRCLE"
    center: Point
    radius: int
    color: Color


@dataclass(frozen=True)
class LineCommand:
    keyword: ClassVar[str] = "LINE"
    start: Point
    end: Point
    color: Color


@dataclass(frozen=True)
class ColorCommand:
    keyword: ClassVar[str] = "COLOR"
    point: Point
    color: Color


@dataclass(frozen=True)
class TriangleCommand:
    keyword: ClassVar[str] = "TRIANGLE"
    vertices: Tuple[Point, Point, Point]
    color: Color


@dataclass(frozen=True)
class CommandFailure:
    """A candidate command line that failed validation."""
    keyword: str
    message: str

    def report_line(self) -> str:
        return f"{self.keyword} failed: {self.message}"


Command = Union[BackgroundCommand, BoxFillCommand, CircleCommand,
                LineCommand, ColorCommand, TriangleCommand]


@dataclass
class CommandSpec:
    """Registry entry for one command keyword."""
    keyword: str
    syntax: str
    pattern: Pattern
    # (keyword, numbers, width, height) -> command; raises CommandError
    build: Callable[[str, List[int], int, int], Command]
    execute: Callable[[GridStore, Command], None]


COMMAND_REGISTRY: Dict[str, CommandSpec] = {}


def register_command(keyword: str, syntax: str, arguments: str,
                     build: Callable, execute: Callable) -> CommandSpec:
    """
    Register a command keyword.

    Args:
        keyword: Keyword without the trailing colon (e.g. "LINE")
        syntax: Human-readable usage shown in format errors
        arguments: Regex for everything after "KEYWORD:"
        build: Validates the matched integers and returns a command
        execute: Applies a command to a GridStore
    """
    entry = CommandSpec(
        keyword=keyword,
        syntax=syntax,
        pattern=re.compile(rf"{re.escape(keyword)}:\s*{arguments}"),
        build=build,
        execute=execute,
    )
    COMMAND_REGISTRY[keyword] = entry
    return entry


# --- validators ---

def _bounds_message(width: int, height: int, what: str = "coordinates") -> str:
    return f"Invalid {what}. Must be within canvas bounds (0-{width - 1}, 0-{height - 1})"


def _check_points(keyword: str, points: List[Point], width: int, height: int,
                  what: str = "coordinates") -> None:
    for x, y in points:
        if not (0 <= x < width and 0 <= y < height):
            raise BoundsError(keyword, _bounds_message(width, height, what))


def _check_color(keyword: str, channels: List[int]) -> Color:
    if not all(0 <= c <= 255 for c in channels):
        raise ColorRangeError(keyword, COLOR_ERROR_MESSAGE)
    return Color(*channels)


# --- builders ---

def _build_background(keyword, values, width, height):
    return BackgroundCommand(color=_check_color(keyword, values[0:3]))


def _build_box_fill(keyword, values, width, height):
    start, end = (values[0], values[1]), (values[2], values[3])
    _check_points(keyword, [start, end], width, height)
    return BoxFillCommand(start=start, end=end, color=_check_color(keyword, values[4:7]))


def _build_circle(keyword, values, width, height):
    center, radius = (values[0], values[1]), values[2]
    _check_points(keyword, [center], width, height, what="center coordinates")
    color = _check_color(keyword, values[3:6])
    if radius <= 0:
        raise ParameterError(keyword, "Invalid radius. Must be greater than 0")
    return CircleCommand(center=center, radius=radius, color=color)


def _build_line(keyword, values, width, height):
    start, end = (values[0], values[1]), (values[2], values[3])
    _check_points(keyword, [start, end], width, height)
    return LineCommand(start=start, end=end, color=_check_color(keyword, values[4:7]))


def _build_color(keyword, values, width, height):
    point = (values[0], values[1])
    _check_points(keyword, [point], width, height)
    return ColorCommand(point=point, color=_check_color(keyword, values[2:5]))


def _build_triangle(keyword, values, width, height):
    vertices = ((values[0], values[1]), (values[2], values[3]), (values[4], values[5]))
    _check_points(keyword, list(vertices), width, height)
    return TriangleCommand(vertices=vertices, color=_check_color(keyword, values[6:9]))


register_command(
    "BACKGROUND", "BACKGROUND: (r,g,b)", _RGB, _build_background,
    lambda store, cmd: rasterizer.fill_background(store, cmd.color),
)
register_command(
    "BOX_FILL", "BOX_FILL: (x1,y1) (x2,y2) (r,g,b)", rf"{_POINT}\s*{_POINT}\s*{_RGB}", _build_box_fill,
    lambda store, cmd: rasterizer.fill_box(store, *cmd.start, *cmd.end, cmd.color),
)
register_command(
    "CIRCLE", "CIRCLE: (x,y) radius (r,g,b)", rf"{_POINT}\s*{_NUM}\s*{_RGB}", _build_circle,
    lambda store, cmd: rasterizer.draw_circle(store, *cmd.center, cmd.radius, cmd.color),
)
register_command(
    "LINE", "LINE: (x1,y1) (x2,y2) (r,g,b)", rf"{_POINT}\s*{_POINT}\s*{_RGB}", _build_line,
    lambda store, cmd: rasterizer.draw_line(store, *cmd.start, *cmd.end, cmd.color),
)
register_command(
    "COLOR", "COLOR: (x,y) (r,g,b)", rf"{_POINT}\s*{_RGB}", _build_color,
    lambda store, cmd: store.set_pixel(*cmd.point, cmd.color),
)
register_command(
    "TRIANGLE", "TRIANGLE: (x1,y1) (x2,y2) (x3,y3) (r,g,b)",
    rf"{_POINT}\s*{_POINT}\s*{_POINT}\s*{_RGB}", _build_triangle,
    lambda store, cmd: rasterizer.fill_triangle(store, *cmd.vertices, cmd.color),
)


def command_keyword(line: str) -> Optional[str]:
    """Keyword the line starts with ("LINE" for "LINE: ..."), or None."""
    for keyword in COMMAND_REGISTRY:
        if line.startswith(f"{keyword}:"):
            return keyword
    return None


def build_command(line: str, width: int, height: int) -> Optional[Command]:
    """
    Parse and validate one line against a canvas of the given size.

    Returns:
        The command, or None for blank, comment and non-command lines

    Raises:
        CommandError: first failing check (format, bounds, color, parameter)
    """
    if not line.strip() or line.startswith('#'):
        return None

    keyword = command_keyword(line)
    if keyword is None:
        return None

    entry = COMMAND_REGISTRY[keyword]
    match = entry.pattern.match(line)
    if not match:
        raise FormatError(keyword, f"Invalid format. Use: {entry.syntax}")

    values = [int(group) for group in match.groups()]
    return entry.build(keyword, values, width, height)


def parse_command(line: str, width: int, height: int) -> Optional[Union[Command, CommandFailure]]:
    """Like build_command, but validation errors come back as a CommandFailure."""
    try:
        return build_command(line, width, height)
    except CommandError as e:
        return CommandFailure(keyword=e.keyword, message=e.message)
