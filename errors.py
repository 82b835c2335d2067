"""
Error types raised by the canvas engine.

Every error here is local and recoverable: command errors are collected per
script line, dimension errors reject a single resize request.
"""


class CanvasError(Exception):
    """Base class for canvas engine errors."""


class CommandError(CanvasError):
    """A single command failed validation."""

    def __init__(self, keyword: str, message: str):
        super().__init__(f"{keyword} failed: {message}")
        self.keyword = keyword
        self.message = message

    def report_line(self) -> str:
        """Line used in the aggregated failure report."""
        return f"{self.keyword} failed: {self.message}"


class FormatError(CommandError):
    """Line does not match its keyword's pattern."""


class BoundsError(CommandError):
    """Coordinate outside the current canvas dimensions."""


class ColorRangeError(CommandError):
    """Color channel outside 0-255."""


class ParameterError(CommandError):
    """Command-specific parameter is invalid (e.g. non-positive radius)."""


class DimensionError(CanvasError):
    """Resize request outside the allowed dimensions."""

    def __init__(self, width, height, min_size: int, max_size: int):
        super().__init__(
            f"Invalid dimensions {width}x{height}. "
            f"Width and height must be between {min_size} and {max_size}"
        )
        self.width = width
        self.height = height
