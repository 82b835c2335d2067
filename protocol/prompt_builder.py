"""
Build the text an agent needs to speak the command protocol: the system
prompt describing the grammar and a summary of what the user changed.
"""
from typing import List

from state.changes import PixelChange


def build_system_prompt(width: int, height: int) -> str:
    """
    Build the system prompt for a canvas of the given size.

    Args:
        width: Canvas width in cells
        height: Canvas height in cells

    Returns:
        Prompt text listing every command and the valid coordinate ranges
    """
    return f"""You are a pixel art assistant. You see the current canvas state in the image and can add to it using these commands:

BOX_FILL: (x1,y1) (x2,y2) (r,g,b)    - Fill a box from (x1,y1) to (x2,y2)
CIRCLE: (x,y) radius (r,g,b)          - Draw a circle at (x,y)
LINE: (x1,y1) (x2,y2) (r,g,b)        - Draw a line from (x1,y1) to (x2,y2)
BACKGROUND: (r,g,b)                   - Set background color
COLOR: (x,y) (r,g,b)                  - Draw a single point
TRIANGLE: (x1,y1) (x2,y2) (x3,y3) (r,g,b)  - Draw a triangle

- Coordinates must be 0-{width - 1} for x, 0-{height - 1} for y
- Colors (r,g,b) must be 0-255
- You can add to the existing image; no need to redraw everything
- Respond with commands only, one per line
- Add comments with # to explain your changes
- You must submit commands in the exact parentheses format or else the command will fail.

Canvas size: {width}x{height}"""


def format_user_changes(changes: List[PixelChange]) -> str:
    """One line per changed pixel, in the order given."""
    return "\n".join(
        f"Pixel ({c.x},{c.y}) set to RGB({c.color.r},{c.color.g},{c.color.b})"
        for c in changes
    )


def build_user_message(text: str, changes: List[PixelChange]) -> str:
    """Append the user's canvas edits to their chat message, if there are any."""
    if not changes:
        return text
    return f"{text}\n\nRecent canvas changes:\n{format_user_changes(changes)}"
