"""
Configuration for the canvas engine.
"""
import os
from typing import Tuple
from dotenv import load_dotenv

load_dotenv()

# Grid
DEFAULT_GRID_SIZE = int(os.getenv("DEFAULT_GRID_SIZE", "100"))  # 100x100 cells on a fresh canvas
MIN_DIMENSION = 1
MAX_DIMENSION = 1000  # resize bounds, inclusive on both axes

# Display surface the grid is mapped onto (in screen pixels)
# pixel_size = min(SURFACE_WIDTH / grid_width, SURFACE_HEIGHT / grid_height)
SURFACE_WIDTH = int(os.getenv("SURFACE_WIDTH", "500"))
SURFACE_HEIGHT = int(os.getenv("SURFACE_HEIGHT", "500"))

# Drawing
DEFAULT_COLOR = os.getenv("DEFAULT_COLOR", "#000000")  # pencil color on startup

# History
# 0 keeps every checkpoint; N > 0 keeps only the newest N
HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", "0"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "prompt_canvas.log")

# Web application
WEBAPP_HOST = os.getenv("WEBAPP_HOST", "0.0.0.0")
WEBAPP_PORT = int(os.getenv("WEBAPP_PORT", "5000"))
WEBAPP_DEBUG = os.getenv("WEBAPP_DEBUG", "false").lower() == "true"


def get_surface_size() -> Tuple[int, int]:
    """Returns (surface_width, surface_height)"""
    return (SURFACE_WIDTH, SURFACE_HEIGHT)
