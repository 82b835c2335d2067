"""
Serializable canvas captures sent to a remote agent and loaded back.
"""
from typing import Annotated, List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from config import MAX_DIMENSION, MIN_DIMENSION

Channel = Annotated[int, Field(ge=0, le=255)]


class Dimensions(BaseModel):
    """Grid size in cells."""
    width: int = Field(ge=MIN_DIMENSION, le=MAX_DIMENSION)
    height: int = Field(ge=MIN_DIMENSION, le=MAX_DIMENSION)


class PixelEntry(BaseModel):
    """One non-default cell."""
    x: int = Field(ge=0)
    y: int = Field(ge=0)
    color: Tuple[Channel, Channel, Channel]


class CanvasCapture(BaseModel):
    """Dimensions, display cell size and every non-white pixel of a canvas."""
    model_config = ConfigDict(populate_by_name=True)

    dimensions: Dimensions
    pixel_size: float = Field(alias="pixelSize", gt=0)
    pixels: List[PixelEntry] = Field(default_factory=list)
