"""Asset generation schemas."""
import re
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from waypoint.core.constants import (
    QR_DEFAULT_BACKGROUND,
    QR_DEFAULT_FOREGROUND,
    QR_FORMAT_PNG,
)

_HEX_COLOR = re.compile(r'^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')


class QRCodeOptions(BaseModel):
    """Rendering options for a QR code image.

    The format is not validated here so that the encoder can reject it with
    UnsupportedFormatError.
    """
    format: str = QR_FORMAT_PNG
    foreground: str = QR_DEFAULT_FOREGROUND
    background: str = QR_DEFAULT_BACKGROUND

    @field_validator('format')
    @classmethod
    def lower_format(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator('foreground', 'background')
    @classmethod
    def validate_color(cls, v: str) -> str:
        """Colors must be #rgb or #rrggbb hex codes."""
        if not _HEX_COLOR.match(v):
            raise ValueError(f"Invalid hex color: {v!r}")
        return v.lower()


class PDFPage(BaseModel):
    location_name: str
    url: str
    image_path: str
    # (R, G, B), each 0-255
    background: Optional[Tuple[int, int, int]] = None

    @field_validator('background')
    @classmethod
    def validate_background(cls, v):
        if v is not None and any(not 0 <= channel <= 255 for channel in v):
            raise ValueError("Background channels must be between 0 and 255")
        return v


class PDFData(BaseModel):
    instance_name: str
    pages: List[PDFPage] = Field(default_factory=list)
