"""Pydantic schemas for service inputs and outputs."""
from waypoint.schemas.activity import LocationActivity, TeamActivity
from waypoint.schemas.assets import PDFData, PDFPage, QRCodeOptions

__all__ = [
    "LocationActivity",
    "TeamActivity",
    "PDFData",
    "PDFPage",
    "QRCodeOptions",
]
