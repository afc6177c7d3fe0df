"""Marker model."""
from sqlalchemy import Column, String, Float

from waypoint.db.base import Base


class Marker(Base):
    """The QR target a location is reached through."""
    __tablename__ = "markers"

    code = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False, default="")
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
