"""Location model."""
from sqlalchemy import Column, String, Integer, Float, ForeignKey, Index
from sqlalchemy.orm import relationship

from waypoint.db.base import Base


class Location(Base):
    __tablename__ = "locations"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False, default="")
    instance_id = Column(String(36), ForeignKey("instances.id", ondelete="CASCADE"), nullable=False)
    marker_id = Column(String(36), ForeignKey("markers.code"), nullable=False)
    points = Column(Integer, nullable=False, default=0)

    # Visit statistics; avg_duration is the mean over total_visits - current_count samples
    total_visits = Column(Integer, nullable=False, default=0)
    current_count = Column(Integer, nullable=False, default=0)
    avg_duration = Column(Float, nullable=False, default=0.0)

    # Relationships
    instance = relationship("Instance", back_populates="locations")
    marker = relationship("Marker", lazy="joined")

    __table_args__ = (
        Index("idx_locations_instance_marker", "instance_id", "marker_id", unique=True),
    )
