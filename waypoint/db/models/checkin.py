"""CheckIn model."""
from typing import Optional

from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Index

from sqlalchemy.orm import relationship

from waypoint.core.utils import to_utc
from waypoint.db.base import Base


class CheckIn(Base):
    """A team's visit to a location; open until time_out is set."""
    __tablename__ = "check_ins"

    team_code = Column(String(36), ForeignKey("teams.code", ondelete="CASCADE"), primary_key=True)
    # Marker code of the visited location
    location_id = Column(String(36), primary_key=True)
    instance_id = Column(String(36), ForeignKey("instances.id", ondelete="CASCADE"), nullable=False)
    time_in = Column(DateTime(timezone=True), nullable=False)
    time_out = Column(DateTime(timezone=True), nullable=True)
    must_check_out = Column(Boolean, nullable=False, default=False)
    points = Column(Integer, nullable=False, default=0)

    # Relationships
    team = relationship("Team", back_populates="check_ins")

    __table_args__ = (
        Index("idx_check_ins_location", "instance_id", "location_id"),
    )

    @property
    def is_open(self) -> bool:
        return self.time_out is None

    @property
    def duration(self) -> Optional[float]:
        """Seconds between time_in and time_out, or None while open."""
        if self.time_out is None:
            return None
        return (to_utc(self.time_out) - to_utc(self.time_in)).total_seconds()
