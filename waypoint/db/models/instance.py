"""Instance model."""
import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, String, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from waypoint.core.utils import optional_utc, utc_now
from waypoint.db.base import Base


class GameStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    ACTIVE = "active"
    CLOSED = "closed"


class Instance(Base):
    __tablename__ = "instances"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False, default="")
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    is_template = Column(Boolean, nullable=False, default=False)
    start_time = Column(DateTime(timezone=True), nullable=True)
    end_time = Column(DateTime(timezone=True), nullable=True)
    must_check_out = Column(Boolean, nullable=False, default=False)
    enable_bonus_points = Column(Boolean, nullable=False, default=False)

    # Relationships
    teams = relationship("Team", back_populates="instance", cascade="all, delete-orphan")
    locations = relationship("Location", back_populates="instance", cascade="all, delete-orphan")

    def get_status(self, now: Optional[datetime] = None) -> GameStatus:
        """Derive the schedule status at ``now`` (defaults to the current time).

        Closed once a set end time has been reached; active once a set start
        time has been reached and the game is not closed; scheduled otherwise.
        """
        now = optional_utc(now) or utc_now()
        start = optional_utc(self.start_time)
        end = optional_utc(self.end_time)

        if end is not None and end <= now:
            return GameStatus.CLOSED
        if start is not None and start <= now:
            return GameStatus.ACTIVE
        return GameStatus.SCHEDULED
