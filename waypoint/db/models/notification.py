"""Notification model."""
from datetime import datetime, timezone as tz

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey

from sqlalchemy.orm import relationship

from waypoint.core.sanitization import MAX_NOTIFICATION_LENGTH
from waypoint.db.base import Base


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True)
    team_code = Column(String(36), ForeignKey("teams.code", ondelete="CASCADE"), nullable=False, index=True)
    content = Column(String(MAX_NOTIFICATION_LENGTH), nullable=False)
    type = Column(String(255), nullable=False, default="")
    dismissed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(tz.utc))

    # Relationships
    team = relationship("Team", back_populates="messages")
