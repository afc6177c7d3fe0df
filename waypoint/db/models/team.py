"""Team model."""
from sqlalchemy import Column, String, Integer, Boolean, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from waypoint.db.base import Base


class Team(Base):
    __tablename__ = "teams"

    code = Column(String(36), primary_key=True)
    instance_id = Column(String(36), ForeignKey("instances.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=True)
    points = Column(Integer, nullable=False, default=0)
    has_started = Column(Boolean, nullable=False, default=False)
    # Location the team has to scan out of before doing anything else
    must_check_out = Column(String(36), ForeignKey("locations.id", ondelete="SET NULL"), nullable=True)

    # Relationships
    instance = relationship("Instance", back_populates="teams")
    check_ins = relationship(
        "CheckIn", back_populates="team", cascade="all, delete-orphan", order_by="CheckIn.time_in"
    )
    blocking_location = relationship("Location", foreign_keys=[must_check_out])
    messages = relationship(
        "Notification", back_populates="team", cascade="all, delete-orphan", order_by="Notification.created_at"
    )

    __table_args__ = (
        CheckConstraint("points >= 0", name="ck_teams_points_non_negative"),
    )
