"""User model."""
from sqlalchemy import Column, String, Boolean, Integer
from sqlalchemy.orm import relationship

from waypoint.core.constants import PROVIDER_EMAIL
from waypoint.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False, default="")
    provider = Column(String(32), nullable=False, default=PROVIDER_EMAIL)
    name = Column(String(255), nullable=False, default="")
    display_name = Column(String(255), nullable=True)
    work_type = Column(String(100), nullable=True)
    share_email = Column(Boolean, nullable=False, default=False)
    free_credits = Column(Integer, nullable=False, default=0)
    paid_credits = Column(Integer, nullable=False, default=0)
    current_instance_id = Column(String(36), nullable=True)

    # Relationships
    instances = relationship("Instance", cascade="all, delete-orphan")
