"""Repositories: collaborator contracts and their SQLAlchemy implementations."""
from waypoint.repositories.base import (
    CheckInRepository,
    InstanceRepository,
    LocationRepository,
    NotificationRepository,
    TeamRepository,
    UserRepository,
)
from waypoint.repositories.checkins import SQLCheckInRepository
from waypoint.repositories.instances import SQLInstanceRepository
from waypoint.repositories.locations import SQLLocationRepository
from waypoint.repositories.notifications import SQLNotificationRepository
from waypoint.repositories.teams import SQLTeamRepository
from waypoint.repositories.users import SQLUserRepository

__all__ = [
    "CheckInRepository",
    "InstanceRepository",
    "LocationRepository",
    "NotificationRepository",
    "TeamRepository",
    "UserRepository",
    "SQLCheckInRepository",
    "SQLInstanceRepository",
    "SQLLocationRepository",
    "SQLNotificationRepository",
    "SQLTeamRepository",
    "SQLUserRepository",
]
