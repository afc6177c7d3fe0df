"""Database models."""
from waypoint.db.models.user import User
from waypoint.db.models.instance import Instance, GameStatus
from waypoint.db.models.marker import Marker
from waypoint.db.models.location import Location
from waypoint.db.models.team import Team
from waypoint.db.models.checkin import CheckIn
from waypoint.db.models.notification import Notification

__all__ = [
    "User",
    "Instance",
    "GameStatus",
    "Marker",
    "Location",
    "Team",
    "CheckIn",
    "Notification",
]
