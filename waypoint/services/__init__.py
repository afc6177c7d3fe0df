from .assets import AssetGenerator
from .checkins import CheckInService
from .location_stats import (
    LocationStatsService,
    record_visit_end,
    record_visit_start,
    rolling_average,
)
from .notifications import NotificationService
from .schedule import GameScheduleService
from .teams import TeamService
from .users import UserService

__all__ = [
    # assets
    "AssetGenerator",
    # check-ins
    "CheckInService",
    # visit statistics
    "LocationStatsService",
    "record_visit_end",
    "record_visit_start",
    "rolling_average",
    # notifications
    "NotificationService",
    # schedule
    "GameScheduleService",
    # teams
    "TeamService",
    # users
    "UserService",
]
