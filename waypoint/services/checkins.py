"""Gameplay check-ins and check-outs."""
from waypoint.core.constants import VISIT_BONUSES
from waypoint.core.exceptions import (
    AlreadyCheckedInError,
    CheckOutAtWrongLocationError,
    LocationNotFoundError,
    UnnecessaryCheckOutError,
)
from waypoint.core.logging_config import get_logger
from waypoint.core.utils import Clock, utc_now
from waypoint.db.models import Location, Team
from waypoint.repositories.base import CheckInRepository, LocationRepository, TeamRepository
from waypoint.services.location_stats import LocationStatsService

logger = get_logger(__name__)


def visit_bonus(points: int, previous_visits: int) -> int:
    """Bonus for the visitor arriving after ``previous_visits`` others, rounded down."""
    if previous_visits < len(VISIT_BONUSES):
        return int(points * VISIT_BONUSES[previous_visits])
    return 0


class CheckInService:
    """
    Records teams arriving at and leaving locations.

    When the instance requires check-out, a check-in stays open and the team
    is blocked at that location until it checks out; points are awarded on
    check-out. Otherwise the visit is closed on the spot and points are
    awarded straight away.

    With bonus points enabled, the first three visitors of a location earn
    100%, 50% and 20% extra, paid at check-in.
    """

    def __init__(
        self,
        check_in_repo: CheckInRepository,
        location_repo: LocationRepository,
        team_repo: TeamRepository,
        stats_service: LocationStatsService,
        clock: Clock = utc_now,
    ):
        self.check_in_repo = check_in_repo
        self.location_repo = location_repo
        self.team_repo = team_repo
        self.stats_service = stats_service
        self.clock = clock

    def _find_location(self, team: Team, location_code: str) -> Location:
        location = self.location_repo.get_by_instance_and_code(team.instance_id, location_code)
        if location is None:
            raise LocationNotFoundError()
        return location

    def check_in(self, team: Team, location_code: str) -> None:
        """
        Check a team in at the location with the given marker code.

        Raises:
            AlreadyCheckedInError: If the team still has to check out somewhere,
                or has already visited this location
            LocationNotFoundError: If no location in the team's instance has this code
        """
        self.team_repo.load_relations(team)

        if team.must_check_out:
            raise AlreadyCheckedInError()

        location = self._find_location(team, location_code)

        if any(c.location_id == location.marker_id for c in team.check_ins):
            raise AlreadyCheckedInError()

        must_check_out = bool(team.instance.must_check_out)
        bonus = 0
        if team.instance.enable_bonus_points:
            bonus = visit_bonus(location.points, location.total_visits)

        # Bonus is paid on arrival; base points wait for check-out when required
        points = bonus if must_check_out else location.points + bonus
        now = self.clock()
        check_in = self.check_in_repo.log_check_in(
            team, location, now, must_check_out, points=points
        )
        self.stats_service.increment_visitors(location)

        if must_check_out:
            team.must_check_out = location.id
        else:
            # Zero-length visit
            check_in.time_out = check_in.time_in
            self.check_in_repo.update(check_in)
            self.stats_service.decrement_visitors(location, 0.0)
        team.points += points

        self.team_repo.update(team)
        logger.info(
            "team_checked_in",
            team_code=team.code,
            location_id=location.id,
            must_check_out=must_check_out,
            bonus=bonus,
        )

    def check_out(self, team: Team, location_code: str) -> None:
        """
        Check a team out of the location it is blocked at and award its points.

        Raises:
            LocationNotFoundError: If no location in the team's instance has this code
            UnnecessaryCheckOutError: If the team is not blocked anywhere
            CheckOutAtWrongLocationError: If the team is blocked at another location
        """
        location = self._find_location(team, location_code)
        self.team_repo.load_relations(team)

        if not team.must_check_out:
            raise UnnecessaryCheckOutError()
        if team.must_check_out != location.id:
            raise CheckOutAtWrongLocationError()

        check_in = self.check_in_repo.log_check_out(team, location, self.clock())
        check_in.points += location.points
        self.check_in_repo.update(check_in)

        self.stats_service.decrement_visitors(location, check_in.duration)

        team.points += location.points
        team.must_check_out = None
        self.team_repo.update(team)
        logger.info(
            "team_checked_out",
            team_code=team.code,
            location_id=location.id,
            duration=check_in.duration,
        )
