"""Team business logic."""
from typing import Callable, List, Optional

from waypoint.core.config import settings
from waypoint.core.exceptions import (
    TeamCodeExhaustedError,
    TeamNotFoundError,
    UniqueConflictError,
)
from waypoint.core.logging_config import get_logger
from waypoint.core.sanitization import sanitize_team_code
from waypoint.core.utils import new_code
from waypoint.db.models import Location, Team
from waypoint.repositories.base import TeamRepository
from waypoint.schemas.activity import LocationActivity, TeamActivity

logger = get_logger(__name__)

CodeFactory = Callable[[int], str]


class TeamService:
    """
    Team provisioning, lookup and activity reporting.

    Args:
        team_repo: Team persistence
        code_factory: Returns a new random code of the given length
        batch_size: Teams inserted per batch
        code_length: Length of generated join codes
        max_batch_retries: Attempts per batch before giving up on code conflicts
    """

    def __init__(
        self,
        team_repo: TeamRepository,
        code_factory: CodeFactory = new_code,
        batch_size: Optional[int] = None,
        code_length: Optional[int] = None,
        max_batch_retries: Optional[int] = None,
    ):
        self.team_repo = team_repo
        self.code_factory = code_factory
        self.batch_size = batch_size or settings.TEAM_BATCH_SIZE
        self.code_length = code_length or settings.TEAM_CODE_LENGTH
        self.max_batch_retries = max_batch_retries or settings.TEAM_BATCH_MAX_RETRIES

    def _new_batch(self, instance_id: str, size: int) -> List[Team]:
        """Draw ``size`` teams whose codes are unique within the batch."""
        teams: List[Team] = []
        staged = set()
        while len(teams) < size:
            code = self.code_factory(self.code_length)
            if code in staged:
                continue
            staged.add(code)
            teams.append(Team(code=code, instance_id=instance_id, points=0, has_started=False))
        return teams

    def add_teams(self, instance_id: str, count: int) -> List[Team]:
        """
        Create ``count`` teams for an instance, in batches.

        A batch that clashes with codes already stored is discarded and
        drawn again from scratch.

        Returns:
            The new teams, in insertion order

        Raises:
            TeamCodeExhaustedError: If a batch keeps clashing after max_batch_retries attempts
        """
        new_teams: List[Team] = []
        remaining = count

        while remaining > 0:
            size = min(self.batch_size, remaining)

            for attempt in range(1, self.max_batch_retries + 1):
                teams = self._new_batch(instance_id, size)
                try:
                    self.team_repo.insert_batch(teams)
                    break
                except UniqueConflictError:
                    logger.warning(
                        "team_batch_conflict",
                        instance_id=instance_id,
                        batch_size=size,
                        attempt=attempt,
                    )
            else:
                raise TeamCodeExhaustedError(self.max_batch_retries)

            new_teams.extend(teams)
            remaining -= size

        logger.info("teams_added", instance_id=instance_id, count=len(new_teams))
        return new_teams

    def find_all(self, instance_id: str) -> List[Team]:
        """Return all teams for an instance."""
        return self.team_repo.find_all(instance_id)

    def get_team_by_code(self, code: str) -> Team:
        """Return a team by its join code, ignoring case and surrounding whitespace."""
        team = self.team_repo.get_by_code(sanitize_team_code(code))
        if team is None:
            raise TeamNotFoundError()
        return team

    def update(self, team: Team) -> None:
        self.team_repo.update(team)

    def award_points(self, team: Team, points: int) -> None:
        """Add (or, with a negative value, remove) points; the total never drops below zero."""
        team.points = max(0, team.points + points)
        self.team_repo.update(team)

    def load_relation(self, team: Team, relation: str) -> None:
        """Load one relation: "Instance", "Scans", "BlockingLocation" or "Messages"."""
        loaders = {
            "Instance": self.team_repo.load_instance,
            "Scans": self.team_repo.load_check_ins,
            "BlockingLocation": self.team_repo.load_blocking_location,
            "Messages": self.team_repo.load_messages,
        }
        if relation not in loaders:
            raise ValueError("unknown relation")
        loaders[relation](team)

    def load_relations(self, team: Team) -> None:
        self.team_repo.load_relations(team)

    def start_playing(self, code: str) -> None:
        """Mark a team as started. Starting twice is a no-op."""
        team = self.get_team_by_code(code)
        if team.has_started:
            return
        self.team_repo.update_team_started(team.code)
        logger.info("team_started", team_code=team.code, instance_id=team.instance_id)

    def get_team_activity_overview(
        self, instance_id: str, locations: List[Location]
    ) -> List[TeamActivity]:
        """
        Summarise every started team's visits to the given locations.

        Teams that have not started are left out. Each team gets one row per
        location, in the order given. Only the first check-in matching a
        location's marker code is reported.
        """
        teams = self.team_repo.find_all(instance_id)

        activity = []
        for team in teams:
            if not team.has_started:
                continue

            rows = []
            for location in locations:
                row = LocationActivity(
                    location_id=location.id,
                    location_name=location.name,
                    marker_code=location.marker.code,
                )

                for check_in in team.check_ins:
                    if check_in.location_id == location.marker.code:
                        row.visited = True
                        row.time_in = check_in.time_in
                        if check_in.time_out is None:
                            row.visiting = True
                        else:
                            row.time_out = check_in.time_out
                            row.duration = check_in.duration
                        break

                rows.append(row)

            activity.append(
                TeamActivity(
                    team_code=team.code,
                    team_name=team.name,
                    points=team.points,
                    locations=rows,
                )
            )

        return activity
