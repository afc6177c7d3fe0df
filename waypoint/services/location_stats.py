"""Visit statistics for locations.

Each location keeps three counters:

- ``total_visits``: visits ever opened
- ``current_count``: visits opened but not yet closed
- ``avg_duration``: mean duration (seconds) of the closed visits

so the average is always taken over ``total_visits - current_count`` samples.
Closing a visit folds its duration into the average using the number of
visits that were already closed, not ``total_visits``, which also counts the
teams still on site.

The counters must be read, changed and written as one step; the service does
this under a row lock inside the caller's transaction.
"""
from typing import Dict, List

from waypoint.core.exceptions import ArithmeticUnderflowError
from waypoint.core.logging_config import get_logger
from waypoint.db.models import Location
from waypoint.repositories.base import CheckInRepository, LocationRepository

logger = get_logger(__name__)


def rolling_average(avg: float, completed_before: int, duration: float) -> float:
    """Mean of ``completed_before`` samples averaging ``avg`` plus one more sample."""
    if completed_before < 0:
        raise ArithmeticUnderflowError(
            f"completed visit count cannot be negative: {completed_before}"
        )
    return (avg * completed_before + duration) / (completed_before + 1)


def record_visit_start(location: Location) -> None:
    """Count a newly opened visit."""
    location.total_visits += 1
    location.current_count += 1


def record_visit_end(location: Location, duration: float) -> None:
    """Close one open visit lasting ``duration`` seconds and update the average.

    Raises:
        ArithmeticUnderflowError: If no visit is open or the counters are inconsistent
    """
    if location.current_count <= 0:
        raise ArithmeticUnderflowError("current count cannot be negative")

    completed_before = location.total_visits - location.current_count
    new_avg = rolling_average(location.avg_duration, completed_before, duration)
    location.current_count -= 1
    location.avg_duration = new_avg


class LocationStatsService:
    def __init__(self, location_repo: LocationRepository, check_in_repo: CheckInRepository):
        self.location_repo = location_repo
        self.check_in_repo = check_in_repo

    def _locked(self, location: Location) -> Location:
        if location is None:
            raise ValueError("location cannot be None")
        locked = self.location_repo.get_for_update(location.id)
        if locked is None:
            raise ValueError("location not found")
        return locked

    def increment_visitors(self, location: Location) -> Location:
        """Record a check-in at ``location`` and persist the counters."""
        locked = self._locked(location)
        record_visit_start(locked)
        self.location_repo.update(locked)
        return locked

    def decrement_visitors(self, location: Location, duration: float) -> Location:
        """Record a check-out after ``duration`` seconds and persist the counters."""
        locked = self._locked(location)
        record_visit_end(locked, duration)
        self.location_repo.update(locked)
        logger.debug(
            "visit_recorded",
            location_id=locked.id,
            duration=duration,
            avg_duration=locked.avg_duration,
        )
        return locked

    def recalculate(self, locations: List[Location]) -> Dict[str, Location]:
        """
        Rebuild every location's counters from its check-in records.

        Repairs statistics written by an earlier, incorrect update and any
        drift after manual data fixes.

        Args:
            locations: Locations to rebuild (typically every location of one instance)

        Returns:
            Dict mapping location id -> updated location
        """
        result = {}
        for location in locations:
            locked = self._locked(location)
            check_ins = self.check_in_repo.find_by_location(locked.instance_id, locked.marker_id)
            durations = [c.duration for c in check_ins if c.duration is not None]

            locked.total_visits = len(check_ins)
            locked.current_count = len(check_ins) - len(durations)
            locked.avg_duration = sum(durations) / len(durations) if durations else 0.0
            self.location_repo.update(locked)
            result[locked.id] = locked

        logger.info("location_stats_recalculated", locations=len(result))
        return result
