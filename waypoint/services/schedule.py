"""Game scheduling: starting, stopping and rescheduling instances."""
from datetime import datetime
from typing import Optional

from waypoint.core.exceptions import (
    AlreadyActiveError,
    AlreadyClosedError,
    EndBeforeStartError,
    ScheduleUpdateError,
    StartAfterEndError,
)
from waypoint.core.logging_config import get_logger
from waypoint.core.utils import Clock, optional_utc, to_utc, utc_now
from waypoint.db.models import GameStatus, Instance
from waypoint.repositories.base import InstanceRepository

logger = get_logger(__name__)


class GameScheduleService:
    """
    Moves an instance between scheduled, active and closed.

    Status is never stored; it is derived from the start and end times
    against the injected clock. Callers serialize changes to one instance.
    """

    def __init__(self, instance_repo: InstanceRepository, clock: Clock = utc_now):
        self.instance_repo = instance_repo
        self.clock = clock

    def _save(self, instance: Instance) -> None:
        try:
            self.instance_repo.update(instance)
        except Exception as e:
            raise ScheduleUpdateError(f"updating instance {instance.id}: {e}") from e

    def start(self, instance: Instance) -> None:
        """Start the game now."""
        self.set_start_time(instance, self.clock())
        logger.info("game_started", instance_id=instance.id)

    def stop(self, instance: Instance) -> None:
        """End the game now."""
        self.set_end_time(instance, self.clock())
        logger.info("game_stopped", instance_id=instance.id)

    def set_start_time(self, instance: Instance, start: datetime) -> None:
        """
        Set the start time; an end time earlier than the new start is cleared.

        Raises:
            AlreadyActiveError: If the game is already running
            ScheduleUpdateError: If the change cannot be saved
        """
        if instance.get_status(self.clock()) == GameStatus.ACTIVE:
            raise AlreadyActiveError()

        start = to_utc(start)
        instance.start_time = start
        end = optional_utc(instance.end_time)
        if end is not None and end < start:
            instance.end_time = None

        self._save(instance)

    def set_end_time(self, instance: Instance, end: datetime) -> None:
        """
        Set the end time.

        Raises:
            AlreadyClosedError: If the game has already ended
            EndBeforeStartError: If ``end`` is before the start time
            ScheduleUpdateError: If the change cannot be saved
        """
        if instance.get_status(self.clock()) == GameStatus.CLOSED:
            raise AlreadyClosedError()

        end = to_utc(end)
        start = optional_utc(instance.start_time)
        if start is not None and end < start:
            raise EndBeforeStartError()

        instance.end_time = end
        self._save(instance)

    def schedule_game(
        self, instance: Instance, start: Optional[datetime], end: Optional[datetime]
    ) -> None:
        """
        Overwrite both times, whatever the current status.

        Used to reconfigure a game, so the active and closed guards of
        set_start_time and set_end_time do not apply here.

        Raises:
            StartAfterEndError: If both times are given and start is after end
            ScheduleUpdateError: If the change cannot be saved
        """
        start = optional_utc(start)
        end = optional_utc(end)
        if start is not None and end is not None and start > end:
            raise StartAfterEndError()

        instance.start_time = start
        instance.end_time = end
        self._save(instance)
        logger.info(
            "game_scheduled",
            instance_id=instance.id,
            start_time=start.isoformat() if start else None,
            end_time=end.isoformat() if end else None,
        )
