"""Out-of-band messages to teams."""
from typing import List

from waypoint.core.exceptions import (
    EmptyContentError,
    NoRecipientsError,
    NotificationDismissError,
)
from waypoint.core.logging_config import get_logger
from waypoint.core.security import new_id
from waypoint.db.models import Notification
from waypoint.repositories.base import NotificationRepository, TeamRepository

logger = get_logger(__name__)


class NotificationService:
    def __init__(self, notification_repo: NotificationRepository, team_repo: TeamRepository):
        self.notification_repo = notification_repo
        self.team_repo = team_repo

    def send_notification(self, team_code: str, content: str) -> Notification:
        """Deliver a single notification to a team."""
        notification = Notification(id=new_id(), team_code=team_code, content=content, dismissed=False)
        self.notification_repo.create(notification)
        logger.debug("notification_sent", team_code=team_code, notification_id=notification.id)
        return notification

    def send_notification_to_all_teams(self, instance_id: str, content: str) -> None:
        """
        Deliver ``content`` to every team of an instance that has started playing.

        The first failed delivery aborts the broadcast; notifications already
        recorded are kept.

        Raises:
            NoRecipientsError: If the instance has no teams
            EmptyContentError: If content is empty
        """
        teams = self.team_repo.find_all(instance_id)
        if not teams:
            raise NoRecipientsError()

        if content == "":
            raise EmptyContentError()

        sent = 0
        for team in teams:
            if team.has_started:
                self.send_notification(team.code, content)
                sent += 1

        logger.info("notification_broadcast", instance_id=instance_id, recipients=sent)

    def get_notifications(self, team_code: str) -> List[Notification]:
        return self.notification_repo.find_by_team_code(team_code)

    def dismiss_notification(self, notification_id: str) -> None:
        try:
            self.notification_repo.dismiss(notification_id)
        except Exception as e:
            raise NotificationDismissError(f"dismiss notification: {e}") from e
