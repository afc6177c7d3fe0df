"""Notification persistence."""
from typing import List

from sqlalchemy.orm import Session

from waypoint.db.models import Notification


class SQLNotificationRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, notification: Notification) -> None:
        try:
            self.db.add(notification)
            self.db.commit()
            self.db.refresh(notification)
        except Exception:
            self.db.rollback()
            raise

    def find_by_team_code(self, team_code: str) -> List[Notification]:
        return (
            self.db.query(Notification)
            .filter(Notification.team_code == team_code)
            .order_by(Notification.created_at)
            .all()
        )

    def dismiss(self, notification_id: str) -> None:
        updated = (
            self.db.query(Notification)
            .filter(Notification.id == notification_id)
            .update({Notification.dismissed: True})
        )
        if not updated:
            self.db.rollback()
            raise LookupError(f"notification {notification_id} not found")
        self.db.commit()
