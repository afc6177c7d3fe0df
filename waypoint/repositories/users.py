"""User persistence."""
from typing import Optional

from sqlalchemy.orm import Session

from waypoint.db.models import User


class SQLUserRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, user: User) -> None:
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except Exception:
            self.db.rollback()
            raise

    def update(self, user: User) -> None:
        try:
            self.db.merge(user)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.strip().lower()).first()

    def delete(self, user_id: str) -> None:
        """Delete a user and, through the relationship cascade, their instances."""
        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise LookupError(f"user {user_id} not found")
        try:
            self.db.delete(user)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
