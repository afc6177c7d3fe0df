"""Team persistence."""
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.orm.exc import FlushError

from waypoint.core.exceptions import UniqueConflictError
from waypoint.db.models import Team


def is_unique_violation(exc: Exception) -> bool:
    """True when an insert failed on a unique or primary key clash.

    SQLite reports "UNIQUE constraint failed", PostgreSQL "duplicate key value
    violates unique constraint". A clash with a row already loaded in the
    session never reaches the database and surfaces as a FlushError.
    """
    if isinstance(exc, FlushError):
        return "conflicts with persistent instance" in str(exc)
    message = str(getattr(exc, "orig", exc)).lower()
    return "unique" in message or "duplicate key" in message


class SQLTeamRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_all(self, instance_id: str) -> List[Team]:
        return (
            self.db.query(Team)
            .options(selectinload(Team.check_ins))
            .filter(Team.instance_id == instance_id)
            .order_by(Team.code)
            .all()
        )

    def get_by_code(self, code: str) -> Optional[Team]:
        return self.db.query(Team).filter(Team.code == code).first()

    def update(self, team: Team) -> None:
        try:
            self.db.merge(team)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def insert_batch(self, teams: List[Team]) -> None:
        try:
            self.db.add_all(teams)
            self.db.commit()
        except (IntegrityError, FlushError) as e:
            self.db.rollback()
            if is_unique_violation(e):
                raise UniqueConflictError("team code already in use") from e
            raise

    def update_team_started(self, code: str) -> None:
        self.db.query(Team).filter(Team.code == code).update({Team.has_started: True})
        self.db.commit()

    # Relation loading: refresh reloads the named relationships now, while the
    # session is still open.

    def load_instance(self, team: Team) -> None:
        self.db.refresh(team, attribute_names=["instance"])

    def load_check_ins(self, team: Team) -> None:
        self.db.refresh(team, attribute_names=["check_ins"])

    def load_blocking_location(self, team: Team) -> None:
        self.db.refresh(team, attribute_names=["blocking_location"])

    def load_messages(self, team: Team) -> None:
        self.db.refresh(team, attribute_names=["messages"])

    def load_relations(self, team: Team) -> None:
        self.db.refresh(team, attribute_names=["instance", "check_ins", "blocking_location", "messages"])
