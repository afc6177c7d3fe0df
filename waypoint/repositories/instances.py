"""Instance persistence."""
from typing import List, Optional

from sqlalchemy.orm import Session

from waypoint.db.models import Instance


class SQLInstanceRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, instance: Instance) -> None:
        self.db.add(instance)
        self.db.commit()
        self.db.refresh(instance)

    def update(self, instance: Instance) -> None:
        try:
            self.db.merge(instance)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def get_by_id(self, instance_id: str) -> Optional[Instance]:
        return self.db.query(Instance).filter(Instance.id == instance_id).first()

    def find_by_user_id(self, user_id: str) -> List[Instance]:
        return (
            self.db.query(Instance)
            .filter(Instance.user_id == user_id, Instance.is_template.is_(False))
            .order_by(Instance.name)
            .all()
        )
