"""Location persistence."""
from typing import List, Optional

from sqlalchemy.orm import Session

from waypoint.db.models import Location


class SQLLocationRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, location_id: str) -> Optional[Location]:
        return self.db.query(Location).filter(Location.id == location_id).first()

    def get_by_instance_and_code(self, instance_id: str, code: str) -> Optional[Location]:
        return (
            self.db.query(Location)
            .filter(Location.instance_id == instance_id, Location.marker_id == code)
            .first()
        )

    def find_by_instance(self, instance_id: str) -> List[Location]:
        return (
            self.db.query(Location)
            .filter(Location.instance_id == instance_id)
            .order_by(Location.name)
            .all()
        )

    def get_for_update(self, location_id: str) -> Optional[Location]:
        # SQLite has no row locks and ignores FOR UPDATE; its writer lock
        # serializes the transaction instead.
        return (
            self.db.query(Location)
            .filter(Location.id == location_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def update(self, location: Location) -> None:
        try:
            self.db.merge(location)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
