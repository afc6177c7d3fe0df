"""Check-in persistence."""
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from waypoint.db.models import CheckIn, Location, Team


class SQLCheckInRepository:
    def __init__(self, db: Session):
        self.db = db

    def log_check_in(
        self,
        team: Team,
        location: Location,
        time_in: datetime,
        must_check_out: bool,
        points: int = 0,
    ) -> CheckIn:
        check_in = CheckIn(
            team_code=team.code,
            location_id=location.marker_id,
            instance_id=team.instance_id,
            time_in=time_in,
            must_check_out=must_check_out,
            points=points,
        )
        try:
            self.db.add(check_in)
            self.db.commit()
            self.db.refresh(check_in)
        except Exception:
            self.db.rollback()
            raise
        return check_in

    def log_check_out(self, team: Team, location: Location, time_out: datetime) -> CheckIn:
        check_in = self.find_by_team_and_location(team.code, location.marker_id)
        if check_in is None:
            raise LookupError(f"no check-in for team {team.code} at {location.marker_id}")
        check_in.time_out = time_out
        check_in.must_check_out = False
        self.db.commit()
        self.db.refresh(check_in)
        return check_in

    def find_by_team_and_location(self, team_code: str, location_code: str) -> Optional[CheckIn]:
        return (
            self.db.query(CheckIn)
            .filter(CheckIn.team_code == team_code, CheckIn.location_id == location_code)
            .first()
        )

    def find_by_location(self, instance_id: str, location_code: str) -> List[CheckIn]:
        return (
            self.db.query(CheckIn)
            .filter(CheckIn.instance_id == instance_id, CheckIn.location_id == location_code)
            .order_by(CheckIn.time_in)
            .all()
        )

    def update(self, check_in: CheckIn) -> None:
        try:
            self.db.merge(check_in)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
