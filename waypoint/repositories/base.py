"""Collaborator contracts consumed by the services.

Services only depend on these protocols; the SQLAlchemy implementations in
this package are what the application wires in.
"""
from datetime import datetime
from typing import List, Optional, Protocol

from waypoint.db.models import CheckIn, Instance, Location, Notification, Team, User


class InstanceRepository(Protocol):
    def create(self, instance: Instance) -> None: ...

    def update(self, instance: Instance) -> None:
        """Persist the whole instance atomically."""

    def get_by_id(self, instance_id: str) -> Optional[Instance]: ...

    def find_by_user_id(self, user_id: str) -> List[Instance]: ...


class TeamRepository(Protocol):
    def find_all(self, instance_id: str) -> List[Team]: ...

    def get_by_code(self, code: str) -> Optional[Team]: ...

    def update(self, team: Team) -> None: ...

    def insert_batch(self, teams: List[Team]) -> None:
        """Insert all teams or none; raise UniqueConflictError on a duplicate code."""

    def update_team_started(self, code: str) -> None: ...

    def load_instance(self, team: Team) -> None: ...

    def load_check_ins(self, team: Team) -> None: ...

    def load_blocking_location(self, team: Team) -> None: ...

    def load_messages(self, team: Team) -> None: ...

    def load_relations(self, team: Team) -> None: ...


class CheckInRepository(Protocol):
    def log_check_in(
        self,
        team: Team,
        location: Location,
        time_in: datetime,
        must_check_out: bool,
        points: int = 0,
    ) -> CheckIn: ...

    def log_check_out(self, team: Team, location: Location, time_out: datetime) -> CheckIn: ...

    def find_by_team_and_location(self, team_code: str, location_code: str) -> Optional[CheckIn]: ...

    def find_by_location(self, instance_id: str, location_code: str) -> List[CheckIn]: ...

    def update(self, check_in: CheckIn) -> None: ...


class LocationRepository(Protocol):
    def get_by_id(self, location_id: str) -> Optional[Location]: ...

    def get_by_instance_and_code(self, instance_id: str, code: str) -> Optional[Location]: ...

    def find_by_instance(self, instance_id: str) -> List[Location]: ...

    def get_for_update(self, location_id: str) -> Optional[Location]:
        """Re-read a location holding a row lock until the transaction ends."""

    def update(self, location: Location) -> None: ...


class NotificationRepository(Protocol):
    def create(self, notification: Notification) -> None: ...

    def find_by_team_code(self, team_code: str) -> List[Notification]: ...

    def dismiss(self, notification_id: str) -> None: ...


class UserRepository(Protocol):
    def create(self, user: User) -> None: ...

    def update(self, user: User) -> None: ...

    def get_by_email(self, email: str) -> Optional[User]: ...

    def delete(self, user_id: str) -> None: ...
