from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from waypoint.core.security import get_password_hash, new_id
from waypoint.db.models import Instance, Location, Marker, Team, User

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, seconds: float) -> None:
        """Move to BASE_TIME + seconds."""
        self.now = BASE_TIME + timedelta(seconds=seconds)

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


class SequenceCodes:
    """Code factory replaying a fixed sequence of codes, then failing loudly."""

    def __init__(self, codes: Iterable[str]):
        self.codes = list(codes)
        self.calls = 0

    def __call__(self, length: int) -> str:
        if self.calls >= len(self.codes):
            raise AssertionError("code sequence exhausted")
        code = self.codes[self.calls]
        self.calls += 1
        return code


def at(seconds: float) -> datetime:
    """BASE_TIME + seconds."""
    return BASE_TIME + timedelta(seconds=seconds)


def create_user(
    session: Session,
    email: str = "host@example.com",
    password: str = "correct horse",
    provider: str = "email",
) -> User:
    user = User(
        id=new_id(),
        email=email,
        password=get_password_hash(password),
        provider=provider,
        name="Host",
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def create_instance(
    session: Session,
    user: User,
    name: str = "Campus Hunt",
    must_check_out: bool = False,
    is_template: bool = False,
    enable_bonus_points: bool = False,
) -> Instance:
    instance = Instance(
        id=new_id(),
        name=name,
        user_id=user.id,
        must_check_out=must_check_out,
        is_template=is_template,
        enable_bonus_points=enable_bonus_points,
    )
    session.add(instance)
    session.commit()
    session.refresh(instance)
    return instance


def create_location(
    session: Session,
    instance: Instance,
    code: str,
    name: str = "Library",
    points: int = 10,
) -> Location:
    marker = session.query(Marker).filter(Marker.code == code).first()
    if marker is None:
        marker = Marker(code=code, name=name)
        session.add(marker)
    location = Location(
        id=new_id(),
        name=name,
        instance_id=instance.id,
        marker_id=code,
        points=points,
        total_visits=0,
        current_count=0,
        avg_duration=0.0,
    )
    session.add(location)
    session.commit()
    session.refresh(location)
    return location


def create_team(
    session: Session,
    instance: Instance,
    code: str,
    name: Optional[str] = None,
    has_started: bool = True,
    points: int = 0,
) -> Team:
    team = Team(
        code=code,
        instance_id=instance.id,
        name=name,
        has_started=has_started,
        points=points,
    )
    session.add(team)
    session.commit()
    session.refresh(team)
    return team
