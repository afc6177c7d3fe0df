"""Shared test fixtures and configuration."""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from waypoint.db.base import Base
from waypoint.repositories import (
    SQLCheckInRepository,
    SQLInstanceRepository,
    SQLLocationRepository,
    SQLNotificationRepository,
    SQLTeamRepository,
    SQLUserRepository,
)
from tests.utils import BASE_TIME, FakeClock, create_instance, create_user


# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh database for each test."""
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a new database session for a test."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def clock():
    """A controllable clock starting at 2024-01-01T00:00:00Z."""
    return FakeClock(BASE_TIME)


@pytest.fixture
def user(db_session):
    return create_user(db_session)


@pytest.fixture
def instance(db_session, user):
    return create_instance(db_session, user)


# Repositories

@pytest.fixture
def instance_repo(db_session):
    return SQLInstanceRepository(db_session)


@pytest.fixture
def team_repo(db_session):
    return SQLTeamRepository(db_session)


@pytest.fixture
def location_repo(db_session):
    return SQLLocationRepository(db_session)


@pytest.fixture
def check_in_repo(db_session):
    return SQLCheckInRepository(db_session)


@pytest.fixture
def notification_repo(db_session):
    return SQLNotificationRepository(db_session)


@pytest.fixture
def user_repo(db_session):
    return SQLUserRepository(db_session)
