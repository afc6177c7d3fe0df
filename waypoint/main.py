"""Application wiring: logging, schema creation and service construction."""
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from waypoint.core.config import settings
from waypoint.core.logging_config import get_logger, setup_logging
from waypoint.core.utils import Clock, utc_now
from waypoint.db import Base, engine as default_engine
from waypoint.repositories import (
    SQLCheckInRepository,
    SQLInstanceRepository,
    SQLLocationRepository,
    SQLNotificationRepository,
    SQLTeamRepository,
    SQLUserRepository,
)
from waypoint.services import (
    AssetGenerator,
    CheckInService,
    GameScheduleService,
    LocationStatsService,
    NotificationService,
    TeamService,
    UserService,
)

logger = get_logger(__name__)


def init_app() -> None:
    """Configure logging and check the configuration; call once at startup."""
    setup_logging(level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON)

    if settings.ENVIRONMENT == "production":
        settings.validate_production_config()

    logger.info(
        "application_starting",
        app_title=settings.APP_TITLE,
        app_version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )


def init_db(engine: Optional[Engine] = None) -> None:
    """Create any missing tables."""
    Base.metadata.create_all(bind=engine or default_engine)


class Services:
    """
    The service layer bound to one database session.

    Usage:
        with get_db_context() as db:
            services = Services(db)
            services.teams.add_teams(instance_id, 20)
    """

    def __init__(self, db: Session, clock: Clock = utc_now):
        self.db = db

        self.instance_repo = SQLInstanceRepository(db)
        self.team_repo = SQLTeamRepository(db)
        self.location_repo = SQLLocationRepository(db)
        self.check_in_repo = SQLCheckInRepository(db)
        self.notification_repo = SQLNotificationRepository(db)
        self.user_repo = SQLUserRepository(db)

        self.assets = AssetGenerator(clock=clock)
        self.location_stats = LocationStatsService(self.location_repo, self.check_in_repo)
        self.teams = TeamService(self.team_repo)
        self.schedule = GameScheduleService(self.instance_repo, clock=clock)
        self.notifications = NotificationService(self.notification_repo, self.team_repo)
        self.check_ins = CheckInService(
            self.check_in_repo,
            self.location_repo,
            self.team_repo,
            self.location_stats,
            clock=clock,
        )
        self.users = UserService(self.user_repo, self.instance_repo)
