"""Database base class and model imports."""
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Import all models here so metadata sees every table
from waypoint.db.models.user import User  # noqa: F401, E402
from waypoint.db.models.instance import Instance  # noqa: F401, E402
from waypoint.db.models.marker import Marker  # noqa: F401, E402
from waypoint.db.models.location import Location  # noqa: F401, E402
from waypoint.db.models.team import Team  # noqa: F401, E402
from waypoint.db.models.checkin import CheckIn  # noqa: F401, E402
from waypoint.db.models.notification import Notification  # noqa: F401, E402
