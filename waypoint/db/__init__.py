"""Database package."""
from waypoint.db.session import engine, SessionLocal, get_db, get_db_context
from waypoint.db.base import Base

__all__ = ["engine", "SessionLocal", "get_db", "get_db_context", "Base"]
