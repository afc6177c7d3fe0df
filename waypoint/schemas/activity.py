"""Team activity schemas."""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class LocationActivity(BaseModel):
    location_id: str
    location_name: str
    marker_code: str
    visited: bool = False
    visiting: bool = False
    duration: float = 0.0
    time_in: Optional[datetime] = None
    time_out: Optional[datetime] = None


class TeamActivity(BaseModel):
    team_code: str
    team_name: Optional[str] = None
    points: int = 0
    locations: List[LocationActivity]
