"""General utility functions."""
import random
from datetime import datetime, timezone
from typing import Callable, Optional

from waypoint.core.constants import CODE_ALPHABET

Clock = Callable[[], datetime]

_system_random = random.SystemRandom()


def new_code(length: int, rng: Optional[random.Random] = None) -> str:
    """Generate a code of easily recognisable uppercase characters.

    Each character is drawn independently; duplicates against existing codes
    are the caller's concern.

    Args:
        length: Number of characters in the code
        rng: Optional random source (anything with ``choice``), for testing

    Returns:
        str: The generated code
    """
    rng = rng or _system_random
    return "".join(rng.choice(CODE_ALPHABET) for _ in range(length))


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """Convert datetime to UTC timezone."""
    if dt.tzinfo is None:
        # Assume UTC if no timezone
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def optional_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """to_utc that passes None through."""
    if dt is None:
        return None
    return to_utc(dt)


def nano_timestamp(dt: datetime) -> int:
    """Nanoseconds since the Unix epoch for a datetime, without float rounding."""
    delta = to_utc(dt) - datetime(1970, 1, 1, tzinfo=timezone.utc)
    return (delta.days * 86400 + delta.seconds) * 10**9 + delta.microseconds * 1000
