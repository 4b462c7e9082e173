"""Injectable source of the current time."""

from datetime import datetime, timezone
from typing import Callable, Optional

Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """Return the current UTC time."""
    return datetime.now(timezone.utc)


def fixed_clock(moment: datetime) -> Clock:
    """
    Build a clock that always returns the same instant.
    
    Args:
        moment: Instant to return. Naive values are taken as UTC.
        
    Returns:
        Clock: Zero-argument callable returning ``moment``
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return lambda: moment


def resolve_clock(clock: Optional[Clock]) -> Clock:
    """Return ``clock`` or the system clock when none is given."""
    return clock if clock is not None else system_clock


def isoformat_utc(moment: datetime) -> str:
    """Format an instant as ISO-8601 in UTC with millisecond precision."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
