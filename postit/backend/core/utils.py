"""
Core Utilities.

Shared utility functions used across the backend.
All modules should import utilities from this module.
"""

import math
from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application should be timezone-naive
    and assumed to be UTC.

    Returns:
        Current UTC time with tzinfo stripped
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def minutes_left(deadline: datetime, now: datetime) -> int:
    """
    Whole minutes until a deadline, rounded up and floored at zero.

    A note with 61 seconds left reports 2 minutes; an overdue one reports 0.
    """
    remaining = (deadline - now) / timedelta(minutes=1)
    return max(0, math.ceil(remaining))
