"""
Timer Engine for DrinkTender.

Pure functions deriving display values from a TimerState and the current
time. Nothing here reads the store, the clock or any port, so any number of
surfaces can call these redundantly without coordination. Naive datetimes
are taken as UTC, matching how timestamps are persisted.
"""

from datetime import datetime, timedelta
from typing import Optional, Union

from drinktender.state.timer_state import TimerState, as_utc

READY_TEXT = "Ready!"

Duration = Union[timedelta, int, float]


def cooldown(state: TimerState) -> timedelta:
    """Configured delay as a timedelta."""
    return timedelta(minutes=state.delay_minutes)


def next_ready_at(state: TimerState) -> Optional[datetime]:
    """
    Time at which the next drink becomes allowed.

    Returns:
        last_drink_time + delay, or None if no drink was ever recorded
    """
    if state.last_drink_time is None:
        return None
    return as_utc(state.last_drink_time) + cooldown(state)


def is_ready(state: TimerState, now: datetime) -> bool:
    """True iff no drink is recorded or the cooldown has fully elapsed."""
    if state.last_drink_time is None:
        return True
    return as_utc(now) >= next_ready_at(state)


def remaining(state: TimerState, now: datetime) -> timedelta:
    """Time left until ready; zero when ready."""
    if is_ready(state, now):
        return timedelta(0)
    return max(timedelta(0), next_ready_at(state) - as_utc(now))


def format_remaining(duration: Duration) -> str:
    """
    Format a remaining duration for display.

    Hours and minutes are truncated, never rounded, and seconds are not
    shown: 90s -> "1m", 3660s -> "1h 1m".

    Args:
        duration: timedelta or number of seconds
    """
    if isinstance(duration, timedelta):
        seconds = duration.total_seconds()
    else:
        seconds = float(duration)

    if seconds <= 0:
        return READY_TEXT

    total = int(seconds)
    hours = total // 3600
    minutes = (total % 3600) // 60

    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def progress(state: TimerState, now: datetime) -> float:
    """Fraction of the cooldown elapsed, clamped to [0, 1]; 1.0 when ready."""
    if state.last_drink_time is None or is_ready(state, now):
        return 1.0
    elapsed = (as_utc(now) - as_utc(state.last_drink_time)).total_seconds()
    fraction = elapsed / (state.delay_minutes * 60)
    return min(max(fraction, 0.0), 1.0)
