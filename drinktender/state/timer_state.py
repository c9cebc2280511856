"""
Timer State for DrinkTender.

TimerState is the single per-device record behind every surface. The
persisted store is the source of truth; TimerState objects are immutable
snapshots resolved from it, with a default substituted for every field that
is unset or unreadable.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from drinktender.config import DEFAULT_DELAY_MINUTES
from drinktender.state.state_store import LAST_UPDATE_KEY, StateStore

logger = logging.getLogger(__name__)

# Persisted keys
LAST_DRINK_KEY = "lastDrinkTime"
DELAY_KEY = "delayMinutes"
NOTIFICATIONS_KEY = "notificationsEnabled"
DRINK_COUNT_KEY = "drinkCount"


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a persisted ISO-8601 timestamp.

    Naive timestamps are taken as UTC. Anything unparseable reads as absent.
    """
    if not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        logger.debug(f"[STATE] Ignoring malformed timestamp: {value!r}")
        return None
    return as_utc(parsed)


def as_utc(value: datetime) -> datetime:
    """Treat a naive datetime as UTC; aware values pass through unchanged."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def format_timestamp(value: datetime) -> str:
    return as_utc(value).isoformat()


def resolve_delay_minutes(value: Any) -> int:
    # 0, negatives and non-integers all mean "unset"
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return DEFAULT_DELAY_MINUTES
    return value


def resolve_notifications_enabled(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return True


def resolve_drink_count(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return 0
    return value


@dataclass(frozen=True)
class TimerState:
    """
    Immutable snapshot of the persisted timer fields.

    Readiness is deliberately absent: it is derived from
    (last_drink_time, delay_minutes, now) by the timer engine on every read.
    """
    last_drink_time: Optional[datetime] = None
    delay_minutes: int = DEFAULT_DELAY_MINUTES
    notifications_enabled: bool = True
    drink_count: int = 0
    last_update_time: Optional[datetime] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TimerState":
        """Resolve a raw store snapshot, substituting defaults."""
        return cls(
            last_drink_time=parse_timestamp(data.get(LAST_DRINK_KEY)),
            delay_minutes=resolve_delay_minutes(data.get(DELAY_KEY)),
            notifications_enabled=resolve_notifications_enabled(data.get(NOTIFICATIONS_KEY)),
            drink_count=resolve_drink_count(data.get(DRINK_COUNT_KEY)),
            last_update_time=parse_timestamp(data.get(LAST_UPDATE_KEY)),
        )


class TimerStateStore:
    """
    Typed access to the timer fields of a StateStore.

    Getters resolve defaults on every read. Setters write one field each and
    return whether the write was persisted. Only the event recorder holds
    one of these; surfaces get a TimerStateReader.
    """

    def __init__(self, store: StateStore):
        self._store = store

    def read(self) -> TimerState:
        """Read every field from a single store snapshot."""
        return TimerState.from_mapping(self._store.snapshot())

    @property
    def last_drink_time(self) -> Optional[datetime]:
        return parse_timestamp(self._store.get(LAST_DRINK_KEY))

    @property
    def delay_minutes(self) -> int:
        return resolve_delay_minutes(self._store.get(DELAY_KEY))

    @property
    def notifications_enabled(self) -> bool:
        return resolve_notifications_enabled(self._store.get(NOTIFICATIONS_KEY))

    @property
    def drink_count(self) -> int:
        return resolve_drink_count(self._store.get(DRINK_COUNT_KEY))

    @property
    def last_update_time(self) -> Optional[datetime]:
        return parse_timestamp(self._store.get(LAST_UPDATE_KEY))

    def set_last_drink_time(self, value: Optional[datetime]) -> bool:
        return self._store.set(LAST_DRINK_KEY, format_timestamp(value) if value is not None else None)

    def set_delay_minutes(self, minutes: int) -> bool:
        return self._store.set(DELAY_KEY, minutes)

    def set_notifications_enabled(self, enabled: bool) -> bool:
        return self._store.set(NOTIFICATIONS_KEY, bool(enabled))

    def set_drink_count(self, count: int) -> bool:
        return self._store.set(DRINK_COUNT_KEY, count)
