"""
Read-only view of the timer state.

Every display surface holds a TimerStateReader. It exposes reads only, so
the event recorder stays the single writer of the store.
"""

from datetime import datetime
from typing import NamedTuple, Optional

from drinktender.state.state_store import StateStore
from drinktender.state.timer_state import TimerState
from drinktender.timer import engine


class WidgetData(NamedTuple):
    """Everything a surface needs for one render."""
    last_drink_time: Optional[datetime]
    delay_minutes: int
    can_drink: bool
    drink_count: int
    formatted_remaining: str


class TimerStateReader:
    """Read accessor handed to presentation code."""

    def __init__(self, store: StateStore):
        self._store = store

    def read(self) -> TimerState:
        return TimerState.from_mapping(self._store.snapshot())

    def widget_data(self, now: datetime) -> WidgetData:
        state = self.read()
        return WidgetData(
            last_drink_time=state.last_drink_time,
            delay_minutes=state.delay_minutes,
            can_drink=engine.is_ready(state, now),
            drink_count=state.drink_count,
            formatted_remaining=engine.format_remaining(engine.remaining(state, now)),
        )
