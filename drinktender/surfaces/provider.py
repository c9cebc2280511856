"""
Timeline provider for DrinkTender display surfaces.

Each surface owns a provider configured with its own refresh interval. A
provider only reads: it builds entries from a TimerStateReader and the
timer engine and never touches the store directly.
"""

import logging
from datetime import datetime, timedelta

from drinktender.state.reader import TimerStateReader
from drinktender.state.timer_state import TimerState, as_utc
from drinktender.timer import engine

from .entry import DrinkTimerEntry, Timeline

logger = logging.getLogger(__name__)


def _entry_for(state: TimerState, now: datetime) -> DrinkTimerEntry:
    return DrinkTimerEntry(
        date=now,
        can_drink=engine.is_ready(state, now),
        time_until_next=engine.format_remaining(engine.remaining(state, now)),
        drink_count=state.drink_count,
        progress=engine.progress(state, now),
    )


class TimelineProvider:
    """
    Builds snapshots and timelines for one surface kind.

    Args:
        kind: Surface kind this provider serves
        reader: Read-only timer state view
        refresh_interval: How long a timeline stays valid before reload
    """

    def __init__(self, kind: str, reader: TimerStateReader, refresh_interval: timedelta):
        self.kind = kind
        self.reader = reader
        self.refresh_interval = refresh_interval

    def placeholder(self, now: datetime) -> DrinkTimerEntry:
        """Fixed preview entry shown before any real data is available."""
        return DrinkTimerEntry(
            date=as_utc(now),
            can_drink=False,
            time_until_next="25m",
            drink_count=3,
            progress=0.6,
        )

    def snapshot(self, now: datetime) -> DrinkTimerEntry:
        return _entry_for(self.reader.read(), as_utc(now))

    def timeline(self, now: datetime) -> Timeline:
        """
        Build the current timeline.

        While the cooldown runs, a second "Ready!" entry is dated at the
        ready time so the surface flips on time even between reloads.
        """
        now = as_utc(now)
        state = self.reader.read()
        current = _entry_for(state, now)
        entries = [current]

        if not current.can_drink:
            ready_at = engine.next_ready_at(state)
            if ready_at is not None and ready_at > now:
                entries.append(DrinkTimerEntry(
                    date=ready_at,
                    can_drink=True,
                    time_until_next=engine.READY_TEXT,
                    drink_count=state.drink_count,
                    progress=1.0,
                ))

        logger.debug(f"[SURFACE] {self.kind}: {len(entries)} entries, {current.time_until_next}")
        return Timeline(entries=tuple(entries), reload_after=now + self.refresh_interval)
