"""
Display surface for DrinkTender.

A surface is an independent read-only projection of the timer state: it
re-renders from the store when invalidated or when its own timeline
expires, and it never writes.
"""

import logging
import threading
from datetime import datetime
from typing import Optional

from drinktender.clock import SystemClock
from drinktender.state.timer_state import as_utc

from .entry import DrinkTimerEntry, Timeline
from .provider import TimelineProvider

logger = logging.getLogger(__name__)


class Surface:
    """
    One display consumer (main view, a widget kind, the complication).

    Starts stale so the first refresh renders real data.
    """

    def __init__(self, provider: TimelineProvider, clock=None):
        self.provider = provider
        self._clock = clock or SystemClock()
        self._stale = threading.Event()
        self._stale.set()
        self._lock = threading.Lock()
        self._timeline: Optional[Timeline] = None

    @property
    def kind(self) -> str:
        return self.provider.kind

    @property
    def stale(self) -> bool:
        return self._stale.is_set()

    @property
    def timeline(self) -> Optional[Timeline]:
        with self._lock:
            return self._timeline

    def invalidate(self) -> None:
        """Mark the rendered view stale and wake a waiting host thread."""
        self._stale.set()

    def refresh(self, now: Optional[datetime] = None) -> Timeline:
        """Rebuild the timeline from the store."""
        now = now or self._clock.now()
        # Cleared before reading so an invalidation during the read is kept
        self._stale.clear()
        timeline = self.provider.timeline(now)
        with self._lock:
            self._timeline = timeline
        return timeline

    def entry_at(self, now: datetime) -> DrinkTimerEntry:
        """
        Entry current at `now` from the last timeline, without reading the store.

        Falls back to the provider placeholder before the first refresh.
        """
        now = as_utc(now)
        timeline = self.timeline
        if timeline is None:
            return self.provider.placeholder(now)
        current = timeline.entries[0]
        for entry in timeline.entries:
            if entry.date <= now:
                current = entry
        return current

    def next_wake(self, now: datetime) -> float:
        """Seconds until the next timeline entry or reload, whichever is first."""
        now = as_utc(now)
        timeline = self.timeline
        if timeline is None:
            return 0.0
        candidates = [timeline.reload_after] + [e.date for e in timeline.entries if e.date > now]
        return max(0.0, (min(candidates) - now).total_seconds())

    def wait(self, timeout: float) -> bool:
        """
        Block until invalidated or `timeout` seconds pass.

        Returns:
            True if woken by invalidation
        """
        return self._stale.wait(timeout)
