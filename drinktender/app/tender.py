import logging
from datetime import datetime, timedelta
from typing import Optional

from drinktender.clock import SystemClock
from drinktender.config import DrinkTenderConfig
from drinktender.outputs.base import NotificationScheduler, PermissionRequester
from drinktender.outputs.factory import create_notification_scheduler, create_permission_requester
from drinktender.recorder import EventRecorder
from drinktender.state.reader import TimerStateReader, WidgetData
from drinktender.state.state_store import JsonStateStore, StateStore
from drinktender.state.timer_state import TimerStateStore
from drinktender.surfaces import (
    ALL_KINDS,
    COMPLICATION,
    MAIN,
    Surface,
    SurfaceRefreshDispatcher,
    TimelineProvider,
)

logger = logging.getLogger(__name__)


class DrinkTender:
    """
    Composition root.

    Owns the one store and hands it out two ways: write access to the
    event recorder, a read-only reader to every surface.
    """

    def __init__(
        self,
        config: DrinkTenderConfig,
        store: Optional[StateStore] = None,
        scheduler: Optional[NotificationScheduler] = None,
        permission: Optional[PermissionRequester] = None,
        clock=None,
    ):
        """
        Initialize DrinkTender components.

        Args:
            config: Loaded configuration
            store: Persisted store (defaults to the JSON file at config.state_path)
            scheduler: Notification capability (defaults per config.notifier)
            permission: Permission capability (defaults per config.permission_granted)
            clock: Time source shared by every component
        """
        self.config = config
        self.clock = clock or SystemClock()
        self.store = store or JsonStateStore(config.state_path, clock=self.clock)
        self.reader = TimerStateReader(self.store)
        self.dispatcher = SurfaceRefreshDispatcher()
        self.scheduler = scheduler or create_notification_scheduler(config, clock=self.clock)
        self.permission = permission or create_permission_requester(config)
        self.recorder = EventRecorder(
            state=TimerStateStore(self.store),
            scheduler=self.scheduler,
            permission=self.permission,
            invalidator=self.dispatcher,
            clock=self.clock,
        )

        for kind in ALL_KINDS:
            provider = TimelineProvider(kind, self.reader, self.refresh_interval(kind))
            self.dispatcher.register(Surface(provider, clock=self.clock))

    def refresh_interval(self, kind: str) -> timedelta:
        """Each surface kind keeps its own cadence."""
        if kind == MAIN:
            return timedelta(seconds=self.config.main_refresh_seconds)
        if kind == COMPLICATION:
            return timedelta(minutes=self.config.complication_refresh_minutes)
        return timedelta(minutes=self.config.widget_refresh_minutes)

    def start(self) -> None:
        """Check notification permission once, then arm the alert for a running cooldown."""
        self.recorder.sync_notification_permission()
        self.recorder.reschedule_notification()
        logger.info(f"DrinkTender started (state: {self.config.state_path})")

    def status(self, now: Optional[datetime] = None) -> WidgetData:
        return self.reader.widget_data(now or self.clock.now())

    def close(self) -> None:
        self.scheduler.close()
