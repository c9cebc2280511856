"""
Event Recorder for DrinkTender.

The only component allowed to mutate the timer state. Each public method is
one user-initiated transition: write the store, then call the capability
ports (notification scheduler, permission, display invalidation) at fixed
points. Port failures are logged and never undo a persisted write.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from drinktender.clock import SystemClock
from drinktender.config import NOTIFICATION_ID
from drinktender.outputs.base import DisplayInvalidator, NotificationScheduler, PermissionRequester
from drinktender.state.timer_state import TimerState, TimerStateStore, as_utc
from drinktender.timer import engine

logger = logging.getLogger(__name__)


class EventRecorder:
    """
    Single writer of TimerState.

    There is no stored ready/waiting flag: readiness is recomputed from the
    store by whoever displays it, so nothing here has to keep one in sync.
    """

    def __init__(
        self,
        state: TimerStateStore,
        scheduler: NotificationScheduler,
        permission: PermissionRequester,
        invalidator: DisplayInvalidator,
        clock=None,
        notification_id: str = NOTIFICATION_ID,
    ):
        """
        Initialize event recorder.

        Args:
            state: Typed store handle (write access)
            scheduler: Notification capability
            permission: Notification-permission capability
            invalidator: Display refresh capability
            clock: Time source for transitions that don't receive "now"
            notification_id: Fixed logical id of the single pending alert
        """
        self._state = state
        self._scheduler = scheduler
        self._permission = permission
        self._invalidator = invalidator
        self._clock = clock or SystemClock()
        self._notification_id = notification_id

    def record_drink(self, now: Optional[datetime] = None) -> TimerState:
        """
        Record a drink at `now` and start the cooldown.

        Increments the drink count and, when notifications are enabled,
        schedules the ready alert for now + delay. A naive `now` is taken as
        UTC.
        """
        now = as_utc(now or self._clock.now())
        count = self._state.drink_count
        self._state.set_last_drink_time(now)
        self._state.set_drink_count(count + 1)

        state = self._state.read()
        logger.info(
            f"[RECORDER] Drink #{state.drink_count} recorded at {now.isoformat()}, "
            f"next in {state.delay_minutes}m"
        )

        if state.notifications_enabled:
            self._schedule_ready_alert(state, now)

        self._invalidate()
        return state

    def reset_timer(self) -> TimerState:
        """Clear the last drink time and drop any pending alert. Count is kept."""
        self._state.set_last_drink_time(None)
        self._cancel_alert()
        logger.info("[RECORDER] Timer reset")
        self._invalidate()
        return self._state.read()

    def reset_count(self) -> TimerState:
        """Zero the drink count. The running cooldown is kept."""
        self._state.set_drink_count(0)
        logger.info("[RECORDER] Drink count reset")
        self._invalidate()
        return self._state.read()

    def set_delay(self, minutes: int, reschedule: bool = False) -> TimerState:
        """
        Change the cooldown length.

        A pending alert keeps its old fire time unless `reschedule` is set.
        Non-positive values are stored as given and read back as the default.

        Raises:
            TypeError: If minutes is not an integer
        """
        if isinstance(minutes, bool) or not isinstance(minutes, int):
            raise TypeError(f"delay minutes must be an int, got {type(minutes).__name__}")
        if minutes <= 0:
            logger.warning(f"[RECORDER] Non-positive delay {minutes}m reads back as the default")

        self._state.set_delay_minutes(minutes)
        logger.info(f"[RECORDER] Delay set to {minutes}m")

        if reschedule:
            self.reschedule_notification()

        self._invalidate()
        return self._state.read()

    def set_notifications_enabled(self, enabled: bool) -> TimerState:
        """
        Turn ready alerts on or off.

        Disabling cancels the pending alert. Enabling asks the permission
        capability and stores its answer, so a denial leaves alerts off.
        """
        if enabled:
            granted = self._request_permission()
            self._state.set_notifications_enabled(granted)
            if granted:
                logger.info("[RECORDER] Notifications enabled")
            else:
                logger.warning("[RECORDER] Notification permission denied; notifications stay off")
        else:
            self._state.set_notifications_enabled(False)
            self._cancel_alert()
            logger.info("[RECORDER] Notifications disabled")

        self._invalidate()
        return self._state.read()

    def toggle_notifications(self) -> TimerState:
        return self.set_notifications_enabled(not self._state.notifications_enabled)

    def reschedule_notification(self, now: Optional[datetime] = None) -> None:
        """Re-arm the ready alert from the currently stored state."""
        now = as_utc(now or self._clock.now())
        state = self._state.read()
        if not state.notifications_enabled:
            return
        self._schedule_ready_alert(state, now)

    def sync_notification_permission(self) -> TimerState:
        """
        Ask for permission once at start-up when alerts are enabled.

        Stores the answer without invalidating displays when it is unchanged.
        """
        state = self._state.read()
        if not state.notifications_enabled:
            return state

        granted = self._request_permission()
        if granted:
            return state

        self._state.set_notifications_enabled(False)
        logger.warning("[RECORDER] Notification permission denied at start-up; notifications turned off")
        self._invalidate()
        return self._state.read()

    def _schedule_ready_alert(self, state: TimerState, now: datetime) -> None:
        # New schedule supersedes the pending one
        self._cancel_alert()
        fire_at = engine.next_ready_at(state)
        if fire_at is None or fire_at <= now:
            logger.debug("[RECORDER] Ready time is not in the future; no alert scheduled")
            return
        self._call_port("schedule notification", self._scheduler.schedule, fire_at, self._notification_id)

    def _cancel_alert(self) -> None:
        self._call_port("cancel notification", self._scheduler.cancel, self._notification_id)

    def _request_permission(self) -> bool:
        try:
            return bool(self._permission.request_permission())
        except Exception as e:
            logger.error(f"[RECORDER] Permission request failed: {e}")
            return False

    def _invalidate(self) -> None:
        self._call_port("invalidate displays", self._invalidator.invalidate_displays)

    def _call_port(self, action: str, port: Callable, *args) -> None:
        try:
            port(*args)
        except Exception as e:
            logger.error(f"[RECORDER] Failed to {action}: {e}")
