"""
Threaded notification scheduler.

Arms one threading.Timer per logical notification identifier. Scheduling an
identifier that is already pending cancels the old timer first, so at most
one alert per identifier is ever in flight.
"""

import logging
import threading
from datetime import datetime
from typing import Callable, Dict, List, Optional

from drinktender.clock import SystemClock
from drinktender.config import NOTIFICATION_BODY, NOTIFICATION_TITLE

from .base import NotificationScheduler

logger = logging.getLogger(__name__)


def log_delivery(title: str, body: str) -> None:
    logger.info(f"[NOTIFY] {title}: {body}")


class ThreadedNotificationScheduler(NotificationScheduler):
    """
    Delivers alerts from daemon timer threads.

    Args:
        clock: Time source used to turn fire_at into a delay
        deliver: Callback taking (title, body); logs by default
    """

    def __init__(self, clock=None, deliver: Optional[Callable[[str, str], None]] = None,
                 title: str = NOTIFICATION_TITLE, body: str = NOTIFICATION_BODY):
        self._clock = clock or SystemClock()
        self._deliver = deliver or log_delivery
        self._title = title
        self._body = body
        self._timers: Dict[str, threading.Timer] = {}
        self._started: List[threading.Timer] = []
        self._lock = threading.Lock()

    def schedule(self, fire_at: datetime, notification_id: str) -> None:
        delay = (fire_at - self._clock.now()).total_seconds()
        with self._lock:
            self._cancel_locked(notification_id)
            if delay <= 0:
                logger.debug(f"[NOTIFY] {notification_id} not scheduled: {fire_at.isoformat()} is not in the future")
                return
            timer = threading.Timer(delay, self._fire, args=(notification_id,))
            timer.daemon = True
            timer.name = f"notify-{notification_id}"
            self._timers[notification_id] = timer
            self._started = [t for t in self._started if t.is_alive()] + [timer]
            timer.start()
        logger.info(f"[NOTIFY] {notification_id} scheduled in {delay:.0f}s")

    def cancel(self, notification_id: str) -> None:
        with self._lock:
            cancelled = self._cancel_locked(notification_id)
        if cancelled:
            logger.info(f"[NOTIFY] {notification_id} cancelled")

    def is_pending(self, notification_id: str) -> bool:
        with self._lock:
            return notification_id in self._timers

    def close(self) -> None:
        with self._lock:
            for timer in self._timers.values():
                timer.cancel()
            self._timers.clear()
            timers, self._started = self._started, []
        for timer in timers:
            if timer is not threading.current_thread():
                timer.join()

    def _cancel_locked(self, notification_id: str) -> bool:
        timer = self._timers.pop(notification_id, None)
        if timer is None:
            return False
        timer.cancel()
        return True

    def _fire(self, notification_id: str) -> None:
        with self._lock:
            timer = self._timers.get(notification_id)
            # A superseding schedule() may have replaced this timer
            if timer is not threading.current_thread():
                return
            del self._timers[notification_id]
        try:
            self._deliver(self._title, self._body)
        except Exception as e:
            logger.error(f"[NOTIFY] Delivery of {notification_id} failed: {e}")
