"""
Notification scheduler that only records and logs requests.

Used by one-shot CLI commands: the process exits long before any alert
would fire, so the request is reported instead of armed.
"""

import logging
from datetime import datetime
from typing import Dict

from .base import NotificationScheduler

logger = logging.getLogger(__name__)


class LoggingNotificationScheduler(NotificationScheduler):
    """Keeps the pending alert per identifier and logs every change."""

    def __init__(self):
        self.pending: Dict[str, datetime] = {}

    def schedule(self, fire_at: datetime, notification_id: str) -> None:
        self.pending[notification_id] = fire_at
        logger.info(f"[NOTIFY] {notification_id} scheduled for {fire_at.isoformat()}")

    def cancel(self, notification_id: str) -> None:
        if self.pending.pop(notification_id, None) is not None:
            logger.info(f"[NOTIFY] {notification_id} cancelled")
