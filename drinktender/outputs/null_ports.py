from datetime import datetime

from .base import DisplayInvalidator, NotificationScheduler, PermissionRequester


class NullNotificationScheduler(NotificationScheduler):
    """A scheduler that discards every request. Useful when alerts are off."""

    def schedule(self, fire_at: datetime, notification_id: str) -> None:
        # Do nothing
        return

    def cancel(self, notification_id: str) -> None:
        # Nothing to cancel
        return


class NullDisplayInvalidator(DisplayInvalidator):
    """An invalidator with no surfaces attached (one-shot CLI commands)."""

    def invalidate_displays(self) -> None:
        return


class StaticPermissionRequester(PermissionRequester):
    """Answers every permission request with a fixed, configured result."""

    def __init__(self, granted: bool = True):
        self.granted = granted

    def request_permission(self) -> bool:
        return self.granted
