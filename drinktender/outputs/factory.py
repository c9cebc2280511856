from drinktender.config import DrinkTenderConfig

from .base import NotificationScheduler, PermissionRequester
from .logging_scheduler import LoggingNotificationScheduler
from .null_ports import NullNotificationScheduler, StaticPermissionRequester
from .threaded_scheduler import ThreadedNotificationScheduler


def create_notification_scheduler(config: DrinkTenderConfig, clock=None) -> NotificationScheduler:
    """
    Create a notification scheduler based on configuration.

    Modes (DRINKTENDER_NOTIFIER):
        "null": discard every request
        "log": record and log requests without arming anything
        "timer": deliver alerts from in-process timer threads (default)

    Returns:
        NotificationScheduler instance configured according to config
    """
    if config.notifier == "null":
        return NullNotificationScheduler()

    if config.notifier == "log":
        return LoggingNotificationScheduler()

    return ThreadedNotificationScheduler(clock=clock)


def create_permission_requester(config: DrinkTenderConfig) -> PermissionRequester:
    """Permission answers come from DRINKTENDER_PERMISSION."""
    return StaticPermissionRequester(granted=config.permission_granted)
