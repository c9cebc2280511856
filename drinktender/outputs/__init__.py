"""
Outputs module for DrinkTender.

Capability ports the core calls (notification scheduling, permission,
display invalidation) and their stock implementations.
"""

from .base import DisplayInvalidator, NotificationScheduler, PermissionRequester
from .null_ports import NullDisplayInvalidator, NullNotificationScheduler, StaticPermissionRequester
from .logging_scheduler import LoggingNotificationScheduler
from .threaded_scheduler import ThreadedNotificationScheduler
from .factory import create_notification_scheduler, create_permission_requester

__all__ = [
    "DisplayInvalidator",
    "NotificationScheduler",
    "PermissionRequester",
    "NullDisplayInvalidator",
    "NullNotificationScheduler",
    "StaticPermissionRequester",
    "LoggingNotificationScheduler",
    "ThreadedNotificationScheduler",
    "create_notification_scheduler",
    "create_permission_requester",
]
