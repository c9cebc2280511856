from abc import ABC, abstractmethod
from datetime import datetime


class NotificationScheduler(ABC):
    """
    Abstract notification capability.

    The core schedules and cancels; it never observes delivery. At most one
    notification is pending per identifier: scheduling again supersedes it.
    """

    @abstractmethod
    def schedule(self, fire_at: datetime, notification_id: str) -> None:
        """
        Arrange a one-shot alert.

        Args:
            fire_at: When the alert should be delivered
            notification_id: Logical identifier; replaces any pending alert with the same id
        """
        ...

    @abstractmethod
    def cancel(self, notification_id: str) -> None:
        """
        Drop the pending alert with this identifier, if any.
        """
        ...

    def close(self) -> None:
        """
        Release resources (pending timers, handles).
        """
        return


class PermissionRequester(ABC):
    """
    Abstract notification-permission capability.
    """

    @abstractmethod
    def request_permission(self) -> bool:
        """
        Ask for permission to deliver notifications.

        Returns:
            True if granted
        """
        ...


class DisplayInvalidator(ABC):
    """
    Abstract refresh-dispatch capability.

    Called after every mutation; fire-and-forget.
    """

    @abstractmethod
    def invalidate_displays(self) -> None:
        """
        Tell every display surface its rendered view is stale.
        """
        ...
