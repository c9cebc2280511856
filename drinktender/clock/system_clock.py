"""
System clock for DrinkTender.

Every component that needs "now" takes a clock instead of calling
datetime.now() itself, so tests can pin time.
"""

import logging
from datetime import datetime, timezone

logger = logging.getLogger(__name__)


class SystemClock:
    """
    Wall-clock time source.

    Returns timezone-aware UTC datetimes so timestamps persisted by one
    process compare correctly against "now" in another.
    """

    def now(self) -> datetime:
        """
        Get current time.

        Returns:
            Current UTC datetime
        """
        return datetime.now(timezone.utc)
