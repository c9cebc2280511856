"""
Timeline entries for DrinkTender display surfaces.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Tuple

# Surface kinds
MAIN = "main"
CIRCULAR_WIDGET = "DrinkTimerWidget"
RECTANGULAR_WIDGET = "DrinkTimerRectangularWidget"
LARGE_WIDGET = "DrinkTimerLargeWidget"
COMPLICATION = "complication"

WIDGET_KINDS = (CIRCULAR_WIDGET, RECTANGULAR_WIDGET, LARGE_WIDGET)
ALL_KINDS = (MAIN,) + WIDGET_KINDS + (COMPLICATION,)


@dataclass(frozen=True)
class DrinkTimerEntry:
    """
    One rendered point in a surface timeline.

    `date` is when the entry becomes current; the other fields are what the
    surface shows from then on.
    """
    date: datetime
    can_drink: bool
    time_until_next: str
    drink_count: int
    progress: float


@dataclass(frozen=True)
class Timeline:
    """Entries in date order plus the time the host should ask again."""
    entries: Tuple[DrinkTimerEntry, ...]
    reload_after: datetime

    @property
    def current(self) -> DrinkTimerEntry:
        return self.entries[0]
