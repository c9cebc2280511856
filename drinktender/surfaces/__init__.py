"""
Surfaces module for DrinkTender.

Independent, read-only display consumers of the timer state: timeline
providers, surfaces, the refresh dispatcher and the surface host.
"""

from .entry import (
    ALL_KINDS,
    CIRCULAR_WIDGET,
    COMPLICATION,
    LARGE_WIDGET,
    MAIN,
    RECTANGULAR_WIDGET,
    WIDGET_KINDS,
    DrinkTimerEntry,
    Timeline,
)
from .provider import TimelineProvider
from .surface import Surface
from .dispatcher import SurfaceRefreshDispatcher
from .host import SurfaceHost
from .render import render_text

__all__ = [
    "ALL_KINDS",
    "CIRCULAR_WIDGET",
    "COMPLICATION",
    "LARGE_WIDGET",
    "MAIN",
    "RECTANGULAR_WIDGET",
    "WIDGET_KINDS",
    "DrinkTimerEntry",
    "Timeline",
    "TimelineProvider",
    "Surface",
    "SurfaceRefreshDispatcher",
    "SurfaceHost",
    "render_text",
]
