"""
Surface Refresh Dispatcher

Fans an invalidation out to every registered display surface. The event
recorder calls invalidate_displays() after each mutation; each surface then
re-reads the store on its own schedule.
"""

import logging
import threading
from typing import List, Tuple

from drinktender.outputs.base import DisplayInvalidator

from .surface import Surface

logger = logging.getLogger(__name__)


class SurfaceRefreshDispatcher(DisplayInvalidator):
    """
    Registry of display surfaces.

    A failing surface is logged and skipped; it never blocks the writer or
    the other surfaces.
    """

    def __init__(self):
        self._surfaces: List[Surface] = []
        self._lock = threading.RLock()

    @property
    def surfaces(self) -> Tuple[Surface, ...]:
        with self._lock:
            return tuple(self._surfaces)

    def register(self, surface: Surface) -> None:
        with self._lock:
            if surface not in self._surfaces:
                self._surfaces.append(surface)
        logger.debug(f"[DISPATCH] Registered surface {surface.kind}")

    def unregister(self, surface: Surface) -> None:
        with self._lock:
            if surface in self._surfaces:
                self._surfaces.remove(surface)

    def invalidate_displays(self) -> None:
        """Invalidate every registered surface."""
        self._invalidate_all(self.surfaces)

    def invalidate(self, kind: str) -> None:
        """Invalidate only the surfaces of one kind."""
        self._invalidate_all(tuple(s for s in self.surfaces if s.kind == kind))

    def _invalidate_all(self, surfaces: Tuple[Surface, ...]) -> None:
        for surface in surfaces:
            try:
                surface.invalidate()
            except Exception as e:
                logger.warning(f"[DISPATCH] Surface {surface.kind} failed to invalidate: {e}")
        logger.debug(f"[DISPATCH] Invalidated {len(surfaces)} surface(s)")
