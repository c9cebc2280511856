"""
Surface host for DrinkTender.

Runs each registered surface on its own daemon thread, standing in for the
platform's timeline/refresh mechanism. Every thread renders when its surface
is invalidated, when a dated timeline entry becomes current, or when the
timeline's reload time arrives, and hands the entry to a render callback.
"""

import logging
import threading
from typing import Callable, List, Optional

from drinktender.clock import SystemClock

from .dispatcher import SurfaceRefreshDispatcher
from .entry import DrinkTimerEntry
from .surface import Surface

logger = logging.getLogger(__name__)

RenderCallback = Callable[[Surface, DrinkTimerEntry], None]


class SurfaceHost:
    """
    Independent refresh loops for every surface in a dispatcher.

    Args:
        dispatcher: Source of the surfaces to host
        on_render: Called with (surface, entry) after each render
        clock: Time source
    """

    def __init__(self, dispatcher: SurfaceRefreshDispatcher, on_render: RenderCallback, clock=None):
        self._dispatcher = dispatcher
        self._on_render = on_render
        self._clock = clock or SystemClock()
        self._stop = threading.Event()
        self._threads: List[threading.Thread] = []

    @property
    def running(self) -> bool:
        return any(t.is_alive() for t in self._threads)

    def start(self) -> None:
        if self._threads:
            return
        self._stop.clear()
        for surface in self._dispatcher.surfaces:
            thread = threading.Thread(
                target=self._run,
                args=(surface,),
                name=f"surface-{surface.kind}",
                daemon=True,
            )
            self._threads.append(thread)
            thread.start()
        logger.info(f"[SURFACE] Hosting {len(self._threads)} surface(s)")

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """Stop every refresh loop and join its thread."""
        self._stop.set()
        for surface in self._dispatcher.surfaces:
            surface.invalidate()  # wake waiting loops
        for thread in self._threads:
            thread.join(timeout)
        self._threads = []
        logger.info("[SURFACE] Surface host stopped")

    def _run(self, surface: Surface) -> None:
        while not self._stop.is_set():
            now = self._clock.now()
            try:
                if surface.stale or surface.timeline is None or now >= surface.timeline.reload_after:
                    surface.refresh(now)
                self._emit(surface, surface.entry_at(now))
            except Exception as e:
                logger.error(f"[SURFACE] {surface.kind} refresh failed: {e}")
                self._stop.wait(1.0)
                continue
            surface.wait(max(surface.next_wake(self._clock.now()), 0.05))

    def _emit(self, surface: Surface, entry: DrinkTimerEntry) -> None:
        try:
            self._on_render(surface, entry)
        except Exception as e:
            logger.warning(f"[SURFACE] Render callback for {surface.kind} failed: {e}")
