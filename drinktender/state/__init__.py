"""
State persistence module for DrinkTender.

Provides the persisted key/value store and the typed timer state on top of
it. The read-only surface view lives in drinktender.state.reader.
"""

from .state_store import JsonStateStore, MemoryStateStore, StateStore
from .timer_state import TimerState, TimerStateStore

__all__ = [
    "JsonStateStore",
    "MemoryStateStore",
    "StateStore",
    "TimerState",
    "TimerStateStore",
]
