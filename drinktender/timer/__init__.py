"""
Timer module for DrinkTender.

Pure readiness, remaining-time, formatting and progress computations.
"""

from .engine import (
    READY_TEXT,
    format_remaining,
    is_ready,
    next_ready_at,
    progress,
    remaining,
)

__all__ = [
    "READY_TEXT",
    "format_remaining",
    "is_ready",
    "next_ready_at",
    "progress",
    "remaining",
]
