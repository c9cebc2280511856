"""
DrinkTender - drink pacing reminder timer.

One persisted timer state, one writer (the event recorder) and any number
of read-only display surfaces that refresh on their own cadence.
"""

__version__ = "1.0.0"
