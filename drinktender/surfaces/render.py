"""
Text projections of timeline entries, one per surface kind.
"""

from .entry import CIRCULAR_WIDGET, COMPLICATION, RECTANGULAR_WIDGET, DrinkTimerEntry


def render_text(kind: str, entry: DrinkTimerEntry) -> str:
    if kind == CIRCULAR_WIDGET:
        return str(entry.drink_count)

    if kind == RECTANGULAR_WIDGET:
        status = "Ready for next drink" if entry.can_drink else f"Wait: {entry.time_until_next}"
        return f"Drink Timer | {status}"

    if kind == COMPLICATION:
        return "Ready" if entry.can_drink else entry.time_until_next

    # Main view and large widget
    percent = int(entry.progress * 100)
    if entry.can_drink:
        return f"Ready! | drinks: {entry.drink_count} | {percent}%"
    return f"Next drink in {entry.time_until_next} | drinks: {entry.drink_count} | {percent}%"
