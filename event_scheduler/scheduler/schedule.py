"""Ordering and display utilities.

Defines the priority order shared by every view of the scheduler and the
12-hour clock rendering used when events are shown or processed.
"""
from .models import Event


def sort_key(event: Event) -> tuple[int, int]:
    """Ordering key: lower priority value first, then earlier time."""
    return (event.priority, event.time)


def format_time(time: int) -> str:
    """Format an HHMM integer as a 12-hour clock string.

    Args:
        time: 24-hour clock time, e.g. 1430

    Returns:
        "hh:mm AM|PM", e.g. "02:30 PM". Values that are not a valid clock
        time (negative, past 2359, or minutes above 59) come back as the raw
        value padded to four digits, e.g. "2500".
    """
    hours, minutes = divmod(time, 100)
    if time < 0 or hours > 23 or minutes > 59:
        return f"{time:04d}"

    period = "PM" if hours >= 12 else "AM"
    if hours > 12:
        hours -= 12
    if hours == 0:
        hours = 12
    return f"{hours:02d}:{minutes:02d} {period}"


def format_event(event: Event) -> str:
    """Render an event the way the console listing shows it."""
    return (
        f"- {event.name} at {format_time(event.time)} [Priority: {event.priority}]\n"
        f"  Description: {event.description}"
    )
