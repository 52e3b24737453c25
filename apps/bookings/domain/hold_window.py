"""
Hold-window calculation

A booking holds its equipment longer than the event itself: the crew
delivers and installs before ``start`` and tears down after ``end``.
"""

from datetime import timedelta

from shared.domain.value_objects import HoldWindow, parse_timestamp


def compute_hold_window(start, end, margin_hours) -> HoldWindow:
    """
    Widen the event window by ``margin_hours`` on each side

    Args:
        start: event start (ISO-8601 string or datetime)
        end: event end (ISO-8601 string or datetime); start <= end is
            assumed, not checked
        margin_hours: non-negative number of hours, not clamped

    Returns:
        HoldWindow(start - margin, end + margin), in UTC
    """
    margin = timedelta(hours=margin_hours)
    return HoldWindow(parse_timestamp(start) - margin, parse_timestamp(end) + margin)
