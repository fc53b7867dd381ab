"""
Value formatting for chart axes and tooltips.
"""

import re
from datetime import datetime, timedelta
from typing import Optional

from .axis import AxisType, LOCAL_EPOCH

MILLIS_PER_SECOND = 1000
MILLIS_PER_MINUTE = 60 * MILLIS_PER_SECOND
MILLIS_PER_HOUR = 60 * MILLIS_PER_MINUTE

HMS_PATTERN = re.compile(r'^(-)?(\d+):(\d{1,2}):(\d{1,2}(?:\.\d+)?)$')


def format_millis(ms) -> str:
    """Format a signed duration in milliseconds as [-]HH:MM:SS.mmm.

    Hours are not wrapped at 24. Fractional milliseconds are truncated.

    Args:
        ms: Duration in milliseconds.

    Returns:
        Formatted duration, e.g. "01:01:01.001" for 3661001.
    """
    sign = "-" if ms < 0 else ""
    magnitude = int(abs(ms))

    hours, rest = divmod(magnitude, MILLIS_PER_HOUR)
    minutes, rest = divmod(rest, MILLIS_PER_MINUTE)
    seconds, millis = divmod(rest, MILLIS_PER_SECOND)

    return f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"


def hms_to_hours(text: str) -> Optional[float]:
    """Convert a time-of-day string (H:MM:SS[.fff]) to fractional hours.

    Args:
        text: Cell text.

    Returns:
        Number of hours, or None when the text is not a time-of-day.
    """
    match = HMS_PATTERN.match(text.strip())
    if not match:
        return None

    negative, hours, minutes, seconds = match.groups()
    value = int(hours) + int(minutes) / 60 + float(seconds) / 3600
    return -value if negative else value


def hours_to_datetime(hours: float) -> datetime:
    """Anchor an elapsed number of hours at the local epoch, rounded to whole ms."""
    return LOCAL_EPOCH + timedelta(milliseconds=round(hours * MILLIS_PER_HOUR))


def datetime_to_millis(value: datetime) -> int:
    """Elapsed milliseconds between the local epoch and a date-time x-value."""
    return round((value - LOCAL_EPOCH) / timedelta(milliseconds=1))


def format_number(value) -> str:
    """Format a cell value for display in a tooltip."""
    if value is None:
        return "n/a"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return str(round(value, 3))
    return str(value)


def format_axis_value(value, axis_type: AxisType) -> str:
    """Format an x-value the way the axis shows it.

    Args:
        value: The x-value (datetime for date-time axes, a number otherwise).
        axis_type: Type of the x-axis.

    Returns:
        Formatted x-value.
    """
    if value is None:
        return format_number(value)

    if axis_type is AxisType.DATE_TIME:
        if isinstance(value, datetime):
            return format_millis(datetime_to_millis(value))
        return format_millis(value * MILLIS_PER_HOUR)

    if axis_type is AxisType.PERCENTAGE:
        return f"{format_number(value)}%"

    return format_number(value)
