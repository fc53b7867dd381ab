"""
Axis types for chart reports.

The axis type decides how x-values are parsed, how ticks are formatted and
how the x-value is written into tooltips.
"""

from datetime import datetime
from enum import Enum


# Wall-clock midnight of 1970-01-01, i.e. the epoch shifted by the local offset.
# Date-time x-values are naive datetimes counted from here.
LOCAL_EPOCH = datetime(1970, 1, 1)


class AxisType(Enum):
    """Value domain of the x-axis."""

    LINEAR_NUMBER = "iteration"
    DATE_TIME = "time"
    PERCENTAGE = "percent"

    @classmethod
    def from_name(cls, name) -> "AxisType":
        """Resolve an axis type from its configuration name or an alias.

        Args:
            name: AxisType instance or name such as "time", "iteration", "percent".

        Returns:
            Matching AxisType.

        Raises:
            ValueError: If the name is unknown.
        """
        if isinstance(name, cls):
            return name

        key = str(name).strip().lower().replace("_", "-")
        if key not in _ALIASES:
            valid = ", ".join(sorted(_ALIASES))
            raise ValueError(f"Invalid axis type: {name}. Must be one of {valid}")
        return _ALIASES[key]

    @property
    def tick_format(self) -> str:
        """Tick format string understood by Google Charts."""
        return _TICK_FORMATS[self]

    @property
    def column_name(self) -> str:
        """Default header of the x column."""
        return _COLUMN_NAMES[self]

    @property
    def google_type(self) -> str:
        return "datetime" if self is AxisType.DATE_TIME else "number"

    @property
    def min_value(self):
        """Lowest value shown on the axis."""
        return LOCAL_EPOCH if self is AxisType.DATE_TIME else 0


_ALIASES = {
    "iteration": AxisType.LINEAR_NUMBER,
    "linear": AxisType.LINEAR_NUMBER,
    "linear-number": AxisType.LINEAR_NUMBER,
    "number": AxisType.LINEAR_NUMBER,
    "time": AxisType.DATE_TIME,
    "date-time": AxisType.DATE_TIME,
    "datetime": AxisType.DATE_TIME,
    "percent": AxisType.PERCENTAGE,
    "percents": AxisType.PERCENTAGE,
    "percentage": AxisType.PERCENTAGE,
}

_TICK_FORMATS = {
    AxisType.LINEAR_NUMBER: "#",
    AxisType.DATE_TIME: "HH:mm:ss",
    AxisType.PERCENTAGE: "#%",
}

_COLUMN_NAMES = {
    AxisType.LINEAR_NUMBER: "Iteration",
    AxisType.DATE_TIME: "Time",
    AxisType.PERCENTAGE: "Percents",
}
