"""
Chart configuration passed to the charting library.

ChartOptions is validated when created and renders itself into the option
structures of Google Charts and C3.js.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict

from ..axis import AxisType
from ...utils.validation import ValidationError, validate_non_empty_string, validate_positive_int

DEFAULT_HEIGHT = 400
DEFAULT_GRIDLINES = 10


def google_date_literal(value: datetime) -> str:
    """Date literal as understood by the Google Charts DataTable JSON format."""
    return (
        f"Date({value.year}, {value.month - 1}, {value.day}, "
        f"{value.hour}, {value.minute}, {value.second}, {value.microsecond // 1000})"
    )


@dataclass
class ChartOptions:
    """Titles, size and axis setup of one chart."""

    title: str
    x_title: str
    y_title: str
    axis_type: AxisType
    height: int = DEFAULT_HEIGHT
    gridlines: int = DEFAULT_GRIDLINES
    show_millis: bool = False

    def __post_init__(self):
        try:
            self.axis_type = AxisType.from_name(self.axis_type)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        self.title = validate_non_empty_string(self.title, "Chart title")
        self.x_title = self.x_title or ""
        self.y_title = self.y_title or ""
        validate_positive_int(self.height, "Chart height")
        validate_positive_int(self.gridlines, "Gridline count")

    @property
    def tick_format(self) -> str:
        if self.axis_type is AxisType.DATE_TIME and self.show_millis:
            return "HH:mm:ss.SSS"
        return self.axis_type.tick_format

    @property
    def min_value(self):
        return self.axis_type.min_value

    def to_google(self) -> Dict[str, Any]:
        """Options for google.visualization.LineChart.draw()."""
        min_value = self.min_value
        if isinstance(min_value, datetime):
            min_value = google_date_literal(min_value)

        return {
            "title": self.title,
            "height": self.height,
            "interpolateNulls": True,
            "legend": {"position": "bottom"},
            "focusTarget": "category",
            "tooltip": {"isHtml": True},
            "hAxis": {
                "title": self.x_title,
                "format": self.tick_format,
                "minValue": min_value,
                "gridlines": {"count": self.gridlines},
            },
            "vAxis": {
                "title": self.y_title,
                "minValue": 0,
                "gridlines": {"count": self.gridlines},
            },
        }

    def to_c3(self) -> Dict[str, Any]:
        """Options for c3.generate(); the x tick formatter is picked by the template."""
        return {
            "size": {"height": self.height},
            "line": {"connectNull": True},
            "point": {"show": False},
            "legend": {"position": "bottom"},
            "axis": {
                "x": {
                    "label": {"text": self.x_title, "position": "outer-center"},
                    "min": 0,
                    "tick": {"count": self.gridlines, "fit": False},
                },
                "y": {
                    "label": {"text": self.y_title, "position": "outer-middle"},
                    "min": 0,
                    "padding": {"bottom": 0},
                },
            },
            "grid": {"x": {"show": True}, "y": {"show": True}},
        }
