"""
Tooltip/legend labels.

Every data row gets one extra field: an HTML label naming the x-value and
each plotted column with its value. The chart shows it when hovering the
sample point.
"""

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from markupsafe import escape

from ..axis import AxisType
from ..errors import ColumnNotFoundError
from ..formatting import format_axis_value, format_number

LEGEND_SEPARATOR = "<br/>"
LEGEND_COLUMN = "Legend"


@dataclass
class LegendData:
    """Rows with their labels, plus the column layout after inserting them."""

    header: List[str]
    rows: List[List[Any]]
    selection: List[int]
    x_column: int
    label_column: int

    @property
    def series(self) -> List[int]:
        """Selected columns without the label column."""
        return [i for i in self.selection if i != self.label_column]


def build_label(
    header: Sequence[str],
    row: Sequence[Any],
    selection: Sequence[int],
    axis_type: AxisType,
    x_column: int = 0,
) -> str:
    """Build the label of one row."""
    parts = [f"<b>{escape(format_axis_value(row[x_column], axis_type))}</b>"]
    for index in selection:
        parts.append(f"{escape(header[index])}: {escape(format_number(row[index]))}")
    return LEGEND_SEPARATOR.join(parts)


def build_legend(
    header: Sequence[str],
    rows: Sequence[Sequence[Any]],
    selection: Sequence[int],
    axis_type: AxisType,
    x_column: int = 0,
    position: Optional[int] = None,
) -> LegendData:
    """Add a label field to every row.

    Args:
        header: Column names.
        rows: Data rows (header excluded). Not modified.
        selection: Indices of the plotted columns, in legend order.
        axis_type: Type of the x-axis.
        x_column: Index of the x column.
        position: Where to insert the label field. Appended when None.

    Returns:
        LegendData whose selection and x column account for the new field;
        the label column is the last entry of the selection.

    Raises:
        ColumnNotFoundError: If a selected column or the x column is absent.
    """
    width = len(header)
    for index in [x_column] + list(selection):
        if index < 0 or index >= width:
            raise ColumnNotFoundError(index, header)

    if position is None:
        position = width
    elif position < 0 or position > width:
        raise ValueError(f"Label position must be between 0 and {width}, got {position}")

    def shift(index: int) -> int:
        return index + 1 if index >= position else index

    new_header = list(header)
    new_header.insert(position, LEGEND_COLUMN)

    new_rows = []
    for row in rows:
        label = build_label(header, row, selection, axis_type, x_column)
        new_row = list(row)
        new_row.insert(position, label)
        new_rows.append(new_row)

    return LegendData(
        header=new_header,
        rows=new_rows,
        selection=[shift(i) for i in selection] + [position],
        x_column=shift(x_column),
        label_column=position,
    )
