"""
Warm-up offset correction.

When a test runs a warm-up loop, the reported time (or iteration counter)
restarts once steady state begins. The first decrease of the x-value marks
that restart. Everything up to and including the restart is shifted back by
the x-value reached at the end of the warm-up, so the warm-up period ends up
left of zero and the series reads monotonically.
"""

from datetime import datetime
from typing import Any, List, Optional, Sequence

from ..axis import AxisType, LOCAL_EPOCH
from ...utils.logging import get_logger

logger = get_logger(__name__)

# Counting the header as the first row, scanning starts at the third row.
FIRST_SCANNED_ROW = 1


def find_warm_up_end(rows: Sequence[Sequence[Any]], x_column: int = 0) -> Optional[int]:
    """Find the first data row whose x-value decreases.

    Args:
        rows: Data rows (header excluded).
        x_column: Index of the x column.

    Returns:
        Index of the first decreasing row, or None.
    """
    for i in range(FIRST_SCANNED_ROW, len(rows)):
        previous = rows[i - 1][x_column]
        current = rows[i][x_column]
        if previous is None or current is None:
            continue
        if current < previous:
            return i
    return None


def warm_up_correction(value, axis_type: AxisType):
    """Offset to subtract, given the x-value reached at the end of the warm-up."""
    if axis_type is AxisType.DATE_TIME and isinstance(value, datetime):
        return value - LOCAL_EPOCH
    return value


def correct_warm_up(
    rows: Sequence[Sequence[Any]],
    axis_type: AxisType,
    x_column: int = 0,
) -> List[List[Any]]:
    """Shift the warm-up period so the chart starts steady state at zero.

    Args:
        rows: Data rows (header excluded). Not modified.
        axis_type: Type of the x-axis.
        x_column: Index of the x column.

    Returns:
        New list of rows. A copy of the input when no decrease is found.
    """
    corrected = [list(row) for row in rows]

    end = find_warm_up_end(corrected, x_column)
    if end is None:
        logger.debug("No warm-up period detected in %d rows", len(corrected))
        return corrected

    correction = warm_up_correction(corrected[end - 1][x_column], axis_type)
    logger.info(
        "Warm-up period ends at row %d, shifting %d rows by %s",
        end, end + 1, correction,
    )

    for row in corrected[:end + 1]:
        if row[x_column] is not None:
            row[x_column] = row[x_column] - correction

    return corrected
