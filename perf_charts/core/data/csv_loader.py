"""
Reader and writer for the semicolon-separated CSV files produced by the
performance test run.

The first line is the header. Every other line is one sample point:
time-of-day cells (H:MM:SS) become fractional hours, numeric cells become
int or float, "true"/"false" become bools and empty or "null" cells become
None.
"""

import csv
import io
from pathlib import Path
from typing import Any, Union

from .table import ChartTable
from ..errors import ChartDataError
from ..formatting import hms_to_hours
from ...utils.logging import get_logger

logger = get_logger(__name__)

DELIMITER = ";"

NULL_VALUES = {"", "null", "none", "nan"}


def parse_value(text: str) -> Any:
    """Parse a single CSV cell into a typed scalar.

    Args:
        text: Raw cell text.

    Returns:
        int, float, bool, None, fractional hours for time-of-day cells,
        or the stripped text.
    """
    value = text.strip()
    lowered = value.lower()

    if lowered in NULL_VALUES:
        return None
    if lowered == "true":
        return True
    if lowered == "false":
        return False

    try:
        return int(value)
    except ValueError:
        pass

    try:
        return float(value)
    except ValueError:
        pass

    hours = hms_to_hours(value)
    if hours is not None:
        return hours

    return value


def parse_csv(text: str, delimiter: str = DELIMITER, source: str = "<string>") -> ChartTable:
    """Parse CSV text into a ChartTable.

    Args:
        text: CSV payload.
        delimiter: Cell delimiter.
        source: Name used in diagnostics.

    Returns:
        Parsed table.

    Raises:
        ChartDataError: If there is no header or a row is wider than the header.
    """
    reader = csv.reader(io.StringIO(text), delimiter=delimiter)
    lines = [line for line in reader if any(cell.strip() for cell in line)]

    if not lines:
        raise ChartDataError(f"No header found in {source}")

    header = [cell.strip() for cell in lines[0]]
    rows = []

    for line_num, line in enumerate(lines[1:], 2):
        if len(line) > len(header):
            raise ChartDataError(
                f"Line {line_num} in {source} has {len(line)} cells, header has {len(header)}"
            )
        row = [parse_value(cell) for cell in line]
        if len(row) < len(header):
            logger.warning(
                "Line %d in %s has %d of %d cells, padding with empty values",
                line_num, source, len(row), len(header),
            )
            row.extend([None] * (len(header) - len(row)))
        rows.append(row)

    logger.debug("Parsed %d rows with columns %s from %s", len(rows), header, source)
    return ChartTable(header=header, rows=rows)


def load_csv(path: Union[str, Path], delimiter: str = DELIMITER) -> ChartTable:
    """Load a CSV results file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ChartDataError: If the content is malformed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"CSV file not found: {path}")

    return parse_csv(path.read_text(encoding="utf-8"), delimiter=delimiter, source=str(path))


def write_csv(table: ChartTable, path: Union[str, Path], delimiter: str = DELIMITER) -> Path:
    """Write a table as CSV, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, delimiter=delimiter, lineterminator="\n")
        writer.writerow(table.header)
        for row in table.rows:
            writer.writerow([_format_cell(value) for value in row])

    return path


def _format_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
