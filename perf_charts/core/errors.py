"""Exceptions raised while shaping chart data."""


class ChartDataError(Exception):
    """Raised when CSV or table data cannot be turned into a chart."""
    pass


class ColumnNotFoundError(ChartDataError):
    """Raised when an expected column is absent from a table."""

    def __init__(self, column, header=None):
        self.column = column
        self.header = list(header or [])
        if self.header:
            message = f"Column {column!r} not found, available columns: {', '.join(map(str, self.header))}"
        else:
            message = f"Column {column!r} not found"
        super().__init__(message)
