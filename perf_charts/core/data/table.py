"""
Tabular chart data.

A ChartTable holds the header row and the data rows of one chart. All
shaping operations return new tables and leave the original untouched.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Union

from ..errors import ChartDataError, ColumnNotFoundError
from ...utils.logging import get_logger

logger = get_logger(__name__)

ColumnRef = Union[int, str]


@dataclass
class ChartTable:
    """Header plus data rows; column 0 is the x column unless stated otherwise."""

    header: List[str]
    rows: List[List[Any]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.header)

    def column(self, index: int) -> List[Any]:
        """Return all values of one column."""
        self.check_index(index)
        return [row[index] for row in self.rows]

    def check_index(self, index: int) -> int:
        """Ensure a column index exists.

        Raises:
            ColumnNotFoundError: If the index is outside the header.
        """
        if isinstance(index, bool) or not isinstance(index, int) or index < 0 or index >= self.width:
            raise ColumnNotFoundError(index, self.header)
        return index

    def resolve_column(self, ref: ColumnRef) -> int:
        """Map a column index or header name to an index.

        Numeric strings are treated as indices.

        Raises:
            ColumnNotFoundError: If the column is absent.
        """
        if isinstance(ref, str):
            text = ref.strip()
            if text in self.header:
                return self.header.index(text)
            if text.isdigit():
                return self.check_index(int(text))
            raise ColumnNotFoundError(ref, self.header)
        return self.check_index(ref)

    def resolve_columns(self, refs: Sequence[ColumnRef]) -> List[int]:
        return [self.resolve_column(ref) for ref in refs]

    def select(self, columns: Sequence[ColumnRef], x_column: ColumnRef = 0) -> "ChartTable":
        """Keep the x column followed by the given columns.

        Args:
            columns: Columns to keep, in output order.
            x_column: The x column, moved to position 0.

        Returns:
            New table.
        """
        indices = [self.resolve_column(x_column)] + self.resolve_columns(columns)
        return ChartTable(
            header=[self.header[i] for i in indices],
            rows=[[row[i] for i in indices] for row in self.rows],
        )

    def rename(self, header: Sequence[str]) -> "ChartTable":
        if len(header) != self.width:
            raise ChartDataError(
                f"Cannot rename {self.width} columns with {len(header)} names"
            )
        return ChartTable(header=list(header), rows=[list(row) for row in self.rows])

    def with_rows(self, rows: List[List[Any]]) -> "ChartTable":
        return ChartTable(header=list(self.header), rows=rows)

    def sorted_by_x(self) -> "ChartTable":
        """Rows ordered by the x column, rows without an x-value last."""
        rows = sorted(self.rows, key=lambda row: (row[0] is None, row[0]))
        return self.with_rows([list(row) for row in rows])

    def data_start(self) -> int:
        """Index of the first row carrying a series value, -1 when the table is empty."""
        if not self.rows:
            return -1

        idx = 0
        while idx < len(self.rows) and _is_all_null(self.rows[idx]):
            idx += 1
        return idx

    def combine_with(self, other: "ChartTable") -> "ChartTable":
        """Merge two tables on their x column (column 0).

        Leading rows without any series value are skipped. Rows with the same
        x are joined, otherwise the missing side is padded with None. Merged
        rows with no series value at all are dropped. Both tables must be
        sorted by x.

        Args:
            other: Table to merge with.

        Returns:
            New table with this table's series followed by the other's.
        """
        header = list(self.header) + list(other.header[1:])
        idx1 = self.data_start()
        idx2 = other.data_start()

        if idx1 == -1:
            return ChartTable(header=header, rows=[
                [row[0]] + [None] * (self.width - 1) + list(row[1:]) for row in other.rows
            ])
        if idx2 == -1:
            return ChartTable(header=header, rows=[
                list(row) + [None] * (other.width - 1) for row in self.rows
            ])

        nulls1 = [None] * (self.width - 1)
        nulls2 = [None] * (other.width - 1)
        rows = []

        while idx1 < len(self.rows) or idx2 < len(other.rows):
            a1 = self.rows[idx1] if idx1 < len(self.rows) else None
            a2 = other.rows[idx2] if idx2 < len(other.rows) else None

            if a1 is not None and a2 is not None and a1[0] == a2[0]:
                if not (_is_all_null(a1) and _is_all_null(a2)):
                    rows.append([a1[0]] + list(a1[1:]) + list(a2[1:]))
                idx1 += 1
                idx2 += 1
            elif a2 is None or (a1 is not None and a1[0] < a2[0]):
                if not _is_all_null(a1):
                    rows.append([a1[0]] + list(a1[1:]) + nulls2)
                idx1 += 1
            else:
                if not _is_all_null(a2):
                    rows.append([a2[0]] + nulls1 + list(a2[1:]))
                idx2 += 1

        logger.debug(
            "Combined tables of %d and %d rows into %d rows",
            len(self.rows), len(other.rows), len(rows),
        )
        return ChartTable(header=header, rows=rows)


def _is_all_null(row: Optional[Sequence[Any]]) -> bool:
    if row is None:
        return True
    return all(value is None for value in row[1:])
