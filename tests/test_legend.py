"""Tests for tooltip/legend labels."""

from datetime import datetime

import pytest

from perf_charts.core.axis import AxisType
from perf_charts.core.errors import ColumnNotFoundError
from perf_charts.core.transform.legend import (
    LEGEND_COLUMN,
    LEGEND_SEPARATOR,
    build_label,
    build_legend,
)

HEADER = ["Time", "Result", "Threads"]


@pytest.fixture
def rows():
    return [
        [datetime(1970, 1, 1, 0, 0, 1), 100.5, 4],
        [datetime(1970, 1, 1, 0, 0, 2), 110.0, 8],
    ]


class TestBuildLabel:
    """Tests for build_label."""

    def test_label_content(self, rows):
        """Test the label names the x-value and every selected column."""
        label = build_label(HEADER, rows[0], [1, 2], AxisType.DATE_TIME)

        assert label == "<b>00:00:01.000</b><br/>Result: 100.5<br/>Threads: 4"

    def test_selection_order(self, rows):
        """Test columns follow the selection order."""
        label = build_label(HEADER, rows[0], [2, 1], AxisType.DATE_TIME)

        assert label.index("Threads: 4") < label.index("Result: 100.5")

    def test_percentage(self):
        """Test percentage x-values get a trailing %."""
        label = build_label(["Percents", "Result"], [50, 12.0], [1], AxisType.PERCENTAGE)

        assert label == "<b>50%</b>" + LEGEND_SEPARATOR + "Result: 12"


class TestBuildLegend:
    """Tests for build_legend."""

    def test_appended(self, rows):
        """Test the label is appended and added to the selection."""
        legend = build_legend(HEADER, rows, [1, 2], AxisType.DATE_TIME)

        assert legend.header == ["Time", "Result", "Threads", LEGEND_COLUMN]
        assert legend.selection == [1, 2, 3]
        assert legend.x_column == 0
        assert legend.label_column == 3
        assert legend.series == [1, 2]
        assert legend.rows[1][3] == "<b>00:00:02.000</b><br/>Result: 110<br/>Threads: 8"

    def test_inserted(self, rows):
        """Test inserting the label shifts the selection."""
        legend = build_legend(HEADER, rows, [1, 2], AxisType.DATE_TIME, position=1)

        assert legend.header == ["Time", LEGEND_COLUMN, "Result", "Threads"]
        assert legend.selection == [2, 3, 1]
        assert legend.x_column == 0
        assert legend.rows[0][1].startswith("<b>00:00:01.000</b>")
        assert legend.rows[0][2] == 100.5

    def test_inserted_before_x(self, rows):
        """Test the x column index shifts too."""
        legend = build_legend(HEADER, rows, [2], AxisType.DATE_TIME, position=0)

        assert legend.x_column == 1
        assert legend.selection == [3, 0]
        assert legend.series == [3]

    def test_every_selected_column_in_label(self, rows):
        """Test each label holds header name and value of each selected column."""
        legend = build_legend(HEADER, rows, [2, 1], AxisType.DATE_TIME)

        for row, source in zip(legend.rows, rows):
            label = row[legend.label_column]
            assert f"Threads: {source[2]}" in label
            assert "Result: " in label
            assert label.index("Threads") < label.index("Result")

    def test_markup_escaped(self):
        """Test column names and values cannot break the tooltip markup."""
        label = build_label(["Iteration", "a<b", "Status"], [1, 2, "<ok>"], [1, 2], AxisType.LINEAR_NUMBER)

        assert label == "<b>1</b><br/>a&lt;b: 2<br/>Status: &lt;ok&gt;"

    def test_input_not_mutated(self, rows):
        build_legend(HEADER, rows, [1], AxisType.DATE_TIME)

        assert len(rows[0]) == 3

    def test_missing_column(self, rows):
        """Test selecting an absent column is reported."""
        with pytest.raises(ColumnNotFoundError, match="Column 5 not found"):
            build_legend(HEADER, rows, [1, 5], AxisType.DATE_TIME)

    def test_invalid_position(self, rows):
        with pytest.raises(ValueError, match="Label position"):
            build_legend(HEADER, rows, [1], AxisType.DATE_TIME, position=7)
