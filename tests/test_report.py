"""Tests for report generation."""

from datetime import datetime, timedelta

import pytest

from perf_charts.config import ChartSpec, Config, ReportConfig
from perf_charts.core.axis import AxisType, LOCAL_EPOCH
from perf_charts.core.chart.renderer import GoogleChartRenderer
from perf_charts.core.errors import ColumnNotFoundError
from perf_charts.core.reporting.report import (
    ChartReport,
    ReportWriter,
    load_chart_table,
    prepare_chart,
    to_axis_rows,
    unique_base_names,
)


def seconds(value):
    return LOCAL_EPOCH + timedelta(seconds=value)


class TestLoadChartTable:
    """Tests for load_chart_table."""

    def test_single_source(self, throughput_csv):
        spec = ChartSpec(name="Throughput", sources=[str(throughput_csv)], columns=["Result", 3])

        table = load_chart_table(spec)

        assert table.header == ["Time", "Result", "Threads"]
        assert [row[1] for row in table.rows] == [100.5, 110.0, 120.25]

    def test_several_sources(self, throughput_csv, second_run_csv):
        """Test series are named after their file and merged on the x-value."""
        spec = ChartSpec(
            name="Runs",
            sources=[str(throughput_csv), str(second_run_csv)],
            columns=["Result"],
        )

        table = load_chart_table(spec)

        assert table.header == ["Time", "Result (throughput)", "Result (second-run)"]
        assert [row[1:] for row in table.rows] == [
            [100.5, None],
            [110.0, 90],
            [120.25, None],
            [None, 95],
        ]

    def test_warm_up_corrected_per_source(self, warmup_csv, second_run_csv):
        """Test only the run with a warm-up is shifted before the runs are merged."""
        spec = ChartSpec(
            name="Runs",
            sources=[str(warmup_csv), str(second_run_csv)],
            columns=["Result"],
        )

        table = load_chart_table(spec)

        assert table.rows == [
            [seconds(-2.5), 40, None],
            [seconds(-2), 10, None],
            [seconds(-1), 20, None],
            [seconds(0), 30, None],
            [seconds(1.5), 50, None],
            [seconds(2), None, 90],
            [seconds(4), None, 95],
        ]

    def test_warm_up_correction_disabled_per_source(self, warmup_csv, second_run_csv):
        spec = ChartSpec(
            name="Runs",
            sources=[str(warmup_csv), str(second_run_csv)],
            columns=["Result"],
            warmup_correction=False,
        )

        table = load_chart_table(spec)

        assert [seconds(2), 20, 90] in table.rows

    def test_missing_column(self, throughput_csv):
        spec = ChartSpec(name="Throughput", sources=[str(throughput_csv)], columns=["Latency"])

        with pytest.raises(ColumnNotFoundError, match="Latency"):
            load_chart_table(spec)

    def test_missing_file(self, tmp_path):
        spec = ChartSpec(name="Throughput", sources=[str(tmp_path / "nope.csv")], columns=[1])

        with pytest.raises(FileNotFoundError):
            load_chart_table(spec)


def test_to_axis_rows():
    """Test fractional hours become datetimes on date-time axes only."""
    rows = [[1.5, 3], [None, 4]]

    assert to_axis_rows(rows, AxisType.DATE_TIME) == [[datetime(1970, 1, 1, 1, 30), 3], [None, 4]]
    assert to_axis_rows(rows, AxisType.PERCENTAGE) == rows


class TestPrepareChart:
    """Tests for prepare_chart."""

    def test_warm_up_corrected(self, warmup_csv):
        """Test the warm-up period is moved left of zero."""
        spec = ChartSpec(name="Warm-up run", sources=[str(warmup_csv)], columns=["Result"])

        chart = prepare_chart(spec)

        x_values = [row[0] for row in chart.legend.rows]
        assert x_values == [seconds(-2), seconds(-1), seconds(0), seconds(-2.5), seconds(1.5)]
        assert chart.base_name == "Warm_up_run"
        assert chart.combined is False

    def test_warm_up_correction_disabled(self, warmup_csv):
        spec = ChartSpec(
            name="Raw",
            sources=[str(warmup_csv)],
            columns=["Result"],
            warmup_correction=False,
        )

        chart = prepare_chart(spec)

        assert chart.legend.rows[3][0] == seconds(0.5)

    def test_legend_and_options(self, throughput_csv):
        spec = ChartSpec(
            name="Throughput",
            sources=[str(throughput_csv)],
            columns=["Result"],
            y_title="Iterations/s",
            height=300,
        )

        chart = prepare_chart(spec, ReportConfig(gridlines=4, show_millis=True), base_name="tp")

        assert chart.base_name == "tp"
        assert chart.legend.header == ["Time", "Result", "Legend"]
        assert chart.legend.rows[0][2] == "<b>00:00:01.000</b><br/>Result: 100.5"
        assert chart.options.height == 300
        assert chart.options.gridlines == 4
        assert chart.options.tick_format == "HH:mm:ss.SSS"

    def test_percent_axis(self, percentile_csv):
        spec = ChartSpec(name="Percentiles", sources=[str(percentile_csv)], columns=[1], axis_type="percent")

        chart = prepare_chart(spec)

        assert [row[0] for row in chart.legend.rows] == [50, 90, 99]
        assert chart.legend.rows[2][2] == "<b>99%</b><br/>Result: 45.75"

    def test_combined(self, throughput_csv, second_run_csv):
        spec = ChartSpec(
            name="Runs",
            sources=[str(throughput_csv), str(second_run_csv)],
            columns=["Result"],
        )

        chart = prepare_chart(spec)

        assert chart.combined is True
        assert chart.legend.series == [1, 2]
        assert chart.legend.rows[3][0] == seconds(4)


def test_unique_base_names():
    assert unique_base_names(["Throughput", "Throughput", "Resp time"]) == [
        "Throughput",
        "Throughput_2",
        "Resp_time",
    ]


def test_unique_base_names_avoid_taken_suffix():
    """Test a suffixed slug never collides with a later chart name."""
    assert unique_base_names(["a", "a", "a_2"]) == ["a", "a_2", "a_2_2"]
    assert unique_base_names(["a_2", "a", "a"]) == ["a_2", "a", "a_3"]


class TestReportWriter:
    """Tests for ReportWriter."""

    def test_chart_label(self, throughput_csv, second_run_csv):
        plain = prepare_chart(ChartSpec(name="Plain", sources=[str(throughput_csv)], columns=[2]))
        plain.created = datetime(2024, 5, 1, 12, 30, 0)
        combined = prepare_chart(ChartSpec(
            name="Both", sources=[str(throughput_csv), str(second_run_csv)], columns=[2],
        ))

        assert ReportWriter.chart_label(plain) == "Plain (created: 2024-05-01 12:30:00)"
        assert ReportWriter.chart_label(combined) == "Both"

    def test_groups_and_toc(self, throughput_csv, second_run_csv, percentile_csv):
        """Test groups keep first-appearance order and the left column takes the odd entry."""
        charts = [
            prepare_chart(ChartSpec(name="A", sources=[str(throughput_csv)], columns=[2])),
            prepare_chart(ChartSpec(
                name="P", sources=[str(percentile_csv)], columns=[1], axis_type="percent", group="latency",
            )),
            prepare_chart(ChartSpec(
                name="B", sources=[str(throughput_csv), str(second_run_csv)], columns=[2],
            )),
        ]
        writer = ReportWriter(target=".", renderer=GoogleChartRenderer())

        groups = writer.build_groups(charts)
        left, right = writer.split_toc(groups)

        assert [group["name"] for group in groups] == ["default", "latency"]
        assert [entry["id"] for entry in groups[0]["plain"]] == ["A"]
        assert [entry["id"] for entry in groups[0]["combined"]] == ["B"]
        assert [entry["id"] for entry in left] == ["A", "B"]
        assert [entry["id"] for entry in right] == ["P"]

    def test_no_quick_view(self, throughput_csv, tmp_path):
        chart = prepare_chart(ChartSpec(name="A", sources=[str(throughput_csv)], columns=[2]))
        writer = ReportWriter(target=tmp_path / "out", renderer=GoogleChartRenderer(), quick_view=False)

        index_file = writer.write([chart])

        assert index_file.exists()
        assert not (tmp_path / "out" / "data").exists()


class TestChartReport:
    """Tests for ChartReport."""

    def test_write(self, sample_config, tmp_path):
        """Test the index and one quick view per chart are written."""
        config = Config.from_dict(sample_config)

        index_file = ChartReport(config).write()

        html = index_file.read_text()
        assert index_file == (tmp_path / "report" / "index.html").resolve()
        assert "<title>Nightly run</title>" in html
        assert "Table of Contents" in html
        assert "Charts for group: default" in html
        assert "Charts for group: latency" in html
        assert "Plain results" in html
        assert '<div id="chart_Throughput_div" class="chart"></div>' in html
        assert "google.charts.load" in html
        assert (tmp_path / "report" / "data" / "Throughput.html").exists()
        assert (tmp_path / "report" / "data" / "Percentiles.html").exists()

    def test_quick_view_holds_single_chart(self, sample_config, tmp_path):
        ChartReport(Config.from_dict(sample_config)).write()

        quick_view = (tmp_path / "report" / "data" / "Percentiles.html").read_text()
        assert "draw_Percentiles();" in quick_view
        assert "draw_Throughput" not in quick_view

    def test_c3_output_dir_override(self, sample_config, tmp_path):
        sample_config["report"]["library"] = "c3"
        config = Config.from_dict(sample_config)

        index_file = ChartReport(config).write(str(tmp_path / "c3-report"))

        html = index_file.read_text()
        assert index_file.parent == (tmp_path / "c3-report").resolve()
        assert "c3.generate" in html
        assert "ms2hms" in html
