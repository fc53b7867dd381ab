"""Test configuration for perf-charts."""

import logging

import pytest


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler and level changes made by setup_logging()."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def throughput_csv(tmp_path):
    """CSV results of a run without warm-up."""
    path = tmp_path / "throughput.csv"
    path.write_text(
        "Time;Iterations;Result;Threads\n"
        "0:00:01;10;100.5;4\n"
        "0:00:02;20;110.0;4\n"
        "0:00:03;30;120.25;4\n"
    )
    return path


@pytest.fixture
def warmup_csv(tmp_path):
    """CSV results where the clock restarts after a warm-up loop."""
    path = tmp_path / "warmup.csv"
    path.write_text(
        "Time;Iterations;Result\n"
        "0:00:01;1;10\n"
        "0:00:02;2;20\n"
        "0:00:03;3;30\n"
        "0:00:00.500;4;40\n"
        "0:00:01.500;5;50\n"
    )
    return path


@pytest.fixture
def second_run_csv(tmp_path):
    """Another run sampled at partly different times."""
    path = tmp_path / "second-run.csv"
    path.write_text(
        "Time;Iterations;Result;Threads\n"
        "0:00:02;15;90;4\n"
        "0:00:04;25;95;4\n"
    )
    return path


@pytest.fixture
def percentile_csv(tmp_path):
    """Response time percentiles."""
    path = tmp_path / "percentiles.csv"
    path.write_text(
        "Percents;Result\n"
        "50;12.5\n"
        "90;20\n"
        "99;45.75\n"
    )
    return path


@pytest.fixture
def sample_config(throughput_csv, percentile_csv):
    """Provide sample report configuration for testing."""
    return {
        "report": {
            "title": "Nightly run",
            "output_dir": str(throughput_csv.parent / "report"),
            "library": "google",
        },
        "charts": [
            {
                "name": "Throughput",
                "sources": [str(throughput_csv)],
                "columns": ["Result"],
                "axis_type": "time",
                "y_title": "Iterations/s",
            },
            {
                "name": "Percentiles",
                "sources": [str(percentile_csv)],
                "columns": [1],
                "axis_type": "percent",
                "x_title": "Percentile",
                "group": "latency",
            },
        ],
    }
