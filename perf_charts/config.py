"""
Configuration management for perf-charts.

This module provides the Config class for loading, validating, and managing
report configuration from YAML/JSON files with environment variable overrides.
"""

import json
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .core.axis import AxisType

VALID_LIBRARIES = ["google", "c3"]
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class ChartSpec:
    """Configuration of a single chart."""

    name: str
    sources: List[str] = field(default_factory=list)
    columns: List[Union[int, str]] = field(default_factory=list)
    axis_type: str = "time"
    x_title: str = "Time"
    y_title: str = ""
    group: str = "default"
    height: int = 400
    x_column: Union[int, str] = 0
    warmup_correction: bool = True

    def __post_init__(self):
        """Accept a single source path as well as a list."""
        if isinstance(self.sources, (str, Path)):
            self.sources = [str(self.sources)]

    def validate(self) -> None:
        """Validate chart configuration."""
        if not self.name or not self.name.strip():
            raise ValueError("Chart name is required")
        if not self.sources:
            raise ValueError(f"At least one source CSV file is required for chart '{self.name}'")
        if not self.columns:
            raise ValueError(f"At least one column is required for chart '{self.name}'")
        AxisType.from_name(self.axis_type)
        if self.height < 1:
            raise ValueError(f"Chart height must be positive, got {self.height}")
        if not self.group:
            raise ValueError(f"Chart group is required for chart '{self.name}'")


@dataclass
class ReportConfig:
    """Report output configuration."""

    title: str = "Performance Test Report"
    output_dir: str = "./chart-report"
    library: str = "google"
    quick_view: bool = True
    gridlines: int = 10
    show_millis: bool = False

    def validate(self) -> None:
        """Validate report configuration."""
        if not self.title:
            raise ValueError("Report title is required")
        if not self.output_dir:
            raise ValueError("output_dir is required")
        if self.library not in VALID_LIBRARIES:
            raise ValueError(f"Invalid chart library: {self.library}. Must be one of {VALID_LIBRARIES}")
        if self.gridlines < 1:
            raise ValueError("Gridline count must be at least 1")


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    file: Optional[str] = None

    def validate(self) -> None:
        """Validate logging configuration."""
        if self.level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.level}. Must be one of {VALID_LOG_LEVELS}")


class Config:
    """Main configuration class for perf-charts."""

    def __init__(
        self,
        charts: List[ChartSpec],
        report: Optional[ReportConfig] = None,
        logging: Optional[LoggingConfig] = None,
    ):
        """
        Initialize configuration.

        Args:
            charts: Charts to render
            report: Report output configuration (optional)
            logging: Logging configuration (optional)
        """
        self.charts = charts
        self.report = report or ReportConfig()
        self.logging = logging or LoggingConfig()

    def validate(self) -> None:
        """Validate all configuration sections."""
        if not self.charts:
            raise ValueError("At least one chart is required")
        names = [chart.name for chart in self.charts]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate chart names: {', '.join(duplicates)}")
        for chart in self.charts:
            chart.validate()
        self.report.validate()
        self.logging.validate()

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "report": asdict(self.report),
            "logging": asdict(self.logging),
            "charts": [asdict(chart) for chart in self.charts],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """
        Create Config from dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            Config instance

        Raises:
            ValueError: If required fields are missing or invalid
        """
        if not isinstance(data, dict):
            raise ValueError(f"Invalid configuration: expected a mapping, got {type(data).__name__}")

        charts_data = data.get("charts") or []
        if not isinstance(charts_data, list):
            raise ValueError("'charts' must be a list")

        try:
            charts = [ChartSpec(**chart) for chart in charts_data]
            report = ReportConfig(**data.get("report", {})) if "report" in data else None
            logging = LoggingConfig(**data.get("logging", {})) if "logging" in data else None
        except TypeError as e:
            raise ValueError(f"Invalid configuration: {e}") from e

        return cls(charts=charts, report=report, logging=logging)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If YAML is invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, 'r') as f:
            data = yaml.safe_load(f)

        if not data:
            raise ValueError(f"Empty configuration file: {path}")

        return cls.from_dict(data)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "Config":
        """
        Load configuration from JSON file.

        Args:
            path: Path to JSON configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If JSON is invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, 'r') as f:
            data = json.load(f)

        if not data:
            raise ValueError(f"Empty configuration file: {path}")

        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Config":
        """
        Load configuration from file (auto-detect YAML/JSON).

        Relative source paths are resolved against the file's directory.

        Args:
            path: Path to configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If file format is unsupported or invalid
        """
        path = Path(path)
        suffix = path.suffix.lower()

        if suffix in ['.yaml', '.yml']:
            config = cls.from_yaml(path)
        elif suffix == '.json':
            config = cls.from_json(path)
        else:
            raise ValueError(f"Unsupported configuration file format: {suffix}")

        base_dir = path.parent
        for chart in config.charts:
            chart.sources = [
                source if Path(source).is_absolute() else str(base_dir / source)
                for source in chart.sources
            ]
        return config

    def apply_env_overrides(self) -> None:
        """
        Apply environment variable overrides to configuration.

        Environment variables follow the pattern:
        PERF_CHARTS_<SECTION>_<KEY>=value

        Examples:
            PERF_CHARTS_REPORT_OUTPUT_DIR=/tmp/report
            PERF_CHARTS_REPORT_LIBRARY=c3
            PERF_CHARTS_LOGGING_LEVEL=DEBUG
        """
        # Report overrides
        if title := os.getenv("PERF_CHARTS_REPORT_TITLE"):
            self.report.title = title
        if output_dir := os.getenv("PERF_CHARTS_REPORT_OUTPUT_DIR"):
            self.report.output_dir = output_dir
        if library := os.getenv("PERF_CHARTS_REPORT_LIBRARY"):
            self.report.library = library.lower()
        if gridlines := os.getenv("PERF_CHARTS_REPORT_GRIDLINES"):
            self.report.gridlines = int(gridlines)
        if quick_view := os.getenv("PERF_CHARTS_REPORT_QUICK_VIEW"):
            self.report.quick_view = quick_view.lower() in ["true", "1", "yes"]
        if show_millis := os.getenv("PERF_CHARTS_REPORT_SHOW_MILLIS"):
            self.report.show_millis = show_millis.lower() in ["true", "1", "yes"]

        # Logging overrides
        if level := os.getenv("PERF_CHARTS_LOGGING_LEVEL"):
            self.logging.level = level.upper()
        if log_file := os.getenv("PERF_CHARTS_LOGGING_FILE"):
            self.logging.file = log_file

    def save_yaml(self, path: Union[str, Path]) -> None:
        """
        Save configuration to YAML file.

        Args:
            path: Path to save YAML file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def save_json(self, path: Union[str, Path]) -> None:
        """
        Save configuration to JSON file.

        Args:
            path: Path to save JSON file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
