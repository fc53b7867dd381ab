"""Command-line interface for perf-charts."""

import sys
from pathlib import Path

import click

from .config import ChartSpec, Config, ReportConfig, VALID_LIBRARIES
from .core.axis import AxisType
from .core.errors import ChartDataError
from .core.formatting import format_millis
from .core.reporting.report import ChartReport
from .utils.logging import add_file_handler, enable_debug_logging, set_log_level, setup_logging
from .utils.validation import ValidationError, parse_column_list

AXIS_CHOICES = [axis.value for axis in AxisType]


@click.group()
@click.version_option(package_name="perf-charts")
@click.option("--config", type=click.Path(exists=True), help="Path to report config file (YAML/JSON)")
@click.option("--verbose", is_flag=True, help="Enable verbose output")
@click.option("--log-file", type=click.Path(), help="Path to log file")
@click.pass_context
def cli(ctx, config, verbose, log_file):
    """perf-charts - HTML chart reports from performance test CSV results."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose
    ctx.obj["log_file"] = log_file
    setup_logging(level="INFO", log_file=log_file)
    if verbose:
        enable_debug_logging()


def _fail(ctx, error):
    click.echo(f"\nError: {error}", err=True)
    if ctx.obj.get("verbose"):
        import traceback
        traceback.print_exc()
    sys.exit(1)


@cli.command()
@click.argument("sources", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--columns", required=True, help="Comma-separated columns to plot, by index or header name (e.g., 2,3 or Result)")
@click.option("--x-column", default="0", help="Column holding the x-values, by index or header name")
@click.option("--axis-type", type=click.Choice(AXIS_CHOICES), default="time", help="Type of the x-axis")
@click.option("--title", help="Chart title (default: first CSV file name)")
@click.option("--x-title", default="Time", help="Title of the x-axis")
@click.option("--y-title", default="", help="Title of the y-axis")
@click.option("--group", default="default", help="Group heading of the chart in the report")
@click.option("--height", type=int, default=400, help="Chart height in pixels")
@click.option("--library", type=click.Choice(VALID_LIBRARIES), default="google", help="Charting library")
@click.option("--gridlines", type=int, default=10, help="Number of gridlines on each axis")
@click.option("--show-millis", is_flag=True, help="Show milliseconds on time axis ticks")
@click.option("--no-warmup-correction", is_flag=True, help="Keep x-values of the warm-up period unchanged")
@click.option("--no-quick-view", is_flag=True, help="Skip writing the per-chart quick-view page")
@click.option("--output-dir", default="./chart-report", help="Report output directory")
@click.pass_context
def render(ctx, sources, columns, x_column, axis_type, title, x_title, y_title, group, height,
           library, gridlines, show_millis, no_warmup_correction, no_quick_view, output_dir):
    """Render a chart from one or more CSV result files.

    Several files are combined into one chart on their x-values.
    """
    try:
        chart = ChartSpec(
            name=title or Path(sources[0]).stem,
            sources=list(sources),
            columns=parse_column_list(columns),
            axis_type=axis_type,
            x_title=x_title,
            y_title=y_title,
            group=group,
            height=height,
            x_column=parse_column_list(x_column)[0],
            warmup_correction=not no_warmup_correction,
        )
        report = ReportConfig(
            title=chart.name,
            output_dir=output_dir,
            library=library,
            quick_view=not no_quick_view,
            gridlines=gridlines,
            show_millis=show_millis,
        )
        config = Config(charts=[chart], report=report)
        config.validate()

        index_file = ChartReport(config).write()
    except (ChartDataError, ValueError, ValidationError, FileNotFoundError) as e:
        _fail(ctx, e)

    click.echo(f"✓ Chart report generated: {index_file}")


@cli.command()
@click.option("--output-dir", help="Report output directory (overrides the config file)")
@click.pass_context
def report(ctx, output_dir):
    """Render every chart of the config file given with --config."""
    config_path = ctx.obj.get("config")
    if not config_path:
        click.echo("Error: --config is required for the report command", err=True)
        sys.exit(1)

    try:
        config = Config.from_file(config_path)
        config.apply_env_overrides()
        config.validate()

        if not ctx.obj.get("verbose"):
            set_log_level(config.logging.level)
        if config.logging.file and not ctx.obj.get("log_file"):
            add_file_handler(config.logging.file)

        click.echo(f"Generating report '{config.report.title}' with {len(config.charts)} chart(s)...")
        index_file = ChartReport(config).write(output_dir)
    except (ChartDataError, ValueError, ValidationError, FileNotFoundError) as e:
        _fail(ctx, e)

    click.echo(f"✓ Chart report generated: {index_file}")


@cli.command("format-time")
@click.argument("millis", type=float)
def format_time(millis):
    """Print a duration in milliseconds as HH:MM:SS.mmm."""
    click.echo(format_millis(millis))
