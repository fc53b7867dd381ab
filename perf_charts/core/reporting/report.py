"""
Chart report generation.

Loads the CSV results of every configured chart, shapes them (column
selection, combination of several runs, warm-up correction, tooltip labels)
and writes an HTML report with a table of contents plus one quick-view page
per chart.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from jinja2 import Template, TemplateError

from ..axis import AxisType
from ..chart.options import ChartOptions
from ..chart.renderer import Chart, ChartRenderer, get_renderer
from ..data.csv_loader import load_csv
from ..data.table import ChartTable
from ..formatting import hours_to_datetime
from ..transform.legend import build_legend
from ..transform.warmup import correct_warm_up
from ...config import ChartSpec, Config, ReportConfig
from ...utils.logging import get_logger
from ...utils.validation import slugify, validate_path

logger = get_logger(__name__)

INDEX_TEMPLATE = '''<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ title|e }}</title>
    {{ head }}
    <style>
        body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; margin: 20px; color: #333; }
        h1 { color: #2c3e50; border-bottom: 2px solid #3498db; padding-bottom: 10px; }
        h2 { color: #34495e; margin-top: 30px; }
        .toc { display: flex; gap: 40px; }
        .toc ul { list-style: none; padding: 0; }
        .toc a { color: #3498db; text-decoration: none; }
        .chart { margin-bottom: 30px; }
        .footer { margin-top: 40px; color: #7f8c8d; font-size: 0.9em; }
    </style>
</head>
<body>
    <h1>{{ title|e }}</h1>
{%- if toc_left %}
    <h2>Table of Contents</h2>
    <div class="toc">
        <ul>
{%- for entry in toc_left %}
            <li><a href="#{{ entry.id }}">{{ entry.label|e }}</a></li>
{%- endfor %}
        </ul>
        <ul>
{%- for entry in toc_right %}
            <li><a href="#{{ entry.id }}">{{ entry.label|e }}</a></li>
{%- endfor %}
        </ul>
    </div>
{%- endif %}
{%- for group in groups %}
    <h2>Charts for group: {{ group.name|e }}</h2>
{%- if group.plain %}
    <h3>Plain results</h3>
{%- for entry in group.plain %}
    <h4 id="{{ entry.id }}">{{ entry.label|e }}</h4>
    {{ entry.div }}
{%- endfor %}
{%- endif %}
{%- if group.combined %}
    <h3>Combined results</h3>
{%- for entry in group.combined %}
    <h4 id="{{ entry.id }}">{{ entry.label|e }}</h4>
    {{ entry.div }}
{%- endfor %}
{%- endif %}
{%- endfor %}
    <div class="footer">Generated {{ generated }}</div>
    <script>
{{ script }}
    </script>
</body>
</html>
'''

QUICK_VIEW_TEMPLATE = '''<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>{{ title|e }}</title>
    {{ head }}
</head>
<body>
    {{ div }}
    <script>
{{ script }}
    </script>
</body>
</html>
'''


def load_chart_table(spec: ChartSpec) -> ChartTable:
    """Load the sources of a chart and keep its x column and selected columns.

    Each source is converted to the chart's axis and, unless disabled, has
    its own warm-up period corrected. With several sources, each one
    contributes the selected columns, renamed after the source file, and
    the tables are sorted and merged on the x-value.

    Raises:
        FileNotFoundError: If a source file is missing.
        ColumnNotFoundError: If a selected column is absent from a source.
    """
    axis_type = AxisType.from_name(spec.axis_type)
    combined_sources = len(spec.sources) > 1

    tables = []
    for source in spec.sources:
        table = load_csv(source).select(spec.columns, x_column=spec.x_column)
        rows = to_axis_rows(table.rows, axis_type)
        if spec.warmup_correction:
            rows = correct_warm_up(rows, axis_type)
        table = table.with_rows(rows)

        if combined_sources:
            label = Path(source).stem
            table = table.rename(
                [table.header[0]] + [f"{name} ({label})" for name in table.header[1:]]
            ).sorted_by_x()
        tables.append(table)

    combined = tables[0]
    for table in tables[1:]:
        combined = combined.combine_with(table)
    return combined


def to_axis_rows(rows: Sequence[Sequence[Any]], axis_type: AxisType, x_column: int = 0) -> List[List[Any]]:
    """Convert x-values to the representation of the axis.

    Date-time axes get datetimes anchored at the local epoch (the CSV loader
    yields fractional hours); other axes keep their numbers.
    """
    converted = [list(row) for row in rows]
    if axis_type is AxisType.DATE_TIME:
        for row in converted:
            value = row[x_column]
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                row[x_column] = hours_to_datetime(value)
    return converted


def prepare_chart(
    spec: ChartSpec,
    report: Optional[ReportConfig] = None,
    base_name: Optional[str] = None,
) -> Chart:
    """Run the data-shaping pipeline of one chart.

    Args:
        spec: Chart configuration.
        report: Report configuration providing gridlines and tick precision.
        base_name: Identifier used in HTML ids and file names.

    Returns:
        Chart ready to be rendered.
    """
    report = report or ReportConfig()
    log = get_logger(__name__, {"chart": spec.name})
    axis_type = AxisType.from_name(spec.axis_type)

    table = load_chart_table(spec)
    log.debug("Loaded %d rows with columns %s", len(table), table.header)

    selection = list(range(1, table.width))
    legend = build_legend(table.header, table.rows, selection, axis_type)

    options = ChartOptions(
        title=spec.name,
        x_title=spec.x_title,
        y_title=spec.y_title,
        axis_type=axis_type,
        height=spec.height,
        gridlines=report.gridlines,
        show_millis=report.show_millis,
    )

    return Chart(
        base_name=base_name or slugify(spec.name),
        name=spec.name,
        options=options,
        legend=legend,
        group=spec.group,
        combined=len(spec.sources) > 1,
    )


def unique_base_names(names: Sequence[str]) -> List[str]:
    """Slugify chart names, adding a numeric suffix to repeated slugs."""
    taken = set()
    result = []
    for name in names:
        slug = candidate = slugify(name)
        count = 1
        while candidate in taken:
            count += 1
            candidate = f"{slug}_{count}"
        taken.add(candidate)
        result.append(candidate)
    return result


class ReportWriter:
    """Writes the report index and the quick-view pages."""

    def __init__(
        self,
        target: Path,
        renderer: ChartRenderer,
        title: str = "Performance Test Report",
        quick_view: bool = True,
    ):
        self.target = Path(target)
        self.renderer = renderer
        self.title = title
        self.quick_view = quick_view

    @staticmethod
    def chart_label(chart: Chart) -> str:
        if chart.combined:
            return chart.name
        return f"{chart.name} (created: {chart.created:%Y-%m-%d %H:%M:%S})"

    def build_groups(self, charts: List[Chart]) -> List[Dict[str, Any]]:
        """Group charts in order of first appearance, plain charts before combined ones."""
        groups: Dict[str, Dict[str, Any]] = {}
        for chart in charts:
            group = groups.setdefault(chart.group, {"name": chart.group, "plain": [], "combined": []})
            entry = {
                "id": chart.base_name,
                "label": self.chart_label(chart),
                "div": self.renderer.render_div(chart),
            }
            group["combined" if chart.combined else "plain"].append(entry)
        return list(groups.values())

    @staticmethod
    def split_toc(groups: List[Dict[str, Any]]):
        """Split the table of contents into two columns, the left one taking the odd entry."""
        entries = [entry for group in groups for entry in group["plain"] + group["combined"]]
        half = len(entries) // 2 + len(entries) % 2
        return entries[:half], entries[half:]

    def render_index(self, charts: List[Chart]) -> str:
        groups = self.build_groups(charts)
        toc_left, toc_right = self.split_toc(groups)
        try:
            return Template(INDEX_TEMPLATE).render(
                title=self.title,
                head=self.renderer.render_head(),
                toc_left=toc_left,
                toc_right=toc_right,
                groups=groups,
                script=self.renderer.render_script(charts),
                generated=datetime.now().strftime('%Y-%m-%d %H:%M:%S'),
            )
        except TemplateError as e:
            raise ValueError(f"Failed to render report index: {e}") from e

    def render_quick_view(self, chart: Chart) -> str:
        try:
            return Template(QUICK_VIEW_TEMPLATE).render(
                title=chart.name,
                head=self.renderer.render_head(),
                div=self.renderer.render_div(chart),
                script=self.renderer.render_script([chart]),
            )
        except TemplateError as e:
            raise ValueError(f"Failed to render quick view of {chart.name}: {e}") from e

    def write(self, charts: List[Chart]) -> Path:
        """Write index.html and, if enabled, data/<chart>.html.

        Returns:
            Path of the index file.
        """
        self.target.mkdir(parents=True, exist_ok=True)

        index_file = self.target / "index.html"
        index_file.write_text(self.render_index(charts), encoding='utf-8')
        logger.info("Report index written to %s", index_file)

        if self.quick_view:
            data_dir = self.target / "data"
            data_dir.mkdir(parents=True, exist_ok=True)
            for chart in charts:
                quick_view_file = data_dir / f"{chart.base_name}.html"
                quick_view_file.write_text(self.render_quick_view(chart), encoding='utf-8')
                logger.debug("Quick view written to %s", quick_view_file)

        return index_file


class ChartReport:
    """Renders every chart of a configuration into one report."""

    def __init__(self, config: Config):
        self.config = config
        self.renderer = get_renderer(config.report.library)

    def build(self) -> List[Chart]:
        """Prepare all configured charts."""
        specs = self.config.charts
        base_names = unique_base_names([spec.name for spec in specs])
        charts = []
        for spec, base_name in zip(specs, base_names):
            logger.info("Preparing chart '%s' from %s", spec.name, ", ".join(spec.sources))
            charts.append(prepare_chart(spec, self.config.report, base_name))
        return charts

    def write(self, output_dir: Optional[str] = None) -> Path:
        """Build the charts and write the report.

        Args:
            output_dir: Overrides the configured output directory.

        Returns:
            Path of the index file.
        """
        target = validate_path(
            output_dir or self.config.report.output_dir,
            "output_dir",
            must_be_dir=True,
            create_if_missing=True,
        )
        writer = ReportWriter(
            target=target,
            renderer=self.renderer,
            title=self.config.report.title,
            quick_view=self.config.report.quick_view,
        )
        return writer.write(self.build())
