"""
JavaScript renderers for the supported charting libraries.

A renderer turns a prepared chart into the <div> placeholder and the script
that draws it. Two libraries are supported:
- google: Google Charts line chart fed with DataTable JSON, including an
  HTML tooltip column built from the legend labels
- c3: C3.js line chart fed with plain rows, ticks formatted in the browser
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Sequence

from jinja2 import Template, TemplateError

from .options import ChartOptions, google_date_literal
from ..axis import AxisType
from ..formatting import datetime_to_millis, format_axis_value, hours_to_datetime
from ..transform.legend import LegendData


@dataclass
class Chart:
    """A chart ready to be rendered."""

    base_name: str
    name: str
    options: ChartOptions
    legend: LegendData
    group: str = "default"
    combined: bool = False
    created: datetime = field(default_factory=datetime.now)

    @property
    def div_id(self) -> str:
        return f"chart_{self.base_name}_div"


def _series_type(values: Sequence[Any]) -> str:
    for value in values:
        if value is None:
            continue
        if isinstance(value, bool):
            return "boolean"
        if isinstance(value, (int, float)):
            return "number"
        return "string"
    return "number"


class ChartRenderer:
    """Base class of the library-specific renderers."""

    LIBRARY = ""

    HEAD_TEMPLATE = ""

    CHART_TEMPLATE = ""

    LOADER_TEMPLATE = ""

    DIV_TEMPLATE = '<div id="{{ div_id }}" class="chart"></div>'

    def _render(self, source: str, **context) -> str:
        try:
            return Template(source).render(**context)
        except TemplateError as e:
            raise ValueError(f"Failed to render {self.LIBRARY} chart template: {e}") from e

    def render_head(self) -> str:
        """Script and stylesheet imports of the charting library."""
        return self._render(self.HEAD_TEMPLATE)

    def render_div(self, chart: Chart) -> str:
        return self._render(self.DIV_TEMPLATE, div_id=chart.div_id)

    def render_chart(self, chart: Chart) -> str:
        """JavaScript function drawing a single chart."""
        return self._render(self.CHART_TEMPLATE, **self.chart_context(chart))

    def render_loader(self, charts: List[Chart]) -> str:
        """JavaScript drawing all the given charts once the library is ready."""
        return self._render(self.LOADER_TEMPLATE, charts=charts)

    def render_script(self, charts: List[Chart]) -> str:
        parts = [self.render_chart(chart) for chart in charts]
        parts.append(self.render_loader(charts))
        return "\n".join(parts)

    def chart_context(self, chart: Chart) -> Dict[str, Any]:
        raise NotImplementedError


class GoogleChartRenderer(ChartRenderer):
    """Renders charts with Google Charts."""

    LIBRARY = "google"

    HEAD_TEMPLATE = '<script src="https://www.gstatic.com/charts/loader.js"></script>'

    CHART_TEMPLATE = '''
function draw_{{ base_name }}() {
    var data = new google.visualization.DataTable({{ table|tojson }});
    var options = {{ options|tojson }};
{%- if date_axis %}
    options.hAxis.minValue = new {{ options.hAxis.minValue }};
{%- endif %}
    var chart = new google.visualization.LineChart(document.getElementById('{{ div_id }}'));
    chart.draw(data, options);
}
'''

    LOADER_TEMPLATE = '''
function drawCharts() {
{%- for chart in charts %}
    draw_{{ chart.base_name }}();
{%- endfor %}
}

google.charts.load('current', {packages: ['corechart']}).then(drawCharts);
'''

    def x_cell(self, value, axis_type: AxisType) -> Dict[str, Any]:
        if value is None:
            return {"v": None}

        formatted = format_axis_value(value, axis_type)
        if axis_type is AxisType.DATE_TIME:
            if not isinstance(value, datetime):
                value = hours_to_datetime(value)
            return {"v": google_date_literal(value), "f": formatted}
        if axis_type is AxisType.PERCENTAGE:
            # the "#%" tick format multiplies by 100
            return {"v": value / 100, "f": formatted}
        return {"v": value, "f": formatted}

    def data_table(self, chart: Chart) -> Dict[str, Any]:
        """Google DataTable JSON with the x column, the series and the tooltip column."""
        legend = chart.legend
        axis_type = chart.options.axis_type
        series = legend.series

        cols = [{"id": "x", "label": legend.header[legend.x_column], "type": axis_type.google_type}]
        for index in series:
            cols.append({
                "label": legend.header[index],
                "type": _series_type(row[index] for row in legend.rows),
            })
        cols.append({"type": "string", "role": "tooltip", "p": {"html": True}})

        rows = []
        for row in legend.rows:
            cells = [self.x_cell(row[legend.x_column], axis_type)]
            cells.extend({"v": row[index]} for index in series)
            cells.append({"v": row[legend.label_column]})
            rows.append({"c": cells})

        return {"cols": cols, "rows": rows}

    def chart_context(self, chart: Chart) -> Dict[str, Any]:
        return {
            "base_name": chart.base_name,
            "div_id": chart.div_id,
            "table": self.data_table(chart),
            "options": chart.options.to_google(),
            "date_axis": chart.options.axis_type is AxisType.DATE_TIME,
        }


class C3ChartRenderer(ChartRenderer):
    """Renders charts with C3.js."""

    LIBRARY = "c3"

    HEAD_TEMPLATE = '''<link href="https://cdn.jsdelivr.net/npm/c3@0.7.20/c3.min.css" rel="stylesheet">
<script src="https://cdn.jsdelivr.net/npm/d3@5.16.0/dist/d3.min.js"></script>
<script src="https://cdn.jsdelivr.net/npm/c3@0.7.20/c3.min.js"></script>'''

    CHART_TEMPLATE = '''
function draw_{{ base_name }}() {
    var options = {{ options|tojson }};
    options.bindto = '#{{ div_id }}';
    options.data = {x: {{ x_key|tojson }}, rows: {{ rows|tojson }}};
    options.axis.x.tick.format = {{ tick_format }};
    options.tooltip = {format: {title: {{ tick_format }}}};
    c3.generate(options);
}
'''

    LOADER_TEMPLATE = '''
function pad(value, width) {
    var text = '' + value;
    while (text.length < width) {
        text = '0' + text;
    }
    return text;
}

function ms2hms(ms) {
    var sign = ms < 0 ? '-' : '';
    var rest = Math.floor(Math.abs(ms));
    var hours = Math.floor(rest / 3600000);
    rest -= hours * 3600000;
    var minutes = Math.floor(rest / 60000);
    rest -= minutes * 60000;
    var seconds = Math.floor(rest / 1000);
    var millis = rest - seconds * 1000;
    return sign + pad(hours, 2) + ':' + pad(minutes, 2) + ':' + pad(seconds, 2) + '.' + pad(millis, 3);
}

function drawCharts() {
{%- for chart in charts %}
    draw_{{ chart.base_name }}();
{%- endfor %}
}

drawCharts();
'''

    TICK_FORMATS = {
        AxisType.DATE_TIME: "ms2hms",
        AxisType.LINEAR_NUMBER: "function(x) { return x; }",
        AxisType.PERCENTAGE: "function(x) { return '' + x + '%'; }",
    }

    def x_value(self, value, axis_type: AxisType):
        if value is not None and axis_type is AxisType.DATE_TIME:
            if not isinstance(value, datetime):
                value = hours_to_datetime(value)
            return datetime_to_millis(value)
        return value

    def data_rows(self, chart: Chart) -> List[List[Any]]:
        """Header row followed by data rows, tooltip labels left out."""
        legend = chart.legend
        axis_type = chart.options.axis_type
        series = legend.series

        rows = [[legend.header[legend.x_column]] + [legend.header[i] for i in series]]
        for row in legend.rows:
            rows.append(
                [self.x_value(row[legend.x_column], axis_type)] + [row[i] for i in series]
            )
        return rows

    def chart_context(self, chart: Chart) -> Dict[str, Any]:
        legend = chart.legend
        return {
            "base_name": chart.base_name,
            "div_id": chart.div_id,
            "options": chart.options.to_c3(),
            "x_key": legend.header[legend.x_column],
            "rows": self.data_rows(chart),
            "tick_format": self.TICK_FORMATS[chart.options.axis_type],
        }


RENDERERS = {
    GoogleChartRenderer.LIBRARY: GoogleChartRenderer,
    C3ChartRenderer.LIBRARY: C3ChartRenderer,
}


def get_renderer(library: str) -> ChartRenderer:
    """Create the renderer of a charting library.

    Raises:
        ValueError: If the library is not supported.
    """
    try:
        return RENDERERS[library.lower()]()
    except KeyError:
        raise ValueError(
            f"Invalid chart library: {library}. Must be one of {sorted(RENDERERS)}"
        ) from None
