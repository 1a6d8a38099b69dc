import logging
from dataclasses import dataclass, field
from xml.etree import ElementTree as ET

from pptx2json.data_types import ChartPoint, ChartSeries
from pptx2json.namespaces import C_NS, find, findall, get_attr, is_on, local_name

logger = logging.getLogger(__name__)

CHART_TYPES = frozenset(
    f"{C_NS}{name}"
    for name in (
        "lineChart",
        "line3DChart",
        "barChart",
        "bar3DChart",
        "pieChart",
        "pie3DChart",
        "doughnutChart",
        "areaChart",
        "area3DChart",
        "scatterChart",
        "bubbleChart",
        "radarChart",
        "surfaceChart",
        "surface3DChart",
        "stockChart",
    )
)


@dataclass
class ChartInfo:
    chart_type: str
    data: list[ChartSeries] = field(default_factory=list)
    marker: bool | None = None
    bar_dir: str | None = None
    hole_size: int | None = None
    grouping: str | None = None
    style: str | None = None


def _cached_points(ref: ET.Element | None) -> dict[str, str]:
    """Read ``c:pt`` values of a str/num cache keyed by their idx."""
    points = {}
    for cache in ("c:strRef/c:strCache", "c:numRef/c:numCache", "c:strLit", "c:numLit"):
        for pt in findall(ref, f"{cache}/c:pt"):
            value = find(pt, "c:v")
            points[pt.get("idx", "0")] = value.text if value is not None else ""
        if points:
            break
    return points


def _number(text: str | None) -> float:
    try:
        return float(text or 0)
    except ValueError:
        return 0


def _series_key(ser: ET.Element, position: int) -> str:
    key = find(ser, "c:tx/c:strRef/c:strCache/c:pt/c:v")
    if key is None:
        key = find(ser, "c:tx/c:v")
    if key is not None and key.text:
        return key.text
    return f"Series {position + 1}"


def _category_series(ser: ET.Element, position: int) -> ChartSeries:
    labels = _cached_points(find(ser, "c:cat"))
    values = _cached_points(find(ser, "c:val"))
    return ChartSeries(
        key=_series_key(ser, position),
        values=[
            ChartPoint(x=labels.get(idx, idx), y=_number(value))
            for idx, value in sorted(values.items(), key=lambda item: int(item[0]))
        ],
        xlabels=labels,
    )


def _scatter_series(ser: ET.Element, position: int) -> ChartSeries:
    xs = _cached_points(find(ser, "c:xVal"))
    ys = _cached_points(find(ser, "c:yVal"))
    return ChartSeries(
        key=_series_key(ser, position),
        values=[
            ChartPoint(x=xs.get(idx, idx), y=_number(value))
            for idx, value in sorted(ys.items(), key=lambda item: int(item[0]))
        ],
        xlabels=xs,
    )


def extract_chart(plot_area: ET.Element | None) -> ChartInfo | None:
    """
    Read the first chart of a ``c:plotArea``.

    Returns:
        The chart type (the chart element's local name), its series and the
        type-specific options, or None if the plot area holds no known chart.
    """
    if plot_area is None:
        return None
    chart = next((child for child in plot_area if child.tag in CHART_TYPES), None)
    if chart is None:
        logger.debug("Plot area contains no supported chart type")
        return None

    chart_type = local_name(chart.tag)
    if chart_type in ("scatterChart", "bubbleChart"):
        read_series = _scatter_series
    else:
        read_series = _category_series
    info = ChartInfo(
        chart_type=chart_type,
        data=[read_series(ser, i) for i, ser in enumerate(findall(chart, "c:ser"))],
    )

    info.bar_dir = get_attr(chart, "c:barDir", "val")
    info.grouping = get_attr(chart, "c:grouping", "val")
    info.style = get_attr(chart, "c:radarStyle", "val") or get_attr(
        chart, "c:scatterStyle", "val"
    )
    hole_size = get_attr(chart, "c:holeSize", "val")
    if hole_size is not None:
        info.hole_size = int(hole_size)
    marker = get_attr(chart, "c:marker", "val")
    if marker is not None:
        info.marker = is_on(marker)

    logger.debug(f"Extracted {chart_type} with {len(info.data)} series")
    return info
