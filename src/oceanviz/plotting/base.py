"""
Core Plotting Module

This module provides the HoloViews element factories for OceanViz:
- SST map rendering with Datashader rasterization and discrete colour bins
- Region box and label overlays for the map
- Line charts with fixed axis limits and a movable year marker
"""

import logging
from typing import Optional, Tuple, List, Sequence

import datashader as ds
import holoviews as hv
import holoviews.operation.datashader as hd

from oceanviz.config import MAP_WIDTH, MAP_HEIGHT, CHART_WIDTH, CHART_HEIGHT
from oceanviz.core.data_loader import GridPoint
from oceanviz.plotting.colormaps import get_bin_palette
from oceanviz.regions import REGIONS

logger = logging.getLogger(__name__)


# =============================================================================
# Map
# =============================================================================

def create_sst_map(
    grid: Sequence[GridPoint],
    edges: Sequence[float],
    title: str = 'Sea Surface Temperature (K)',
    frame_width: int = MAP_WIDTH,
    frame_height: int = MAP_HEIGHT,
    dynamic: bool = True
) -> hv.DynamicMap:
    """
    Create the mean SST map with Datashader rasterization.

    Grid points are aggregated by mean value and coloured with one palette
    colour per quantile bin.

    Parameters
    ----------
    grid : sequence of GridPoint
        Map grid points
    edges : sequence of float
        Quantile bin edges from quantile_edges()
    title : str
        Colorbar title
    frame_width, frame_height : int
        Plot size in pixels
    dynamic : bool, default=True
        Use dynamic rasterization (recomputes on zoom)

    Returns
    -------
    hv.DynamicMap
        Rasterized map ready for display

    Examples
    --------
    >>> edges = quantile_edges([p.value for p in grid])
    >>> sst_map = create_sst_map(grid, edges)
    """
    points = hv.Points(
        [(p.lon, p.lat, p.value) for p in grid],
        kdims=[hv.Dimension('lon', label='Longitude (°)'), hv.Dimension('lat', label='Latitude (°)')],
        vdims=[hv.Dimension('value', label=title)]
    )

    opts = dict(
        colorbar=True,
        frame_width=frame_width,
        frame_height=frame_height,
        xlim=(-180, 180),
        ylim=(-90, 90),
        tools=['hover'],
        toolbar='below',
    )

    if len(edges) >= 2:
        n_bins = len(edges) - 1
        opts.update(
            cmap=get_bin_palette(n_bins),
            color_levels=list(edges),
            clim=(edges[0], edges[-1]),
        )

    img = hd.rasterize(points, aggregator=ds.mean('value'), dynamic=dynamic).opts(**opts)

    logger.debug(f"Created SST map from {len(grid)} grid points")
    return img


def create_region_boxes() -> hv.Rectangles:
    """
    Create transparent, hoverable rectangles for the clickable regions.

    Returns
    -------
    hv.Rectangles
        One rectangle per region box with a 'region' value dimension
    """
    rects = [
        (r.lon_range[0], r.lat_range[0], r.lon_range[1], r.lat_range[1], r.name)
        for r in REGIONS
    ]
    return hv.Rectangles(rects, vdims=['region']).opts(
        fill_alpha=0.0,
        hover_fill_color='#ffd000',
        hover_fill_alpha=0.2,
        line_alpha=0.0,
        tools=['tap', 'hover'],
    )


def create_region_labels() -> hv.Labels:
    """Create one bold label per region box at the box centre."""
    labels = []
    for region in REGIONS:
        x, y = region.center
        # Southern label sits slightly lower inside its thin box
        if region.name == 'Southern':
            y -= 4
        labels.append((x, y, region.name))

    return hv.Labels(labels, kdims=['lon', 'lat'], vdims='region').opts(
        text_font_size='14pt',
        text_font_style='bold',
        text_color='black',
    )


# =============================================================================
# Line Charts
# =============================================================================

def series_limits(
    xs: Sequence[float],
    ys: Sequence[float],
    pad: float = 0.05
) -> Tuple[Optional[Tuple[float, float]], Optional[Tuple[float, float]]]:
    """
    Compute the axis limits of a series.

    The x range is the year extent; the y range is the value extent padded by
    ``pad`` of its span (or of the value itself for a flat series).

    Returns
    -------
    tuple
        (xlim, ylim); (None, None) for an empty series

    Examples
    --------
    >>> series_limits([1850, 2014], [18.0, 19.0])
    ((1850, 2014), (17.95, 19.05))
    """
    if not xs or not ys:
        return None, None

    xlim = (min(xs), max(xs))
    y0, y1 = min(ys), max(ys)
    span = (y1 - y0) or abs(y0) or 1.0
    ylim = (y0 - span * pad, y1 + span * pad)
    return xlim, ylim


def create_series_curve(
    xs: Sequence[float],
    ys: Sequence[float],
    ydim: str,
    ylabel: str,
    title: str,
    color: str,
    xlim: Optional[Tuple[float, float]] = None,
    ylim: Optional[Tuple[float, float]] = None,
    yformatter: Optional[str] = None,
    frame_width: int = CHART_WIDTH,
    frame_height: int = CHART_HEIGHT
) -> hv.Curve:
    """
    Create a year/value line chart with fixed axis limits.

    Parameters
    ----------
    xs, ys : sequence of float
        Years and values, sorted by year
    ydim : str
        Value dimension name
    ylabel : str
        Value axis label
    title : str
        Chart title
    color : str
        Line colour
    xlim, ylim : tuple of float, optional
        Axis limits (from series_limits)
    yformatter : str, optional
        Bokeh printf-style tick format for the value axis

    Returns
    -------
    hv.Curve
        The line chart
    """
    curve = hv.Curve(
        (list(xs), list(ys)),
        kdims=[hv.Dimension('year', label='Year')],
        vdims=[hv.Dimension(ydim, label=ylabel)]
    )

    opts = dict(
        color=color,
        line_width=2,
        title=title,
        frame_width=frame_width,
        frame_height=frame_height,
        xformatter='%d',
        framewise=False,
        tools=['hover'],
        toolbar='below',
    )
    if xlim is not None:
        opts['xlim'] = xlim
    if ylim is not None:
        opts['ylim'] = ylim
    if yformatter:
        opts['yformatter'] = yformatter

    return curve.opts(**opts)


def create_marker(
    point: Optional[Tuple[float, float]],
    ydim: str,
    xlim: Optional[Tuple[float, float]] = None,
    ylim: Optional[Tuple[float, float]] = None
) -> hv.Points:
    """
    Create the year marker.

    Parameters
    ----------
    point : tuple of float or None
        (year, value); None renders an empty marker layer
    ydim : str
        Value dimension name, shared with the curve
    xlim, ylim : tuple of float, optional
        Axis limits of the chart, so the marker never rescales it
    """
    data = [point] if point is not None else []
    marker = hv.Points(data, kdims=['year', ydim]).opts(
        color='black',
        size=10,
        framewise=False,
    )
    if xlim is not None and ylim is not None:
        marker = marker.redim.range(year=xlim, **{ydim: ylim})
    return marker


def create_placeholder_chart(title: str, message: str) -> hv.Text:
    """Create an empty chart carrying a message (no data for the selection)."""
    return hv.Text(0.5, 0.5, message).opts(
        title=title,
        xaxis=None,
        yaxis=None,
        frame_width=CHART_WIDTH,
        frame_height=CHART_HEIGHT // 2,
        text_font_size='12pt',
        toolbar=None,
    )


def compose_chart(curve: hv.Element, overlays: List[Optional[hv.Element]]) -> hv.Element:
    """Overlay elements on a chart in order, skipping None."""
    final_plot = curve
    for overlay in overlays:
        if overlay is not None:
            final_plot = final_plot * overlay
    return final_plot
