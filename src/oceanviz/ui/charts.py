"""
Chart Views

Temperature and calcite line charts plus the Year / Temp / Calc readouts.

A redraw rebuilds the curve and recomputes its axis limits from the newly
filtered series. A year update only sends the new marker position through the
chart's Pipe stream; the curve and its limits are left untouched.
"""

import logging
from typing import Optional, Tuple

import panel as pn
import holoviews as hv

from oceanviz.config import ANNOTATION_YEAR_FIRST, ANNOTATION_YEAR_LAST
from oceanviz.core.resolver import Resolver
from oceanviz.plotting.base import (
    series_limits,
    create_series_curve,
    create_marker,
    create_placeholder_chart,
    compose_chart,
)
from oceanviz.state import SelectionState
from oceanviz.utils.formatting import (
    level_depth_m,
    format_year_readout,
    format_temperature_readout,
    format_calcite_readout,
    build_temperature_annotation,
    build_calcite_annotation,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Base Chart View
# =============================================================================

class SeriesChartView:
    """
    A line chart with a year marker.

    Parameters
    ----------
    chart_pane : pn.pane.HoloViews
        Pane the chart is rendered into
    annotation_pane : pn.pane.HTML
        Pane for the annotation text under the chart
    annotation_years : tuple of int
        (first, last) years used for the change annotation

    Attributes
    ----------
    marker_stream : hv.streams.Pipe or None
        Stream feeding the marker, replaced on every redraw
    marker_point : tuple or None
        Last (year, value) sent to the marker
    xlim, ylim : tuple or None
        Axis limits of the current chart
    """

    ydim = 'value'
    ylabel = ''
    color = 'black'
    yformatter: Optional[str] = None

    def __init__(
        self,
        chart_pane: pn.pane.HoloViews,
        annotation_pane: pn.pane.HTML,
        annotation_years: Tuple[int, int] = (ANNOTATION_YEAR_FIRST, ANNOTATION_YEAR_LAST)
    ):
        self.chart_pane = chart_pane
        self.annotation_pane = annotation_pane
        self.annotation_years = annotation_years

        self.marker_stream: Optional[hv.streams.Pipe] = None
        self.marker_point: Optional[Tuple[int, float]] = None
        self.xlim = None
        self.ylim = None

    def _render(self, records, title: str, annotation: str) -> None:
        """Rebuild the curve, its limits and a fresh marker stream."""
        if not records:
            self._render_empty(title)
            return

        xs = [r.year for r in records]
        ys = [r.value for r in records]
        self.xlim, self.ylim = series_limits(xs, ys)

        curve = create_series_curve(
            xs, ys,
            ydim=self.ydim,
            ylabel=self.ylabel,
            title=title,
            color=self.color,
            xlim=self.xlim,
            ylim=self.ylim,
            yformatter=self.yformatter
        )

        xlim, ylim, ydim = self.xlim, self.ylim, self.ydim

        def marker(data):
            return create_marker(data, ydim, xlim=xlim, ylim=ylim)

        self.marker_point = None
        self.marker_stream = hv.streams.Pipe(data=None)
        marker_dmap = hv.DynamicMap(marker, streams=[self.marker_stream])

        self.chart_pane.object = compose_chart(curve, [marker_dmap])
        self.annotation_pane.object = annotation

    def _render_empty(self, title: str) -> None:
        self.marker_stream = None
        self.marker_point = None
        self.xlim = self.ylim = None
        self.chart_pane.object = create_placeholder_chart(title, 'No data for this selection')
        self.annotation_pane.object = ""

    def _move_marker(self, year: Optional[int], value: Optional[float]) -> None:
        """Send a marker position; missing values leave the marker where it is."""
        # A year without a value keeps the marker on the last year that had one
        if self.marker_stream is None or year is None or value is None:
            return
        self.marker_point = (year, value)
        self.marker_stream.send(self.marker_point)
        logger.debug(f"{type(self).__name__} marker at {self.marker_point}")


# =============================================================================
# Temperature Chart
# =============================================================================

class TemperatureChartView(SeriesChartView):
    """Regional mean sea-surface temperature chart."""

    ydim = 'temperature_K'
    ylabel = 'Sea Surface Temperature in Kelvin (K)'
    color = '#d03838'

    def redraw_temperature(self, state: SelectionState, resolver: Resolver) -> None:
        region = state.current_region
        title = (
            "A Century and a Half of Warmer Seas\n"
            f"Simulated {region} Ocean Mean Annual Sea Surface Temperature"
        )
        year_first, year_last = self.annotation_years
        summary = resolver.temperature_summary(region, year_first, year_last)

        self._render(
            resolver.temperature_series(region),
            title,
            build_temperature_annotation(region, summary, year_first)
        )

    def update_year(self, state: SelectionState, resolver: Resolver) -> None:
        year = state.current_year
        self._move_marker(year, resolver.temperature_at(state.current_region, year))


# =============================================================================
# Calcite Chart
# =============================================================================

class CalciteChartView(SeriesChartView):
    """Regional calcite concentration chart at the selected level."""

    ydim = 'calc'
    ylabel = 'Calcite concentration (mol m-3)'
    color = '#3366cc'
    yformatter = '%.1e'

    def redraw_calcite(self, state: SelectionState, resolver: Resolver) -> None:
        region = state.current_region
        level = state.current_level
        title = (
            "The Sea's Barrier is Weakening\n"
            f"Simulated {region} Ocean Calcite Concentration at Level {level} "
            f"({level_depth_m(level)} m)"
        )
        year_first, year_last = self.annotation_years
        summary = resolver.calcite_summary(region, level, year_first, year_last)

        self._render(
            resolver.calcite_series(region, level),
            title,
            build_calcite_annotation(region, level, summary, year_first)
        )

    def update_year(self, state: SelectionState, resolver: Resolver) -> None:
        year = state.current_year
        self._move_marker(
            year,
            resolver.calcite_at(state.current_region, state.current_level, year)
        )


# =============================================================================
# Readouts
# =============================================================================

class ReadoutView:
    """
    Year / Temp / Calc readouts for the selected year.

    Missing values render as the placeholder.
    """

    def __init__(self, readout_pane: pn.pane.HTML):
        self.readout_pane = readout_pane
        self.values: Optional[Tuple[str, str, str]] = None

    def update_year(self, state: SelectionState, resolver: Resolver) -> None:
        region, level, year = state.as_tuple()

        self.values = (
            format_year_readout(year),
            format_temperature_readout(resolver.temperature_at(region, year)),
            format_calcite_readout(resolver.calcite_at(region, level, year)),
        )
        year_txt, temp_txt, calc_txt = self.values

        self.readout_pane.object = f"""
<div class="stats-row" role="group" aria-live="polite" aria-label="Selected year, temperature, and calcite concentration">
  <output class="pill stat"><span class="label">Year</span> <span class="val">{year_txt}</span></output>
  <output class="pill stat"><span class="label">Temp</span> <span class="val">{temp_txt}</span></output>
  <output class="pill stat"><span class="label">Calc</span> <span class="val">{calc_txt}</span></output>
</div>
"""
