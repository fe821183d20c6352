"""
Interactive Region Map Selector

This module provides the RegionMapSelector class: the SST map with clickable
region boxes that drives region selection.
"""

import logging
from typing import Callable, List, Optional

import panel as pn
import holoviews as hv

from oceanviz.config import MAP_BIN_COUNT
from oceanviz.core.resolver import Resolver
from oceanviz.plotting.base import create_sst_map, create_region_boxes, create_region_labels
from oceanviz.plotting.colormaps import quantile_edges, bin_counts, get_bin_palette
from oceanviz.regions import region_at

logger = logging.getLogger(__name__)


# =============================================================================
# Region Map Selector Class
# =============================================================================

class RegionMapSelector:
    """
    Interactive map for selecting an ocean region.

    This widget displays the mean SST map and lets users click inside a
    region box to select that region. The hover highlight on the boxes comes
    from the rectangle options in plotting.base.create_region_boxes.

    The map is drawn once, when the datasets are loaded. Region selection
    never redraws it.

    Attributes
    ----------
    map_plot : pn.pane.HoloViews
        HoloViews pane displaying the map
    info_text : pn.pane.Markdown
        Markdown pane showing the legend bins and usage instructions
    tap_stream : hv.streams.Tap
        Bokeh tap stream for capturing click events
    edges : list of float
        Quantile bin edges of the map colours
    counts : list of int
        Number of grid points in each colour bin
    on_region : callable
        Called with the region name on a click inside a box

    Parameters
    ----------
    on_region : callable, optional
        Region selection callback; can also be assigned later
    n_bins : int, default=5
        Number of quantile colour bins

    Examples
    --------
    >>> selector = RegionMapSelector(on_region=print)
    >>> selector.render_map(resolver)
    >>> panel_layout = selector.get_panel()
    """

    def __init__(
        self,
        on_region: Optional[Callable[[str], None]] = None,
        n_bins: int = MAP_BIN_COUNT
    ):
        self.on_region = on_region
        self.n_bins = n_bins

        # UI components
        self.map_plot = pn.pane.HoloViews(
            object=None,
            sizing_mode='fixed'
        )
        self.info_text = pn.pane.Markdown(
            "**Ocean Map**: waiting for data."
        )

        # Streams (initialized in render_map)
        self.tap_stream: Optional[hv.streams.Tap] = None

        self.edges: List[float] = []
        self.counts: List[int] = []

    def render_map(self, resolver: Resolver) -> bool:
        """
        Create the SST map with region boxes, labels and a tap stream.

        Parameters
        ----------
        resolver : Resolver
            Lookup layer holding the loaded grid

        Returns
        -------
        bool
            True if successful, False if error occurred
        """
        try:
            grid = resolver.datasets.grid
            values = [p.value for p in grid]
            self.edges = quantile_edges(values, self.n_bins)
            self.counts = bin_counts(values, self.edges)

            sst_map = create_sst_map(grid, self.edges)
            boxes = create_region_boxes()
            labels = create_region_labels()

            # Create tap stream
            self.tap_stream = hv.streams.Tap(source=boxes, x=None, y=None)
            self.tap_stream.add_subscriber(self._on_tap)

            self.map_plot.object = sst_map * boxes * labels
            self.info_text.object = self._legend_markdown()

            logger.info(f"Map rendered with {len(grid)} grid points")
            return True

        except Exception as e:
            logger.error(f"Error creating map: {e}", exc_info=True)
            self.info_text.object = f"**Error**: Failed to draw map: {e}"
            return False

    def _legend_markdown(self) -> str:
        if len(self.edges) < 2:
            return "**Ocean Map**: no grid values to display."

        palette = get_bin_palette(len(self.edges) - 1)
        rows = [
            f"- <span style=\"color:{color}\">■</span> {lo:.1f} – {hi:.1f} K ({n} points)"
            for color, lo, hi, n in zip(palette, self.edges[:-1], self.edges[1:], self.counts)
        ]
        return (
            "**Sea Surface Temperature (K)**\n\n"
            + "\n".join(reversed(rows))
            + "\n\nClick an ocean region on the map to explore its history."
        )

    def _on_tap(self, x: Optional[float], y: Optional[float]):
        """
        Callback when user clicks on the map.

        Parameters
        ----------
        x : float or None
            Longitude of click
        y : float or None
            Latitude of click
        """
        name = region_at(x, y)
        if name is None:
            return

        logger.debug(f"Map click ({x:.2f}°, {y:.2f}°) -> {name}")
        if self.on_region is not None:
            self.on_region(name)

    def show_error(self, error: Exception) -> None:
        self.info_text.object = f"**Error**: {error}"

    def get_panel(self) -> pn.Column:
        """
        Get Panel layout for the map selector.

        Returns
        -------
        pn.Column
            Column layout containing the map and its legend text
        """
        return pn.Column(
            self.map_plot,
            self.info_text,
            sizing_mode='stretch_width',
        )
