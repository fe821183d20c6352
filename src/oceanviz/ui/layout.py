"""
Dashboard Layout Module

This module provides functions for assembling the OceanViz dashboard from
the individual widgets, the region map and the two chart panels.
"""

import logging
from typing import Dict, Any

import panel as pn

from oceanviz.ui.widgets import create_all_widgets
from oceanviz.ui.map_selector import RegionMapSelector
from oceanviz.ui.playback import create_playback_controller

logger = logging.getLogger(__name__)


# =============================================================================
# Layout Assembly
# =============================================================================

def create_temperature_panel(widgets: Dict[str, Any]) -> pn.Column:
    """
    Create the temperature section: year controls, readouts and chart.

    Parameters
    ----------
    widgets : dict
        Dictionary of all widget instances

    Returns
    -------
    pn.Column
        Temperature section layout
    """
    playback = widgets['playback']

    controls = pn.Row(
        widgets['year_slider'],
        playback['prev'],
        playback['play'],
        playback['next'],
        playback['speed'],
        sizing_mode='stretch_width',
        align='center'
    )

    return pn.Column(
        pn.pane.Markdown("### Sea Surface Temperature"),
        widgets['slider_hint'],
        controls,
        widgets['readouts'],
        widgets['temperature_chart'],
        widgets['temperature_annotation'],
        sizing_mode='stretch_width'
    )


def create_calcite_panel(widgets: Dict[str, Any]) -> pn.Column:
    """Create the calcite section: level selector and chart."""
    return pn.Column(
        pn.pane.Markdown("### Calcite Concentration"),
        widgets['level_select'],
        widgets['calcite_chart'],
        widgets['calcite_annotation'],
        sizing_mode='stretch_width'
    )


def create_dashboard(title: str = "Ocean Change Explorer") -> pn.Column:
    """
    Create the complete dashboard layout.

    Parameters
    ----------
    title : str, default='Ocean Change Explorer'
        Dashboard heading

    Returns
    -------
    pn.Column
        Complete dashboard layout ready to serve

    Notes
    -----
    This function creates the layout structure but does NOT attach callbacks
    or load data. Both are done by OceanVizController.

    Examples
    --------
    >>> dashboard = create_dashboard()
    >>> dashboard.servable()  # For panel serve
    """
    widgets = create_all_widgets()
    map_selector = RegionMapSelector()

    playback_controller = create_playback_controller(
        year_slider=widgets['year_slider'],
        play_button=widgets['playback']['play'],
        prev_button=widgets['playback']['prev'],
        next_button=widgets['playback']['next'],
        speed_slider=widgets['playback']['speed']
    )

    # Loading spinner (bound to Panel's busy state)
    loading_spinner = pn.indicators.LoadingSpinner(
        value=False,
        width=30,
        height=30,
        align='center',
        color='primary'
    )
    pn.state.sync_busy(loading_spinner)

    header = pn.Row(
        pn.pane.Markdown(f"# {title}"),
        loading_spinner,
        sizing_mode='stretch_width'
    )

    layout = pn.Column(
        header,
        widgets['status'],
        map_selector.get_panel(),
        pn.layout.Divider(),
        create_temperature_panel(widgets),
        pn.layout.Divider(),
        create_calcite_panel(widgets),
        sizing_mode='stretch_width'
    )

    logger.info("Dashboard layout created")

    # Store references for callback attachment
    layout._oceanviz_widgets = widgets
    layout._oceanviz_map_selector = map_selector
    layout._oceanviz_playback = playback_controller

    return layout
