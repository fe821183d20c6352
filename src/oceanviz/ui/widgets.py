"""
UI Widgets Module

This module provides factory functions for creating all Panel widgets and panes
used in OceanViz. Each function creates a properly configured widget with
default values and settings.
"""

import logging
from typing import Dict

import panel as pn

from oceanviz.config import LEVELS, DEFAULT_LEVEL

logger = logging.getLogger(__name__)


# =============================================================================
# Year and Level Controls
# =============================================================================

def create_year_slider() -> pn.widgets.IntSlider:
    """
    Create the year slider.

    The slider is disabled until a region is selected; its range is set from
    the region's temperature series at that point.

    Returns
    -------
    pn.widgets.IntSlider
        Year slider (initially disabled)

    Examples
    --------
    >>> slider = create_year_slider()
    >>> slider.disabled
    True
    """
    return pn.widgets.IntSlider(
        name='Year',
        start=1850,
        end=2014,
        value=1850,
        step=1,
        disabled=True,
        sizing_mode='stretch_width'
    )


def create_level_select() -> pn.widgets.Select:
    """
    Create the ocean model level selector.

    Returns
    -------
    pn.widgets.Select
        Level selector over the fixed level list (initially disabled)

    Examples
    --------
    >>> select = create_level_select()
    >>> select.value
    500
    """
    return pn.widgets.Select(
        name='Ocean model level',
        options=list(LEVELS),
        value=DEFAULT_LEVEL,
        disabled=True,
        width=160
    )


def create_playback_controls() -> Dict[str, pn.widgets.Widget]:
    """
    Create year playback widgets (step buttons, play button, speed).

    Returns
    -------
    dict
        Dictionary with keys: 'prev', 'next', 'play', 'speed'

    Examples
    --------
    >>> controls = create_playback_controls()
    >>> controls['play'].name
    '▶'
    """
    return {
        'prev': pn.widgets.Button(
            name='⏮',
            width=40,
            disabled=True
        ),
        'next': pn.widgets.Button(
            name='⏭',
            width=40,
            disabled=True
        ),
        'play': pn.widgets.Button(
            name='▶',
            width=40,
            disabled=True
        ),
        'speed': pn.widgets.IntSlider(
            name='Speed (ms)',
            start=50,
            end=1000,
            step=50,
            value=200,
            width=150
        )
    }


# =============================================================================
# Display Panes
# =============================================================================

def create_status_pane() -> pn.pane.Markdown:
    """
    Create the loading / error status pane.

    Returns
    -------
    pn.pane.Markdown
        Status pane showing the loading message
    """
    return pn.pane.Markdown(
        "**Loading data…**",
        sizing_mode='stretch_width'
    )


def create_slider_hint() -> pn.pane.Markdown:
    """Create the instruction text shown above the year slider."""
    return pn.pane.Markdown(
        "Move the slider to see the mean sea surface temperature and calcite "
        "concentration for that year.",
        styles={'text-align': 'center', 'font-size': '14px', 'color': '#333'},
        sizing_mode='stretch_width'
    )


def create_readout_pane() -> pn.pane.HTML:
    """
    Create the Year / Temp / Calc readout pane.

    Returns
    -------
    pn.pane.HTML
        Readout pane (empty until a region is selected)
    """
    return pn.pane.HTML(
        "",
        styles={'font-size': '18px'},
        sizing_mode='stretch_width'
    )


def create_annotation_pane() -> pn.pane.HTML:
    """Create an annotation text pane for one chart."""
    return pn.pane.HTML(
        "",
        styles={'font-size': '14px', 'color': '#333', 'margin-top': '0.5rem'},
        sizing_mode='stretch_width'
    )


def create_chart_pane() -> pn.pane.HoloViews:
    """
    Create a chart display pane.

    Returns
    -------
    pn.pane.HoloViews
        HoloViews pane for one line chart
    """
    return pn.pane.HoloViews(
        object=None
    )


def create_all_widgets() -> Dict[str, object]:
    """
    Create all widgets and panes needed for the dashboard.

    Returns
    -------
    dict
        Dictionary with keys:
        - 'year_slider': Year slider
        - 'level_select': Level selector
        - 'playback': Playback controls dict
        - 'status': Status pane
        - 'slider_hint': Slider instruction text
        - 'readouts': Year / Temp / Calc readout pane
        - 'temperature_chart', 'calcite_chart': Chart panes
        - 'temperature_annotation', 'calcite_annotation': Annotation panes
    """
    return {
        'year_slider': create_year_slider(),
        'level_select': create_level_select(),
        'playback': create_playback_controls(),
        'status': create_status_pane(),
        'slider_hint': create_slider_hint(),
        'readouts': create_readout_pane(),
        'temperature_chart': create_chart_pane(),
        'calcite_chart': create_chart_pane(),
        'temperature_annotation': create_annotation_pane(),
        'calcite_annotation': create_annotation_pane(),
    }
