"""
OceanViz UI Module

This module provides the user interface components for OceanViz:
- widgets: Factory functions for creating Panel widgets and panes
- map_selector: Clickable SST map for region selection
- charts: Temperature / calcite charts and the year readouts
- playback: Year slider animation
- layout: Dashboard layout assembly

Examples
--------
>>> from oceanviz.ui import create_dashboard
>>> dashboard = create_dashboard()
>>> import panel as pn
>>> pn.serve(dashboard, port=5006)
"""

# Widget factories
from oceanviz.ui.widgets import (
    create_year_slider,
    create_level_select,
    create_playback_controls,
    create_status_pane,
    create_slider_hint,
    create_readout_pane,
    create_annotation_pane,
    create_chart_pane,
    create_all_widgets
)

# Interactive components
from oceanviz.ui.map_selector import RegionMapSelector
from oceanviz.ui.charts import (
    SeriesChartView,
    TemperatureChartView,
    CalciteChartView,
    ReadoutView
)
from oceanviz.ui.playback import YearPlaybackController, create_playback_controller

# Layout assembly
from oceanviz.ui.layout import (
    create_dashboard,
    create_temperature_panel,
    create_calcite_panel
)

__all__ = [
    # Widget factories
    'create_year_slider',
    'create_level_select',
    'create_playback_controls',
    'create_status_pane',
    'create_slider_hint',
    'create_readout_pane',
    'create_annotation_pane',
    'create_chart_pane',
    'create_all_widgets',

    # Interactive components
    'RegionMapSelector',
    'SeriesChartView',
    'TemperatureChartView',
    'CalciteChartView',
    'ReadoutView',
    'YearPlaybackController',
    'create_playback_controller',

    # Layout assembly
    'create_dashboard',
    'create_temperature_panel',
    'create_calcite_panel'
]
