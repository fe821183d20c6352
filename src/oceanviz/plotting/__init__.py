"""
OceanViz Plotting Package

This package provides all plotting and visualization functionality:
- Discrete colour bins for the map (colormaps.py)
- Map, region overlay and line chart elements (base.py)
"""

# Colormap functions
from oceanviz.plotting.colormaps import (
    get_bin_palette,
    quantile_edges,
    bin_counts,
    classify,
)

# Core plotting functions
from oceanviz.plotting.base import (
    create_sst_map,
    create_region_boxes,
    create_region_labels,
    series_limits,
    create_series_curve,
    create_marker,
    create_placeholder_chart,
    compose_chart,
)

__all__ = [
    # Colormap exports
    'get_bin_palette',
    'quantile_edges',
    'bin_counts',
    'classify',

    # Core plotting exports
    'create_sst_map',
    'create_region_boxes',
    'create_region_labels',
    'series_limits',
    'create_series_curve',
    'create_marker',
    'create_placeholder_chart',
    'compose_chart',
]
