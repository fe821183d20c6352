"""
OceanViz - Interactive Ocean Change Explorer

A Panel dashboard for exploring simulated ocean sea-surface temperature and
calcite concentration by region, level and year.

This package provides:
- CSV loading for the SST map, temperature and calcite datasets
- A lookup layer for values, changes and extremes per region
- A selection state machine keeping map, charts and readouts in sync
- Interactive visualization with Panel, HoloViews and Datashader

Quick Start
-----------
>>> from oceanviz.ui import create_dashboard
>>> dashboard = create_dashboard()
>>> dashboard.servable()

Or use the provided app.py:

    $ panel serve app.py --show --port 5006
"""

__version__ = "0.1.0"

# Core components
from oceanviz.config import config, OceanVizConfig, LEVELS
from oceanviz.state import SelectionState, ViewStatus
from oceanviz.regions import Region, REGIONS, REGION_NAMES, region_at

# Data layer
from oceanviz.core import (
    OceanVizError,
    DataLoadError,
    InvalidLevelError,
    NoRegionSelectedError,
    Datasets,
    load_datasets,
    Resolver,
)

# Synchronization
from oceanviz.controllers import ViewSynchronizer, OceanVizController

# UI components
from oceanviz.ui import create_dashboard, RegionMapSelector, YearPlaybackController

__all__ = [
    # Version
    '__version__',

    # Config
    'config',
    'OceanVizConfig',
    'LEVELS',

    # State and regions
    'SelectionState',
    'ViewStatus',
    'Region',
    'REGIONS',
    'REGION_NAMES',
    'region_at',

    # Data
    'OceanVizError',
    'DataLoadError',
    'InvalidLevelError',
    'NoRegionSelectedError',
    'Datasets',
    'load_datasets',
    'Resolver',

    # Controllers
    'ViewSynchronizer',
    'OceanVizController',

    # UI
    'create_dashboard',
    'RegionMapSelector',
    'YearPlaybackController'
]
