"""
OceanViz Core Module

Core data loading, error types and derived-value lookups.
"""

from oceanviz.core.errors import (
    OceanVizError,
    DataLoadError,
    InvalidLevelError,
    NoRegionSelectedError,
)

from oceanviz.core.data_loader import (
    GridPoint,
    TemperatureRecord,
    CalciteRecord,
    Datasets,
    load_grid_points,
    load_temperature_series,
    load_calcite_series,
    load_datasets,
)

from oceanviz.core.resolver import (
    Resolver,
    SeriesSummary,
    extremum,
)

__all__ = [
    # Errors
    'OceanVizError',
    'DataLoadError',
    'InvalidLevelError',
    'NoRegionSelectedError',
    # Data Loading
    'GridPoint',
    'TemperatureRecord',
    'CalciteRecord',
    'Datasets',
    'load_grid_points',
    'load_temperature_series',
    'load_calcite_series',
    'load_datasets',
    # Resolver
    'Resolver',
    'SeriesSummary',
    'extremum',
]
