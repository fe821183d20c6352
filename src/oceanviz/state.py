"""
OceanViz Application State Module

This module provides the shared selection state for OceanViz: the current
region, vertical level and year that drive every view.

The state is centralized here to:
- Keep all application state in one place
- Enable easy sharing between Controller and UI components
- Avoid circular imports
"""

import enum
import logging

import param

from oceanviz.config import LEVELS, DEFAULT_LEVEL

logger = logging.getLogger(__name__)


class ViewStatus(enum.Enum):
    """Lifecycle of the dashboard session."""
    UNINITIALIZED = 'uninitialized'
    LOADED = 'loaded'
    REGION_SELECTED = 'region_selected'
    FAILED = 'failed'


class SelectionState(param.Parameterized):
    """
    Current (region, level, year) selection.

    Views hold a reference to one shared instance and read from it; only the
    ViewSynchronizer writes to it.

    Attributes
    ----------
    current_region : str or None
        Selected region name, None until the first map click
    current_level : int
        Ocean model level, always one of LEVELS
    current_year : int or None
        Selected year, None until a region with data is selected
    """

    current_region = param.String(default=None, allow_None=True)
    current_level = param.Selector(objects=list(LEVELS), default=DEFAULT_LEVEL)
    current_year = param.Integer(default=None, allow_None=True)

    @property
    def has_region(self) -> bool:
        return self.current_region is not None

    def as_tuple(self):
        """(region, level, year) for comparisons and logging."""
        return (self.current_region, self.current_level, self.current_year)

    def __repr__(self):
        region, level, year = self.as_tuple()
        return f"SelectionState(region={region!r}, level={level}, year={year})"
