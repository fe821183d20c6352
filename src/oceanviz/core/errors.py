"""
OceanViz Error Types

Exceptions raised by the data and selection layers.
"""

from typing import Iterable


class OceanVizError(Exception):
    """Base class for all OceanViz errors."""


class DataLoadError(OceanVizError):
    """
    One or more input datasets could not be fetched or parsed.

    Fatal for the session: the dashboard shows a persistent error state and
    the only recovery is a full reload.

    Parameters
    ----------
    sources : iterable of str
        Names of the sources that failed (e.g. 'sst_mean_map.csv')
    message : str, optional
        Detail message; defaults to a list of the failed sources
    """

    def __init__(self, sources: Iterable[str], message: str = ""):
        self.sources = tuple(sources)
        if not message:
            message = f"Failed to load data: {', '.join(self.sources)}"
        super().__init__(message)


class InvalidLevelError(OceanVizError, ValueError):
    """A vertical level outside the fixed level enumeration was requested."""

    def __init__(self, level):
        self.level = level
        super().__init__(f"Invalid ocean model level: {level!r}")


class NoRegionSelectedError(OceanVizError):
    """A year operation was attempted before any region was selected."""

    def __init__(self, operation: str = "select_year"):
        self.operation = operation
        super().__init__(f"{operation} requires a selected region")
