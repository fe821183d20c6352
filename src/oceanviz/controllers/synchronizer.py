"""
View Synchronizer

This module keeps the selection state and the three views (map, temperature
chart, calcite chart) consistent. It owns the only operations that mutate
the SelectionState:

- select_region: reset the year to the region's first year, redraw both charts
- select_level: validate the level, redraw the calcite chart
- select_year: clamp the year, move the markers and refresh the readouts

Views register once through on_selection_changed() and are called back
synchronously. Within one event every redraw (which may change axis
limits) runs before any year update (which only moves markers), so a marker
is never placed against the previous chart's scale.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Protocol

from oceanviz.config import LEVELS
from oceanviz.core.data_loader import Datasets
from oceanviz.core.errors import (
    DataLoadError,
    InvalidLevelError,
    NoRegionSelectedError,
)
from oceanviz.core.resolver import Resolver
from oceanviz.state import SelectionState, ViewStatus

logger = logging.getLogger(__name__)


# =============================================================================
# Observer Protocol
# =============================================================================

class SelectionObserver(Protocol):
    """
    Callbacks a view may implement. The synchronizer only calls the methods
    a view actually defines.
    """

    def render_map(self, resolver: Resolver) -> None:
        """Datasets are loaded, draw the map."""

    def redraw_temperature(self, state: SelectionState, resolver: Resolver) -> None:
        """New region: rebuild the temperature chart and its scales."""

    def redraw_calcite(self, state: SelectionState, resolver: Resolver) -> None:
        """New region or level: rebuild the calcite chart and its scales."""

    def update_year(self, state: SelectionState, resolver: Resolver) -> None:
        """New year: move markers and refresh readouts without rescaling."""

    def show_error(self, error: Exception) -> None:
        """Loading failed."""


@dataclass(frozen=True)
class SelectionSnapshot:
    """Selection plus the derived readout values for the selected year."""
    region: Optional[str]
    level: int
    year: Optional[int]
    temperature: Optional[float]
    calcite: Optional[float]


# =============================================================================
# Synchronizer
# =============================================================================

class ViewSynchronizer:
    """
    Selection state machine and view notifier.

    States: UNINITIALIZED -> LOADED -> REGION_SELECTED, or
    UNINITIALIZED -> FAILED when loading fails (terminal for the session).

    Parameters
    ----------
    state : SelectionState, optional
        Shared selection state (a new one is created if omitted)

    Attributes
    ----------
    state : SelectionState
        The shared selection state
    resolver : Resolver or None
        Lookup layer, available once datasets are loaded
    status : ViewStatus
        Current lifecycle state

    Examples
    --------
    >>> sync = ViewSynchronizer()
    >>> sync.on_selection_changed(temperature_view)
    >>> sync.datasets_loaded(load_datasets('data/'))
    >>> sync.select_region('Atlantic')
    >>> sync.state.current_year
    1850
    """

    def __init__(self, state: Optional[SelectionState] = None):
        self.state = state if state is not None else SelectionState()
        self.resolver: Optional[Resolver] = None
        self.status = ViewStatus.UNINITIALIZED
        self.error: Optional[Exception] = None
        self._observers: List[Any] = []

    # =========================================================================
    # Observer Registration
    # =========================================================================

    def on_selection_changed(self, observer: Any) -> None:
        """Register a view. Registering the same view twice has no effect."""
        if any(o is observer for o in self._observers):
            return
        self._observers.append(observer)
        logger.debug(f"Registered observer {type(observer).__name__}")

    @property
    def observers(self) -> List[Any]:
        return list(self._observers)

    def _notify(self, method: str, *args) -> None:
        for observer in self._observers:
            callback = getattr(observer, method, None)
            if callable(callback):
                callback(*args)

    def _redraw_then_update(self, *redraws: str) -> None:
        """Run all redraws on all views, then the year update on all views."""
        for method in redraws:
            self._notify(method, self.state, self.resolver)
        self._notify('update_year', self.state, self.resolver)

    # =========================================================================
    # Lifecycle Events
    # =========================================================================

    def datasets_loaded(self, datasets: Datasets) -> None:
        """
        Handle a successful load: build the resolver and draw the map.

        Only valid once, from UNINITIALIZED.
        """
        if self.status is not ViewStatus.UNINITIALIZED:
            logger.warning(f"Ignoring datasets_loaded in state {self.status.value}")
            return

        self.resolver = Resolver(datasets)
        self.status = ViewStatus.LOADED
        logger.info(
            f"Datasets loaded: {len(datasets.grid)} grid points, "
            f"{len(datasets.temperature)} temperature rows, {len(datasets.calcite)} calcite rows"
        )
        self._notify('render_map', self.resolver)

    def load_failed(self, error: DataLoadError) -> None:
        """Enter the terminal FAILED state and let views show the error."""
        if self.status is not ViewStatus.UNINITIALIZED:
            logger.warning(f"Ignoring load_failed in state {self.status.value}")
            return

        self.status = ViewStatus.FAILED
        self.error = error
        logger.error(f"Data loading failed: {error}")
        self._notify('show_error', error)

    # =========================================================================
    # Selection Operations
    # =========================================================================

    def select_region(self, name: str) -> None:
        """
        Select a region.

        The year is reset to the region's first recorded year and the level is
        kept. Both charts are redrawn; the map is left unchanged.

        Parameters
        ----------
        name : str
            Region name (matched exactly against the data's region field)
        """
        if self.status not in (ViewStatus.LOADED, ViewStatus.REGION_SELECTED):
            logger.warning(f"Ignoring region selection '{name}' in state {self.status.value}")
            return

        if name not in self.resolver.region_names():
            logger.warning(f"No temperature data for region '{name}'")

        years = self.resolver.years(name)
        year = years[0] if years else None

        self.state.param.update(current_region=name, current_year=year)
        self.status = ViewStatus.REGION_SELECTED
        logger.info(f"Selected region {name} (year {year}, level {self.state.current_level})")

        self._redraw_then_update('redraw_temperature', 'redraw_calcite')

    def select_level(self, level: int) -> None:
        """
        Select the vertical level used by the calcite chart.

        Parameters
        ----------
        level : int
            One of LEVELS

        Raises
        ------
        InvalidLevelError
            If level is not in LEVELS; the state is left unchanged
        """
        if isinstance(level, bool) or level not in LEVELS or int(level) != level:
            raise InvalidLevelError(level)
        level = int(level)

        if not self.state.has_region or self.resolver is None:
            self.state.current_level = level
            logger.debug(f"Level set to {level} (no region selected yet)")
            return

        region = self.state.current_region
        year = self.state.current_year
        calcite_years = [r.year for r in self.resolver.calcite_series(region, level)]

        if calcite_years and year not in calcite_years:
            fallback = calcite_years[0]
            if fallback in self.resolver.years(region):
                logger.debug(f"Year {year} not in level {level} series, using {fallback}")
                year = fallback

        self.state.param.update(current_level=level, current_year=year)
        logger.info(f"Selected level {level} for {region} (year {year})")

        self._redraw_then_update('redraw_calcite')

    def select_year(self, year: int) -> None:
        """
        Move the selection to a year.

        The year is clamped into the region's recorded range; a year falling in
        a gap snaps to the nearest recorded year (the lower one on ties).
        Only markers and readouts are updated.

        Raises
        ------
        NoRegionSelectedError
            If no region is selected yet
        """
        if not self.state.has_region or self.resolver is None:
            raise NoRegionSelectedError('select_year')

        years = self.resolver.years(self.state.current_region)
        if not years:
            logger.debug(f"No years for region {self.state.current_region}, ignoring year {year}")
            return

        target = self._snap_year(int(year), years)
        if target != year:
            logger.debug(f"Year {year} adjusted to {target}")

        self.state.current_year = target
        self._redraw_then_update()

    @staticmethod
    def _snap_year(year: int, years: List[int]) -> int:
        year = min(max(year, years[0]), years[-1])
        if year in years:
            return year
        return min(years, key=lambda y: (abs(y - year), y))

    # =========================================================================
    # Derived Values
    # =========================================================================

    def snapshot(self) -> SelectionSnapshot:
        """Current selection and the readout values it resolves to."""
        region, level, year = self.state.as_tuple()
        if self.resolver is None:
            return SelectionSnapshot(region, level, year, None, None)

        return SelectionSnapshot(
            region=region,
            level=level,
            year=year,
            temperature=self.resolver.temperature_at(region, year),
            calcite=self.resolver.calcite_at(region, level, year),
        )
