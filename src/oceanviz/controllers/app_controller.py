"""
OceanViz Application Controller

This module provides the main Controller class that connects the Panel
widgets to the ViewSynchronizer.

The OceanVizController follows the Controller pattern, separating:
- View (UI widgets, chart views, map selector) - in oceanviz.ui
- Model (datasets, resolver, selection state) - in oceanviz.core / oceanviz.state
- Controller (this module) - turns widget events into selection operations
  and keeps the widgets in step with the selection
"""

import logging
from typing import Dict, Any, Optional

import panel as pn

from oceanviz.config import OceanVizConfig, config as default_config
from oceanviz.core.data_loader import load_datasets
from oceanviz.core.errors import DataLoadError, InvalidLevelError, NoRegionSelectedError
from oceanviz.core.resolver import Resolver
from oceanviz.controllers.synchronizer import ViewSynchronizer
from oceanviz.state import SelectionState, ViewStatus
from oceanviz.ui.charts import TemperatureChartView, CalciteChartView, ReadoutView
from oceanviz.ui.map_selector import RegionMapSelector
from oceanviz.ui.playback import YearPlaybackController

logger = logging.getLogger(__name__)


def _notify(level: str, message: str) -> None:
    """Show a toast if the notification area is available."""
    if pn.state.notifications:
        getattr(pn.state.notifications, level)(message)


class OceanVizController:
    """
    Main application controller for the OceanViz dashboard.

    Parameters
    ----------
    widgets : dict
        Dictionary of all widgets created by create_all_widgets()
    map_selector : RegionMapSelector
        The interactive region map
    playback : YearPlaybackController, optional
        Year slider playback controller
    app_config : OceanVizConfig, optional
        Data locations and annotation settings (default: global config)

    Attributes
    ----------
    state : SelectionState
        The shared selection state
    synchronizer : ViewSynchronizer
        State machine notifying every view
    temperature_view, calcite_view, readout_view
        Views registered with the synchronizer

    Example
    -------
    >>> from oceanviz.ui import create_dashboard
    >>> from oceanviz.controllers import OceanVizController
    >>>
    >>> layout = create_dashboard()
    >>> controller = OceanVizController(
    ...     widgets=layout._oceanviz_widgets,
    ...     map_selector=layout._oceanviz_map_selector,
    ...     playback=layout._oceanviz_playback
    ... )
    >>> controller.attach_callbacks()
    >>> controller.load_datasets()
    """

    def __init__(
        self,
        widgets: Dict[str, Any],
        map_selector: RegionMapSelector,
        playback: Optional[YearPlaybackController] = None,
        app_config: Optional[OceanVizConfig] = None
    ):
        # Core references
        self.widgets = widgets
        self.map_selector = map_selector
        self.playback = playback
        self.config = app_config if app_config is not None else default_config
        self.map_selector.n_bins = self.config.map_bin_count

        # State and synchronizer
        self.state = SelectionState()
        self.synchronizer = ViewSynchronizer(self.state)

        # Views
        self.temperature_view = TemperatureChartView(
            widgets['temperature_chart'],
            widgets['temperature_annotation'],
            annotation_years=self.config.annotation_years
        )
        self.calcite_view = CalciteChartView(
            widgets['calcite_chart'],
            widgets['calcite_annotation'],
            annotation_years=self.config.annotation_years
        )
        self.readout_view = ReadoutView(widgets['readouts'])

        # Widget sync first, then map and charts
        for observer in (
            self,
            self.map_selector,
            self.temperature_view,
            self.calcite_view,
            self.readout_view,
        ):
            self.synchronizer.on_selection_changed(observer)

        # Prevent widget watchers from re-entering while we set widget values
        self._syncing_widgets = False

        logger.info("OceanVizController initialized")

    # =========================================================================
    # Data Loading
    # =========================================================================

    def load_datasets(self, event=None) -> bool:
        """
        Load the three datasets and render the map.

        A failure is terminal for the session: the status pane keeps the
        error and no retry is attempted.

        Returns
        -------
        bool
            True if the datasets were loaded
        """
        if self.synchronizer.status is not ViewStatus.UNINITIALIZED:
            return self.synchronizer.status is not ViewStatus.FAILED

        self.widgets['status'].object = "**Loading data…**"
        self.map_selector.map_plot.loading = True
        try:
            datasets = load_datasets(
                self.config.data_dir,
                sst_map_file=self.config.sst_map_file,
                timeseries_file=self.config.timeseries_file,
                calcite_file=self.config.calcite_file,
            )
        except DataLoadError as e:
            self.synchronizer.load_failed(e)
            _notify('error', "Failed to load data.")
            return False
        finally:
            self.map_selector.map_plot.loading = False

        self.synchronizer.datasets_loaded(datasets)
        return True

    # =========================================================================
    # Widget Event Handlers
    # =========================================================================

    def on_region_click(self, name: str) -> None:
        """Handle a click on a region of the map."""
        try:
            self.synchronizer.select_region(name)
        except Exception as e:
            logger.error(f"Error selecting region {name}: {e}", exc_info=True)
            _notify('error', f"Region error: {e}")

    def on_level_change(self, event) -> None:
        """Handle a change of the level selector."""
        if self._syncing_widgets:
            return

        try:
            self.synchronizer.select_level(event.new)
        except InvalidLevelError as e:
            logger.warning(str(e))
            self._set_widget('level_select', self.state.current_level)
        except Exception as e:
            logger.error(f"Error changing level: {e}", exc_info=True)
            _notify('error', f"Level error: {e}")

    def on_year_slide(self, event) -> None:
        """Handle year slider input."""
        if self._syncing_widgets:
            return

        try:
            self.synchronizer.select_year(event.new)
        except NoRegionSelectedError as e:
            logger.debug(f"Ignoring year input: {e}")
        except Exception as e:
            logger.error(f"Error changing year: {e}", exc_info=True)
            _notify('error', f"Year error: {e}")

    def _set_widget(self, key: str, value) -> None:
        widget = self.widgets[key]
        if widget.value == value:
            return
        self._syncing_widgets = True
        try:
            widget.value = value
        finally:
            self._syncing_widgets = False

    # =========================================================================
    # Synchronizer Callbacks (widget state follows the selection)
    # =========================================================================

    def render_map(self, resolver: Resolver) -> None:
        self.widgets['status'].object = ""
        self.widgets['status'].visible = False

    def show_error(self, error: Exception) -> None:
        self.widgets['status'].object = f"**Failed to load data.**\n\n{error}"
        self.widgets['status'].visible = True

    def redraw_temperature(self, state: SelectionState, resolver: Resolver) -> None:
        """Fit the year slider to the region's years."""
        slider = self.widgets['year_slider']
        year_range = resolver.year_range(state.current_region)

        self._syncing_widgets = True
        try:
            if year_range is None:
                slider.disabled = True
            else:
                start, end = year_range
                # Bokeh sliders need start < end
                slider.param.update(
                    start=start,
                    end=end if end > start else start + 1,
                    value=state.current_year,
                    disabled=False
                )
        finally:
            self._syncing_widgets = False

        self.widgets['level_select'].disabled = False

        if self.playback is not None:
            self.playback.set_years(resolver.years(state.current_region))

    def redraw_calcite(self, state: SelectionState, resolver: Resolver) -> None:
        self._set_widget('level_select', state.current_level)

    def update_year(self, state: SelectionState, resolver: Resolver) -> None:
        if state.current_year is not None:
            self._set_widget('year_slider', state.current_year)

    # =========================================================================
    # Callback Attachment
    # =========================================================================

    def attach_callbacks(self):
        """
        Attach all widget callbacks.

        This method connects all widgets to their respective handler methods.
        It should be called once after the controller is initialized.
        """
        logger.info("Attaching callbacks...")

        self.map_selector.on_region = self.on_region_click
        self.widgets['year_slider'].param.watch(self.on_year_slide, 'value')
        self.widgets['level_select'].param.watch(self.on_level_change, 'value')

        logger.info("All callbacks attached")
