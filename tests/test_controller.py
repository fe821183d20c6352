"""
Tests for the application controller.

The dashboard is assembled with real Panel widgets and driven the way a
browser session would drive it: widget value changes and map clicks.
"""

from types import SimpleNamespace

import pytest

from oceanviz.config import OceanVizConfig
from oceanviz.controllers import OceanVizController
from oceanviz.state import ViewStatus
from oceanviz.ui.layout import create_dashboard


def build_controller(app_config):
    layout = create_dashboard()
    controller = OceanVizController(
        widgets=layout._oceanviz_widgets,
        map_selector=layout._oceanviz_map_selector,
        playback=layout._oceanviz_playback,
        app_config=app_config
    )
    controller.attach_callbacks()
    return controller


@pytest.fixture
def controller(app_config):
    """Controller with the sample datasets loaded."""
    ctrl = build_controller(app_config)
    assert ctrl.load_datasets()
    return ctrl


class TestLoading:
    """Tests for the data load."""

    def test_load_renders_map_and_hides_status(self, controller):
        assert controller.synchronizer.status is ViewStatus.LOADED
        assert controller.map_selector.map_plot.object is not None
        assert not controller.widgets['status'].visible
        assert not controller.map_selector.map_plot.loading

    def test_controls_inert_until_region(self, controller):
        assert controller.widgets['year_slider'].disabled
        assert controller.widgets['level_select'].disabled
        assert controller.widgets['playback']['play'].disabled

    def test_load_failure_shows_error(self, empty_dir):
        ctrl = build_controller(OceanVizConfig(data_dir=empty_dir))

        assert not ctrl.load_datasets()

        assert ctrl.synchronizer.status is ViewStatus.FAILED
        assert ctrl.widgets['status'].visible
        assert "Failed to load data." in ctrl.widgets['status'].object
        assert ctrl.map_selector.map_plot.object is None
        assert ctrl.widgets['year_slider'].disabled

    def test_failure_is_not_retried(self, empty_dir):
        ctrl = build_controller(OceanVizConfig(data_dir=empty_dir))
        ctrl.load_datasets()

        assert not ctrl.load_datasets()

    def test_second_load_is_noop(self, controller):
        assert controller.load_datasets()
        assert controller.synchronizer.status is ViewStatus.LOADED


class TestRegionClick:
    """Tests for selecting a region on the map."""

    def test_click_enables_controls(self, controller):
        controller.map_selector._on_tap(-30.0, 0.0)

        slider = controller.widgets['year_slider']
        assert controller.state.as_tuple() == ('Atlantic', 500, 1850)
        assert (slider.start, slider.end, slider.value) == (1850, 2014, 1850)
        assert not slider.disabled
        assert not controller.widgets['level_select'].disabled
        assert not controller.widgets['playback']['play'].disabled

    def test_click_fills_readouts_and_annotations(self, controller):
        controller.on_region_click('Atlantic')

        assert controller.readout_view.values[1] == '18.00&nbsp;K'
        assert "+0.64 K" in controller.widgets['temperature_annotation'].object
        assert "Atlantic" in controller.widgets['calcite_annotation'].object

    def test_click_outside_regions_changes_nothing(self, controller):
        controller.map_selector._on_tap(60.0, 45.0)

        assert controller.state.current_region is None
        assert controller.synchronizer.status is ViewStatus.LOADED

    def test_region_without_data_disables_slider(self, controller):
        controller.on_region_click('Atlantic')

        controller.on_region_click('Arctic')

        assert controller.widgets['year_slider'].disabled
        assert controller.widgets['playback']['play'].disabled
        assert controller.readout_view.values == ('—', '—', '—')


class TestYearSlider:
    """Tests for year slider input."""

    def test_slide_moves_selection(self, controller):
        controller.on_region_click('Atlantic')

        controller.widgets['year_slider'].value = 2014

        assert controller.state.current_year == 2014
        assert controller.readout_view.values[1] == '18.64&nbsp;K'
        assert controller.temperature_view.marker_point == (2014, 18.64)

    def test_slide_into_gap_snaps_widget(self, controller):
        controller.on_region_click('Atlantic')

        controller.widgets['year_slider'].value = 1870

        assert controller.state.current_year == 1852
        assert controller.widgets['year_slider'].value == 1852

    def test_slide_before_region_ignored(self, controller):
        controller.on_year_slide(SimpleNamespace(new=1900))

        assert controller.state.current_year is None

    def test_playback_step_selects_next_year(self, controller):
        controller.on_region_click('Atlantic')

        controller.playback.step_forward()

        assert controller.state.current_year == 1851


class TestLevelSelect:
    """Tests for level selection."""

    def test_level_change_redraws_calcite(self, controller):
        controller.on_region_click('Atlantic')

        controller.widgets['level_select'].value = 1500

        assert controller.state.as_tuple() == ('Atlantic', 1500, 1900)
        assert controller.widgets['year_slider'].value == 1900
        assert "level 1500" in controller.widgets['calcite_annotation'].object

    def test_invalid_level_reverts(self, controller):
        controller.on_region_click('Atlantic')

        controller.on_level_change(SimpleNamespace(new=999))

        assert controller.state.current_level == 500
        assert controller.widgets['level_select'].value == 500
