"""
Tests for the selection state machine.

A recording observer captures the order of view callbacks so the
redraw-before-update ordering can be checked directly.
"""

import logging

import pytest

from oceanviz.controllers.synchronizer import ViewSynchronizer, SelectionSnapshot
from oceanviz.core.data_loader import Datasets, TemperatureRecord, CalciteRecord
from oceanviz.core.errors import DataLoadError, InvalidLevelError, NoRegionSelectedError
from oceanviz.state import SelectionState, ViewStatus


class RecordingView:
    """Observer that records every callback with the selection it saw."""

    def __init__(self, name='view', log=None):
        self.name = name
        self.calls = log if log is not None else []

    def render_map(self, resolver):
        self.calls.append((self.name, 'render_map', None))

    def redraw_temperature(self, state, resolver):
        self.calls.append((self.name, 'redraw_temperature', state.as_tuple()))

    def redraw_calcite(self, state, resolver):
        self.calls.append((self.name, 'redraw_calcite', state.as_tuple()))

    def update_year(self, state, resolver):
        self.calls.append((self.name, 'update_year', state.as_tuple()))

    def show_error(self, error):
        self.calls.append((self.name, 'show_error', str(error)))

    def methods(self):
        return [method for _, method, _ in self.calls]


class YearOnlyView:
    """Observer implementing a single callback."""

    def __init__(self):
        self.years = []

    def update_year(self, state, resolver):
        self.years.append(state.current_year)


@pytest.fixture
def view():
    return RecordingView()


@pytest.fixture
def sync(view, datasets):
    """Synchronizer in the LOADED state with one recording view."""
    synchronizer = ViewSynchronizer()
    synchronizer.on_selection_changed(view)
    synchronizer.datasets_loaded(datasets)
    view.calls.clear()
    return synchronizer


class TestLifecycle:
    """Tests for load success and failure transitions."""

    def test_initial_state(self):
        synchronizer = ViewSynchronizer()

        assert synchronizer.status is ViewStatus.UNINITIALIZED
        assert synchronizer.state.as_tuple() == (None, 500, None)

    def test_datasets_loaded_renders_map(self, view, datasets):
        synchronizer = ViewSynchronizer()
        synchronizer.on_selection_changed(view)

        synchronizer.datasets_loaded(datasets)

        assert synchronizer.status is ViewStatus.LOADED
        assert synchronizer.resolver is not None
        assert view.methods() == ['render_map']

    def test_load_failed_is_terminal(self, view, datasets):
        synchronizer = ViewSynchronizer()
        synchronizer.on_selection_changed(view)

        synchronizer.load_failed(DataLoadError(['sst_mean_map.csv']))
        synchronizer.datasets_loaded(datasets)
        synchronizer.select_region('Atlantic')

        assert synchronizer.status is ViewStatus.FAILED
        assert synchronizer.resolver is None
        assert synchronizer.state.current_region is None
        assert view.methods() == ['show_error']

    def test_second_load_ignored(self, sync, view, datasets):
        sync.datasets_loaded(datasets)

        assert view.calls == []

    def test_region_before_load_is_ignored(self, view):
        synchronizer = ViewSynchronizer()
        synchronizer.on_selection_changed(view)

        synchronizer.select_region('Atlantic')

        assert synchronizer.status is ViewStatus.UNINITIALIZED
        assert synchronizer.state.current_region is None
        assert view.calls == []


class TestSelectRegion:
    """Tests for select_region."""

    def test_resets_year_to_first_year(self, sync):
        sync.select_region('Atlantic')

        assert sync.status is ViewStatus.REGION_SELECTED
        assert sync.state.as_tuple() == ('Atlantic', 500, 1850)

    def test_redraws_both_charts_then_updates(self, sync, view):
        sync.select_region('Atlantic')

        assert view.methods() == ['redraw_temperature', 'redraw_calcite', 'update_year']

    def test_redraws_see_final_state(self, sync, view):
        sync.select_region('Pacific')

        assert {selection for _, _, selection in view.calls} == {('Pacific', 500, 1850)}

    def test_all_redraws_precede_any_update(self, datasets):
        log = []
        synchronizer = ViewSynchronizer()
        for name in ('widgets', 'temperature', 'calcite'):
            synchronizer.on_selection_changed(RecordingView(name, log))
        synchronizer.datasets_loaded(datasets)
        log.clear()

        synchronizer.select_region('Atlantic')

        methods = [method for _, method, _ in log]
        assert methods.index('update_year') == 6
        assert set(methods[6:]) == {'update_year'}

    def test_keeps_level(self, sync):
        sync.select_level(1500)
        sync.select_region('Pacific')

        assert sync.state.current_level == 1500

    def test_reselecting_resets_year(self, sync):
        sync.select_region('Atlantic')
        sync.select_year(1900)

        sync.select_region('Atlantic')

        assert sync.state.current_year == 1850

    def test_idempotent(self, sync, view):
        sync.select_region('Atlantic')
        first = list(view.calls)
        view.calls.clear()

        sync.select_region('Atlantic')

        assert view.calls == first

    def test_unknown_region(self, sync, view, caplog):
        """Test that a region without data selects with an empty year."""
        with caplog.at_level(logging.WARNING):
            sync.select_region('Arctic')

        assert "No temperature data for region 'Arctic'" in caplog.text

        assert sync.state.as_tuple() == ('Arctic', 500, None)
        assert view.methods() == ['redraw_temperature', 'redraw_calcite', 'update_year']


class TestSelectLevel:
    """Tests for select_level."""

    def test_invalid_level_leaves_state_unchanged(self, sync, view):
        sync.select_region('Atlantic')
        before = sync.state.as_tuple()
        view.calls.clear()

        with pytest.raises(InvalidLevelError):
            sync.select_level(999)

        assert sync.state.as_tuple() == before
        assert view.calls == []

    @pytest.mark.parametrize("level", [True, '500', 500.5, None])
    def test_non_integer_levels_rejected(self, sync, level):
        with pytest.raises(InvalidLevelError):
            sync.select_level(level)

    def test_only_calcite_redrawn(self, sync, view):
        sync.select_region('Atlantic')
        view.calls.clear()

        sync.select_level(500)

        assert view.methods() == ['redraw_calcite', 'update_year']

    def test_before_region_only_sets_level(self, sync, view):
        sync.select_level(2500)

        assert sync.state.current_level == 2500
        assert view.calls == []

    def test_year_falls_back_to_first_calcite_year(self, sync):
        """Test that a year missing at the new level moves to that level's first year."""
        sync.select_region('Atlantic')

        sync.select_level(1500)

        assert sync.state.as_tuple() == ('Atlantic', 1500, 1900)

    def test_year_kept_when_present(self, sync):
        sync.select_region('Atlantic')
        sync.select_year(2014)

        sync.select_level(1500)

        assert sync.state.current_year == 2014

    def test_level_without_data_keeps_year(self, sync):
        sync.select_region('Atlantic')

        sync.select_level(2500)

        assert sync.state.as_tuple() == ('Atlantic', 2500, 1850)


class TestSelectYear:
    """Tests for select_year."""

    def test_requires_region(self, sync):
        with pytest.raises(NoRegionSelectedError):
            sync.select_year(1900)

    def test_only_updates(self, sync, view):
        sync.select_region('Atlantic')
        view.calls.clear()

        sync.select_year(1900)

        assert view.methods() == ['update_year']
        assert sync.state.current_year == 1900

    @pytest.mark.parametrize("year,expected", [
        (1000, 1850),
        (3000, 2014),
        (1870, 1852),
        (1876, 1852),
        (1877, 1900),
    ])
    def test_clamps_and_snaps(self, sync, year, expected):
        sync.select_region('Atlantic')

        sync.select_year(year)

        assert sync.state.current_year == expected

    def test_region_without_years_ignored(self, sync, view):
        sync.select_region('Arctic')
        view.calls.clear()

        sync.select_year(1900)

        assert sync.state.current_year is None
        assert view.calls == []

    def test_idempotent(self, sync, view):
        """Test that repeating a year gives the same state and the same view updates."""
        sync.select_region('Atlantic')
        view.calls.clear()

        sync.select_year(1900)
        first_snapshot = sync.snapshot()
        first_calls = list(view.calls)
        view.calls.clear()

        sync.select_year(1900)

        assert sync.snapshot() == first_snapshot
        assert first_snapshot == SelectionSnapshot('Atlantic', 500, 1900, 18.3, None)
        assert view.calls == first_calls == [('view', 'update_year', ('Atlantic', 500, 1900))]


class TestCommutativity:
    """Tests that the final selection does not depend on operation order."""

    def test_level_and_year_commute(self, datasets):
        a = ViewSynchronizer()
        a.datasets_loaded(datasets)
        a.select_region('Atlantic')
        a.select_level(1500)
        a.select_year(2014)

        b = ViewSynchronizer()
        b.datasets_loaded(datasets)
        b.select_region('Atlantic')
        b.select_year(2014)
        b.select_level(1500)

        assert a.state.as_tuple() == b.state.as_tuple() == ('Atlantic', 1500, 2014)


class TestObservers:
    """Tests for observer registration and snapshots."""

    def test_duplicate_registration_ignored(self, sync, view):
        sync.on_selection_changed(view)

        assert len(sync.observers) == 1

    def test_partial_observer(self, sync):
        year_view = YearOnlyView()
        sync.on_selection_changed(year_view)

        sync.select_region('Atlantic')
        sync.select_year(2014)

        assert year_view.years == [1850, 2014]

    def test_shared_state(self, datasets):
        state = SelectionState()
        synchronizer = ViewSynchronizer(state)
        synchronizer.datasets_loaded(datasets)

        synchronizer.select_region('Pacific')

        assert state.current_region == 'Pacific'

    def test_snapshot(self, sync):
        sync.select_region('Atlantic')
        sync.select_year(2014)

        snap = sync.snapshot()

        assert snap == SelectionSnapshot('Atlantic', 500, 2014, 18.64, 9.0e-4)

    def test_snapshot_missing_values(self, sync):
        sync.select_region('Atlantic')
        sync.select_year(1900)

        snap = sync.snapshot()

        assert snap.temperature == 18.3
        assert snap.calcite is None

    def test_snapshot_before_load(self):
        assert ViewSynchronizer().snapshot() == SelectionSnapshot(None, 500, None, None, None)


class TestDuplicateRows:
    """Tests for datasets with repeated keys."""

    def test_first_row_used_for_year_and_readout(self):
        datasets = Datasets(
            grid=(),
            temperature=(
                TemperatureRecord('Indian', 1850, 18.0),
                TemperatureRecord('Indian', 1850, 30.0),
            ),
            calcite=(CalciteRecord('Indian', 500, 1850, 1.0e-3),),
        )
        synchronizer = ViewSynchronizer()
        synchronizer.datasets_loaded(datasets)

        synchronizer.select_region('Indian')

        assert synchronizer.snapshot().temperature == 18.0
