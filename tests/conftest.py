"""Pytest configuration and fixtures for OceanViz tests."""
from pathlib import Path

import pytest
import holoviews as hv

from oceanviz.config import OceanVizConfig, SST_MAP_FILE, TIMESERIES_FILE, CALCITE_FILE
from oceanviz.core.data_loader import load_datasets
from oceanviz.core.resolver import Resolver

# Plot options are validated against the loaded backend
hv.extension('bokeh')


SST_MAP_CSV = """lon,lat,value
-150.0,0.0,300.1
-100.0,10.0,299.5
-40.0,20.0,295.2
-30.0,-30.0,290.8
60.0,-20.0,298.0
80.0,10.0,301.3
150.0,0.0,302.0
0.0,75.0,271.5
10.0,-70.0,271.0
170.0,-40.0,285.4
"""

TIMESERIES_CSV = """region,year,temperature_K
Atlantic,1850,18.00
Atlantic,1851,18.10
Atlantic,1852,18.05
Atlantic,1900,18.30
Atlantic,2014,18.64
Pacific,1850,20.00
Pacific,2014,20.50
"""

CALCITE_CSV = """region,lev,time,calc
Atlantic,500,1850,1.2e-3
Atlantic,500,1851,1.1e-3
Atlantic,500,2014,9.0e-4
Atlantic,1500,1900,2.0e-3
Atlantic,1500,2014,1.5e-3
Pacific,500,1850,5.0e-4
"""


@pytest.fixture
def data_dir(tmp_path):
    """Directory holding the three sample CSV files."""
    (tmp_path / SST_MAP_FILE).write_text(SST_MAP_CSV, encoding='utf-8')
    (tmp_path / TIMESERIES_FILE).write_text(TIMESERIES_CSV, encoding='utf-8')
    (tmp_path / CALCITE_FILE).write_text(CALCITE_CSV, encoding='utf-8')
    return tmp_path


@pytest.fixture
def datasets(data_dir):
    """Sample datasets loaded through the real loaders."""
    return load_datasets(data_dir)


@pytest.fixture
def resolver(datasets):
    """Resolver over the sample datasets."""
    return Resolver(datasets)


@pytest.fixture
def app_config(data_dir):
    """Config pointing at the sample data."""
    return OceanVizConfig(data_dir=data_dir)


@pytest.fixture
def empty_dir(tmp_path):
    """An existing directory with no data files."""
    empty = tmp_path / "empty"
    empty.mkdir()
    return empty


@pytest.fixture
def project_root():
    """Get the project root directory."""
    return Path(__file__).parent.parent
