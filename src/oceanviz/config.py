"""
OceanViz Configuration Module

This module contains all global configuration, constants, and default settings
for the OceanViz application.
"""

import logging
from pathlib import Path
from dataclasses import dataclass

logger = logging.getLogger(__name__)


# =============================================================================
# Default Paths
# =============================================================================

# Directory holding the three input CSV files
DEFAULT_DATA_DIR = Path('data')

SST_MAP_FILE = 'sst_mean_map.csv'
TIMESERIES_FILE = 'ocean_timeseries.csv'
CALCITE_FILE = 'calc_by_region.csv'


# =============================================================================
# Vertical Levels
# =============================================================================

# Ocean model levels available in calc_by_region.csv
LEVELS = tuple(range(500, 15000, 1000))

DEFAULT_LEVEL = LEVELS[0]


# =============================================================================
# Annotation Settings
# =============================================================================

# Endpoints used for the "changed by ... since" sentences
ANNOTATION_YEAR_FIRST = 1850
ANNOTATION_YEAR_LAST = 2014


# =============================================================================
# Plot Settings
# =============================================================================

MAP_BIN_COUNT = 5
MAP_WIDTH = 800
MAP_HEIGHT = 400
CHART_WIDTH = 800
CHART_HEIGHT = 400

# Placeholder shown for any missing value
MISSING_PLACEHOLDER = '—'


# =============================================================================
# Configuration Dataclass
# =============================================================================

@dataclass
class OceanVizConfig:
    """
    OceanViz configuration with sensible defaults.

    Values can be overridden from a ``[oceanviz]`` table in a config.toml.
    """

    # Data files
    data_dir: Path = DEFAULT_DATA_DIR
    sst_map_file: str = SST_MAP_FILE
    timeseries_file: str = TIMESERIES_FILE
    calcite_file: str = CALCITE_FILE

    # Annotation endpoints
    annotation_years: tuple = (ANNOTATION_YEAR_FIRST, ANNOTATION_YEAR_LAST)

    # Map
    map_bin_count: int = MAP_BIN_COUNT

    @classmethod
    def load_from_file(cls, config_path: Path | None = None) -> 'OceanVizConfig':
        """
        Load configuration from TOML file if exists, otherwise use defaults.

        Parameters
        ----------
        config_path : Path, optional
            Path to configuration file. If None, searches for config.toml
            in current directory or ~/.oceanviz/

        Returns
        -------
        OceanVizConfig
            Configuration instance
        """
        # Search paths: specified path -> ./config.toml -> ~/.oceanviz/config.toml
        search_paths = [
            config_path,
            Path.cwd() / 'config.toml',
            Path.home() / '.oceanviz' / 'config.toml'
        ]

        for path in search_paths:
            if path and Path(path).exists():
                try:
                    import tomllib
                    with open(path, 'rb') as f:
                        data = tomllib.load(f)
                        oceanviz_config = data.get('oceanviz', {})

                        years = oceanviz_config.get(
                            'annotation_years',
                            (ANNOTATION_YEAR_FIRST, ANNOTATION_YEAR_LAST)
                        )

                        return cls(
                            data_dir=Path(oceanviz_config.get('data_dir', DEFAULT_DATA_DIR)),
                            sst_map_file=oceanviz_config.get('sst_map_file', SST_MAP_FILE),
                            timeseries_file=oceanviz_config.get('timeseries_file', TIMESERIES_FILE),
                            calcite_file=oceanviz_config.get('calcite_file', CALCITE_FILE),
                            annotation_years=(int(years[0]), int(years[1])),
                            map_bin_count=int(oceanviz_config.get('map_bin_count', MAP_BIN_COUNT)),
                        )
                except Exception as e:
                    logger.warning(f"Failed to load config from {path}: {e}")
                    # Fall through to use defaults

        # No config file found or loading failed, use defaults
        return cls()


# =============================================================================
# Global Config Instance
# =============================================================================

# Default configuration instance (can be overridden by loading from file)
config = OceanVizConfig()
