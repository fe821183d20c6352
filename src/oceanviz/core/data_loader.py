"""
Ocean Data Loading Module

Handles loading the three OceanViz CSV datasets into typed, immutable records.
Provides one loader per source plus an all-or-nothing join over the three.
"""

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Sequence, Tuple

import pandas as pd

from oceanviz.config import (
    DEFAULT_DATA_DIR,
    SST_MAP_FILE,
    TIMESERIES_FILE,
    CALCITE_FILE,
)
from oceanviz.core.errors import DataLoadError

logger = logging.getLogger(__name__)


# =============================================================================
# Record Types
# =============================================================================

@dataclass(frozen=True)
class GridPoint:
    """One cell of the mean sea-surface-temperature map."""
    lon: float
    lat: float
    value: float


@dataclass(frozen=True)
class TemperatureRecord:
    """Annual mean sea-surface temperature of a region, in Kelvin."""
    region: str
    year: int
    temperature_k: float

    @property
    def value(self) -> float:
        return self.temperature_k


@dataclass(frozen=True)
class CalciteRecord:
    """Annual calcite concentration of a region at one model level (mol m-3)."""
    region: str
    level: int
    year: int
    calcite: float

    @property
    def value(self) -> float:
        return self.calcite


@dataclass(frozen=True)
class Datasets:
    """The three fully materialised datasets, shared read-only after load."""
    grid: Tuple[GridPoint, ...]
    temperature: Tuple[TemperatureRecord, ...]
    calcite: Tuple[CalciteRecord, ...]


# =============================================================================
# CSV Parsing
# =============================================================================

def _read_csv(path: Path | str, columns: Sequence[str]) -> pd.DataFrame:
    """
    Read a CSV file and check that all required header columns exist.

    Raises
    ------
    DataLoadError
        If the file cannot be read or a column is missing
    """
    path = Path(path)
    source = path.name

    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding='utf-8')
    except FileNotFoundError:
        raise DataLoadError([source], f"Data file not found: {path}")
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise DataLoadError([source], f"Could not read {path}: {e}") from e

    df.columns = [c.strip() for c in df.columns]
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise DataLoadError([source], f"{source} is missing column(s): {', '.join(missing)}")

    return df


def _numeric(df: pd.DataFrame, column: str, source: str, integer: bool = False) -> pd.Series:
    """Parse a column as numbers, failing on the first unparseable row."""
    values = pd.to_numeric(df[column].str.strip(), errors='coerce')

    bad = values.isna()
    if integer:
        bad |= values.notna() & (values % 1 != 0)

    if bad.any():
        row = int(bad.idxmax())
        raise DataLoadError(
            [source],
            f"{source}: invalid {column} value {df[column].iloc[row]!r} on data row {row + 1}"
        )

    return values.astype(int) if integer else values.astype(float)


def _warn_duplicates(keys: List[tuple], source: str) -> None:
    """Log keys occurring more than once; lookups keep the first occurrence."""
    dupes = [k for k, n in Counter(keys).items() if n > 1]
    if dupes:
        logger.warning(
            f"{source}: {len(dupes)} duplicate key(s), first match wins (e.g. {dupes[0]})"
        )


# =============================================================================
# Loaders
# =============================================================================

def load_grid_points(path: Path | str) -> Tuple[GridPoint, ...]:
    """
    Load the mean SST map (columns ``lon,lat,value``).

    Parameters
    ----------
    path : Path or str
        Path to sst_mean_map.csv

    Returns
    -------
    tuple of GridPoint
        Grid points in file order

    Raises
    ------
    DataLoadError
        If the file cannot be read or parsed
    """
    source = Path(path).name
    df = _read_csv(path, ['lon', 'lat', 'value'])

    lon = _numeric(df, 'lon', source)
    lat = _numeric(df, 'lat', source)
    value = _numeric(df, 'value', source)

    points = tuple(
        GridPoint(lon=float(x), lat=float(y), value=float(v))
        for x, y, v in zip(lon, lat, value)
    )
    logger.info(f"Loaded {len(points)} grid points from {source}")
    return points


def load_temperature_series(path: Path | str) -> Tuple[TemperatureRecord, ...]:
    """
    Load regional temperature time series (columns ``region,year,temperature_K``).

    Parameters
    ----------
    path : Path or str
        Path to ocean_timeseries.csv

    Returns
    -------
    tuple of TemperatureRecord
        Records in file order

    Raises
    ------
    DataLoadError
        If the file cannot be read or parsed
    """
    source = Path(path).name
    df = _read_csv(path, ['region', 'year', 'temperature_K'])

    years = _numeric(df, 'year', source, integer=True)
    temps = _numeric(df, 'temperature_K', source)

    records = tuple(
        TemperatureRecord(region=str(r), year=int(y), temperature_k=float(t))
        for r, y, t in zip(df['region'], years, temps)
    )
    _warn_duplicates([(r.region, r.year) for r in records], source)

    logger.info(f"Loaded {len(records)} temperature records from {source}")
    return records


def load_calcite_series(path: Path | str) -> Tuple[CalciteRecord, ...]:
    """
    Load calcite concentration series (columns ``region,lev,time,calc``).

    ``time`` is the year and ``lev`` the ocean model level.

    Parameters
    ----------
    path : Path or str
        Path to calc_by_region.csv

    Returns
    -------
    tuple of CalciteRecord
        Records in file order

    Raises
    ------
    DataLoadError
        If the file cannot be read or parsed
    """
    source = Path(path).name
    df = _read_csv(path, ['region', 'lev', 'time', 'calc'])

    levels = _numeric(df, 'lev', source, integer=True)
    years = _numeric(df, 'time', source, integer=True)
    calc = _numeric(df, 'calc', source)

    records = tuple(
        CalciteRecord(region=str(r), level=int(lv), year=int(y), calcite=float(c))
        for r, lv, y, c in zip(df['region'], levels, years, calc)
    )
    _warn_duplicates([(r.region, r.level, r.year) for r in records], source)

    logger.info(f"Loaded {len(records)} calcite records from {source}")
    return records


# =============================================================================
# All-or-nothing Join
# =============================================================================

def load_datasets(
    data_dir: Path | str = DEFAULT_DATA_DIR,
    sst_map_file: str = SST_MAP_FILE,
    timeseries_file: str = TIMESERIES_FILE,
    calcite_file: str = CALCITE_FILE,
) -> Datasets:
    """
    Load all three datasets, succeeding only if every loader succeeds.

    The loaders run concurrently; the call returns once all of them have
    finished.

    Parameters
    ----------
    data_dir : Path or str
        Directory containing the CSV files
    sst_map_file, timeseries_file, calcite_file : str
        File names inside ``data_dir``

    Returns
    -------
    Datasets
        The loaded datasets

    Raises
    ------
    DataLoadError
        Listing every source that failed

    Examples
    --------
    >>> datasets = load_datasets('data/')
    >>> len(datasets.temperature)
    825
    """
    data_dir = Path(data_dir)

    jobs: Dict[str, Tuple[Callable, Path]] = {
        'grid': (load_grid_points, data_dir / sst_map_file),
        'temperature': (load_temperature_series, data_dir / timeseries_file),
        'calcite': (load_calcite_series, data_dir / calcite_file),
    }

    results = {}
    failures: Dict[str, Exception] = {}

    with ThreadPoolExecutor(max_workers=len(jobs), thread_name_prefix='oceanviz-load') as pool:
        futures = {key: pool.submit(loader, path) for key, (loader, path) in jobs.items()}

        for key, future in futures.items():
            try:
                results[key] = future.result()
            except DataLoadError as e:
                failures[jobs[key][1].name] = e
            except Exception as e:
                logger.error(f"Unexpected error loading {jobs[key][1]}: {e}", exc_info=True)
                failures[jobs[key][1].name] = e

    if failures:
        detail = '; '.join(str(e) for e in failures.values())
        raise DataLoadError(failures.keys(), f"Failed to load data: {detail}")

    return Datasets(
        grid=results['grid'],
        temperature=results['temperature'],
        calcite=results['calcite'],
    )
