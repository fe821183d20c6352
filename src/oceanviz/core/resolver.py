"""
Derived-Value Resolver

Pure lookups over the immutable datasets: point values for a
(region, year) or (region, level, year), deltas between two years, and the
extremes used by the chart annotations.

Every lookup is total. A combination missing from the data is returned as
``None`` and rendered as a placeholder by the views; nothing here raises.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from oceanviz.core.data_loader import Datasets, TemperatureRecord, CalciteRecord

logger = logging.getLogger(__name__)

SeriesRecord = Union[TemperatureRecord, CalciteRecord]


@dataclass(frozen=True)
class SeriesSummary:
    """Annotation statistics for one series."""
    delta: Optional[float]
    extreme: Optional[SeriesRecord]


def extremum(
    series: Sequence[SeriesRecord],
    comparator: Callable = max
) -> Optional[SeriesRecord]:
    """
    Return the record maximising (``max``) or minimising (``min``) its value.

    Parameters
    ----------
    series : sequence of TemperatureRecord or CalciteRecord
        Records to scan
    comparator : callable, default=max
        ``max`` or ``min``; called with ``key=record.value``

    Returns
    -------
    record or None
        The extreme record (first one on ties), None if the series is empty

    Examples
    --------
    >>> extremum(resolver.temperature_series('Atlantic')).year
    2014
    """
    if not series:
        return None
    return comparator(series, key=lambda r: r.value)


class Resolver:
    """
    Stateless lookup layer over loaded datasets.

    Indexes are built once at construction. For duplicate keys the first
    record in file order wins.

    Parameters
    ----------
    datasets : Datasets
        Loaded datasets

    Examples
    --------
    >>> resolver = Resolver(load_datasets('data/'))
    >>> resolver.temperature_at('Atlantic', 1850)
    18.0
    >>> resolver.calcite_at('Atlantic', 500, 1700) is None
    True
    """

    def __init__(self, datasets: Datasets):
        self.datasets = datasets

        self._temperature: Dict[Tuple[str, int], TemperatureRecord] = {}
        self._temperature_by_region: Dict[str, List[TemperatureRecord]] = {}
        for rec in datasets.temperature:
            if (rec.region, rec.year) in self._temperature:
                continue
            self._temperature[(rec.region, rec.year)] = rec
            self._temperature_by_region.setdefault(rec.region, []).append(rec)

        self._calcite: Dict[Tuple[str, int, int], CalciteRecord] = {}
        self._calcite_by_series: Dict[Tuple[str, int], List[CalciteRecord]] = {}
        for rec in datasets.calcite:
            if (rec.region, rec.level, rec.year) in self._calcite:
                continue
            self._calcite[(rec.region, rec.level, rec.year)] = rec
            self._calcite_by_series.setdefault((rec.region, rec.level), []).append(rec)

        for series in self._temperature_by_region.values():
            series.sort(key=lambda r: r.year)
        for series in self._calcite_by_series.values():
            series.sort(key=lambda r: r.year)

        logger.debug(
            f"Resolver indexed {len(self._temperature)} temperature and "
            f"{len(self._calcite)} calcite keys"
        )

    # =========================================================================
    # Point Lookups
    # =========================================================================

    def temperature_at(self, region: Optional[str], year: Optional[int]) -> Optional[float]:
        """Temperature (K) for a region and year, None if absent."""
        rec = self._temperature.get((region, year))
        return rec.temperature_k if rec is not None else None

    def calcite_at(
        self,
        region: Optional[str],
        level: Optional[int],
        year: Optional[int]
    ) -> Optional[float]:
        """Calcite concentration for a region, level and year, None if absent."""
        rec = self._calcite.get((region, level, year))
        return rec.calcite if rec is not None else None

    def delta_since(
        self,
        region: Optional[str],
        level: Optional[int],
        year_a: int,
        year_b: int
    ) -> Optional[float]:
        """
        Change in value from ``year_a`` to ``year_b``.

        With ``level=None`` the temperature series is used, otherwise the
        calcite series at that level.

        Returns
        -------
        float or None
            ``value(year_b) - value(year_a)``, None if either endpoint is missing
        """
        if level is None:
            first = self.temperature_at(region, year_a)
            last = self.temperature_at(region, year_b)
        else:
            first = self.calcite_at(region, level, year_a)
            last = self.calcite_at(region, level, year_b)

        if first is None or last is None:
            return None
        return last - first

    # =========================================================================
    # Series Queries
    # =========================================================================

    def region_names(self) -> List[str]:
        """Regions present in the temperature dataset, in first-seen order."""
        return list(self._temperature_by_region.keys())

    def temperature_series(self, region: Optional[str]) -> List[TemperatureRecord]:
        """Temperature records of a region sorted by year (exact name match)."""
        return list(self._temperature_by_region.get(region, []))

    def calcite_series(self, region: Optional[str], level: Optional[int]) -> List[CalciteRecord]:
        """Calcite records of a region at one level sorted by year."""
        return list(self._calcite_by_series.get((region, level), []))

    def years(self, region: Optional[str]) -> List[int]:
        """Sorted years recorded in the temperature series of a region."""
        return [r.year for r in self._temperature_by_region.get(region, [])]

    def year_range(self, region: Optional[str]) -> Optional[Tuple[int, int]]:
        """(min, max) temperature year of a region, None if it has no data."""
        series = self._temperature_by_region.get(region)
        if not series:
            return None
        return (series[0].year, series[-1].year)

    # =========================================================================
    # Annotation Statistics
    # =========================================================================

    def temperature_summary(self, region: Optional[str], year_a: int, year_b: int) -> SeriesSummary:
        """Temperature change between two years and the warmest record."""
        return SeriesSummary(
            delta=self.delta_since(region, None, year_a, year_b),
            extreme=extremum(self._temperature_by_region.get(region, []), max),
        )

    def calcite_summary(
        self,
        region: Optional[str],
        level: int,
        year_a: int,
        year_b: int
    ) -> SeriesSummary:
        """Calcite change between two years and the lowest record."""
        return SeriesSummary(
            delta=self.delta_since(region, level, year_a, year_b),
            extreme=extremum(self._calcite_by_series.get((region, level), []), min),
        )
