"""
Ocean Region Definitions

The six clickable map boxes and hit-testing helpers. Pacific wraps the
antimeridian and is drawn as two boxes sharing one name; regions are keyed by
name everywhere else, so both boxes select the same data.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Region:
    """A named lon/lat box on the map."""
    name: str
    lon_range: Tuple[float, float]
    lat_range: Tuple[float, float]

    def contains(self, lon: float, lat: float) -> bool:
        """True if the point lies inside the box (edges included)."""
        return (
            self.lon_range[0] <= lon <= self.lon_range[1]
            and self.lat_range[0] <= lat <= self.lat_range[1]
        )

    @property
    def center(self) -> Tuple[float, float]:
        return (
            (self.lon_range[0] + self.lon_range[1]) / 2,
            (self.lat_range[0] + self.lat_range[1]) / 2,
        )


# Drawing order; later boxes sit on top of earlier ones
REGIONS: Tuple[Region, ...] = (
    Region('Atlantic', (-80, 20), (-60, 60)),
    Region('Pacific', (120, 180), (-60, 60)),
    Region('Pacific', (-180, -80), (-60, 60)),
    Region('Indian', (20, 120), (-60, 30)),
    Region('Arctic', (-180, 180), (60, 90)),
    Region('Southern', (-180, 180), (-90, -60)),
)

REGION_NAMES: Tuple[str, ...] = tuple(dict.fromkeys(r.name for r in REGIONS))


def region_at(lon: Optional[float], lat: Optional[float]) -> Optional[str]:
    """
    Return the name of the region box under a map point.

    Where boxes share an edge the one drawn last wins, matching what a
    click on the rendered map would hit.

    Parameters
    ----------
    lon, lat : float or None
        Map coordinates in degrees

    Returns
    -------
    str or None
        Region name, or None for points outside every box

    Examples
    --------
    >>> region_at(150, 0)
    'Pacific'
    >>> region_at(-150, 0)
    'Pacific'
    >>> region_at(60, 45) is None
    True
    """
    if lon is None or lat is None:
        return None

    for region in reversed(REGIONS):
        if region.contains(lon, lat):
            return region.name
    return None
