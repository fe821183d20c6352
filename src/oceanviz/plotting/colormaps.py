"""
Colormap Management Module

This module provides the discrete colour binning used by the SST map:
- Quantile bin edges computed from the map values
- A cold-to-warm diverging palette with one colour per bin
- Value classification into bins (for the legend point counts)
"""

import logging
from typing import List, Sequence

import numpy as np
from bokeh.palettes import RdYlBu

from oceanviz.config import MAP_BIN_COUNT

logger = logging.getLogger(__name__)


# =============================================================================
# Palette
# =============================================================================

def get_bin_palette(n_bins: int = MAP_BIN_COUNT) -> List[str]:
    """
    Get the hex palette for ``n_bins`` discrete bins.

    Bokeh's RdYlBu runs red to blue; it is reversed so the lowest bin is blue.

    Parameters
    ----------
    n_bins : int
        Number of bins (3 to 11)

    Returns
    -------
    list of str
        Hex colours, lowest bin first

    Examples
    --------
    >>> len(get_bin_palette(5))
    5
    """
    if n_bins not in RdYlBu:
        raise ValueError(f"RdYlBu has no {n_bins}-colour palette")
    return list(reversed(RdYlBu[n_bins]))


# =============================================================================
# Quantile Binning
# =============================================================================

def quantile_edges(values: Sequence[float], n_bins: int = MAP_BIN_COUNT) -> List[float]:
    """
    Compute ``n_bins + 1`` quantile bin edges (min, inner thresholds, max).

    Parameters
    ----------
    values : sequence of float
        Map values
    n_bins : int
        Number of equal-count bins

    Returns
    -------
    list of float
        Bin edges; empty if there are no values

    Examples
    --------
    >>> quantile_edges([0, 1, 2, 3, 4, 5], n_bins=2)
    [0.0, 2.5, 5.0]
    """
    arr = np.asarray(values, dtype=float)
    arr = arr[np.isfinite(arr)]
    if arr.size == 0:
        return []

    probs = np.linspace(0, 1, n_bins + 1)
    return [float(q) for q in np.quantile(arr, probs)]


def classify(value: float, edges: Sequence[float]) -> int:
    """
    Return the bin index of a value.

    Only the inner thresholds matter; values beyond the outer edges land in
    the first or last bin. A value equal to a threshold falls into the upper
    bin.

    Examples
    --------
    >>> classify(2.5, [0.0, 1.0, 2.0, 3.0, 4.0, 5.0])
    2
    >>> classify(1.0, [0.0, 1.0, 2.0, 3.0, 4.0, 5.0])
    1
    """
    return int(np.searchsorted(edges[1:-1], value, side='right'))


def bin_counts(values: Sequence[float], edges: Sequence[float]) -> List[int]:
    """
    Count the values falling into each bin.

    Parameters
    ----------
    values : sequence of float
        Map values; non-finite values are skipped
    edges : sequence of float
        Bin edges from quantile_edges

    Returns
    -------
    list of int
        One count per bin, lowest bin first
    """
    counts = [0] * max(len(edges) - 1, 0)
    if not counts:
        return counts
    for value in values:
        if np.isfinite(value):
            counts[classify(value, edges)] += 1
    return counts
