"""
Formatting Utilities

Functions for formatting numeric values, slider readouts and the chart
annotation text. All functions accept None/NaN and render the placeholder.
"""

import math
from typing import Any, Optional

from oceanviz.config import MISSING_PLACEHOLDER, ANNOTATION_YEAR_FIRST
from oceanviz.core.resolver import SeriesSummary

CALCITE_UNITS = 'mol m<sup>−3</sup>'
TEMPERATURE_UNITS = 'K'


def _is_missing(val: Any) -> bool:
    if val is None:
        return True
    try:
        return math.isnan(float(val))
    except (TypeError, ValueError):
        return True


def format_sci(val: Optional[float], digits: int = 2) -> str:
    """
    Format a value in scientific notation as HTML.

    Examples
    --------
    >>> format_sci(0.00123)
    '1.23×10<sup>−3</sup>'
    >>> format_sci(0)
    '0'
    >>> format_sci(None)
    '—'
    """
    if _is_missing(val):
        return MISSING_PLACEHOLDER
    val = float(val)
    if val == 0:
        return '0'

    exp = math.floor(math.log10(abs(val)))
    mant = val / 10 ** exp
    sign = '' if exp >= 0 else '−'
    return f"{mant:.{digits}f}×10<sup>{sign}{abs(exp)}</sup>"


def fmt_num(val: Optional[float], digits: int = 2) -> str:
    """Fixed-decimal formatting, placeholder when missing."""
    if _is_missing(val):
        return MISSING_PLACEHOLDER
    return f"{float(val):.{digits}f}"


def format_delta(val: Optional[float], digits: int = 2) -> str:
    """
    Signed fixed-decimal formatting.

    Examples
    --------
    >>> format_delta(0.64)
    '+0.64'
    >>> format_delta(-0.1)
    '-0.10'
    """
    if _is_missing(val):
        return MISSING_PLACEHOLDER
    s = f"{float(val):.{digits}f}"
    return f"+{s}" if float(val) > 0 else s


def format_sci_delta(val: Optional[float], digits: int = 2) -> str:
    """Signed scientific formatting."""
    if _is_missing(val):
        return MISSING_PLACEHOLDER
    html = format_sci(val, digits)
    return f"+{html}" if float(val) > 0 else html


def level_depth_m(level: int) -> int:
    """Approximate depth in metres of a model level."""
    return round(level / 100)


# =============================================================================
# Readouts
# =============================================================================

def format_year_readout(year: Optional[int]) -> str:
    return MISSING_PLACEHOLDER if year is None else f"{year}"


def format_temperature_readout(temperature: Optional[float]) -> str:
    """'18.00&nbsp;K' or the placeholder."""
    if _is_missing(temperature):
        return MISSING_PLACEHOLDER
    return f"{fmt_num(temperature, 2)}&nbsp;{TEMPERATURE_UNITS}"


def format_calcite_readout(calcite: Optional[float]) -> str:
    """'1.23×10<sup>−3</sup>&nbsp;mol m<sup>−3</sup>' or the placeholder."""
    if _is_missing(calcite):
        return MISSING_PLACEHOLDER
    return f"{format_sci(calcite, 2)}&nbsp;{CALCITE_UNITS}"


# =============================================================================
# Annotations
# =============================================================================

def build_temperature_annotation(
    region: str,
    summary: SeriesSummary,
    year_first: int = ANNOTATION_YEAR_FIRST
) -> str:
    """
    Build the HTML annotation shown under the temperature chart.

    Parameters
    ----------
    region : str
        Region name
    summary : SeriesSummary
        Delta between the annotation years and the warmest record
    year_first : int
        First annotation year

    Returns
    -------
    str
        HTML paragraphs
    """
    if summary.extreme is not None:
        peak = (
            f", while reaching a peak of <strong>{fmt_num(summary.extreme.value, 2)} K</strong>"
            f" in {summary.extreme.year}"
        )
    else:
        peak = ""

    return (
        "<p>Global sea surface temperatures started rising rapidly after the middle of the "
        "20th century, reflecting the impact of industrial growth and increased fossil fuel "
        "emissions.</p>\n"
        f"<p>Since {year_first}, the {region} Ocean's mean sea surface temperature changed by "
        f"<strong>{format_delta(summary.delta, 2)} K</strong>{peak}.</p>"
    )


def build_calcite_annotation(
    region: str,
    level: int,
    summary: SeriesSummary,
    year_first: int = ANNOTATION_YEAR_FIRST
) -> str:
    """
    Build the HTML annotation shown under the calcite chart.

    Parameters
    ----------
    region : str
        Region name
    level : int
        Ocean model level
    summary : SeriesSummary
        Delta between the annotation years and the lowest record
    year_first : int
        First annotation year

    Returns
    -------
    str
        HTML paragraphs
    """
    depth = level_depth_m(level)

    if summary.extreme is not None:
        low = (
            f" Calcite concentration reached a low of "
            f"<strong>{format_sci(summary.extreme.value, 2)} {CALCITE_UNITS}</strong>"
            f" in {summary.extreme.year}."
        )
    else:
        low = ""

    return (
        "<p>Calcite concentration, a major indicator of the ocean's ability to neutralize "
        "acidity, has changed unevenly since industrialization. In places where it has "
        "declined, this change has left coral ecosystems and countless marine species more "
        "vulnerable to environmental degradation.</p>\n"
        f"<p>Since {year_first}, the {region} Ocean's calcite concentration at level {level} "
        f"({depth} m) changed by <strong>{format_sci_delta(summary.delta, 2)} {CALCITE_UNITS}"
        f"</strong>.{low}</p>"
    )
