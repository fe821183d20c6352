"""
OceanViz Utilities

Formatting helpers for readouts and chart annotations.
"""

from oceanviz.utils.formatting import (
    format_sci,
    fmt_num,
    format_delta,
    format_sci_delta,
    level_depth_m,
    format_year_readout,
    format_temperature_readout,
    format_calcite_readout,
    build_temperature_annotation,
    build_calcite_annotation,
)

__all__ = [
    'format_sci',
    'fmt_num',
    'format_delta',
    'format_sci_delta',
    'level_depth_m',
    'format_year_readout',
    'format_temperature_readout',
    'format_calcite_readout',
    'build_temperature_annotation',
    'build_calcite_annotation',
]
