"""Tests for readout and annotation formatting."""
import math

import pytest

from oceanviz.core.data_loader import TemperatureRecord, CalciteRecord
from oceanviz.core.resolver import SeriesSummary
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


class TestNumberFormatting:
    """Tests for the numeric formatters."""

    def test_format_sci_negative_exponent(self):
        assert format_sci(0.00123) == '1.23×10<sup>−3</sup>'

    def test_format_sci_positive_exponent(self):
        assert format_sci(12345) == '1.23×10<sup>4</sup>'

    def test_format_sci_zero(self):
        assert format_sci(0) == '0'

    @pytest.mark.parametrize("value", [None, math.nan, "n/a"])
    def test_missing_values_render_placeholder(self, value):
        assert format_sci(value) == '—'
        assert fmt_num(value) == '—'
        assert format_delta(value) == '—'

    def test_fmt_num(self):
        assert fmt_num(18) == '18.00'
        assert fmt_num(18.6449, 1) == '18.6'

    def test_format_delta_sign(self):
        assert format_delta(0.64) == '+0.64'
        assert format_delta(-0.1) == '-0.10'
        assert format_delta(0) == '0.00'

    def test_format_sci_delta_sign(self):
        assert format_sci_delta(3.0e-4) == '+3.00×10<sup>−4</sup>'
        assert format_sci_delta(-3.0e-4).startswith('-3.00')

    def test_level_depth(self):
        assert level_depth_m(500) == 5
        assert level_depth_m(14500) == 145


class TestReadouts:
    """Tests for the Year / Temp / Calc readout strings."""

    def test_year(self):
        assert format_year_readout(1850) == '1850'
        assert format_year_readout(None) == '—'

    def test_temperature(self):
        assert format_temperature_readout(18.0) == '18.00&nbsp;K'
        assert format_temperature_readout(None) == '—'

    def test_calcite(self):
        assert format_calcite_readout(1.2e-3) == '1.20×10<sup>−3</sup>&nbsp;mol m<sup>−3</sup>'
        assert format_calcite_readout(None) == '—'


class TestAnnotations:
    """Tests for the chart annotation text."""

    def test_temperature_annotation(self):
        summary = SeriesSummary(delta=0.64, extreme=TemperatureRecord('Atlantic', 2014, 18.64))

        html = build_temperature_annotation('Atlantic', summary, 1850)

        assert "Since 1850, the Atlantic Ocean's mean sea surface temperature" in html
        assert "<strong>+0.64 K</strong>" in html
        assert "peak of <strong>18.64 K</strong> in 2014" in html

    def test_temperature_annotation_without_data(self):
        html = build_temperature_annotation('Arctic', SeriesSummary(None, None), 1850)

        assert "<strong>— K</strong>" in html
        assert "peak" not in html

    def test_calcite_annotation(self):
        summary = SeriesSummary(
            delta=-3.0e-4,
            extreme=CalciteRecord('Atlantic', 500, 2014, 9.0e-4)
        )

        html = build_calcite_annotation('Atlantic', 500, summary, 1850)

        assert "at level 500 (5 m)" in html
        assert "-3.00×10<sup>−4</sup>" in html
        assert "reached a low of <strong>9.00×10<sup>−4</sup>" in html
        assert "in 2014." in html
