# -*- coding: utf-8 -*-
"""Unit tests for dimension parsing, formatting and unit conversion."""

import pytest

from src.modules.title_matching.core import (
    convert_dimension,
    find_dimension_text,
    format_dimensions,
    parse_dimensions,
)


class TestParseDimensions:
    """Test parse_dimensions."""

    def test_slash_form_keeps_strings(self):
        assert parse_dimensions("52/178") == {"ring_gauge": "52", "length": "178"}

    def test_slash_form_trims_parts(self):
        assert parse_dimensions(" 52 / 178 ") == {"ring_gauge": "52", "length": "178"}

    def test_length_first(self):
        assert parse_dimensions("178x52") == {"ring_gauge": 52, "length": 178}

    def test_ring_gauge_first(self):
        assert parse_dimensions("52 x 178") == {"ring_gauge": 52, "length": 178}

    def test_other_separators(self):
        assert parse_dimensions("124×50") == {"ring_gauge": 50, "length": 124}
        assert parse_dimensions("124*50") == {"ring_gauge": 50, "length": 124}

    def test_ring_gauge_out_of_range_uses_default_order(self):
        assert parse_dimensions("50x6") == {"ring_gauge": 6, "length": 50}

    def test_several_slashes_fall_through(self):
        assert parse_dimensions("1/2/3") == {"ring_gauge": None, "length": None}

    @pytest.mark.parametrize("value", ["", None, "Robusto"])
    def test_nothing_found(self, value):
        assert parse_dimensions(value) == {"ring_gauge": None, "length": None}


class TestFindDimensionText:
    """Test find_dimension_text."""

    def test_finds_spaced_pair(self):
        assert find_dimension_text("Cohiba Robusto 50 x 124mm") == "50 x 124"

    def test_finds_slash_pair(self):
        assert find_dimension_text("高希霸 Siglo VI 52/150") == "52/150"

    def test_cross_pair_preferred_over_date(self):
        assert find_dimension_text("Cohiba Robusto 2023/12 到货 50x124") == "50x124"

    def test_slash_pair_outside_ring_range_skipped(self):
        assert find_dimension_text("Robusto 到货 2023/12 52/150") == "52/150"
        assert find_dimension_text("Cohiba 2023/12 到货") is None

    def test_none_when_absent(self):
        assert find_dimension_text("Cohiba Robusto") is None
        assert find_dimension_text("") is None


class TestFormatDimensions:
    """Test format_dimensions."""

    def test_integral_floats_rendered_without_decimals(self):
        assert format_dimensions(52.0, 178) == "52/178"

    def test_strings(self):
        assert format_dimensions("52", "178") == "52/178"

    def test_missing_value(self):
        assert format_dimensions(None, 178) == ""
        assert format_dimensions(52, "") == ""


class TestConvertDimension:
    """Test convert_dimension."""

    def test_inch_to_mm(self):
        assert convert_dimension(1, "inch", "mm") == pytest.approx(25.4)

    def test_cm_to_mm(self):
        assert convert_dimension(10, "cm", "mm") == pytest.approx(100.0)

    def test_mm_to_inch(self):
        assert convert_dimension(254, "mm", "inch") == pytest.approx(10.0)

    def test_unknown_target_unit_returns_mm(self):
        assert convert_dimension(1, "cm", "furlong") == pytest.approx(10.0)

    def test_numeric_string(self):
        assert convert_dimension("10", "cm", "mm") == pytest.approx(100.0)

    @pytest.mark.parametrize("value", ["abc", "", None])
    def test_non_numeric_value_returns_none(self, value):
        assert convert_dimension(value, "mm", "cm") is None
