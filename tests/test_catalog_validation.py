# -*- coding: utf-8 -*-
"""Tests for catalog schema validation."""

import logging

import pandas as pd

from src.pipeline.validation import validate_catalog


class TestValidateCatalog:
    """Test validate_catalog."""

    def test_valid(self):
        df = pd.DataFrame({"sku": ["A", "B"], "title": ["Cohiba Robusto", "高希霸"]})
        assert validate_catalog(df) is True

    def test_empty(self):
        df = pd.DataFrame(columns=["sku", "title"])
        assert validate_catalog(df) is False

    def test_missing_title_column(self):
        df = pd.DataFrame({"sku": ["A"], "name": ["Cohiba Robusto"]})
        assert validate_catalog(df) is False

    def test_blank_sku(self):
        df = pd.DataFrame({"sku": ["A", " ", None], "title": ["x", "y", "z"]})
        assert validate_catalog(df) is False

    def test_duplicate_sku_warns(self, caplog):
        df = pd.DataFrame({"sku": ["A", "A"], "title": ["x", "y"]})
        with caplog.at_level(logging.WARNING):
            assert validate_catalog(df, source="dup.csv") is True
        assert "duplicate" in caplog.text

    def test_custom_columns(self):
        df = pd.DataFrame({"货号": ["A"], "品名": ["Cohiba Robusto"]})
        assert validate_catalog(df, {"sku": "货号", "title": "品名"}) is True
