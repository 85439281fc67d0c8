# -*- coding: utf-8 -*-
"""Tests for the keyword batch driver and its CLI."""

import json
import subprocess
import sys
from pathlib import Path

import pandas as pd
import pytest

from src.modules.lineage import DataLineage
from src.modules.title_matching.keyword_batch import (
    build_keyword_table,
    load_catalog,
    main,
    run_keyword_batch,
    run_match,
    write_keyword_table,
)
from src.modules.title_matching.models import CatalogProduct
from src.modules.title_matching.pipeline import generate_product_keywords
from src.utils.matcher_config import MatcherConfig

CATALOG_CSV = """id,sku,title,brand,seat_row,seat_number
1,SKU-A,Cohiba Siglo VI,Cohiba,52,150
2,SKU-B,Partagas Serie D No.4 Robusto,Partagas,50,124
3,007,高希霸 罗布图,高希霸,,
"""


@pytest.fixture
def catalog_path(tmp_path):
    path = tmp_path / "catalog.csv"
    path.write_text(CATALOG_CSV, encoding="utf-8")
    return path


# ============================================================================
# LOAD
# ============================================================================


class TestLoadCatalog:
    """Test load_catalog."""

    def test_loads_products(self, catalog_path):
        products = load_catalog(catalog_path)
        assert [p.sku for p in products] == ["SKU-A", "SKU-B", "007"]
        assert products[0].brand == "Cohiba"
        assert products[2].seat_row is None

    def test_custom_columns(self, tmp_path):
        path = tmp_path / "catalog.csv"
        path.write_text("货号,品名\nA1,Cohiba Robusto\n", encoding="utf-8")
        products = load_catalog(path, {"sku": "货号", "title": "品名"})
        assert products == [CatalogProduct(None, "A1", "Cohiba Robusto")]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_catalog(tmp_path / "missing.csv")

    def test_invalid_layout(self, tmp_path):
        path = tmp_path / "catalog.csv"
        path.write_text("sku,name\nA1,Cohiba Robusto\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_catalog(path)


# ============================================================================
# GENERATE
# ============================================================================


class TestBuildKeywordTable:
    """Test build_keyword_table."""

    def test_success(self, catalog_path):
        df, stats = build_keyword_table(load_catalog(catalog_path))
        assert stats == {"processed": 3, "failed": 0, "total": 3}
        assert list(df.columns) == [
            "sku",
            "title",
            "product_type",
            "keywords",
            "categories",
            "status",
        ]
        row = df[df["sku"] == "007"].iloc[0]
        keywords = json.loads(row["keywords"])
        categories = json.loads(row["categories"])
        assert "BRAND:Cohiba" in keywords
        assert len(categories) == len(keywords)
        assert categories[keywords.index("高希霸")] == "brand"

    def test_custom_vocabulary(self):
        products = [CatalogProduct("1", "SKU-L", "Cohiba Robusto 龙年")]
        vocabulary = {"special_edition": ["龙年"]}
        df, _ = build_keyword_table(products, vocabulary=vocabulary)
        row = df.iloc[0]
        keywords = json.loads(row["keywords"])
        categories = json.loads(row["categories"])
        assert categories[keywords.index("龙年")] == "special_edition"

    def test_failing_item_gets_fallback(self, tmp_path):
        def flaky(product):
            if product.sku == "BAD":
                raise ValueError("boom")
            return generate_product_keywords(product)

        products = [
            CatalogProduct("1", "GOOD", "Cohiba Robusto"),
            CatalogProduct("2", "BAD", "Bad title"),
        ]
        lineage = DataLineage(tmp_path)
        df, stats = build_keyword_table(products, lineage, keyword_fn=flaky)

        assert stats == {"processed": 1, "failed": 1, "total": 2}
        bad = df[df["sku"] == "BAD"].iloc[0]
        assert json.loads(bad["keywords"]) == ["Bad title"]
        assert bad["status"] == "fallback"
        assert json.loads(bad["categories"]) == ["generic"]
        assert df[df["sku"] == "GOOD"].iloc[0]["status"] == "success"
        assert lineage.summary()["failed"] == 1

    def test_duplicate_sku_last_wins(self):
        products = [
            CatalogProduct("1", "DUP", "Cohiba Robusto"),
            CatalogProduct("2", "DUP", "Partagas Lusitanias"),
        ]
        df, stats = build_keyword_table(products)
        assert len(df) == 1
        assert df.iloc[0]["title"] == "Partagas Lusitanias"
        assert stats["processed"] == 2


# ============================================================================
# WRITE / COMMANDS
# ============================================================================


class TestWriteKeywordTable:
    """Test write_keyword_table."""

    def test_writes_utf8_sig(self, tmp_path, catalog_path):
        df, _ = build_keyword_table(load_catalog(catalog_path))
        output = write_keyword_table(df, tmp_path / "out" / "keywords.csv")
        assert output.exists()
        assert output.read_bytes().startswith(b"\xef\xbb\xbf")
        loaded = pd.read_csv(output, encoding="utf-8-sig", dtype={"sku": str})
        assert "高希霸 罗布图" in loaded["title"].tolist()


class TestRunCommands:
    """Test run_keyword_batch and run_match."""

    def test_run_keyword_batch(self, tmp_path, catalog_path):
        config = MatcherConfig(data={"dirs": {"lineage": str(tmp_path / "lineage")}})
        output = tmp_path / "keywords.csv"
        stats = run_keyword_batch(catalog_path, output, config)
        assert stats["total"] == 3
        assert output.exists()
        assert len(list((tmp_path / "lineage").glob("lineage_*.csv"))) == 1

    def test_run_match(self, catalog_path):
        results = run_match(
            catalog_path, "高希霸 Siglo VI 52/150", top=1, config=MatcherConfig(data={})
        )
        assert len(results) == 1
        assert results[0].product.sku == "SKU-A"


# ============================================================================
# CLI
# ============================================================================


class TestKeywordBatchCLI:
    """Test command-line interface."""

    @staticmethod
    def run_cli_help():
        """Get help output from keyword_batch."""
        result = subprocess.run(
            [sys.executable, "-m", "src.modules.title_matching.keyword_batch", "--help"],
            cwd=Path(__file__).parent.parent,
            capture_output=True,
            text=True,
        )
        return result.returncode, result.stdout, result.stderr

    def test_help_shows_commands(self):
        """Help should list both commands and usage examples."""
        returncode, stdout, stderr = self.run_cli_help()
        assert returncode == 0
        assert "keywords" in stdout
        assert "match" in stdout
        assert "--config" in stdout

    def test_match_prints_json(self, catalog_path, capsys):
        returncode = main(
            ["match", "--catalog", str(catalog_path), "--title", "高希霸 Siglo VI 52/150"]
        )
        assert returncode == 0
        results = json.loads(capsys.readouterr().out)
        assert results[0]["sku"] == "SKU-A"
        assert results[0]["matched_terms"][0] == "BRAND:Cohiba"

    def test_missing_catalog_returns_error(self, tmp_path):
        assert main(["keywords", "--catalog", str(tmp_path / "missing.csv")]) == 1

    def test_missing_config_returns_error(self, catalog_path, tmp_path):
        args = ["--config", str(tmp_path / "missing.toml"), "keywords", "--catalog", str(catalog_path)]
        assert main(args) == 1
