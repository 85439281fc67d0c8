# -*- coding: utf-8 -*-
"""Keyword batch: build the keyword table for a whole catalog.

Workflow:
1. Load: read the catalog CSV and validate its layout
2. Generate: tagged keywords + product type per product
   (a failing product gets the fallback keyword list [title] and the run goes on)
3. Write: keyword table CSV keyed by SKU (last row wins), lineage CSV

Also exposes a "match" command that scores a single supplier title
against the catalog.

Usage:
    python -m src.modules.title_matching.keyword_batch keywords --catalog data/catalog.csv
    python -m src.modules.title_matching.keyword_batch match --catalog data/catalog.csv --title "高希霸 世纪6号"
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import pandas as pd

from src.modules.lineage import DataLineage
from src.pipeline.validation import validate_catalog
from src.utils import ensure_dir
from src.utils.matcher_config import MatcherConfig, load_matcher_config

from .constants import CATEGORY_GENERIC
from .core import detect_product_type
from .matching import rank_candidates
from .models import CatalogProduct, MatchResult
from .pipeline import categorize_keywords, generate_product_keywords

logger = logging.getLogger(__name__)

OPERATION_NAME = "generate_keywords"
KEYWORD_TABLE_COLUMNS = [
    "sku",
    "title",
    "product_type",
    "keywords",
    "categories",
    "status",
]


# === LOAD ===


def load_catalog(
    csv_path: Path, columns: Optional[Dict[str, str]] = None
) -> List[CatalogProduct]:
    """Read a catalog CSV into CatalogProduct records.

    Args:
        csv_path: Path to catalog CSV.
        columns: Field name → column name map.

    Returns:
        Products in file order.

    Raises:
        FileNotFoundError: If the CSV does not exist.
        ValueError: If the catalog fails schema validation.
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Catalog not found: {csv_path}")

    df = pd.read_csv(csv_path, dtype={(columns or {}).get("sku", "sku"): str})
    if not validate_catalog(df, columns, source=csv_path.name):
        raise ValueError(f"Catalog failed validation: {csv_path}")

    products = [
        CatalogProduct.from_mapping(row, columns) for _, row in df.iterrows()
    ]
    logger.info(f"Loaded {len(products)} products from {csv_path}")
    return products


# === GENERATE ===


def fallback_keywords(product: CatalogProduct) -> List[str]:
    """Keyword list used when generation fails: the whole title as one term."""
    return [product.title] if product.title else []


def build_keyword_table(
    products: Sequence[CatalogProduct],
    lineage: Optional[DataLineage] = None,
    keyword_fn: Callable[[CatalogProduct], List[str]] = generate_product_keywords,
    vocabulary: Optional[Dict[str, List[str]]] = None,
) -> Tuple[pd.DataFrame, Dict[str, int]]:
    """Generate keywords for every product, never aborting on a bad item.

    Args:
        products: Catalog products.
        lineage: Optional lineage tracker (one entry per product).
        keyword_fn: Keyword generator for one product.
        vocabulary: Category → words table for keyword categorization.

    Returns:
        Tuple of (keyword table DataFrame, stats dict with
        processed/failed/total counts)
    """
    rows: Dict[str, Dict[str, str]] = {}
    stats = {"processed": 0, "failed": 0, "total": len(products)}

    for row_idx, product in enumerate(products):
        try:
            keywords = keyword_fn(product)
            product_type = detect_product_type(product.title)
            categories = [
                item["category"]
                for item in categorize_keywords(
                    keywords, {"brand": product.brand}, vocabulary
                )
            ]
            status = "success"
            stats["processed"] += 1
            if lineage is not None:
                lineage.track(product.sku, row_idx, OPERATION_NAME)
        except Exception as e:
            logger.error(
                f"Keyword generation failed for {product.sku} (row {row_idx}): {e}"
            )
            keywords = fallback_keywords(product)
            product_type = ""
            categories = [CATEGORY_GENERIC] * len(keywords)
            status = "fallback"
            stats["failed"] += 1
            if lineage is not None:
                lineage.track_failure(product.sku, row_idx, OPERATION_NAME, e)

        if product.sku in rows:
            logger.debug(f"Upserting duplicate SKU {product.sku} (row {row_idx})")

        rows[product.sku] = {
            "sku": product.sku,
            "title": product.title,
            "product_type": product_type,
            "keywords": json.dumps(keywords, ensure_ascii=False),
            "categories": json.dumps(categories, ensure_ascii=False),
            "status": status,
        }

        if (row_idx + 1) % 500 == 0:
            logger.info(f"Progress: {row_idx + 1}/{len(products)} products")

    df = pd.DataFrame(list(rows.values()), columns=KEYWORD_TABLE_COLUMNS)

    logger.info(
        f"build_keyword_table: {stats['processed']} processed, "
        f"{stats['failed']} failed, {len(df)} unique SKUs"
    )
    return df, stats


# === WRITE ===


def write_keyword_table(df: pd.DataFrame, output_path: Path) -> Path:
    """Write the keyword table as CSV (utf-8-sig so spreadsheets keep Chinese)."""
    output_path = Path(output_path)
    ensure_dir(output_path.parent)
    df.to_csv(output_path, index=False, encoding="utf-8-sig")
    logger.info(f"Keyword table saved to: {output_path}")
    return output_path


# === COMMANDS ===


def run_keyword_batch(
    catalog_path: Path,
    output_path: Optional[Path] = None,
    config: Optional[MatcherConfig] = None,
) -> Dict[str, int]:
    """Full keyword batch: load → generate → write (+ lineage).

    Returns:
        Stats dict with processed/failed/total counts
    """
    config = config or load_matcher_config()
    output_path = Path(output_path or config.output_dir / "keywords.csv")

    logger.info("=" * 70)
    logger.info(f"Keyword batch: {catalog_path} → {output_path}")

    products = load_catalog(catalog_path, config.catalog_columns)
    lineage = DataLineage(config.lineage_dir)

    df, stats = build_keyword_table(
        products, lineage, vocabulary=config.vocabulary_categories
    )
    write_keyword_table(df, output_path)
    lineage.save()

    logger.info("=" * 70)
    logger.info(
        f"Keyword batch complete: {stats['processed']}/{stats['total']} processed, "
        f"{stats['failed']} failed"
    )
    return stats


def run_match(
    catalog_path: Path,
    title: str,
    top: int = 5,
    config: Optional[MatcherConfig] = None,
) -> List[MatchResult]:
    """Rank catalog products for a single supplier title."""
    config = config or load_matcher_config()
    products = load_catalog(catalog_path, config.catalog_columns)
    results = rank_candidates(title, products, limit=top, weights=config.weights)

    if not results:
        logger.warning(f"No catalog match for '{title}'")
    return results


# === MAIN ===


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Cigar title matcher: catalog keywords and supplier title matching",
        epilog="""
 Examples:
   # Build keyword table for the whole catalog
   python -m src.modules.title_matching.keyword_batch keywords --catalog data/catalog.csv

   # Custom output and config
   python -m src.modules.title_matching.keyword_batch keywords --catalog data/catalog.csv --output out/keywords.csv --config matcher.toml

   # Top 3 catalog matches for a supplier title
   python -m src.modules.title_matching.keyword_batch match --catalog data/catalog.csv --title "高希霸 世纪6号 52/150" --top 3
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to matcher.toml (default: workspace root, built-in defaults if absent)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    keywords_parser = subparsers.add_parser(
        "keywords", help="Generate the keyword table for a catalog CSV"
    )
    keywords_parser.add_argument("--catalog", type=Path, required=True, help="Catalog CSV")
    keywords_parser.add_argument(
        "--output", type=Path, help="Output CSV (default: [dirs].output/keywords.csv)"
    )

    match_parser = subparsers.add_parser(
        "match", help="Match one supplier title against a catalog CSV"
    )
    match_parser.add_argument("--catalog", type=Path, required=True, help="Catalog CSV")
    match_parser.add_argument("--title", required=True, help="Supplier title")
    match_parser.add_argument(
        "--top", type=int, default=5, help="Number of candidates to show (default: 5)"
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = load_matcher_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        if args.command == "keywords":
            stats = run_keyword_batch(args.catalog, args.output, config)
            return 0 if stats["total"] > 0 else 1

        results = run_match(args.catalog, args.title, args.top, config)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 1

    print(
        json.dumps(
            [result.to_dict() for result in results], ensure_ascii=False, indent=2
        )
    )
    return 0


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)-8s] %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    sys.exit(main())
