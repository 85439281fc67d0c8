# -*- coding: utf-8 -*-
"""Keyword pipeline - builds the tagged keyword list for catalog products.

This module provides the main entry points for keyword generation:
1. Brand (catalog brand, else extracted from the title)
2. Vitola
3. Dimensions (seat fields, else parsed from the title)
4. Packaging type and count
5. Generic terms from extract_terms

All actual extraction logic is in core.py.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from .core import (
    canonical_brand,
    categorize_keyword,
    detect_product_type,
    extract_packaging_info,
    extract_terms,
    format_dimensions,
)
from .matching import process_supplier_title
from .models import CatalogProduct, Term

logger = logging.getLogger(__name__)


# ============================================================================
# UNIFIED PIPELINE FUNCTIONS
# ============================================================================


def generate_product_keywords(product: CatalogProduct) -> List[str]:
    """Build the tagged keyword list for one catalog product.

    Order is BRAND:, VITOLA:, DIM:, PACK:, COUNT:, then generic terms.
    Duplicates are dropped, first occurrence kept.

    Args:
        product: Catalog product

    Returns:
        List of keyword strings, e.g.
        ["BRAND:Cohiba", "VITOLA:robusto", "DIM:50/124", "cohiba", "robusto"]
    """
    title = product.title or ""
    info = process_supplier_title(title)
    keywords: List[Term] = []

    brand = canonical_brand(product.brand) or info.brand
    if brand:
        keywords.append(Term(brand, "BRAND"))

    if info.vitola:
        keywords.append(Term(info.vitola, "VITOLA"))

    dimensions = format_dimensions(product.seat_row, product.seat_number) or format_dimensions(
        info.dimension_info.get("ring_gauge"), info.dimension_info.get("length")
    )
    if dimensions:
        keywords.append(Term(dimensions, "DIM"))

    packaging = extract_packaging_info(title)
    if packaging["type"]:
        keywords.append(Term(packaging["type"], "PACK"))
    if packaging["count"] is not None:
        keywords.append(Term(str(packaging["count"]), "COUNT"))

    keywords.extend(Term(term) for term in extract_terms(title))

    return list(dict.fromkeys(str(keyword) for keyword in keywords))


def categorize_keywords(
    keywords: Sequence[str],
    product_context: Optional[Mapping[str, Any]] = None,
    vocabulary: Optional[Mapping[str, Sequence[str]]] = None,
) -> List[Dict[str, str]]:
    """Label each keyword with its category.

    Returns:
        List of {"keyword": ..., "category": ...} in input order
    """
    return [
        {
            "keyword": keyword,
            "category": categorize_keyword(keyword, product_context, vocabulary),
        }
        for keyword in keywords
    ]


def describe_product(product: CatalogProduct) -> Dict[str, Any]:
    """Keywords plus product type for one catalog product.

    Returns:
        Dict with keys:
            - "sku": Product SKU
            - "title": Original title
            - "product_type": accessory, cigarette or cigar
            - "keywords": Tagged keyword list
    """
    return {
        "sku": product.sku,
        "title": product.title,
        "product_type": detect_product_type(product.title),
        "keywords": generate_product_keywords(product),
    }


def generate_keywords_series(titles: pd.Series) -> pd.DataFrame:
    """Generate keywords for a pandas Series of bare titles.

    Args:
        titles: Pandas Series containing product titles

    Returns:
        DataFrame indexed like the input with columns:
            - title
            - product_type
            - keywords (list of tagged strings)
    """
    if titles.empty:
        logger.warning("generate_keywords_series: empty input series")
        return pd.DataFrame(columns=["title", "product_type", "keywords"])

    rows = []
    for title in titles:
        title = title if isinstance(title, str) else ""
        product = CatalogProduct(identifier=None, sku="", title=title)
        described = describe_product(product)
        rows.append(
            {
                "title": title,
                "product_type": described["product_type"],
                "keywords": described["keywords"],
            }
        )

    df = pd.DataFrame(rows, index=titles.index)

    logger.info(
        f"generate_keywords_series: processed {len(titles)} titles, "
        f"{int(df['keywords'].map(bool).sum())} with keywords"
    )

    return df
