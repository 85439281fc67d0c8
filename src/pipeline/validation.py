# -*- coding: utf-8 -*-
"""Schema validation for catalog exports.

Validates a catalog DataFrame against the expected column layout before
keyword generation or matching runs. Catches schema issues (missing
columns, empty catalog, duplicate or blank SKUs) up front.

Usage:
    from src.pipeline.validation import validate_catalog

    if not validate_catalog(df, columns, source="catalog.csv"):
        logger.error("Catalog validation failed")
"""

import logging
from typing import Dict, Optional

import pandas as pd

from src.modules.title_matching.constants import DEFAULT_CATALOG_COLUMNS

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ["sku", "title"]
OPTIONAL_FIELDS = ["identifier", "brand", "seat_row", "seat_number"]


def _check_required_columns(df: pd.DataFrame, source: str, columns: Dict[str, str]) -> bool:
    """Check that the sku and title columns exist in DataFrame.

    Args:
        df: DataFrame to validate.
        source: Name of the catalog source (for error logging).
        columns: Field name → column name map.

    Returns:
        True if all required columns present, False otherwise.
    """
    missing = [columns[field] for field in REQUIRED_FIELDS if columns[field] not in df.columns]

    if missing:
        logger.error(f"{source} missing required columns: {missing}")
        return False

    return True


def _warn_optional_columns(df: pd.DataFrame, source: str, columns: Dict[str, str]) -> None:
    missing = [columns[field] for field in OPTIONAL_FIELDS if columns[field] not in df.columns]
    if missing:
        logger.warning(f"{source}: optional columns not found, treated as empty: {missing}")


def _check_dataframe_not_empty(df: pd.DataFrame, source: str) -> bool:
    """Check that DataFrame is not empty.

    Args:
        df: DataFrame to validate.
        source: Name of the catalog source (for error logging).

    Returns:
        True if DataFrame has data, False otherwise.
    """
    if df.empty:
        logger.error(f"{source}: Empty catalog (no data rows)")
        return False

    return True


def _check_sku_values(df: pd.DataFrame, source: str, sku_column: str) -> bool:
    """Reject blank SKUs; duplicates are only reported (last one wins on upsert).

    Returns:
        True if every row has a SKU, False otherwise.
    """
    skus = df[sku_column].fillna("").astype(str).str.strip()

    blank = int((skus == "").sum())
    if blank:
        logger.error(f"{source}: {blank} rows with blank {sku_column}")
        return False

    duplicated = skus[skus.duplicated()].unique().tolist()
    if duplicated:
        logger.warning(
            f"{source}: {len(duplicated)} duplicate {sku_column} values, "
            f"last row wins (e.g. {duplicated[:5]})"
        )

    return True


def validate_catalog(
    df: pd.DataFrame,
    columns: Optional[Dict[str, str]] = None,
    source: str = "catalog",
) -> bool:
    """Validate a catalog DataFrame meets the expected layout.

    Performs:
    - Ensures DataFrame is not empty
    - Checks sku and title columns exist
    - Rejects blank SKUs, reports duplicates
    - Warns about missing optional columns

    Args:
        df: Catalog DataFrame.
        columns: Field name → column name map (defaults to DEFAULT_CATALOG_COLUMNS).
        source: Name used in log messages.

    Returns:
        True if validation passes, False otherwise.

    Example:
        >>> df = pd.read_csv("data/catalog.csv")
        >>> if not validate_catalog(df, source="catalog.csv"):
        ...     logger.error("Schema validation failed")
    """
    columns = {**DEFAULT_CATALOG_COLUMNS, **(columns or {})}

    if not _check_dataframe_not_empty(df, source):
        return False

    if not _check_required_columns(df, source, columns):
        return False

    if not _check_sku_values(df, source, columns["sku"]):
        return False

    _warn_optional_columns(df, source, columns)

    logger.info(f"{source}: schema validation passed ({len(df)} rows)")
    return True
