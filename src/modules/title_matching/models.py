# -*- coding: utf-8 -*-
"""Data records shared by the title matching modules.

- CatalogProduct: read-only catalog entry supplied by the caller
- Term: a keyword with optional provenance tag ("BRAND:Cohiba")
- ProcessedSupplierInfo: brand/vitola/dimensions derived from a supplier title
- MatchResult: best match with its matched-term trail and score breakdown
- MatchWeights: tunable scoring constants
"""

import re
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd

from .constants import DEFAULT_CATALOG_COLUMNS, DEFAULT_WEIGHTS

TAGGED_TERM_PATTERN = re.compile(r"^([A-Za-z_]+):(.*)$", re.DOTALL)


def _clean_cell(value: Any) -> Any:
    """Map pandas NaN/None and blank strings to None."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        return value or None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    return value


@dataclass(frozen=True)
class CatalogProduct:
    """Canonical catalog entry.

    seat_row carries the ring gauge and seat_number the length for cigars;
    both are passed through as-is (number or string).
    """

    identifier: Any
    sku: str
    title: str
    brand: Optional[str] = None
    seat_row: Any = None
    seat_number: Any = None

    @classmethod
    def from_mapping(
        cls,
        row: Mapping[str, Any],
        columns: Optional[Dict[str, str]] = None,
    ) -> "CatalogProduct":
        """Build a product from a dict or pandas row using a column map.

        Args:
            row: Mapping with catalog values (dict, pd.Series)
            columns: Field name → source column name. Defaults to
                DEFAULT_CATALOG_COLUMNS.

        Returns:
            CatalogProduct with missing cells mapped to None
        """
        columns = {**DEFAULT_CATALOG_COLUMNS, **(columns or {})}

        def _get(field_name: str) -> Any:
            source = columns.get(field_name)
            if source is None or source not in row:
                return None
            return _clean_cell(row[source])

        sku = _get("sku")
        title = _get("title")
        return cls(
            identifier=_get("identifier"),
            sku=str(sku) if sku is not None else "",
            title=str(title) if title is not None else "",
            brand=_get("brand"),
            seat_row=_get("seat_row"),
            seat_number=_get("seat_number"),
        )


@dataclass(frozen=True)
class Term:
    """Keyword text with an optional provenance tag."""

    text: str
    tag: Optional[str] = None

    @classmethod
    def parse(cls, value: str) -> "Term":
        """Split "TAG:value" into a Term; untagged strings keep tag=None."""
        match = TAGGED_TERM_PATTERN.match(value)
        if match:
            return cls(text=match.group(2), tag=match.group(1))
        return cls(text=value)

    def __str__(self) -> str:
        if self.tag:
            return f"{self.tag}:{self.text}"
        return self.text


@dataclass
class ProcessedSupplierInfo:
    """Brand, vitola and dimensions extracted from one supplier title."""

    brand: Optional[str] = None
    vitola: Optional[str] = None
    dimension_info: Dict[str, Any] = field(
        default_factory=lambda: {"ring_gauge": None, "length": None}
    )


@dataclass
class MatchResult:
    """Outcome of scoring a supplier title against catalog candidates."""

    product: Optional[CatalogProduct] = None
    score: int = 0
    matched_terms: List[str] = field(default_factory=list)
    breakdown: Dict[str, int] = field(default_factory=dict)

    def terms(self) -> List[Term]:
        """Matched-term trail as Term records."""
        return [Term.parse(term) for term in self.matched_terms]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sku": self.product.sku if self.product else None,
            "title": self.product.title if self.product else None,
            "score": self.score,
            "matched_terms": list(self.matched_terms),
            "breakdown": dict(self.breakdown),
        }


@dataclass(frozen=True)
class MatchWeights:
    """Scoring constants for get_best_match."""

    brand: int = DEFAULT_WEIGHTS["brand"]
    vitola: int = DEFAULT_WEIGHTS["vitola"]
    dimensions: int = DEFAULT_WEIGHTS["dimensions"]
    term: int = DEFAULT_WEIGHTS["term"]
    term_cap: int = DEFAULT_WEIGHTS["term_cap"]
    ring_tolerance: float = DEFAULT_WEIGHTS["ring_tolerance"]
    length_tolerance: float = DEFAULT_WEIGHTS["length_tolerance"]
    min_term_length: int = DEFAULT_WEIGHTS["min_term_length"]

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "MatchWeights":
        """Build weights from a config table, rejecting unknown keys.

        Raises:
            ValueError: If a key is not a known weight name.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown weight keys: {unknown}")
        return cls(**dict(values))
