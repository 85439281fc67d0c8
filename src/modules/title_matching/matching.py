# -*- coding: utf-8 -*-
"""Best-match scoring of supplier titles against catalog candidates.

Scoring signals per candidate (weights from MatchWeights):
- Brand: supplier brand equals candidate brand (case-insensitive)
- Vitola: supplier vitola appears in the candidate's normalized title
- Dimensions: ring gauge within ±2 and length within ±10
- Term overlap: supplier terms found among the candidate's title units,
  a fixed number of points each, capped

Every awarded signal adds a tagged term to the matched-term trail
(BRAND:, VITOLA:, DIM:, then plain terms) in discovery order.
"""

import logging
from typing import List, Optional, Sequence

from .core import (
    canonical_brand,
    extract_brand,
    extract_terms,
    extract_vitola,
    find_dimension_text,
    format_dimensions,
    normalize_title,
    parse_dimensions,
    split_into_semantic_units,
    to_number,
)
from .models import CatalogProduct, MatchResult, MatchWeights, ProcessedSupplierInfo

logger = logging.getLogger(__name__)

DEFAULT_MATCH_WEIGHTS = MatchWeights()


def process_supplier_title(title: str) -> ProcessedSupplierInfo:
    """
    Derive brand, vitola and dimensions from a supplier title.

    Examples:
        "高希霸 Siglo VI 52/150" →
            brand="Cohiba", vitola="siglo vi",
            dimension_info={"ring_gauge": "52", "length": "150"}

    Args:
        title: Raw supplier title

    Returns:
        Fresh ProcessedSupplierInfo (fields None when not found)
    """
    if not title or not isinstance(title, str):
        return ProcessedSupplierInfo()

    return ProcessedSupplierInfo(
        brand=extract_brand(title),
        vitola=extract_vitola(title),
        dimension_info=parse_dimensions(find_dimension_text(title)),
    )


def _add_term(trail: List[str], term: str) -> None:
    if term not in trail:
        trail.append(term)


def score_candidate(
    info: ProcessedSupplierInfo,
    supplier_terms: Sequence[str],
    candidate: CatalogProduct,
    weights: MatchWeights = DEFAULT_MATCH_WEIGHTS,
) -> MatchResult:
    """
    Score one catalog candidate against a processed supplier title.

    Args:
        info: Output of process_supplier_title
        supplier_terms: Output of extract_terms for the same title
        candidate: Catalog product to score
        weights: Scoring constants

    Returns:
        MatchResult for this candidate with a per-signal breakdown
    """
    trail: List[str] = []
    breakdown = {"brand": 0, "vitola": 0, "dimensions": 0, "terms": 0}

    candidate_brand = canonical_brand(candidate.brand)
    if info.brand and candidate_brand and info.brand.lower() == candidate_brand.lower():
        breakdown["brand"] = weights.brand
        _add_term(trail, f"BRAND:{info.brand}")

    candidate_title = normalize_title(candidate.title)
    if info.vitola and info.vitola.lower() in candidate_title:
        breakdown["vitola"] = weights.vitola
        _add_term(trail, f"VITOLA:{info.vitola}")

    supplier_ring = to_number(info.dimension_info.get("ring_gauge"))
    supplier_length = to_number(info.dimension_info.get("length"))
    candidate_ring = to_number(candidate.seat_row)
    candidate_length = to_number(candidate.seat_number)
    if None not in (supplier_ring, supplier_length, candidate_ring, candidate_length):
        if (
            abs(supplier_ring - candidate_ring) <= weights.ring_tolerance
            and abs(supplier_length - candidate_length) <= weights.length_tolerance
        ):
            breakdown["dimensions"] = weights.dimensions
            _add_term(
                trail,
                f"DIM:{format_dimensions(candidate.seat_row, candidate.seat_number)}",
            )

    candidate_units = set(split_into_semantic_units(candidate_title))
    overlap = 0
    for term in supplier_terms:
        if len(term) < weights.min_term_length or term not in candidate_units:
            continue
        if term in trail:
            continue
        overlap += 1
        trail.append(term)
    breakdown["terms"] = min(overlap * weights.term, weights.term_cap)

    return MatchResult(
        product=candidate,
        score=int(sum(breakdown.values())),
        matched_terms=trail,
        breakdown=breakdown,
    )


def get_best_match(
    supplier_title: str,
    catalog_candidates: Sequence[CatalogProduct],
    weights: MatchWeights = DEFAULT_MATCH_WEIGHTS,
) -> MatchResult:
    """
    Pick the catalog candidate that best matches a supplier title.

    The first candidate with the highest score wins (strict comparison,
    so ties keep catalog order). A candidate scoring 0 is never selected.

    Args:
        supplier_title: Raw supplier title
        catalog_candidates: Candidates to score, in caller order
        weights: Scoring constants

    Returns:
        MatchResult; product is None and score 0 when nothing scored
    """
    if not supplier_title or not isinstance(supplier_title, str) or not catalog_candidates:
        return MatchResult()

    info = process_supplier_title(supplier_title)
    supplier_terms = extract_terms(supplier_title)

    best = MatchResult()
    for candidate in catalog_candidates:
        result = score_candidate(info, supplier_terms, candidate, weights)
        if result.score > best.score:
            best = result

    if best.product is None:
        logger.debug(f"No catalog match for '{supplier_title[:80]}'")
    else:
        logger.debug(
            f"Matched '{supplier_title[:80]}' → {best.product.sku} "
            f"(score {best.score}, terms {best.matched_terms})"
        )

    return best


def rank_candidates(
    supplier_title: str,
    catalog_candidates: Sequence[CatalogProduct],
    limit: Optional[int] = None,
    weights: MatchWeights = DEFAULT_MATCH_WEIGHTS,
) -> List[MatchResult]:
    """
    Score every candidate and return those above 0, best first.

    Sorting is stable, so equal scores keep catalog order and the first
    entry always equals get_best_match for the same inputs.

    Args:
        supplier_title: Raw supplier title
        catalog_candidates: Candidates to score
        limit: Maximum number of results (None for all)
        weights: Scoring constants

    Returns:
        List of MatchResult with score > 0
    """
    if not supplier_title or not isinstance(supplier_title, str) or not catalog_candidates:
        return []

    info = process_supplier_title(supplier_title)
    supplier_terms = extract_terms(supplier_title)

    results = [
        score_candidate(info, supplier_terms, candidate, weights)
        for candidate in catalog_candidates
    ]
    ranked = sorted(
        (result for result in results if result.score > 0),
        key=lambda result: result.score,
        reverse=True,
    )

    return ranked[:limit] if limit is not None else ranked
