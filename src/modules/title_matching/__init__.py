# -*- coding: utf-8 -*-
"""Supplier title matching against a cigar catalog.

This module provides a unified interface for:
- Title normalization and noise-word filtering
- Chinese-aware tokenization and term extraction
- Dimension parsing (ring gauge / length)
- Edit-distance similarity
- Keyword categorization
- Best-match scoring against catalog candidates
- Catalog keyword generation

Public API:
    normalize_title(title: str) -> str
    extract_terms(title: str) -> list
    parse_dimensions(text: str) -> dict
    normalized_levenshtein(a: str, b: str) -> float
    categorize_keyword(term, product_context=None) -> str
    get_best_match(title: str, candidates) -> MatchResult
    rank_candidates(title: str, candidates, limit=None) -> list
    generate_product_keywords(product: CatalogProduct) -> list

All constants are in constants.py.
All extraction logic is in core.py, scoring in matching.py.
Keyword generation is in pipeline.py, the batch driver in keyword_batch.py.
"""

from .constants import (
    BRAND_ALIASES,
    DEFAULT_WEIGHTS,
    FILTER_NOISE_WORDS,
    SIMILARITY_THRESHOLD,
    STOP_WORDS,
    TAG_CATEGORIES,
    TITLE_NOISE_WORDS,
    VITOLA_NAMES,
    VOCABULARY_CATEGORIES,
)

from .core import (
    # Normalization
    normalize_title,
    normalize_titles_series,
    filter_noise_words,
    # Tokenization
    has_chinese_characters,
    extract_chinese_characters,
    split_into_semantic_units,
    extract_terms,
    # Dimensions
    parse_dimensions,
    format_dimensions,
    convert_dimension,
    find_dimension_text,
    # Similarity
    normalized_levenshtein,
    find_similar_words,
    # Categorization
    categorize_keyword,
    # Brand / vitola / packaging
    extract_brand,
    extract_vitola,
    canonical_brand,
    detect_product_type,
    extract_packaging_info,
)

from .models import (
    CatalogProduct,
    MatchResult,
    MatchWeights,
    ProcessedSupplierInfo,
    Term,
)

from .matching import (
    get_best_match,
    process_supplier_title,
    rank_candidates,
    score_candidate,
)

from .pipeline import (
    categorize_keywords,
    describe_product,
    generate_keywords_series,
    generate_product_keywords,
)

__all__ = [
    # Normalization and tokenization
    "normalize_title",
    "normalize_titles_series",
    "filter_noise_words",
    "has_chinese_characters",
    "extract_chinese_characters",
    "split_into_semantic_units",
    "extract_terms",
    # Dimensions
    "parse_dimensions",
    "format_dimensions",
    "convert_dimension",
    "find_dimension_text",
    # Similarity
    "normalized_levenshtein",
    "find_similar_words",
    # Categorization and lookup
    "categorize_keyword",
    "extract_brand",
    "extract_vitola",
    "canonical_brand",
    "detect_product_type",
    "extract_packaging_info",
    # Records
    "CatalogProduct",
    "MatchResult",
    "MatchWeights",
    "ProcessedSupplierInfo",
    "Term",
    # Matching
    "get_best_match",
    "process_supplier_title",
    "rank_candidates",
    "score_candidate",
    # Keyword pipeline
    "categorize_keywords",
    "describe_product",
    "generate_keywords_series",
    "generate_product_keywords",
    # Constants
    "BRAND_ALIASES",
    "DEFAULT_WEIGHTS",
    "FILTER_NOISE_WORDS",
    "SIMILARITY_THRESHOLD",
    "STOP_WORDS",
    "TAG_CATEGORIES",
    "TITLE_NOISE_WORDS",
    "VITOLA_NAMES",
    "VOCABULARY_CATEGORIES",
]
