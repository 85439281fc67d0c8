# -*- coding: utf-8 -*-
"""Core title normalization, term extraction and keyword categorization.

This module holds every building block of the matcher:
- Title normalization (noise words, punctuation, whitespace)
- Chinese-aware tokenization and term extraction
- Dimension parsing (ring gauge / length) and unit conversion
- Edit-distance similarity
- Keyword categorization
- Brand/vitola lookup, product type and packaging detection

All functions are pure and never raise on malformed titles.
All constants are imported from constants.py.
"""

import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import pandas as pd
from rapidfuzz.distance import Levenshtein

from .constants import (
    ACCESSORY_KEYWORDS,
    BRAND_ALIASES,
    CATEGORY_COUNT,
    CATEGORY_DIMENSIONS,
    CATEGORY_GENERIC,
    CATEGORY_YEAR,
    CIGARETTE_KEYWORDS,
    CONTEXT_CATEGORY_FIELDS,
    DIMENSION_PAIR_PATTERN,
    FILTER_NOISE_WORDS,
    KEYWORD_COUNT_PATTERNS,
    KEYWORD_DIMENSION_PATTERNS,
    KEYWORD_YEAR_PATTERN,
    PACKAGING_BOX_OF_PATTERN,
    PACKAGING_TYPES,
    PRODUCT_TYPE_ACCESSORY,
    PRODUCT_TYPE_CIGAR,
    PRODUCT_TYPE_CIGARETTE,
    RING_GAUGE_MAX,
    RING_GAUGE_MIN,
    SIMILARITY_THRESHOLD,
    STOP_WORDS,
    TAG_CATEGORIES,
    TERM_COUNT_FALLBACK_PATTERN,
    TERM_COUNT_PATTERN,
    TERM_DIMENSION_PATTERN,
    TITLE_NOISE_WORDS,
    UNIT_TO_MM,
    VITOLA_NAMES,
    VOCABULARY_CATEGORIES,
)
from .models import TAGGED_TERM_PATTERN, Term

logger = logging.getLogger(__name__)

CHINESE_CHAR_RANGE = r"\u4e00-\u9fa5"

_CHINESE_RE = re.compile(f"[{CHINESE_CHAR_RANGE}]")
_CHINESE_RUN_RE = re.compile(f"[{CHINESE_CHAR_RANGE}]+")
# Word characters that are neither Chinese nor underscore
_ALNUM_RUN_RE = re.compile(f"[^\\W_{CHINESE_CHAR_RANGE}]+")
_DISALLOWED_CHARS_RE = re.compile(r"[^\w\s-]|_")
_WHITESPACE_RE = re.compile(r"\s+")

_TITLE_NOISE_RE = re.compile(
    r"\b(?:"
    + "|".join(
        re.escape(word) for word in sorted(TITLE_NOISE_WORDS, key=len, reverse=True)
    )
    + r")\b",
    re.IGNORECASE,
)
_FILTER_NOISE_WORDS = sorted(FILTER_NOISE_WORDS, key=len, reverse=True)

_TERM_DIMENSION_RE = re.compile(TERM_DIMENSION_PATTERN, re.IGNORECASE)
_TERM_COUNT_RE = re.compile(TERM_COUNT_PATTERN, re.IGNORECASE)
_TERM_COUNT_FALLBACK_RE = re.compile(TERM_COUNT_FALLBACK_PATTERN, re.IGNORECASE)
_DIMENSION_PAIR_RE = re.compile(DIMENSION_PAIR_PATTERN)
_DIMENSION_CROSS_TEXT_RE = re.compile(r"\d+\s*[xX×*]\s*\d+")
_DIMENSION_SLASH_TEXT_RE = re.compile(r"(\d+)\s*/\s*\d+")

_KEYWORD_DIMENSION_RES = [re.compile(p, re.IGNORECASE) for p in KEYWORD_DIMENSION_PATTERNS]
_KEYWORD_COUNT_RES = [re.compile(p, re.IGNORECASE) for p in KEYWORD_COUNT_PATTERNS]
_KEYWORD_YEAR_RE = re.compile(KEYWORD_YEAR_PATTERN)
_BOX_OF_RE = re.compile(PACKAGING_BOX_OF_PATTERN, re.IGNORECASE)


# ============================================================================
# NORMALIZATION
# ============================================================================


def normalize_title(title: str) -> str:
    """
    Normalize a product title for comparison.

    Steps:
    1. Lowercase (Unicode-aware)
    2. Strip everything except letters, digits, whitespace and hyphens
       (Chinese characters are letters and survive)
    3. Remove whole-word noise words (TITLE_NOISE_WORDS)
    4. Collapse whitespace and trim

    Punctuation is stripped before noise removal so the result is stable
    under a second pass.

    Examples:
        "Cohiba Siglo VI (Box of 25)" → "cohiba siglo vi of 25"
        "高希霸 雪茄 Robusto!" → "高希霸 robusto"

    Args:
        title: Raw product title

    Returns:
        Normalized title, possibly empty
    """
    if not title or not isinstance(title, str):
        return ""

    text = title.lower()
    text = _DISALLOWED_CHARS_RE.sub("", text)
    text = _TITLE_NOISE_RE.sub(" ", text)
    text = _WHITESPACE_RE.sub(" ", text)

    return text.strip()


def filter_noise_words(title: str) -> str:
    """
    Remove packaging/marketing vocabulary by raw substring replacement.

    Looser than normalize_title: no word boundaries, so multi-character
    Chinese tokens glued to other text are removed as well. Longest words
    are removed first.

    Examples:
        "高希霸雪茄正品 robusto" → "高希霸 robusto"

    Args:
        title: Title text (usually already normalized)

    Returns:
        Title with noise substrings removed and whitespace collapsed
    """
    if not title or not isinstance(title, str):
        return ""

    text = title
    for word in _FILTER_NOISE_WORDS:
        text = re.sub(re.escape(word), " ", text, flags=re.IGNORECASE)

    return _WHITESPACE_RE.sub(" ", text).strip()


# ============================================================================
# TOKENIZATION AND TERM EXTRACTION
# ============================================================================


def has_chinese_characters(text: str) -> bool:
    """True if any code point falls in U+4E00–U+9FA5."""
    if not text or not isinstance(text, str):
        return False
    return _CHINESE_RE.search(text) is not None


def extract_chinese_characters(text: str) -> List[str]:
    """All maximal runs of Chinese characters, in order of appearance."""
    if not text or not isinstance(text, str):
        return []
    return _CHINESE_RUN_RE.findall(text)


def split_into_semantic_units(text: str) -> List[str]:
    """
    Split text into tokens, keeping Chinese runs as single units.

    Chinese runs glued to Latin text are split off:
        "cohiba高希霸robusto" → ["cohiba", "高希霸", "robusto"]

    Args:
        text: Text to split

    Returns:
        List of non-empty units
    """
    if not text or not isinstance(text, str):
        return []
    padded = _CHINESE_RUN_RE.sub(lambda m: f" {m.group(0)} ", text)
    return padded.split()


def extract_terms(title: str) -> List[str]:
    """
    Extract salient terms from a supplier or catalog title.

    Pipeline: normalize_title → filter_noise_words → branch:
    - Chinese titles: Chinese runs of 2+ characters, plus alphanumeric runs
      of 3+ characters that are not stop words
    - Other titles: whitespace tokens of 3+ characters that are not stop words

    The raw title is then re-scanned for a dimension ("52/178", "6x50")
    and a count ("25支", "10-count", fallback "box of 25"); the raw matched
    text is appended.

    Examples:
        "Cohiba Siglo VI Box of 25" → ["cohiba", "siglo", "Box of 25"]

    Args:
        title: Raw title

    Returns:
        Unique terms in order of first occurrence
    """
    if not title or not isinstance(title, str):
        return []

    text = filter_noise_words(normalize_title(title))
    terms: List[str] = []

    if has_chinese_characters(text):
        terms.extend(run for run in extract_chinese_characters(text) if len(run) >= 2)
        terms.extend(
            token
            for token in _ALNUM_RUN_RE.findall(text)
            if len(token) >= 3 and token.lower() not in STOP_WORDS
        )
    else:
        terms.extend(
            token
            for token in text.split()
            if len(token) >= 3 and token.lower() not in STOP_WORDS
        )

    dimension_match = _TERM_DIMENSION_RE.search(title)
    if dimension_match:
        terms.append(dimension_match.group(0))

    count_match = _TERM_COUNT_RE.search(title) or _TERM_COUNT_FALLBACK_RE.search(title)
    if count_match:
        terms.append(count_match.group(0))

    return list(dict.fromkeys(terms))


# ============================================================================
# DIMENSIONS
# ============================================================================


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _format_number(value: Any) -> str:
    """Render 52.0 as "52", keep everything else as str()."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def to_number(value: Any) -> Optional[float]:
    """Coerce a dimension value ("52", 52, "52.5") to float, None if not numeric."""
    if _is_blank(value):
        return None
    try:
        return float(str(value).strip())
    except ValueError:
        return None


def find_dimension_text(title: str) -> Optional[str]:
    """Raw dimension substring in a title ("178 x 52", "52/178").

    An "A x B" pair wins. Otherwise the first "A/B" pair whose A lies in the
    ring gauge range is used, so dates such as "2023/12" are skipped.
    """
    if not title or not isinstance(title, str):
        return None

    match = _DIMENSION_CROSS_TEXT_RE.search(title)
    if match:
        return match.group(0)

    for match in _DIMENSION_SLASH_TEXT_RE.finditer(title):
        if RING_GAUGE_MIN <= int(match.group(1)) <= RING_GAUGE_MAX:
            return match.group(0)

    return None


def parse_dimensions(text: str) -> Dict[str, Any]:
    """
    Parse a ring gauge / length pair.

    Rules:
    1. "RG/LENGTH": exactly one slash → both parts, trimmed, kept as strings
       (strings with several slashes fall through to rule 2)
    2. "A x B" (x, X, ×, *): the operand inside the ring gauge range
       (20–70) and smaller than the other is the ring gauge; otherwise
       A is the length and B the ring gauge
    3. Nothing found → both None

    Examples:
        "52/178" → {"ring_gauge": "52", "length": "178"}
        "178x52" → {"ring_gauge": 52, "length": 178}
        "50x6"   → {"ring_gauge": 6, "length": 50}

    Args:
        text: Dimension text

    Returns:
        Dict with keys "ring_gauge" and "length"
    """
    result: Dict[str, Any] = {"ring_gauge": None, "length": None}
    if not text or not isinstance(text, str):
        return result

    if "/" in text:
        parts = text.split("/")
        if len(parts) == 2:
            result["ring_gauge"] = parts[0].strip()
            result["length"] = parts[1].strip()
            return result

    match = _DIMENSION_PAIR_RE.search(text)
    if match:
        a, b = int(match.group(1)), int(match.group(2))
        if a > b and RING_GAUGE_MIN <= b <= RING_GAUGE_MAX:
            result["length"], result["ring_gauge"] = a, b
        elif b > a and RING_GAUGE_MIN <= a <= RING_GAUGE_MAX:
            result["length"], result["ring_gauge"] = b, a
        else:
            result["length"], result["ring_gauge"] = a, b

    return result


def format_dimensions(ring_gauge: Any, length: Any) -> str:
    """"{ring_gauge}/{length}", or "" when either value is missing."""
    if _is_blank(ring_gauge) or _is_blank(length):
        return ""
    return f"{_format_number(ring_gauge)}/{_format_number(length)}"


def convert_dimension(value: Any, from_unit: str, to_unit: str) -> Optional[float]:
    """
    Convert a length between mm, cm and inch via millimetres.

    An unknown from_unit is treated as millimetres; an unknown to_unit
    returns the millimetre value. A missing or non-numeric value returns None.
    """
    number = to_number(value)
    if number is None:
        return None

    millimetres = number * UNIT_TO_MM.get(str(from_unit).lower(), 1.0)
    factor = UNIT_TO_MM.get(str(to_unit).lower())
    if factor is None:
        return millimetres
    return millimetres / factor


# ============================================================================
# SIMILARITY
# ============================================================================


def normalized_levenshtein(a: str, b: str) -> float:
    """
    Edit-distance similarity in [0, 1].

    Both strings are lowercased and trimmed; the distance is divided by the
    longer length in characters. Two empty strings score 0.0.
    """
    a = a.strip().lower() if isinstance(a, str) else ""
    b = b.strip().lower() if isinstance(b, str) else ""

    max_len = max(len(a), len(b))
    if max_len == 0:
        return 0.0

    return 1.0 - Levenshtein.distance(a, b) / max_len


def find_similar_words(
    word: str, candidates: Sequence[str], threshold: float = SIMILARITY_THRESHOLD
) -> List[Dict[str, Any]]:
    """Candidates with similarity >= threshold, most similar first.

    Ties keep the candidate input order.
    """
    scored = [
        {"word": candidate, "similarity": normalized_levenshtein(word, candidate)}
        for candidate in candidates
    ]
    similar = [item for item in scored if item["similarity"] >= threshold]
    return sorted(similar, key=lambda item: item["similarity"], reverse=True)


# ============================================================================
# KEYWORD CATEGORIZATION
# ============================================================================


def categorize_keyword(
    term: Union[str, Term],
    product_context: Optional[Mapping[str, Any]] = None,
    vocabulary: Optional[Mapping[str, Sequence[str]]] = None,
) -> str:
    """
    Classify one extracted term into a semantic category.

    Priority order (first match wins):
    1. Tagged term "TAG:value" → TAG_CATEGORIES (unknown tag → generic)
    2. Dimension pattern → dimensions
    3. Count pattern → count
    4. Four-digit year 19xx/20xx → year
    5. Product context brand, model, vitola (substring either way)
    6. Vocabulary tables (special edition, packaging)
    7. generic

    Args:
        term: Term string or Term record
        product_context: Optional dict with "brand", "model", "vitola"
        vocabulary: Category → words table, defaults to VOCABULARY_CATEGORIES

    Returns:
        Category name
    """
    if isinstance(term, Term):
        tag, text = term.tag, term.text
    else:
        text = str(term) if term is not None else ""
        tag = None
        match = TAGGED_TERM_PATTERN.match(text)
        if match:
            tag, text = match.group(1), match.group(2)

    if tag:
        return TAG_CATEGORIES.get(tag.upper(), CATEGORY_GENERIC)

    text = text.strip()
    if not text:
        return CATEGORY_GENERIC

    if any(pattern.search(text) for pattern in _KEYWORD_DIMENSION_RES):
        return CATEGORY_DIMENSIONS

    if any(pattern.search(text) for pattern in _KEYWORD_COUNT_RES):
        return CATEGORY_COUNT

    if _KEYWORD_YEAR_RE.match(text):
        return CATEGORY_YEAR

    text_lower = text.lower()

    if product_context:
        for field_name, category in CONTEXT_CATEGORY_FIELDS:
            value = product_context.get(field_name)
            if _is_blank(value):
                continue
            value_lower = str(value).strip().lower()
            if text_lower in value_lower or value_lower in text_lower:
                return category

    for category, words in (vocabulary or VOCABULARY_CATEGORIES).items():
        if any(word.lower() in text_lower for word in words):
            return category

    return CATEGORY_GENERIC


# ============================================================================
# BRAND AND VITOLA LOOKUP
# ============================================================================


def _contains_phrase(units_text: str, phrase: str) -> bool:
    """Whole-phrase match for Latin phrases, substring for Chinese ones."""
    if has_chinese_characters(phrase):
        return phrase in units_text
    return re.search(rf"(?<!\w){re.escape(phrase)}(?!\w)", units_text) is not None


def _build_brand_lookup() -> List[tuple]:
    lookup = []
    for canonical, aliases in BRAND_ALIASES.items():
        for alias in [canonical, *aliases]:
            normalized = normalize_title(alias)
            if normalized:
                lookup.append((normalized, canonical))
    return sorted(set(lookup), key=lambda item: (-len(item[0]), item[0]))


_BRAND_LOOKUP = _build_brand_lookup()
_VITOLA_LOOKUP = sorted(
    {normalize_title(name) for name in VITOLA_NAMES if normalize_title(name)},
    key=lambda vitola: (-len(vitola), vitola),
)


def _units_text(title: str) -> str:
    return " ".join(split_into_semantic_units(normalize_title(title)))


def extract_brand(title: str) -> Optional[str]:
    """
    Find a known brand in a title and return its canonical name.

    Aliases (English and Chinese) come from BRAND_ALIASES; the longest
    alias wins.

    Examples:
        "高希霸 世纪6号" → "Cohiba"
        "ROMEO Y JULIETA Churchill" → "Romeo y Julieta"
    """
    text = _units_text(title)
    if not text:
        return None

    for alias, canonical in _BRAND_LOOKUP:
        if _contains_phrase(text, alias):
            return canonical

    return None


def canonical_brand(brand: Any) -> Optional[str]:
    """Resolve a catalog brand through the alias table (unknown brands kept)."""
    if _is_blank(brand):
        return None
    brand = str(brand).strip()
    normalized = normalize_title(brand)
    for alias, canonical in _BRAND_LOOKUP:
        if normalized == alias:
            return canonical
    return brand


def extract_vitola(title: str) -> Optional[str]:
    """
    Find a vitola name in a title, longest name first.

    Returns the vitola as it appears in the normalized title, so it can be
    looked up as a substring of other normalized titles.
    """
    text = _units_text(title)
    if not text:
        return None

    for vitola in _VITOLA_LOOKUP:
        if _contains_phrase(text, vitola):
            return vitola

    return None


# ============================================================================
# PRODUCT TYPE AND PACKAGING
# ============================================================================


def detect_product_type(title: str, description: str = "") -> str:
    """
    Classify a listing as accessory, cigarette or cigar.

    Accessory vocabulary is checked first, then cigarette vocabulary;
    anything else is a cigar.
    """
    text = " ".join(
        part for part in (title, description) if part and isinstance(part, str)
    ).lower()

    if any(keyword in text for keyword in ACCESSORY_KEYWORDS):
        return PRODUCT_TYPE_ACCESSORY

    if any(keyword in text for keyword in CIGARETTE_KEYWORDS):
        return PRODUCT_TYPE_CIGARETTE

    return PRODUCT_TYPE_CIGAR


def extract_packaging_info(title: str) -> Dict[str, Any]:
    """
    Detect packaging type and unit count.

    Packaging is box, then tube, then pack (first hit wins). The count
    comes from the term count pattern ("25支", "10-count") or a
    "box of N" fallback.

    Examples:
        "Cohiba Robusto Box of 25" → {"has_packaging": True, "type": "box", "count": 25}
        "Trinidad Reyes 12支"      → {"has_packaging": False, "type": None, "count": 12}

    Returns:
        Dict with keys has_packaging, type, count
    """
    result: Dict[str, Any] = {"has_packaging": False, "type": None, "count": None}
    if not title or not isinstance(title, str):
        return result

    text = title.lower()

    for packaging_type, words in PACKAGING_TYPES.items():
        if any(word in text for word in words):
            result["has_packaging"] = True
            result["type"] = packaging_type
            break

    count_match = _TERM_COUNT_RE.search(title)
    if count_match:
        result["count"] = int(re.match(r"\d+", count_match.group(0)).group(0))
    else:
        box_match = _BOX_OF_RE.search(title)
        if box_match:
            result["count"] = int(box_match.group(1))

    return result


# ============================================================================
# SERIES HELPERS
# ============================================================================


def normalize_titles_series(series: pd.Series) -> pd.Series:
    """Normalize a pandas Series of titles, logging titles that became empty.

    Args:
        series: Pandas Series containing raw titles

    Returns:
        Pandas Series with normalized titles
    """
    if series.empty:
        logger.warning("normalize_titles_series: empty input series")
        return series

    result = series.apply(normalize_title)

    emptied = int(((result == "") & series.fillna("").astype(str).str.strip().ne("")).sum())
    if emptied:
        logger.warning(
            f"normalize_titles_series: {emptied} of {len(series)} titles "
            f"normalized to empty (noise words only)"
        )

    return result
