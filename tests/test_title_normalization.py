# -*- coding: utf-8 -*-
"""Unit tests for title normalization and term extraction.

Tests:
- normalize_title: case, punctuation, noise words, idempotence
- filter_noise_words: loose Chinese/English substring removal
- Chinese detection and semantic unit splitting
- extract_terms: stop words, length filter, dimension/count re-scan
"""

import pandas as pd
import pytest

from src.modules.title_matching.core import (
    extract_chinese_characters,
    extract_terms,
    filter_noise_words,
    has_chinese_characters,
    normalize_title,
    normalize_titles_series,
    split_into_semantic_units,
)

# ============================================================================
# NORMALIZATION
# ============================================================================


class TestNormalizeTitle:
    """Test normalize_title."""

    def test_lowercases_and_strips_punctuation(self):
        assert normalize_title("Cohiba Siglo VI (Box of 25)") == "cohiba siglo vi of 25"

    def test_removes_chinese_noise_word(self):
        assert normalize_title("高希霸 雪茄 Robusto!") == "高希霸 robusto"

    def test_keeps_hyphen_drops_dot_and_underscore(self):
        assert normalize_title("Montecristo No.2") == "montecristo no2"
        assert normalize_title("Half-Corona a_b") == "half-corona ab"

    def test_noise_only_title_becomes_empty(self):
        assert normalize_title("Cigar Box") == ""

    def test_noise_word_inside_longer_word_kept(self):
        assert normalize_title("Boxer Robusto") == "boxer robusto"

    def test_collapses_whitespace(self):
        assert normalize_title("  Cohiba \t  Robusto  ") == "cohiba robusto"

    @pytest.mark.parametrize("value", ["", None, 123])
    def test_invalid_input_returns_empty(self, value):
        assert normalize_title(value) == ""

    @pytest.mark.parametrize(
        "title",
        [
            "Cohiba Siglo VI (Box of 25)",
            "高希霸 雪茄 Robusto!",
            "Premium -- Cigar, Box-Pack!!",
            "Romeo y Julieta Churchill Tubos 3 pcs",
            "帕特加斯D4 50x124 正品",
        ],
    )
    def test_idempotent(self, title):
        once = normalize_title(title)
        assert normalize_title(once) == once


class TestFilterNoiseWords:
    """Test filter_noise_words."""

    def test_removes_glued_chinese_noise(self):
        assert filter_noise_words("高希霸雪茄正品 robusto") == "高希霸 robusto"

    def test_removes_english_phrase_case_insensitive(self):
        assert filter_noise_words("Cohiba Robusto Free Shipping") == "Cohiba Robusto"

    def test_empty_input(self):
        assert filter_noise_words("") == ""
        assert filter_noise_words(None) == ""


# ============================================================================
# TOKENIZATION
# ============================================================================


class TestChineseHelpers:
    """Test Chinese detection and run extraction."""

    def test_has_chinese_characters(self):
        assert has_chinese_characters("高希霸") is True
        assert has_chinese_characters("Cohiba 高希霸") is True
        assert has_chinese_characters("Cohiba") is False
        assert has_chinese_characters("") is False

    def test_extract_chinese_characters(self):
        assert extract_chinese_characters("cohiba高希霸robusto罗布图") == ["高希霸", "罗布图"]
        assert extract_chinese_characters("cohiba") == []

    def test_split_into_semantic_units(self):
        assert split_into_semantic_units("cohiba高希霸robusto") == [
            "cohiba",
            "高希霸",
            "robusto",
        ]
        assert split_into_semantic_units("高希霸 世纪6号") == ["高希霸", "世纪", "6", "号"]
        assert split_into_semantic_units("") == []


class TestExtractTerms:
    """Test extract_terms."""

    def test_english_title_with_box_count(self):
        assert extract_terms("Cohiba Siglo VI Box of 25") == ["cohiba", "siglo", "Box of 25"]

    def test_stop_words_and_short_tokens_dropped(self):
        assert extract_terms("The Cohiba Robusto and Churchill") == [
            "cohiba",
            "robusto",
            "churchill",
        ]

    def test_chinese_title(self):
        assert extract_terms("高希霸 世纪6号 25支") == ["高希霸", "世纪", "25支"]

    def test_dimension_term_not_duplicated(self):
        terms = extract_terms("Montecristo No.2 52x156")
        assert terms == ["montecristo", "no2", "52x156"]

    def test_slash_dimension_appended_raw(self):
        terms = extract_terms("Partagas Serie D 50/124")
        assert "50/124" in terms

    @pytest.mark.parametrize(
        "title,expected",
        [
            ("高希霸 25支", "25支"),
            ("Cohiba Robusto 3 pcs", "3 pcs"),
            ("Cohiba Robusto 10个", "10个"),
            ("Cohiba Robusto 10-count", "10-count"),
            ("Cohiba Robusto 10 Count", "10 Count"),
            ("Cohiba Robusto 25 ct", "25 ct"),
        ],
    )
    def test_count_suffixes(self, title, expected):
        assert expected in extract_terms(title)

    @pytest.mark.parametrize(
        "title,expected",
        [
            ("Cohiba Robusto 124x50", "124x50"),
            ("Cohiba Robusto 124X50", "124X50"),
            ("Cohiba Robusto 124×50", "124×50"),
            ("Cohiba Robusto 124*50", "124*50"),
            ("Cohiba Robusto 50/124", "50/124"),
        ],
    )
    def test_dimension_separators(self, title, expected):
        assert expected in extract_terms(title)

    def test_count_suffix_inside_longer_word_ignored(self):
        assert extract_terms("Cohiba Robusto 2 cts bundle") == [
            "cohiba",
            "robusto",
            "cts",
            "bundle",
        ]

    def test_no_standalone_box_term(self):
        terms = extract_terms("Cohiba Robusto Box of 25")
        assert "box" not in terms
        assert any("25" in term for term in terms)

    @pytest.mark.parametrize("value", ["", None])
    def test_empty_input(self, value):
        assert extract_terms(value) == []


class TestNormalizeTitlesSeries:
    """Test the pandas Series helper."""

    def test_normalizes_each_title(self):
        series = pd.Series(["Cohiba Robusto!", "Cigar Box", None])
        result = normalize_titles_series(series)
        assert result.tolist() == ["cohiba robusto", "", ""]

    def test_empty_series(self):
        series = pd.Series([], dtype=object)
        assert normalize_titles_series(series).empty
