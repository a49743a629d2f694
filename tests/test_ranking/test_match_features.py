"""
Unit tests for feature extraction.
"""
import numpy as np
import pytest

from ranker.ranking.features import (
    FeatureExtractor,
    FeatureSet,
    MatchFeatures,
    get_features,
    match_field,
)
from ranker.ranking.query import compile_terms
from ranker.ranking.results import SearchResult


def float32(value: float) -> float:
    """Round a value the way stored scores are rounded."""
    return float(np.float32(value))


@pytest.fixture
def url_query():
    """Compiled single-term query."""
    return compile_terms("url")


@pytest.fixture
def extractor(url_query):
    """Feature extractor for the single-term query."""
    return FeatureExtractor(url_query)


class TestFeatureExtractor:
    """Test suite for FeatureExtractor class."""

    def test_extract_returns_feature_set(self, extractor, wikipedia_result):
        """Test that extract returns all four fields."""
        features = extractor.extract(SearchResult.create(*wikipedia_result))

        assert isinstance(features, FeatureSet)
        assert [name for name, _ in features.items()] == ["title", "extract", "domain", "path"]
        for _, field_features in features.items():
            assert isinstance(field_features, MatchFeatures)

    def test_title_with_leading_space(self, extractor, wikipedia_result):
        """Test the offset of a match after a leading space."""
        url, _, extract = wikipedia_result
        features = extractor.extract(SearchResult.create(url, " URL", extract))

        assert features.title.matched_length == 3
        assert features.title.last_match_end == 4
        assert features.title.distinct_term_count == 1
        assert features.title.score == 0.25
        assert features.title.term_proportion == 1.0

    def test_extract_field(self, extractor, wikipedia_result):
        """Test matching in the snippet."""
        features = extractor.extract(SearchResult.create(*wikipedia_result))

        # "a url is ..." -> match ends at byte 5
        assert features.extract.last_match_end == 5
        assert features.extract.score == float32(1 / 5)

    def test_path_field(self, extractor, wikipedia_result):
        """Test matching in the URL path."""
        features = extractor.extract(SearchResult.create(*wikipedia_result))

        # "/wiki/url" -> match ends at byte 9
        assert features.path.matched_length == 3
        assert features.path.last_match_end == 9
        assert features.path.score == float32(1 / 9)

    def test_domain_field(self):
        """Test matching in the URL domain."""
        extractor = FeatureExtractor(compile_terms("wikipedia"))
        features = extractor.extract(
            SearchResult.create("https://en.wikipedia.org/wiki/URL", "", "")
        )

        assert features.domain.matched_length == 9
        assert features.domain.last_match_end == 12
        assert features.domain.score == float32(1 / 12)

    def test_no_match_floor(self, extractor, wikipedia_result):
        """Test that an unmatched field scores 2 ** -total_possible_length."""
        features = extractor.extract(SearchResult.create(*wikipedia_result))

        assert features.domain.matched_length == 0
        assert features.domain.last_match_end == 1
        assert features.domain.distinct_term_count == 0
        assert features.domain.term_proportion == 0.0
        assert features.domain.score == 0.125

    def test_total_possible_length_recorded(self, extractor, wikipedia_result):
        """Test that every field records the query's total length."""
        features = extractor.extract(SearchResult.create(*wikipedia_result))

        for _, field_features in features.items():
            assert field_features.total_possible_length == 3

    def test_to_dict(self, extractor, wikipedia_result):
        """Test serialization of features."""
        data = extractor.extract(SearchResult.create(*wikipedia_result)).to_dict()

        assert set(data) == {"title", "extract", "domain", "path"}
        assert data["title"]["matched_length"] == 3
        assert "term_proportion" in data["path"]


class TestMatchField:
    """Test suite for match_field."""

    def test_repeated_term_counts_once(self):
        """Test that only the first occurrence of a term counts."""
        compiled = compile_terms("web")
        features = match_field(compiled.pattern, "web and web again", 3, 1)

        assert features.matched_length == 3
        assert features.last_match_end == 3
        assert features.distinct_term_count == 1

    def test_last_match_end_tracks_last_new_term(self):
        """Test that a repeated term does not move last_match_end."""
        compiled = compile_terms("alpha beta")
        text = "alpha beta alpha"
        features = match_field(
            compiled.pattern, text, compiled.total_possible_length, compiled.num_unique_terms
        )

        assert features.matched_length == 9
        assert features.last_match_end == len("alpha beta")
        assert features.distinct_term_count == 2
        assert features.score == float32(2.0 ** 0 / 10)

    def test_partial_coverage(self):
        """Test score and proportion when some terms are missing."""
        compiled = compile_terms("alpha beta")
        features = match_field(
            compiled.pattern, "beta", compiled.total_possible_length, compiled.num_unique_terms
        )

        assert features.matched_length == 4
        assert features.term_proportion == 0.5
        assert features.score == float32(2.0 ** (4 - 9) / 4)

    def test_text_is_lowercased(self):
        """Test that field text is lower-cased before matching."""
        compiled = compile_terms("python")
        features = match_field(compiled.pattern, "PYTHON Docs", 6, 1)

        assert features.distinct_term_count == 1

    def test_uppercase_query_term_never_matches(self):
        """Test that query terms keep their case while text is lower-cased."""
        compiled = compile_terms("Python")
        features = match_field(compiled.pattern, "Python docs", 6, 1)

        assert features.distinct_term_count == 0

    def test_uppercase_query_term_with_lowercase_terms(self):
        """Test that lowercase_terms makes matching case-insensitive."""
        compiled = compile_terms("Python", lowercase_terms=True)
        features = match_field(compiled.pattern, "Python docs", 6, 1)

        assert features.distinct_term_count == 1

    def test_offsets_are_utf8_bytes(self):
        """Test that lengths and offsets count bytes, not characters."""
        compiled = compile_terms("café")
        features = match_field(
            compiled.pattern, "le café", compiled.total_possible_length, compiled.num_unique_terms
        )

        assert features.matched_length == 5
        assert features.last_match_end == 8
        assert features.score == 0.125

    def test_empty_text(self):
        """Test that empty text scores the floor."""
        compiled = compile_terms("web")
        features = match_field(compiled.pattern, "", 3, 1)

        assert features.last_match_end == 1
        assert features.matched_length == 0
        assert features.score == 0.125

    def test_counters_saturate(self):
        """Test that long matches clamp to 255 instead of wrapping."""
        terms = [f"w{i:03d}" for i in range(100)]
        compiled = compile_terms(" ".join(terms))
        text = " ".join(terms)

        features = match_field(
            compiled.pattern, text, compiled.total_possible_length, compiled.num_unique_terms
        )

        assert compiled.total_possible_length == 255
        assert features.matched_length == 255
        assert features.last_match_end == 255
        assert features.distinct_term_count == 100
        assert features.term_proportion == 1.0
        assert features.score == float32(1 / 255)

    def test_score_is_single_precision(self):
        """Test that scores are rounded to single precision."""
        compiled = compile_terms("url")
        features = match_field(compiled.pattern, "/wiki/url", 3, 1)

        assert features.score == float32(1 / 9)
        assert features.score != 1 / 9


class TestGetFeatures:
    """Test suite for get_features."""

    def test_matches_extractor(self, url_query, wikipedia_result):
        """Test the functional form agrees with FeatureExtractor."""
        result = SearchResult.create(*wikipedia_result)

        features = get_features(
            url_query.pattern,
            result,
            url_query.total_possible_length,
            url_query.num_unique_terms,
        )

        assert features == FeatureExtractor(url_query).extract(result)

    @pytest.mark.parametrize(
        "url",
        ["", "not a url", "wikipedia.org/wiki/URL", "http://[::1", "https://"],
    )
    def test_malformed_url_uses_sentinel(self, url_query, url):
        """Test that unparseable URLs fall back to the sentinel URL."""
        result = SearchResult.create(url, "URL", "")

        features = get_features(url_query.pattern, result, 3, 1)

        assert features.domain.score == 0.125
        assert features.path.score == 0.125
        assert features.title.score == float32(1 / 3)

    def test_sentinel_domain_is_matchable(self):
        """Test that the sentinel domain behaves like any other domain."""
        compiled = compile_terms("com")
        result = SearchResult.create("not a url", "", "")

        features = get_features(compiled.pattern, result, 3, 1)

        # "_.com" -> match ends at byte 5
        assert features.domain.last_match_end == 5
