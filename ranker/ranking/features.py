"""
Feature extraction for ranking.

Computes match statistics for four fields of every result:
- title: result title
- extract: result snippet
- domain: host name of the result URL
- path: path of the result URL

For each field the compiled query pattern is scanned over the
lower-cased text. Only the first occurrence of each distinct matched
term counts. The field score rewards covering more of the query and
matching early:

    score = 2 ** (matched_length - total_possible_length) / last_match_end
"""

import logging
import re
from dataclasses import asdict, dataclass
from typing import Dict, Iterator, Set, Tuple

import numpy as np

from ranker.ranking.constants import (
    FIELD_NAMES,
    MATCH_EXPONENT,
    MAX_COUNTER_VALUE,
    MISSING_URL,
)
from ranker.ranking.query import CompiledQuery
from ranker.ranking.results import SearchResult
from ranker.utils.text_processing import saturate, utf8_length
from ranker.utils.url_utils import get_domain_and_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchFeatures:
    """
    Match statistics for one field of one result.

    Attributes:
        last_match_end: Byte offset just past the last newly seen term
            (1 when nothing matched)
        matched_length: Summed byte length of distinct matched terms
        total_possible_length: Summed byte length of all query terms
        distinct_term_count: Number of distinct terms matched
        score: Single-precision match score
        term_proportion: distinct_term_count / num_unique_terms
    """
    last_match_end: int = 1
    matched_length: int = 0
    total_possible_length: int = 0
    distinct_term_count: int = 0
    score: float = 0.0
    term_proportion: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class FeatureSet:
    """Match features of the four scored fields of one result."""
    title: MatchFeatures
    extract: MatchFeatures
    domain: MatchFeatures
    path: MatchFeatures

    def items(self) -> Iterator[Tuple[str, MatchFeatures]]:
        for name in FIELD_NAMES:
            yield name, getattr(self, name)

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {name: features.to_dict() for name, features in self.items()}


def match_field(
    pattern: re.Pattern,
    text: str,
    total_possible_length: int,
    num_unique_terms: int,
) -> MatchFeatures:
    """
    Compute match features for a single field.

    Args:
        pattern: Compiled query pattern
        text: Field text (lower-cased here before matching)
        total_possible_length: Summed byte length of the query terms
        num_unique_terms: Number of distinct query terms

    Returns:
        MatchFeatures for the field
    """
    text_lower = text.lower()

    seen_terms: Set[str] = set()
    last_match_end = 1
    matched_length = 0

    for match in pattern.finditer(text_lower):
        term = match.group()
        if term in seen_terms:
            continue

        seen_terms.add(term)
        # Offsets are reported in UTF-8 bytes, not characters
        last_match_end = utf8_length(text_lower[: match.end()])
        matched_length += utf8_length(term)

    matched_length = saturate(matched_length, MAX_COUNTER_VALUE)
    last_match_end = saturate(last_match_end, MAX_COUNTER_VALUE)
    distinct_term_count = saturate(len(seen_terms), MAX_COUNTER_VALUE)

    # Computed in double precision, stored in single precision
    score = np.float32(
        MATCH_EXPONENT ** (matched_length - total_possible_length) / last_match_end
    )
    term_proportion = np.float32(distinct_term_count) / np.float32(num_unique_terms)

    return MatchFeatures(
        last_match_end=last_match_end,
        matched_length=matched_length,
        total_possible_length=total_possible_length,
        distinct_term_count=distinct_term_count,
        score=float(score),
        term_proportion=float(term_proportion),
    )


def _field_text(name: str, result: SearchResult, domain: str, path: str) -> str:
    """Text of the named field."""
    if name == "title":
        return result.title

    elif name == "extract":
        return result.extract

    elif name == "domain":
        return domain

    elif name == "path":
        return path

    else:
        raise ValueError(f"Unknown field: {name}")


def get_features(
    pattern: re.Pattern,
    result: SearchResult,
    total_possible_length: int,
    num_unique_terms: int,
) -> FeatureSet:
    """
    Compute match features for all four fields of a result.

    URLs that cannot be parsed are replaced by a fixed sentinel URL, so
    the domain and path features degrade to constant values instead of
    failing.

    Args:
        pattern: Compiled query pattern
        result: Normalized search result
        total_possible_length: Summed byte length of the query terms
        num_unique_terms: Number of distinct query terms

    Returns:
        FeatureSet for the result
    """
    domain, path = get_domain_and_path(result.url, MISSING_URL)

    fields = {
        name: match_field(
            pattern,
            _field_text(name, result, domain, path),
            total_possible_length,
            num_unique_terms,
        )
        for name in FIELD_NAMES
    }

    return FeatureSet(**fields)


class FeatureExtractor:
    """
    Extracts match features from results for one compiled query.

    The compiled pattern is read-only and shared across every result.
    """

    def __init__(self, compiled_query: CompiledQuery) -> None:
        """
        Initialize feature extractor.

        Args:
            compiled_query: Query to match results against
        """
        self.compiled_query = compiled_query

    def extract(self, result: SearchResult) -> FeatureSet:
        """
        Extract features for a result.

        Args:
            result: Normalized search result

        Returns:
            FeatureSet with title, extract, domain and path features

        Example:
            >>> extractor = FeatureExtractor(compile_terms("url"))
            >>> features = extractor.extract(
            ...     SearchResult.create("https://en.wikipedia.org/wiki/URL", " URL", "")
            ... )
            >>> features.title.score
            0.25
        """
        return get_features(
            self.compiled_query.pattern,
            result,
            self.compiled_query.total_possible_length,
            self.compiled_query.num_unique_terms,
        )
