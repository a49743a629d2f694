"""
Query compilation for result ranking.

Turns a raw query into the set of terms to look for and a single
whole-word pattern matching any of them:

    \\b(?:term1|term2|...)\\b

Two statistics are computed alongside the pattern and used later to
normalize match scores:
    - num_unique_terms: number of distinct terms (saturated at 255)
    - total_possible_length: summed UTF-8 length of the escaped terms
      (saturated at 255)
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Tuple

from ranker.ranking.constants import MAX_COUNTER_VALUE
from ranker.utils.text_processing import saturate, utf8_length

logger = logging.getLogger(__name__)


class InvalidQueryError(ValueError):
    """Raised when a query has no terms after whitespace splitting."""


@dataclass(frozen=True)
class CompiledQuery:
    """
    A query ready for matching.

    Attributes:
        query: Original query text
        terms: Escaped, deduplicated terms in first-occurrence order
        pattern: Whole-word alternation over terms
        num_unique_terms: Number of terms (saturated)
        total_possible_length: Summed byte length of terms (saturated)
    """
    query: str
    terms: Tuple[str, ...]
    pattern: re.Pattern
    num_unique_terms: int
    total_possible_length: int


class QueryCompiler:
    """
    Compile raw queries into whole-word match patterns.

    Attributes:
        lowercase_terms: Lower-case query terms before compiling. Field
            text is always lower-cased before matching, so leaving this
            off means upper-case query terms can never match.
    """

    def __init__(self, lowercase_terms: bool = False) -> None:
        """
        Initialize query compiler.

        Args:
            lowercase_terms: Lower-case terms so matching ignores case
        """
        self.lowercase_terms = lowercase_terms

    def compile(self, query: str) -> CompiledQuery:
        """
        Compile a query.

        Args:
            query: Raw query text

        Returns:
            CompiledQuery with pattern and normalization statistics

        Raises:
            InvalidQueryError: If the query is empty or only whitespace
        """
        terms = self._extract_terms(query)

        if not terms:
            raise InvalidQueryError(f"Query has no terms: {query!r}")

        pattern = re.compile(r"\b(?:" + "|".join(terms) + r")\b")
        total_length = sum(utf8_length(term) for term in terms)

        compiled = CompiledQuery(
            query=query,
            terms=tuple(terms),
            pattern=pattern,
            num_unique_terms=saturate(len(terms), MAX_COUNTER_VALUE),
            total_possible_length=saturate(total_length, MAX_COUNTER_VALUE),
        )

        logger.debug(
            f"Compiled query {query!r}: {len(terms)} terms, "
            f"total_possible_length={compiled.total_possible_length}"
        )

        return compiled

    def _extract_terms(self, query: str) -> List[str]:
        """
        Split on whitespace, escape, and deduplicate keeping first occurrence.

        Deduplication is by exact equality, so "Web" and "web" are two
        terms unless lowercase_terms is set.
        """
        tokens = query.split()
        if self.lowercase_terms:
            tokens = [token.lower() for token in tokens]

        return list(dict.fromkeys(re.escape(token) for token in tokens))


def compile_terms(query: str, lowercase_terms: bool = False) -> CompiledQuery:
    """
    Convenience function to compile a query.

    Args:
        query: Raw query text
        lowercase_terms: Lower-case terms so matching ignores case

    Returns:
        CompiledQuery

    Raises:
        InvalidQueryError: If the query has no terms
    """
    compiler = QueryCompiler(lowercase_terms=lowercase_terms)
    return compiler.compile(query)


def get_query_terms(query: str) -> List[str]:
    """
    Unique words and adjacent word pairs of a query, for display.

    Words come first in order of first occurrence, followed by the
    distinct bigrams of the original word sequence. Not used for scoring.

    Args:
        query: Raw query text

    Returns:
        list: Unique unigrams followed by unique bigrams

    Examples:
        >>> get_query_terms("new york new york")
        ["new", "york", "new york", "york new"]
    """
    tokens = query.split()
    bigrams = [" ".join(pair) for pair in zip(tokens, tokens[1:])]

    return list(dict.fromkeys(tokens)) + list(dict.fromkeys(bigrams))
