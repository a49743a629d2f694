"""
Ranking sessions: one query, a batch of results, an ordering.

A session is created per ranking request, fed results with add_result,
and asked for an ordering with rank. Every rank call recomputes from the
results accumulated so far, and more results may be added afterwards.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from ranker.ranking.features import FeatureExtractor, FeatureSet
from ranker.ranking.query import compile_terms, get_query_terms
from ranker.ranking.results import SearchResult
from ranker.ranking.scoring import ResultScorer

logger = logging.getLogger(__name__)


class RankingSession:
    """
    Re-ranks a batch of search results for one query.

    Not thread-safe; confine each session to a single request.

    Attributes:
        compiled_query: Compiled query shared by all results
        results: Normalized results in insertion order
    """

    def __init__(
        self,
        query: str,
        lowercase_terms: bool = False,
        scorer: Optional[ResultScorer] = None,
    ) -> None:
        """
        Initialize a session.

        Args:
            query: Raw query text
            lowercase_terms: Lower-case query terms so matching ignores case
            scorer: Scorer to use (default: standard field weights)

        Raises:
            InvalidQueryError: If the query has no terms
        """
        self.compiled_query = compile_terms(query, lowercase_terms=lowercase_terms)
        self.extractor = FeatureExtractor(self.compiled_query)
        self.scorer = scorer or ResultScorer()
        self.results: List[SearchResult] = []

    @property
    def query(self) -> str:
        return self.compiled_query.query

    def add_result(self, url: str, title: str, extract: str) -> None:
        """
        Append a result, shortening fields that exceed their bounds.

        Args:
            url: Result URL
            title: Result title
            extract: Result snippet
        """
        self.results.append(SearchResult.create(url, title, extract))

    def result_count(self) -> int:
        """Number of results added so far."""
        return len(self.results)

    def __len__(self) -> int:
        return len(self.results)

    def query_terms(self) -> List[str]:
        """Unique query words followed by unique adjacent word pairs."""
        return get_query_terms(self.query)

    def score(self, result: SearchResult) -> float:
        """Relevance score of a single result."""
        features = self.extractor.extract(result)
        return self.scorer.score(features, result.url_length)

    def scores(self) -> List[float]:
        """Relevance score of every result, in insertion order."""
        return [self.score(result) for result in self.results]

    def rank(self) -> List[int]:
        """
        Order results by descending relevance.

        Ties keep insertion order, so repeated calls on an unchanged
        session return the same ordering.

        Returns:
            list: Insertion indices of the results, most relevant first
        """
        scored = self.ranked_scores()

        logger.debug(
            f"Ranked {len(scored)} results for query {self.query!r}"
        )

        return [index for index, _ in scored]

    def ranked_results(self) -> List[SearchResult]:
        """Results themselves, most relevant first."""
        return [self.results[index] for index in self.rank()]

    def explain(self) -> List[Dict[str, Any]]:
        """
        Score breakdown of every result, most relevant first.

        Returns:
            list: One dict per result with its index, URL, total score,
                length penalty and per-field features
        """
        explanations = []
        for index, features, _ in self._ranked_features():
            result = self.results[index]
            explanation = self.scorer.score_with_explanation(
                features, result.url_length
            )
            explanations.append({"index": index, "url": result.url, **explanation})

        return explanations

    def ranked_scores(self) -> List[Tuple[int, float]]:
        """(index, score) pairs sorted by score descending, then index."""
        return [(index, score) for index, _, score in self._ranked_features()]

    def _ranked_features(self) -> List[Tuple[int, FeatureSet, float]]:
        """Extract each result's features once and sort by the resulting score."""
        scored = []
        for index, result in enumerate(self.results):
            features = self.extractor.extract(result)
            scored.append((index, features, self.scorer.score(features, result.url_length)))

        # sort is stable: equal scores stay in insertion order
        scored.sort(key=lambda item: item[2], reverse=True)
        return scored


def compile_query(query: str, lowercase_terms: bool = False) -> RankingSession:
    """
    Compile a query and open a ranking session for it.

    Args:
        query: Raw query text
        lowercase_terms: Lower-case query terms so matching ignores case

    Returns:
        RankingSession ready to accept results

    Raises:
        InvalidQueryError: If the query is empty or only whitespace
    """
    return RankingSession(query, lowercase_terms=lowercase_terms)
