"""
Ranking service implementing the re-ranking of caller-supplied results.

This service sits between the API layer and the ranking core: it opens a
session per request, feeds it the request's results and formats the
ordering for the response.
"""
import logging
import time
from typing import Optional

from ranker.config import Settings, get_settings
from ranker.models.schemas import RankRequest, RankResponse
from ranker.ranking.query import get_query_terms
from ranker.ranking.session import compile_query

logger = logging.getLogger(__name__)


class RankingService:
    """
    Service class for handling ranking requests.

    Each request gets its own RankingSession; nothing is shared between
    requests.
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the ranking service.

        Args:
            settings: Application settings (default: cached environment settings)
        """
        self.settings = settings or get_settings()
        logger.info(
            f"RankingService initialized (lowercase_query={self.settings.lowercase_query}, "
            f"max_results_per_request={self.settings.max_results_per_request})"
        )

    def rank(self, request: RankRequest) -> RankResponse:
        """
        Rank the results of a request.

        Only the first max_results_per_request results are scored. Any
        beyond that are appended to the ordering in input order.

        Args:
            request: Query and candidate results

        Returns:
            RankResponse with the ordering of result indices

        Raises:
            InvalidQueryError: If the query has no terms
        """
        limit = self.settings.max_results_per_request
        scored_items = request.results[:limit]
        unranked = len(request.results) - len(scored_items)
        if unranked:
            logger.warning(
                f"Scoring the first {limit} of {len(request.results)} results; "
                f"{unranked} left in input order"
            )

        start_time = time.time()

        session = compile_query(request.query, lowercase_terms=self.settings.lowercase_query)
        for item in scored_items:
            session.add_result(item.url, item.title, item.extract)

        if request.explain:
            explanations = session.explain()
            order = [explanation["index"] for explanation in explanations]
            scores = [explanation["total_score"] for explanation in explanations]
        else:
            explanations = None
            ranked = session.ranked_scores()
            order = [index for index, _ in ranked]
            scores = [score for _, score in ranked]

        order.extend(range(len(scored_items), len(request.results)))

        query_time_ms = int((time.time() - start_time) * 1000)

        return RankResponse(
            order=order,
            total=len(order),
            query=request.query,
            query_terms=session.query_terms(),
            query_time_ms=query_time_ms,
            scores=scores if (request.explain or self.settings.include_scores) else None,
            explanations=explanations,
            unranked=unranked,
        )

    def query_terms(self, query: str) -> list[str]:
        """Unique query words followed by unique adjacent word pairs."""
        return get_query_terms(query)


# Global service instance (singleton pattern)
_ranking_service: Optional[RankingService] = None


def get_ranking_service() -> RankingService:
    """
    Get or create the global RankingService instance.

    Returns:
        RankingService instance
    """
    global _ranking_service
    if _ranking_service is None:
        _ranking_service = RankingService()
    return _ranking_service
