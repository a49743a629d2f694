"""
Ranking API endpoints for re-ordering caller-supplied search results.

The caller sends a query and the results it already retrieved; the
response holds the indices of those results, most relevant first.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ranker.models.schemas import (
    ErrorResponse,
    QueryTermsRequest,
    QueryTermsResponse,
    RankRequest,
    RankResponse,
)
from ranker.services.ranking_service import RankingService, get_ranking_service

logger = logging.getLogger(__name__)

router = APIRouter()


def get_service() -> RankingService:
    """
    Dependency injection for RankingService.

    Returns:
        RankingService instance
    """
    return get_ranking_service()


@router.post(
    "/",
    response_model=RankResponse,
    status_code=status.HTTP_200_OK,
    summary="Rank results",
    description="Re-order candidate search results by relevance to a query",
    responses={
        200: {
            "description": "Ranking completed successfully",
            "model": RankResponse,
        },
        400: {
            "description": "Invalid request parameters",
            "model": ErrorResponse,
        },
        500: {
            "description": "Internal server error",
            "model": ErrorResponse,
        },
    },
)
async def rank_results(
    request: RankRequest,
    service: RankingService = Depends(get_service),
) -> RankResponse:
    """
    Rank search results for a query.

    Results are scored on query term matches in their title, extract,
    domain and path, with a penalty for long URLs. Null fields are
    treated as empty strings.

    **Parameters:**
    - **query**: Search query text (at least one term)
    - **results**: Candidate results with url, title and extract
      (numbers are read as text; past the configured limit they are left unscored)
    - **explain**: Include a per-result score breakdown (default: false)

    **Returns:**
    - Indices of the results, most relevant first
    - Query words and word pairs
    - Ranking time

    **Example Request:**
    ```json
    {
        "query": "url",
        "results": [
            {"url": "https://example.com/a/very/long/path", "title": "Example", "extract": ""},
            {"url": "https://en.wikipedia.org/wiki/URL", "title": "URL", "extract": "A URL is..."}
        ]
    }
    ```

    **Example Response:**
    ```json
    {
        "order": [1, 0],
        "total": 2,
        "query": "url",
        "query_terms": ["url"],
        "query_time_ms": 0,
        "scores": null,
        "explanations": null
    }
    ```
    """
    try:
        logger.info(
            f"Received rank request: query='{request.query}', results={len(request.results)}"
        )

        response = service.rank(request)

        logger.info(
            f"Ranking completed successfully: {response.total} results in {response.query_time_ms}ms"
        )

        return response

    except ValueError as e:
        # Empty queries and oversized batches
        logger.warning(f"Invalid rank request: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    except Exception as e:
        logger.error(f"Rank request failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while ranking the results",
        )


@router.post(
    "/terms",
    response_model=QueryTermsResponse,
    status_code=status.HTTP_200_OK,
    summary="Query terms",
    description="List the unique words and adjacent word pairs of a query",
)
async def query_terms(
    request: QueryTermsRequest,
    service: RankingService = Depends(get_service),
) -> QueryTermsResponse:
    """
    Return the unique words of a query followed by its unique word pairs.

    Intended for display, e.g. highlighting; ranking does not use pairs.
    """
    return QueryTermsResponse(query=request.query, terms=service.query_terms(request.query))
