"""
Request and response models for the result ranker.
"""
from ranker.models.schemas import (
    ErrorResponse,
    QueryTermsRequest,
    QueryTermsResponse,
    RankRequest,
    RankResponse,
    ResultItem,
)

__all__ = [
    "ResultItem",
    "RankRequest",
    "RankResponse",
    "QueryTermsRequest",
    "QueryTermsResponse",
    "ErrorResponse",
]
