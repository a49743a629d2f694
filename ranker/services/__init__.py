"""
Service layer for the result ranker.
"""
from ranker.services.ranking_service import RankingService, get_ranking_service

__all__ = [
    "RankingService",
    "get_ranking_service",
]
