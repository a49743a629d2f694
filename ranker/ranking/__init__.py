"""
Ranking module for re-ordering search results by query relevance.

Provides:
- Query compilation into a whole-word match pattern
- Bounded, normalized result records
- Per-field match features (title, extract, domain, path)
- Weighted scoring with a URL length penalty
- Ranking sessions producing an ordering of result indices
"""

from ranker.ranking.features import (
    FeatureExtractor,
    FeatureSet,
    MatchFeatures,
    get_features,
    match_field,
)
from ranker.ranking.query import (
    CompiledQuery,
    InvalidQueryError,
    QueryCompiler,
    compile_terms,
    get_query_terms,
)
from ranker.ranking.results import SearchResult, normalize_result
from ranker.ranking.scoring import ResultScorer, score_result
from ranker.ranking.session import RankingSession, compile_query

__all__ = [
    # Query compilation
    "QueryCompiler",
    "CompiledQuery",
    "InvalidQueryError",
    "compile_terms",
    "get_query_terms",
    # Results
    "SearchResult",
    "normalize_result",
    # Feature extraction
    "FeatureExtractor",
    "FeatureSet",
    "MatchFeatures",
    "get_features",
    "match_field",
    # Scoring
    "ResultScorer",
    "score_result",
    # Sessions
    "RankingSession",
    "compile_query",
]
