"""
Relevance scoring for search results.

Combines the four field match scores with a URL length penalty.

Formula:
    match_score = 4·title + 1·extract + 4·domain + 2·path
    length_penalty = exp(-0.04 · |url|)
    score = match_score · length_penalty / 10

Where:
    - title, extract, domain, path = per-field match scores
    - |url| = URL length in UTF-8 bytes

Only the relative order of scores for the same query is meaningful.
"""

import logging
import math
from typing import Any, Dict, Optional

import numpy as np

from ranker.ranking.constants import (
    FIELD_WEIGHTS,
    SCORE_SCALE,
    URL_LENGTH_PENALTY_RATE,
)
from ranker.ranking.features import FeatureSet

logger = logging.getLogger(__name__)


class ResultScorer:
    """
    Weighted field-match scorer with an exponential URL length penalty.

    Scores are computed in single precision.

    Attributes:
        weights: Weight per field name
        penalty_rate: Decay rate of the URL length penalty
    """

    def __init__(
        self,
        weights: Optional[Dict[str, float]] = None,
        penalty_rate: float = URL_LENGTH_PENALTY_RATE,
    ) -> None:
        """
        Initialize scorer.

        Args:
            weights: Field weights (default: title 4, extract 1, domain 4, path 2)
            penalty_rate: URL length decay rate (default: 0.04)
        """
        self.weights = dict(weights or FIELD_WEIGHTS)
        self.penalty_rate = penalty_rate

    def length_penalty(self, url_length: int) -> float:
        """
        Exponential penalty for long URLs.

        Args:
            url_length: URL length in UTF-8 bytes

        Returns:
            float: Factor in (0, 1], 1 for an empty URL
        """
        return float(np.float32(math.exp(-self.penalty_rate * url_length)))

    def match_score(self, features: FeatureSet) -> float:
        """Weighted sum of the field match scores."""
        total = np.float32(0.0)
        for name, field_features in features.items():
            total += np.float32(self.weights[name]) * np.float32(field_features.score)
        return float(total)

    def score(self, features: FeatureSet, url_length: int) -> float:
        """
        Calculate the relevance score of a result.

        Args:
            features: Match features of the result
            url_length: URL length in UTF-8 bytes

        Returns:
            float: Relevance score (higher = more relevant)
        """
        match_score = np.float32(self.match_score(features))
        penalty = np.float32(self.length_penalty(url_length))

        return float(match_score * penalty / np.float32(SCORE_SCALE))

    def score_with_explanation(
        self,
        features: FeatureSet,
        url_length: int,
    ) -> Dict[str, Any]:
        """
        Calculate the relevance score with a per-field breakdown.

        Args:
            features: Match features of the result
            url_length: URL length in UTF-8 bytes

        Returns:
            dict: Score, penalty, and weighted contribution of each field
        """
        field_scores = {}
        for name, field_features in features.items():
            weight = self.weights[name]
            field_scores[name] = {
                **field_features.to_dict(),
                "weight": weight,
                "contribution": weight * field_features.score,
            }

        return {
            "total_score": self.score(features, url_length),
            "match_score": self.match_score(features),
            "length_penalty": self.length_penalty(url_length),
            "url_length": url_length,
            "field_scores": field_scores,
            "parameters": {
                "weights": dict(self.weights),
                "penalty_rate": self.penalty_rate,
                "scale": SCORE_SCALE,
            },
        }


def score_result(features: FeatureSet, url_length: int) -> float:
    """
    Score a result with the default weights.

    Args:
        features: Match features of the result
        url_length: URL length in UTF-8 bytes

    Returns:
        float: Relevance score
    """
    return ResultScorer().score(features, url_length)
