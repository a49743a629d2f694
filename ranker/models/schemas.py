"""
Pydantic schemas for API requests and responses.

This module defines the data models used for API communication,
validation, and serialization.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ResultItem(BaseModel):
    """Schema for one candidate result to be ranked."""

    # numeric titles and extracts show up in scraped payloads
    model_config = ConfigDict(coerce_numbers_to_str=True)

    url: str = Field(default="", description="Result URL")
    title: str = Field(default="", description="Result title")
    extract: str = Field(default="", description="Result snippet")

    @field_validator("url", "title", "extract", mode="before")
    @classmethod
    def replace_null(cls, v: Optional[str]) -> str:
        """Treat null fields as empty strings."""
        return "" if v is None else v


class RankRequest(BaseModel):
    """Schema for ranking requests."""

    query: str = Field(..., description="Search query text")
    results: List[ResultItem] = Field(
        default_factory=list, description="Candidate results, in the order they were retrieved"
    )
    explain: bool = Field(default=False, description="Include a per-result score breakdown")


class RankResponse(BaseModel):
    """Schema for ranking responses."""

    order: List[int] = Field(..., description="Result indices, most relevant first")
    total: int = Field(..., description="Number of results in the ordering", ge=0)
    query: str = Field(..., description="The query results were ranked for")
    query_terms: List[str] = Field(..., description="Unique query words and word pairs")
    query_time_ms: int = Field(..., description="Ranking time in milliseconds", ge=0)
    scores: Optional[List[float]] = Field(
        None, description="Relevance score of each ranked result, in ranked order"
    )
    explanations: Optional[List[Dict[str, Any]]] = Field(
        None, description="Per-result score breakdown, in ranked order"
    )
    unranked: int = Field(
        0, description="Results past the per-request limit, appended unscored in input order", ge=0
    )


class QueryTermsRequest(BaseModel):
    """Schema for query term requests."""

    query: str = Field(..., description="Search query text")


class QueryTermsResponse(BaseModel):
    """Schema for query term responses."""

    query: str = Field(..., description="The query")
    terms: List[str] = Field(..., description="Unique query words followed by unique word pairs")


class ErrorResponse(BaseModel):
    """Schema for error responses."""

    detail: str = Field(..., description="Error message")
