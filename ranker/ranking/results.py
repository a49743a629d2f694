"""
Bounded search result records.
"""

from dataclasses import dataclass
from typing import Dict

from ranker.ranking.constants import (
    MAX_EXTRACT_LENGTH,
    MAX_TITLE_LENGTH,
    MAX_URL_LENGTH,
)
from ranker.utils.text_processing import shorten_string, utf8_length


@dataclass(frozen=True)
class SearchResult:
    """
    One candidate result, with every field cut to its byte bound.

    Build instances with SearchResult.create (or normalize_result) so the
    bounds hold; the constructor itself does not shorten anything.

    Attributes:
        url: Result URL (at most 200 UTF-8 bytes)
        title: Result title (at most 100 UTF-8 bytes)
        extract: Snippet text (at most 200 UTF-8 bytes)
    """
    url: str
    title: str
    extract: str

    @classmethod
    def create(cls, url: str, title: str, extract: str) -> "SearchResult":
        """
        Normalize raw fields into a bounded result.

        Fields are copied as-is when they fit; otherwise they are cut at
        the last character boundary within the bound. No case folding or
        whitespace trimming happens here.
        """
        return cls(
            url=shorten_string(url, MAX_URL_LENGTH),
            title=shorten_string(title, MAX_TITLE_LENGTH),
            extract=shorten_string(extract, MAX_EXTRACT_LENGTH),
        )

    @property
    def url_length(self) -> int:
        """URL length in UTF-8 bytes."""
        return utf8_length(self.url)

    def to_dict(self) -> Dict[str, str]:
        return {"url": self.url, "title": self.title, "extract": self.extract}


def normalize_result(url: str, title: str, extract: str) -> SearchResult:
    """Convenience function for SearchResult.create."""
    return SearchResult.create(url, title, extract)
