"""
Utility functions for the result ranker.
"""
from ranker.utils.text_processing import saturate, shorten_string, utf8_length
from ranker.utils.url_utils import get_domain_and_path, parse_url

__all__ = [
    # Text processing
    "utf8_length",
    "shorten_string",
    "saturate",
    # URL utilities
    "parse_url",
    "get_domain_and_path",
]
