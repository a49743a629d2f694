"""
Text processing utilities for bounded result fields.

This module provides utilities for:
- Measuring text in UTF-8 bytes
- Shortening text to a byte budget without splitting a character
- Saturating counters to a fixed width
"""
import logging

logger = logging.getLogger(__name__)

# Lone surrogates can reach us from JSON payloads; keep them encodable
_ENCODING_ERRORS = "surrogatepass"


def utf8_length(text: str) -> int:
    """
    Length of text in UTF-8 bytes.

    Args:
        text: Text to measure

    Returns:
        Number of bytes in the UTF-8 encoding of text

    Examples:
        >>> utf8_length("héllo")
        6
    """
    return len(text.encode("utf-8", _ENCODING_ERRORS))


def shorten_string(text: str, max_length: int) -> str:
    """
    Shorten text to at most max_length UTF-8 bytes.

    The cut is moved back to the nearest character boundary, so a
    multi-byte character straddling the bound is dropped whole rather
    than split.

    Args:
        text: Text to shorten
        max_length: Maximum length in UTF-8 bytes

    Returns:
        text unchanged if it fits, otherwise its longest prefix that fits

    Examples:
        >>> shorten_string("héllo", 2)
        "h"
        >>> shorten_string("hello", 10)
        "hello"
    """
    if not text:
        return text

    encoded = text.encode("utf-8", _ENCODING_ERRORS)
    if len(encoded) <= max_length:
        return text

    end = max(max_length, 0)
    # Continuation bytes look like 0b10xxxxxx
    while end > 0 and (encoded[end] & 0xC0) == 0x80:
        end -= 1

    return encoded[:end].decode("utf-8", _ENCODING_ERRORS)


def saturate(value: int, limit: int) -> int:
    """
    Clamp a non-negative count to limit instead of letting it overflow.

    Args:
        value: Count to clamp
        limit: Largest representable value

    Returns:
        min(value, limit)
    """
    return value if value <= limit else limit
