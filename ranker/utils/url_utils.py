"""
URL helpers for domain and path features.

Domains and paths are reported the way browsers serialize them: host
names in lower-case ASCII (internationalized names in their "xn--" form)
and paths percent-encoded outside printable ASCII.
"""
import ipaddress
import logging
from typing import Optional, Tuple
from urllib.parse import SplitResult, quote, urlsplit

logger = logging.getLogger(__name__)

# Schemes whose URLs always carry a host and a non-empty path
SPECIAL_SCHEMES = {"http", "https", "ws", "wss", "ftp"}

# Printable ASCII left as-is in special-scheme paths
PATH_SAFE_CHARS = "/%:@!$&'()*+,;=[]|"


def _ascii_host(host: str) -> str:
    """
    IDNA form of a host name.

    Raises:
        UnicodeError: If a label cannot be converted
    """
    if host.isascii():
        return host
    return host.encode("idna").decode("ascii")


def parse_url(url: str) -> Optional[SplitResult]:
    """
    Parse an absolute URL.

    Special-scheme URLs written without "//" (such as "http:example.com/a")
    or with extra slashes still name a host, as they do in a browser.

    Args:
        url: URL text

    Returns:
        The split URL, or None when url is relative, lacks a host for a
        special scheme, or cannot be parsed at all
    """
    text = url.strip()
    try:
        parsed = urlsplit(text)
        if parsed.scheme in SPECIAL_SCHEMES and not parsed.netloc:
            rest = text.split(":", 1)[1].lstrip("/\\")
            parsed = urlsplit(f"{parsed.scheme}://{rest}")
        # Accessing port validates it
        parsed.port
    except ValueError:
        return None

    if not parsed.scheme:
        return None

    if parsed.scheme in SPECIAL_SCHEMES:
        if not parsed.hostname:
            return None
        try:
            _ascii_host(parsed.hostname)
        except UnicodeError:
            return None

    return parsed


def _domain(parsed: SplitResult) -> str:
    """Host name of a parsed URL, or "" for IP literals and missing hosts."""
    host = parsed.hostname
    if not host:
        return ""

    try:
        ipaddress.ip_address(host)
    except ValueError:
        return _ascii_host(host)

    return ""


def _path(parsed: SplitResult) -> str:
    """Path of a parsed URL, "/" for an empty path under a special scheme."""
    if parsed.scheme not in SPECIAL_SCHEMES:
        return parsed.path
    if not parsed.path:
        return "/"
    return quote(parsed.path, safe=PATH_SAFE_CHARS, errors="replace")


def get_domain_and_path(url: str, fallback_url: str) -> Tuple[str, str]:
    """
    Extract the domain and path used for URL match features.

    Unparseable URLs fall back to fallback_url, so every result gets
    deterministic domain and path values.

    Args:
        url: Result URL
        fallback_url: Well-formed URL substituted when url cannot be parsed

    Returns:
        Tuple of (domain, path)

    Examples:
        >>> get_domain_and_path("https://en.wikipedia.org/wiki/URL", "https://_.com")
        ("en.wikipedia.org", "/wiki/URL")
        >>> get_domain_and_path("https://fr.wikipedia.org/wiki/Café", "https://_.com")
        ("fr.wikipedia.org", "/wiki/Caf%C3%A9")
        >>> get_domain_and_path("not a url", "https://_.com")
        ("_.com", "/")
    """
    parsed = parse_url(url)
    if parsed is None:
        logger.debug(f"Could not parse URL {url!r}, using {fallback_url}")
        parsed = urlsplit(fallback_url)

    return _domain(parsed), _path(parsed)
