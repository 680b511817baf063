from __future__ import annotations

import re
from typing import Optional
from urllib.parse import SplitResult, urljoin, urlsplit

from .exceptions import InvalidURLError
from .models import Feed

_WHITESPACE = re.compile(r"[\s\x00-\x1f\x7f]")
_HOST_SCHEMES = {"http", "https", "ftp", "ws", "wss"}


def _split(url: str) -> SplitResult:
    """
    Split `url`, raising InvalidURLError for anything a browser would refuse.

    Leading and trailing whitespace is tolerated; whitespace or control
    characters inside the URL, bad IPv6 literals and bad ports are not.
    """
    if _WHITESPACE.search(url):
        raise InvalidURLError(f"invalid URL {url!r}: contains whitespace")
    try:
        parts = urlsplit(url)
        parts.port  # validates the port number
    except ValueError as e:
        raise InvalidURLError(f"invalid URL {url!r}: {e}") from e
    if parts.scheme in _HOST_SCHEMES and not parts.hostname:
        raise InvalidURLError(f"invalid URL {url!r}: empty host")
    return parts


def parse_base_url(url: str) -> str:
    """Validate a feed base URL; it has to be absolute."""
    url = url.strip()
    parts = _split(url)
    if not parts.scheme:
        raise InvalidURLError(f"base URL {url!r} is not absolute")
    return url


def fix_url_schema(link: str, feed_base: str) -> str:
    """
    Turn a possibly relative item link into an absolute URL.

    Absolute links come back unchanged; relative ones are joined onto
    `feed_base` the way a browser resolves them.
    """
    link = link.strip()
    parts = _split(link)
    if parts.scheme:
        return link
    resolved = urljoin(feed_base, link)
    # urljoin leaves the link relative when the base scheme has no hierarchy
    if not _split(resolved).scheme:
        raise InvalidURLError(f"cannot resolve {link!r} against {feed_base!r}")
    return resolved


def feed_base_url(feed: Feed, fetch_url: Optional[str]) -> str:
    """
    The URL relative item links are resolved against.

    The feed's own link wins over the URL it was fetched from; a relative feed
    link is itself resolved against the fetch URL.
    """
    base = feed.link or fetch_url
    if feed.link and fetch_url:
        base = urljoin(fetch_url, feed.link.strip())
    if not base:
        raise InvalidURLError(f"feed {feed.title!r} declares no link and was not fetched from a URL")
    return parse_base_url(base)
