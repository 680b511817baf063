from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional

import requests

from .exceptions import FeedDownloadError
from .models import RawFeed

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SEC = 30.0


def fetch_feed(
    url: str,
    *,
    session: Optional[requests.Session] = None,
    timeout_sec: float = DEFAULT_TIMEOUT_SEC,
) -> RawFeed:
    """
    Download a single feed document.

    Raises FeedDownloadError on network issues and non-2xx responses. The
    returned RawFeed carries the final URL after redirects.
    """
    if session is None:
        with requests.Session() as own:
            return fetch_feed(url, session=own, timeout_sec=timeout_sec)
    try:
        resp = session.get(url, timeout=timeout_sec)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise FeedDownloadError(f"Failed to fetch feed: {url} ({e})") from e
    return RawFeed(content=resp.content, url=resp.url or url)


def iter_feeds(
    urls: Iterable[str],
    *,
    session: Optional[requests.Session] = None,
    timeout_sec: float = DEFAULT_TIMEOUT_SEC,
    skip_errors: bool = False,
) -> Iterator[RawFeed]:
    """
    Download feeds one after another.

    With `skip_errors` a failed download is logged and the next URL is tried;
    otherwise the first FeedDownloadError propagates.
    """
    http = session or requests.Session()
    try:
        for u in urls:
            try:
                yield fetch_feed(u, session=http, timeout_sec=timeout_sec)
            except FeedDownloadError as e:
                if not skip_errors:
                    raise
                logger.warning("skipping feed: %s", e)
    finally:
        if session is None:
            http.close()
