from __future__ import annotations

import io
import time
from enum import Enum
from typing import Any, Dict, List, Optional, Union

import feedparser

from .exceptions import (
    BothFormatsFailedError,
    FeedParseError,
    MalformedFeedError,
    WrongFormatError,
)
from .models import Feed, Item


class FeedFormat(str, Enum):
    RSS = "rss"
    ATOM = "atom"


# feedparser reports the detected dialect in `version`, e.g. "rss20", "rss10", "atom10".
_VERSION_PREFIX = {
    FeedFormat.RSS: "rss",
    FeedFormat.ATOM: "atom",
}

# Encoding complaints that feedparser raises the bozo flag for but recovers from.
_HARMLESS_BOZO = (
    feedparser.CharacterEncodingOverride,
    feedparser.NonXMLContentType,
)


def _load(text: Union[str, bytes]) -> Dict[str, Any]:
    """
    Run feedparser over an in-memory document.

    The document is always wrapped in a stream: feedparser treats plain strings
    as URLs or file names when they look like one.
    """
    if isinstance(text, str):
        return feedparser.parse(
            io.BytesIO(text.encode("utf-8")),
            response_headers={"content-type": "application/xml; charset=utf-8"},
        )
    return feedparser.parse(io.BytesIO(text))


def _attempt(document: Dict[str, Any], fmt: FeedFormat) -> None:
    """
    Check that `document` is a well-formed document of format `fmt`.

    Raises WrongFormatError when the root element belongs to another format and
    MalformedFeedError when the root matches but the XML is broken.
    """
    version = document.get("version") or ""
    if not version.startswith(_VERSION_PREFIX[fmt]):
        raise WrongFormatError(fmt.value, version)
    if document.get("bozo"):
        exc = document.get("bozo_exception")
        if not isinstance(exc, _HARMLESS_BOZO):
            raise MalformedFeedError(fmt.value, exc)


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    return None


def _atom_timestamp(meta: Dict[str, Any]) -> Optional[str]:
    """Atom `updated` as a canonical UTC timestamp, or the raw string if it does not parse."""
    parsed = dict.get(meta, "updated_parsed")
    if isinstance(parsed, time.struct_time):
        return time.strftime("%Y-%m-%dT%H:%M:%SZ", parsed)
    return _text(dict.get(meta, "updated"))


def _atom_link(links: List[Dict[str, Any]]) -> Optional[str]:
    """
    Pick the link a reader would follow.

    The first rel="alternate" link wins; failing that, the first link with an
    empty relation. feedparser reports a missing rel as "alternate", which is
    also what RFC 4287 says it means.
    """
    for link in links:
        if link.get("rel") == "alternate" and link.get("href") is not None:
            return link["href"]
    for link in links:
        if not link.get("rel") and link.get("href") is not None:
            return link["href"]
    return None


def _rss_link(entry: Dict[str, Any]) -> Optional[str]:
    # feedparser copies a permalink <guid> into `link` when no <link> came
    # before it; a later <link> overwrites the copy but leaves `guidislink` set.
    links = entry.get("links") or []
    if entry.get("guidislink") and not any(link.get("rel") == "alternate" for link in links):
        return None
    return _text(entry.get("link"))


def _rss_item(entry: Dict[str, Any]) -> Item:
    return Item(
        title=_text(entry.get("title")),
        pub_date=_text(entry.get("published")),
        link=_rss_link(entry),
    )


def _atom_item(entry: Dict[str, Any]) -> Item:
    return Item(
        title=_text(entry.get("title")),
        pub_date=_text(entry.get("published")),
        link=_atom_link(entry.get("links") or []),
    )


def _to_feed(document: Dict[str, Any], fmt: FeedFormat) -> Feed:
    meta = document.get("feed") or {}
    entries = document.get("entries") or []
    if fmt is FeedFormat.RSS:
        # feedparser files the channel description under `subtitle`
        # and lastBuildDate under `updated`. Plain dict.get skips its
        # deprecated `updated` -> `published` fallback.
        return Feed(
            title=_text(meta.get("title")) or "",
            description=_text(meta.get("subtitle")),
            last_update=_text(dict.get(meta, "updated")),
            link=_text(meta.get("link")),
            items=[_rss_item(e) for e in entries],
        )
    return Feed(
        title=_text(meta.get("title")) or "",
        description=_text(meta.get("subtitle")),
        last_update=_atom_timestamp(meta),
        link=_atom_link(meta.get("links") or []),
        items=[_atom_item(e) for e in entries],
    )


def parse_feed(text: Union[str, bytes]) -> Feed:
    """
    Parse an RSS or Atom document into a Feed.

    RSS is tried first. Only a format mismatch (the root element is not an RSS
    root) sends the document to the Atom attempt; a broken RSS document raises
    MalformedFeedError right away.
    """
    document = _load(text)
    fmt = FeedFormat.RSS
    try:
        _attempt(document, fmt)
    except WrongFormatError as rss_error:
        fmt = FeedFormat.ATOM
        try:
            _attempt(document, fmt)
        except FeedParseError as atom_error:
            raise BothFormatsFailedError(rss_error, atom_error) from atom_error
    return _to_feed(document, fmt)
