"""
feeds_to_instapaper

Reads RSS/Atom feeds and offers every entry it has not seen before to Instapaper.

Core ideas:
- Input: downloaded RSS/Atom documents and the URLs they came from
- Process: parse (RSS, falling back to Atom) → resolve links → skip known links → confirm → submit → record
- State: a plain text links log, one URL per line, that makes re-runs idempotent

Example
-------
from feeds_to_instapaper import InstapaperClient, Ledger, parse_feed, process_feed

client = InstapaperClient("me@example.com", "secret")

with Ledger.open("data/links.log") as ledger:
    feed = parse_feed(document_text)
    process_feed(client, ledger, feed, "https://example.com/feed.xml", auto_add=True)
"""
from .models import Feed, FeedReport, Item, Link, RawFeed
from .parser import parse_feed
from .resolver import fix_url_schema
from .dedup import Ledger
from .instapaper import InstapaperClient
from .core import process_feed, run

__version__ = "0.3.0"

__all__ = [
    "Feed",
    "FeedReport",
    "Item",
    "Link",
    "RawFeed",
    "parse_feed",
    "fix_url_schema",
    "Ledger",
    "InstapaperClient",
    "process_feed",
    "run",
]
