from __future__ import annotations

from dataclasses import replace

from .models import Item, Link
from .resolver import fix_url_schema


def to_link(item: Item, feed_base: str) -> Link:
    """
    Convert a feed item into a submission candidate with an absolute URL.
    Raises:
    - MissingLinkError when the item has no link
    - InvalidURLError when the link cannot be resolved against `feed_base`
    """
    link = Link.from_item(item)
    return replace(link, url=fix_url_schema(link.url, feed_base))
