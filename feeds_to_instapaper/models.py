from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from .exceptions import MissingLinkError


@dataclass(frozen=True)
class Item:
    """One entry of a feed, exactly as the document states it."""
    title: Optional[str] = None
    pub_date: Optional[str] = None
    link: Optional[str] = None


@dataclass(frozen=True)
class Feed:
    """
    Format-independent view of an RSS channel or an Atom feed.

    `items` keeps the document order, which is usually newest first.
    `last_update` is a string, not a parsed date.
    """
    title: str
    description: Optional[str] = None
    last_update: Optional[str] = None
    link: Optional[str] = None
    items: List[Item] = field(default_factory=list)


@dataclass(frozen=True)
class Link:
    """A submission candidate: an item that is known to carry a link."""
    url: str
    title: Optional[str] = None

    @classmethod
    def from_item(cls, item: Item) -> "Link":
        if item.link is None:
            raise MissingLinkError(f"link was not present in item {item.title!r}")
        # empty titles are dropped
        return cls(url=item.link, title=item.title or None)

    @property
    def label(self) -> str:
        return self.title or self.url


@dataclass(frozen=True)
class RawFeed:
    """A downloaded feed document and the URL it was finally fetched from."""
    content: Union[bytes, str]
    url: str


@dataclass
class FeedReport:
    submitted: int = 0
    declined: int = 0
    skipped: int = 0
