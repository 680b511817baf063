import pytest

from feeds_to_instapaper.exceptions import MissingLinkError
from feeds_to_instapaper.models import Item, Link
from feeds_to_instapaper.normalizer import to_link


def test_link_from_item_drops_empty_title():
    link = Link.from_item(Item(title="", link="https://site.example/a"))
    assert link == Link(url="https://site.example/a", title=None)
    assert link.label == "https://site.example/a"


def test_link_from_item_without_link():
    with pytest.raises(MissingLinkError):
        Link.from_item(Item(title="orphan"))


def test_to_link_resolves_relative_url():
    link = to_link(Item(title="A", link="/a"), "https://site.example/feed")
    assert link == Link(url="https://site.example/a", title="A")
