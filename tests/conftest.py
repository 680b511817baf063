"""
Shared pytest fixtures: sample documents, a temporary links log and test
doubles for the submission client, the confirmation prompt and HTTP.
"""
from typing import Dict, List, Optional

import pytest
import requests

from feeds_to_instapaper.dedup import Ledger
from feeds_to_instapaper.exceptions import SubmissionError


RSS_DOC = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>GHC Blog</title>
    <link>https://site.example/</link>
    <description>News about GHC</description>
    <lastBuildDate>Mon, 05 Mar 2018 10:00:00 GMT</lastBuildDate>
    <item>
      <title>Third post</title>
      <link>/posts/3</link>
      <pubDate>Mon, 05 Mar 2018 09:00:00 GMT</pubDate>
    </item>
    <item>
      <title>Second post</title>
      <link>https://site.example/posts/2</link>
      <pubDate>Sun, 04 Mar 2018 09:00:00 GMT</pubDate>
    </item>
    <item>
      <title></title>
      <link>posts/1</link>
    </item>
  </channel>
</rss>
"""

ATOM_DOC = """<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>command center</title>
  <subtitle>Rob Pike's blog</subtitle>
  <link rel="self" href="https://cc.example/feeds/posts/default"/>
  <link rel="alternate" type="text/html" href="https://cc.example/"/>
  <updated>2018-03-05T12:00:00+02:00</updated>
  <id>tag:cc.example,2018:blog</id>
  <entry>
    <title>Newest</title>
    <id>tag:cc.example,2018:3</id>
    <link rel="replies" href="https://cc.example/2018/03/newest.html#comments"/>
    <link rel="alternate" type="text/html" href="https://cc.example/2018/03/newest.html"/>
    <published>2018-03-05T09:00:00Z</published>
    <updated>2018-03-05T09:00:00Z</updated>
  </entry>
  <entry>
    <title>Older</title>
    <id>tag:cc.example,2018:2</id>
    <link href="/2018/01/older.html"/>
    <updated>2018-01-10T09:00:00Z</updated>
  </entry>
  <entry>
    <title>Self only</title>
    <id>tag:cc.example,2018:1</id>
    <link rel="self" href="https://cc.example/feeds/posts/1"/>
    <updated>2018-01-01T09:00:00Z</updated>
  </entry>
</feed>
"""


class RecordingSubmitter:
    """Submission client double: remembers links, fails for chosen URLs."""

    def __init__(self, fail_on: Optional[str] = None) -> None:
        self.fail_on = fail_on
        self.submitted: List = []

    def submit(self, link) -> None:
        if link.url == self.fail_on:
            raise SubmissionError(f"refused {link.url}", status_code=400)
        self.submitted.append(link)

    @property
    def urls(self) -> List[str]:
        return [link.url for link in self.submitted]


class ScriptedConfirmer:
    """Answers prompts from a list and remembers the labels it was asked."""

    def __init__(self, answers: List[bool]) -> None:
        self.answers = list(answers)
        self.labels: List[str] = []

    def confirm(self, label: str) -> bool:
        self.labels.append(label)
        return self.answers.pop(0)


class StubResponse:
    def __init__(self, status_code: int = 200, content: bytes = b"", url: str = "") -> None:
        self.status_code = status_code
        self.content = content
        self.url = url

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error for url: {self.url}")


class StubSession:
    """
    Stand-in for requests.Session.

    `pages` maps a URL to a StubResponse or to an exception instance to raise.
    POST requests are answered with `post_status` and recorded in `posts`.
    `closed` counts calls to close().
    """

    def __init__(self, pages: Optional[Dict] = None, post_status: Dict[str, int] = None) -> None:
        self.pages = pages or {}
        self.post_status = post_status or {}
        self.gets: List[str] = []
        self.posts: List[Dict] = []
        self.closed = 0

    def get(self, url, timeout=None):
        self.gets.append(url)
        page = self.pages.get(url)
        if page is None:
            raise requests.ConnectionError(f"no route to {url}")
        if isinstance(page, Exception):
            raise page
        return page

    def post(self, url, data=None, auth=None, timeout=None):
        self.posts.append({"url": url, "data": data, "auth": auth, "timeout": timeout})
        endpoint = url.rsplit("/", 1)[-1]
        return StubResponse(self.post_status.get(endpoint, 200), url=url)

    def close(self):
        self.closed += 1

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "data" / "links.log"


@pytest.fixture
def ledger(log_path):
    with Ledger.open(log_path) as opened:
        yield opened


@pytest.fixture
def submitter():
    return RecordingSubmitter()
