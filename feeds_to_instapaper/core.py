from __future__ import annotations

import logging
from typing import Optional

import requests

from .config import Config
from .dedup import Ledger
from .exceptions import SubmissionError
from .fetcher import iter_feeds
from .instapaper import InstapaperClient, Submitter
from .models import Feed, FeedReport
from .normalizer import to_link
from .parser import parse_feed
from .prompts import Confirmer, build_confirmer
from .resolver import feed_base_url

logger = logging.getLogger(__name__)


def _report_skips(report: FeedReport, pending: int) -> int:
    if pending > 0:
        logger.info("skipped %d already existing links", pending)
        report.skipped += pending
    return 0


def process_feed(
    client: Submitter,
    ledger: Ledger,
    feed: Feed,
    fetch_url: Optional[str],
    *,
    auto_add: bool = False,
    confirmer: Optional[Confirmer] = None,
) -> FeedReport:
    """
    Offer every new item of `feed` to `client`, oldest first.

    Already known links are counted and reported in batches. A confirmed link
    is recorded only after the client accepted it; a declined link is recorded
    right away so it is never offered again.

    A missing or unresolvable link aborts the feed, a SubmissionError aborts
    the whole run; in both cases nothing after the failing item is touched.
    """
    logger.info('Processing "%s"', feed.title)
    base = feed_base_url(feed, fetch_url)
    ask = build_confirmer(auto_add, confirmer)
    report = FeedReport()
    pending = 0

    # feeds list the newest entry first
    for item in reversed(feed.items):
        link = to_link(item, base)
        if ledger.saved(link.url):
            pending += 1
            continue
        pending = _report_skips(report, pending)

        if ask.confirm(f'Add "{link.label}"?'):
            logger.info("adding to instapaper...")
            client.submit(link)
            ledger.add(link.url)
            report.submitted += 1
            logger.info("done")
        else:
            ledger.add(link.url)
            report.declined += 1
            logger.info("marked %s as skipped", link.url)

    _report_skips(report, pending)
    return report


def run(
    config: Config,
    *,
    client: Optional[Submitter] = None,
    session: Optional[requests.Session] = None,
    confirmer: Optional[Confirmer] = None,
) -> FeedReport:
    """
    Process every configured feed against the links log.

    With `config.skip_download_errors` a feed that cannot be downloaded is
    skipped. That tolerance covers feed acquisition only: a failed submission
    still ends the run so the link is retried next time.
    """
    if session is None:
        with requests.Session() as own:
            return run(config, client=client, session=own, confirmer=confirmer)

    http = session
    if client is None:
        instapaper = InstapaperClient(
            config.username,
            config.password,
            session=http,
            timeout_sec=config.timeout_sec,
        )
        if not instapaper.validate_credentials():
            raise SubmissionError("Instapaper rejected the configured username/password")
        client = instapaper

    total = FeedReport()
    with Ledger.open(config.links_log_file) as ledger:
        raw_feeds = iter_feeds(
            config.feeds,
            session=http,
            timeout_sec=config.timeout_sec,
            skip_errors=config.skip_download_errors,
        )
        for raw in raw_feeds:
            feed = parse_feed(raw.content)
            report = process_feed(
                client,
                ledger,
                feed,
                raw.url,
                auto_add=config.auto_add,
                confirmer=confirmer,
            )
            total.submitted += report.submitted
            total.declined += report.declined
            total.skipped += report.skipped
    return total
