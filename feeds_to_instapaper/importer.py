from __future__ import annotations

import csv
import logging
import os
from typing import Union

from .dedup import Ledger
from .exceptions import FeedsToInstapaperError

logger = logging.getLogger(__name__)


def _is_header(cell: str) -> bool:
    return "://" not in cell


def import_csv(path: Union[str, os.PathLike], ledger: Ledger) -> int:
    """
    Mark every URL of an Instapaper CSV export as already saved.

    The first column of each record is the URL; the export's header row
    (URL,Title,Selection,Folder) is skipped. Nothing is submitted. Returns the
    number of URLs that were not in the ledger yet.
    """
    added = 0
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            for lineno, row in enumerate(csv.reader(f), start=1):
                if not row or not row[0].strip():
                    continue
                url = row[0].strip()
                if lineno == 1 and _is_header(url):
                    continue
                if ledger.add(url):
                    added += 1
    except OSError as e:
        raise FeedsToInstapaperError(f"cannot read CSV file {path}") from e
    except (csv.Error, UnicodeDecodeError) as e:
        raise FeedsToInstapaperError(f"invalid CSV file {path}") from e
    logger.info("imported %d new links from %s", added, path)
    return added
