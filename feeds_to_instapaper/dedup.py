from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import IO, Iterable, Optional, Set, Union

from .exceptions import LedgerIOError

logger = logging.getLogger(__name__)


class Ledger:
    """
    Links that were already submitted or declined.

    The in-memory set answers membership queries; every new URL is also
    appended to a plain text log, one URL per line, so the set survives
    restarts. The log is only ever appended to and each URL appears once.

    Use `Ledger.open(path)` as a context manager so the file is closed on every
    exit path:

        with Ledger.open("data/links.log") as ledger:
            if not ledger.saved(url):
                ledger.add(url)
    """

    def __init__(self, path: Path, handle: IO[str], items: Iterable[str] = ()) -> None:
        self.path = path
        self._file: Optional[IO[str]] = handle
        self._items: Set[str] = set(items)

    @classmethod
    def open(cls, path: Union[str, os.PathLike]) -> "Ledger":
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            handle = open(path, "a+", encoding="utf-8", newline="\n")
        except OSError as e:
            raise LedgerIOError(f"cannot open links log {path}") from e
        try:
            handle.seek(0)
            text = handle.read()
            # keep appended records on their own line
            if text and not text.endswith("\n"):
                handle.write("\n")
                handle.flush()
        except OSError as e:
            handle.close()
            raise LedgerIOError(f"cannot read links log {path}") from e
        except UnicodeDecodeError as e:
            handle.close()
            raise LedgerIOError(f"links log {path} is not valid UTF-8") from e
        items = [line.strip() for line in text.splitlines()]
        ledger = cls(path, handle, (line for line in items if line))
        logger.debug("loaded %d links from %s", len(ledger), path)
        return ledger

    def saved(self, url: str) -> bool:
        return url in self._items

    def add(self, url: str) -> bool:
        """
        Record `url`. Returns False, and writes nothing, when it is already known.
        """
        if "\n" in url or "\r" in url:
            raise ValueError(f"URL must not contain line breaks: {url!r}")
        if url in self._items:
            return False
        if self._file is None:
            raise LedgerIOError(f"links log {self.path} is closed")
        try:
            self._file.write(url + "\n")
            self._file.flush()
        except OSError as e:
            raise LedgerIOError(f"cannot write to links log {self.path}") from e
        self._items.add(url)
        return True

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    @property
    def closed(self) -> bool:
        return self._file is None

    def __contains__(self, url: object) -> bool:
        return url in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __enter__(self) -> "Ledger":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
