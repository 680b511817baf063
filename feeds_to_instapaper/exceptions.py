from __future__ import annotations

from typing import Optional


class FeedsToInstapaperError(Exception):
    """Base class for every error raised by this package."""


class FeedDownloadError(FeedsToInstapaperError):
    """Raised when a feed document cannot be downloaded."""


class FeedParseError(FeedsToInstapaperError):
    """Raised when a feed document cannot be parsed into a Feed."""


class WrongFormatError(FeedParseError):
    """The document is not of the attempted format (unexpected root element)."""

    def __init__(self, format: str, detected: str = "") -> None:
        self.format = format
        self.detected = detected
        what = f"detected {detected!r}" if detected else "unrecognized root element"
        super().__init__(f"not an {format} document ({what})")


class MalformedFeedError(FeedParseError):
    """The document is of the attempted format but is broken inside."""

    def __init__(self, format: str, cause: Optional[BaseException] = None) -> None:
        self.format = format
        self.cause = cause
        msg = f"malformed {format} document"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)


class BothFormatsFailedError(FeedParseError):
    """Neither the RSS attempt nor the Atom fallback produced a feed."""

    def __init__(self, rss_error: FeedParseError, atom_error: FeedParseError) -> None:
        self.rss_error = rss_error
        self.atom_error = atom_error
        super().__init__(f"document is neither RSS nor Atom ({rss_error}; {atom_error})")


class InvalidURLError(FeedsToInstapaperError, ValueError):
    """Raised when a link cannot be turned into an absolute URL."""


class MissingLinkError(FeedsToInstapaperError):
    """Raised when a feed item carries no link at all."""


class LedgerIOError(FeedsToInstapaperError):
    """Raised when the links log cannot be opened, read or written."""


class SubmissionError(FeedsToInstapaperError):
    """Raised when the read-later service refuses or fails to store a link."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ConfigError(FeedsToInstapaperError):
    """Raised when the configuration file or environment is unusable."""


class PromptError(FeedsToInstapaperError):
    """Raised when an interactive confirmation gets no answer."""
