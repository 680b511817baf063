from __future__ import annotations

import logging
from typing import Dict, Optional, Protocol
from urllib.parse import urljoin

import requests

from .exceptions import SubmissionError
from .models import Link

logger = logging.getLogger(__name__)

BASE_URL = "https://www.instapaper.com/api/"


class Submitter(Protocol):
    def submit(self, link: Link) -> None:  # pragma: no cover - interface
        ...


class InstapaperClient:
    """
    Instapaper "Simple API" client.

    Only two calls are used: `authenticate` to check credentials up front and
    `add` to store a link. Both take HTTP basic auth.
    """

    def __init__(
        self,
        username: str,
        password: str,
        *,
        session: Optional[requests.Session] = None,
        base_url: str = BASE_URL,
        timeout_sec: float = 30.0,
    ) -> None:
        self._session = session or requests.Session()
        self._auth = (username, password)
        self.base_url = base_url
        self._timeout = timeout_sec

    def _post(self, endpoint: str, data: Optional[Dict[str, str]] = None) -> requests.Response:
        return self._session.post(
            urljoin(self.base_url, endpoint),
            data=data,
            auth=self._auth,
            timeout=self._timeout,
        )

    def validate_credentials(self) -> bool:
        try:
            resp = self._post("authenticate")
        except requests.RequestException as e:
            raise SubmissionError(f"Instapaper authentication request failed ({e})") from e
        return resp.status_code == 200

    def submit(self, link: Link) -> None:
        data = {"url": link.url}
        if link.title:
            data["title"] = link.title
        try:
            resp = self._post("add", data)
        except requests.RequestException as e:
            raise SubmissionError(f"Failed to add {link.url} to Instapaper ({e})") from e
        if resp.status_code != 201:
            raise SubmissionError(
                f"Instapaper refused {link.url} (HTTP {resp.status_code})",
                status_code=resp.status_code,
            )
        logger.debug("Instapaper stored %s", link.url)
