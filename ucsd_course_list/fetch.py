"""
HTTP access to the catalog.

Anything with a ``get(url) -> str`` method can stand in for HttpFetcher;
the crawler never touches requests directly.
"""
from __future__ import annotations

import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import FetchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
DEFAULT_RETRIES = 3
USER_AGENT = "ucsd-course-list/0.1"


class HttpFetcher:
    """requests session with retries and a per-request timeout."""

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_RETRIES,
        user_agent: str = USER_AGENT,
    ):
        self.timeout = timeout
        self.session = requests.Session()
        retries = Retry(
            total=max_retries,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
        )
        adapter = HTTPAdapter(max_retries=retries)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)
        self.session.headers.update({"User-Agent": user_agent})

    def get(self, url: str) -> str:
        """Return the response body, or raise FetchError."""
        logger.debug("GET %s", url)
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.Timeout as exc:
            raise FetchError(url, f"timed out after {self.timeout}s") from exc
        except requests.RequestException as exc:
            raise FetchError(url, str(exc)) from exc
        if "charset" not in resp.headers.get("Content-Type", "").lower():
            # Catalog pages are UTF-8; requests would assume ISO-8859-1 for text/html.
            resp.encoding = "utf-8"
        return resp.text

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "HttpFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
