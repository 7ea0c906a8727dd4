"""Fetch pages over HTTP and parse them into BeautifulSoup documents."""

import logging
from pathlib import Path

import requests
from bs4 import BeautifulSoup

from .exceptions import TransportError

logger = logging.getLogger(__name__)

# Pages must come back in English for the description parsing to work
HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Accept-Language": "en-US,en;q=0.8",
    "Accept": "text/html,application/xhtml+xml,application/xml",
}
TIMEOUT = 15


class DocumentFetcher:
    """Fetches a URL and returns the parsed document."""

    def __init__(
        self,
        session: requests.Session | None = None,
        headers: dict[str, str] | None = None,
    ):
        self.session = session or requests.Session()
        self.session.headers.update(headers or HEADERS)

    def fetch(self, url: str, timeout: float | None = None) -> BeautifulSoup:
        """GET a page. Raises TransportError on any network or status failure."""
        timeout = timeout or TIMEOUT
        logger.debug("[FETCH] GET %s (timeout %.1fs)", url, timeout)
        try:
            resp = self.session.get(url, timeout=timeout)
            resp.raise_for_status()
        except requests.HTTPError as e:
            raise TransportError(url, str(e.response.status_code)) from e
        except requests.RequestException as e:
            raise TransportError(url, str(e)) from e

        try:
            return BeautifulSoup(resp.text, "html.parser")
        except Exception as e:
            raise TransportError(url, f"unparseable body: {e}") from e

    @staticmethod
    def load_file(path: str | Path) -> BeautifulSoup:
        """Parse a saved HTML page."""
        with open(path, encoding="utf-8") as f:
            return BeautifulSoup(f.read(), "html.parser")
