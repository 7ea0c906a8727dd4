"""Base class for Pirate Bay page scrapers."""

import logging
from abc import ABC, abstractmethod
from urllib.parse import urlencode, urlparse, urlunparse

from bs4 import BeautifulSoup

from ..config import SearchFilters
from ..models import Torrent
from ..search import filter_by_title, filter_torrents, search_video_torrent_list
from ..text import normalize_query

logger = logging.getLogger(__name__)

SEARCH_PATH = "/search.php"
ORDER_BY_RELEVANCE = "99"


def normalize_mirror_url(mirror_url: str) -> str:
    """Validate a mirror URL, defaulting the scheme to https."""
    url = (mirror_url or "").strip()
    if url and "://" not in url:
        url = f"https://{url}"
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"Invalid mirror URL: {mirror_url!r}")
    return url


class Scraper(ABC):
    """Scrapes search results from a single Pirate Bay mirror."""

    def __init__(self, mirror_url: str):
        self._url = normalize_mirror_url(mirror_url)

    @property
    def url(self) -> str:
        return self._url

    def build_search_url(self, query: str) -> str:
        """Search URL for a query, ordered by relevance, first page."""
        parsed = urlparse(self.url)
        params = urlencode(
            {
                "orderby": ORDER_BY_RELEVANCE,
                "page": "0",
                "q": normalize_query(query),
            }
        )
        return urlunparse(parsed._replace(path=SEARCH_PATH, query=params))

    @abstractmethod
    def search(self, query: str, timeout: float | None = None) -> list[Torrent]:
        """Search the mirror. Raises TransportError if it cannot be reached."""
        ...

    @abstractmethod
    def parse_search_page(self, soup: BeautifulSoup) -> list[Torrent]:
        """Parse a search result page into torrents."""
        ...

    def search_video_torrents(
        self,
        query: str,
        filters: SearchFilters,
        *contains: str,
        timeout: float | None = None,
    ) -> list[Torrent]:
        """Search and return the first torrent of each quality, best first.

        Torrents must pass the filters and contain every term in `contains`.
        """
        filters.validate()
        torrents = self.search(normalize_query(query), timeout)
        filtered = filter_torrents(torrents, filters)
        title_filtered = filter_by_title(filtered, *contains)
        per_quality = search_video_torrent_list(title_filtered, filters)

        logger.debug(
            "[SCRAPER] %d => %d => %d => %d",
            len(torrents),
            len(filtered),
            len(title_filtered),
            len(per_quality),
        )
        return [per_quality[q] for q in sorted(per_quality, reverse=True)]
