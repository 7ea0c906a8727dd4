"""The Pirate Bay search page scraper."""

import logging
from datetime import datetime, timezone
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from ..document import DocumentFetcher
from ..extractors import extract_size, extract_upload_time, extract_video_quality
from ..models import Torrent
from .base import Scraper

logger = logging.getLogger(__name__)


def _parse_int(text: str) -> int:
    text = text.strip().replace(",", "")
    return int(text) if text.isdigit() else 0


def _collapse_description(text: str) -> str:
    # str.split also drops the NBSP get_text() leaves for &nbsp;
    return "".join(text.split())


class PirateBayScraper(Scraper):
    """Scrapes the search result table of a Pirate Bay mirror."""

    def __init__(self, mirror_url: str, fetcher: DocumentFetcher | None = None):
        super().__init__(mirror_url)
        self.fetcher = fetcher or DocumentFetcher()

    def search(self, query: str, timeout: float | None = None) -> list[Torrent]:
        """Fetch and parse the first result page for a query."""
        search_url = self.build_search_url(query)
        logger.debug("[SCRAPER] Search url: %s", search_url)

        soup = self.fetcher.fetch(search_url, timeout=timeout)
        return self.parse_search_page(soup)

    def parse_search_page(
        self, soup: BeautifulSoup, now: datetime | None = None
    ) -> list[Torrent]:
        """Parse every result row; rows that fail to parse are skipped."""
        now = now or datetime.now(timezone.utc)
        rows = soup.select("#searchResult > tbody > tr") or soup.select(
            "#searchResult tr"
        )

        torrents = []
        for row in rows:
            try:
                torrent = self._parse_row(row, now)
            except (AttributeError, IndexError, KeyError, TypeError, ValueError) as e:
                logger.debug("[SCRAPER] Skipping malformed row on %s: %s", self.url, e)
                continue
            if torrent:
                torrents.append(torrent)
        return torrents

    def _parse_row(self, row, now: datetime) -> Torrent | None:
        cells = row.find_all("td", recursive=False) or row.find_all("td")
        if len(cells) < 2:
            # Header or pagination row
            return None

        detail = cells[1]
        link = detail.select_one(".detName > .detLink")
        title = link.get_text(strip=True) if link else ""
        torrent_url = urlparse(link.get("href", "")).path if link else ""

        magnet_elem = detail.find("a", recursive=False)
        magnet = magnet_elem.get("href", "") if magnet_elem else ""

        desc_elem = detail.select_one(".detDesc")
        description = _collapse_description(desc_elem.get_text()) if desc_elem else ""
        uploader_elem = detail.select_one(".detDesc > a.detDesc")
        uploader = uploader_elem.get_text(strip=True) if uploader_elem else ""

        seeders = _parse_int(cells[2].get_text()) if len(cells) > 2 else 0
        leeches = _parse_int(cells[3].get_text()) if len(cells) > 3 else 0
        verified = bool(row.select("img[title='VIP'], img[title='Trusted']"))

        return Torrent(
            title=title,
            size=extract_size(description),
            seeders=seeders,
            leeches=leeches,
            verified_uploader=verified,
            video_quality=extract_video_quality(title),
            mirror_url=self.url,
            torrent_url=torrent_url,
            magnet=magnet,
            upload_time=extract_upload_time(description, now),
            uploader=uploader,
        )
