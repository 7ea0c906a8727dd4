"""Scraper that replays saved pages instead of hitting the network."""

from pathlib import Path

from bs4 import BeautifulSoup

from ..document import DocumentFetcher
from ..exceptions import TransportError
from ..models import Torrent
from .piratebay import PirateBayScraper


class FixtureScraper(PirateBayScraper):
    """Serves one canned search page (or one canned failure) for a mirror.

    Every call to `search` is recorded in `calls` as `(query, timeout)`.
    """

    def __init__(
        self,
        mirror_url: str,
        page: str | Path | BeautifulSoup | None = None,
        error: TransportError | None = None,
        fetcher: DocumentFetcher | None = None,
    ):
        super().__init__(mirror_url, fetcher=fetcher)
        self.page = page
        self.error = error
        self.calls: list[tuple[str, float | None]] = []

    def search(self, query: str, timeout: float | None = None) -> list[Torrent]:
        self.calls.append((query, timeout))
        if self.error is not None:
            raise self.error
        if self.page is None:
            raise TransportError(self.build_search_url(query), "no fixture")
        return self.parse_search_page(self._load())

    def _load(self) -> BeautifulSoup:
        if isinstance(self.page, BeautifulSoup):
            return self.page
        if isinstance(self.page, Path):
            return DocumentFetcher.load_file(self.page)
        return BeautifulSoup(self.page, "html.parser")


class FixtureFactory:
    """Builds FixtureScrapers per mirror URL, for use as a resolver factory.

    Mirrors without a page or error are unreachable.
    """

    def __init__(
        self,
        pages: dict[str, str | Path | BeautifulSoup] | None = None,
        errors: dict[str, TransportError] | None = None,
    ):
        self.pages = pages or {}
        self.errors = errors or {}
        self.scrapers: dict[str, FixtureScraper] = {}

    def __call__(
        self, mirror_url: str, fetcher: DocumentFetcher | None = None
    ) -> FixtureScraper:
        if mirror_url not in self.scrapers:
            self.scrapers[mirror_url] = FixtureScraper(
                mirror_url,
                page=self.pages.get(mirror_url),
                error=self.errors.get(mirror_url),
                fetcher=fetcher,
            )
        return self.scrapers[mirror_url]

    def calls(self, mirror_url: str) -> list[tuple[str, float | None]]:
        scraper = self.scrapers.get(mirror_url)
        return scraper.calls if scraper else []
