"""Pirate Bay mirror discovery and resolution.

The proxy list reports each mirror's status, but that report is not always
accurate. Resolution first trusts it, skipping mirrors reported down, and
only if that fails tries every mirror regardless of status. Within each pass
the request timeout starts short and doubles between rounds.
"""

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, replace

from bs4 import BeautifulSoup

from .config import DEFAULT_FALLBACK_MIRROR, DEFAULT_PROXY_SOURCE_URL, MirrorFilters
from .document import DocumentFetcher
from .exceptions import MirrorsUnreachableError, TransportError
from .models import Mirror, Torrent
from .sources import PirateBayScraper, Scraper

logger = logging.getLogger(__name__)

INITIAL_TIMEOUT = 3.0
MAX_TIMEOUT = 10.0


class MirrorDirectory:
    """Fetches the list of Pirate Bay mirrors from a proxy list page."""

    def __init__(
        self,
        fetcher: DocumentFetcher | None = None,
        filters: MirrorFilters | None = None,
        source_url: str | None = None,
    ):
        self.fetcher = fetcher or DocumentFetcher()
        self.filters = filters or MirrorFilters()
        self._source_url = source_url

    @property
    def source_url(self) -> str:
        return self._source_url or DEFAULT_PROXY_SOURCE_URL

    @source_url.setter
    def source_url(self, url: str | None) -> None:
        self._source_url = url

    def get_mirrors(self) -> list[Mirror]:
        """Fetch and parse the mirror list. Raises TransportError if unreachable."""
        soup = self.fetcher.fetch(self.source_url)
        try:
            mirrors = self.parse_mirrors(soup)
        except (AttributeError, KeyError, TypeError) as e:
            logger.warning("[MIRRORS] Could not parse %s: %s", self.source_url, e)
            return []
        logger.debug("[MIRRORS] %d mirrors from %s", len(mirrors), self.source_url)
        return mirrors

    def parse_mirrors(self, soup: BeautifulSoup) -> list[Mirror]:
        """Parse the proxy list table, keeping mirrors that pass the filters."""
        mirrors = []
        for row in soup.select("#proxyList > tbody > tr"):
            link = row.select_one(".site a")
            site = link.get("href", "") if link else ""
            if not site:
                continue

            country_img = row.select_one(".country img")
            status_img = row.select_one(".status img")
            country = country_img.get("alt", "") if country_img else ""
            status = status_img.get("alt", "") if status_img else ""

            mirror = Mirror(url=site, country=country.upper(), status=status == "up")
            if self.filters.is_ok(mirror):
                mirrors.append(mirror)
        return mirrors


@dataclass(frozen=True)
class ResolveSchedule:
    """One round of resolution: a request timeout and a trust mode."""

    timeout: float = INITIAL_TIMEOUT
    trust_source: bool = True

    def advance(self) -> "ResolveSchedule | None":
        """The next round, or None once both passes are exhausted."""
        doubled = self.timeout * 2
        if doubled <= MAX_TIMEOUT:
            return replace(self, timeout=doubled)
        if self.trust_source:
            return ResolveSchedule(INITIAL_TIMEOUT, trust_source=False)
        return None

    @classmethod
    def rounds(cls, trust_source: bool = True) -> Iterator["ResolveSchedule"]:
        state = cls(trust_source=trust_source)
        while state is not None:
            yield state
            state = state.advance()


class MirrorResolver:
    """Finds the first mirror that returns results for a query.

    Every attempt shares the directory's fetcher and its HTTP session.
    """

    def __init__(
        self,
        directory: MirrorDirectory,
        scraper_factory: Callable[..., Scraper] = PirateBayScraper,
        fallback_mirror: Mirror = DEFAULT_FALLBACK_MIRROR,
    ):
        self.directory = directory
        self.scraper_factory = scraper_factory
        self.fallback_mirror = fallback_mirror

    @property
    def filters(self) -> MirrorFilters:
        return self.directory.filters

    def candidates(self, mirrors: list[Mirror]) -> list[Mirror]:
        """Mirrors in the order they are tried: preferred, listed, fallback.

        The preferred mirror has no reported status, so like any mirror
        reported down it is only tried once status is ignored.
        """
        candidates = list(mirrors)
        if self.filters.preferred:
            candidates.insert(0, Mirror(url=self.filters.preferred))
        candidates.append(self.fallback_mirror)
        return candidates

    def resolve(
        self,
        query: str,
        mirrors: list[Mirror] | None = None,
        trust_source: bool = True,
    ) -> tuple[Mirror, list[Torrent]]:
        """Return the first mirror, in priority order, with results for the query.

        Raises MirrorsUnreachableError once every round has failed.
        """
        if mirrors is None:
            mirrors = self.directory.get_mirrors()
        candidates = self.candidates(mirrors)

        for schedule in ResolveSchedule.rounds(trust_source):
            logger.debug(
                "[MIRRORS] Round timeout=%.0fs trust_source=%s",
                schedule.timeout,
                schedule.trust_source,
            )
            for mirror in candidates:
                if schedule.trust_source and not mirror.status:
                    continue
                torrents = self._try_mirror(mirror, query, schedule.timeout)
                if torrents:
                    logger.info(
                        "[MIRRORS] Using %s (%d results)", mirror.url, len(torrents)
                    )
                    return mirror, torrents

        raise MirrorsUnreachableError("all Pirate Bay proxies seem to be unreachable")

    def _try_mirror(self, mirror: Mirror, query: str, timeout: float) -> list[Torrent]:
        try:
            scraper = self.scraper_factory(mirror.url, fetcher=self.directory.fetcher)
            return scraper.search(query, timeout)
        except ValueError as e:
            logger.debug("[MIRRORS] Skipping %s: %s", mirror.url, e)
        except TransportError as e:
            logger.debug("[MIRRORS] %s", e)
        return []

    def pick_mirror(self, query: str) -> Mirror:
        mirror, _ = self.resolve(query)
        return mirror

    def get_torrents(self, query: str) -> list[Torrent]:
        _, torrents = self.resolve(query)
        return torrents

    def find_scraper(self, query: str) -> Scraper:
        """A scraper bound to the first mirror that answers the query."""
        return self.scraper_factory(
            self.pick_mirror(query).url, fetcher=self.directory.fetcher
        )
