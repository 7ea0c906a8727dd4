"""Filtering and per-quality selection of scraped torrents."""

import logging
from collections.abc import Iterable

from .config import SearchFilters
from .exceptions import TorrentNotFoundError
from .models import Torrent, VideoQuality
from .text import normalize_query

logger = logging.getLogger(__name__)


def filter_torrents(torrents: Iterable[Torrent], filters: SearchFilters) -> list[Torrent]:
    """Keep torrents within the size bounds and, if required, from verified uploaders."""
    min_size = filters.min_size_kb
    max_size = filters.max_size_kb

    return [
        t
        for t in torrents
        if min_size <= t.size <= max_size
        and (t.verified_uploader or not filters.verified_uploader)
    ]


def filter_by_title(torrents: Iterable[Torrent], *terms: str) -> list[Torrent]:
    """Keep torrents whose normalized title contains every term."""
    needles = [normalize_query(str(term)) for term in terms]
    needles = [n for n in needles if n]

    matched = []
    for torrent in torrents:
        title = normalize_query(torrent.title)
        if all(n in title for n in needles):
            matched.append(torrent)
        else:
            logger.debug("[FILTER] %s != %s", torrent.title, needles)
    return matched


def search_video_torrent_list(
    torrents: Iterable[Torrent], filters: SearchFilters
) -> dict[VideoQuality, Torrent]:
    """Pick the first torrent of each quality tier that passes the filters.

    Input order is taken to be relevance order, so the first torrent seen in
    a tier is the one kept.
    """
    per_quality: dict[VideoQuality, Torrent] = {}
    for torrent in filter_torrents(torrents, filters):
        if filters.quality is not None and torrent.video_quality != filters.quality:
            continue
        per_quality.setdefault(torrent.video_quality, torrent)
    return per_quality


def pick_video_torrent(torrents: Iterable[Torrent], filters: SearchFilters) -> Torrent:
    """Return the first torrent that passes the filters."""
    for torrent in filter_torrents(torrents, filters):
        if filters.quality is None or torrent.video_quality == filters.quality:
            return torrent
    raise TorrentNotFoundError("No torrent found with the specified filters")


def _title_torrents(scraper, filters: SearchFilters, title: str, year: int | None):
    logger.info("[FILTER] Searching for title '%s' on %s", title, scraper.url)
    query = normalize_query(title)
    torrents = scraper.search(query)
    terms = [query] + ([str(year)] if year else [])
    return filter_by_title(torrents, *terms)


def find_title_torrents(
    scraper,
    filters: SearchFilters,
    title: str,
    year: int | None = None,
    alt_title: str | None = None,
) -> list[Torrent]:
    """One torrent per quality tier for a title, best quality first.

    Falls back to `alt_title` when the main title matches nothing.
    """
    filters.validate()
    per_quality = search_video_torrent_list(
        _title_torrents(scraper, filters, title, year), filters
    )
    if not per_quality and alt_title:
        per_quality = search_video_torrent_list(
            _title_torrents(scraper, filters, alt_title, year), filters
        )
    return [per_quality[q] for q in sorted(per_quality, reverse=True)]


def find_title_torrent(
    scraper,
    filters: SearchFilters,
    title: str,
    year: int | None = None,
    alt_title: str | None = None,
) -> Torrent:
    """The single first match for a title that passes the filters."""
    filters.validate()
    matched = _title_torrents(scraper, filters, title, year)
    try:
        return pick_video_torrent(matched, filters)
    except TorrentNotFoundError:
        if not alt_title:
            raise
    return pick_video_torrent(
        _title_torrents(scraper, filters, alt_title, year), filters
    )
