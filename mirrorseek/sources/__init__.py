"""Search page scrapers."""

from .base import Scraper
from .fixture import FixtureFactory, FixtureScraper
from .piratebay import PirateBayScraper

__all__ = [
    "Scraper",
    "PirateBayScraper",
    "FixtureScraper",
    "FixtureFactory",
]
