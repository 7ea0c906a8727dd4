import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest
import requests

# Ensure root path is available for imports
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from mirrorseek.document import DocumentFetcher  # noqa: E402
from mirrorseek.models import Torrent, VideoQuality  # noqa: E402

FIXTURES = Path(__file__).resolve().parent / "fixtures"
NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def search_page():
    return DocumentFetcher.load_file(FIXTURES / "piratebay_search.html")


@pytest.fixture
def search_html() -> str:
    return (FIXTURES / "piratebay_search.html").read_text(encoding="utf-8")


@pytest.fixture
def empty_search_html() -> str:
    return (FIXTURES / "empty_search.html").read_text(encoding="utf-8")


@pytest.fixture
def proxy_page():
    return DocumentFetcher.load_file(FIXTURES / "proxy_list.html")


@pytest.fixture
def make_torrent():
    def _make(
        title: str = "Some Movie 2020 1080p",
        size: int = 1024,
        verified: bool = False,
        quality: VideoQuality = VideoQuality.HIGH,
        **kwargs,
    ) -> Torrent:
        fields = {
            "title": title,
            "size": size,
            "seeders": 10,
            "leeches": 2,
            "verified_uploader": verified,
            "video_quality": quality,
            "mirror_url": "https://tpb.example",
            "torrent_url": "/torrent/1/some",
            "magnet": "magnet:?xt=urn:btih:abc",
            "upload_time": None,
            "uploader": "someone",
        }
        fields.update(kwargs)
        return Torrent(**fields)

    return _make


class FakeResponse:
    def __init__(self, text: str = "", status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            error = requests.HTTPError(f"{self.status_code} Error")
            error.response = self
            raise error


class FakeSession:
    """Stands in for requests.Session; maps URLs to responses or exceptions."""

    def __init__(self, responses: dict | None = None, default=None) -> None:
        self.responses = responses or {}
        self.default = default
        self.headers: dict[str, str] = {}
        self.calls: list[tuple[str, float | None]] = []

    def get(self, url, timeout=None, **kwargs):
        self.calls.append((url, timeout))
        result = self.responses.get(url, self.default)
        if result is None:
            raise requests.ConnectionError(f"cannot reach {url}")
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def fake_response():
    return FakeResponse
