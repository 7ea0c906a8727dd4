"""Data models for mirrorseek."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class VideoQuality(Enum):
    """Video quality tiers, ordered from worst to best."""

    DEFAULT = ""
    LOW = "480p"
    MEDIUM = "720p"
    HIGH = "1080p"
    UHD = "2160p"

    @property
    def rank(self) -> int:
        return list(VideoQuality).index(self)

    def __lt__(self, other):
        if not isinstance(other, VideoQuality):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, VideoQuality):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, VideoQuality):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, VideoQuality):
            return NotImplemented
        return self.rank >= other.rank

    @classmethod
    def parse(cls, text: str) -> "VideoQuality":
        """Parse a tier from its name ("high") or keyword ("1080p")."""
        key = (text or "").strip().lower()
        for quality in cls:
            if key in (quality.name.lower(), quality.value):
                return quality
        raise ValueError(f"Unknown video quality: {text!r}")


@dataclass(frozen=True)
class Mirror:
    """A Pirate Bay mirror and its self-reported status."""

    url: str
    country: str = ""
    status: bool = False

    def to_dict(self) -> dict:
        return {"url": self.url, "country": self.country, "status": self.status}


@dataclass(frozen=True)
class Torrent:
    """A single torrent scraped from a search page."""

    title: str
    size: int  # kilobytes
    seeders: int
    leeches: int
    verified_uploader: bool
    video_quality: VideoQuality
    mirror_url: str
    torrent_url: str  # relative to mirror_url
    magnet: str
    upload_time: datetime | None = None
    uploader: str = ""

    @property
    def full_url(self) -> str:
        """Absolute URL of the torrent's detail page on its mirror."""
        return f"{self.mirror_url.strip('/')}/{self.torrent_url.strip('/')}"

    @property
    def peers_string(self) -> str:
        """Seeds/Peers formatted as "S / S+L"."""
        return f"{self.seeders} / {self.seeders + self.leeches}"

    @property
    def size_formatted(self) -> str:
        """Format the size to human-readable form."""
        size = float(self.size)
        for unit in ["KB", "MB", "GB", "TB"]:
            if size < 1024:
                return f"{size:.1f} {unit}"
            size /= 1024
        return f"{size:.1f} PB"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "title": self.title,
            "size": self.size,
            "seeders": self.seeders,
            "leeches": self.leeches,
            "verified_uploader": self.verified_uploader,
            "video_quality": self.video_quality.value,
            "mirror_url": self.mirror_url,
            "torrent_url": self.torrent_url,
            "magnet": self.magnet,
            "upload_time": (
                self.upload_time.isoformat() if self.upload_time else None
            ),
            "uploader": self.uploader,
        }
