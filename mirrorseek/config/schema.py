"""Configuration schema for mirror selection and search filters."""

from dataclasses import dataclass, field

from ..exceptions import ConfigError
from ..extractors import parse_size_kb
from ..models import Mirror, VideoQuality

DEFAULT_PROXY_SOURCE_URL = "https://proxybay.github.io/"

# Last resort when the proxy list is down; only tried once reported status is ignored
DEFAULT_FALLBACK_MIRROR = Mirror(url="https://pirateproxy.mx/", country="UK", status=False)


def _contains(entries: list[str], value: str) -> bool:
    value = (value or "").lower()
    return any(entry.lower() in value for entry in entries if entry)


@dataclass
class MirrorFilters:
    """Filters for picking a Pirate Bay mirror."""

    preferred: str = ""
    whitelist: list[str] = field(default_factory=list)
    blacklist: list[str] = field(default_factory=list)

    def is_ok(self, mirror: Mirror) -> bool:
        """True if the mirror passes the blacklist and the whitelist."""
        blacklisted = _contains(self.blacklist, mirror.url) or _contains(
            self.blacklist, mirror.country
        )
        whitelisted = _contains(self.whitelist, mirror.url) or _contains(
            self.whitelist, mirror.country
        )
        return (not self.blacklist or not blacklisted) and (
            not self.whitelist or whitelisted
        )

    def to_dict(self) -> dict:
        return {
            "preferred": self.preferred,
            "whitelist": list(self.whitelist),
            "blacklist": list(self.blacklist),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MirrorFilters":
        return cls(
            preferred=data.get("preferred") or "",
            whitelist=_string_list(data.get("whitelist"), "whitelist"),
            blacklist=_string_list(data.get("blacklist"), "blacklist"),
        )


@dataclass
class SearchFilters:
    """Constraints applied to scraped torrents."""

    min_size: str = ""
    max_size: str = ""
    verified_uploader: bool = False
    quality: VideoQuality | None = None

    @property
    def min_size_kb(self) -> int:
        if not self.min_size:
            return 0
        return parse_size_kb(self.min_size)

    @property
    def max_size_kb(self) -> float:
        if not self.max_size:
            return float("inf")
        return parse_size_kb(self.max_size)

    def validate(self) -> None:
        """Raise ConfigError if a size bound is malformed or inverted."""
        if self.min_size_kb > self.max_size_kb:
            raise ConfigError(
                f"Minimum size {self.min_size!r} exceeds maximum size {self.max_size!r}"
            )

    def to_dict(self) -> dict:
        return {
            "min_size": self.min_size,
            "max_size": self.max_size,
            "verified_uploader": self.verified_uploader,
            "quality": self.quality.value if self.quality else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SearchFilters":
        quality = data.get("quality")
        try:
            parsed_quality = VideoQuality.parse(quality) if quality else None
        except ValueError as e:
            raise ConfigError(str(e)) from e
        return cls(
            min_size=str(data.get("min_size") or ""),
            max_size=str(data.get("max_size") or ""),
            verified_uploader=bool(data.get("verified_uploader", False)),
            quality=parsed_quality,
        )


@dataclass
class AppConfig:
    """Top-level configuration."""

    mirror_filters: MirrorFilters = field(default_factory=MirrorFilters)
    search_filters: SearchFilters = field(default_factory=SearchFilters)
    source_url: str | None = None
    fallback_mirror: Mirror = DEFAULT_FALLBACK_MIRROR

    @property
    def proxy_source_url(self) -> str:
        return self.source_url or DEFAULT_PROXY_SOURCE_URL

    def to_dict(self) -> dict:
        """Convert to dictionary for YAML serialization."""
        return {
            "source_url": self.source_url,
            "fallback_mirror": self.fallback_mirror.to_dict(),
            "mirrors": self.mirror_filters.to_dict(),
            "search": self.search_filters.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AppConfig":
        """Create from dictionary (YAML deserialization)."""
        if not isinstance(data, dict):
            raise ConfigError("Configuration root must be a mapping")

        fallback_data = data.get("fallback_mirror") or {}
        if fallback_data.get("url"):
            fallback = Mirror(
                url=fallback_data["url"],
                country=fallback_data.get("country", ""),
                status=bool(fallback_data.get("status", False)),
            )
        else:
            fallback = DEFAULT_FALLBACK_MIRROR

        return cls(
            mirror_filters=MirrorFilters.from_dict(data.get("mirrors") or {}),
            search_filters=SearchFilters.from_dict(data.get("search") or {}),
            source_url=data.get("source_url") or None,
            fallback_mirror=fallback,
        )


def _string_list(value, name: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ConfigError(f"'{name}' must be a list of strings")
    return [str(v) for v in value]
