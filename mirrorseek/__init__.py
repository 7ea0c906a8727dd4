"""mirrorseek: find a working Pirate Bay mirror and pick torrents from it."""

from .exceptions import (
    ConfigError,
    MirrorsUnreachableError,
    MirrorseekError,
    TorrentNotFoundError,
    TransportError,
)
from .mirrors import MirrorDirectory, MirrorResolver, ResolveSchedule
from .models import Mirror, Torrent, VideoQuality

__all__ = [
    "Mirror",
    "Torrent",
    "VideoQuality",
    "MirrorDirectory",
    "MirrorResolver",
    "ResolveSchedule",
    "MirrorseekError",
    "TransportError",
    "MirrorsUnreachableError",
    "TorrentNotFoundError",
    "ConfigError",
]
