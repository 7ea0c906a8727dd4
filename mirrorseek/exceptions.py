"""Exceptions raised by mirrorseek."""


class MirrorseekError(Exception):
    """Base class for all mirrorseek errors."""


class TransportError(MirrorseekError):
    """A page could not be fetched or decoded."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"http: {url} -> {reason}")
        self.url = url
        self.reason = reason


class MirrorsUnreachableError(MirrorseekError):
    """Every candidate mirror failed in both trust passes."""


class TorrentNotFoundError(MirrorseekError):
    """No torrent satisfied the search filters."""


class ConfigError(MirrorseekError, ValueError):
    """Invalid configuration or filter value."""
