"""Configuration management for mirrorseek."""

from .manager import ConfigManager
from .schema import (
    DEFAULT_FALLBACK_MIRROR,
    DEFAULT_PROXY_SOURCE_URL,
    AppConfig,
    MirrorFilters,
    SearchFilters,
)

__all__ = [
    "ConfigManager",
    "AppConfig",
    "MirrorFilters",
    "SearchFilters",
    "DEFAULT_FALLBACK_MIRROR",
    "DEFAULT_PROXY_SOURCE_URL",
]
