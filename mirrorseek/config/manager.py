"""Configuration manager for mirror and search settings."""

import logging
import os
from pathlib import Path

import yaml

from ..exceptions import ConfigError
from .schema import AppConfig

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "mirrorseek"
CONFIG_FILE = CONFIG_DIR / "config.yaml"
CONFIG_ENV = "MIRRORSEEK_CONFIG"


class ConfigManager:
    """Reads and writes the YAML configuration file."""

    def __init__(self, config_path: Path | None = None):
        env_path = os.environ.get(CONFIG_ENV)
        self.config_path = Path(config_path or env_path or CONFIG_FILE)

    def _ensure_dir(self) -> None:
        """Ensure config directory exists."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

    def load(self) -> AppConfig:
        """Load the configuration, or defaults if the file does not exist."""
        if not self.config_path.exists():
            logger.debug("[CONFIG] %s not found, using defaults.", self.config_path)
            return AppConfig()

        try:
            with open(self.config_path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read {self.config_path}: {e}") from e

        config = AppConfig.from_dict(data)
        config.search_filters.validate()
        logger.debug("[CONFIG] Loaded configuration from %s", self.config_path)
        return config

    def save(self, config: AppConfig) -> None:
        """Write the configuration, creating the directory if needed."""
        self._ensure_dir()
        data = {"version": 1, **config.to_dict()}
        with open(self.config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
        logger.info("[CONFIG] Saved configuration to %s", self.config_path)
