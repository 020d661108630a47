"""Configuration loading and saving (TOML)."""

from __future__ import annotations

import logging
import sys
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from insertive.constants import (
    APP_TITLE,
    CONFIG_FILE,
    LISTING_PREVIEW_LENGTH,
    MENU_MANAGE_LABEL,
    SNIPPETS_FILE,
    WEB_DEFAULT_HOST,
    WEB_DEFAULT_PORT,
)

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)


@dataclass
class StoreConfig:
    """Snippet store configuration."""

    path: str = ""  # "" = default XDG location

    @property
    def resolved_path(self) -> Path:
        return Path(self.path).expanduser() if self.path else SNIPPETS_FILE


@dataclass
class MenuConfig:
    """Snippet menu configuration."""

    title: str = APP_TITLE
    manage_label: str = MENU_MANAGE_LABEL
    preview_length: int = LISTING_PREVIEW_LENGTH


@dataclass
class NotificationConfig:
    """Desktop notification configuration."""

    enabled: bool = True


@dataclass
class WebConfig:
    """Dashboard API configuration."""

    enabled: bool = True
    host: str = WEB_DEFAULT_HOST
    port: int = WEB_DEFAULT_PORT


@dataclass
class AppConfig:
    """Root application configuration."""

    store: StoreConfig = field(default_factory=StoreConfig)
    menu: MenuConfig = field(default_factory=MenuConfig)
    notifications: NotificationConfig = field(default_factory=NotificationConfig)
    web: WebConfig = field(default_factory=WebConfig)

    @classmethod
    def load(cls, path: Path | None = None) -> AppConfig:
        """Load config from TOML file, falling back to defaults."""
        config_path = path or CONFIG_FILE
        config = cls()

        if not config_path.exists():
            logger.info("No config file found at %s, using defaults", config_path)
            return config

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            config = _merge_config(config, data)
            logger.info("Loaded config from %s", config_path)
        except (OSError, tomllib.TOMLDecodeError):
            logger.exception("Failed to load config from %s, using defaults", config_path)

        return config

    def save(self, path: Path | None = None) -> None:
        """Save config to TOML file."""
        config_path = path or CONFIG_FILE
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "wb") as f:
            tomli_w.dump(asdict(self), f)
        logger.info("Saved config to %s", config_path)


def _merge_config(config: AppConfig, data: dict[str, Any]) -> AppConfig:
    """Merge a TOML dict into an AppConfig, preserving defaults for missing keys."""
    sections = {
        "store": config.store,
        "menu": config.menu,
        "notifications": config.notifications,
        "web": config.web,
    }
    for name, section in sections.items():
        values = data.get(name)
        if not isinstance(values, dict):
            continue
        for key, val in values.items():
            if hasattr(section, key):
                setattr(section, key, val)
            else:
                logger.warning("Ignoring unknown config key %s.%s", name, key)
    return config
