"""Tests for configuration loading and saving."""

from __future__ import annotations

from pathlib import Path

from insertive.config import AppConfig
from insertive.constants import SNIPPETS_FILE


class TestAppConfig:
    def test_default_config(self) -> None:
        config = AppConfig()
        assert config.store.path == ""
        assert config.store.resolved_path == SNIPPETS_FILE
        assert config.menu.title == "Insertive"
        assert config.menu.preview_length == 100
        assert config.notifications.enabled is True
        assert config.web.port == 7866

    def test_save_and_load(self, tmp_path: Path) -> None:
        config = AppConfig()
        config.store.path = str(tmp_path / "mine.toml")
        config.menu.title = "Snippets"
        config.web.enabled = False

        config_path = tmp_path / "config.toml"
        config.save(config_path)

        loaded = AppConfig.load(config_path)
        assert loaded.store.resolved_path == tmp_path / "mine.toml"
        assert loaded.menu.title == "Snippets"
        assert loaded.web.enabled is False

    def test_load_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        config = AppConfig.load(tmp_path / "nonexistent.toml")
        assert config.menu.manage_label == "Manage snippets..."

    def test_partial_config_preserves_defaults(self, tmp_path: Path) -> None:
        config_path = tmp_path / "partial.toml"
        config_path.write_text('[menu]\npreview_length = 40\nbogus = 1\n')

        loaded = AppConfig.load(config_path)
        assert loaded.menu.preview_length == 40
        assert loaded.menu.title == "Insertive"
        assert not hasattr(loaded.menu, "bogus")

    def test_broken_file_falls_back_to_defaults(self, tmp_path: Path) -> None:
        config_path = tmp_path / "broken.toml"
        config_path.write_text("[menu\n")

        loaded = AppConfig.load(config_path)
        assert loaded.menu.title == "Insertive"

    def test_store_path_expands_user(self) -> None:
        config = AppConfig()
        config.store.path = "~/snips.toml"
        assert config.store.resolved_path == Path.home() / "snips.toml"
