"""Tests for the application composition root."""

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock, patch

import pytest

from insertive.app import Insertive
from insertive.config import AppConfig
from insertive.errors import PersistenceFailure, RepositoryClosed
from insertive.storage.memory import MemorySnippetStore


@pytest.fixture
def app() -> Insertive:
    insertive = Insertive(store=MemorySnippetStore(), notifier=MagicMock())
    asyncio.run(insertive.setup())
    yield insertive
    if insertive.running:
        insertive.stop()


class TestInsertive:
    def test_setup_loads_seed_and_registers_commands(self, app: Insertive) -> None:
        assert app.running
        assert app.repository.keys() == ["hello", "greet"]
        assert [c.id for c in app.commands.commands] == [
            "insert-snippet-hello",
            "insert-snippet-greet",
        ]

    def test_insert(self, app: Insertive) -> None:
        assert app.insert("greet", "World") == "Hello World (from Insertive)"
        assert app.insert("hello", "ignored") == "_Hello World_"

    def test_new_snippet_is_insertable(self, app: Insertive) -> None:
        asyncio.run(app.repository.add("quote", "> {1}\n> {2}"))
        assert app.insert("quote", "Hello\nworld\ntest") == "> Hello\n> world test"

    def test_menu_uses_config_labels(self) -> None:
        config = AppConfig()
        config.menu.title = "Snips"
        insertive = Insertive(config=config, store=MemorySnippetStore(), notifier=None)
        asyncio.run(insertive.setup())

        assert insertive.menu().title == "Snips"
        insertive.stop()

    def test_save_failure_notifies(self, app: Insertive) -> None:
        app._store.fail = True  # type: ignore[attr-defined]

        with pytest.raises(PersistenceFailure):
            asyncio.run(app.repository.add("x", "X"))

        app._notifier.assert_called_once()  # type: ignore[union-attr]
        args, kwargs = app._notifier.call_args  # type: ignore[union-attr]
        assert "Failed to save" in args[0]
        assert kwargs["urgency"] == "critical"
        assert "x" in app.repository

    def test_notifications_can_be_disabled(self) -> None:
        config = AppConfig()
        config.notifications.enabled = False
        notifier = MagicMock()
        insertive = Insertive(
            config=config, store=MemorySnippetStore(fail=True), notifier=notifier
        )
        asyncio.run(insertive.setup())

        with pytest.raises(PersistenceFailure):
            asyncio.run(insertive.repository.add("x", "X"))

        notifier.assert_not_called()
        insertive.stop()

    def test_stop_tears_everything_down(self, app: Insertive) -> None:
        repository = app.repository
        bus = app.event_bus

        app.stop()

        assert not app.running
        assert repository.closed
        assert bus.handler_count("snippets.changed") == 0
        assert bus.handler_count("snippets.save_failed") == 0
        with pytest.raises(RepositoryClosed):
            app.repository
        with pytest.raises(RepositoryClosed):
            app.insert("hello", "")

    def test_save_failure_without_notify_send(self) -> None:
        insertive = Insertive(store=MemorySnippetStore(fail=True))
        asyncio.run(insertive.setup())

        with patch(
            "insertive.platform.notifications.shutil.which", return_value=None
        ), patch("insertive.platform.notifications.subprocess.run") as run:
            with pytest.raises(PersistenceFailure):
                asyncio.run(insertive.repository.add("x", "X"))

        run.assert_not_called()
        insertive.stop()
