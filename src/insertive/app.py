"""Application composition root: owns the repository and its subscribers."""

from __future__ import annotations

import logging
from typing import Any, Callable

from insertive.config import AppConfig
from insertive.constants import APP_TITLE, EVENT_SAVE_FAILED
from insertive.errors import RepositoryClosed
from insertive.events import EventBus
from insertive.features.commands import CommandRegistry, command_id
from insertive.features.menu import MenuItem, build_menu
from insertive.features.repository import SnippetRepository
from insertive.platform.notifications import notify
from insertive.storage.base import SnippetStore
from insertive.storage.toml_store import TomlSnippetStore

logger = logging.getLogger(__name__)


class Insertive:
    """Wires the snippet repository to its store, commands and notifications.

    Lifecycle: ``await setup()`` loads (and migrates) the persisted snippets
    and registers commands; ``stop()`` drops commands, closes the repository
    so no further saves happen, and clears the event bus.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        store: SnippetStore | None = None,
        event_bus: EventBus | None = None,
        notifier: Callable[..., Any] | None = notify,
    ) -> None:
        self._config = config or AppConfig()
        self._store = store or TomlSnippetStore(self._config.store.resolved_path)
        self._event_bus = event_bus or EventBus()
        self._notifier = notifier
        self._repository: SnippetRepository | None = None
        self._commands: CommandRegistry | None = None

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    @property
    def running(self) -> bool:
        return self._repository is not None

    @property
    def repository(self) -> SnippetRepository:
        if self._repository is None:
            raise RepositoryClosed()
        return self._repository

    @property
    def commands(self) -> CommandRegistry:
        if self._commands is None:
            raise RepositoryClosed()
        return self._commands

    async def setup(self) -> None:
        """Load snippets and register their commands."""
        logger.info("Setting up %s...", APP_TITLE)
        self._event_bus.on(EVENT_SAVE_FAILED, self._on_save_failed)

        self._repository = await SnippetRepository.load(self._store, self._event_bus)
        self._commands = CommandRegistry(self._repository)
        self._commands.attach()
        logger.info("%s ready with %d snippet(s)", APP_TITLE, len(self._repository))

    def stop(self) -> None:
        """Tear down: no more commands, mutations or saves."""
        if self._commands is not None:
            self._commands.clear()
            self._commands = None
        if self._repository is not None:
            self._repository.close()
            self._repository = None
        self._event_bus.clear()
        logger.info("%s stopped", APP_TITLE)

    def insert(self, key: str, selection: str | None) -> str:
        """Text replacing ``selection`` when the snippet ``key`` is inserted."""
        return self.commands.invoke(command_id(key), selection)

    def menu(self) -> MenuItem:
        return build_menu(
            self.repository.list(),
            title=self._config.menu.title,
            manage_label=self._config.menu.manage_label,
        )

    def _on_save_failed(self, error: str = "", **_kw: Any) -> None:
        logger.warning("Snippets were not saved: %s", error)
        if self._notifier is not None and self._config.notifications.enabled:
            self._notifier(
                f"Failed to save {APP_TITLE} snippets", error, urgency="critical"
            )
