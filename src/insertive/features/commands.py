"""One insert command per snippet, kept in sync with the repository."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from insertive.constants import COMMAND_NAME_PREFIX, COMMAND_PREFIX, EVENT_SNIPPETS_CHANGED
from insertive.errors import NotFound
from insertive.features.template import process_template

if TYPE_CHECKING:
    from insertive.features.repository import SnippetRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnippetCommand:
    """An invocable command that inserts one snippet."""

    id: str
    name: str
    key: str


def command_id(key: str) -> str:
    return COMMAND_PREFIX + key


class CommandRegistry:
    """Exposes an "Insert Snippet: <key>" command for every snippet.

    The registry subscribes to ``snippets.changed`` and rebuilds its table
    after every repository mutation. Invoking a command reads the snippet's
    current text, so edits apply without re-registering.
    """

    def __init__(self, repository: SnippetRepository) -> None:
        self._repository = repository
        self._commands: dict[str, SnippetCommand] = {}
        self._subscribed = False

    def attach(self) -> None:
        """Build the command table and follow repository changes."""
        if not self._subscribed:
            self._repository.event_bus.on(EVENT_SNIPPETS_CHANGED, self._on_snippets_changed)
            self._subscribed = True
        self.sync()

    def sync(self) -> None:
        """Rebuild the command table from the repository."""
        self._commands = {
            command_id(key): SnippetCommand(
                id=command_id(key), name=COMMAND_NAME_PREFIX + key, key=key
            )
            for key in self._repository.keys()
        }
        logger.debug("Registered %d snippet command(s)", len(self._commands))

    def clear(self) -> None:
        """Drop every command and stop following the repository."""
        if self._subscribed:
            self._repository.event_bus.off(EVENT_SNIPPETS_CHANGED, self._on_snippets_changed)
            self._subscribed = False
        self._commands = {}

    @property
    def commands(self) -> list[SnippetCommand]:
        return list(self._commands.values())

    def get(self, cmd_id: str) -> SnippetCommand:
        try:
            return self._commands[cmd_id]
        except KeyError:
            raise NotFound(cmd_id) from None

    def invoke(self, cmd_id: str, selection: str | None) -> str:
        """Run a command: the text that replaces the current selection."""
        command = self.get(cmd_id)
        record = self._repository.get(command.key)
        logger.info("Inserted: %s", command.key)
        return process_template(record.text, selection)

    def _on_snippets_changed(self, **_kw: Any) -> None:
        self.sync()
