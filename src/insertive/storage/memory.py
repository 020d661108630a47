"""In-memory snippet store for tests and ephemeral sessions."""

from __future__ import annotations

import asyncio
import copy

from insertive.storage.base import SnippetState, SnippetStore


class MemorySnippetStore(SnippetStore):
    """Keeps a deep copy of the last saved state.

    Saves are coroutines that yield to the loop once, like a real
    asynchronous store would. ``fail`` makes every save report failure.
    """

    def __init__(self, initial: SnippetState | None = None, fail: bool = False) -> None:
        self.state: SnippetState | None = copy.deepcopy(initial)
        self.fail = fail
        self.saves: list[SnippetState] = []

    @property
    def save_count(self) -> int:
        return len(self.saves)

    async def load(self) -> SnippetState | None:
        return copy.deepcopy(self.state)

    async def save(self, state: SnippetState) -> bool:
        await asyncio.sleep(0)
        if self.fail:
            return False
        self.state = copy.deepcopy(state)
        self.saves.append(self.state)
        return True
