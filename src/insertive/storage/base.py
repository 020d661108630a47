"""Durable store interface for snippet state."""

from __future__ import annotations

import abc
import inspect
from typing import Any, Awaitable, Callable, Union

# {"snippets": {key: text}, "icons": {key: icon}, "groups": {key: group}}
SnippetState = dict[str, dict[str, str]]

LoadResult = Union[SnippetState, None]
SaveResult = Union[bool, None]


class SnippetStore(abc.ABC):
    """Abstract base class for durable snippet stores.

    Either method may be a plain function or a coroutine function; callers
    go through :func:`resolve` so both work.
    """

    @abc.abstractmethod
    def load(self) -> LoadResult | Awaitable[LoadResult]:
        """Return the persisted state, or None when nothing was saved yet."""
        ...

    @abc.abstractmethod
    def save(self, state: SnippetState) -> SaveResult | Awaitable[SaveResult]:
        """Persist the full state.

        Returning False or raising marks the write as failed.
        """
        ...


class CallableStore(SnippetStore):
    """Adapts a host's ``load``/``save`` functions to the store interface."""

    def __init__(
        self,
        load: Callable[[], Any],
        save: Callable[[SnippetState], Any],
    ) -> None:
        self._load = load
        self._save = save

    def load(self) -> Any:
        return self._load()

    def save(self, state: SnippetState) -> Any:
        return self._save(state)


async def resolve(result: Any) -> Any:
    """Await a store result if the store returned an awaitable."""
    if inspect.isawaitable(result):
        return await result
    return result
