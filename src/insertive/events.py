"""Internal event bus connecting the repository to its subscribers."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections import defaultdict
from typing import Any, Callable, Coroutine

logger = logging.getLogger(__name__)

SyncHandler = Callable[..., None]
AsyncHandler = Callable[..., Coroutine[Any, Any, None]]
Handler = SyncHandler | AsyncHandler


class EventBus:
    """Publish/subscribe bus for sync and async handlers.

    Events are dot-separated names:
        snippets.changed
        snippets.save_failed

    A failing handler is logged and never stops delivery to the others.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def on(self, event: str, handler: Handler) -> None:
        """Subscribe a handler to an event."""
        self._handlers[event].append(handler)
        logger.debug("Registered handler %s for event '%s'", _name(handler), event)

    def off(self, event: str, handler: Handler) -> None:
        """Unsubscribe a handler. Unknown handlers are ignored."""
        handlers = self._handlers.get(event)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def handler_count(self, event: str) -> int:
        return len(self._handlers.get(event, []))

    def emit(self, event: str, **kwargs: Any) -> None:
        """Emit an event.

        Sync handlers run immediately. Async handlers are scheduled as tasks
        on the running loop, or dropped with a warning outside of one.
        """
        handlers = list(self._handlers.get(event, []))
        if not handlers:
            return

        logger.debug("Emitting event '%s' to %d handler(s)", event, len(handlers))
        for handler in handlers:
            try:
                if inspect.iscoroutinefunction(handler):
                    try:
                        loop = asyncio.get_running_loop()
                    except RuntimeError:
                        logger.warning(
                            "Cannot schedule async handler %s: no running event loop",
                            _name(handler),
                        )
                        continue
                    loop.create_task(handler(**kwargs))
                else:
                    handler(**kwargs)
            except Exception:
                logger.exception("Error in handler %s for event '%s'", _name(handler), event)

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()


def _name(handler: Handler) -> str:
    return getattr(handler, "__qualname__", repr(handler))
