"""Ordered snippet repository with atomic mutations and serialized saves."""

from __future__ import annotations

import asyncio
import logging
from typing import Iterator

from insertive.constants import (
    DEFAULT_ICON,
    DEFAULT_SNIPPETS,
    EVENT_SAVE_FAILED,
    EVENT_SNIPPETS_CHANGED,
)
from insertive.errors import (
    DuplicateKey,
    IndexOutOfRange,
    InvalidKey,
    NotFound,
    PersistenceFailure,
    RepositoryClosed,
)
from insertive.events import EventBus
from insertive.features.model import SnippetRecord
from insertive.features.validator import validate_key
from insertive.storage.base import SnippetState, SnippetStore, resolve

logger = logging.getLogger(__name__)

Snapshot = tuple[tuple[str, SnippetRecord], ...]


class SnippetRepository:
    """Stores snippet records in a significant, user-controlled order.

    Every mutation builds a new record list and swaps it in with a single
    assignment, so text, icon, group and position always change together.
    After the swap the repository emits ``snippets.changed`` and writes the
    full state to the store. Writes are serialized: a write waits for the
    previous one to resolve and carries the state captured when its
    mutation ran, so the store sees states in mutation order.

    A failed write raises :class:`PersistenceFailure` but the in-memory
    change stays applied.
    """

    def __init__(
        self,
        store: SnippetStore,
        event_bus: EventBus | None = None,
        records: list[SnippetRecord] | None = None,
    ) -> None:
        self._store: SnippetStore | None = store
        self._event_bus = event_bus or EventBus()
        self._records: list[SnippetRecord] = list(records or [])
        self._write_lock: asyncio.Lock | None = None
        self._write_lock_loop: asyncio.AbstractEventLoop | None = None
        self._closed = False

    # --- Lifecycle ---

    @classmethod
    async def load(
        cls,
        store: SnippetStore,
        event_bus: EventBus | None = None,
        seed: SnippetState | None = DEFAULT_SNIPPETS,
    ) -> SnippetRepository:
        """Create a repository from the store's persisted state.

        With nothing persisted the repository starts from ``seed`` without
        writing. Missing ``icons``/``groups`` maps or per-key entries are
        backfilled with the default icon and no group, and the backfilled
        state is written back immediately.
        """
        data = await resolve(store.load())
        if data is None:
            logger.info("No persisted snippets, starting from defaults")
            records, _ = _records_from_state(seed or {})
            return cls(store, event_bus, records)

        records, migrated = _records_from_state(data)
        repo = cls(store, event_bus, records)
        logger.info("Loaded %d snippet(s)", len(records))

        if migrated:
            logger.info("Backfilling icons/groups for %d snippet(s)", len(records))
            try:
                await repo._persist(repo.to_state())
            except PersistenceFailure:
                logger.warning("Could not persist migrated snippet state")
        return repo

    def close(self) -> None:
        """Stop accepting mutations and drop the store handle."""
        self._closed = True
        self._store = None
        logger.debug("Snippet repository closed")

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    # --- Queries ---

    def list(self) -> Snapshot:
        """Immutable ordered snapshot of ``(key, record)`` pairs."""
        return tuple((r.key, r) for r in self._records)

    def keys(self) -> list[str]:
        return [r.key for r in self._records]

    def get(self, key: str) -> SnippetRecord:
        for record in self._records:
            if record.key == key:
                return record
        raise NotFound(key)

    def group_of(self, key: str) -> str:
        return self.get(key).group

    def groups(self) -> list[str]:
        """Distinct non-empty group labels, sorted."""
        return sorted({r.group for r in self._records if r.group})

    def to_state(self) -> SnippetState:
        """Persisted shape: three maps keyed identically, in order."""
        return {
            "snippets": {r.key: r.text for r in self._records},
            "icons": {r.key: r.icon for r in self._records},
            "groups": {r.key: r.group for r in self._records},
        }

    def __contains__(self, key: object) -> bool:
        return any(r.key == key for r in self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[SnippetRecord]:
        return iter(tuple(self._records))

    # --- Mutations ---

    async def add(
        self, key: str, text: str, icon: str = DEFAULT_ICON, group: str = ""
    ) -> SnippetRecord:
        """Append a new snippet.

        Raises:
            InvalidKey: the key fails validation.
            DuplicateKey: the key already exists; use :meth:`overwrite`
                once the user confirmed replacing it.
        """
        self._ensure_open()
        _check_key(key)
        if key in self:
            raise DuplicateKey(key)

        record = SnippetRecord(key=key, text=text, icon=icon, group=group)
        await self._commit([*self._records, record], "Added snippet '%s'", key)
        return record

    async def overwrite(
        self, key: str, text: str, icon: str = DEFAULT_ICON, group: str = ""
    ) -> SnippetRecord:
        """Confirmed add: replace an existing snippet in place, or append."""
        self._ensure_open()
        _check_key(key)

        record = SnippetRecord(key=key, text=text, icon=icon, group=group)
        records = list(self._records)
        position = self._position(key)
        if position is None:
            records.append(record)
        else:
            records[position] = record
        await self._commit(records, "Overwrote snippet '%s'", key)
        return record

    async def update(
        self,
        original_key: str,
        new_key: str | None = None,
        text: str | None = None,
        icon: str | None = None,
        group: str | None = None,
    ) -> SnippetRecord:
        """Edit a snippet, optionally renaming it.

        ``None`` keeps the current value. A renamed snippet keeps its
        position.

        Raises:
            NotFound: ``original_key`` does not exist.
            InvalidKey: ``new_key`` fails validation.
            DuplicateKey: ``new_key`` belongs to another snippet.
        """
        self._ensure_open()
        position = self._position(original_key)
        if position is None:
            raise NotFound(original_key)

        new_key = original_key if new_key is None else new_key
        if new_key != original_key:
            _check_key(new_key)
            if new_key in self:
                raise DuplicateKey(new_key)

        current = self._records[position]
        record = SnippetRecord(
            key=new_key,
            text=current.text if text is None else text,
            icon=current.icon if icon is None else icon,
            group=current.group if group is None else group,
        )
        records = list(self._records)
        records[position] = record
        if new_key != original_key:
            await self._commit(records, "Renamed snippet '%s' to '%s'", original_key, new_key)
        else:
            await self._commit(records, "Updated snippet '%s'", new_key)
        return record

    async def delete(self, key: str) -> SnippetRecord:
        """Remove a snippet with all its attributes.

        Raises:
            NotFound: no snippet has this key.
        """
        self._ensure_open()
        position = self._position(key)
        if position is None:
            raise NotFound(key)

        records = list(self._records)
        removed = records.pop(position)
        await self._commit(records, "Deleted snippet '%s'", key)
        return removed

    async def reorder(self, from_index: int, to_index: int) -> None:
        """Move the snippet at ``from_index`` so it ends up at ``to_index``.

        Snippets in between shift one slot to close the gap, e.g. moving 0
        to 2 turns ``[a, b, c]`` into ``[b, c, a]``.

        Raises:
            IndexOutOfRange: either index is outside ``[0, len)``.
        """
        self._ensure_open()
        size = len(self._records)
        for index in (from_index, to_index):
            if not 0 <= index < size:
                raise IndexOutOfRange(index, size)
        if from_index == to_index:
            return

        records = list(self._records)
        record = records.pop(from_index)
        records.insert(to_index, record)
        await self._commit(
            records, "Moved snippet '%s' from %d to %d", record.key, from_index, to_index
        )

    # --- Internals ---

    def _ensure_open(self) -> None:
        if self._closed:
            raise RepositoryClosed()

    def _position(self, key: str) -> int | None:
        for i, record in enumerate(self._records):
            if record.key == key:
                return i
        return None

    async def _commit(self, records: list[SnippetRecord], msg: str, *args: object) -> None:
        """Swap in the new records, announce the change and persist it."""
        self._records = records
        logger.info(msg, *args)
        self._event_bus.emit(EVENT_SNIPPETS_CHANGED, keys=self.keys())
        await self._persist(self.to_state())

    def _lock(self) -> asyncio.Lock:
        loop = asyncio.get_running_loop()
        if self._write_lock is None or self._write_lock_loop is not loop:
            self._write_lock = asyncio.Lock()
            self._write_lock_loop = loop
        return self._write_lock

    async def _persist(self, state: SnippetState) -> None:
        store = self._store
        if store is None:
            return

        async with self._lock():
            try:
                ok = await resolve(store.save(state))
            except Exception as e:
                logger.exception("Failed to save snippets")
                self._event_bus.emit(EVENT_SAVE_FAILED, error=str(e))
                raise PersistenceFailure(f"Failed to save snippets: {e}") from e

        if ok is False:
            logger.error("Snippet store rejected the write")
            self._event_bus.emit(EVENT_SAVE_FAILED, error="store rejected the write")
            raise PersistenceFailure("Failed to save snippets")


def _check_key(key: str) -> None:
    result = validate_key(key)
    if not result.valid:
        raise InvalidKey(key, result.reason, result.message)


def _records_from_state(state: SnippetState) -> tuple[list[SnippetRecord], bool]:
    """Build records from persisted maps. Returns (records, needs_write)."""
    snippets = state.get("snippets") or {}
    icons = state.get("icons")
    groups = state.get("groups")
    migrated = icons is None or groups is None
    icons = icons or {}
    groups = groups or {}

    records = []
    for key, text in snippets.items():
        if not validate_key(key):
            logger.warning("Persisted snippet key %r is not a valid key", key)
        if key not in icons or key not in groups:
            migrated = True
        records.append(
            SnippetRecord(
                key=key,
                text=text,
                icon=icons.get(key) or DEFAULT_ICON,
                group=groups.get(key, ""),
            )
        )

    orphans = (set(icons) | set(groups)) - set(snippets)
    if orphans:
        logger.info("Dropping attributes of unknown snippet(s): %s", sorted(orphans))
        migrated = True
    return records, migrated
