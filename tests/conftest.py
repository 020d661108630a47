"""Shared test fixtures."""

from __future__ import annotations

import asyncio
from typing import Callable

import pytest

from insertive.config import AppConfig
from insertive.events import EventBus
from insertive.features.repository import SnippetRepository
from insertive.storage.memory import MemorySnippetStore


@pytest.fixture
def event_bus() -> EventBus:
    """Fresh event bus for each test."""
    bus = EventBus()
    yield bus
    bus.clear()


@pytest.fixture
def config() -> AppConfig:
    """Default config for testing."""
    return AppConfig()


@pytest.fixture
def store() -> MemorySnippetStore:
    """Empty in-memory snippet store."""
    return MemorySnippetStore()


@pytest.fixture
def repository(store: MemorySnippetStore, event_bus: EventBus) -> SnippetRepository:
    """Empty repository backed by the memory store."""
    return SnippetRepository(store, event_bus)


@pytest.fixture
def make_repository() -> Callable[..., SnippetRepository]:
    """Factory: repository holding one snippet per key, text "<key> {1}"."""

    def _make(*keys: str, groups: dict[str, str] | None = None) -> SnippetRepository:
        groups = groups or {}
        state = {
            "snippets": {k: f"{k} {{1}}" for k in keys},
            "icons": {k: "stamp" for k in keys},
            "groups": {k: groups.get(k, "") for k in keys},
        }
        return asyncio.run(SnippetRepository.load(MemorySnippetStore(state)))

    return _make
