"""Durable stores for snippet state."""

from insertive.storage.base import CallableStore, SnippetState, SnippetStore
from insertive.storage.memory import MemorySnippetStore
from insertive.storage.toml_store import TomlSnippetStore

__all__ = [
    "CallableStore",
    "MemorySnippetStore",
    "SnippetState",
    "SnippetStore",
    "TomlSnippetStore",
]
