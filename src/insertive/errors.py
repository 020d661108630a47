"""Exceptions raised by the snippet repository and its collaborators."""

from __future__ import annotations


class SnippetError(Exception):
    """Base class for all snippet errors."""


class InvalidKey(SnippetError):
    """A snippet key failed validation."""

    def __init__(self, key: str, reason: str, message: str = "") -> None:
        self.key = key
        self.reason = reason
        super().__init__(message or f"Invalid snippet key {key!r}: {reason}")


class DuplicateKey(SnippetError):
    """A snippet with this key already exists."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f'Snippet with key "{key}" already exists')


class NotFound(SnippetError):
    """No snippet (or command) exists under this key."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f'Snippet "{key}" not found')


class IndexOutOfRange(SnippetError):
    """A reorder index falls outside the repository."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"Index {index} out of range for {size} snippet(s)")


class PersistenceFailure(SnippetError):
    """The durable store rejected a write.

    The in-memory change that triggered the write has already been applied
    and is kept.
    """


class RepositoryClosed(SnippetError):
    """The repository was torn down and accepts no more mutations."""

    def __init__(self) -> None:
        super().__init__("Snippet repository is closed")
