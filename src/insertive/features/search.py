"""Quick search over snippet keys and text previews."""

from __future__ import annotations

from typing import Iterable

from insertive.constants import SUGGESTION_PREVIEW_LENGTH
from insertive.features.model import SnippetRecord


def search(
    snapshot: Iterable[tuple[str, SnippetRecord]], query: str = ""
) -> list[SnippetRecord]:
    """Snippets whose key contains the query, case-insensitive, in order."""
    needle = query.lower()
    return [record for key, record in snapshot if needle in key.lower()]


def preview(text: str, limit: int = SUGGESTION_PREVIEW_LENGTH) -> str:
    """Truncate text to ``limit`` characters, marking the cut with '...'."""
    if len(text) > limit:
        return text[:limit] + "..."
    return text
