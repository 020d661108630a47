"""Snippet record model."""

from __future__ import annotations

from dataclasses import dataclass

from insertive.constants import DEFAULT_ICON


@dataclass(frozen=True)
class SnippetRecord:
    """A named template with its display icon and group label.

    An empty ``group`` means the snippet is ungrouped.
    """

    key: str
    text: str
    icon: str = DEFAULT_ICON
    group: str = ""

    def __post_init__(self) -> None:
        if not self.icon:
            object.__setattr__(self, "icon", DEFAULT_ICON)
        if self.group != self.group.strip():
            object.__setattr__(self, "group", self.group.strip())
