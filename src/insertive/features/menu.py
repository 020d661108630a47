"""Menu organization: groups snippet keys into a renderable menu tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable

from insertive.constants import (
    APP_TITLE,
    COMMAND_PREFIX,
    MENU_EMPTY_ICON,
    MENU_FOLDER_ICON,
    MENU_ICON,
    MENU_MANAGE_ICON,
    MENU_MANAGE_LABEL,
)
from insertive.features.model import SnippetRecord


@dataclass
class MenuLayout:
    """Snippet keys partitioned by group, each bucket in repository order."""

    ungrouped: list[str] = field(default_factory=list)
    groups: dict[str, list[str]] = field(default_factory=dict)

    def sorted_groups(self) -> list[tuple[str, list[str]]]:
        """Group buckets ordered by name, the order menus display them in."""
        return sorted(self.groups.items())


@dataclass
class MenuItem:
    """A node of the rendered menu.

    ``kind`` is one of "root", "snippet", "folder", "separator" or "action".
    """

    title: str
    kind: str
    icon: str | None = None
    command_id: str | None = None
    action: str | None = None
    disabled: bool = False
    children: list[MenuItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        data: dict = {"title": self.title, "kind": self.kind}
        for name in ("icon", "command_id", "action"):
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        if self.disabled:
            data["disabled"] = True
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


def organize(ordered_keys: Iterable[str], group_of: Callable[[str], str]) -> MenuLayout:
    """Partition keys into the ungrouped bucket and one bucket per group."""
    layout = MenuLayout()
    for key in ordered_keys:
        group = group_of(key)
        if group:
            layout.groups.setdefault(group, []).append(key)
        else:
            layout.ungrouped.append(key)
    return layout


def build_menu(
    snapshot: Iterable[tuple[str, SnippetRecord]],
    title: str = APP_TITLE,
    manage_label: str = MENU_MANAGE_LABEL,
) -> MenuItem:
    """Build the full snippet menu from a repository snapshot.

    Ungrouped snippets come first, then one folder per group sorted by
    name, then a separator and the manage entry. An empty repository
    yields a single disabled root item.
    """
    records = dict(snapshot)
    if not records:
        return MenuItem(title=title, kind="root", icon=MENU_EMPTY_ICON, disabled=True)

    layout = organize(records, lambda key: records[key].group)
    root = MenuItem(title=title, kind="root", icon=MENU_ICON)
    root.children.extend(_snippet_item(records[key]) for key in layout.ungrouped)
    for group, keys in layout.sorted_groups():
        folder = MenuItem(title=group, kind="folder", icon=MENU_FOLDER_ICON)
        folder.children.extend(_snippet_item(records[key]) for key in keys)
        root.children.append(folder)

    root.children.append(MenuItem(title="", kind="separator"))
    root.children.append(
        MenuItem(title=manage_label, kind="action", icon=MENU_MANAGE_ICON, action="manage")
    )
    return root


def _snippet_item(record: SnippetRecord) -> MenuItem:
    return MenuItem(
        title=record.key,
        kind="snippet",
        icon=record.icon,
        command_id=COMMAND_PREFIX + record.key,
    )


def render_text(item: MenuItem, indent: int = 0) -> list[str]:
    """Render a menu tree as indented text lines (used by the CLI)."""
    pad = "  " * indent
    if item.kind == "separator":
        return [pad + "-" * 20]

    label = item.title
    if item.kind == "folder":
        label += "/"
    if item.disabled:
        label += " (disabled)"
    lines = [f"{pad}{label}  [{item.icon}]" if item.icon else pad + label]
    for child in item.children:
        lines.extend(render_text(child, indent + 1))
    return lines
