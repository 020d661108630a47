"""Snippet template engine: substitutes selected lines into {n} placeholders.

A template such as ``"> {1}\\n> {2}"`` receives the current selection split
into non-empty, trimmed lines. ``{1}`` takes the first line, ``{k}`` the k-th
line, and ``{2}`` is special: when more than one line is selected it takes
every line from the second onward, joined with single spaces.

    >>> process_template("Hello, {1}!", "John Doe")
    'Hello, John Doe!'
    >>> process_template("> {1}\\n> {2}", "Hello\\nworld\\ntest")
    '> Hello\\n> world test'
"""

from __future__ import annotations

import re

PLACEHOLDER_PATTERN = re.compile(r"\{([0-9]+)\}")


def has_placeholders(text: str | None) -> bool:
    """Return True if the text contains at least one {n} token."""
    return bool(text) and PLACEHOLDER_PATTERN.search(text) is not None


def extract_placeholders(text: str | None) -> list[str]:
    """Return the distinct {n} tokens of a text in order of first appearance."""
    if not text:
        return []
    return list(dict.fromkeys(m.group(0) for m in PLACEHOLDER_PATTERN.finditer(text)))


def selection_lines(selection: str) -> list[str]:
    """Split a selection into trimmed, non-empty lines."""
    return [line.strip() for line in selection.split("\n") if line.strip()]


def replacement_for(index: int, lines: list[str]) -> str:
    """Text substituted for placeholder ``{index}`` given the selected lines."""
    count = len(lines)
    if index == 1:
        return lines[0] if count >= 1 else ""
    if index == 2 and count > 1:
        return " ".join(lines[1:])
    if 1 < index <= count:
        return lines[index - 1]
    return ""


def process_template(template: str, selection: str | None) -> str:
    """Substitute the selection into the template's placeholders.

    Every token is replaced in a single pass over the original template, so
    replacement text that itself looks like ``{m}`` is left alone.
    """
    if not selection or not has_placeholders(template):
        return template

    lines = selection_lines(selection)
    replacements = {
        index: replacement_for(index, lines)
        for index in {int(token[1:-1]) for token in extract_placeholders(template)}
    }

    return PLACEHOLDER_PATTERN.sub(lambda m: replacements[int(m.group(1))], template)
