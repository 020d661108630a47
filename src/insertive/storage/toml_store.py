"""Snippet state persisted as a TOML file."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import tomli_w

from insertive.constants import SNIPPETS_FILE
from insertive.errors import PersistenceFailure
from insertive.storage.base import SnippetState, SnippetStore

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

SECTIONS = ("snippets", "icons", "groups")


class TomlSnippetStore(SnippetStore):
    """Reads and writes the three snippet maps as TOML tables.

    Keys are valid TOML bare keys, and table order follows repository order.
    Writes go to a temporary sibling file that replaces the target, so a
    crash mid-write leaves the previous file intact.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or SNIPPETS_FILE

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> SnippetState | None:
        """Load state from the TOML file. Returns None if the file is missing."""
        if not self._path.exists():
            logger.info("No snippets file found at %s", self._path)
            return None

        try:
            with open(self._path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.error("Failed to read snippets file %s: %s", self._path, e)
            raise PersistenceFailure(f"Cannot read snippets file {self._path}: {e}") from e

        state: SnippetState = {}
        for section in SECTIONS:
            if section not in data:
                continue
            if not isinstance(data[section], dict):
                raise PersistenceFailure(
                    f"Cannot read snippets file {self._path}: [{section}] is not a table"
                )
            state[section] = {str(k): str(v) for k, v in data[section].items()}
        logger.info(
            "Loaded %d snippet(s) from %s", len(state.get("snippets", {})), self._path
        )
        return state

    def save(self, state: SnippetState) -> bool:
        """Write the full state atomically."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        data = {section: dict(state.get(section, {})) for section in SECTIONS}

        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            with open(tmp_path, "wb") as f:
                tomli_w.dump(data, f)
            os.replace(tmp_path, self._path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        logger.debug("Saved %d snippet(s) to %s", len(data["snippets"]), self._path)
        return True
