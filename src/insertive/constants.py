"""Default values, paths, and version constants."""

from __future__ import annotations

import os
from pathlib import Path

# Version
VERSION = "1.0.0"
APP_NAME = "insertive"
APP_TITLE = "Insertive"

# XDG directories
XDG_CONFIG_HOME = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))

# Application directories
CONFIG_DIR = XDG_CONFIG_HOME / APP_NAME

# Configuration files
CONFIG_FILE = CONFIG_DIR / "config.toml"
SNIPPETS_FILE = CONFIG_DIR / "snippets.toml"

# Snippets
COMMAND_PREFIX = "insert-snippet-"
COMMAND_NAME_PREFIX = "Insert Snippet: "
DEFAULT_ICON = "stamp"
DEFAULT_SNIPPETS: dict[str, dict[str, str]] = {
    "snippets": {
        "hello": "_Hello World_",
        "greet": "Hello {1} (from Insertive)",
    },
    "icons": {
        "hello": "stamp",
        "greet": "hand",
    },
    "groups": {
        "hello": "",
        "greet": "",
    },
}

# Menu
MENU_ICON = "text-cursor-input"
MENU_EMPTY_ICON = "file-down"
MENU_FOLDER_ICON = "folder"
MENU_MANAGE_ICON = "settings"
MENU_MANAGE_LABEL = "Manage snippets..."

# Previews
SUGGESTION_PREVIEW_LENGTH = 50
LISTING_PREVIEW_LENGTH = 100

# Web dashboard
WEB_DEFAULT_HOST = "127.0.0.1"
WEB_DEFAULT_PORT = 7866

# Events
EVENT_SNIPPETS_CHANGED = "snippets.changed"
EVENT_SAVE_FAILED = "snippets.save_failed"

# Logging
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
