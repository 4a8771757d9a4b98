"""Application-wide constants."""

import sys

APP_TITLE = "propedit"
APP_SUBTITLE = "local config editor"

# The authorized root must be a directory with this name (compared case-insensitively).
ROOT_DIR_NAME: str = "opt"
DEFAULT_START_PATH: str = "C:/opt" if sys.platform.startswith("win") else "/opt"

DATA_DIR_NAME = "data"
CONFIG_CACHE_DIR_NAME = "config-cache"
SETTINGS_DIR_NAME = "settings"
SERVER_PROPERTIES_NAME = "server.properties"
PROPERTIES_SUFFIX = ".properties"
DISPLAY_NAME_SEPARATOR = "+"

GENERAL_SECTION = "[General]"
ENV_DIRECTIVE_PREFIX = "env="
LOCAL_ENV_VALUE = "Local"
SERVER_PROPERTIES_TEMPLATE = f"{GENERAL_SECTION}\n"

NEW_ENTRY_KEY = "new_key"
NEW_ENTRY_VALUE = "new_value"

PROMPT_MODE_READWRITE = "readwrite"

TABLE_COLUMNS = ("#", "Key", "Value")

BLOCKED_IN_ONLINE_MODE = "Online mode is read-only: changes cannot be saved"

HELP_TEXT = """\
 Projects
 ──────────────────────────────
 a            Authorize the opt directory
 c            Change path (re-authorize)
 Enter        Open project files
 r            Refresh
 e            Toggle Online / Local

 Editor
 ──────────────────────────────
 j / ↓        Move down
 k / ↑        Move up
 i / Enter    Edit selected value
 r            Edit selected key
 o            Add new row
 d d          Delete selected row
 s            Save
 Escape       Close search / close editor

 Search
 ──────────────────────────────
 / or ctrl+f  Toggle search
 n / Enter    Next match
 N            Previous match

 General
 ──────────────────────────────
 ?            Toggle this help
 q            Quit\
"""
