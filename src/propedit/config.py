"""Settings file loading, validation, and persistence.

Schema on disk (~/.config/propedit/config.json):

    {
        "root_name": "opt",
        "start_path": "/opt",
        "log_level": "WARNING"
    }

Every field is optional.  Keys prefixed with "_" are reserved (e.g. "_comment")
and are stripped on load.  Directory capabilities are never stored here: the
root is authorized again on every start.
"""

import json
import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as SchemaError

from propedit.constants import DEFAULT_START_PATH, ROOT_DIR_NAME

_LOG = logging.getLogger(__name__)

CONFIG_PATH = Path("~/.config/propedit/config.json").expanduser()

_README_PATH = Path("~/.config/propedit/README.md").expanduser()

_README_CONTENT = """\
# propedit configuration

Edit `config.json` in this directory to change where propedit looks for the
configuration root.

## Schema

```json
{
    "root_name": "opt",
    "start_path": "/opt",
    "log_level": "WARNING"
}
```

- `root_name` — the name the authorized directory must have (case-insensitive).
- `start_path` — the path pre-filled in the directory prompt.
- `log_level` — one of DEBUG, INFO, WARNING, ERROR.

Keys prefixed with `_` (e.g. `_comment`) are ignored by propedit.
"""

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class Settings(BaseModel):
    """User-level settings.  Defaults match the standard /opt layout."""

    model_config = ConfigDict(extra="forbid")

    root_name: str = Field(default=ROOT_DIR_NAME, min_length=1)
    start_path: str = Field(default=DEFAULT_START_PATH, min_length=1)
    log_level: LogLevel = "WARNING"


class ConfigError(Exception):
    """Raised when config.json exists but cannot be parsed or validated."""


def load_config() -> Settings:
    """Load and validate the settings file.

    Creates the config directory, a default config.json, and a README on first
    run.  Raises ConfigError if the file exists but is malformed.
    """
    if not CONFIG_PATH.exists():
        _bootstrap()
        return Settings()

    text = CONFIG_PATH.read_text()
    if not text.strip():
        return Settings()

    try:
        raw: object = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"config.json is not valid JSON: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError("config.json must be a JSON object at the top level")

    # Strip reserved/comment keys.
    fields = {k: v for k, v in raw.items() if not k.startswith("_")}

    try:
        return Settings.model_validate(fields)
    except SchemaError as exc:
        raise ConfigError(f"Invalid config.json: {exc}") from exc


def save_config(settings: Settings) -> None:
    """Persist settings to disk, creating directories as needed."""
    CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_PATH.write_text(json.dumps(settings.model_dump(), indent=2))


def _bootstrap() -> None:
    """Create the config directory, a default config.json, and a README."""
    CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_PATH.write_text(json.dumps(Settings().model_dump(), indent=2) + "\n")
    if not _README_PATH.exists():
        _README_PATH.write_text(_README_CONTENT)


# UI state lives next to config.json but is not part of Settings: it is
# rewritten on every theme change and a broken file must never block startup.
THEME_CONFIG_PATH = Path("~/.config/propedit/theme.json").expanduser()


class UiState(BaseModel):
    """Persisted look-and-feel preferences."""

    model_config = ConfigDict(extra="ignore")

    theme: str | None = Field(default=None, min_length=1)


def load_theme() -> str | None:
    """Return the last theme the user picked, or None.

    A missing, unreadable or invalid theme.json counts as "no preference".
    """
    try:
        text = THEME_CONFIG_PATH.read_text()
    except FileNotFoundError:
        return None
    except OSError as exc:
        _LOG.warning("could not read %s", THEME_CONFIG_PATH, exc_info=exc)
        return None
    try:
        return UiState.model_validate_json(text).theme
    except SchemaError:
        _LOG.warning("ignoring invalid %s", THEME_CONFIG_PATH)
        return None


def save_theme(theme: str) -> None:
    try:
        THEME_CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        THEME_CONFIG_PATH.write_text(UiState(theme=theme).model_dump_json(indent=2))
    except OSError as exc:
        _LOG.warning("could not save theme to %s", THEME_CONFIG_PATH, exc_info=exc)
