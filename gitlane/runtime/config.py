"""Persistent JSON config helpers.

Stores the theme choice and a few view defaults. All access is tolerant:
a missing or malformed file falls back to defaults, and failed writes are
logged rather than raised.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..ui_theme import normalize_theme_name
from .state import DEFAULT_PAGE_SIZE

logger = logging.getLogger(__name__)

APP_NAME = "gitlane"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_MAX_COMMITS = 500


@dataclass(frozen=True)
class Settings:
    theme: str = "dark"
    max_commits: int = DEFAULT_MAX_COMMITS
    page_size: int = DEFAULT_PAGE_SIZE
    show_sidebar: bool = True


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError) as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def _positive_int(value: object, default: int) -> int:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    return default


def load_settings() -> Settings:
    data = load_config()
    show_sidebar = data.get("show_sidebar")
    return Settings(
        theme=normalize_theme_name(data.get("theme") if isinstance(data.get("theme"), str) else None),
        max_commits=_positive_int(data.get("max_commits"), DEFAULT_MAX_COMMITS),
        page_size=_positive_int(data.get("page_size"), DEFAULT_PAGE_SIZE),
        show_sidebar=show_sidebar if isinstance(show_sidebar, bool) else True,
    )


def save_setting(key: str, value: object) -> None:
    """Update one key of the persisted config, keeping the others."""
    config = load_config()
    config[key] = value
    save_config(config)
