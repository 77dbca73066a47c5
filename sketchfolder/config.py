"""Persistent JSON config helpers.

Stores the highlight style, a default temporary build folder, and the log
level. All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "sketchfolder"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_STYLE = "monokai"
DEFAULT_LOG_LEVEL = "warning"


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep CLI behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def _save_value(key: str, value: object) -> None:
    config = load_config()
    if value is None:
        config.pop(key, None)
    else:
        config[key] = value
    save_config(config)


def load_style() -> str:
    """Return the persisted Pygments style name."""
    return _load_string("style") or DEFAULT_STYLE


def save_style(style: str) -> None:
    _save_value("style", style)


def load_build_folder() -> Path | None:
    """Return the persisted temporary build folder, if any."""
    value = _load_string("build_folder")
    return Path(value).expanduser() if value is not None else None


def save_build_folder(build_folder: Path | None) -> None:
    """Persist the build folder; ``None`` removes the setting."""
    _save_value("build_folder", str(build_folder) if build_folder is not None else None)


def load_log_level() -> str:
    return _load_string("log_level") or DEFAULT_LOG_LEVEL


def save_log_level(level: str) -> None:
    _save_value("log_level", level)
