"""Persistent JSON config helpers.

Stores the default explorer config table used by the CLI and the log level.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "scriptbridge"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
LOG_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


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

    Any filesystem/serialization error is ignored to keep callers non-fatal
    when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def load_explorer_config() -> dict[str, object] | None:
    """Return the persisted ``explorer`` table, or ``None`` when unset/invalid.

    The table is returned raw; schema validation happens where it is used.
    """
    value = load_config().get("explorer")
    return value if isinstance(value, dict) else None


def save_explorer_config(table: dict[str, object]) -> None:
    config = load_config()
    config["explorer"] = table
    save_config(config)


def load_log_level() -> str | None:
    """Load the persisted log level name, normalized to upper case."""
    value = load_config().get("log_level")
    if not isinstance(value, str):
        return None
    normalized = value.strip().upper()
    return normalized if normalized in LOG_LEVEL_NAMES else None


def save_log_level(level: str) -> None:
    normalized = str(level).strip().upper()
    if normalized not in LOG_LEVEL_NAMES:
        return
    config = load_config()
    config["log_level"] = normalized
    save_config(config)


def configure_logging(level: str | None = None) -> None:
    """Install a stderr handler at ``level``, the persisted level, or WARNING."""
    resolved = level or load_log_level() or "WARNING"
    logging.basicConfig(
        level=getattr(logging, resolved, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
