"""Configuration management for Taskly."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

TASKLY_HOME = Path(os.environ.get("TASKLY_HOME", Path.home() / "taskly"))
CONFIG_FILE = TASKLY_HOME / "config" / "taskly.conf"


@dataclass
class Config:
    """Taskly configuration."""

    api_base: str = "http://localhost:5050"
    api_token: str = ""
    due_soon_days: int = 7
    top_n: int = 5


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from unquoted values."""
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def _parse_int(key: str, value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-integer {key.upper()}={value!r}")
        return default


def load_config(path: Path | None = None) -> Config:
    """Load configuration from taskly.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        logger.debug(f"No config file at {path}, using defaults")
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "api_base":
                config.api_base = value.rstrip("/")
            case "api_token":
                config.api_token = value
            case "due_soon_days":
                config.due_soon_days = _parse_int(key, value, config.due_soon_days)
            case "top_n":
                config.top_n = _parse_int(key, value, config.top_n)
            case _:
                logger.debug(f"Unknown config key {key!r}")

    return config
