from __future__ import annotations

import json
from pathlib import Path

from .errors import ConfigError

DEFAULT_CONFIG_PATH = Path("git-author-stats.json")
CONFIG_KEYS = ("repo", "timezone", "author", "include_merges")


def load_config(config_path: Path) -> dict:
    if not config_path.exists():
        return {}
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"malformed config file {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"cannot read config file {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config file {config_path} must contain a JSON object")
    return {k: data[k] for k in CONFIG_KEYS if k in data}


def config_str(config: dict, key: str, default: str = "") -> str:
    value = config.get(key)
    if value is None:
        return default
    return str(value).strip() or default


def config_bool(config: dict, key: str, default: bool = False) -> bool:
    value = config.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        v = value.strip().lower()
        if v in ("1", "true", "yes", "on"):
            return True
        if v in ("0", "false", "no", "off", ""):
            return False
    raise ConfigError(f"config key {key!r} must be a boolean, got {value!r}")
