"""Client configuration read from a YAML file."""

import os
from pathlib import Path
from typing import Any

import yaml

CONFIG_ENV = "SWIMLANE_CONFIG"
CONFIG_PATH = Path("~/.config/swimlane/config.yaml")

DEFAULTS = {
    "api-url": "http://localhost:3000",
    "timeout": 10.0,
    "token": None,
    "board": None,
    "card-reorder-path": "/api/cards/bulk-reorder",
    "column-reorder-path": "/api/columns/bulk-reorder",
    "board-path": "/api/boards/{board_id}",
}


def _python_key(key: str) -> str:
    """Convert config-style key (hyphenated) to Python-style (underscored)."""
    return key.replace("-", "_")


def _config_key(python_key: str) -> str:
    """Convert Python-style key (underscored) to config-style (hyphenated)."""
    return python_key.replace("_", "-")


def _coerce(key: str, raw: Any) -> Any:
    """Type-coerce a value using the type of its default."""
    default = DEFAULTS.get(key)
    if raw is None or default is None:
        return raw
    if isinstance(default, bool):
        return raw if isinstance(raw, bool) else str(raw).lower() in ("true", "yes", "1")
    if isinstance(default, float):
        return float(raw)
    if isinstance(default, int):
        return int(raw)
    return str(raw)


def config_path() -> Path:
    """Config file location: $SWIMLANE_CONFIG, else ~/.config/swimlane/config.yaml."""
    env = os.environ.get(CONFIG_ENV)
    return Path(env) if env else CONFIG_PATH.expanduser()


def load_config(path: str | Path | None = None) -> dict[str, Any]:
    """Read config into a {python_key: value} dict.

    A missing file yields the defaults. Unknown keys are kept as-is.
    Known keys are coerced to the type of their default.
    """
    path = Path(path) if path is not None else config_path()
    raw: dict[str, Any] = {}
    if path.exists():
        try:
            loaded = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"{path}: {e}") from e
        if not isinstance(loaded, dict):
            raise ValueError(f"{path}: expected a mapping, got {type(loaded).__name__}")
        raw = {_config_key(str(k)): v for k, v in loaded.items()}

    result = {}
    for key, default in DEFAULTS.items():
        result[_python_key(key)] = _coerce(key, raw.pop(key, default))
    for key, value in raw.items():
        result[_python_key(key)] = value
    return result


def write_config(path: str | Path, values: dict[str, Any]) -> None:
    """Write a {python_key: value} dict as a YAML config file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {_config_key(k): v for k, v in values.items() if v is not None}
    path.write_text(yaml.safe_dump(data, sort_keys=False))
