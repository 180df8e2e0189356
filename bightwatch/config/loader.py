"""YAML config loader with hashing and runtime get/set."""

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from bightwatch.config.defaults import DEFAULT_FAMILIES
from bightwatch.config.schema import AppConfig


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate config from a YAML file.

    Each family entry is merged over its DEFAULT_FAMILIES counterpart, so a
    partial entry only overrides the keys it names. Families missing from
    the YAML keep their defaults; a missing file yields the defaults.
    """
    raw: dict = {}
    if path is not None and Path(path).exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}

    defaults = {fam.name: fam.model_dump() for fam in DEFAULT_FAMILIES}
    given = [
        {**defaults.get(fam.get("name"), {}), **fam}
        for fam in raw.get("families") or []
    ]
    named = {fam.get("name") for fam in given}
    raw["families"] = given + [d for name, d in defaults.items() if name not in named]

    return AppConfig(**raw)


def default_config() -> AppConfig:
    return AppConfig(families=DEFAULT_FAMILIES)


def config_hash(config: AppConfig) -> str:
    """Compute a deterministic SHA256 hash of the config."""
    data = config.model_dump_json(indent=None)
    return hashlib.sha256(data.encode()).hexdigest()[:16]


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'rate_limit.window_minutes'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: AppConfig, dotted_key: str, value: Any) -> AppConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new AppConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        target = target[int(part)] if isinstance(target, list) else target[part]
    if not isinstance(target, dict) or parts[-1] not in target:
        raise KeyError(f"Config key not found: {dotted_key}")
    old_value = target[parts[-1]]
    if isinstance(old_value, bool) and isinstance(value, str):
        value = value.lower() in ("1", "true", "yes", "on")
    elif isinstance(old_value, int) and isinstance(value, str):
        value = int(value)
    elif isinstance(old_value, float) and isinstance(value, str):
        value = float(value)
    target[parts[-1]] = value
    return AppConfig(**data)


def save_config(config: AppConfig, path: str | Path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump(json.loads(config.model_dump_json()), f, sort_keys=False)
