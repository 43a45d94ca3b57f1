from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml


class ConfigurationError(ValueError):
    pass


def load_yaml_config(path_str: Optional[str]) -> Dict[str, Any]:
    if not path_str:
        return {}
    path = Path(path_str)
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Could not parse config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping.")
    return data


def parse_episode_count(value: Any) -> int:
    """Turn a raw episode count from the command line or a file into an int."""
    if value is None:
        raise ConfigurationError("Number of training episodes is missing.")
    if isinstance(value, bool):
        raise ConfigurationError(f"Number of training episodes must be an integer, got {value!r}.")
    if isinstance(value, int):
        episodes = value
    else:
        try:
            episodes = int(str(value).strip())
        except ValueError:
            raise ConfigurationError(
                f"Number of training episodes must be an integer, got {value!r}."
            ) from None
    if episodes < 0:
        raise ConfigurationError(f"Number of training episodes must be non-negative, got {episodes}.")
    return episodes


def merge_overrides(cfg: Mapping[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Overlay command-line values that were actually given onto the file config."""
    merged = dict(cfg)
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    return merged
