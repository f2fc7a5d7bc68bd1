"""Configuration loading for the emote profile generator.

Settings live in a YAML file that is deep-merged over ``_DEFAULT_CONFIG``;
CLI flags are applied afterwards as dot-notation overrides
(``{"profile.name": "Pomu"}``).  ``prepare_config`` validates and normalises
the merged result before the pipeline uses it.
"""

from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Optional, Tuple

import yaml

from .models import grid_for_model

LOG = logging.getLogger("streamdeck_emotes.config")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config.yaml"

_DEFAULT_CONFIG: Dict[str, Any] = {
    "profile": {"name": "Emotes", "prefix": "", "include_label": True, "root_uuid": None},
    "device": {"model": "standard", "uuid": "", "model_id": None},
    "emotes": {"priority": [], "exclude": []},
    "fetch": {"max_workers": 8, "timeout_sec": 30.0},
    "output": {"folder": "out", "merge_existing": True},
    "logging": {"level": "INFO"},
}


def default_config() -> Dict[str, Any]:
    return json.loads(json.dumps(_DEFAULT_CONFIG))  # deep copy via JSON


def load_config_file(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load a YAML configuration file if it exists, otherwise return defaults."""

    cfg_path = Path(path) if path else DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        LOG.warning("config not found at %s; using defaults", cfg_path)
        return default_config()
    with cfg_path.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    if not isinstance(loaded, Mapping):
        raise ValueError(f"config file {cfg_path} must contain a mapping at the top level")
    return merge_dicts(_DEFAULT_CONFIG, loaded)


def merge_dicts(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge *override* into *base* returning a new dictionary."""

    out: Dict[str, Any] = json.loads(json.dumps(base))  # deep copy
    stack: list[Tuple[MutableMapping[str, Any], Mapping[str, Any]]] = [(out, override)]
    while stack:
        dest, src = stack.pop()
        for key, value in src.items():
            if isinstance(value, Mapping) and isinstance(dest.get(key), MutableMapping):
                stack.append((dest[key], value))  # type: ignore[arg-type]
            else:
                dest[key] = value  # type: ignore[index]
    return out


def apply_cli_overrides(cfg: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a new config with dot-notation overrides applied."""

    out = json.loads(json.dumps(cfg))
    for dotted_key, value in overrides.items():
        parts = dotted_key.split(".")
        cursor: Any = out
        for part in parts[:-1]:
            cursor = cursor.setdefault(part, {})  # type: ignore[assignment]
        cursor[parts[-1]] = value  # type: ignore[index]
    return out


def _as_name_list(value: Any, *, key: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)):
        LOG.warning("config[%s]=%r is not a list; ignoring", key, value)
        return []
    return [str(item) for item in value]


def prepare_config(raw_cfg: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Validate and normalise configuration:

    * Merge with defaults.
    * Resolve the device model (raises ``UnknownModelError``).
    * Parse the optional root page UUID.
    * Clamp fetch settings and normalise the output folder.
    """

    cfg = merge_dicts(_DEFAULT_CONFIG, raw_cfg or {})

    profile = cfg.setdefault("profile", {})
    profile["name"] = str(profile.get("name") or "Emotes")
    profile["prefix"] = str(profile.get("prefix") or "")
    profile["include_label"] = bool(profile.get("include_label", True))
    root_uuid = profile.get("root_uuid")
    if root_uuid:
        try:
            profile["root_uuid"] = str(uuid.UUID(str(root_uuid))).upper()
        except ValueError as exc:
            raise ValueError(f"profile.root_uuid={root_uuid!r} is not a valid UUID") from exc
    else:
        profile["root_uuid"] = None

    device = cfg.setdefault("device", {})
    device["model"] = str(device.get("model") or "standard").strip().lower()
    device["uuid"] = str(device.get("uuid") or "")
    device["model_id"] = str(device["model_id"]) if device.get("model_id") else None
    grid_for_model(device["model"], device["model_id"])

    emotes = cfg.setdefault("emotes", {})
    emotes["priority"] = _as_name_list(emotes.get("priority"), key="emotes.priority")
    emotes["exclude"] = _as_name_list(emotes.get("exclude"), key="emotes.exclude")

    fetch = cfg.setdefault("fetch", {})
    fetch["max_workers"] = max(1, int(fetch.get("max_workers", 8)))
    fetch["timeout_sec"] = max(1.0, float(fetch.get("timeout_sec", 30.0)))

    output = cfg.setdefault("output", {})
    output["folder"] = str(Path(output.get("folder") or "out").expanduser())
    output["merge_existing"] = bool(output.get("merge_existing", True))

    log_cfg = cfg.setdefault("logging", {})
    level = str(log_cfg.get("level") or "INFO").upper()
    if not isinstance(logging.getLevelName(level), int):
        LOG.warning("config[logging.level]=%r invalid; using INFO", level)
        level = "INFO"
    log_cfg["level"] = level

    return cfg


__all__ = [
    "PROJECT_ROOT",
    "DEFAULT_CONFIG_PATH",
    "default_config",
    "load_config_file",
    "merge_dicts",
    "apply_cli_overrides",
    "prepare_config",
]
