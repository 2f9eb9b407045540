from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

import structlog
import yaml
from dotenv import load_dotenv

from .defaults import DEFAULT_CONFIG
from .schema import AppConfig, EnvOverrides

log = structlog.get_logger(__name__)

_SECTIONS: tuple[str, ...] = (
    "tmdb",
    "http",
    "search",
    "auth",
    "logging",
    "trends",
    "cache",
)

_TOP_LEVEL_KEYS: tuple[str, ...] = ("app_name", "environment")

# Flat keys whose prefix is not their section name.
_FLAT_ALIASES: dict[str, tuple[str, str]] = {
    "log_level": ("logging", "level"),
    "log_format": ("logging", "format"),
}


def _deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into ``base`` in place; nested mappings merge, the rest replaces."""
    for key, value in override.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            _deep_merge(current, value)
        else:
            base[key] = value
    return base


def _split_flat_key(key: str) -> tuple[str, str] | None:
    if key in _FLAT_ALIASES:
        return _FLAT_ALIASES[key]
    section, sep, rest = key.partition("_")
    if sep and rest and section in _SECTIONS:
        return section, rest
    return None


def _normalize_layer(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Bring one layer (defaults/YAML/ENV/CLI) into the sectioned shape.

    Sectioned blocks (``search: {debounce_ms: 300}``) pass through; flat keys
    (``search_debounce_ms``, ``cache_dir``, ``log_level``) are folded into
    their section. Unknown keys are left for validation to reject or ignore.
    """
    out: dict[str, Any] = {}

    for key in _TOP_LEVEL_KEYS:
        if key in data:
            out[key] = data[key]

    for key, value in data.items():
        if key in _SECTIONS and isinstance(value, Mapping):
            out.setdefault(key, {}).update(value)
            continue
        target = _split_flat_key(key)
        if target is not None:
            section, section_key = target
            out.setdefault(section, {})[section_key] = value

    return out


def _read_yaml_config(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(config_path)
    parsed = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError(f"Config YAML must be a mapping, got: {type(parsed)!r}")
    return parsed


def load_config(
    *,
    config_path: Path | None = None,
    dotenv_path: Path | None = None,
    cli_overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """
    Load configuration with strict precedence:
    defaults < YAML file < env vars (MOVIESCOUT_*) < cli overrides

    No files or directories are created.
    """
    # .env values join the process environment, below real env vars.
    if dotenv_path is not None:
        if not dotenv_path.exists():
            raise FileNotFoundError(dotenv_path)
        load_dotenv(dotenv_path, override=False)

    layers: list[Mapping[str, Any]] = [deepcopy(DEFAULT_CONFIG)]
    if config_path is not None:
        layers.append(_read_yaml_config(config_path))
    layers.append(EnvOverrides().to_update_dict())
    layers.append(cli_overrides or {})

    merged: dict[str, Any] = {}
    for layer in layers:
        _deep_merge(merged, _normalize_layer(layer))

    config = AppConfig.model_validate(merged)
    log.debug(
        "config_loaded",
        config_path=str(config_path) if config_path else None,
        environment=config.environment,
    )
    return config
