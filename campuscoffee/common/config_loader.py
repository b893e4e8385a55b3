"""Configuration loading and validation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from campuscoffee.common.errors import ConfigError
from campuscoffee.common.fs import read_yaml
from campuscoffee.common.http import TimeoutConfig
from campuscoffee.common.schema import validate_app_config

CONFIG_FILENAME = "campuscoffee.yml"


@dataclass(frozen=True)
class OsmConfig:
    base_url: str
    user_agent: str
    timeout: TimeoutConfig


@dataclass(frozen=True)
class AppConfig:
    osm: OsmConfig
    store_filename: str


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    base = read_yaml(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    return _deep_merge(base, overlay)


def load_app_config(
    config_dir: Path,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
) -> AppConfig:
    overlay_path = None
    if overlay_config_dir is not None:
        overlay_path = overlay_config_dir / CONFIG_FILENAME
    cfg = validate_app_config(
        _load_yaml_with_overlay(config_dir / CONFIG_FILENAME, overlay_path),
        allow_unknown=allow_unknown,
    )

    osm = cfg["osm"]
    return AppConfig(
        osm=OsmConfig(
            base_url=str(osm["base_url"]).rstrip("/"),
            user_agent=str(osm["user_agent"]),
            timeout=TimeoutConfig(
                connect=float(osm["timeout"]["connect"]),
                read=float(osm["timeout"]["read"]),
            ),
        ),
        store_filename=str(cfg["store"]["filename"]),
    )
