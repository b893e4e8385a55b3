"""Minimal strict schemas for YAML config validation."""

from __future__ import annotations

from campuscoffee.common.errors import ConfigError


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_positive_number(value: object, ctx: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"{ctx} must be a positive number")


def validate_app_config(cfg: dict, *, allow_unknown: bool = False) -> dict:
    top_required = {"osm", "store"}
    _assert_required_keys(cfg, top_required, "app config")
    _assert_no_unknown_keys(cfg, top_required, "app config", allow_unknown)

    osm_keys = {"base_url", "user_agent", "timeout"}
    _assert_required_keys(cfg["osm"], osm_keys, "osm")
    _assert_no_unknown_keys(cfg["osm"], osm_keys, "osm", allow_unknown)
    if not str(cfg["osm"]["base_url"]).startswith(("http://", "https://")):
        raise ConfigError("osm.base_url must be an http(s) URL")
    if not str(cfg["osm"]["user_agent"]).strip():
        raise ConfigError("osm.user_agent must not be blank")

    _assert_required_keys(cfg["osm"]["timeout"], {"connect", "read"}, "osm.timeout")
    _assert_positive_number(cfg["osm"]["timeout"]["connect"], "osm.timeout.connect")
    _assert_positive_number(cfg["osm"]["timeout"]["read"], "osm.timeout.read")

    _assert_required_keys(cfg["store"], {"filename"}, "store")
    _assert_no_unknown_keys(cfg["store"], {"filename"}, "store", allow_unknown)

    return cfg
