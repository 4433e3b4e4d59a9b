"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (Config, MapSettings) are defined in src/core/config.py
to avoid information leakage between layers.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from src.core.config import Config, MapSettings, USGS_FEED_URL, validate_config


logger = logging.getLogger(__name__)


def _resolve_value(value: Any) -> Any:
    """Resolve a value that may be a ${VAR} environment placeholder.

    Args:
        value: Value to resolve

    Returns:
        Environment value, or the original value if unset or not a placeholder
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _optional_float(value: Any) -> float | None:
    value = _resolve_value(value)
    if value is None or value == "":
        return None
    return float(value)


def _parse_map_settings(data: dict[str, Any]) -> MapSettings:
    """Parse map settings from config data."""
    defaults = MapSettings()
    center = data.get("default_center", {})

    return MapSettings(
        width=int(_resolve_value(data.get("width", defaults.width))),
        height=int(_resolve_value(data.get("height", defaults.height))),
        padding_px=int(_resolve_value(data.get("padding_px", defaults.padding_px))),
        tile_url=_resolve_value(data.get("tile_url")),
        default_latitude=float(center.get("latitude", defaults.default_latitude)),
        default_longitude=float(center.get("longitude", defaults.default_longitude)),
        default_zoom=int(data.get("default_zoom", defaults.default_zoom)),
    )


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Build a Config from already-parsed YAML data.

    Args:
        data: Mapping with the same keys as config.yaml

    Returns:
        Parsed Config object
    """
    return Config(
        feed_url=_resolve_value(data.get("feed_url", USGS_FEED_URL)),
        request_timeout_seconds=_optional_float(data.get("request_timeout_seconds")),
        min_magnitude=float(_resolve_value(data.get("min_magnitude", 0.0))),
        map=_parse_map_settings(data.get("map") or {}),
    )


def _log_validation(config: Config) -> None:
    result = validate_config(config)
    for warning in result.warnings:
        logger.warning("Config %s: %s", warning.field, warning.message)
    for error in result.critical_errors:
        logger.error("Config %s: %s", error.field, error.message)


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config/config.yaml")

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = load_config_from_dict(data)
    _log_validation(config)

    logger.info(
        "Loaded config: feed %s, min magnitude %.1f, map %dx%d",
        config.feed_url,
        config.min_magnitude,
        config.map.width,
        config.map.height,
    )

    return config


def load_config_from_env() -> Config:
    """Load configuration from environment variables.

    Useful for deployments without a YAML file.

    Environment variables:
        FEED_URL: GeoJSON feed URL
        REQUEST_TIMEOUT: HTTP timeout in seconds (unset for no timeout)
        MIN_MAGNITUDE: Initial minimum magnitude
        MAP_WIDTH / MAP_HEIGHT: Map image size in pixels
        MAP_PADDING: Padding around fitted markers in pixels
        TILE_URL: Tile URL template

    Returns:
        Config object from environment
    """
    defaults = MapSettings()

    map_settings = MapSettings(
        width=int(os.environ.get("MAP_WIDTH", defaults.width)),
        height=int(os.environ.get("MAP_HEIGHT", defaults.height)),
        padding_px=int(os.environ.get("MAP_PADDING", defaults.padding_px)),
        tile_url=os.environ.get("TILE_URL") or None,
    )

    config = Config(
        feed_url=os.environ.get("FEED_URL", USGS_FEED_URL),
        request_timeout_seconds=_optional_float(os.environ.get("REQUEST_TIMEOUT")),
        min_magnitude=float(os.environ.get("MIN_MAGNITUDE", "0")),
        map=map_settings,
    )
    _log_validation(config)

    return config
