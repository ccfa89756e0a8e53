"""
Configuration management for GraphMap.

Settings are resolved in order of increasing priority:
1. Built-in defaults (UCF campus, OpenStreetMap tiles)
2. config.json next to the executable/project root
3. GRAPHMAP_* environment variables (a .env file is loaded by app.py)
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from graphmap.paths import get_config_path

logger = logging.getLogger(__name__)

DEFAULT_CENTER = (28.6024, -81.2001)
DEFAULT_ZOOM = 15
DEFAULT_TILE_URL = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
DEFAULT_PORT = 8080


@dataclass
class MapSettings:
    center: Tuple[float, float] = DEFAULT_CENTER
    zoom: int = DEFAULT_ZOOM
    tile_url: str = DEFAULT_TILE_URL
    port: int = DEFAULT_PORT
    log_level: str = "INFO"


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration from config.json."""
    config_path = config_path or get_config_path()
    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
                return data if isinstance(data, dict) else {}
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Ignoring unreadable config {config_path}: {e}")
            return {}
    return {}


def _coerce(raw: Any, convert: Callable[[Any], Any], source: str, fallback: Any) -> Any:
    try:
        return convert(raw)
    except (TypeError, ValueError):
        logger.warning(f"Invalid value {raw!r} for {source}, using {fallback!r}")
        return fallback


def get_map_settings(config_path: Optional[Path] = None,
                     environ: Optional[Dict[str, str]] = None) -> MapSettings:
    """Resolve map settings from defaults, config.json and the environment."""
    environ = os.environ if environ is None else environ
    config = load_config(config_path)
    settings = MapSettings()

    center = config.get("center")
    if isinstance(center, (list, tuple)) and len(center) == 2:
        settings.center = (
            _coerce(center[0], float, "config center", settings.center[0]),
            _coerce(center[1], float, "config center", settings.center[1]),
        )
    if "zoom" in config:
        settings.zoom = _coerce(config["zoom"], int, "config zoom", settings.zoom)
    if config.get("tile_url"):
        settings.tile_url = str(config["tile_url"])
    if "port" in config:
        settings.port = _coerce(config["port"], int, "config port", settings.port)
    if config.get("log_level"):
        settings.log_level = str(config["log_level"]).upper()

    lat, lng = settings.center
    if environ.get("GRAPHMAP_CENTER_LAT"):
        lat = _coerce(environ["GRAPHMAP_CENTER_LAT"], float, "GRAPHMAP_CENTER_LAT", lat)
    if environ.get("GRAPHMAP_CENTER_LNG"):
        lng = _coerce(environ["GRAPHMAP_CENTER_LNG"], float, "GRAPHMAP_CENTER_LNG", lng)
    settings.center = (lat, lng)
    if environ.get("GRAPHMAP_ZOOM"):
        settings.zoom = _coerce(environ["GRAPHMAP_ZOOM"], int, "GRAPHMAP_ZOOM", settings.zoom)
    if environ.get("GRAPHMAP_TILE_URL"):
        settings.tile_url = environ["GRAPHMAP_TILE_URL"]
    if environ.get("GRAPHMAP_PORT"):
        settings.port = _coerce(environ["GRAPHMAP_PORT"], int, "GRAPHMAP_PORT", settings.port)
    if environ.get("GRAPHMAP_LOG_LEVEL"):
        settings.log_level = environ["GRAPHMAP_LOG_LEVEL"].upper()

    return settings

