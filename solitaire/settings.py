"""
Settings Module for Solitaire Solver

Provides persistent storage for run defaults using JSON.
Settings are stored in config.json in the working directory.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional

from .solver.context import RunConfig

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("config.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "variant": "freecell",
    "strategy": None,  # None uses the variant default
    "depth_bound": 6,
    "prune_fraction": None,  # None keeps the variant default
    "stop_at_first_solution": True,
    "max_scenarios": 200000,
    "timeout_sec": 60.0,
    "draw_count": 3,
    "spider_suits": 4,
    "log_level": "INFO",
}


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from config.json.

    Args:
        path: Settings file (defaults to SETTINGS_FILE)

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    path = path or SETTINGS_FILE
    if not path.exists():
        logger.debug("Settings file not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            settings = json.load(f)

        if not isinstance(settings, dict):
            logger.warning(f"Settings file {path} does not hold an object, using defaults")
            return DEFAULT_SETTINGS.copy()

        # Merge with defaults to handle missing keys
        result = DEFAULT_SETTINGS.copy()
        result.update(settings)
        logger.debug(f"Settings loaded: {result}")
        return result

    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Save settings to config.json.

    Args:
        settings: Settings dictionary to save
        path: Settings file (defaults to SETTINGS_FILE)
    """
    path = path or SETTINGS_FILE
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")


def run_config_from_settings(settings: Dict[str, Any],
                             base: Optional[RunConfig] = None) -> RunConfig:
    """
    Build a RunConfig from settings values.

    Args:
        settings: Settings dictionary
        base: Config whose other fields are kept (e.g. a variant default)

    Returns:
        RunConfig with depth bound, prune fraction and stop flag applied
    """
    return (base or RunConfig()).with_overrides(
        depth_bound=settings.get("depth_bound"),
        prune_fraction=settings.get("prune_fraction"),
        stop_at_first_solution=settings.get("stop_at_first_solution"),
    )
