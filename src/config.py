"""Centralized configuration for the scene bundler.

This module provides:
- PROJECT_ROOT and SRC_DIR paths
- Environment variable access with get_env()
- Automatic .env loading
- Typed accessors for relay credentials, scene selection and tuning knobs

Usage:
    from config import PROJECT_ROOT, get_env, get_wall_batch_size

    foundry_url = get_env("FOUNDRY_URL", default="http://localhost:30000")
    batch_size = get_wall_batch_size()
"""

import os
from enum import Enum
from pathlib import Path
from typing import Optional, Dict
from dotenv import load_dotenv

from exceptions import ConfigurationError

# Calculate paths once at import time
SRC_DIR = Path(__file__).parent.resolve()
PROJECT_ROOT = SRC_DIR.parent.resolve()

# Load .env from project root
_env_path = PROJECT_ROOT / ".env"
if _env_path.exists():
    load_dotenv(_env_path)

WALL_BATCH_SIZE = 100
MAX_CANVAS_DIMENSION = 16384
DEFAULT_LOG_LEVEL = 2  # warn


class BatchFailurePolicy(str, Enum):
    """What a wall import does when one creation batch is rejected by the host."""

    ABORT = "abort"
    CONTINUE = "continue"


def get_env(key: str, default: Optional[str] = None) -> str:
    """Get environment variable value.

    Args:
        key: Environment variable name
        default: Default value if not set. If None and key not found, raises KeyError.

    Returns:
        Environment variable value or default

    Raises:
        KeyError: If key not found and no default provided
    """
    value = os.environ.get(key)
    if value is not None:
        return value
    if default is not None:
        return default
    raise KeyError(f"Environment variable '{key}' not set and no default provided")


def _get_int(key: str, default: int) -> int:
    raw = get_env(key, default=str(default))
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{key} must be an integer, got '{raw}'") from e
    if value <= 0:
        raise ConfigurationError(f"{key} must be positive, got {value}")
    return value


def get_foundry_url() -> str:
    """Get FoundryVTT URL (base for resolving relative asset paths)."""
    return get_env("FOUNDRY_URL", default="http://localhost:30000")


def get_relay_settings() -> Dict[str, str]:
    """
    Get REST relay credentials.

    Returns:
        Dict with relay_url, foundry_url, api_key and client_id

    Raises:
        ConfigurationError: If any relay variable is missing
    """
    keys = {
        "relay_url": "FOUNDRY_RELAY_URL",
        "api_key": "FOUNDRY_API_KEY",
        "client_id": "FOUNDRY_CLIENT_ID",
    }
    settings = {"foundry_url": get_foundry_url()}
    for name, env_key in keys.items():
        value = os.environ.get(env_key)
        if not value:
            raise ConfigurationError(f"{env_key} not set in environment")
        settings[name] = value
    return settings


def get_current_scene_uuid() -> Optional[str]:
    """UUID of the scene wall operations target (e.g. "Scene.abc123")."""
    return os.environ.get("FOUNDRY_SCENE_UUID") or None


def get_viewed_scene_uuid() -> Optional[str]:
    """UUID of the scene currently on screen, used for background and tile exports."""
    return os.environ.get("FOUNDRY_VIEWED_SCENE_UUID") or None


def get_data_path() -> Optional[Path]:
    """Local FoundryVTT Data directory, if tile images can be read from disk."""
    value = os.environ.get("FOUNDRY_DATA_PATH")
    return Path(value) if value else None


def get_log_level() -> str:
    """Raw LOG_LEVEL setting (0-3 or a level name); see logging_config.parse_log_level."""
    return get_env("LOG_LEVEL", default=str(DEFAULT_LOG_LEVEL))


def get_wall_batch_size() -> int:
    """Number of walls sent per creation call."""
    return _get_int("WALL_BATCH_SIZE", WALL_BATCH_SIZE)


def get_max_canvas_dimension() -> int:
    """Largest width or height (in pixels) allowed for a tile composite."""
    return _get_int("MAX_CANVAS_DIMENSION", MAX_CANVAS_DIMENSION)


def get_wall_failure_policy() -> BatchFailurePolicy:
    """
    Get the batch failure policy for wall imports.

    Raises:
        ConfigurationError: If WALL_IMPORT_FAILURE_POLICY is not a known policy
    """
    raw = get_env("WALL_IMPORT_FAILURE_POLICY", default=BatchFailurePolicy.ABORT.value)
    try:
        return BatchFailurePolicy(raw.strip().lower())
    except ValueError as e:
        choices = ", ".join(p.value for p in BatchFailurePolicy)
        raise ConfigurationError(
            f"WALL_IMPORT_FAILURE_POLICY must be one of: {choices} (got '{raw}')"
        ) from e
