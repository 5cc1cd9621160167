"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config < env vars
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any

from .models import MangoConfig

logger = logging.getLogger(__name__)

PROJECT_CONFIG_NAME = ".mango.json"

# Global cache to avoid reloading config multiple times per session
_config_cache: MangoConfig | None = None


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """
    Get path to user configuration file.

    Returns:
        Path to ~/.config/busymango/config.json (or XDG equivalent)
    """
    return get_xdg_config_home() / "busymango" / "config.json"


def get_project_config_path(cwd: Path | None = None) -> Path:
    """Get path to .mango.json in the given (or current) directory."""
    if cwd is None:
        cwd = Path.cwd()
    return cwd / PROJECT_CONFIG_NAME


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Values in `override` take precedence; nested dicts are merged, not replaced.

    Example:
        >>> deep_merge({"a": 1, "b": {"x": 10}}, {"b": {"y": 20}})
        {'a': 1, 'b': {'x': 10, 'y': 20}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.
    """
    if not path.exists():
        return None

    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            return None
    except (json.JSONDecodeError, OSError) as e:
        # Config system should be resilient
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None


def _ensure_section(config: dict[str, Any], name: str) -> dict[str, Any]:
    section = config.get(name)
    if not isinstance(section, dict):
        section = {}
        config[name] = section
    return section


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        MANGO_ROOT - overrides documents.root
        MANGO_STATE_FILE - overrides state.path
        MANGO_LOG_ENABLED - overrides logging.enabled
    """
    result = copy.deepcopy(config_dict)

    if root := os.environ.get("MANGO_ROOT"):
        _ensure_section(result, "documents")["root"] = root

    if state_file := os.environ.get("MANGO_STATE_FILE"):
        _ensure_section(result, "state")["path"] = state_file

    if log_enabled := os.environ.get("MANGO_LOG_ENABLED"):
        _ensure_section(result, "logging")["enabled"] = log_enabled.lower() not in (
            "false",
            "0",
            "no",
            "",
        )

    return result


def get_default_config() -> dict[str, Any]:
    """Hardcoded default configuration."""
    return {
        "documents": {"root": None, "extension": "md", "kanban_key": "kanban-plugin"},
        "state": {"path": None},
        "logging": {"enabled": True, "dir": None},
    }


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> MangoConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (MANGO_*)
        2. Project config (.mango.json)
        3. User config (~/.config/busymango/config.json)
        4. Hardcoded defaults

    Raises:
        ValidationError: If the merged config fails Pydantic validation
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged = get_default_config()

    if user_config := load_json_file(get_user_config_path()):
        merged = deep_merge(merged, user_config)

    if project_config := load_json_file(get_project_config_path(project_dir)):
        merged = deep_merge(merged, project_config)

    merged = apply_env_overrides(merged)

    config = MangoConfig(**merged)
    _config_cache = config
    return config


def clear_cache() -> None:
    """
    Clear the cached configuration.

    Useful for testing or when config files change during execution.
    """
    global _config_cache
    _config_cache = None
