from __future__ import annotations

"""
App State Domain Management.

Handles persistent storage of operator preferences (selected map, last model
directory, backend URL) as JSON under the user data directory. Supports
default fallback when the file is missing or corrupted.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from mapcurator.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_API_BASE_URL,
    STATE_API_BASE_URL,
    STATE_MAP_NAME,
    STATE_MODEL_DIRECTORY,
)
from mapcurator.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE = os.path.join(get_user_data_dir(), "config.json")


def get_default_app_state() -> Dict[str, Any]:
    """
    Generate the complete default application state structure.

    Returns:
        Dict[str, Any]: The full JSON structure for config.json.
    """
    return {
        "version": CURRENT_CONFIG_VERSION,
        "app_state": {
            STATE_MAP_NAME: None,
            STATE_MODEL_DIRECTORY: None,
            STATE_API_BASE_URL: DEFAULT_API_BASE_URL,
        },
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_app_state() -> Dict[str, Any]:
    """
    Load application state from disk.

    Returns:
        Dict[str, Any]: The loaded state merged over defaults, or the defaults
        on any failure.
    """
    default_state = get_default_app_state()

    if not os.path.exists(CONFIG_FILE):
        logger.debug("Config file not found. Returning defaults.")
        return default_state

    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            logger.warning("Corrupted config file. Resetting to defaults.")
            return default_state

        state = default_state
        saved = data.get("app_state")
        if isinstance(saved, dict):
            state["app_state"].update(
                {k: v for k, v in saved.items() if k in state["app_state"]}
            )

        state["version"] = CURRENT_CONFIG_VERSION
        return state

    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return default_state


def save_app_state(state: Dict[str, Any]) -> None:
    """
    Persist application state to disk.

    Args:
        state: The state dictionary to save.
    """
    try:
        os.makedirs(os.path.dirname(CONFIG_FILE), exist_ok=True)
        state["version"] = CURRENT_CONFIG_VERSION
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {CONFIG_FILE}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")

# -----------------------------------------------------------------------------
# Facade API
# -----------------------------------------------------------------------------
def update_app_state(key: str, value: Optional[Any]) -> None:
    """
    Write a single preference and persist the whole state.

    Args:
        key: One of the STATE_* keys.
        value: New value; None clears the preference.
    """
    state = load_app_state()
    state["app_state"][key] = value
    save_app_state(state)
