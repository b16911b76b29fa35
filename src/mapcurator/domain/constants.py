from __future__ import annotations

"""
Domain Constants.

Application identity, configuration schema version and backend defaults.
"""

APP_NAME = "MapCurator"
CURRENT_CONFIG_VERSION = "1.0.0"

DEFAULT_API_BASE_URL = "http://localhost:8080"

# App state keys persisted between sessions
STATE_MAP_NAME = "map_name"
STATE_MODEL_DIRECTORY = "model_directory"
STATE_API_BASE_URL = "api_base_url"
