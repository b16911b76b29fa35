from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Resolves the per-user application data directory that holds the persisted
app state and the diagnostic log, and normalizes operator-supplied paths.
"""

import os
from typing import Optional

from mapcurator.domain.constants import APP_NAME

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = APP_NAME
UNIX_APP_DIR_NAME = ".mapcurator"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/MapCurator
    - Linux/Mac: ~/.mapcurator

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        home = os.path.expanduser("~")
        path = os.path.join(home, UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_directory(path: Optional[str]) -> Optional[str]:
    """
    Strip and expand a model directory supplied by the operator.

    The directory is resolved on the backend host, so only user and
    environment shortcuts are expanded; relative paths are kept as given.

    Args:
        path: Raw directory string.

    Returns:
        Optional[str]: Cleaned directory, or None if blank.
    """
    p = (path or "").strip()
    if not p:
        return None
    return os.path.expandvars(os.path.expanduser(p))
