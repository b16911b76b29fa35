from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema (global options plus one sub-command per
operator action) and translates parsed namespaces into app state overrides.
"""

import argparse
from typing import Any, Dict

from mapcurator.domain.constants import (
    STATE_API_BASE_URL,
    STATE_MAP_NAME,
    STATE_MODEL_DIRECTORY,
)
from mapcurator.infra.fs import normalize_directory

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the MapCurator CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="mapcurator",
        description="Browse a 3D asset catalog and curate models into a map.",
    )

    # --- Session preferences (persisted when given) ---
    p.add_argument("--api", dest="api_base_url", default=None, help="Backend base URL.")
    p.add_argument("-m", "--map", dest="map_name", default=None, help="Map to operate on.")
    p.add_argument(
        "-d", "--directory",
        dest="model_directory",
        default=None,
        help="Model directory to index on the backend host.",
    )

    # --- Diagnostics and output ---
    p.add_argument("--debug", action="store_true", help="Elevate logging verbosity to DEBUG.")
    p.add_argument("--no-log-file", action="store_true", help="Do not write the diagnostic log file.")
    p.add_argument("--json", dest="json_output", action="store_true", help="Emit JSON instead of text.")

    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    sp = sub.add_parser("maps", help="List the maps known to the backend.")
    sp.add_argument("--images", action="store_true", help="Include each map's preview image URL.")

    for name, text in (("catalog", "Show the model catalog tree."),
                       ("selection", "Show the models of the selected map.")):
        sp = sub.add_parser(name, help=text)
        sp.add_argument("--expand-all", action="store_true", help="Expand every folder.")
        sp.add_argument("--textures", action="store_true", help="Show effective textures.")

    sp = sub.add_parser("add", help="Add a catalog model to the selected map.")
    sp.add_argument("path")

    sp = sub.add_parser("remove", help="Remove a model from the selected map.")
    sp.add_argument("path")

    tex = sub.add_parser("texture", help="Manage texture overrides.")
    tex_sub = tex.add_subparsers(dest="texture_action", metavar="ACTION")
    tex_sub.required = True
    sp = tex_sub.add_parser("set", help="Set the override of a model or folder.")
    sp.add_argument("path")
    sp.add_argument("texture")
    sp = tex_sub.add_parser("clear", help="Clear the override of a model or folder.")
    sp.add_argument("path")

    sp = sub.add_parser("preview", help="Print the mesh and texture URLs of a model.")
    sp.add_argument("path")

    sp = sub.add_parser("dirs", help="List a directory on the backend host.")
    sp.add_argument("path")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Extract app state preferences explicitly given on the command line.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Only the preferences that were supplied.
    """
    overrides: Dict[str, Any] = {}

    if args.api_base_url:
        overrides[STATE_API_BASE_URL] = args.api_base_url.strip()
    if args.map_name:
        overrides[STATE_MAP_NAME] = args.map_name.strip()

    directory = normalize_directory(args.model_directory)
    if directory:
        overrides[STATE_MODEL_DIRECTORY] = directory

    return overrides
