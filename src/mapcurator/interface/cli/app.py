from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates one operator action per invocation: logging bootstrap,
preference resolution (persisted app state plus command-line overrides),
engine construction, the requested index operation and result rendering.
"""

import argparse
import json
import sys
from typing import Any, Callable, Dict, List, Optional

from mapcurator.core.analysis.texture_resolver import effective_texture
from mapcurator.core.analysis.tree_projection import (
    DisplayNode,
    project_forest,
    set_expansion,
)
from mapcurator.core.analysis.tree_renderer import render_display_tree
from mapcurator.core.services.asset_index import AssetIndexEngine
from mapcurator.core.services.preview import resolve_preview
from mapcurator.domain.config import load_app_state, update_app_state
from mapcurator.domain.constants import (
    DEFAULT_API_BASE_URL,
    STATE_API_BASE_URL,
    STATE_MAP_NAME,
    STATE_MODEL_DIRECTORY,
)
from mapcurator.domain.errors import (
    AssetIndexError,
    NoDirectorySelected,
    NoMapSelected,
)
from mapcurator.domain.tree_models import Forest, ModelNode
from mapcurator.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    get_logger,
)
from mapcurator.infra.network import (
    BrowsingGateway,
    HttpBackendGateway,
    forest_to_json,
)
from mapcurator.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 missing precondition,
        130 interrupted).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    log_level = "DEBUG" if args.debug else "INFO"
    log_file = None if args.no_log_file else get_default_log_path()
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=log_file))

    prefs = _resolve_preferences(cli_args.args_to_overrides(args))
    logger.debug(f"CLI: Preferences resolved: {prefs}")

    engine: Optional[AssetIndexEngine] = None

    def model_directory() -> Optional[str]:
        if engine is not None and engine.catalog_directory:
            return engine.catalog_directory
        return prefs.get(STATE_MODEL_DIRECTORY)

    gateway: BrowsingGateway = HttpBackendGateway(
        prefs.get(STATE_API_BASE_URL) or DEFAULT_API_BASE_URL,
        model_directory=model_directory,
    )
    engine = AssetIndexEngine(gateway, map_name=prefs.get(STATE_MAP_NAME))

    handler = _COMMANDS[args.command]
    try:
        return handler(args, engine, gateway, prefs)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130
    except (NoMapSelected, NoDirectorySelected) as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except AssetIndexError as e:
        logger.error(f"CLI: '{args.command}' failed: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

# -----------------------------------------------------------------------------
# PREFERENCES
# -----------------------------------------------------------------------------

def _resolve_preferences(overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Persist command-line overrides and return the resulting preferences."""
    for key, value in overrides.items():
        update_app_state(key, value)
    return dict(load_app_state()["app_state"])


def _load_available(engine: AssetIndexEngine, prefs: Dict[str, Any]) -> None:
    """Load whichever forests the current preferences allow."""
    directory = prefs.get(STATE_MODEL_DIRECTORY)
    if directory:
        engine.load_catalog(directory)
    if engine.map_name:
        engine.load_selection()

# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def _cmd_maps(args: argparse.Namespace, engine: AssetIndexEngine,
              gateway: BrowsingGateway, prefs: Dict[str, Any]) -> int:
    maps = gateway.list_maps()
    if args.json_output:
        payload: Any = maps
        if args.images:
            payload = [{"name": name, "imageUrl": gateway.map_image_url(name)} for name in maps]
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return 0
    for name in maps:
        marker = "*" if name == engine.map_name else " "
        line = f"{marker} {name}"
        if args.images:
            line += f"  ({gateway.map_image_url(name)})"
        print(line)
    return 0


def _cmd_catalog(args: argparse.Namespace, engine: AssetIndexEngine,
                 gateway: BrowsingGateway, prefs: Dict[str, Any]) -> int:
    engine.load_catalog(prefs.get(STATE_MODEL_DIRECTORY))
    forest = list(engine.catalog)
    _print_forest(args, forest, "local models")
    return 0


def _cmd_selection(args: argparse.Namespace, engine: AssetIndexEngine,
                   gateway: BrowsingGateway, prefs: Dict[str, Any]) -> int:
    engine.load_selection()
    forest = list(engine.selection)
    _print_forest(args, forest, f"models of map '{engine.current_map}'")
    return 0


def _cmd_add(args: argparse.Namespace, engine: AssetIndexEngine,
             gateway: BrowsingGateway, prefs: Dict[str, Any]) -> int:
    engine.load_catalog(prefs.get(STATE_MODEL_DIRECTORY))
    engine.load_selection()
    member = engine.add_to_selection(args.path)
    print(f"Added '{args.path}' to '{engine.current_map}' as '{member.path}'.")
    return 0


def _cmd_remove(args: argparse.Namespace, engine: AssetIndexEngine,
                gateway: BrowsingGateway, prefs: Dict[str, Any]) -> int:
    engine.load_selection()
    engine.remove_from_selection(args.path)
    print(f"Removed '{args.path}' from '{engine.current_map}'.")
    return 0


def _cmd_texture(args: argparse.Namespace, engine: AssetIndexEngine,
                 gateway: BrowsingGateway, prefs: Dict[str, Any]) -> int:
    _load_available(engine, prefs)
    if args.texture_action == "set":
        engine.set_texture_override(args.path, args.texture)
        print(f"Texture of '{args.path}' set to '{args.texture}'.")
    else:
        engine.clear_texture_override(args.path)
        print(f"Texture of '{args.path}' cleared.")
    return 0


def _cmd_preview(args: argparse.Namespace, engine: AssetIndexEngine,
                 gateway: BrowsingGateway, prefs: Dict[str, Any]) -> int:
    _load_available(engine, prefs)
    target = resolve_preview(engine, gateway.file_url, args.path)
    if args.json_output:
        print(json.dumps(
            {"name": target.name, "meshUrl": target.mesh_url, "textureUrl": target.texture_url},
            ensure_ascii=False, indent=2,
        ))
        return 0
    print(f"Model:   {target.name}")
    print(f"Mesh:    {target.mesh_url}")
    print(f"Texture: {target.texture_url or '(none)'}")
    return 0


def _cmd_dirs(args: argparse.Namespace, engine: AssetIndexEngine,
              gateway: BrowsingGateway, prefs: Dict[str, Any]) -> int:
    listing = gateway.list_directory(args.path)
    if args.json_output:
        print(json.dumps(listing, ensure_ascii=False, indent=2))
        return 0
    for name, is_dir in listing.items():
        print(f"{name}/" if is_dir else name)
    return 0


_COMMANDS: Dict[str, Callable[..., int]] = {
    "maps": _cmd_maps,
    "catalog": _cmd_catalog,
    "selection": _cmd_selection,
    "add": _cmd_add,
    "remove": _cmd_remove,
    "texture": _cmd_texture,
    "preview": _cmd_preview,
    "dirs": _cmd_dirs,
}

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _print_forest(args: argparse.Namespace, forest: Forest, what: str) -> None:
    if args.json_output:
        print(json.dumps(forest_to_json(forest), ensure_ascii=False, indent=2))
        return

    affordance = _texture_label if args.textures else None
    projection = project_forest(forest, affordance=affordance)
    if args.expand_all:
        set_expansion(projection.nodes, True)

    lines: List[str] = []
    render_display_tree(projection.nodes, lines)
    for line in lines:
        print(line)
    print(f"Loaded {projection.file_count} {what} from {projection.dir_count} directories")


def _texture_label(dn: DisplayNode) -> Optional[str]:
    if isinstance(dn.node, ModelNode):
        return effective_texture(dn.node)
    return dn.node.custom_texture_path


if __name__ == "__main__":
    sys.exit(main())
