from __future__ import annotations

"""
Forest Wire Codec.

Decodes backend JSON listings into linked domain forests and encodes forests
back into the same shape (used for `--json` output and test fixtures).
"""

from typing import Any, Dict, List, Optional

from mapcurator.domain.errors import GatewayFailure
from mapcurator.domain.tree_models import (
    DirectoryNode,
    FileNode,
    Forest,
    MapAddResult,
    ModelNode,
    link_parents,
)

TYPE_DIRECTORY = "directory"
TYPE_MODEL = "model"

# -----------------------------------------------------------------------------
# DECODING
# -----------------------------------------------------------------------------

def forest_from_json(payload: Any) -> Forest:
    """
    Build a parent-linked forest from a decoded JSON listing.

    Args:
        payload: A list of node objects.

    Returns:
        Forest: Ordered root nodes with parent links attached.

    Raises:
        GatewayFailure: If the payload does not describe a forest.
    """
    if not isinstance(payload, list):
        raise GatewayFailure("Malformed forest payload: root is not a list.")
    return link_parents([_node_from_json(item) for item in payload])


def add_result_from_json(payload: Any) -> MapAddResult:
    """Decode the `{modelPath, texturePath}` answer of an add-to-map call."""
    if not isinstance(payload, dict) or not isinstance(payload.get("modelPath"), str):
        raise GatewayFailure("Malformed add-to-map response: 'modelPath' missing.")
    return MapAddResult(
        result_path=payload["modelPath"],
        result_texture_path=_optional_str(payload.get("texturePath")),
    )


def _node_from_json(item: Any) -> FileNode:
    if not isinstance(item, dict):
        raise GatewayFailure("Malformed forest payload: node is not an object.")

    try:
        node_type = item["type"]
        path = str(item["path"])
        name = str(item["name"])
    except KeyError as e:
        raise GatewayFailure(f"Malformed forest payload: missing field {e}.") from e

    if node_type == TYPE_DIRECTORY:
        children = item.get("children") or []
        if not isinstance(children, list):
            raise GatewayFailure(f"Malformed forest payload: children of '{path}'.")
        return DirectoryNode(
            path=path,
            name=name,
            children=[_node_from_json(child) for child in children],
            custom_texture_path=_optional_str(item.get("customTexturePath")),
        )

    if node_type == TYPE_MODEL:
        return ModelNode(
            path=path,
            name=name,
            texture_path=_optional_str(item.get("texturePath")),
            custom_texture_path=_optional_str(item.get("customTexturePath")),
        )

    raise GatewayFailure(f"Unknown file node type: {node_type!r}")


def _optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)

# -----------------------------------------------------------------------------
# ENCODING
# -----------------------------------------------------------------------------

def forest_to_json(forest: Forest) -> List[Dict[str, Any]]:
    """Encode a forest into the backend listing shape."""
    return [_node_to_json(node) for node in forest]


def _node_to_json(node: FileNode) -> Dict[str, Any]:
    if isinstance(node, DirectoryNode):
        return {
            "type": TYPE_DIRECTORY,
            "path": node.path,
            "name": node.name,
            "customTexturePath": node.custom_texture_path,
            "children": forest_to_json(node.children),
        }
    return {
        "type": TYPE_MODEL,
        "path": node.path,
        "name": node.name,
        "texturePath": node.texture_path,
        "customTexturePath": node.custom_texture_path,
    }
