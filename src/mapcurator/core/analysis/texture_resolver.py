from __future__ import annotations

"""
Texture Resolution.

Computes the texture that should actually be applied to a node: an explicit
assignment on a model wins, otherwise the nearest override found by walking
parent links upwards from the node itself.
"""

from typing import Optional

from mapcurator.domain.tree_models import DirectoryNode, FileNode, ModelNode

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def effective_texture(node: FileNode) -> Optional[str]:
    """
    Resolve the effective texture path of a node.

    Args:
        node: Model or directory to resolve.

    Returns:
        Optional[str]: Texture path, or None if nothing applies.
    """
    if isinstance(node, ModelNode) and node.texture_path:
        return node.texture_path

    source = inherited_texture_source(node)
    return source.custom_texture_path if source is not None else None


def inherited_texture_source(node: FileNode) -> Optional[FileNode]:
    """
    Find the node whose override supplies the texture for `node`.

    The walk checks `node` first, then each ancestor. Explicit model
    assignments are not considered here.

    Returns:
        Optional[FileNode]: The nearest node carrying an override, or None.
    """
    current: Optional[FileNode] = node
    while current is not None:
        if current.custom_texture_path:
            return current
        current = _parent_of(current)
    return None

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _parent_of(node: FileNode) -> Optional[DirectoryNode]:
    if isinstance(node, (DirectoryNode, ModelNode)):
        return node.parent
    raise TypeError(f"Unknown file node type: {type(node).__name__}")
