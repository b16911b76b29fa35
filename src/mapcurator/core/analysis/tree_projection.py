from __future__ import annotations

"""
Tree Projection.

Turns a domain forest into a display-ready tree. Every pass builds fresh
DisplayNodes; the expansion state of folders is carried over from the
previous display tree by matching path-derived display identifiers, so
inserting or removing siblings never moves an open folder's state onto a
different folder.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

from mapcurator.core.analysis.texture_resolver import effective_texture
from mapcurator.domain.tree_models import DirectoryNode, FileNode, Forest, ModelNode

logger = logging.getLogger(__name__)

ICON_FOLDER_OPEN = "folder-open"
ICON_FOLDER_CLOSED = "folder-close"
ICON_MODEL = "cube"
ICON_MODEL_TEXTURED = "cube-textured"

# -----------------------------------------------------------------------------
# DISPLAY MODELS
# -----------------------------------------------------------------------------

@dataclass(eq=False)
class DisplayNode:
    """
    UI-facing wrapper around exactly one FileNode.

    Attributes:
        display_id: Stable identifier derived from the wrapped node's path.
        label: Text shown for the node.
        is_expanded: Expansion flag (directories only; always False for models).
        icon: Icon selector (see ICON_* constants).
        node: The wrapped domain node, used for click handling.
        child_nodes: Ordered projected children.
        secondary: Caller-defined secondary action element.
    """
    display_id: str
    label: str
    is_expanded: bool
    icon: str
    node: FileNode
    child_nodes: List["DisplayNode"] = field(default_factory=list)
    secondary: Any = None

    @property
    def is_directory(self) -> bool:
        return isinstance(self.node, DirectoryNode)


@dataclass
class ProjectionResult:
    """
    Output of one projection pass.

    Attributes:
        nodes: Display forest, in domain order.
        file_count: Number of models projected.
        dir_count: Number of directories projected.
    """
    nodes: List[DisplayNode]
    file_count: int = 0
    dir_count: int = 0


Affordance = Callable[[DisplayNode], Any]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def project_forest(
        forest: Forest,
        previous: Optional[Iterable[DisplayNode]] = None,
        affordance: Optional[Affordance] = None,
) -> ProjectionResult:
    """
    Project a domain forest into a new display forest.

    Args:
        forest: Catalog or selection forest to project.
        previous: Display forest from the last projection of the same origin.
        affordance: Optional callback building a secondary element per node.

    Returns:
        ProjectionResult: Fresh display nodes and projection counters.
    """
    previous_by_id = _index_display_nodes(previous or [])
    result = ProjectionResult(nodes=[])
    seen_ids: Dict[str, int] = {}

    result.nodes = _project_level(forest, previous_by_id, affordance, seen_ids, result)
    logger.debug(
        f"Projection: {result.file_count} models, {result.dir_count} directories "
        f"({len(previous_by_id)} previous display nodes)."
    )
    return result


def toggle_expansion(display_node: DisplayNode) -> bool:
    """
    Flip a directory between collapsed and expanded.

    Models are left untouched.

    Returns:
        bool: The resulting expansion flag.
    """
    if not display_node.is_directory:
        return False
    display_node.is_expanded = not display_node.is_expanded
    display_node.icon = _folder_icon(display_node.is_expanded)
    return display_node.is_expanded


def set_expansion(nodes: Iterable[DisplayNode], expanded: bool) -> None:
    """Recursively force every directory to the given expansion state."""
    for dn in nodes:
        if dn.is_directory and dn.is_expanded != expanded:
            toggle_expansion(dn)
        set_expansion(dn.child_nodes, expanded)


def find_display_node(nodes: Iterable[DisplayNode], display_id: str) -> Optional[DisplayNode]:
    """Depth-first search for the display node with the given identifier."""
    for dn in nodes:
        if dn.display_id == display_id:
            return dn
        found = find_display_node(dn.child_nodes, display_id)
        if found is not None:
            return found
    return None

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _project_level(
        siblings: Forest,
        previous_by_id: Dict[str, DisplayNode],
        affordance: Optional[Affordance],
        seen_ids: Dict[str, int],
        result: ProjectionResult,
) -> List[DisplayNode]:
    nodes: List[DisplayNode] = []

    for info in siblings:
        display_id = _make_display_id(info.path, seen_ids)

        if isinstance(info, DirectoryNode):
            prev = previous_by_id.get(display_id)
            expanded = bool(prev is not None and prev.is_directory and prev.is_expanded)
            dn = DisplayNode(
                display_id=display_id,
                label=info.name,
                is_expanded=expanded,
                icon=_folder_icon(expanded),
                node=info,
            )
            dn.child_nodes = _project_level(
                info.children, previous_by_id, affordance, seen_ids, result
            )
            result.dir_count += 1

        elif isinstance(info, ModelNode):
            has_texture = effective_texture(info) is not None
            dn = DisplayNode(
                display_id=display_id,
                label=info.name,
                is_expanded=False,
                icon=ICON_MODEL_TEXTURED if has_texture else ICON_MODEL,
                node=info,
            )
            result.file_count += 1

        else:
            raise TypeError(f"Unknown file node type: {type(info).__name__}")

        if affordance is not None:
            dn.secondary = affordance(dn)
        nodes.append(dn)

    return nodes


def _make_display_id(path: str, seen_ids: Dict[str, int]) -> str:
    """Derive an identifier from the path; repeated paths get an ordinal suffix."""
    count = seen_ids.get(path, 0)
    seen_ids[path] = count + 1
    return path if count == 0 else f"{path}#{count}"


def _index_display_nodes(nodes: Iterable[DisplayNode]) -> Dict[str, DisplayNode]:
    out: Dict[str, DisplayNode] = {}
    stack = list(nodes)
    while stack:
        dn = stack.pop()
        out[dn.display_id] = dn
        stack.extend(dn.child_nodes)
    return out


def _folder_icon(expanded: bool) -> str:
    return ICON_FOLDER_OPEN if expanded else ICON_FOLDER_CLOSED
