from __future__ import annotations

"""
Asset Tree Data Models.

Provides the tagged node variants that make up a catalog or map selection
forest, together with the traversal and parent-linking helpers used when a
forest is ingested from the backend.
"""

import weakref
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional, Union

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(eq=False)
class DirectoryNode:
    """
    Represents a folder in an asset forest.

    Attributes:
        path: Unique key of the folder, stable across reloads.
        name: Display name.
        children: Ordered child nodes, in backend insertion order.
        custom_texture_path: User-set texture override inherited by descendants.
    """
    path: str
    name: str
    children: List["FileNode"] = field(default_factory=list)
    custom_texture_path: Optional[str] = None
    _parent_ref: Optional[Callable[[], Optional["DirectoryNode"]]] = field(
        default=None, repr=False
    )

    @property
    def parent(self) -> Optional[DirectoryNode]:
        return self._parent_ref() if self._parent_ref is not None else None


@dataclass(eq=False)
class ModelNode:
    """
    Represents a 3D model leaf in an asset forest.

    Attributes:
        path: Unique key of the model.
        name: Display name (also the member name inside a map).
        texture_path: Explicit, already-resolved texture (set on map members).
        custom_texture_path: User-set texture override on this model.
    """
    path: str
    name: str
    texture_path: Optional[str] = None
    custom_texture_path: Optional[str] = None
    _parent_ref: Optional[Callable[[], Optional[DirectoryNode]]] = field(
        default=None, repr=False
    )

    @property
    def parent(self) -> Optional[DirectoryNode]:
        return self._parent_ref() if self._parent_ref is not None else None


FileNode = Union[DirectoryNode, ModelNode]
Forest = List[FileNode]


@dataclass(frozen=True)
class MapAddResult:
    """
    Canonical paths returned by the backend after copying a model into a map.

    Attributes:
        result_path: Map-relative path of the new member.
        result_texture_path: Map-relative texture path, if one was copied.
    """
    result_path: str
    result_texture_path: Optional[str] = None

# -----------------------------------------------------------------------------
# FOREST HELPERS
# -----------------------------------------------------------------------------

def iter_forest(forest: Forest) -> Iterator[FileNode]:
    """Yield every node of the forest depth-first, in sibling order."""
    stack: List[FileNode] = list(reversed(forest))
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, DirectoryNode):
            stack.extend(reversed(node.children))


def link_parents(forest: Forest) -> Forest:
    """
    Attach non-owning parent references to every child in the forest.

    Roots keep no parent. Must be called once, when the forest is built;
    links are never retargeted afterwards.

    Args:
        forest: Freshly constructed forest.

    Returns:
        Forest: The same forest, for chaining.
    """
    for node in iter_forest(forest):
        if isinstance(node, DirectoryNode):
            ref = weakref.ref(node)
            for child in node.children:
                child._parent_ref = ref
    return forest
