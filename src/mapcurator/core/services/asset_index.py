from __future__ import annotations

"""
Asset Index Engine.

Owns the catalog forest, the selection forest of the active map and the
unified path index over both. All mutations are confirm-then-mutate: local
structures change only after the backend gateway call succeeded, so the
index is never observably inconsistent with the forests.
"""

import logging
import threading
from contextlib import contextmanager
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from mapcurator.core.analysis.texture_resolver import effective_texture
from mapcurator.domain.errors import (
    AssetIndexError,
    GatewayFailure,
    NoDirectorySelected,
    NoMapSelected,
    NotFound,
    WrongNodeType,
)
from mapcurator.domain.tree_models import (
    DirectoryNode,
    FileNode,
    Forest,
    ModelNode,
    iter_forest,
)
from mapcurator.infra.network.gateway import BackendGateway

logger = logging.getLogger(__name__)


class LoadStatus(Enum):
    """Outcome of a single-flight load."""
    LOADED = "loaded"
    SKIPPED = "skipped"

# -----------------------------------------------------------------------------
# ENGINE
# -----------------------------------------------------------------------------

class AssetIndexEngine:
    """
    Session-scoped owner of the asset forests and their lookup index.

    Construct one per session and pass it to every consumer. Catalog and
    selection loads are single-flight; add, remove and texture operations
    expect the caller to issue one interactive action at a time.

    Args:
        gateway: Backend gateway used for every remote call.
        map_name: Initially selected map, if any.
    """

    def __init__(self, gateway: BackendGateway, map_name: Optional[str] = None) -> None:
        self._gateway = gateway
        self._map_name = map_name or None
        self._catalog: Forest = []
        self._selection: Forest = []
        self._index: Dict[str, FileNode] = {}
        self._catalog_directory: Optional[str] = None

        self._flag_lock = threading.Lock()
        self._loading_catalog = False
        self._loading_selection = False

    # -------------------------------------------------------------------------
    # STATE ACCESS
    # -------------------------------------------------------------------------

    @property
    def current_map(self) -> str:
        """The selected map name. Raises NoMapSelected if there is none."""
        if not self._map_name:
            raise NoMapSelected()
        return self._map_name

    @property
    def map_name(self) -> Optional[str]:
        return self._map_name

    @property
    def catalog_directory(self) -> Optional[str]:
        """Directory of the last successful catalog load."""
        return self._catalog_directory

    @property
    def catalog(self) -> Tuple[FileNode, ...]:
        return tuple(self._catalog)

    @property
    def selection(self) -> Tuple[FileNode, ...]:
        return tuple(self._selection)

    @property
    def index_size(self) -> int:
        return len(self._index)

    def indexed_paths(self) -> List[str]:
        return list(self._index)

    def select_map(self, map_name: Optional[str]) -> None:
        """
        Switch the active map.

        The selection forest belongs to the previous map and is dropped; call
        load_selection() to fetch the new map's members.
        """
        if (map_name or None) == self._map_name:
            return
        logger.info(f"Index: Active map changed to '{map_name or '-'}'.")
        self._map_name = map_name or None
        self._selection = []
        self._rebuild_index()

    # -------------------------------------------------------------------------
    # LOADING (SINGLE-FLIGHT)
    # -------------------------------------------------------------------------

    def load_catalog(self, directory: Optional[str]) -> LoadStatus:
        """
        Replace the catalog forest with the backend listing of `directory`.

        Returns SKIPPED without contacting the backend if another catalog load
        is still in flight. On failure the previous catalog and index stay
        untouched.

        Raises:
            NoDirectorySelected: If no directory is given.
            GatewayFailure: If the backend call fails.
        """
        if not directory or not directory.strip():
            raise NoDirectorySelected()

        with self._single_flight("_loading_catalog") as acquired:
            if not acquired:
                logger.debug("Index: Catalog load already in flight. Skipping.")
                return LoadStatus.SKIPPED

            forest = self._call("list_catalog", self._gateway.list_catalog, directory)
            index = self._build_index(forest, self._selection)
            self._catalog, self._index = forest, index
            self._catalog_directory = directory

        logger.info(f"Index: Catalog loaded from '{directory}' ({len(index)} indexed nodes).")
        return LoadStatus.LOADED

    def load_selection(self) -> LoadStatus:
        """
        Replace the selection forest with the members of the current map.

        Same single-flight and atomicity contract as load_catalog().

        Raises:
            NoMapSelected: If no map is selected.
            GatewayFailure: If the backend call fails.
        """
        map_name = self.current_map

        with self._single_flight("_loading_selection") as acquired:
            if not acquired:
                logger.debug("Index: Selection load already in flight. Skipping.")
                return LoadStatus.SKIPPED

            forest = self._call("list_selection", self._gateway.list_selection, map_name)
            index = self._build_index(self._catalog, forest)
            self._selection, self._index = forest, index

        logger.info(f"Index: Map '{map_name}' loaded ({len(forest)} top-level members).")
        return LoadStatus.LOADED

    # -------------------------------------------------------------------------
    # LOOKUP
    # -------------------------------------------------------------------------

    def lookup_node(self, path: str) -> Optional[FileNode]:
        return self._index.get(path)

    def lookup_model(self, path: str) -> Optional[ModelNode]:
        """
        Return the model at `path`, or None if the path is unknown.

        Raises:
            WrongNodeType: If the path resolves to a directory.
        """
        node = self._index.get(path)
        if node is None:
            return None
        if not isinstance(node, ModelNode):
            raise WrongNodeType(path, "model")
        return node

    def require_node(self, path: str) -> FileNode:
        node = self.lookup_node(path)
        if node is None:
            raise NotFound(path)
        return node

    def require_model(self, path: str) -> ModelNode:
        model = self.lookup_model(path)
        if model is None:
            raise NotFound(path)
        return model

    # -------------------------------------------------------------------------
    # MAP MEMBERSHIP
    # -------------------------------------------------------------------------

    def add_to_selection(self, path: str) -> ModelNode:
        """
        Copy a model into the current map.

        The source's effective texture is sent along so the backend can copy
        it too. If the resulting path is already a member, the existing node
        is updated instead of inserting a second one, which makes retries
        idempotent.

        Args:
            path: Index path of the source model.

        Returns:
            ModelNode: The (new or merged) map member.
        """
        source = self.require_model(path)
        map_name = self.current_map
        inherited = effective_texture(source)

        result = self._call(
            "add_to_selection",
            self._gateway.add_to_selection,
            map_name,
            source.path,
            inherited,
        )

        existing = self._find_in_selection(result.result_path)
        if existing is None and result.result_path in self._index:
            raise GatewayFailure(
                f"Backend returned member path '{result.result_path}' "
                "that collides with a catalog node."
            )
        if existing is not None:
            if not isinstance(existing, ModelNode):
                raise WrongNodeType(result.result_path, "model")
            existing.texture_path = result.result_texture_path
            logger.info(f"Index: '{result.result_path}' already in '{map_name}'. Merged.")
            return existing

        member = ModelNode(
            path=result.result_path,
            name=source.name,
            texture_path=result.result_texture_path,
        )
        self._selection.append(member)
        self._rebuild_index()
        logger.info(f"Index: Added '{source.path}' to '{map_name}' as '{member.path}'.")
        return member

    def remove_from_selection(self, path: str) -> None:
        """
        Remove a member from the current map once the backend confirms.

        Raises:
            NotFound: If `path` is not a member of the selection forest.
            WrongNodeType: If the member at `path` is a directory.
            NoMapSelected: If no map is selected.
            GatewayFailure: If the backend call fails (nothing is removed).
        """
        node = self._find_in_selection(path)
        if node is None:
            raise NotFound(path)
        if not isinstance(node, ModelNode):
            raise WrongNodeType(path, "model")
        map_name = self.current_map

        self._call("remove_from_selection", self._gateway.remove_from_selection, map_name, node.name)

        self._detach_from_selection(node)
        self._rebuild_index()
        logger.info(f"Index: Removed '{path}' from '{map_name}'.")

    # -------------------------------------------------------------------------
    # TEXTURE OVERRIDES
    # -------------------------------------------------------------------------

    def set_texture_override(self, path: str, texture_path: str) -> FileNode:
        """
        Set a texture override on one node (model or directory).

        Descendants pick it up through texture resolution; nothing is copied
        onto them.
        """
        if not texture_path:
            raise ValueError("texture_path must not be empty; use clear_texture_override().")
        node = self.require_node(path)
        self._call("set_texture_override", self._gateway.set_texture_override, node.path, texture_path)
        node.custom_texture_path = texture_path
        logger.info(f"Index: Texture override on '{path}' set to '{texture_path}'.")
        return node

    def clear_texture_override(self, path: str) -> FileNode:
        node = self.require_node(path)
        self._call("clear_texture_override", self._gateway.clear_texture_override, node.path)
        node.custom_texture_path = None
        logger.info(f"Index: Texture override on '{path}' cleared.")
        return node

    # -------------------------------------------------------------------------
    # INTERNAL HELPERS
    # -------------------------------------------------------------------------

    @contextmanager
    def _single_flight(self, flag: str) -> Iterator[bool]:
        """Test-and-set an in-flight flag; yields False if it was already set."""
        with self._flag_lock:
            acquired = not getattr(self, flag)
            if acquired:
                setattr(self, flag, True)

        if not acquired:
            yield False
            return

        try:
            yield True
        finally:
            with self._flag_lock:
                setattr(self, flag, False)

    @staticmethod
    def _call(operation: str, fn: Callable[..., Any], *args: Any) -> Any:
        """Invoke a gateway call, wrapping foreign exceptions in GatewayFailure."""
        try:
            return fn(*args)
        except AssetIndexError:
            raise
        except Exception as e:
            logger.error(f"Index: Backend call '{operation}' failed: {e}")
            raise GatewayFailure(f"Backend call '{operation}' failed: {e}", e) from e

    @staticmethod
    def _build_index(catalog: Forest, selection: Forest) -> Dict[str, FileNode]:
        """
        Index every node of both forests by path.

        Raises:
            GatewayFailure: If a path occurs twice; the caller discards the
                incoming forest so the current state stays intact.
        """
        index: Dict[str, FileNode] = {}
        for node in iter_forest(list(catalog) + list(selection)):
            if node.path in index:
                logger.error(f"Index: Duplicate path '{node.path}' in backend listing.")
                raise GatewayFailure(f"Backend listing contains duplicate path '{node.path}'.")
            index[node.path] = node
        return index

    def _rebuild_index(self) -> None:
        self._index = self._build_index(self._catalog, self._selection)

    def _selection_sibling_lists(self) -> Iterator[List[FileNode]]:
        yield self._selection
        for node in iter_forest(self._selection):
            if isinstance(node, DirectoryNode):
                yield node.children

    def _find_in_selection(self, path: str) -> Optional[FileNode]:
        return next((node for node in iter_forest(self._selection) if node.path == path), None)

    def _detach_from_selection(self, target: FileNode) -> None:
        for siblings in self._selection_sibling_lists():
            for i, node in enumerate(siblings):
                if node is target:
                    del siblings[i]
                    return
