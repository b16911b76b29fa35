from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A scriptable in-memory backend gateway.
3. Sample catalog forests shared by the engine and projection tests.
"""

import os
import sys
import threading
from typing import Any, Dict, List, Optional, Tuple

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from mapcurator.domain.tree_models import (  # noqa: E402
    DirectoryNode,
    Forest,
    MapAddResult,
    ModelNode,
    link_parents,
)


# -----------------------------------------------------------------------------
# Fake Gateway
# -----------------------------------------------------------------------------
class FakeGateway:
    """
    In-memory backend double.

    Records every call in `calls`. Listings and add results are served from
    the public attributes; `fail_on` names operations that raise instead.
    Setting `block_catalog` makes list_catalog wait on `release_catalog`,
    signalling `catalog_entered` first, to hold a load in flight;
    `block_selection` does the same for list_selection.
    """

    def __init__(self) -> None:
        self.catalogs: Dict[str, Forest] = {}
        self.selections: Dict[str, Forest] = {}
        self.add_results: List[MapAddResult] = []
        self.fail_on: Dict[str, Exception] = {}
        self.calls: List[Tuple[str, Any]] = []

        self.block_catalog = False
        self.catalog_entered = threading.Event()
        self.release_catalog = threading.Event()

        self.block_selection = False
        self.selection_entered = threading.Event()
        self.release_selection = threading.Event()

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if name in self.fail_on:
            raise self.fail_on[name]

    def calls_to(self, name: str) -> List[Any]:
        return [args for call, args in self.calls if call == name]

    def list_catalog(self, directory: str) -> Forest:
        self._record("list_catalog", directory)
        if self.block_catalog:
            self.catalog_entered.set()
            self.release_catalog.wait(timeout=5)
        return self.catalogs.get(directory, [])

    def list_selection(self, map_name: str) -> Forest:
        self._record("list_selection", map_name)
        if self.block_selection:
            self.selection_entered.set()
            self.release_selection.wait(timeout=5)
        return self.selections.get(map_name, [])

    def add_to_selection(self, map_name: str, source_path: str,
                         inherited_texture_path: Optional[str]) -> MapAddResult:
        self._record("add_to_selection", map_name, source_path, inherited_texture_path)
        return self.add_results.pop(0)

    def remove_from_selection(self, map_name: str, member_name: str) -> None:
        self._record("remove_from_selection", map_name, member_name)

    def set_texture_override(self, target_path: str, texture_path: str) -> None:
        self._record("set_texture_override", target_path, texture_path)

    def clear_texture_override(self, target_path: str) -> None:
        self._record("clear_texture_override", target_path)

    def file_url(self, path: str) -> str:
        return f"http://backend/api/file?path={path}"

    def map_image_url(self, map_name: str) -> str:
        return f"http://backend/api/maps/{map_name}/preview.png"


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


def build_assets_forest() -> Forest:
    """
    /assets
    ├── props            (custom texture: props.png)
    │   ├── box
    │   └── crates
    │       └── crate    (texture_path: crate.png)
    └── tree
    """
    return link_parents([
        DirectoryNode(
            path="/assets/props",
            name="props",
            custom_texture_path="/assets/props.png",
            children=[
                ModelNode(path="/assets/props/box", name="box"),
                DirectoryNode(
                    path="/assets/props/crates",
                    name="crates",
                    children=[
                        ModelNode(
                            path="/assets/props/crates/crate",
                            name="crate",
                            texture_path="/assets/props/crates/crate.png",
                        ),
                    ],
                ),
            ],
        ),
        ModelNode(path="/assets/tree", name="tree"),
    ])


@pytest.fixture
def assets_forest() -> Forest:
    return build_assets_forest()
