from __future__ import annotations

"""
Backend Gateway Contract.

Abstract surface of the authoritative asset backend. The index engine only
depends on this protocol; the HTTP client in this package is one
implementation, test doubles are another.
"""

from typing import Dict, List, Optional, Protocol

from mapcurator.domain.tree_models import Forest, MapAddResult


class BackendGateway(Protocol):
    """Calls the index engine issues against the backend."""

    def list_catalog(self, directory: str) -> Forest: ...

    def list_selection(self, map_name: str) -> Forest: ...

    def add_to_selection(
            self,
            map_name: str,
            source_path: str,
            inherited_texture_path: Optional[str],
    ) -> MapAddResult: ...

    def remove_from_selection(self, map_name: str, member_name: str) -> None: ...

    def set_texture_override(self, target_path: str, texture_path: str) -> None: ...

    def clear_texture_override(self, target_path: str) -> None: ...


class BrowsingGateway(BackendGateway, Protocol):
    """Extended surface used by the operator interfaces (map list, previews)."""

    def list_maps(self) -> List[str]: ...

    def list_directory(self, path: str) -> Dict[str, bool]: ...

    def file_url(self, path: str) -> str: ...

    def map_image_url(self, map_name: str) -> str: ...
