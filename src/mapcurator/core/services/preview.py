from __future__ import annotations

"""
Preview Target Resolution.

Maps a model of the index to the URLs an external 3D renderer loads: the
mesh itself and, when one applies, its effective texture.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from mapcurator.core.analysis.texture_resolver import effective_texture
from mapcurator.core.services.asset_index import AssetIndexEngine


@dataclass(frozen=True)
class PreviewTarget:
    """
    Attributes:
        name: Model display name.
        mesh_url: URL of the mesh file.
        texture_url: URL of the effective texture, or None.
    """
    name: str
    mesh_url: str
    texture_url: Optional[str] = None


def resolve_preview(
        engine: AssetIndexEngine,
        file_url: Callable[[str], str],
        path: str,
) -> PreviewTarget:
    """
    Resolve the renderer inputs for the model at `path`.

    Args:
        engine: Index to look the model up in.
        file_url: Builder turning a backend file path into a fetchable URL.
        path: Index path of the model.

    Raises:
        NotFound: If the path is unknown.
        WrongNodeType: If the path is a directory.
    """
    model = engine.require_model(path)
    texture = effective_texture(model)
    return PreviewTarget(
        name=model.name,
        mesh_url=file_url(model.path),
        texture_url=file_url(texture) if texture else None,
    )
