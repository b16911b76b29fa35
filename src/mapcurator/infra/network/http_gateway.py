from __future__ import annotations

"""
HTTP Backend Gateway.

Implements the backend gateway contract on top of the asset server's JSON
API using `requests`. Every transport, status or payload problem surfaces
as a GatewayFailure; no call is retried here.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

import requests

from mapcurator.domain.errors import GatewayFailure, NoDirectorySelected
from mapcurator.domain.tree_models import Forest, MapAddResult
from mapcurator.infra.network.codec import add_result_from_json, forest_from_json
from mapcurator.infra.network.common import (
    DEFAULT_TIMEOUT,
    USER_AGENT,
    ParamsObject,
    format_url_params,
    format_url_query,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# ENDPOINTS
# -----------------------------------------------------------------------------

MAPS = "/api/maps"
MAP_MODELS = "/api/maps/:map/models"
MAP_MODEL = "/api/maps/:map/models/:model"
MAP_IMAGE = "/api/maps/:map/preview.png"
MODELS = "/api/models"
MODELS_TEXTURES = "/api/models/textures"
FILE = "/api/file"
DIRECTORIES = "/api/directories"

# -----------------------------------------------------------------------------
# CLIENT
# -----------------------------------------------------------------------------

class HttpBackendGateway:
    """
    Asset backend client.

    Args:
        base_url: Server root, e.g. "http://localhost:8080".
        model_directory: Callable returning the active model directory; the
            add-to-map and texture endpoints are scoped to it.
        timeout: Per-request timeout in seconds.
        session: Optional pre-configured requests session.
    """

    def __init__(
            self,
            base_url: str,
            model_directory: Callable[[], Optional[str]],
            timeout: float = DEFAULT_TIMEOUT,
            session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._model_directory = model_directory
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})

    # --- Catalog and selection listings ---

    def list_catalog(self, directory: str) -> Forest:
        logger.info("Gateway: Loading model index...")
        return forest_from_json(self._fetch("GET", MODELS, query={"modelDirectory": directory}))

    def list_selection(self, map_name: str) -> Forest:
        logger.info("Gateway: Loading map models...")
        return forest_from_json(self._fetch("GET", MAP_MODELS, params={"map": map_name}))

    def list_maps(self) -> List[str]:
        data = self._fetch("GET", MAPS)
        if not isinstance(data, list):
            raise GatewayFailure("Malformed map list: root is not a list.")
        return [str(m) for m in data]

    def list_directory(self, path: str) -> Dict[str, bool]:
        data = self._fetch("GET", DIRECTORIES, query={"path": path})
        if not isinstance(data, dict):
            raise GatewayFailure("Malformed directory listing: root is not an object.")
        return {str(name): bool(is_dir) for name, is_dir in data.items()}

    # --- Map membership ---

    def add_to_selection(
            self,
            map_name: str,
            source_path: str,
            inherited_texture_path: Optional[str],
    ) -> MapAddResult:
        logger.info(f"Gateway: Adding model '{source_path}' to '{map_name}'...")
        data = self._fetch(
            "POST",
            MAP_MODELS,
            params={"map": map_name},
            query={"modelDirectory": self._require_directory()},
            body={"modelPath": source_path, "texturePath": inherited_texture_path},
        )
        return add_result_from_json(data)

    def remove_from_selection(self, map_name: str, member_name: str) -> None:
        logger.info(f"Gateway: Removing model '{member_name}' from '{map_name}'...")
        self._fetch("DELETE", MAP_MODEL, params={"map": map_name, "model": member_name})

    # --- Texture overrides ---

    def set_texture_override(self, target_path: str, texture_path: str) -> None:
        self._fetch(
            "POST",
            MODELS_TEXTURES,
            query={
                "modelDirectory": self._require_directory(),
                "texturePath": texture_path,
                "modelPath": target_path,
            },
        )

    def clear_texture_override(self, target_path: str) -> None:
        self._fetch(
            "DELETE",
            MODELS_TEXTURES,
            query={"modelDirectory": self._require_directory(), "modelPath": target_path},
        )

    # --- URL builders for external renderers ---

    def file_url(self, path: str) -> str:
        return self.base_url + format_url_query(FILE, {"path": path})

    def map_image_url(self, map_name: str) -> str:
        return self.base_url + format_url_params(MAP_IMAGE, {"map": map_name})

    # -------------------------------------------------------------------------
    # TRANSPORT
    # -------------------------------------------------------------------------

    def _fetch(
            self,
            method: str,
            endpoint: str,
            params: Optional[ParamsObject] = None,
            query: Optional[ParamsObject] = None,
            body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Execute a request against the backend and decode the JSON answer.

        Returns:
            Any: Decoded JSON body, or None for non-JSON responses.

        Raises:
            GatewayFailure: On timeout, connection error, non-2xx status or
                an undecodable JSON body.
        """
        url = endpoint
        if params:
            url = format_url_params(url, params)
        url = self.base_url + format_url_query(url, query or {})

        logger.debug(f"Gateway: {method} {url}")
        try:
            response = self.session.request(method, url, json=body, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise GatewayFailure(f"Request timed out after {self.timeout}s: {method} {endpoint}", e) from e
        except requests.exceptions.RequestException as e:
            raise GatewayFailure(f"Communication error: {e}", e) from e

        if not response.ok:
            message = (response.text or "").strip() or response.reason or "Unknown error"
            logger.warning(f"Gateway: {method} {endpoint} failed with HTTP {response.status_code}.")
            raise GatewayFailure(message, status_code=response.status_code)

        content_type = response.headers.get("Content-Type", "")
        if not content_type.startswith("application/json"):
            return None
        try:
            return response.json()
        except ValueError as e:
            raise GatewayFailure(f"Malformed JSON response from {endpoint}", e) from e

    def _require_directory(self) -> str:
        directory = self._model_directory()
        if not directory:
            raise NoDirectorySelected()
        return directory
