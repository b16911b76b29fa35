from __future__ import annotations

"""
Network Communication Infrastructure.

Facade over the backend gateway contract, its HTTP implementation and the
forest wire codec.
"""

from mapcurator.infra.network.codec import (
    add_result_from_json,
    forest_from_json,
    forest_to_json,
)
from mapcurator.infra.network.gateway import BackendGateway, BrowsingGateway
from mapcurator.infra.network.http_gateway import HttpBackendGateway

__all__ = [
    "BackendGateway",
    "BrowsingGateway",
    "HttpBackendGateway",
    "forest_from_json",
    "forest_to_json",
    "add_result_from_json",
]
