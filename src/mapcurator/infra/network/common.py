from __future__ import annotations

from typing import Dict, Union
from urllib.parse import quote, urlencode

USER_AGENT = "MapCurator-Client/1.0.0"
DEFAULT_TIMEOUT = 10

ParamsObject = Dict[str, Union[str, int]]


def format_url_params(url: str, params: ParamsObject) -> str:
    """Substitute ':name' placeholders of an endpoint with URL-encoded values."""
    for key, value in params.items():
        url = url.replace(":" + key, quote(str(value), safe=""))
    return url


def format_url_query(url: str, query: ParamsObject) -> str:
    """Append an encoded query string to an endpoint."""
    if not query:
        return url
    return url + "?" + urlencode({k: str(v) for k, v in query.items()})
