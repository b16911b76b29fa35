from __future__ import annotations

"""
Asset Index Error Taxonomy.

Every failure raised by the index engine or the backend gateway derives from
AssetIndexError so interface layers can render a distinguishable message per
case without inspecting transport details.
"""

from typing import Optional


class AssetIndexError(Exception):
    """Base class for all asset index failures."""


class NoMapSelected(AssetIndexError):
    def __init__(self) -> None:
        super().__init__("Must select a map first!")


class NoDirectorySelected(AssetIndexError):
    def __init__(self) -> None:
        super().__init__("Must select a model directory first!")


class NotFound(AssetIndexError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Cannot find node: {path}")
        self.path = path


class WrongNodeType(AssetIndexError, TypeError):
    def __init__(self, path: str, expected: str) -> None:
        super().__init__(f"Node '{path}' is not a {expected}")
        self.path = path
        self.expected = expected


class GatewayFailure(AssetIndexError):
    """
    Wraps a transport, status or payload error raised by the backend gateway.

    Attributes:
        cause: Original exception, if any.
        status_code: HTTP status of the failed response, if any.
    """

    def __init__(
            self,
            message: str,
            cause: Optional[BaseException] = None,
            status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.cause = cause
        self.status_code = status_code
