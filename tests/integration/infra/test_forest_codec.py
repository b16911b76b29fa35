from __future__ import annotations

"""
Integration tests for the Forest Wire Codec.

Validates decoding of backend listings into parent-linked forests and the
rejection of malformed payloads.
"""

import pytest

from mapcurator.domain.errors import GatewayFailure
from mapcurator.domain.tree_models import DirectoryNode, ModelNode
from mapcurator.infra.network.codec import (
    add_result_from_json,
    forest_from_json,
    forest_to_json,
)

LISTING = [
    {
        "type": "directory",
        "path": "/assets/props",
        "name": "props",
        "customTexturePath": "/assets/props.png",
        "children": [
            {"type": "model", "path": "/assets/props/box", "name": "box", "texturePath": None},
        ],
    },
    {"type": "model", "path": "/assets/tree", "name": "tree", "customTexturePath": ""},
]


def test_decode_listing_links_parents():
    forest = forest_from_json(LISTING)

    props, tree = forest
    assert isinstance(props, DirectoryNode)
    assert isinstance(tree, ModelNode)
    assert props.children[0].parent is props
    assert props.custom_texture_path == "/assets/props.png"
    assert tree.custom_texture_path is None


def test_encode_matches_listing_shape():
    encoded = forest_to_json(forest_from_json(LISTING))

    assert encoded[0]["children"][0]["path"] == "/assets/props/box"
    assert encoded[1] == {
        "type": "model",
        "path": "/assets/tree",
        "name": "tree",
        "texturePath": None,
        "customTexturePath": None,
    }


@pytest.mark.parametrize("payload", [
    {"not": "a list"},
    [{"type": "symlink", "path": "/x", "name": "x"}],
    [{"type": "model", "name": "no path"}],
    [{"type": "directory", "path": "/d", "name": "d", "children": "oops"}],
])
def test_malformed_listing_is_gateway_failure(payload):
    with pytest.raises(GatewayFailure):
        forest_from_json(payload)


def test_add_result_decoding():
    result = add_result_from_json({"modelPath": "arena/box", "texturePath": "arena/box.png"})
    assert result.result_path == "arena/box"
    assert result.result_texture_path == "arena/box.png"

    with pytest.raises(GatewayFailure):
        add_result_from_json({"texturePath": "x"})
