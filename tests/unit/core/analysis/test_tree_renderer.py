from __future__ import annotations

"""
Unit tests for the ASCII Tree Renderer.
"""

from mapcurator.core.analysis.tree_projection import project_forest, set_expansion
from mapcurator.core.analysis.tree_renderer import render_display_tree


def test_collapsed_tree_hides_children(assets_forest):
    lines = []
    render_display_tree(project_forest(assets_forest).nodes, lines)

    assert lines == [
        "├── props/ [+]",
        "└── tree",
    ]


def test_expanded_tree_uses_connectors(assets_forest):
    nodes = project_forest(assets_forest).nodes
    set_expansion(nodes, True)
    lines = []
    render_display_tree(nodes, lines)

    assert lines == [
        "├── props/",
        "│   ├── box [T]",
        "│   └── crates/",
        "│       └── crate [T]",
        "└── tree",
    ]


def test_secondary_label_is_appended(assets_forest):
    nodes = project_forest(assets_forest, affordance=lambda dn: "add").nodes
    lines = []
    render_display_tree(nodes, lines)

    assert lines[1] == "└── tree  (add)"
