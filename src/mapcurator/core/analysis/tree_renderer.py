from __future__ import annotations

"""
Tree Renderer.

Converts a display forest into visual ASCII lines for terminal output.
Collapsed folders hide their children, mirroring the interactive tree.
"""

from typing import Iterable, List

from mapcurator.core.analysis.tree_projection import (
    ICON_MODEL_TEXTURED,
    DisplayNode,
)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_display_tree(
        nodes: Iterable[DisplayNode],
        lines: List[str],
        prefix: str = "",
) -> None:
    """
    Recursively transform a display forest into a list of strings.

    Uses standard ASCII connectors (├──, └──). Directories are suffixed with
    a slash and a [+] marker while collapsed; textured models carry [T].
    A string secondary element is appended after the label.

    Args:
        nodes: Display nodes of the current level.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
    """
    entries = list(nodes)
    total = len(entries)

    for i, dn in enumerate(entries):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "

        if dn.is_directory:
            marker = "" if dn.is_expanded or not dn.child_nodes else " [+]"
            lines.append(f"{prefix}{connector}{dn.label}/{marker}{_secondary(dn)}")
            if dn.is_expanded:
                new_prefix = prefix + ("    " if is_last else "│   ")
                render_display_tree(dn.child_nodes, lines, prefix=new_prefix)
            continue

        marker = " [T]" if dn.icon == ICON_MODEL_TEXTURED else ""
        lines.append(f"{prefix}{connector}{dn.label}{marker}{_secondary(dn)}")


def _secondary(dn: DisplayNode) -> str:
    return f"  ({dn.secondary})" if isinstance(dn.secondary, str) and dn.secondary else ""
