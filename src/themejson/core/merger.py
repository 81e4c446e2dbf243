"""
Merging of two canonical theme.json trees.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from .ir.metadata import OVERRIDE_SETTINGS_PATHS
from .tree import Tree, TreePath, deep_merge_override, get_path, is_empty, is_tree, set_path


def get_settings_node_paths(tree: Mapping[str, Any]) -> list[TreePath]:
    """Root settings plus every non-empty ``settings.blocks.<name>`` node."""
    if is_empty(tree.get("settings")):
        return []

    paths: list[TreePath] = [("settings",)]
    blocks = get_path(tree, ("settings", "blocks"))
    if is_tree(blocks):
        paths.extend(
            ("settings", "blocks", name) for name, node in blocks.items() if not is_empty(node)
        )
    return paths


def merge_trees(base: Mapping[str, Any], incoming: Mapping[str, Any]) -> Tree:
    """Return ``incoming`` deep-merged onto ``base``.

    Lists always replace lists. In addition, the preset-like settings
    leaves (palette, gradients, units, font sizes, font families, custom)
    are copied verbatim from ``incoming`` at the root settings node and at
    every block settings node of the merged result, so a smaller incoming
    list never leaves trailing entries of the base one behind.
    """
    merged = deep_merge_override(base, incoming)
    if not is_tree(merged):
        return {}

    for node_path in get_settings_node_paths(merged):
        for leaf in OVERRIDE_SETTINGS_PATHS:
            path = (*node_path, *leaf)
            value = get_path(incoming, path)
            if value is not None:
                set_path(merged, path, copy.deepcopy(value))
    return merged
