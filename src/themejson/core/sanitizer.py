"""
Removal of insecure values from a canonical theme.json tree.

The output tree is rebuilt from scratch: only values that were rendered
and vetted by the :class:`~themejson.core.safety.SafetyPolicy` are copied
over, so nothing unchecked can survive.

- Styles: each styles node's declarations are computed exactly as the
  compiler does; for each declaration that passes the CSS filter, the
  original value (not the rendered string) is copied to the same path.
- Settings: for each preset category, entries are kept when their name,
  slug and every declaration they would generate are safe.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from .ir.metadata import PRESETS_METADATA, declaration_path
from .safety import DEFAULT_SAFETY_POLICY, SafetyPolicy
from .stylesheet import Declaration, compute_style_properties, to_css_value
from .tree import Tree, TreePath, get_path, is_empty, is_tree, set_path

logger = logging.getLogger(__name__)


def _non_empty_children(tree: Any, path: TreePath) -> list[str]:
    children = get_path(tree, path)
    if not is_tree(children):
        return []
    return [name for name, node in children.items() if not is_empty(node)]


def get_paths_with_styles(tree: Mapping[str, Any]) -> list[TreePath]:
    """Paths of every non-empty styles node, elements included.

    Example::

        [("styles",),
         ("styles", "elements", "link"),
         ("styles", "blocks", "core/group"),
         ("styles", "blocks", "core/group", "elements", "link")]
    """
    if is_empty(tree.get("styles")) or not is_tree(tree.get("styles")):
        return []

    paths: list[TreePath] = [("styles",)]
    for element in _non_empty_children(tree, ("styles", "elements")):
        paths.append(("styles", "elements", element))

    for block in _non_empty_children(tree, ("styles", "blocks")):
        paths.append(("styles", "blocks", block))
        for element in _non_empty_children(tree, ("styles", "blocks", block, "elements")):
            paths.append(("styles", "blocks", block, "elements", element))
    return paths


def get_paths_with_settings(tree: Mapping[str, Any]) -> list[TreePath]:
    """Paths of every non-empty settings node."""
    if is_empty(tree.get("settings")) or not is_tree(tree.get("settings")):
        return []

    paths: list[TreePath] = [("settings",)]
    for element in _non_empty_children(tree, ("settings", "elements")):
        paths.append(("settings", "elements", element))
    for block in _non_empty_children(tree, ("settings", "blocks")):
        paths.append(("settings", "blocks", block))
    return paths


def _is_safe_preset(entry: Any, declarations: list[Declaration], policy: SafetyPolicy) -> bool:
    name = entry.get("name")
    slug = entry.get("slug")
    if not isinstance(name, str) or not isinstance(slug, str):
        return False
    if not policy.is_safe_name(name) or not policy.is_safe_slug(slug):
        return False
    return all(policy.is_safe_declaration(str(declaration)) for declaration in declarations)


def remove_insecure_settings(node: Any, policy: SafetyPolicy = DEFAULT_SAFETY_POLICY) -> Tree:
    """Return a new settings node holding only the safe preset entries."""
    output: Tree = {}

    for preset in PRESETS_METADATA:
        entries = get_path(node, preset.path)
        if not isinstance(entries, list):
            continue

        kept: list[Any] = []
        for entry in entries:
            if not is_tree(entry):
                continue
            value = to_css_value(entry.get(preset.value_key))
            if value is None:
                continue
            if preset.classes:
                declarations = [Declaration(c.property_name, value) for c in preset.classes]
            else:
                declarations = [Declaration(preset.css_var_infix, value)]
            if _is_safe_preset(entry, declarations, policy):
                kept.append(copy.deepcopy(entry))

        dropped = len(entries) - len(kept)
        if dropped:
            logger.debug("Dropped %d insecure %s presets", dropped, ".".join(preset.path))
        if kept:
            set_path(output, preset.path, kept)

    return output


def remove_insecure_styles(node: Any, policy: SafetyPolicy = DEFAULT_SAFETY_POLICY) -> Tree:
    """Return a new styles node holding only the values of safe declarations."""
    output: Tree = {}

    for declaration in compute_style_properties(node):
        if not policy.is_safe_declaration(str(declaration)):
            logger.debug("Dropped insecure declaration %s", declaration.name)
            continue
        path = declaration_path(declaration.name)
        if path is None:
            continue
        set_path(output, path, copy.deepcopy(get_path(node, path, {})))

    return output


def remove_insecure_properties(
    tree: Mapping[str, Any],
    policy: SafetyPolicy = DEFAULT_SAFETY_POLICY,
) -> Tree:
    """Return a copy of ``tree`` whose settings and styles are rebuilt safely.

    ``settings``/``styles`` present in the input are replaced by their
    rebuilt counterparts, or removed when nothing survived. Other top-level
    keys are carried over unchanged.
    """
    rebuilt: Tree = {}

    for path in get_paths_with_styles(tree):
        set_path(rebuilt, path, remove_insecure_styles(get_path(tree, path, {}), policy))

    for path in get_paths_with_settings(tree):
        set_path(rebuilt, path, remove_insecure_settings(get_path(tree, path, {}), policy))

    output: Tree = copy.deepcopy(dict(tree))
    for section in ("styles", "settings"):
        if section not in tree:
            continue
        if not is_empty(rebuilt.get(section)):
            output[section] = rebuilt[section]
        else:
            del output[section]
    return output
