"""
Path-addressed helpers for theme.json trees.

A theme.json document is held in memory as plain nested dicts whose leaves
are scalars or lists (preset lists, spacing units, template entries). Every
engine component reads and writes it through these helpers, addressing
nodes by a path: a sequence of string keys such as
``("settings", "color", "palette")``.

All helpers are total. A segment that is missing, or a node that is not a
mapping where one is expected, is treated as absent rather than raising.
"""

from __future__ import annotations

import copy
import re
from collections.abc import Iterable, Mapping
from typing import Any

# A tree node maps str keys to nested nodes, scalars or lists.
Tree = dict[str, Any]
TreePath = tuple[str, ...]

_CAMEL_BOUNDARY = re.compile(r"(?<!^)[A-Z]")


def is_tree(value: Any) -> bool:
    """Whether ``value`` is a mapping node (as opposed to a leaf)."""
    return isinstance(value, Mapping)


def is_empty(value: Any) -> bool:
    """Whether a value counts as empty when pruning or rendering.

    ``None``, the empty string, ``False`` and empty containers are empty.
    ``0`` and ``"0"`` are real CSS values and are kept.
    """
    if value is None or value is False:
        return True
    if isinstance(value, (str, Mapping, list, tuple)):
        return len(value) == 0
    return False


def get_path(tree: Any, path: Iterable[str], default: Any = None) -> Any:
    """Return the value at ``path`` or ``default`` if any segment is absent.

    Absent and "present but equal to default" are indistinguishable, so
    callers should pick a default that cannot occur in the data.
    """
    node = tree
    for key in path:
        if not is_tree(node) or key not in node:
            return default
        node = node[key]
    return node


def set_path(tree: Tree, path: Iterable[str], value: Any) -> Tree:
    """Set ``value`` at ``path``, creating intermediate mappings as needed.

    A non-mapping value found on the way is replaced by a fresh mapping.
    Returns ``tree`` for chaining.
    """
    keys = list(path)
    if not keys:
        return tree

    node = tree
    for key in keys[:-1]:
        child = node.get(key)
        if not isinstance(child, dict):
            child = {}
            node[key] = child
        node = child
    node[keys[-1]] = value
    return tree


def delete_path(tree: Tree, path: Iterable[str]) -> None:
    """Remove the final segment of ``path`` if it exists."""
    keys = list(path)
    if not keys:
        return
    parent = get_path(tree, keys[:-1])
    if isinstance(parent, dict):
        parent.pop(keys[-1], None)


def deep_merge_override(base: Any, incoming: Any) -> Any:
    """Recursively merge ``incoming`` onto ``base`` and return the result.

    Mappings merge key by key. Any other value, lists included, in
    ``incoming`` replaces the one in ``base`` wholesale. Neither argument is
    mutated.
    """
    if not (is_tree(base) and is_tree(incoming)):
        return copy.deepcopy(incoming)

    merged: Tree = copy.deepcopy(dict(base))
    for key, value in incoming.items():
        if key in merged and is_tree(merged[key]) and is_tree(value):
            merged[key] = deep_merge_override(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def deep_merge_with_overrides(
    base: Tree,
    incoming: Tree,
    override_paths: Iterable[TreePath],
) -> Tree:
    """Deep-merge ``incoming`` onto ``base`` then copy ``override_paths`` verbatim.

    The explicit copy guarantees that the value found at each override path
    in ``incoming`` ends up in the result untouched, whatever shape ``base``
    had at that path.
    """
    merged = deep_merge_override(base, incoming)
    if not is_tree(merged):
        merged = {}
    for path in override_paths:
        value = get_path(incoming, path)
        if value is not None:
            set_path(merged, path, copy.deepcopy(value))
    return merged


def intersect_schema(tree: Any, schema: Mapping[str, Any]) -> Tree:
    """Keep only the keys of ``tree`` that ``schema`` declares.

    Any key present in ``schema`` is kept, whatever its marker value. Only
    when the schema value is itself a mapping does the filter recurse, and
    a subtree that ends up empty (or was not a mapping to begin with) is
    dropped. A non-mapping ``tree`` yields an empty result.
    """
    if not is_tree(tree):
        return {}

    result: Tree = {}
    for key, value in tree.items():
        if key not in schema:
            continue
        sub_schema = schema[key]
        if is_tree(sub_schema):
            value = intersect_schema(value, sub_schema)
            if not value:
                continue
        result[key] = copy.deepcopy(value)
    return result


def to_kebab_case(name: str) -> str:
    """Convert a camelCase key to kebab-case and replace ``/`` with ``-``."""
    return _CAMEL_BOUNDARY.sub(lambda m: "-" + m.group(0), name).lower().replace("/", "-")


def flatten_tree(tree: Any, prefix: str = "", token: str = "--") -> dict[str, Any]:
    """Flatten nested keys into a single level.

    Keys are converted with :func:`to_kebab_case` and joined with ``token``.
    For example, with ``prefix="--wp--"``::

        {"some/property": "value", "nestedProperty": {"sub-property": "value"}}

    becomes::

        {"--wp--some-property": "value", "--wp--nested-property--sub-property": "value"}

    Lists are flattened with their indexes as keys.
    """
    if isinstance(tree, list):
        items: Iterable[tuple[Any, Any]] = enumerate(tree)
    elif is_tree(tree):
        items = tree.items()
    else:
        return {}

    result: dict[str, Any] = {}
    for key, value in items:
        new_key = prefix + to_kebab_case(str(key))
        if is_tree(value) or isinstance(value, list):
            result.update(flatten_tree(value, new_key + token, token))
        else:
            result[new_key] = value
    return result
