"""
Schema sanitization and migration of raw theme.json documents.

Raw input is dispatched once on its ``version``:

- absent, ``None`` or ``0``: sanitized against the V0 vocabulary, then upgraded to
  the V1 shape;
- ``1``: sanitized against the V1 vocabulary;
- anything else: content discarded, only ``{"version": 1}`` is kept.

Every function here is total. Unknown keys, unregistered block names and
non-mapping nodes are dropped silently.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from .blocks import BlockMetadata
from .ir.metadata import OVERRIDE_SETTINGS_PATHS
from .ir.schema import (
    ALL_BLOCKS_NAME,
    BLOCK_STYLES_SCHEMA_V1,
    CURRENT_VERSION,
    ROOT_BLOCK_NAME,
    SCHEMA_V0,
    SCHEMA_V1,
    SETTINGS_SCHEMA,
    STYLES_SCHEMA,
)
from .tree import (
    Tree,
    deep_merge_override,
    deep_merge_with_overrides,
    delete_path,
    get_path,
    intersect_schema,
    is_tree,
    set_path,
)

logger = logging.getLogger(__name__)


class SchemaVersion(Enum):
    """Schema version of a raw document, resolved once at construction."""

    V0 = 0
    V1 = 1
    UNSUPPORTED = -1


def detect_version(raw: Any) -> SchemaVersion:
    """Classify a raw document by its ``version`` key; a null version counts as absent.

    Only the integers 0 and 1 are recognised; ``True``, ``1.0`` or ``"1"``
    are unsupported.
    """
    if not is_tree(raw) or raw.get("version") is None:
        return SchemaVersion.V0

    version = raw["version"]
    if type(version) is not int:
        return SchemaVersion.UNSUPPORTED
    if version == 0:
        return SchemaVersion.V0
    if version == 1:
        return SchemaVersion.V1
    return SchemaVersion.UNSUPPORTED


# =============================================================================
# Sanitization
# =============================================================================


def _sanitize_block_nodes(
    nodes: Any,
    block_metadata: BlockMetadata,
    schema: Mapping[str, Any],
) -> Tree:
    """Keep registered block names whose node survives schema filtering."""
    if not is_tree(nodes):
        return {}

    result: Tree = {}
    for name, node in nodes.items():
        if name not in block_metadata:
            continue
        node = intersect_schema(node, schema)
        if node:
            result[name] = node
    return result


def _sanitize_elements(elements: Any) -> Tree:
    """Filter each element node against the style vocabulary."""
    if not is_tree(elements):
        return {}

    result: Tree = {}
    for name, node in elements.items():
        node = intersect_schema(node, STYLES_SCHEMA)
        if node:
            result[name] = node
    return result


def _prune_subtrees(output: Tree) -> Tree:
    for subtree in ("settings", "styles"):
        if subtree in output and not output[subtree]:
            del output[subtree]
    return output


def sanitize_v0(raw: Any, block_metadata: BlockMetadata) -> Tree:
    """Filter a V0 document to its allow-listed vocabulary.

    V0 block nodes sit directly under ``settings``/``styles`` keyed by block
    name, including the ``root`` and ``defaults`` sentinels.
    """
    if not is_tree(raw):
        return {}

    output: Tree = {key: copy.deepcopy(value) for key, value in raw.items() if key in SCHEMA_V0}

    for subtree in ("settings", "styles"):
        if subtree not in output:
            continue
        output[subtree] = _sanitize_block_nodes(
            output[subtree], block_metadata, SCHEMA_V0[subtree]
        )

    return _prune_subtrees(output)


def sanitize_v1(raw: Any, block_metadata: BlockMetadata) -> Tree:
    """Filter a V1 document to its allow-listed vocabulary.

    Block nodes are restricted to registered names regardless of schema;
    ``elements`` nodes are restricted to the style vocabulary.
    """
    if not is_tree(raw):
        return {}

    output: Tree = {key: copy.deepcopy(value) for key, value in raw.items() if key in SCHEMA_V1}
    output["version"] = CURRENT_VERSION

    for subtree in ("settings", "styles"):
        if subtree not in output:
            continue
        node = intersect_schema(output[subtree], SCHEMA_V1[subtree])

        if "elements" in node:
            node["elements"] = _sanitize_elements(node["elements"])

        if "blocks" in node:
            block_schema = BLOCK_STYLES_SCHEMA_V1 if subtree == "styles" else SETTINGS_SCHEMA
            blocks = _sanitize_block_nodes(node["blocks"], block_metadata, block_schema)
            for block in blocks.values():
                if "elements" in block:
                    block["elements"] = _sanitize_elements(block["elements"])
                    if not block["elements"]:
                        del block["elements"]
            node["blocks"] = {name: block for name, block in blocks.items() if block}

        output[subtree] = {key: value for key, value in node.items() if value != {}}

    return _prune_subtrees(output)


# =============================================================================
# V0 -> V1 upgrade
# =============================================================================

_CONSOLIDATED_BLOCKS = ("core/heading", "core/post-title", "core/query-title")
_HEADING_LEVELS = ("h1", "h2", "h3", "h4", "h5", "h6")

# V0 per-variant block name -> (consolidated block name, element name)
BLOCKS_TO_CONSOLIDATE: dict[str, tuple[str, str]] = {
    f"{parent}/{level}": (parent, level)
    for parent in _CONSOLIDATED_BLOCKS
    for level in _HEADING_LEVELS
}


def _relocate_link_color(node: Tree) -> None:
    """Move ``color.link`` to ``elements.link.color.text`` in place."""
    link = get_path(node, ("color", "link"))
    if link is None:
        return
    delete_path(node, ("color", "link"))
    if not node.get("color"):
        node.pop("color", None)
    set_path(node, ("elements", "link", "color", "text"), link)


def _upgrade_settings(settings: Tree) -> Tree:
    settings = copy.deepcopy(settings)

    # "defaults" becomes the top level; "root" overrides it.
    new: Tree = settings.pop(ALL_BLOCKS_NAME, {})
    if ROOT_BLOCK_NAME in settings:
        new = deep_merge_with_overrides(
            new, settings.pop(ROOT_BLOCK_NAME), OVERRIDE_SETTINGS_PATHS
        )

    if not settings:
        return new

    blocks = settings
    for old_name, (new_name, _level) in BLOCKS_TO_CONSOLIDATE.items():
        if old_name not in blocks:
            continue
        blocks[new_name] = deep_merge_with_overrides(
            blocks.get(new_name, {}), blocks.pop(old_name), OVERRIDE_SETTINGS_PATHS
        )
    new["blocks"] = blocks
    return new


def _upgrade_styles(styles: Tree) -> Tree:
    styles = copy.deepcopy(styles)

    new: Tree = styles.pop(ROOT_BLOCK_NAME, {})
    _relocate_link_color(new)

    if styles.pop(ALL_BLOCKS_NAME, None) is not None:
        logger.debug("Dropping styles for '%s': it only addresses presets", ALL_BLOCKS_NAME)

    if not styles:
        return new

    blocks = styles
    for name, node in blocks.items():
        # Variants become elements themselves and keep their link color inline.
        if name not in BLOCKS_TO_CONSOLIDATE:
            _relocate_link_color(node)

    for old_name, (new_name, element) in BLOCKS_TO_CONSOLIDATE.items():
        if old_name not in blocks:
            continue
        variant = blocks.pop(old_name)
        parent = blocks.setdefault(new_name, {})
        existing = get_path(parent, ("elements", element), {})
        set_path(parent, ("elements", element), deep_merge_override(existing, variant))

    new["blocks"] = blocks
    return new


def upgrade_v0_to_v1(old: Tree) -> Tree:
    """Restructure a sanitized V0 document into the V1 shape."""
    new: Tree = {"version": CURRENT_VERSION}

    if is_tree(old.get("settings")):
        settings = _upgrade_settings(old["settings"])
        if settings:
            new["settings"] = settings

    if is_tree(old.get("styles")):
        styles = _upgrade_styles(old["styles"])
        if styles:
            new["styles"] = styles

    for key in ("customTemplates", "templateParts"):
        if key in old:
            new[key] = copy.deepcopy(old[key])

    return new


# =============================================================================
# Dispatch
# =============================================================================


def migrate(raw: Any, block_metadata: BlockMetadata) -> Tree:
    """Turn any raw input into a canonical V1 tree."""
    version = detect_version(raw)
    logger.debug("Processing theme.json input as schema %s", version.name)

    if version is SchemaVersion.V0:
        return upgrade_v0_to_v1(sanitize_v0(raw, block_metadata))
    if version is SchemaVersion.V1:
        return sanitize_v1(raw, block_metadata)

    logger.warning(
        "Unsupported theme.json version %r, discarding content", raw.get("version")
    )
    return {"version": CURRENT_VERSION}
