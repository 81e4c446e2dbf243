"""
ThemeJSON: the engine around one theme.json document.

A ThemeJSON owns a canonical (V1) tree built once from raw input. The tree
can then be merged with other documents, stripped of insecure values and
compiled into a stylesheet any number of times.

Example:
    theme = ThemeJSON({"version": 1, "settings": {"color": {"palette": [...]}}})
    css = theme.get_stylesheet("css_variables")
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from .blocks import BlockMetadata, BlockMetadataCache, default_block_metadata_cache
from .environment import is_debug
from .merger import merge_trees
from .migrations import migrate
from .safety import DEFAULT_SAFETY_POLICY, SafetyPolicy
from .sanitizer import remove_insecure_properties
from .stylesheet import StylesheetType, compile_stylesheet
from .tree import Tree, is_tree

DEFAULT_POST_TYPES = ("page",)


class ThemeJSON:
    """A theme.json document and the operations defined on it.

    Args:
        theme_json: Raw document in any supported schema version.
        block_metadata: Block name to selector mapping, or a cache that
            resolves one. Defaults to the process-wide cache.
        policy: Safety checks used by :meth:`remove_insecure_properties`.
    """

    def __init__(
        self,
        theme_json: Any = None,
        *,
        block_metadata: BlockMetadata | BlockMetadataCache | None = None,
        policy: SafetyPolicy = DEFAULT_SAFETY_POLICY,
    ) -> None:
        if block_metadata is None:
            block_metadata = default_block_metadata_cache
        if isinstance(block_metadata, BlockMetadataCache):
            block_metadata = block_metadata.resolve()

        self.block_metadata: BlockMetadata = block_metadata
        self.policy = policy
        raw = theme_json if theme_json is not None else {}
        self._theme_json: Tree = migrate(raw, block_metadata)

    def get_stylesheet(
        self,
        stylesheet_type: str | StylesheetType = StylesheetType.ALL,
        debug: bool | None = None,
    ) -> str:
        """Return the stylesheet for this document.

        Args:
            stylesheet_type: ``all`` (CSS variables, block styles and preset
                classes), ``block_styles`` (block styles and preset classes)
                or ``css_variables``.
            debug: Force the multi-line form on or off; None reads
                THEMEJSON_DEBUG.
        """
        return compile_stylesheet(
            self._theme_json, self.block_metadata, stylesheet_type, is_debug(debug)
        )

    def get_settings(self) -> Tree:
        settings = self._theme_json.get("settings")
        return copy.deepcopy(settings) if is_tree(settings) else {}

    def get_custom_templates(self) -> dict[str, dict[str, Any]]:
        """Page templates keyed by name, with ``title`` and ``postTypes``."""
        templates: dict[str, dict[str, Any]] = {}
        for item in _named_items(self._theme_json.get("customTemplates")):
            templates[item["name"]] = {
                "title": item.get("title", ""),
                "postTypes": item.get("postTypes", list(DEFAULT_POST_TYPES)),
            }
        return templates

    def get_template_parts(self) -> dict[str, dict[str, Any]]:
        """Template parts keyed by name, with their ``area``."""
        return {
            item["name"]: {"area": item.get("area", "")}
            for item in _named_items(self._theme_json.get("templateParts"))
        }

    def get_raw_data(self) -> Tree:
        """A deep copy of the canonical tree."""
        return copy.deepcopy(self._theme_json)

    def remove_insecure_properties(self) -> None:
        """Drop every value that fails the safety policy, in place."""
        self._theme_json = remove_insecure_properties(self._theme_json, self.policy)

    def merge(self, incoming: ThemeJSON) -> None:
        """Merge ``incoming`` on top of this document, in place."""
        self._theme_json = merge_trees(self._theme_json, incoming.get_raw_data())

    def __repr__(self) -> str:
        sections = ", ".join(key for key in self._theme_json if key != "version")
        return f"ThemeJSON(version={self._theme_json.get('version')}, sections=[{sections}])"


def _named_items(items: Any) -> list[Mapping[str, Any]]:
    if isinstance(items, Mapping):
        items = list(items.values())
    if not isinstance(items, list):
        return []
    return [item for item in items if is_tree(item) and "name" in item]
