"""
Compile a canonical theme.json tree into CSS.

Three kinds of rulesets are produced:

- CSS variables, one ruleset per settings node::

    selector {
        --wp--preset--<category>--<slug>: value;
        --wp--custom--<flattened-key>: value;
    }

- Style declarations, one ruleset per styles node::

    selector {
        style-property: value;
    }

- Preset utility classes, one ruleset per preset and configured class::

    .has-<slug>-<class_suffix> {
        property: value !important;
    }

  Classes for the root node carry no selector prefix so their specificity
  stays that of a single class; block classes are prefixed with the block's
  selector, once per part when that selector is a comma-separated list.

Settings nodes are the root ``settings`` plus each ``settings.blocks.<name>``
with a known selector; styles nodes likewise. Output order is fixed: CSS
variables, then style declarations, then preset classes, each walking the
root node first and then the blocks in the order the tree lists them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from .blocks import BlockMetadata
from .ir.metadata import LINK_COLOR_PROPERTY, PRESETS_METADATA, PROPERTIES_METADATA, PresetMetadata
from .ir.schema import ROOT_BLOCK_SELECTOR
from .tree import TreePath, flatten_tree, get_path, is_empty, is_tree

logger = logging.getLogger(__name__)

VAR_PREFIX = "var:"
VAR_TOKEN_IN = "|"
VAR_TOKEN_OUT = "--"


class StylesheetType(StrEnum):
    """Which parts of the stylesheet to produce."""

    ALL = "all"
    BLOCK_STYLES = "block_styles"
    CSS_VARIABLES = "css_variables"

    @classmethod
    def parse(cls, value: str | StylesheetType) -> StylesheetType:
        """Resolve a type name; unknown names mean everything."""
        try:
            return cls(value)
        except ValueError:
            return cls.ALL


@dataclass(frozen=True)
class Declaration:
    """A single ``name: value`` CSS declaration."""

    name: str
    value: str

    def __str__(self) -> str:
        return f"{self.name}: {self.value}"


@dataclass(frozen=True)
class NodePath:
    """A node of the tree to compile and the selector it targets."""

    path: TreePath
    selector: str


# =============================================================================
# Values
# =============================================================================


def to_css_value(value: Any) -> str | None:
    """Render a scalar tree value as CSS text; ``None`` for non-scalars."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    return None


def resolve_var_reference(value: str) -> str:
    """Rewrite ``var:preset|color|primary`` as ``var(--wp--preset--color--primary)``."""
    if not value.startswith(VAR_PREFIX):
        return value
    unwrapped = value[len(VAR_PREFIX) :].replace(VAR_TOKEN_IN, VAR_TOKEN_OUT)
    return f"var(--wp--{unwrapped})"


def get_property_value(styles: Any, path: TreePath) -> str:
    """Return the rendered style value at ``path``, or ``""`` if unset."""
    value = get_path(styles, path, "")
    if is_empty(value):
        return ""
    rendered = to_css_value(value)
    if rendered is None or isinstance(value, bool):
        return ""
    return resolve_var_reference(rendered)


def iter_presets(node: Any, preset: PresetMetadata) -> Iterator[tuple[str, str]]:
    """Yield ``(slug, value)`` for each well-formed entry of a preset list."""
    entries = get_path(node, preset.path, [])
    if not isinstance(entries, list):
        return
    for entry in entries:
        if not is_tree(entry):
            continue
        if not isinstance(entry.get("slug"), str) or not isinstance(entry.get("name"), str):
            continue
        value = to_css_value(entry.get(preset.value_key))
        if value is None:
            continue
        yield entry["slug"], value


# =============================================================================
# Declarations
# =============================================================================


def compute_style_properties(node: Any) -> list[Declaration]:
    """Declarations for every table property set in a styles node."""
    if is_empty(node) or not is_tree(node):
        return []

    declarations: list[Declaration] = []
    for meta in PROPERTIES_METADATA:
        for name, path in meta.expand():
            value = get_property_value(node, path)
            if value:
                declarations.append(Declaration(name, value))
    return declarations


def compute_elements(node: Any) -> list[Declaration]:
    """Declarations contributed by a node's ``elements`` (the link color)."""
    link = get_property_value(node, ("elements", "link", "color", "text"))
    if not link:
        return []
    return [Declaration(LINK_COLOR_PROPERTY, link)]


def compute_preset_vars(settings: Any) -> list[Declaration]:
    return [
        Declaration(preset.css_var_name(slug), value)
        for preset in PRESETS_METADATA
        for slug, value in iter_presets(settings, preset)
    ]


def compute_theme_vars(settings: Any) -> list[Declaration]:
    """Custom properties flattened from the free-form ``custom`` settings."""
    declarations: list[Declaration] = []
    for key, value in flatten_tree(get_path(settings, ("custom",), {})).items():
        rendered = to_css_value(value)
        if rendered is not None:
            declarations.append(Declaration(f"--wp--custom--{key}", rendered))
    return declarations


# =============================================================================
# Rulesets
# =============================================================================


def to_ruleset(declarations: list[Declaration], selector: str, debug: bool = False) -> str:
    """Serialize declarations under ``selector``; empty string if there are none."""
    if not declarations:
        return ""

    if debug:
        block = "".join(f"\t{declaration};\n" for declaration in declarations)
        return f"{selector} {{\n{block}}}\n"

    block = "".join(f"{declaration};" for declaration in declarations)
    return f"{selector}{{{block}}}"


def get_css_vars_of_node(node: Any, selector: str, debug: bool = False) -> str:
    declarations = compute_preset_vars(node) + compute_theme_vars(node)
    return to_ruleset(declarations, selector, debug)


def get_styles_of_node(node: Any, selector: str, debug: bool = False) -> str:
    declarations = compute_elements(node) + compute_style_properties(node)
    return to_ruleset(declarations, selector, debug)


def get_presets_of_node(node: Any, selector: str, debug: bool = False) -> str:
    """Utility class rulesets for every preset of a settings node."""
    if selector == ROOT_BLOCK_SELECTOR:
        prefixes = [""]
    else:
        prefixes = [part.strip() for part in selector.split(",")]

    output = ""
    for preset in PRESETS_METADATA:
        for slug, value in iter_presets(node, preset):
            for css_class in preset.classes:
                class_name = f".has-{slug}-{css_class.class_suffix}"
                output += to_ruleset(
                    [Declaration(css_class.property_name, f"{value} !important")],
                    ", ".join(f"{prefix}{class_name}" for prefix in prefixes),
                    debug,
                )
    return output


# =============================================================================
# Traversal
# =============================================================================


def _node_paths(
    tree: Mapping[str, Any], section: str, block_metadata: BlockMetadata
) -> list[NodePath]:
    paths: list[NodePath] = []
    if section in tree:
        paths.append(NodePath((section,), ROOT_BLOCK_SELECTOR))

    blocks = get_path(tree, (section, "blocks"), {})
    if not is_tree(blocks):
        return paths
    for block_name in blocks:
        entry = block_metadata.get(block_name)
        if entry is None or not entry.selector:
            continue
        paths.append(NodePath((section, "blocks", block_name), entry.selector))
    return paths


def get_settings_paths(tree: Mapping[str, Any], block_metadata: BlockMetadata) -> list[NodePath]:
    return _node_paths(tree, "settings", block_metadata)


def get_styles_paths(tree: Mapping[str, Any], block_metadata: BlockMetadata) -> list[NodePath]:
    return _node_paths(tree, "styles", block_metadata)


def compile_stylesheet(
    tree: Mapping[str, Any],
    block_metadata: BlockMetadata,
    stylesheet_type: str | StylesheetType = StylesheetType.ALL,
    debug: bool = False,
) -> str:
    """Compile ``tree`` into CSS text.

    Args:
        tree: Canonical (V1) theme.json tree.
        block_metadata: Block name to selector mapping.
        stylesheet_type: ``all`` (variables, styles, classes),
            ``block_styles`` (styles, classes) or ``css_variables``.
        debug: Emit the multi-line, indented form.

    Returns:
        The stylesheet, possibly empty.
    """
    stylesheet_type = StylesheetType.parse(stylesheet_type)
    settings_paths = get_settings_paths(tree, block_metadata)
    styles_paths = get_styles_paths(tree, block_metadata)

    def css_vars() -> str:
        return "".join(
            get_css_vars_of_node(get_path(tree, p.path), p.selector, debug) for p in settings_paths
        )

    def block_styles() -> str:
        return "".join(
            get_styles_of_node(get_path(tree, p.path), p.selector, debug) for p in styles_paths
        )

    def presets() -> str:
        return "".join(
            get_presets_of_node(get_path(tree, p.path), p.selector, debug) for p in settings_paths
        )

    if stylesheet_type is StylesheetType.BLOCK_STYLES:
        stylesheet = block_styles() + presets()
    elif stylesheet_type is StylesheetType.CSS_VARIABLES:
        stylesheet = css_vars()
    else:
        stylesheet = css_vars() + block_styles() + presets()

    logger.debug(
        "Compiled %s stylesheet from %d settings and %d styles nodes",
        stylesheet_type.value,
        len(settings_paths),
        len(styles_paths),
    )
    return stylesheet
