"""
Immutable tables describing theme.json vocabulary and CSS generation.
"""

from __future__ import annotations

from .metadata import (
    LINK_COLOR_PROPERTY,
    OVERRIDE_SETTINGS_PATHS,
    PRESETS_METADATA,
    PROPERTIES_METADATA,
    PresetClass,
    PresetMetadata,
    PropertyMetadata,
    declaration_path,
    to_property,
)
from .schema import (
    ALL_BLOCKS_NAME,
    ALL_BLOCKS_SELECTOR,
    BLOCK_STYLES_SCHEMA_V1,
    CURRENT_VERSION,
    ROOT_BLOCK_NAME,
    ROOT_BLOCK_SELECTOR,
    SCHEMA_V0,
    SCHEMA_V1,
    SETTINGS_SCHEMA,
    STYLES_SCHEMA,
)

__all__ = [
    # Metadata tables
    "LINK_COLOR_PROPERTY",
    "OVERRIDE_SETTINGS_PATHS",
    "PRESETS_METADATA",
    "PROPERTIES_METADATA",
    "PresetClass",
    "PresetMetadata",
    "PropertyMetadata",
    "declaration_path",
    "to_property",
    # Schemas
    "ALL_BLOCKS_NAME",
    "ALL_BLOCKS_SELECTOR",
    "BLOCK_STYLES_SCHEMA_V1",
    "CURRENT_VERSION",
    "ROOT_BLOCK_NAME",
    "ROOT_BLOCK_SELECTOR",
    "SCHEMA_V0",
    "SCHEMA_V1",
    "SETTINGS_SCHEMA",
    "STYLES_SCHEMA",
]
