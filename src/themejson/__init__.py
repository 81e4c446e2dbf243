"""
themejson - theme.json design tokens to CSS.

Migrates versioned theme.json documents to the current schema, strips
unknown keys and insecure values, merges documents and compiles them into
stylesheets (CSS custom properties, block styles and preset classes).
"""

from __future__ import annotations

from ._version import get_version
from .core.blocks import BlockMetadataCache, BlockRegistry, BlockType, register_block_type
from .core.errors import ThemeJSONError, ThemeJSONLoadError
from .core.safety import SafetyPolicy
from .core.stylesheet import StylesheetType
from .core.theme_json import ThemeJSON

__version__ = get_version()

__all__ = [
    "__version__",
    "ThemeJSON",
    "BlockType",
    "BlockRegistry",
    "BlockMetadataCache",
    "register_block_type",
    "SafetyPolicy",
    "StylesheetType",
    "ThemeJSONError",
    "ThemeJSONLoadError",
]
