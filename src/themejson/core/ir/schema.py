"""
Allow-listed key vocabulary of theme.json documents, per schema version.

A schema is a nested dict. A key mapped to ``None`` is permitted with any
value; a key mapped to a dict is permitted and its value is filtered
recursively against that dict (see ``tree.intersect_schema``).
"""

from __future__ import annotations

from typing import Any

ROOT_BLOCK_NAME = "root"
ROOT_BLOCK_SELECTOR = ":root"
ALL_BLOCKS_NAME = "defaults"
ALL_BLOCKS_SELECTOR = ":root"

CURRENT_VERSION = 1

STYLES_SCHEMA: dict[str, Any] = {
    "border": {
        "radius": None,
        "color": None,
        "style": None,
        "width": None,
    },
    "color": {
        "background": None,
        "gradient": None,
        "link": None,
        "text": None,
    },
    "spacing": {
        "padding": {
            "top": None,
            "right": None,
            "bottom": None,
            "left": None,
        },
    },
    "typography": {
        "fontFamily": None,
        "fontSize": None,
        "fontStyle": None,
        "fontWeight": None,
        "lineHeight": None,
        "textDecoration": None,
        "textTransform": None,
    },
}

SETTINGS_SCHEMA: dict[str, Any] = {
    "border": {
        "customRadius": None,
        "customColor": None,
        "customStyle": None,
        "customWidth": None,
    },
    "color": {
        "custom": None,
        "customGradient": None,
        "gradients": None,
        "link": None,
        "palette": None,
    },
    "spacing": {
        "customPadding": None,
        "units": None,
    },
    "typography": {
        "customFontSize": None,
        "customLineHeight": None,
        "dropCap": None,
        "fontFamilies": None,
        "fontSizes": None,
        "customFontStyle": None,
        "customFontWeight": None,
        "customTextDecorations": None,
        "customTextTransforms": None,
    },
    "custom": None,
    "layout": None,
}

# Version 0: block entries sit directly under settings/styles, keyed by name.
SCHEMA_V0: dict[str, Any] = {
    "customTemplates": None,
    "templateParts": None,
    "styles": STYLES_SCHEMA,
    "settings": SETTINGS_SCHEMA,
}

# Version 1: block entries live under "blocks"; styles nodes may carry
# "elements" keyed by element name, each holding STYLES_SCHEMA vocabulary.
SCHEMA_V1: dict[str, Any] = {
    "version": None,
    "customTemplates": None,
    "templateParts": None,
    "styles": {**STYLES_SCHEMA, "blocks": None, "elements": None},
    "settings": {**SETTINGS_SCHEMA, "blocks": None},
}

BLOCK_STYLES_SCHEMA_V1: dict[str, Any] = {**STYLES_SCHEMA, "elements": None}
