"""
Declarative metadata tables driving stylesheet compilation.

Two tables describe everything the compiler and the sanitizer know about
theme.json content:

- PRESETS_METADATA: one entry per preset category (palette, gradients,
  font sizes, font families). Presets are lists of
  ``{"slug": ..., "name": ..., <value_key>: ...}`` living at ``path`` under
  a settings node. Each one yields a CSS custom property
  ``--wp--preset--<css_var_infix>--<slug>`` and, per configured class,
  a utility class ``.has-<slug>-<class_suffix>``.
- PROPERTIES_METADATA: one entry per CSS property a styles node can set,
  with the path of its value inside the node. Shorthand properties list
  their sub-properties and expand to ``<name>-<sub>``.

Adding a preset category or style property is a data change here; the
engine is generic over both tables.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Presets
# =============================================================================


class PresetClass(BaseModel):
    """A utility class generated for every preset of a category."""

    model_config = ConfigDict(frozen=True)

    class_suffix: str = Field(description="Suffix in .has-<slug>-<class_suffix>")
    property_name: str = Field(description="CSS property the class sets")


class PresetMetadata(BaseModel):
    """How to find and render one preset category."""

    model_config = ConfigDict(frozen=True)

    path: tuple[str, ...] = Field(description="Location of the list under a settings node")
    value_key: str = Field(description="Key holding the preset value in each entry")
    css_var_infix: str = Field(description="Infix in --wp--preset--<infix>--<slug>")
    classes: tuple[PresetClass, ...] = Field(default=())

    def css_var_name(self, slug: str) -> str:
        return f"--wp--preset--{self.css_var_infix}--{slug}"


PRESETS_METADATA: tuple[PresetMetadata, ...] = (
    PresetMetadata(
        path=("color", "palette"),
        value_key="color",
        css_var_infix="color",
        classes=(
            PresetClass(class_suffix="color", property_name="color"),
            PresetClass(class_suffix="background-color", property_name="background-color"),
        ),
    ),
    PresetMetadata(
        path=("color", "gradients"),
        value_key="gradient",
        css_var_infix="gradient",
        classes=(PresetClass(class_suffix="gradient-background", property_name="background"),),
    ),
    PresetMetadata(
        path=("typography", "fontSizes"),
        value_key="size",
        css_var_infix="font-size",
        classes=(PresetClass(class_suffix="font-size", property_name="font-size"),),
    ),
    PresetMetadata(
        path=("typography", "fontFamilies"),
        value_key="fontFamily",
        css_var_infix="font-family",
    ),
)


# =============================================================================
# Style properties
# =============================================================================

LINK_COLOR_PROPERTY = "--wp--style--color--link"


class PropertyMetadata(BaseModel):
    """Where a CSS property's value lives inside a styles node."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="CSS property name (or synthetic custom property)")
    value: tuple[str, ...] = Field(description="Path to the value inside a styles node")
    properties: tuple[str, ...] | None = Field(
        default=None, description="Sub-properties for shorthands (e.g. padding sides)"
    )

    @property
    def is_shorthand(self) -> bool:
        return self.properties is not None

    def expand(self) -> list[tuple[str, tuple[str, ...]]]:
        """Return ``(declaration name, value path)`` pairs for this property."""
        if self.properties is None:
            return [(self.name, self.value)]
        return [(f"{self.name}-{sub}", (*self.value, sub)) for sub in self.properties]


PROPERTIES_METADATA: tuple[PropertyMetadata, ...] = (
    PropertyMetadata(name=LINK_COLOR_PROPERTY, value=("color", "link")),
    PropertyMetadata(name="background", value=("color", "gradient")),
    PropertyMetadata(name="background-color", value=("color", "background")),
    PropertyMetadata(name="border-radius", value=("border", "radius")),
    PropertyMetadata(name="border-color", value=("border", "color")),
    PropertyMetadata(name="border-width", value=("border", "width")),
    PropertyMetadata(name="border-style", value=("border", "style")),
    PropertyMetadata(name="color", value=("color", "text")),
    PropertyMetadata(name="font-family", value=("typography", "fontFamily")),
    PropertyMetadata(name="font-size", value=("typography", "fontSize")),
    PropertyMetadata(name="font-style", value=("typography", "fontStyle")),
    PropertyMetadata(name="font-weight", value=("typography", "fontWeight")),
    PropertyMetadata(name="line-height", value=("typography", "lineHeight")),
    PropertyMetadata(
        name="padding",
        value=("spacing", "padding"),
        properties=("top", "right", "bottom", "left"),
    ),
    PropertyMetadata(name="text-decoration", value=("typography", "textDecoration")),
    PropertyMetadata(name="text-transform", value=("typography", "textTransform")),
)

# Declaration name (shorthands expanded) -> (table entry, value path)
_DECLARATION_INDEX: dict[str, tuple[PropertyMetadata, tuple[str, ...]]] = {
    name: (meta, path) for meta in PROPERTIES_METADATA for name, path in meta.expand()
}


def to_property(css_name: str) -> PropertyMetadata | None:
    """Return the table entry an emitted declaration name belongs to.

    ``padding-top`` resolves to the ``padding`` entry.
    """
    entry = _DECLARATION_INDEX.get(css_name)
    return entry[0] if entry else None


def declaration_path(css_name: str) -> tuple[str, ...] | None:
    """Return the styles-node path that produced the declaration ``css_name``."""
    entry = _DECLARATION_INDEX.get(css_name)
    return entry[1] if entry else None


# Settings leaves whose list values replace rather than merge.
OVERRIDE_SETTINGS_PATHS: tuple[tuple[str, ...], ...] = (
    ("color", "palette"),
    ("color", "gradients"),
    ("spacing", "units"),
    ("typography", "fontSizes"),
    ("typography", "fontFamilies"),
    ("custom",),
)
