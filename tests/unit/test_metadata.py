"""Tests for the preset and property tables."""

from __future__ import annotations

from themejson.core.ir import (
    LINK_COLOR_PROPERTY,
    PRESETS_METADATA,
    PROPERTIES_METADATA,
    declaration_path,
    to_property,
)


class TestPresetsMetadata:
    def test_categories_in_order(self):
        assert [preset.path for preset in PRESETS_METADATA] == [
            ("color", "palette"),
            ("color", "gradients"),
            ("typography", "fontSizes"),
            ("typography", "fontFamilies"),
        ]

    def test_css_var_name(self):
        font_sizes = PRESETS_METADATA[2]
        assert font_sizes.css_var_name("small") == "--wp--preset--font-size--small"

    def test_font_families_have_no_classes(self):
        assert PRESETS_METADATA[3].classes == ()


class TestPropertiesMetadata:
    def test_link_color_first(self):
        assert PROPERTIES_METADATA[0].name == LINK_COLOR_PROPERTY
        assert PROPERTIES_METADATA[0].value == ("color", "link")

    def test_only_padding_is_shorthand(self):
        shorthands = [meta.name for meta in PROPERTIES_METADATA if meta.is_shorthand]
        assert shorthands == ["padding"]

    def test_expand(self):
        padding = to_property("padding-top")
        assert padding is not None
        assert padding.expand() == [
            ("padding-top", ("spacing", "padding", "top")),
            ("padding-right", ("spacing", "padding", "right")),
            ("padding-bottom", ("spacing", "padding", "bottom")),
            ("padding-left", ("spacing", "padding", "left")),
        ]

    def test_reverse_lookup(self):
        assert to_property("color").value == ("color", "text")
        assert declaration_path("font-size") == ("typography", "fontSize")
        assert declaration_path("padding-left") == ("spacing", "padding", "left")
        assert to_property("padding") is None
        assert declaration_path("width") is None
