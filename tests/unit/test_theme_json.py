"""Tests for the ThemeJSON engine and its read-only views."""

from __future__ import annotations

from themejson import ThemeJSON
from themejson.core.blocks import BlockMetadataCache, BlockType


class TestConstruction:
    def test_none_and_empty_input(self, make_theme):
        assert make_theme().get_raw_data() == {"version": 1}
        assert make_theme({}).get_raw_data() == {"version": 1}

    def test_non_mapping_input(self, make_theme):
        assert make_theme(["not", "a", "document"]).get_raw_data() == {"version": 1}

    def test_accepts_block_cache(self):
        cache = BlockMetadataCache([BlockType("core/paragraph", "p")])
        theme = ThemeJSON(
            {"version": 1, "styles": {"blocks": {"core/paragraph": {"color": {"text": "red"}}}}},
            block_metadata=cache,
        )
        assert cache.is_resolved
        assert theme.get_stylesheet("block_styles", debug=False) == "p{color: red;}"

    def test_accepts_plain_mapping(self, block_metadata):
        theme = ThemeJSON({"version": 1}, block_metadata=block_metadata)
        assert theme.block_metadata is block_metadata

    def test_repr(self, make_theme):
        theme = make_theme({"version": 1, "settings": {"custom": {"a": 1}}})
        assert repr(theme) == "ThemeJSON(version=1, sections=[settings])"


class TestSettings:
    def test_get_settings(self, make_theme, palette_settings):
        theme = make_theme({"version": 1, "settings": palette_settings})
        assert theme.get_settings() == palette_settings

    def test_get_settings_missing(self, make_theme):
        assert make_theme({"version": 1}).get_settings() == {}

    def test_returned_views_are_copies(self, make_theme):
        theme = make_theme({"version": 1, "settings": {"custom": {"a": "1"}}})
        theme.get_raw_data()["settings"]["custom"]["a"] = "2"
        theme.get_settings()["custom"]["b"] = "3"
        assert theme.get_settings() == {"custom": {"a": "1"}}
        assert theme.get_raw_data() == {"version": 1, "settings": {"custom": {"a": "1"}}}

    def test_merge_does_not_share_incoming_tree(self, make_theme):
        theme = make_theme({"version": 1})
        incoming = make_theme({"version": 1, "settings": {"custom": {"a": "1"}}})
        theme.merge(incoming)
        incoming.merge(make_theme({"version": 1, "settings": {"custom": {"a": "2"}}}))
        assert theme.get_settings() == {"custom": {"a": "1"}}

    def test_get_settings_includes_blocks(self, make_theme):
        theme = make_theme(
            {"settings": {"root": {"custom": {"a": 1}}, "core/group": {"custom": {"b": 2}}}}
        )
        assert theme.get_settings() == {
            "custom": {"a": 1},
            "blocks": {"core/group": {"custom": {"b": 2}}},
        }


class TestTemplates:
    def test_custom_templates(self, make_theme):
        theme = make_theme(
            {
                "version": 1,
                "customTemplates": [
                    {"name": "blank", "title": "Blank", "postTypes": ["page", "post"]},
                    {"name": "wide"},
                    {"title": "No name"},
                ],
            }
        )
        assert theme.get_custom_templates() == {
            "blank": {"title": "Blank", "postTypes": ["page", "post"]},
            "wide": {"title": "", "postTypes": ["page"]},
        }

    def test_custom_templates_missing(self, make_theme):
        assert make_theme({"version": 1}).get_custom_templates() == {}

    def test_template_parts(self, make_theme):
        theme = make_theme(
            {
                "version": 1,
                "templateParts": [
                    {"name": "header", "area": "header"},
                    {"name": "sidebar"},
                    "bogus",
                ],
            }
        )
        assert theme.get_template_parts() == {
            "header": {"area": "header"},
            "sidebar": {"area": ""},
        }

    def test_template_parts_as_mapping(self, make_theme):
        theme = make_theme(
            {"version": 1, "templateParts": {"header": {"name": "header", "area": "header"}}}
        )
        assert theme.get_template_parts() == {"header": {"area": "header"}}

    def test_templates_not_a_list(self, make_theme):
        theme = make_theme({"version": 1, "customTemplates": "nope", "templateParts": 3})
        assert theme.get_custom_templates() == {}
        assert theme.get_template_parts() == {}

    def test_post_types_default_not_shared(self, make_theme):
        theme = make_theme({"version": 1, "customTemplates": [{"name": "a"}, {"name": "b"}]})
        templates = theme.get_custom_templates()
        templates["a"]["postTypes"].append("post")
        assert templates["b"]["postTypes"] == ["page"]
