"""Tests for insecure value removal."""

from __future__ import annotations

import copy

from themejson.core.sanitizer import (
    get_paths_with_settings,
    get_paths_with_styles,
    remove_insecure_properties,
    remove_insecure_settings,
    remove_insecure_styles,
)

GRADIENT = "linear-gradient(135deg,rgba(6,147,227,1) 0%,rgb(155,81,224) 100%)"


class TestPaths:
    def test_styles_paths(self):
        tree = {
            "styles": {
                "color": {"text": "red"},
                "elements": {"link": {"color": {"text": "blue"}}, "empty": {}},
                "blocks": {
                    "core/group": {"elements": {"link": {"color": {"text": "green"}}}},
                    "core/paragraph": {},
                },
            }
        }
        assert get_paths_with_styles(tree) == [
            ("styles",),
            ("styles", "elements", "link"),
            ("styles", "blocks", "core/group"),
            ("styles", "blocks", "core/group", "elements", "link"),
        ]

    def test_settings_paths(self):
        tree = {"settings": {"color": {}, "blocks": {"core/group": {"custom": {"a": 1}}}}}
        assert get_paths_with_settings(tree) == [
            ("settings",),
            ("settings", "blocks", "core/group"),
        ]

    def test_no_sections(self):
        assert get_paths_with_styles({"version": 1}) == []
        assert get_paths_with_settings({"settings": {}}) == []
        assert get_paths_with_styles({"styles": "nope"}) == []


class TestRemoveInsecureStyles:
    def test_unsafe_values_dropped(self):
        node = {
            "color": {"text": "javascript:alert", "background": "red"},
            "border": {"color": "red}body{color:blue", "radius": "2px"},
            "typography": {"fontFamily": "url(evil)", "lineHeight": 1.5},
        }
        assert remove_insecure_styles(node) == {
            "color": {"background": "red"},
            "border": {"radius": "2px"},
            "typography": {"lineHeight": 1.5},
        }

    def test_original_value_copied(self):
        node = {"spacing": {"padding": {"top": 0, "left": "var:preset|spacing|small"}}}
        assert remove_insecure_styles(node) == node

    def test_unknown_keys_not_copied(self):
        node = {"color": {"text": "red"}, "elements": {"link": {"color": {"text": "blue"}}}}
        assert remove_insecure_styles(node) == {"color": {"text": "red"}}

    def test_permissive_policy_keeps_everything(self, permissive_policy):
        node = {"color": {"text": "javascript:alert"}}
        assert remove_insecure_styles(node, permissive_policy) == node


class TestRemoveInsecureSettings:
    def test_presets_filtered(self):
        node = {
            "color": {
                "custom": True,
                "palette": [
                    {"slug": "red", "name": "Red", "color": "#f00"},
                    {"slug": "bad slug", "name": "Bad", "color": "#000"},
                    {"slug": "evil", "name": "<b>Evil</b>", "color": "#111"},
                    {"slug": "js", "name": "JS", "color": "javascript:x"},
                    {"slug": "no-name", "color": "#222"},
                ],
                "gradients": [{"slug": "vivid", "name": "Vivid", "gradient": GRADIENT}],
            },
            "typography": {
                "fontSizes": [{"slug": "small", "name": "Small", "size": "13px"}],
                "fontFamilies": [
                    {"slug": "system", "name": "System", "fontFamily": '"Segoe UI",sans-serif'},
                    {"slug": "serif", "name": "Serif", "fontFamily": "Georgia, serif"},
                ],
            },
            "custom": {"spacing": "1rem"},
        }
        assert remove_insecure_settings(node) == {
            "color": {
                "palette": [{"slug": "red", "name": "Red", "color": "#f00"}],
                "gradients": [{"slug": "vivid", "name": "Vivid", "gradient": GRADIENT}],
            },
            "typography": {
                "fontSizes": [{"slug": "small", "name": "Small", "size": "13px"}],
                "fontFamilies": [
                    {"slug": "serif", "name": "Serif", "fontFamily": "Georgia, serif"}
                ],
            },
        }

    def test_all_presets_unsafe(self):
        node = {"color": {"palette": [{"slug": "x y", "name": "X", "color": "#fff"}]}}
        assert remove_insecure_settings(node) == {}

    def test_permissive_policy(self, permissive_policy):
        node = {"color": {"palette": [{"slug": "x y", "name": "<X>", "color": "#fff"}]}}
        assert remove_insecure_settings(node, permissive_policy) == node


class TestRemoveInsecureProperties:
    def test_tree_rebuilt(self, palette_settings):
        tree = {
            "version": 1,
            "customTemplates": [{"name": "blank"}],
            "settings": {
                **palette_settings,
                "layout": {"contentSize": "800px"},
                "blocks": {
                    "core/paragraph": {
                        "color": {"palette": [{"slug": "a b", "name": "A", "color": "#000"}]},
                        "typography": {
                            "fontSizes": [{"slug": "big", "name": "Big", "size": "2em"}]
                        },
                    }
                },
            },
            "styles": {
                "color": {"text": "javascript:alert", "background": "red"},
                "elements": {"link": {"color": {"text": "blue"}}},
                "blocks": {"core/group": {"border": {"radius": "2px", "color": "}"}}},
            },
        }
        original = copy.deepcopy(tree)

        assert remove_insecure_properties(tree) == {
            "version": 1,
            "customTemplates": [{"name": "blank"}],
            "settings": {
                **palette_settings,
                "blocks": {
                    "core/paragraph": {
                        "typography": {
                            "fontSizes": [{"slug": "big", "name": "Big", "size": "2em"}]
                        },
                    }
                },
            },
            "styles": {
                "color": {"background": "red"},
                "elements": {"link": {"color": {"text": "blue"}}},
                "blocks": {"core/group": {"border": {"radius": "2px"}}},
            },
        }
        assert tree == original

    def test_empty_sections_removed(self):
        tree = {
            "version": 1,
            "settings": {"color": {"custom": True}},
            "styles": {"color": {"text": "javascript:alert"}},
        }
        assert remove_insecure_properties(tree) == {"version": 1}

    def test_engine_sanitize_in_place(self, make_theme):
        theme = make_theme(
            {
                "version": 1,
                "styles": {"color": {"text": "red", "background": "url(x)"}},
            }
        )
        theme.remove_insecure_properties()
        assert theme.get_raw_data() == {"version": 1, "styles": {"color": {"text": "red"}}}

    def test_engine_uses_its_policy(self, make_theme, permissive_policy):
        data = {"version": 1, "styles": {"color": {"text": "javascript:alert"}}}
        theme = make_theme(data, policy=permissive_policy)
        theme.remove_insecure_properties()
        assert theme.get_raw_data() == data
