"""Shared pytest fixtures for themejson tests."""

from __future__ import annotations

from typing import Any

import pytest

from themejson.core.blocks import BlockMetadataCache, BlockType
from themejson.core.safety import SafetyPolicy
from themejson.core.theme_json import ThemeJSON

HEADING_LEVELS = ("h1", "h2", "h3", "h4", "h5", "h6")


def _variants(block_name: str) -> dict[str, dict[str, str]]:
    return {f"{block_name}/{level}": {"selector": level} for level in HEADING_LEVELS}


@pytest.fixture
def block_types() -> list[BlockType]:
    """A small synthetic block registry."""
    return [
        BlockType(name="core/paragraph", selector="p"),
        BlockType(name="core/group"),
        BlockType(name="my-plugin/fancy-box"),
        BlockType(name="core/heading", selector=_variants("core/heading")),
        BlockType(name="core/post-title", selector=_variants("core/post-title")),
        BlockType(name="core/query-title", selector=_variants("core/query-title")),
    ]


@pytest.fixture
def block_cache(block_types: list[BlockType]) -> BlockMetadataCache:
    return BlockMetadataCache(block_types)


@pytest.fixture
def block_metadata(block_cache: BlockMetadataCache):
    return block_cache.resolve()


@pytest.fixture
def make_theme(block_metadata):
    """Build a ThemeJSON against the synthetic registry."""

    def _make(data: Any = None, **kwargs: Any) -> ThemeJSON:
        return ThemeJSON(data, block_metadata=block_metadata, **kwargs)

    return _make


@pytest.fixture
def permissive_policy() -> SafetyPolicy:
    """A policy that accepts everything."""
    return SafetyPolicy(
        filter_css=lambda css: css,
        escape_html=lambda text: text,
        escape_attr=lambda text: text,
        sanitize_html_class=lambda text: text,
    )


@pytest.fixture
def palette_settings() -> dict[str, Any]:
    return {
        "color": {
            "palette": [
                {"slug": "red", "name": "Red", "color": "#f00"},
                {"slug": "blue", "name": "Blue", "color": "#00f"},
            ]
        }
    }
