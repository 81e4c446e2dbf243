"""
Block metadata: which CSS selector each block name targets.

Block types come from a registry (the platform's block.json data). Every
block maps to one selector:

- a block declaring a single custom selector uses it verbatim;
- a block declaring a map of sub-selectors (e.g. core/heading for h1..h6)
  contributes one entry per sub-key, named after the sub-key, plus an
  entry for the block itself matching all of them;
- otherwise the selector is synthesized from the name:
  ``core/group`` -> ``.wp-block-group``,
  ``my-plugin/block-name`` -> ``.wp-block-my-plugin-block-name``.

Two sentinel names are always present: ``root`` and ``defaults``, both
``:root``.

Resolution walks the registry in iteration order and later entries
overwrite earlier ones sharing a key, so colliding names resolve
last-registration-wins.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .ir.schema import (
    ALL_BLOCKS_NAME,
    ALL_BLOCKS_SELECTOR,
    ROOT_BLOCK_NAME,
    ROOT_BLOCK_SELECTOR,
)

logger = logging.getLogger(__name__)

# str | {sub_name: {"selector": str}} | None
SelectorDescriptor = str | Mapping[str, Mapping[str, Any]] | None


class BlockMetadataEntry(BaseModel):
    """Selector addressed by a block name."""

    model_config = ConfigDict(frozen=True)

    selector: str = Field(description="CSS selector for the block's styles and variables")


BlockMetadata = Mapping[str, BlockMetadataEntry]


@dataclass(frozen=True)
class BlockType:
    """A registered block as seen by the engine."""

    name: str
    selector: SelectorDescriptor = None


@dataclass
class BlockRegistry:
    """Ordered collection of block types, keyed by name."""

    _blocks: dict[str, BlockType] = field(default_factory=dict)

    def register(self, block: BlockType) -> BlockType:
        self._blocks[block.name] = block
        return block

    def unregister(self, name: str) -> None:
        self._blocks.pop(name, None)

    def clear(self) -> None:
        self._blocks.clear()

    def __iter__(self) -> Iterator[BlockType]:
        return iter(list(self._blocks.values()))

    def __len__(self) -> int:
        return len(self._blocks)

    def __contains__(self, name: object) -> bool:
        return name in self._blocks


def default_block_selector(block_name: str) -> str:
    """Synthesize the class selector for a block that declares none.

    Core blocks drop their ``core/`` prefix for historical reasons.
    """
    return ".wp-block-" + block_name.replace("core/", "").replace("/", "-")


def build_block_metadata(blocks: Iterable[BlockType]) -> dict[str, BlockMetadataEntry]:
    """Build the block name -> selector mapping from registry entries."""
    metadata: dict[str, BlockMetadataEntry] = {
        ROOT_BLOCK_NAME: BlockMetadataEntry(selector=ROOT_BLOCK_SELECTOR),
        ALL_BLOCKS_NAME: BlockMetadataEntry(selector=ALL_BLOCKS_SELECTOR),
    }

    for block in blocks:
        selector = block.selector
        if isinstance(selector, str):
            metadata[block.name] = BlockMetadataEntry(selector=selector)
        elif isinstance(selector, Mapping):
            sub_selectors: list[str] = []
            for key, sub in selector.items():
                if not isinstance(sub, Mapping) or not isinstance(sub.get("selector"), str):
                    continue
                metadata[key] = BlockMetadataEntry(selector=sub["selector"])
                sub_selectors.append(sub["selector"])
            # The block itself targets all of its variants at once.
            if sub_selectors:
                metadata[block.name] = BlockMetadataEntry(selector=", ".join(sub_selectors))
        else:
            metadata[block.name] = BlockMetadataEntry(
                selector=default_block_selector(block.name)
            )

    return metadata


class BlockMetadataCache:
    """Lazily computed, memoized block metadata for a registry.

    The mapping is built on first :meth:`resolve` and reused until
    :meth:`reset` is called. Registry changes made after the first resolve
    are not seen until then.
    """

    def __init__(self, registry: Iterable[BlockType] | None = None) -> None:
        self.registry: Iterable[BlockType] = registry if registry is not None else BlockRegistry()
        self._metadata: dict[str, BlockMetadataEntry] | None = None

    def resolve(self) -> dict[str, BlockMetadataEntry]:
        if self._metadata is None:
            self._metadata = build_block_metadata(self.registry)
            logger.debug("Built block metadata with %d entries", len(self._metadata))
        return self._metadata

    def reset(self) -> None:
        """Forget the memoized mapping so the next resolve rebuilds it."""
        if self._metadata is not None:
            logger.debug("Resetting block metadata cache")
        self._metadata = None

    @property
    def is_resolved(self) -> bool:
        return self._metadata is not None


# Process-wide registry and cache used when an engine is built without one.
default_registry = BlockRegistry()
default_block_metadata_cache = BlockMetadataCache(default_registry)


def register_block_type(name: str, selector: SelectorDescriptor = None) -> BlockType:
    """Register a block on the process-wide registry.

    The default cache is not reset; call
    ``default_block_metadata_cache.reset()`` to pick the block up after the
    cache has been resolved.
    """
    return default_registry.register(BlockType(name=name, selector=selector))
