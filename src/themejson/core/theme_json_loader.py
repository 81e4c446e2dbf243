"""
Reading and writing theme.json documents.

Documents are stored as JSON (``.json``) or YAML (``.yaml``/``.yml``).
Loading goes through the engine so the version dispatch, sanitization and
migration always apply; saving writes the canonical V1 tree.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .blocks import BlockMetadata, BlockMetadataCache, BlockType
from .errors import ThemeJSONLoadError
from .safety import DEFAULT_SAFETY_POLICY, SafetyPolicy
from .theme_json import ThemeJSON

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")


# =============================================================================
# Raw documents
# =============================================================================


def read_document(path: Path) -> Any:
    """Parse a JSON or YAML file into plain Python data.

    Raises:
        ThemeJSONLoadError: If the file is missing, unreadable or invalid.
    """
    if not path.exists():
        raise ThemeJSONLoadError("File not found", path)

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ThemeJSONLoadError(f"Cannot read file: {e}", path) from e

    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            return yaml.safe_load(content)
        return json.loads(content)
    except yaml.YAMLError as e:
        raise ThemeJSONLoadError(f"Invalid YAML: {e}", path) from e
    except json.JSONDecodeError as e:
        raise ThemeJSONLoadError(f"Invalid JSON: {e}", path) from e


def dump_raw_data(theme: ThemeJSON) -> str:
    """Serialize the canonical tree as JSON text."""
    return json.dumps(theme.get_raw_data(), indent=2)


def _dump_document(data: Any, path: Path) -> str:
    if path.suffix.lower() in _YAML_SUFFIXES:
        return yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return json.dumps(data, indent=2) + "\n"


# =============================================================================
# Engine
# =============================================================================


def load_theme_json(
    path: Path,
    *,
    block_metadata: BlockMetadata | BlockMetadataCache | None = None,
    policy: SafetyPolicy = DEFAULT_SAFETY_POLICY,
    use_defaults: bool = False,
) -> ThemeJSON:
    """Load a theme.json document into an engine.

    Args:
        path: JSON or YAML file.
        block_metadata: Forwarded to :class:`ThemeJSON`.
        policy: Forwarded to :class:`ThemeJSON`.
        use_defaults: If True, a missing or empty file yields an empty
            document instead of an error.

    Raises:
        ThemeJSONLoadError: If the file is missing (and use_defaults is
            False) or cannot be parsed.
    """
    if not path.exists() and use_defaults:
        logger.debug("No theme.json found at %s, using an empty document", path)
        return ThemeJSON({"version": 1}, block_metadata=block_metadata, policy=policy)

    data = read_document(path)
    if data is None:
        if not use_defaults:
            raise ThemeJSONLoadError("Empty document", path)
        logger.warning("Empty theme.json at %s, using an empty document", path)
        data = {"version": 1}

    return ThemeJSON(data, block_metadata=block_metadata, policy=policy)


def save_theme_json(theme: ThemeJSON, path: Path) -> Path:
    """Write the canonical tree of ``theme`` to ``path``.

    Returns:
        Path to the written file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(_dump_document(theme.get_raw_data(), path), encoding="utf-8")
    logger.debug("Saved theme.json to %s", path)
    return path


def load_block_types(path: Path) -> list[BlockType]:
    """Read block registrations from a file.

    The document is a list of ``{"name": ..., "selector": ...}`` entries,
    where ``selector`` is optional and may be a string or a map of
    sub-names to ``{"selector": ...}``.

    Raises:
        ThemeJSONLoadError: If the file cannot be read or has the wrong shape.
    """
    data = read_document(path)
    if not isinstance(data, list):
        raise ThemeJSONLoadError("Block list must be a list of entries", path)

    blocks: list[BlockType] = []
    for entry in data:
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            raise ThemeJSONLoadError(f"Invalid block entry: {entry!r}", path)
        blocks.append(BlockType(name=entry["name"], selector=entry.get("selector")))
    return blocks
