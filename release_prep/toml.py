"""TOML reading and writing utilities.

Uses tomlkit to preserve formatting and comments when modifying the
manifest, so a version change shows up as a one-line diff.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit


def load_toml(path: Path) -> tomlkit.TOMLDocument:
    """Load and parse a TOML file.

    Returns a TOMLDocument that preserves formatting when modified and saved.
    """
    return tomlkit.parse(path.read_text())


def save_toml(path: Path, doc: tomlkit.TOMLDocument) -> None:
    """Save a TOMLDocument back to disk, preserving original formatting."""
    path.write_text(tomlkit.dumps(doc))


def get_manifest_version(doc: tomlkit.TOMLDocument, key: str) -> str | None:
    """Look up the version at a dotted key such as "package.version".

    Returns None when any segment of the key is missing.
    """
    node: Any = doc
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return str(node)


def set_manifest_version(path: Path, version: str, key: str) -> None:
    """Write version at a dotted key in the manifest, in place.

    Intermediate tables must already exist; this only replaces the value.

    Raises:
        KeyError: If the table holding the version is missing.
    """
    doc = load_toml(path)
    *tables, field = key.split(".")
    node: Any = doc
    for part in tables:
        if not isinstance(node, dict) or part not in node:
            raise KeyError(f"[{'.'.join(tables)}] table not found in {path}")
        node = node[part]
    node[field] = version
    save_toml(path, doc)
