"""Read note files into raw node properties."""

import re
from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml

from notetree.exceptions import BadParseError

# Front-matter keys with a dedicated node field. Everything else lands in "custom".
_KNOWN_KEYS = ("id", "desc", "updated", "created", "schemaId")

# A delimiter line: exactly "---", trailing blanks allowed.
_FENCE = re.compile(r"^---[ \t]*$", re.MULTILINE)


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Split a leading ``---`` YAML block from the body.

    Raises:
        BadParseError: The block is not valid YAML or not a mapping.
    """
    opening = _FENCE.match(text)
    if opening is None:
        return {}, text
    closing = _FENCE.search(text, opening.end())
    if closing is None:
        return {}, text
    frontmatter_str = text[opening.end() : closing.start()]
    body = text[closing.end() :]
    try:
        meta = yaml.safe_load(frontmatter_str) or {}
    except yaml.YAMLError as e:
        msg = f"Invalid front matter: {e}"
        raise BadParseError(msg) from e
    if not isinstance(meta, dict):
        msg = f"Front matter must be a mapping, got {type(meta).__name__}"
        raise BadParseError(msg)
    return meta, body.strip()


def md_file_to_node_props(path: Path) -> dict[str, Any]:
    """Return id, desc, timestamps, schemaId, custom and body of a note file."""
    meta, body = split_frontmatter(path.read_text(encoding="utf-8"))
    props: dict[str, Any] = {
        key: str(meta[key]) for key in _KNOWN_KEYS if meta.get(key) is not None
    }
    props["custom"] = {k: v for k, v in meta.items() if k not in _KNOWN_KEYS}
    props["body"] = body
    return props


def make_materializer(vault_dir: Path) -> Callable[[str], dict[str, Any]]:
    """Bind md_file_to_node_props to a vault so it takes relative paths."""

    def materialize(fpath: str) -> dict[str, Any]:
        return md_file_to_node_props(vault_dir / fpath)

    return materialize
