"""Configuration constants for notetree."""

import os
from dataclasses import dataclass
from pathlib import Path

# Stem of the single file every vault hangs off.
ROOT_NAME: str = "root"

# Companions of the root file (root.schema.yml, ...). Never tree members.
RESERVED_PATTERNS: list[str] = ["root.*"]

NOTE_SUFFIX: str = ".md"
SCHEMA_SUFFIX: str = ".schema.yml"

# Returned by DNode.render_body() for nodes without content.
EMPTY_BODY_PLACEHOLDER: str = "Empty Document"

DEFAULT_IGNORE_PATTERNS: list[str] = [".*", "_*"]

# Vault location when none is given. First directory which is found is used.
VAULT_DIRECTORIES: list[Path] = [
    Path(os.environ.get("NOTETREE_VAULT", "~/.local/share/notetree/vault")).expanduser(),
    Path("~/notes").expanduser(),
    Path.cwd(),
]


@dataclass(frozen=True)
class ParserOptions:
    """Error policy of a single FileParser.

    Both flags default to failing closed.
    """

    # Raise on a missing ancestor instead of synthesizing stubs.
    error_on_empty: bool = True
    # Re-raise materializer failures instead of recording and skipping the file.
    error_on_bad_parse: bool = True


def resolve_vault_directory() -> Path:
    """Return the first existing directory from VAULT_DIRECTORIES."""
    for candidate in VAULT_DIRECTORIES:
        if candidate.is_dir():
            return candidate
    return VAULT_DIRECTORIES[0]
