"""Orchestrate loading a vault directory into a note tree and schema records."""

from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from notetree.config import DEFAULT_IGNORE_PATTERNS, NOTE_SUFFIX, SCHEMA_SUFFIX, ParserOptions
from notetree.core.importer.file_meta import glob_match
from notetree.core.importer.frontmatter import make_materializer
from notetree.core.importer.parser import FileParser
from notetree.models.node import ParseResult, SchemaRecord


@dataclass
class VaultLoad:
    """Everything read from one vault."""

    result: ParseResult
    schemas: list[SchemaRecord] = field(default_factory=list)

    @property
    def num_notes(self) -> int:
        return len(self.result.nodes) - len(self.result.stubs)

    @property
    def num_stubs(self) -> int:
        return len(self.result.stubs)

    @property
    def num_schemas(self) -> int:
        return len(self.schemas)


def list_vault_files(
    vault_dir: Path, *, ignore: list[str] | None = None
) -> tuple[list[str], list[str]]:
    """Return (note paths, schema paths) relative to vault_dir, sorted by name."""
    patterns = DEFAULT_IGNORE_PATTERNS if ignore is None else ignore
    notes: list[str] = []
    schemas: list[str] = []
    for path in sorted(vault_dir.iterdir()):
        if not path.is_file() or glob_match(patterns, path.name):
            continue
        if path.name.endswith(SCHEMA_SUFFIX):
            schemas.append(path.name)
        elif path.suffix == NOTE_SUFFIX:
            notes.append(path.name)
    return notes, schemas


def load_vault(
    vault_dir: Path,
    *,
    options: ParserOptions | None = None,
    ignore: list[str] | None = None,
) -> VaultLoad:
    """Build the note tree and resolve the schema files of vault_dir.

    Args:
        vault_dir: Flat directory of ``*.md`` notes and ``*.schema.yml`` files.
        options: Error policy for the tree builder.
        ignore: Glob patterns of file names to leave out.

    Returns:
        VaultLoad with the parse result and the schema records.
    """
    if not vault_dir.is_dir():
        msg = f"Vault directory not found: {vault_dir}"
        raise FileNotFoundError(msg)

    notes, schemas = list_vault_files(vault_dir, ignore=ignore)
    logger.debug("Found {} notes and {} schema files in {}", len(notes), len(schemas), vault_dir)

    parser = FileParser(make_materializer(vault_dir), root=vault_dir, options=options)
    load = VaultLoad(result=parser.parse(notes), schemas=parser.parse_schema(schemas))

    logger.info(
        "Load complete: {} notes, {} stubs, {} schemas",
        load.num_notes, load.num_stubs, load.num_schemas,
    )
    return load
