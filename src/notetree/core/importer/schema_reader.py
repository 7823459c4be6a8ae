"""Parse schema files (version 0 and version 1) into schema records.

Version 0 files are a bare list of entries. Version 1 files are a mapping
with ``imports`` (names of other schema files) and ``schemas`` (entries).
Entries pulled in through an import are namespaced with the imported
module's name and folded into the importing file.
"""

from collections.abc import Callable
from pathlib import Path, PurePosixPath
from typing import Any

import yaml
from loguru import logger

from notetree.config import SCHEMA_SUFFIX
from notetree.exceptions import ImportCycleError, SchemaFormatError
from notetree.models.node import SchemaRecord

YamlLoader = Callable[[str], Any]

# Entry keys that describe the record itself rather than its data.
_STRUCTURAL_KEYS = ("id", "fname", "parent", "children")


def schema_fname(fpath: str) -> str:
    """Strip directory and extensions: shared.schema.yml -> shared."""
    return PurePosixPath(fpath).stem.removesuffix(".schema")


def create_raw_props(entry: Any, *, fname: str) -> SchemaRecord:
    """Normalize a single schema entry as written in a file."""
    if not isinstance(entry, dict) or not entry.get("id"):
        msg = f"Schema entry in {fname!r} needs an id: {entry!r}"
        raise SchemaFormatError(msg)
    schema_id = str(entry["id"])
    data = {k: v for k, v in entry.items() if k not in _STRUCTURAL_KEYS}
    data.setdefault("title", schema_id)
    data.setdefault("desc", "")
    return SchemaRecord(
        id=schema_id,
        fname=fname,
        data=data,
        parent=None,
        children=[str(c) for c in entry.get("children") or []],
    )


def parse_schema_version1(
    schema: dict[str, Any],
    *,
    fname: str,
    root: Path,
    load_yaml: YamlLoader = yaml.safe_load,
    chain: tuple[str, ...] = (),
) -> list[SchemaRecord]:
    """Resolve imports of a version 1 schema and append the file's own entries.

    Args:
        schema: The parsed ``{imports, schemas}`` mapping.
        fname: Name of the importing file (without ``.schema.yml``).
        root: Directory the import names are resolved against.
        load_yaml: Parser for schema file text.
        chain: Files being resolved above this one, used for cycle detection.
    """
    imported: list[SchemaRecord] = []
    for name in schema.get("imports") or []:
        imported.extend(
            parse_schema_file(
                f"{name}{SCHEMA_SUFFIX}", root=root, load_yaml=load_yaml, chain=(*chain, fname)
            )
        )

    for record in imported:
        domain = record.fname
        record.data["pattern"] = record.data.get("pattern") or record.id
        record.id = f"{domain}.{record.id}"
        record.fname = fname
        record.parent = None
        record.children = [f"{domain}.{c}" for c in record.children]

    own = [create_raw_props(entry, fname=fname) for entry in schema.get("schemas") or []]
    return imported + own


def parse_schema_file(
    fpath: str,
    *,
    root: Path,
    load_yaml: YamlLoader = yaml.safe_load,
    chain: tuple[str, ...] = (),
) -> list[SchemaRecord]:
    """Parse a schema file (relative to root) into a flat list of records.

    Raises:
        FileNotFoundError: The file, or one of its imports, does not exist.
        SchemaFormatError: The file is neither version 0 nor version 1.
        ImportCycleError: The file (transitively) imports itself.
    """
    fname = schema_fname(fpath)
    if fname in chain:
        raise ImportCycleError((*chain, fname))

    raw = load_yaml((root / fpath).read_text(encoding="utf-8"))

    if isinstance(raw, list):
        logger.debug("Parsing {} as schema version 0", fpath)
        return [create_raw_props(entry, fname=fname) for entry in raw]

    if isinstance(raw, dict) and ("imports" in raw or "schemas" in raw):
        logger.debug("Parsing {} as schema version 1", fpath)
        return parse_schema_version1(raw, fname=fname, root=root, load_yaml=load_yaml, chain=chain)

    msg = f"Unrecognized schema format in {fpath!r}: expected a list or imports/schemas"
    raise SchemaFormatError(msg)
