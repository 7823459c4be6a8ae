"""Rebuild note hierarchies from flat, dot-named note and schema files."""

from notetree.config import ParserOptions
from notetree.core.importer.loader import VaultLoad, load_vault
from notetree.core.importer.parser import FileParser
from notetree.core.importer.schema_reader import parse_schema_file
from notetree.models.node import DNode, NodeKind, ParseReport, ParseResult, SchemaRecord

__all__ = [
    "DNode",
    "FileParser",
    "NodeKind",
    "ParseReport",
    "ParseResult",
    "ParserOptions",
    "SchemaRecord",
    "VaultLoad",
    "load_vault",
    "parse_schema_file",
]
