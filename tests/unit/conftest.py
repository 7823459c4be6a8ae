"""Shared test fixtures."""

from pathlib import Path

import pytest

from notetree.config import ParserOptions
from notetree.core.importer.parser import FileParser
from tests.unit.fakes import FakeMaterializer

VAULT_FILES = {
    "root.md": "---\nid: root\ntitle: Root\n---\nWelcome",
    "root.schema.yml": "- id: root\n  children: [project]\n",
    "project.md": "---\nid: p1\ndesc: All projects\ncreated: '1000'\n---\nProjects live here",
    "project.backend.md": "---\nid: p2\n---\nBackend",
    "project.backend.api.md": "---\nid: p3\nowner: sam\n---\nAPI docs",
    "project.frontend.md": "---\nid: p4\n---\n",
    "journal.2024.01.md": "---\nid: j1\n---\nNew year",
    "project.schema.yml": (
        "imports: [shared]\n"
        "schemas:\n"
        "  - id: project\n"
        "    children: [backend]\n"
        "  - id: backend\n"
        "    pattern: backend\n"
    ),
    "shared.schema.yml": "- id: x\n  children: [y]\n- id: y\n  pattern: why\n",
    "notes.txt": "not a note",
}


@pytest.fixture
def vault(tmp_path: Path) -> Path:
    """Return a vault directory with notes, a missing ancestor and schemas."""
    root = tmp_path / "vault"
    root.mkdir()
    for name, contents in VAULT_FILES.items():
        (root / name).write_text(contents)
    return root


@pytest.fixture
def materializer() -> FakeMaterializer:
    return FakeMaterializer()


@pytest.fixture
def relaxed_parser(materializer: FakeMaterializer, tmp_path: Path) -> FileParser:
    """A parser that repairs missing parents and skips bad files."""
    options = ParserOptions(error_on_empty=False, error_on_bad_parse=False)
    return FileParser(materializer, root=tmp_path, options=options)
