"""Tests for the level-by-level tree builder."""

from pathlib import Path

import pytest

from notetree.config import ParserOptions
from notetree.core.importer.parser import FileParser
from notetree.core.tree.navigation import get_breadcrumbs
from notetree.exceptions import BadParseError, NoParentPathError
from notetree.models.node import IssueStatus
from tests.unit.fakes import FakeMaterializer


def test_builds_tree_regardless_of_input_order(relaxed_parser: FileParser) -> None:
    result = relaxed_parser.parse(["a.b.c.md", "a.b.md", "b.md", "root.md", "a.md"])

    assert set(result.nodes) == {"root", "a", "a.b", "a.b.c", "b"}
    assert result.report.num_errors == 0
    assert result.stubs == []
    root = result.root
    assert root is not None
    assert [c.fname for c in root.children] == ["b", "a"]
    assert result.nodes["a.b.c"].parent is result.nodes["a.b"]


def test_paths_match_fnames_and_reach_root(relaxed_parser: FileParser) -> None:
    result = relaxed_parser.parse(["root.md", "a.md", "a.b.md", "x.y.z.md", "a.c.d.e.md"])
    root = result.root
    for fname, node in result.nodes.items():
        if node is root:
            continue
        assert node.path == fname
        assert get_breadcrumbs(node)[0] is root


def test_stub_fidelity_for_missing_ancestors(relaxed_parser: FileParser) -> None:
    result = relaxed_parser.parse(["root.md", "a.b.c.md"])

    stubs = result.stubs
    assert sorted(s.title for s in stubs) == ["a", "b"]
    a, ab, abc = result.nodes["a"], result.nodes["a.b"], result.nodes["a.b.c"]
    assert a.is_stub and ab.is_stub and not abc.is_stub
    assert a.parent is result.root
    assert abc.parent is ab
    assert result.report.missing == ["a.b"]
    assert result.report.errors[0].status is IssueStatus.NO_PARENT_PATH
    assert result.report.errors[0].file == "a.b.c.md"


def test_missing_parent_raises_by_default(materializer: FakeMaterializer, tmp_path: Path) -> None:
    parser = FileParser(materializer, root=tmp_path)
    with pytest.raises(NoParentPathError) as exc_info:
        parser.parse(["root.md", "a.b.c.md"])
    assert exc_info.value.issue.detail == "a.b"


def test_stubs_are_reused_for_siblings(relaxed_parser: FileParser) -> None:
    result = relaxed_parser.parse(["root.md", "x.y.a.md", "x.y.b.md", "x.y.b.c.md"])

    assert sorted(s.fname for s in result.stubs) == ["x", "x.y"]
    assert len(result.root.children) == 1
    assert result.nodes["x.y.a"].parent is result.nodes["x.y.b"].parent
    assert result.nodes["x.y.b.c"].parent is result.nodes["x.y.b"]
    # each orphan is reported, the missing path only once
    assert [e.file for e in result.report.errors] == ["x.y.a.md", "x.y.b.md"]
    assert result.report.missing == ["x.y"]


def test_stub_under_existing_domain_root(relaxed_parser: FileParser) -> None:
    result = relaxed_parser.parse(["root.md", "a.md", "a.b.c.d.md"])

    assert sorted(s.fname for s in result.stubs) == ["a.b", "a.b.c"]
    assert result.nodes["a.b"].parent is result.nodes["a"]
    assert result.report.missing == ["a.b.c"]


def test_reserved_root_companions_are_skipped(
    relaxed_parser: FileParser, materializer: FakeMaterializer
) -> None:
    result = relaxed_parser.parse(["root.md", "root.schema.md", "a.md"])
    assert "root.schema" not in result.nodes
    assert "root.schema.md" not in materializer.calls


@pytest.mark.parametrize(
    "fpaths",
    [
        ["a.md", "a.b.md"],
        ["root.md", "sub/root.md", "a.md"],
        [],
    ],
)
def test_requires_exactly_one_root(relaxed_parser: FileParser, fpaths: list[str]) -> None:
    result = relaxed_parser.parse(fpaths)
    assert result.nodes == {}
    assert result.root is None
    assert [e.status for e in result.report.errors] == [IssueStatus.EMPTY_INPUT]


def test_missing_root_is_reported(materializer: FakeMaterializer, tmp_path: Path) -> None:
    # never raises, even with the strict defaults
    result = FileParser(materializer, root=tmp_path).parse(["a.md"])
    assert result.nodes == {}
    assert result.report.errors[0].status is IssueStatus.EMPTY_INPUT


def test_bad_parse_raises_by_default(materializer: FakeMaterializer, tmp_path: Path) -> None:
    materializer.add_failure("a.md", BadParseError("broken front matter"))
    parser = FileParser(materializer, root=tmp_path)
    with pytest.raises(BadParseError):
        parser.parse(["root.md", "a.md"])


def test_bad_parse_is_recorded_and_skipped(
    relaxed_parser: FileParser, materializer: FakeMaterializer
) -> None:
    materializer.add_failure("a.md", BadParseError("broken front matter"))
    result = relaxed_parser.parse(["root.md", "a.md", "b.md"])

    assert "a" not in result.nodes
    assert "b" in result.nodes
    issue = result.report.errors[0]
    assert issue.status is IssueStatus.BAD_PARSE
    assert issue.file == "a.md"
    assert "broken front matter" in issue.detail


def test_bad_parse_of_parent_turns_children_into_orphans(
    relaxed_parser: FileParser, materializer: FakeMaterializer
) -> None:
    materializer.add_failure("a.md", ValueError("boom"))
    result = relaxed_parser.parse(["root.md", "a.md", "a.b.md"])

    assert result.nodes["a"].is_stub
    assert result.nodes["a.b"].parent is result.nodes["a"]
    assert [e.status for e in result.report.errors] == [
        IssueStatus.BAD_PARSE,
        IssueStatus.NO_PARENT_PATH,
    ]


def test_bad_parse_of_root_returns_empty(
    relaxed_parser: FileParser, materializer: FakeMaterializer
) -> None:
    materializer.add_failure("root.md", ValueError("boom"))
    result = relaxed_parser.parse(["root.md", "a.md"])
    assert result.nodes == {}
    assert result.report.errors[0].status is IssueStatus.BAD_PARSE


def test_each_run_has_its_own_report(relaxed_parser: FileParser) -> None:
    first = relaxed_parser.parse(["root.md", "a.b.md"])
    second = relaxed_parser.parse(["root.md", "a.md"])
    assert first.report.num_errors == 1
    assert second.report.num_errors == 0
    assert second.report.missing == []


def test_note_properties_come_from_materializer(
    relaxed_parser: FileParser, materializer: FakeMaterializer
) -> None:
    materializer.add_note("a.md", id="n1", desc="A", body="hello", schemaId="s1")
    note = relaxed_parser.parse(["root.md", "a.md"]).nodes["a"]
    assert note.id == "n1"
    assert note.title == "a"
    assert note.body == "hello"
    assert note.schema_id == "s1"
    assert note.parent_id is None


def test_options_are_per_instance(materializer: FakeMaterializer, tmp_path: Path) -> None:
    strict = FileParser(materializer, root=tmp_path)
    relaxed = FileParser(materializer, root=tmp_path, options=ParserOptions(error_on_empty=False))
    assert relaxed.parse(["root.md", "a.b.md"]).report.missing == ["a"]
    with pytest.raises(NoParentPathError):
        strict.parse(["root.md", "a.b.md"])


def test_root_segment_below_level_one_is_an_ordinary_title(
    materializer: FakeMaterializer, tmp_path: Path
) -> None:
    parser = FileParser(materializer, root=tmp_path)
    result = parser.parse(["root.md", "a.md", "a.root.md", "a.root.x.md", "a.root.x.y.md"])

    assert result.report.num_errors == 0
    assert result.nodes["a.root.x"].path == "a.root.x"
    assert result.nodes["a.root.x.y"].parent is result.nodes["a.root.x"]


def test_stubs_from_the_running_level_are_not_parent_candidates(
    relaxed_parser: FileParser,
) -> None:
    # a.b fills level 2 before the x.y stubs are registered there
    result = relaxed_parser.parse(["root.md", "a.md", "a.b.md", "x.y.a.md", "x.y.b.md"])

    assert [e.file for e in result.report.errors] == ["x.y.a.md", "x.y.b.md"]
    assert result.report.missing == ["x.y"]
    assert sorted(s.fname for s in result.stubs) == ["x", "x.y"]
    assert result.nodes["x.y.b"].parent is result.nodes["x.y"]
