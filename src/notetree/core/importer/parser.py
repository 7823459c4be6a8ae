"""Build a note tree from a flat list of dot-named note files."""

from collections.abc import Callable
from pathlib import Path

from loguru import logger

from notetree.config import RESERVED_PATTERNS, ROOT_NAME, ParserOptions
from notetree.core.importer.file_meta import get_file_meta, glob_match
from notetree.core.importer.schema_reader import parse_schema_file
from notetree.core.tree.paths import dir_name, find_closest_parent, level_of
from notetree.core.tree.stubs import create_stub_notes
from notetree.exceptions import NoParentPathError
from notetree.models.node import (
    DNode,
    FileMeta,
    IssueStatus,
    ParseIssue,
    ParseReport,
    ParseResult,
    SchemaRecord,
    create_note,
)
from notetree.protocols import GlobMatcherProtocol, MaterializerProtocol


class FileParser:
    """Reconstruct the note hierarchy level by level.

    Files are grouped by the number of segments in their name, so every
    candidate parent of a level is materialized before that level is
    processed, whatever the input order. Each ``parse`` call owns its node
    index and returns its own report; the parser keeps no state between runs.
    """

    def __init__(
        self,
        materialize: MaterializerProtocol,
        *,
        root: Path,
        options: ParserOptions | None = None,
        matches: GlobMatcherProtocol = glob_match,
    ) -> None:
        self.materialize = materialize
        self.root = root
        self.options = options or ParserOptions()
        self.matches = matches

    def _to_node(self, meta: FileMeta, report: ParseReport) -> DNode | None:
        """Materialize a file into a detached note, or None if it was skipped."""
        try:
            props = self.materialize(meta.fpath)
        except Exception as e:
            logger.error("Failed to parse {}: {}", meta.fpath, e)
            if self.options.error_on_bad_parse:
                raise
            report.errors.append(ParseIssue(IssueStatus.BAD_PARSE, meta.fpath, str(e)))
            return None
        return create_note(props, fname=meta.prefix)

    def parse(self, fpaths: list[str]) -> ParseResult:
        """Build the tree and return every node keyed by fname.

        Args:
            fpaths: Note paths relative to the vault, in a deterministic order.

        Returns:
            ParseResult with the root, domain roots, deeper notes and stubs,
            plus the report of everything skipped or synthesized.

        Raises:
            NoParentPathError: A parent is missing and ``error_on_empty`` is set.
            Exception: Whatever the materializer raised, if ``error_on_bad_parse`` is set.
        """
        report = ParseReport()
        file_meta = get_file_meta(fpaths)
        root_metas = [m for m in file_meta.get(1, []) if m.prefix == ROOT_NAME]
        if len(root_metas) != 1:
            detail = "no root file" if not root_metas else f"{len(root_metas)} root files"
            logger.warning("Cannot build tree: {}", detail)
            report.errors.append(ParseIssue(IssueStatus.EMPTY_INPUT, f"{ROOT_NAME}.md", detail))
            return ParseResult(report=report)

        root_meta = root_metas[0]
        root_node = self._to_node(root_meta, report)
        if root_node is None:
            return ParseResult(report=report)

        nodes_by_fname: dict[str, DNode] = {ROOT_NAME: root_node}
        # Nodes registered per level, the candidate parents of the next level.
        by_level: dict[int, list[DNode]] = {1: []}

        def register(node: DNode) -> None:
            if node.fname in nodes_by_fname:
                logger.warning("Duplicate note name {}, keeping the last one", node.fname)
            nodes_by_fname[node.fname] = node
            by_level.setdefault(level_of(node.fname), []).append(node)

        # Domain roots hang directly off the root, no parent lookup.
        for meta in file_meta[1]:
            if meta is root_meta:
                continue
            node = self._to_node(meta, report)
            if node is None:
                continue
            root_node.add_child(node)
            register(node)

        for level in range(2, max(file_meta) + 1):
            # snapshot: stubs registered while this level runs are not candidates
            candidates = list(by_level.get(level - 1, []))
            logger.debug(
                "Level {}: {} files, {} candidate parents",
                level, len(file_meta.get(level, [])), len(candidates),
            )
            for meta in file_meta.get(level, []):
                if self.matches(RESERVED_PATTERNS, meta.fpath):
                    logger.debug("Skipping reserved file {}", meta.fpath)
                    continue
                node = self._to_node(meta, report)
                if node is None:
                    continue

                parent_path = dir_name(meta.prefix)
                parent = next((p for p in candidates if p.path == parent_path), None)
                if parent is not None:
                    parent.add_child(node)
                else:
                    self._attach_orphan(node, meta, parent_path, nodes_by_fname, report, register)
                register(node)

        logger.info(
            "Built tree: {} nodes, {} errors, {} missing",
            len(nodes_by_fname), report.num_errors, len(report.missing),
        )
        return ParseResult(nodes=nodes_by_fname, report=report)

    def _attach_orphan(
        self,
        node: DNode,
        meta: FileMeta,
        parent_path: str,
        nodes_by_fname: dict[str, DNode],
        report: ParseReport,
        register: Callable[[DNode], None],
    ) -> None:
        """Record the missing parent and connect node through stubs."""
        issue = ParseIssue(IssueStatus.NO_PARENT_PATH, meta.fpath, parent_path)
        if self.options.error_on_empty:
            raise NoParentPathError(issue)
        logger.warning("No parent {} for {}, creating stubs", parent_path, meta.fpath)
        report.errors.append(issue)
        report.add_missing(parent_path)

        closest = find_closest_parent(node.fname, nodes_by_fname)
        for stub in create_stub_notes(closest, node):
            register(stub)

    def parse_schema(self, fpaths: list[str]) -> list[SchemaRecord]:
        """Resolve each schema file (relative to root) and concatenate the records."""
        records: list[SchemaRecord] = []
        for fpath in fpaths:
            records.extend(parse_schema_file(fpath, root=self.root))
        return records
