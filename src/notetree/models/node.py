"""Domain models for note trees."""

import json
import uuid
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from notetree.config import EMPTY_BODY_PLACEHOLDER, ROOT_NAME


class NodeKind(StrEnum):
    """Kind tag selecting how a node came to exist."""

    NOTE = "note"
    STUB = "stub"
    SCHEMA = "schema"


@dataclass(eq=False)
class DNode:
    """A single node in a note or schema tree.

    ``parent`` and ``children`` are live references owned by the tree;
    ``parent_id`` and ``children_ids`` mirror them by identifier so the node
    can be flattened without cycles. Only ``add_child`` changes tree shape.
    """

    title: str
    fname: str
    kind: NodeKind = NodeKind.NOTE
    id: str | None = None
    desc: str = ""
    body: str = ""
    updated: str | None = None
    created: str | None = None
    schema_id: str | None = None
    parent: "DNode | None" = field(default=None, repr=False)
    children: list["DNode"] = field(default_factory=list, repr=False)
    parent_id: str | None = None
    children_ids: list[str] = field(default_factory=list)
    custom: dict[str, Any] = field(default_factory=dict)
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def path(self) -> str:
        """Dot-joined titles from the root (exclusive) down to this node.

        Recomputed from the live parent chain on every access.
        """
        parts = [self.title]
        node = self.parent
        while node is not None and not node.is_root:
            parts.append(node.title)
            node = node.parent
        return ".".join(reversed(parts))

    @property
    def logical_path(self) -> str:
        """Like ``path``, but the root itself is the empty path."""
        return "" if self.is_root else self.path

    @property
    def url(self) -> str | None:
        """Position-independent address, None while the id is unset."""
        return None if self.id is None else f"/doc/{self.id}"

    @property
    def is_root(self) -> bool:
        return self.parent is None and self.title == ROOT_NAME

    @property
    def is_stub(self) -> bool:
        return self.kind is NodeKind.STUB

    def add_child(self, child: "DNode") -> None:
        """Attach child under this node.

        Does not check for duplicate titles or cycles.
        """
        self.children.append(child)
        child.parent = self
        child.parent_id = self.id
        if child.id is not None:
            self.children_ids.append(child.id)

    def render_body(self) -> str:
        return self.body or EMPTY_BODY_PLACEHOLDER

    def to_document(self) -> dict[str, Any]:
        """Wrap the rendered body as a single-paragraph rich-text document."""
        return {
            "document": {
                "nodes": [
                    {
                        "object": "block",
                        "type": "paragraph",
                        "nodes": [{"object": "text", "text": self.render_body()}],
                    }
                ]
            }
        }

    def to_raw_props(self) -> dict[str, Any]:
        """Flatten to a cycle-free record of scalar and identifier fields."""
        return {
            "id": self.id,
            "title": self.title,
            "fname": self.fname,
            "type": self.kind.value,
            "desc": self.desc,
            "body": self.body,
            "updated": self.updated,
            "created": self.created,
            "schemaId": self.schema_id,
            "parentId": self.parent_id,
            "childrenIds": list(self.children_ids),
            "custom": dict(self.custom),
            "data": dict(self.data),
        }

    @classmethod
    def from_raw_props(cls, props: dict[str, Any]) -> "DNode":
        """Rebuild a detached node from ``to_raw_props`` output."""
        return cls(
            id=props.get("id"),
            title=props["title"],
            fname=props["fname"],
            kind=NodeKind(props.get("type", NodeKind.NOTE)),
            desc=props.get("desc", ""),
            body=props.get("body", ""),
            updated=props.get("updated"),
            created=props.get("created"),
            schema_id=props.get("schemaId"),
            parent_id=props.get("parentId"),
            children_ids=list(props.get("childrenIds", [])),
            custom=dict(props.get("custom", {})),
            data=dict(props.get("data", {})),
        )


def create_note(props: dict[str, Any], *, fname: str) -> DNode:
    """Create a detached note from materialized front matter and body.

    The title is always the last segment of ``fname``.
    """
    return DNode(
        title=fname.rsplit(".", 1)[-1],
        fname=fname,
        kind=NodeKind.NOTE,
        id=props.get("id"),
        desc=props.get("desc") or "",
        body=props.get("body") or "",
        updated=props.get("updated"),
        created=props.get("created"),
        schema_id=props.get("schemaId"),
        custom=dict(props.get("custom") or {}),
    )


def create_stub(fname: str) -> DNode:
    """Create a placeholder note for an ancestor missing from the vault."""
    return DNode(
        title=fname.rsplit(".", 1)[-1],
        fname=fname,
        kind=NodeKind.STUB,
        id=str(uuid.uuid4()),
    )


@dataclass(frozen=True)
class FileMeta:
    """A note file before it is read."""

    # file name without extension, e.g. "project.backend" for project.backend.md
    prefix: str
    # path relative to the vault
    fpath: str

    @property
    def level(self) -> int:
        return len(self.prefix.split("."))


@dataclass
class SchemaRecord:
    """A schema entry normalized from a version 0 or version 1 schema file."""

    id: str
    fname: str
    data: dict[str, Any] = field(default_factory=dict)
    parent: str | None = None
    children: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "fname": self.fname,
            "data": dict(self.data),
            "parent": self.parent,
            "children": list(self.children),
        }


def create_schema_entry(record: SchemaRecord) -> DNode:
    """Create a detached schema-entry node from a resolved record."""
    return DNode(
        title=record.data.get("title", record.id),
        fname=record.fname,
        kind=NodeKind.SCHEMA,
        id=record.id,
        desc=record.data.get("desc", ""),
        children_ids=list(record.children),
        data=dict(record.data),
    )


class IssueStatus(StrEnum):
    BAD_PARSE = "BAD_PARSE"
    NO_PARENT_PATH = "NO_PARENT_PATH"
    EMPTY_INPUT = "EMPTY_INPUT"


@dataclass(frozen=True)
class ParseIssue:
    """A recoverable problem recorded while building a tree."""

    status: IssueStatus
    file: str
    detail: str

    def to_dict(self) -> dict[str, str]:
        return {"status": self.status.value, "file": self.file, "detail": self.detail}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)


@dataclass
class ParseReport:
    """Everything a single build skipped or repaired."""

    errors: list[ParseIssue] = field(default_factory=list)
    # distinct expected parent paths that had to be synthesized, in discovery order
    missing: list[str] = field(default_factory=list)

    @property
    def num_errors(self) -> int:
        return len(self.errors)

    def add_missing(self, path: str) -> None:
        if path not in self.missing:
            self.missing.append(path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "numErrors": self.num_errors,
            "errors": [e.to_dict() for e in self.errors],
            "missing": list(self.missing),
        }


@dataclass
class ParseResult:
    """Output of FileParser.parse: linked nodes keyed by fname, plus the report."""

    nodes: dict[str, DNode] = field(default_factory=dict)
    report: ParseReport = field(default_factory=ParseReport)

    @property
    def root(self) -> DNode | None:
        return self.nodes.get(ROOT_NAME)

    @property
    def stubs(self) -> list[DNode]:
        return [n for n in self.nodes.values() if n.is_stub]
