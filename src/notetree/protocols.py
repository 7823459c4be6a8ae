"""Protocols for the collaborators the tree builder depends on."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TreeNode(Protocol):
    """Capability shared by every node kind (note, stub, schema entry)."""

    title: str

    @property
    def path(self) -> str:
        """Dot-joined titles from the root (exclusive) down to this node."""
        ...

    @property
    def url(self) -> str | None:
        """Position-independent address of the node."""
        ...

    def add_child(self, child: Any) -> None:
        """Attach a child node."""
        ...

    def render_body(self) -> str:
        """Return the body, or a placeholder when empty."""
        ...


@runtime_checkable
class MaterializerProtocol(Protocol):
    """Turns a note file into raw node properties (front matter plus body)."""

    def __call__(self, fpath: str) -> dict[str, Any]:
        """Read fpath (relative to the vault) and return its properties."""
        ...


@runtime_checkable
class GlobMatcherProtocol(Protocol):
    """Glob predicate used for reserved and ignored file names."""

    def __call__(self, patterns: list[str], path: str) -> bool:
        """Return True if path matches any of the patterns."""
        ...
