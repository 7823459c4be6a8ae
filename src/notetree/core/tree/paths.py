"""Helpers for dot-separated note paths."""

from notetree.config import ROOT_NAME
from notetree.models.node import DNode


def dir_name(path: str) -> str:
    """Drop the last segment: "a.b.c" -> "a.b", "a" -> ""."""
    return path.rsplit(".", 1)[0] if "." in path else ""


def level_of(prefix: str) -> int:
    return len(prefix.split("."))


def find_closest_parent(logical_path: str, nodes_by_fname: dict[str, DNode]) -> DNode:
    """Return the deepest indexed ancestor of logical_path.

    Trailing segments are trimmed until a node with that fname exists;
    the root is the fallback.
    """
    candidate = dir_name(logical_path)
    while candidate:
        node = nodes_by_fname.get(candidate)
        if node is not None:
            return node
        candidate = dir_name(candidate)
    return nodes_by_fname[ROOT_NAME]
