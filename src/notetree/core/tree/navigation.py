"""Tree navigation: breadcrumbs, siblings, traversal."""

from collections.abc import Iterator

from notetree.models.node import DNode


def get_breadcrumbs(node: DNode) -> tuple[DNode, ...]:
    """Return ancestors in order from root to immediate parent (excludes the node itself)."""
    ancestors: list[DNode] = []
    current = node.parent
    while current is not None:
        ancestors.append(current)
        current = current.parent
    return tuple(reversed(ancestors))


def get_siblings(node: DNode, *, count: int = 3) -> tuple[tuple[DNode, ...], tuple[DNode, ...]]:
    """Get siblings before and after a node.

    Returns (siblings_before, siblings_after) tuples.
    """
    if node.parent is None:
        return (), ()
    siblings = node.parent.children
    idx = next(i for i, s in enumerate(siblings) if s is node)
    return tuple(siblings[max(0, idx - count) : idx]), tuple(siblings[idx + 1 : idx + 1 + count])


def walk(node: DNode) -> Iterator[DNode]:
    """Yield node and its descendants in pre-order, children in insertion order."""
    todo = [node]
    while todo:
        current = todo.pop()
        yield current
        todo.extend(reversed(current.children))


def find_by_path(root: DNode, path: str) -> DNode | None:
    """Return the node below root whose computed path equals path."""
    return next((n for n in walk(root) if n.path == path), None)
