"""Synthesize placeholder notes for missing ancestors."""

from loguru import logger

from notetree.core.tree.paths import dir_name
from notetree.models.node import DNode, create_stub


def create_stub_notes(closest_parent: DNode, orphan: DNode) -> list[DNode]:
    """Connect orphan to closest_parent through one stub per missing segment.

    Only the chain between the two nodes is touched. A child of the running
    parent that already carries the segment's title is reused instead of
    adding a duplicate sibling, so repeated calls for the same missing path
    create its stubs once.

    Returns:
        The stubs created by this call, ordered from the top down.
    """
    from_path = closest_parent.logical_path
    to_path = orphan.fname
    if from_path and not to_path.startswith(from_path + "."):
        msg = f"{closest_parent.fname!r} is not an ancestor of {to_path!r}"
        raise ValueError(msg)

    # Segments between the two nodes; the orphan's own segment is excluded.
    between = dir_name(to_path)[len(from_path) :].lstrip(".")
    segments = between.split(".") if between else []

    created: list[DNode] = []
    parent = closest_parent
    stub_path = from_path
    for part in segments:
        stub_path = f"{stub_path}.{part}" if stub_path else part
        existing = next((c for c in parent.children if c.title == part), None)
        if existing is not None:
            parent = existing
            continue
        stub = create_stub(stub_path)
        parent.add_child(stub)
        logger.debug("Created stub {} under {}", stub_path, parent.fname)
        created.append(stub)
        parent = stub

    parent.add_child(orphan)
    return created
