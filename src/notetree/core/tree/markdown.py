"""Render note subtrees as markdown."""

import io

from notetree.models.node import DNode


def render_subtree_as_markdown(
    node: DNode,
    *,
    max_depth: int | None = None,
    include_desc: bool = True,
) -> str:
    """Render a node and its descendants as indented markdown.

    Args:
        node: The node to start rendering from.
        max_depth: Max levels below the start node to include (None = unlimited).
        include_desc: Whether to include node descriptions.

    Returns:
        Markdown string with bullet-list hierarchy. Stubs are marked as such.
    """
    out = io.StringIO()
    todo: list[tuple[DNode, int]] = [(node, 0)]
    while todo:
        current, depth = todo.pop()
        indent = "    " * depth

        marker = " _(stub)_" if current.is_stub else ""
        out.write(f"{indent}- {current.title}{marker}\n")

        if include_desc and current.desc:
            for desc_line in current.desc.split("\n"):
                out.write(f"{indent}  > {desc_line}\n")

        # Truncation indicator when children are cut off by max_depth
        if max_depth is not None and depth == max_depth:
            child_count = len(current.children)
            if child_count > 0:
                noun = "child" if child_count == 1 else "children"
                out.write(f"{indent}    - ... ({child_count} more {noun}, fname={current.fname})\n")
            continue

        todo.extend((child, depth + 1) for child in reversed(current.children))

    return out.getvalue()
