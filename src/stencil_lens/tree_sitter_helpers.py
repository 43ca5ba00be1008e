# --- Tree-sitter plumbing ----------------------------------------------------
from typing import Callable, Optional

from tree_sitter import Node, Tree


def node_text(source_bytes: bytes, node) -> str:
    """
    Converts a node's [start_byte:end_byte] into the corresponding string.
    Tree-sitter nodes only store byte offsets, so we slice the original source.
    """
    return source_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def _root(tree) -> Optional[Node]:
    if tree is None:
        return None
    if isinstance(tree, Tree):
        return tree.root_node
    return tree


# --- Tree queries -------------------------------------------------------------

def find_node(tree, position: int) -> Optional[Node]:
    """
    Returns the deepest node whose [start_byte, end_byte) span contains
    `position` (a byte offset), or None when the tree is missing or the
    position is out of range.

    Accepts either a Tree or any Node to start from.
    """
    node = _root(tree)
    if node is None or not (node.start_byte <= position < node.end_byte):
        return None

    # Children of a node never overlap, so at most one of them can contain it.
    while True:
        for child in node.children:
            if child.start_byte <= position < child.end_byte:
                node = child
                break
        else:
            return node


def find_all_nodes(tree, predicate: Callable[[Node], bool]) -> list[Node]:
    """
    Collects every node satisfying `predicate`, in pre-order.
    """
    root = _root(tree)
    if root is None:
        return []

    found: list[Node] = []
    stack = [root]
    while stack:
        node = stack.pop()
        if predicate(node):
            found.append(node)
        # Reverse so the leftmost child is popped first (pre-order)
        stack.extend(reversed(node.children))
    return found


def ancestors(node: Node):
    """Yields the node's parents, innermost first."""
    parent = node.parent
    while parent is not None:
        yield parent
        parent = parent.parent
