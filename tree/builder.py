"""
Tree builder: flat parent-referencing course items → indented display order.

The course-tree service returns a flat list of items, each pointing at its
parent by id (parent_id == 0 marks a root). This module links them back
into a forest and flattens it depth-first so the caller can render rows
top to bottom without any further bookkeeping.

Passes (each over the input in its original order):
    1. Index  : register one node per id (a later duplicate replaces the earlier node)
    2. Link   : attach every item's registered node to its parent, or to the roots
    3. Order  : roots and every child list sorted by id ascending
    4. Flatten: pre-order walk emitting {id, name, depth}

Items whose parent_id is neither 0 nor a known id are dropped, and so is
everything underneath them.

Public API:
    build_tree(items) → list[DisplayItem]
"""

from collections.abc import Mapping
from typing import Any

ROOT_PARENT_ID = 0

CourseItem = dict[str, Any]     # {"id": int, "name": str, "parent_id": int}
DisplayItem = dict[str, Any]    # {"id": int, "name": str, "depth": int}


class TreeNode:
    __slots__ = ("id", "name", "parent_id", "children")

    def __init__(self, item: CourseItem):
        self.id        = item["id"]
        self.name      = item.get("name", "")
        self.parent_id = item.get("parent_id")
        self.children: list["TreeNode"] = []

    def __repr__(self) -> str:
        return f"<TreeNode id={self.id!r} children={len(self.children)}>"


def _by_id(node: TreeNode) -> Any:
    return node.id


def _linkable(items: list[Any]) -> list[CourseItem]:
    """Items with an id; anything else can never be placed and is skipped."""
    return [item for item in items if isinstance(item, Mapping) and "id" in item]


# ---------------------------------------------------------------------------
# Passes
# ---------------------------------------------------------------------------

def _index(items: list[CourseItem]) -> dict[Any, TreeNode]:
    index: dict[Any, TreeNode] = {}
    for item in items:
        index[item["id"]] = TreeNode(item)
    return index


def _link(items: list[CourseItem], index: dict[Any, TreeNode]) -> list[TreeNode]:
    """Attach nodes to their parents; return the (unsorted) roots."""
    roots: list[TreeNode] = []
    for item in items:
        node = index[item["id"]]
        parent_id = item.get("parent_id")
        if parent_id == ROOT_PARENT_ID:
            roots.append(node)
            continue

        parent = index.get(parent_id)
        if parent is not None:
            parent.children.append(node)
        # else: orphan (or no parent_id), never reachable from a root

    return roots


def _sort(roots: list[TreeNode]) -> None:
    """Sort roots and every reachable child list by id, in place."""
    roots.sort(key=_by_id)
    stack = list(roots)
    while stack:
        node = stack.pop()
        node.children.sort(key=_by_id)
        stack.extend(node.children)


def _flatten(roots: list[TreeNode]) -> list[DisplayItem]:
    display: list[DisplayItem] = []
    stack = [(root, 0) for root in reversed(roots)]
    while stack:
        node, depth = stack.pop()
        display.append({"id": node.id, "name": node.name, "depth": depth})
        # Reversed so the smallest id is popped first.
        stack.extend((child, depth + 1) for child in reversed(node.children))
    return display


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_tree(items: list[CourseItem]) -> list[DisplayItem]:
    """
    Rebuild the hierarchy described by `items` and return it in display order.

    Args:
        items: course items as returned by the service, in service order.
               Elements that are not mappings or have no "id" are skipped;
               an item without "parent_id" is treated as an orphan.

    Returns:
        list of {"id", "name", "depth"} dicts, pre-order, siblings by
        ascending id. Empty when `items` is empty or nothing reaches a root.
    """
    items = _linkable(items)
    if not items:
        return []

    index = _index(items)
    roots = _link(items, index)
    _sort(roots)
    return _flatten(roots)
