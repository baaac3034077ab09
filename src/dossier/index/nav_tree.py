"""Side-navigation tree built from navigation index entries.

Dotted names are split into nested nodes, then the tree is tidied so
every leaf carries an entry and only namespaces keep children:

    a.b.C, a.b.D, x.Y        ->   a.b ─┬─ C
                                      └─ D
                                  x.Y
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from ..exceptions import InvariantViolationError


@dataclass(eq=False)
class TreeNode:
    """A key plus an optional index entry, with ordered children."""

    key: str
    value: Optional[dict[str, Any]] = None
    parent: Optional[TreeNode] = field(default=None, repr=False)
    children: list[TreeNode] = field(default_factory=list, repr=False)

    def add_child(self, node: TreeNode) -> None:
        if node.parent is not None:
            raise InvariantViolationError(f"Node {node.key} already has a parent")
        node.parent = self
        self.children.append(node)

    def remove_child(self, node: TreeNode) -> None:
        if node.parent is not self:
            raise InvariantViolationError(f"Node {node.key} is not a child of {self.key}")
        node.parent = None
        self.children.remove(node)

    def remove_children(self) -> list[TreeNode]:
        removed, self.children = self.children, []
        for child in removed:
            child.parent = None
        return removed

    def find_child(self, key: str) -> Optional[TreeNode]:
        for child in self.children:
            if child.key == key:
                return child
        return None

    def to_dict(self) -> dict[str, Any]:
        node: dict[str, Any] = {"key": self.key}
        if self.value is not None:
            node["href"] = self.value.get("href")
            if self.value.get("interface"):
                node["interface"] = True
        if self.children:
            node["children"] = [child.to_dict() for child in self.children]
        return node


def build_tree(
    entries: Iterable[dict[str, Any]], is_module: bool = False, root: Optional[TreeNode] = None
) -> TreeNode:
    """Build a tree whose root stands for the global scope (or the enclosing module).

    Module entries become direct children of the root, with their nested
    types below them. Type entries are placed by dotted name.
    """
    if root is None:
        root = TreeNode("")

    for entry in entries:
        if is_module:
            module_root = TreeNode(entry["name"], entry)
            root.add_child(module_root)
            if entry.get("types"):
                build_tree(entry["types"], False, module_root)
            continue

        current = root
        for part in entry["name"].split("."):
            # A module's types may repeat the module key as their first segment.
            if current is root and part == root.key:
                continue
            found = current.find_child(part)
            if found is None:
                found = TreeNode(part)
                current.add_child(found)
            current = found
        if current.value is not None:
            raise InvariantViolationError(f"Duplicate navigation entry {entry['name']}")
        current.value = entry

    _collapse(root)
    _sort(root)
    return root


def _collapse(node: TreeNode) -> None:
    """Merge chains of empty nodes and hoist the children of non-namespace types."""
    if not node.children:
        return

    for child in list(node.children):
        _collapse(child)

    for child in [c for c in node.children if c.value is None and len(c.children) == 1]:
        _hoist(node, child)
        node.remove_child(child)

    for child in [
        c
        for c in node.children
        if c.value is not None
        and not c.value.get("namespace")
        and not c.value.get("types")
        and c.children
    ]:
        _hoist(node, child)


def _hoist(node: TreeNode, child: TreeNode) -> None:
    for grandchild in child.remove_children():
        grandchild.key = f"{child.key}.{grandchild.key}"
        node.add_child(grandchild)


def _sort(node: TreeNode) -> None:
    node.children.sort(key=lambda child: child.key)
    for child in node.children:
        _sort(child)
