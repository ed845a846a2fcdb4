"""Group qualified class names into a namespace hierarchy."""

from __future__ import annotations

import bisect
from typing import Dict, Iterable, List, Sequence

from .models import NAMESPACE_SEPARATOR


class NamespaceNode:
    def __init__(self, name: str):
        self.name = name
        self.children: Dict[str, NamespaceNode] = {}
        self.classes: List[str] = []

    def add(self, path: Sequence[str], full_name: str) -> None:
        node = self
        for segment in path:
            child = node.children.get(segment)
            if child is None:
                child = node.children[segment] = NamespaceNode(segment)
            node = child
        if full_name not in node.classes:
            bisect.insort(node.classes, full_name)

    def iter_children(self) -> List["NamespaceNode"]:
        return [self.children[key] for key in sorted(self.children)]

    def __repr__(self) -> str:
        return f"NamespaceNode({self.name!r}, children={sorted(self.children)}, classes={self.classes})"


def build_namespace_tree(names: Iterable[str], separator: str = NAMESPACE_SEPARATOR) -> NamespaceNode:
    """Build a tree whose leaves list the qualified names under each namespace.

    Names without a namespace part land in the root's class list.
    """
    root = NamespaceNode("")
    for full_name in names:
        parts = full_name.split(separator)
        root.add(parts[:-1], full_name)
    return root
