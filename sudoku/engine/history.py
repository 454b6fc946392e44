"""Branching undo/redo history.

Every accepted move adds a child to the node being viewed, so undoing and then
playing a different move starts a new branch instead of discarding the old
one. Nodes live in an arena keyed by id; a node refers to its parent and
children by id only.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

T = TypeVar("T")

NO_ACTIVE_CHILD = -1


@dataclass
class HistoryTreeNode(Generic[T]):
    """A snapshot in the history tree."""

    id: str
    value: T
    parent: Optional[str] = None
    children: List[str] = field(default_factory=list)
    # index into `children` that redo follows, -1 when none
    active_child: int = NO_ACTIVE_CHILD

    @property
    def is_root(self) -> bool:
        return self.parent is None


class HistoryTree(Generic[T]):
    """A tree of states with a single `current` cursor."""

    def __init__(self, value: T, node_id: Optional[str] = None):
        root = HistoryTreeNode(id=node_id or uuid.uuid4().hex, value=value)
        self._nodes: Dict[str, HistoryTreeNode[T]] = {root.id: root}
        self._root_id = root.id
        self._current_id = root.id

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._nodes

    @property
    def root(self) -> HistoryTreeNode[T]:
        return self._nodes[self._root_id]

    @property
    def current_node(self) -> HistoryTreeNode[T]:
        return self._nodes[self._current_id]

    @property
    def current(self) -> T:
        """The state at the current position."""
        return self.current_node.value

    @property
    def can_undo(self) -> bool:
        return not self.current_node.is_root

    @property
    def can_redo(self) -> bool:
        return len(self.current_node.children) > 0

    def get(self, node_id: str) -> Optional[HistoryTreeNode[T]]:
        return self._nodes.get(node_id)

    def children(self, node_id: str) -> List[HistoryTreeNode[T]]:
        return [self._nodes[child_id] for child_id in self._nodes[node_id].children]

    def add_child(self, value: T) -> HistoryTreeNode[T]:
        """Append a new state below the current one and move to it."""
        parent = self.current_node
        child = HistoryTreeNode(id=uuid.uuid4().hex, value=value, parent=parent.id)
        self._nodes[child.id] = child
        parent.children.append(child.id)
        parent.active_child = len(parent.children) - 1
        self._current_id = child.id
        return child

    def undo(self) -> bool:
        """
        Move to the parent state.

        The parent forgets its active child, so the next move from there
        starts a new branch. Returns False at the root.
        """
        node = self.current_node
        if node.parent is None:
            return False
        parent = self._nodes[node.parent]
        parent.active_child = NO_ACTIVE_CHILD
        self._current_id = parent.id
        return True

    def redo(self) -> bool:
        """Move to the most recently added child. Returns False at a leaf."""
        node = self.current_node
        if not node.children:
            return False
        node.active_child = len(node.children) - 1
        self._current_id = node.children[node.active_child]
        return True

    def goto(self, node_id: str) -> bool:
        """Jump to any node of the tree. Returns False for an unknown id."""
        if node_id not in self._nodes:
            return False
        self._current_id = node_id
        return True

    def find(self, prefix: str) -> List[HistoryTreeNode[T]]:
        """Nodes whose id starts with `prefix`."""
        return [node for node_id, node in self._nodes.items() if node_id.startswith(prefix)]

    def walk(self) -> Iterator[Tuple[int, HistoryTreeNode[T]]]:
        """Yield (depth, node) in pre-order, children in insertion order."""
        stack = [(0, self._root_id)]
        while stack:
            depth, node_id = stack.pop()
            node = self._nodes[node_id]
            yield depth, node
            for child_id in reversed(node.children):
                stack.append((depth + 1, child_id))

    def serialize(self) -> Dict[str, Any]:
        """Nested structure of the whole tree, rooted at the root whatever `current` is."""

        structures: Dict[str, Dict[str, Any]] = {}
        for _, node in self.walk():
            structure = {
                "_id": node.id,
                "value": node.value,
                "parent": node.parent,
                "activeChild": node.active_child,
                "children": [],
            }
            structures[node.id] = structure
            # pre-order: the parent is always built before its children
            if node.parent is not None:
                structures[node.parent]["children"].append(structure)
        return structures[self._root_id]

    @classmethod
    def deserialize(
        cls, structure: Dict[str, Any], current_id: Optional[str] = None
    ) -> HistoryTree[T]:
        """
        Rebuild a tree from `serialize` output.

        Args:
            structure (`dict`): The nested tree structure.
            current_id (`str`): Node to resume at. The root is used when it is
                None or not part of the tree.

        Returns:
            `HistoryTree`: The rebuilt tree.
        """
        tree = cls(structure["value"], node_id=structure["_id"])
        root = tree.root
        root.active_child = structure.get("activeChild", NO_ACTIVE_CHILD)

        stack = [(root, structure.get("children", []))]
        while stack:
            parent, children = stack.pop()
            for child_structure in children:
                if child_structure["_id"] in tree._nodes:
                    raise ValueError(f"Duplicate node id {child_structure['_id']} in history")
                child = HistoryTreeNode(
                    id=child_structure["_id"],
                    value=child_structure["value"],
                    parent=parent.id,
                    active_child=child_structure.get("activeChild", NO_ACTIVE_CHILD),
                )
                tree._nodes[child.id] = child
                parent.children.append(child.id)
                stack.append((child, child_structure.get("children", [])))

        for node in tree._nodes.values():
            if not NO_ACTIVE_CHILD <= node.active_child < len(node.children):
                raise ValueError(
                    f"Node {node.id} has active child {node.active_child} "
                    f"but only {len(node.children)} children"
                )

        if current_id is not None and current_id in tree._nodes:
            tree._current_id = current_id
        return tree
