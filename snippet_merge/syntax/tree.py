"""
Arena-backed syntax tree.

A SyntaxTree exclusively owns its nodes and addresses them by stable
integer ids. All structural edits go through the methods below; nodes
from another tree are brought in with adopt(), which deep-copies them.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator

from .nodes import ImportDeclaration, Node, NodeId, Program, VariableDeclaration


class SyntaxTree:
    """Program node plus every node reachable from it, keyed by id."""

    def __init__(self):
        self._nodes: dict[NodeId, Node] = {}
        self._next_id = 0
        self.root = self.add(Program())

    def __getitem__(self, node_id: NodeId) -> Node:
        return self._nodes[node_id]

    def __contains__(self, node_id: NodeId) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def program(self) -> Program:
        return self._nodes[self.root]

    @property
    def body(self) -> list[NodeId]:
        """Top-level statement ids in source order (a copy)."""
        return list(self.program.body)

    def statements(self, *types: type) -> Iterator[tuple[NodeId, Node]]:
        """Iterate top-level statements, optionally filtered by node type."""
        for node_id in self.program.body:
            node = self._nodes[node_id]
            if not types or isinstance(node, types):
                yield node_id, node

    def add(self, node: Node) -> NodeId:
        """Register a detached node and return its id."""
        node_id = self._next_id
        self._next_id += 1
        self._nodes[node_id] = node
        return node_id

    def index_of(self, statement_id: NodeId) -> int:
        try:
            return self.program.body.index(statement_id)
        except ValueError:
            raise KeyError(f"Node {statement_id} is not a top-level statement") from None

    def insert_at(self, index: int, statement_id: NodeId) -> None:
        self.program.body.insert(index, statement_id)

    def insert_before(self, anchor_id: NodeId, statement_id: NodeId) -> None:
        self.insert_at(self.index_of(anchor_id), statement_id)

    def insert_after(self, anchor_id: NodeId, statement_id: NodeId) -> None:
        self.insert_at(self.index_of(anchor_id) + 1, statement_id)

    def append(self, statement_id: NodeId) -> None:
        self.program.body.append(statement_id)

    def replace_with(self, old_id: NodeId, new_id: NodeId) -> None:
        """Put new_id at old_id's position and drop old_id from the arena."""
        body = self.program.body
        body[self.index_of(old_id)] = new_id
        self._discard(old_id)

    def remove(self, statement_id: NodeId) -> None:
        self.program.body.remove(statement_id)
        self._discard(statement_id)

    def push_child(self, parent_id: NodeId, child_id: NodeId) -> None:
        """Append a specifier or declarator to its parent statement."""
        parent = self._nodes[parent_id]
        self._children(parent).append(child_id)
        self._touch(parent)

    def remove_child(self, parent_id: NodeId, child_id: NodeId) -> None:
        parent = self._nodes[parent_id]
        self._children(parent).remove(child_id)
        self._touch(parent)
        self._discard(child_id)

    def adopt(self, other: SyntaxTree, node_id: NodeId) -> NodeId:
        """Deep-copy a node (and its children) from another tree into this one."""
        node = copy.deepcopy(other[node_id])
        if isinstance(node, (ImportDeclaration, VariableDeclaration)):
            children = [self.adopt(other, child_id) for child_id in self._children(node)]
            if isinstance(node, ImportDeclaration):
                node.specifiers = children
            else:
                node.declarators = children
        return self.add(node)

    def _children(self, node: Node) -> list[NodeId]:
        if isinstance(node, ImportDeclaration):
            return node.specifiers
        if isinstance(node, VariableDeclaration):
            return node.declarators
        if isinstance(node, Program):
            return node.body
        raise TypeError(f"{type(node).__name__} has no child list")

    def _touch(self, node: Node) -> None:
        # Original text no longer matches the node
        if isinstance(node, (ImportDeclaration, VariableDeclaration)):
            node.raw = None
            node.bare = None

    def _discard(self, node_id: NodeId) -> None:
        node = self._nodes.pop(node_id, None)
        if isinstance(node, (ImportDeclaration, VariableDeclaration)):
            for child_id in self._children(node):
                self._nodes.pop(child_id, None)
