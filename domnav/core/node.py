"""Tree model for DomNav.

The nodes of one tree live in a _NodeArena: flat lists of values, parent
indices, child indices and positions. A DocumentNode is a small handle
holding its arena and its index there. Handles own the arena and the arena
only holds its handles weakly, so there is no reference cycle: a dropped
tree is released at once, and any node a caller keeps still reaches its
parent and siblings.

Every node records its position inside its parent's children when it is
attached. Children are append-only, so that position never changes and the
sibling lookups are simple index arithmetic instead of a scan.
"""

import weakref
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..errors import TreeStructureError


class TreeNode(ABC):
    """Abstract base class for navigable tree nodes.

    The node is a data container. How to move from one node to another is
    the job of a TreeAdapter, so traversers never touch node internals.
    """

    @abstractmethod
    def identifier(self) -> str:
        """Return an identifier that is unique and stable within the tree.

        Returns:
            str: Unique, stable identifier for this node
        """
        pass

    @abstractmethod
    def is_leaf(self) -> bool:
        """Check if this node has no children."""
        pass

    @abstractmethod
    def metadata(self) -> Dict[str, Any]:
        """Return lightweight information about this node.

        Returns:
            Dict[str, Any]: Metadata dictionary
        """
        pass

    def __str__(self) -> str:
        """String representation defaults to identifier."""
        return self.identifier()

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return f"{self.__class__.__name__}(id={self.identifier()!r})"

    def __eq__(self, other: object) -> bool:
        """Nodes are equal if they have the same identifier."""
        if not isinstance(other, TreeNode):
            return NotImplemented
        return self.identifier() == other.identifier()

    def __hash__(self) -> int:
        """Hash based on identifier for use in sets and dicts."""
        return hash(self.identifier())


class _NodeArena:
    """Flat storage for the nodes of one tree, addressed by index."""

    def __init__(self):
        self.values: List[str] = []
        self.parents: List[Optional[int]] = []
        self.children: List[List[int]] = []
        self.positions: List[Optional[int]] = []
        self._handles: "weakref.WeakValueDictionary[int, DocumentNode]" = (
            weakref.WeakValueDictionary()
        )

    def __len__(self) -> int:
        return len(self.values)

    def add(self, value: str) -> int:
        """Store a new detached record and return its index."""
        self.values.append(value)
        self.parents.append(None)
        self.children.append([])
        self.positions.append(None)
        return len(self.values) - 1

    def handle(self, index: int) -> "DocumentNode":
        """Return the node for index, reusing the live handle if there is one."""
        node = self._handles.get(index)
        if node is None:
            node = DocumentNode.__new__(DocumentNode)
            self.bind(node, index)
        return node

    def bind(self, node: "DocumentNode", index: int) -> None:
        node._arena = self
        node._index = index
        self._handles[index] = node

    def absorb(self, other: "_NodeArena", parent_index: int, root_index: int) -> int:
        """Move every record of other into this arena under parent_index.

        root_index is other's detached root; it becomes the new last child
        of parent_index. Live handles into other are rebound here.

        Returns:
            The root's index in this arena
        """
        offset = len(self.values)
        position = len(self.children[parent_index])
        for index in range(len(other)):
            parent = other.parents[index]
            self.values.append(other.values[index])
            self.children.append([child + offset for child in other.children[index]])
            if index == root_index:
                self.parents.append(parent_index)
                self.positions.append(position)
            else:
                self.parents.append(parent + offset)
                self.positions.append(other.positions[index])
        self.children[parent_index].append(root_index + offset)

        for index, node in list(other._handles.items()):
            self.bind(node, index + offset)
        return root_index + offset


class DocumentNode(TreeNode):
    """A value-bearing node of a document tree.

    The value is set at creation and never changes. Structure is only ever
    added through attach_child, during construction. There is at most one
    live handle per node, so nodes compare by identity.
    """

    def __init__(self, value: str):
        """Create a detached node.

        Args:
            value: Opaque label carried by the node
        """
        arena = _NodeArena()
        arena.bind(self, arena.add(value))

    __eq__ = object.__eq__
    __hash__ = object.__hash__

    @property
    def value(self) -> str:
        return self._arena.values[self._index]

    @property
    def parent(self) -> Optional["DocumentNode"]:
        """The containing node, or None for the root."""
        parent = self._arena.parents[self._index]
        if parent is None:
            return None
        return self._arena.handle(parent)

    @property
    def children(self) -> Tuple["DocumentNode", ...]:
        arena = self._arena
        return tuple(arena.handle(child) for child in arena.children[self._index])

    @property
    def position(self) -> Optional[int]:
        """Index of this node in its parent's children (None when detached)."""
        return self._arena.positions[self._index]

    @property
    def child_count(self) -> int:
        return len(self._arena.children[self._index])

    @property
    def depth(self) -> int:
        """Distance from the root; walks the parent chain."""
        parents = self._arena.parents
        depth = 0
        current = parents[self._index]
        while current is not None:
            depth += 1
            current = parents[current]
        return depth

    def add_child(self, child: "DocumentNode") -> None:
        """Append child as the new last child of this node.

        The child's whole subtree moves into this node's tree.

        Args:
            child: A detached node

        Raises:
            TreeStructureError: If child is already attached somewhere, or
                is the root of this node's own tree
        """
        if child.position is not None:
            raise TreeStructureError(
                f"Node {child.value!r} is already attached and cannot be re-attached"
            )
        if child._arena is self._arena:
            raise TreeStructureError(
                f"Attaching {child.value!r} under {self.value!r} would create a cycle"
            )
        self._arena.absorb(child._arena, self._index, child._index)

    def first_child(self) -> Optional["DocumentNode"]:
        children = self._arena.children[self._index]
        if children:
            return self._arena.handle(children[0])
        return None

    def next_sibling(self) -> Optional["DocumentNode"]:
        arena = self._arena
        parent = arena.parents[self._index]
        if parent is None:
            return None
        index = arena.positions[self._index] + 1
        siblings = arena.children[parent]
        if index < len(siblings):
            return arena.handle(siblings[index])
        return None

    def previous_sibling(self) -> Optional["DocumentNode"]:
        arena = self._arena
        parent = arena.parents[self._index]
        position = arena.positions[self._index]
        if parent is None or position == 0:
            return None
        return arena.handle(arena.children[parent][position - 1])

    # TreeNode interface

    def identifier(self) -> str:
        """Return the slash-joined position path from the root.

        The root is "/", its second child "/1", that child's first child
        "/1/0". Positions never change, so neither does the identifier.
        """
        arena = self._arena
        steps = []
        current = self._index
        while arena.parents[current] is not None:
            steps.append(str(arena.positions[current]))
            current = arena.parents[current]
        return "/" + "/".join(reversed(steps))

    def is_leaf(self) -> bool:
        return not self._arena.children[self._index]

    def metadata(self) -> Dict[str, Any]:
        return {
            'value': self.value,
            'position': self.position,
            'child_count': self.child_count,
            'is_root': self._arena.parents[self._index] is None,
        }

    def __repr__(self) -> str:
        return f"DocumentNode(value={self.value!r}, id={self.identifier()!r})"


class DocumentTree:
    """Owning container for all nodes of one tree.

    Nodes are kept in creation order, which for trees built by TreeBuilder
    is document (pre-order) order. The tree is read-only once built.
    """

    def __init__(self, root: DocumentNode, nodes: Optional[List[DocumentNode]] = None):
        """Wrap an already built tree.

        Args:
            root: The root node (must have no parent)
            nodes: Every node in creation order; collected pre-order from
                root when omitted
        """
        if root.parent is not None:
            raise TreeStructureError("Tree root must not have a parent")
        self.root = root
        self._nodes = list(nodes) if nodes is not None else list(_walk(root))

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[DocumentNode]:
        return iter(self._nodes)

    def node_at(self, index: int) -> DocumentNode:
        """Return the node created index-th (0 is the root)."""
        return self._nodes[index]

    def find(self, value: str) -> Optional[DocumentNode]:
        """Return the first node, in creation order, carrying value."""
        for node in self._nodes:
            if node.value == value:
                return node
        return None

    def height(self) -> int:
        """Depth of the deepest node (0 for a single-node tree)."""
        return max(node.depth for node in self._nodes)

    def shape(self) -> Tuple[str, list]:
        """Describe the tree as nested (value, [children]) tuples."""
        return _shape_of(self.root)

    def __repr__(self) -> str:
        return f"DocumentTree(root={self.root.value!r}, nodes={len(self._nodes)})"


def _walk(node: DocumentNode) -> Iterator[DocumentNode]:
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def _shape_of(node: DocumentNode) -> Tuple[str, list]:
    return (node.value, [_shape_of(child) for child in node.children])


# Functional primitives over the node methods

def attach_child(parent: DocumentNode, child: DocumentNode) -> None:
    """Append child to parent's children and record its position."""
    parent.add_child(child)


def parent_of(node: DocumentNode) -> Optional[DocumentNode]:
    return node.parent


def first_child(node: DocumentNode) -> Optional[DocumentNode]:
    return node.first_child()


def next_sibling(node: DocumentNode) -> Optional[DocumentNode]:
    return node.next_sibling()


def previous_sibling(node: DocumentNode) -> Optional[DocumentNode]:
    return node.previous_sibling()
