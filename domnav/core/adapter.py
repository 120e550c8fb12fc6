"""TreeAdapter abstraction for DomNav.

The adapter holds the navigation logic for a tree type. Traversers only
ever move through an adapter, so the same instruction engine can drive any
tree that can answer the four relative lookups.
"""

from abc import ABC, abstractmethod
from typing import Iterator, Optional

from .node import DocumentNode, TreeNode


class TreeAdapter(ABC):
    """Abstract adapter for navigating ordered trees.

    Each lookup returns the target node or None when the move has no
    target. Lookups never raise for boundary moves; that is what lets the
    traverser treat every instruction as a total function.
    """

    @abstractmethod
    def get_parent(self, node: TreeNode) -> Optional[TreeNode]:
        """Get the parent node of the given node.

        Args:
            node: The child node

        Returns:
            Parent TreeNode or None if node is root
        """
        pass

    @abstractmethod
    def get_first_child(self, node: TreeNode) -> Optional[TreeNode]:
        """Get the first child of the given node.

        Args:
            node: The parent node

        Returns:
            First child or None if node has no children
        """
        pass

    @abstractmethod
    def get_next_sibling(self, node: TreeNode) -> Optional[TreeNode]:
        """Get the sibling immediately after the given node.

        Args:
            node: The node whose sibling is wanted

        Returns:
            Next sibling or None for the root and for a last child
        """
        pass

    @abstractmethod
    def get_previous_sibling(self, node: TreeNode) -> Optional[TreeNode]:
        """Get the sibling immediately before the given node.

        Args:
            node: The node whose sibling is wanted

        Returns:
            Previous sibling or None for the root and for a first child
        """
        pass

    def get_children(self, node: TreeNode) -> Iterator[TreeNode]:
        """Iterate the children of node in order.

        Default implementation chains first_child and next_sibling.
        Adapters can override for direct access.
        """
        child = self.get_first_child(node)
        while child is not None:
            yield child
            child = self.get_next_sibling(child)

    def get_depth(self, node: TreeNode) -> int:
        """Calculate the depth of a node in the tree.

        Default implementation walks up to root.

        Returns:
            Depth where root = 0
        """
        depth = 0
        current = node
        while True:
            parent = self.get_parent(current)
            if parent is None:
                break
            depth += 1
            current = parent
        return depth

    def get_siblings(self, node: TreeNode) -> Iterator[TreeNode]:
        """Get siblings of the given node (excluding the node itself)."""
        parent = self.get_parent(node)
        if parent is None:
            return iter([])  # Root has no siblings

        node_id = node.identifier()
        return (
            child for child in self.get_children(parent)
            if child.identifier() != node_id
        )


class DocumentAdapter(TreeAdapter):
    """Adapter for DocumentNode trees.

    Every lookup is O(1): nodes carry their position in the parent's
    children, so siblings are found by index rather than by scanning.
    """

    def get_parent(self, node: DocumentNode) -> Optional[DocumentNode]:
        return node.parent

    def get_first_child(self, node: DocumentNode) -> Optional[DocumentNode]:
        return node.first_child()

    def get_next_sibling(self, node: DocumentNode) -> Optional[DocumentNode]:
        return node.next_sibling()

    def get_previous_sibling(self, node: DocumentNode) -> Optional[DocumentNode]:
        return node.previous_sibling()

    def get_children(self, node: DocumentNode) -> Iterator[DocumentNode]:
        return iter(node.children)

    def get_depth(self, node: DocumentNode) -> int:
        return node.depth
