"""Tree construction from a forward-only event stream.

A tree arrives as a flat sequence of events: "create a node as a child of
the current node and move into it", or "return to the parent". The builder
replays them in one pass and checks that they balance.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from ..errors import StructuralMismatchError
from .node import DocumentNode, DocumentTree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateNode:
    """Create a node carrying value under the cursor and move into it."""
    value: str
    line_number: Optional[int] = None


@dataclass(frozen=True)
class PopToParent:
    """Move the cursor from the current node to its parent."""
    line_number: Optional[int] = None


ConstructionEvent = Union[CreateNode, PopToParent]


class TreeBuilder:
    """Builds a DocumentTree from construction events.

    The cursor starts "above the root". The first create makes the root;
    after the root's matching pop the cursor is above the root again and
    the tree is closed.

    Example:
        >>> events = [CreateNode("A"), CreateNode("B"), PopToParent(), PopToParent()]
        >>> TreeBuilder().feed_all(events).finish().shape()
        ('A', [('B', [])])
    """

    def __init__(self):
        self._root: Optional[DocumentNode] = None
        self._cursor: Optional[DocumentNode] = None
        self._nodes: List[DocumentNode] = []

    @property
    def cursor(self) -> Optional[DocumentNode]:
        """Node new children are attached to; None when above the root."""
        return self._cursor

    @property
    def is_closed(self) -> bool:
        """True once the root has been created and popped."""
        return self._root is not None and self._cursor is None

    def create(self, value: str, line_number: Optional[int] = None) -> DocumentNode:
        """Create a child of the cursor and move the cursor into it.

        Raises:
            StructuralMismatchError: If the root was already closed
        """
        node = DocumentNode(value)
        if self._root is None:
            self._root = node
        elif self._cursor is None:
            raise StructuralMismatchError(
                f"Node {value!r} created after the root was closed",
                line_number,
            )
        else:
            self._cursor.add_child(node)
        self._nodes.append(node)
        self._cursor = node
        return node

    def pop(self, line_number: Optional[int] = None) -> None:
        """Move the cursor to its parent.

        Raises:
            StructuralMismatchError: If the cursor is already above the root
        """
        if self._cursor is None:
            raise StructuralMismatchError("Pop without an open node", line_number)
        self._cursor = self._cursor.parent

    def feed(self, event: ConstructionEvent) -> None:
        if isinstance(event, CreateNode):
            self.create(event.value, event.line_number)
        elif isinstance(event, PopToParent):
            self.pop(event.line_number)
        else:
            raise TypeError(f"Unsupported construction event: {event!r}")

    def feed_all(self, events: Iterable[ConstructionEvent]) -> "TreeBuilder":
        for event in events:
            self.feed(event)
        return self

    def finish(self, require_closed: bool = True) -> DocumentTree:
        """Return the built tree.

        Args:
            require_closed: Demand that every created node was popped

        Raises:
            StructuralMismatchError: If nothing was created, or the tree is
                still open while require_closed is set
        """
        if self._root is None:
            raise StructuralMismatchError("No nodes were created")
        if require_closed and self._cursor is not None:
            raise StructuralMismatchError(
                f"Construction ended inside node {self._cursor.value!r} "
                f"at depth {self._cursor.depth}; missing {self._cursor.depth + 1} pop(s)"
            )
        logger.debug("Built tree with %d nodes", len(self._nodes))
        return DocumentTree(self._root, self._nodes)


def build_tree(events: Iterable[ConstructionEvent],
               require_closed: bool = False) -> DocumentTree:
    """Build a tree from construction events in one forward pass.

    Args:
        events: CreateNode / PopToParent events
        require_closed: Demand that the events pop back above the root

    Returns:
        The built DocumentTree
    """
    return TreeBuilder().feed_all(events).finish(require_closed=require_closed)
