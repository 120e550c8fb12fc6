"""Instruction-driven traversal for DomNav.

The traverser walks a cursor over a tree one relative move at a time and
reports where the cursor is after each move. It works through a TreeAdapter,
so it does not care how the tree is stored.
"""

import logging
from enum import Enum
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from ..errors import UnknownInstructionError
from .adapter import TreeAdapter
from .node import TreeNode

logger = logging.getLogger(__name__)


class Instruction(Enum):
    """The four relative moves, valued by their name in case input."""
    PARENT = "parent"
    FIRST_CHILD = "first_child"
    NEXT_SIBLING = "next_sibling"
    PREVIOUS_SIBLING = "previous_sibling"

    @classmethod
    def from_name(cls, name: str) -> "Instruction":
        """Look up an instruction by its input name.

        Args:
            name: One of parent, first_child, next_sibling, previous_sibling

        Returns:
            The matching Instruction

        Raises:
            UnknownInstructionError: If name is not a known move
        """
        try:
            return cls(name.strip())
        except ValueError:
            raise UnknownInstructionError(
                f"Unknown instruction: {name!r}. "
                f"Choose from: {', '.join(i.value for i in cls)}"
            ) from None


class InstructionTraverser:
    """Executes instruction lists against a single cursor.

    The transition is total: when the requested move has no target the
    cursor stays where it is, and the unchanged node is still reported.
    Traversing N instructions therefore always yields N nodes.
    """

    def __init__(self, adapter: TreeAdapter):
        """Initialize traverser with an adapter.

        Args:
            adapter: TreeAdapter for navigating the tree
        """
        self.adapter = adapter
        self._lookups: Dict[Instruction, Callable[[TreeNode], Optional[TreeNode]]] = {
            Instruction.PARENT: adapter.get_parent,
            Instruction.FIRST_CHILD: adapter.get_first_child,
            Instruction.NEXT_SIBLING: adapter.get_next_sibling,
            Instruction.PREVIOUS_SIBLING: adapter.get_previous_sibling,
        }

    def step(self, cursor: TreeNode, instruction: Instruction) -> TreeNode:
        """Apply one instruction to cursor.

        Args:
            cursor: Current node
            instruction: Move to apply

        Returns:
            The target node, or cursor itself when the move is clamped
        """
        candidate = self._lookups[instruction](cursor)
        if candidate is None:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Clamped %s at %s", instruction.value, cursor.identifier())
            return cursor
        return candidate

    def traverse(self,
                 start: TreeNode,
                 instructions: Iterable[Instruction]) -> Iterator[TreeNode]:
        """Walk the instructions left to right from start.

        Args:
            start: Initial cursor position (typically the tree root)
            instructions: Moves to apply, in order

        Yields:
            The cursor after each instruction
        """
        cursor = start
        for instruction in instructions:
            cursor = self.step(cursor, instruction)
            yield cursor

    def visited_nodes(self,
                      start: TreeNode,
                      instructions: Iterable[Instruction]) -> List[TreeNode]:
        return list(self.traverse(start, instructions))
