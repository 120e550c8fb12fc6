"""High-level API for DomNav.

This module provides simple, functional interfaces for the common cases:
build a tree, run a list of moves over it, or process a whole batch. These
functions wrap the object-oriented API for ease of use.
"""

import io
from typing import Iterable, List, Optional, Sequence, Union

from .config import FormatConfig, NavigatorConfig
from .core.adapter import DocumentAdapter
from .core.builder import ConstructionEvent
from .core.builder import build_tree as _build_tree
from .core.node import DocumentNode, DocumentTree
from .core.traverser import Instruction, InstructionTraverser
from .error_policies import ErrorPolicy
from .io.reader import RawCase, parse_instruction_lines
from .runner import BatchRunner

_DEFAULT_TRAVERSER = InstructionTraverser(DocumentAdapter())

Start = Union[DocumentNode, DocumentTree]


def build_tree(events: Iterable[ConstructionEvent],
               require_closed: bool = False) -> DocumentTree:
    """Build a tree from CreateNode / PopToParent events.

    Args:
        events: Construction events in document order
        require_closed: Demand that the events pop back above the root

    Returns:
        The built DocumentTree

    Example:
        >>> tree = build_tree([CreateNode("A"), CreateNode("B")])
        >>> tree.root.first_child().value
        'B'
    """
    return _build_tree(events, require_closed=require_closed)


def parse_document(lines: Sequence[str],
                   config: Optional[FormatConfig] = None) -> DocumentTree:
    """Build a tree from textual tree lines (value lines and pop markers).

    The lines must close every node they open.

    Args:
        lines: Tree lines without the leading count
        config: Input format settings

    Raises:
        FormatError: On a value line without a quoted value
        StructuralMismatchError: If the lines do not balance
    """
    numbered = [(number, line) for number, line in enumerate(lines, start=1)]
    case = RawCase(1, numbered, [], config or FormatConfig())
    return case.build_tree(require_closed=True)


def parse_instructions(names: Iterable[str], strict: bool = False) -> List[Instruction]:
    """Convert instruction names into Instructions.

    Args:
        names: Names such as "parent" or "next_sibling"
        strict: Reject unknown names instead of skipping them

    Raises:
        UnknownInstructionError: For an unknown name when strict
    """
    numbered = [(number, name) for number, name in enumerate(names, start=1)]
    return parse_instruction_lines(numbered, strict=strict)


def _start_node(start: Start) -> DocumentNode:
    if isinstance(start, DocumentTree):
        return start.root
    return start


def navigate(start: Start, instructions: Iterable[Instruction]) -> List[DocumentNode]:
    """Apply moves from start and return the node reached after each.

    Moves without a target leave the cursor where it is. The result always
    has one entry per instruction.

    Args:
        start: Starting node, or a tree to start at its root
        instructions: Moves to apply, in order

    Example:
        >>> navigate(tree, [Instruction.FIRST_CHILD, Instruction.PARENT])
    """
    return _DEFAULT_TRAVERSER.visited_nodes(_start_node(start), instructions)


def navigate_values(start: Start, instructions: Iterable[Instruction]) -> List[str]:
    """Like navigate, but return the visited values."""
    return [node.value for node in navigate(start, instructions)]


def run_batch(text: str,
              config: Optional[NavigatorConfig] = None,
              policy: Optional[ErrorPolicy] = None) -> str:
    """Process a complete batch given as text and return the rendered output.

    Args:
        text: Case input, terminated by a zero tree size
        config: Run configuration
        policy: What to do with malformed cases

    Returns:
        The rendered case blocks
    """
    out = io.StringIO()
    BatchRunner(config, policy).run(io.StringIO(text), out)
    return out.getvalue()
