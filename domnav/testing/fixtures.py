"""Test fixtures for DomNav consumers.

These helpers turn compact nested shapes into trees, construction events
and case input text, so tests can describe trees declaratively.

A shape is a tuple ``(value, [child_shape, ...])``, the same form returned
by ``DocumentTree.shape()``.
"""

from typing import Iterable, List, Sequence, Tuple

from ..core.builder import ConstructionEvent, CreateNode, PopToParent, build_tree
from ..core.node import DocumentTree

Shape = Tuple[str, list]


class TreeShapeHelper:
    """Builds trees and case input from nested shapes.

    Example:
        helper = TreeShapeHelper()
        tree = helper.build(("A", [("B", [("D", [])]), ("C", [])]))
        assert tree.shape() == ("A", [("B", [("D", [])]), ("C", [])])
    """

    def __init__(self, quote_char: str = "'", pop_marker: str = "</n>"):
        self.quote_char = quote_char
        self.pop_marker = pop_marker

    def events(self, shape: Shape) -> List[ConstructionEvent]:
        """Construction events for shape, closing every node."""
        value, children = shape
        events: List[ConstructionEvent] = [CreateNode(value)]
        for child in children:
            events.extend(self.events(child))
        events.append(PopToParent())
        return events

    def build(self, shape: Shape) -> DocumentTree:
        return build_tree(self.events(shape), require_closed=True)

    def document_lines(self, shape: Shape) -> List[str]:
        """Tree lines in the case input format."""
        q = self.quote_char
        lines = []
        for event in self.events(shape):
            if isinstance(event, CreateNode):
                lines.append(f"<n value={q}{event.value}{q}>")
            else:
                lines.append(self.pop_marker)
        return lines

    def case_text(self, shape: Shape, instructions: Sequence[str]) -> str:
        """One case block: tree lines, instructions and the blank separator."""
        tree_lines = self.document_lines(shape)
        lines = [str(len(tree_lines))] + tree_lines
        lines.append(str(len(instructions)))
        lines.extend(instructions)
        lines.append("")
        return "\n".join(lines) + "\n"

    def batch_text(self, cases: Iterable[Tuple[Shape, Sequence[str]]]) -> str:
        """Several case blocks followed by the zero terminator."""
        return "".join(self.case_text(shape, names) for shape, names in cases) + "0\n"

    @staticmethod
    def count_nodes(shape: Shape) -> int:
        value, children = shape
        return 1 + sum(TreeShapeHelper.count_nodes(child) for child in children)
