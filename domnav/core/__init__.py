"""Core abstractions for DomNav.

This package contains the tree model, the adapters that navigate it, the
instruction traverser and the tree builder.
"""

from .node import (
    TreeNode,
    DocumentNode,
    DocumentTree,
    attach_child,
    parent_of,
    first_child,
    next_sibling,
    previous_sibling,
)
from .adapter import TreeAdapter, DocumentAdapter
from .traverser import Instruction, InstructionTraverser
from .builder import (
    CreateNode,
    PopToParent,
    ConstructionEvent,
    TreeBuilder,
    build_tree,
)

__all__ = [
    "TreeNode",
    "DocumentNode",
    "DocumentTree",
    "attach_child",
    "parent_of",
    "first_child",
    "next_sibling",
    "previous_sibling",
    "TreeAdapter",
    "DocumentAdapter",
    "Instruction",
    "InstructionTraverser",
    "CreateNode",
    "PopToParent",
    "ConstructionEvent",
    "TreeBuilder",
    "build_tree",
]
