"""DomNav - Relative navigation over ordered document trees.

DomNav models a rooted, ordered tree of value-bearing nodes and answers
sequences of relative moves against it: parent, first child, next sibling,
previous sibling. A move with no target leaves the cursor where it is.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from domnav import CreateNode, PopToParent, Instruction
    from domnav import build_tree, navigate_values

    tree = build_tree([CreateNode("A"), CreateNode("B"), PopToParent(),
                       CreateNode("C")])
    navigate_values(tree, [Instruction.FIRST_CHILD, Instruction.NEXT_SIBLING])
    # ['B', 'C']
━━━━━━━━━━━━━━━━━━━━━━━━━━

Batches in the line-oriented case format are handled by BatchRunner,
run_batch, or the ``domnav`` command.
"""

__version__ = "0.1.0"

# Core components
from .core.node import (
    TreeNode,
    DocumentNode,
    DocumentTree,
    attach_child,
    parent_of,
    first_child,
    next_sibling,
    previous_sibling,
)
from .core.adapter import TreeAdapter, DocumentAdapter
from .core.traverser import Instruction, InstructionTraverser
from .core.builder import CreateNode, PopToParent, TreeBuilder

# Configuration and errors
from .config import NavigatorConfig, FormatConfig, OutputConfig
from .errors import (
    DomNavError,
    ConfigurationError,
    TreeStructureError,
    StructuralMismatchError,
    FormatError,
    UnexpectedEndOfInput,
    UnknownInstructionError,
    ErrorThresholdExceeded,
)
from .error_policies import ErrorPolicy, FailFastPolicy, SkipCasePolicy, ThresholdPolicy

# Batch processing
from .runner import BatchRunner, RunSummary

# High-level API
from .api import (
    build_tree,
    parse_document,
    parse_instructions,
    navigate,
    navigate_values,
    run_batch,
)

__all__ = [
    "__version__",
    # Core
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
    "TreeBuilder",
    # Config and errors
    "NavigatorConfig",
    "FormatConfig",
    "OutputConfig",
    "DomNavError",
    "ConfigurationError",
    "TreeStructureError",
    "StructuralMismatchError",
    "FormatError",
    "UnexpectedEndOfInput",
    "UnknownInstructionError",
    "ErrorThresholdExceeded",
    "ErrorPolicy",
    "FailFastPolicy",
    "SkipCasePolicy",
    "ThresholdPolicy",
    # Batch
    "BatchRunner",
    "RunSummary",
    # API
    "build_tree",
    "parse_document",
    "parse_instructions",
    "navigate",
    "navigate_values",
    "run_batch",
]
