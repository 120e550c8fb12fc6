"""Exception taxonomy for DomNav.

Navigation itself never fails: a move without a target is a clamped no-op.
Everything here is raised while building trees or reading case input, before
any traversal starts.
"""

from typing import Optional


class DomNavError(Exception):
    """Base exception for all DomNav errors."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class ConfigurationError(DomNavError):
    """Raised when a NavigatorConfig fails validation."""
    pass


class TreeStructureError(DomNavError):
    """Raised when nodes are linked in a way the tree model forbids."""
    pass


class StructuralMismatchError(TreeStructureError):
    """Raised when pops and creates do not balance.

    Either a pop went above the root, a node was created after the root was
    closed, or construction ended with the cursor still inside the tree.
    """
    pass


class FormatError(DomNavError, ValueError):
    """Raised when a line of case input does not have the expected shape."""
    pass


class UnexpectedEndOfInput(FormatError):
    """Raised when input ends before the declared number of lines is read."""
    pass


class UnknownInstructionError(FormatError):
    """Raised for an instruction name outside the four known moves."""
    pass


class ErrorThresholdExceeded(DomNavError):
    """Raised by ThresholdPolicy once too many cases have been skipped."""
    pass
