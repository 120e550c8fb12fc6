"""Configuration system for DomNav.

This module defines how users describe the case input format, how results
are rendered, and how a batch run behaves.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class FormatConfig:
    """Shape of the line-oriented case input."""

    quote_char: str = "'"                # Delimits a node value inside its line
    pop_marker: str = "</n>"             # Line that returns to the parent
    strict_separators: bool = True       # Non-blank case separator is an error
    strict_instructions: bool = False    # Unknown instruction names are errors
    exact_pop_marker: bool = False       # Pop line must equal pop_marker verbatim

    def validate(self) -> List[str]:
        """Validate format settings.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []
        if len(self.quote_char) != 1:
            errors.append("quote_char must be a single character")
        if not self.pop_marker.strip():
            errors.append("pop_marker must not be blank")
        elif self.quote_char and self.quote_char in self.pop_marker:
            errors.append("pop_marker must not contain quote_char")
        return errors


@dataclass
class OutputConfig:
    """How visited values are rendered."""

    case_header: str = "Case {number}:"  # Formatted with the 1-based case number
    line_ending: str = "\n"

    def validate(self) -> List[str]:
        errors = []
        try:
            self.case_header.format(number=1)
        except (KeyError, IndexError, ValueError) as e:
            errors.append(f"case_header is not a valid template: {e}")
        if self.line_ending not in ("\n", "\r\n"):
            errors.append("line_ending must be '\\n' or '\\r\\n'")
        return errors


@dataclass
class NavigatorConfig:
    """Complete configuration for a batch run.

    Example:
        config = NavigatorConfig(
            format=FormatConfig(strict_instructions=True),
            max_cases=10,
        )
    """

    format: FormatConfig = field(default_factory=FormatConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    require_closed_tree: bool = True     # Pops must return above the root
    max_cases: Optional[int] = None      # Stop after this many cases

    def validate(self) -> List[str]:
        """Validate the whole configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []
        errors.extend(self.format.validate())
        errors.extend(self.output.validate())
        if self.max_cases is not None and self.max_cases < 0:
            errors.append("max_cases must be non-negative")
        return errors
