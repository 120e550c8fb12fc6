"""Batch execution for DomNav.

The BatchRunner is the driver loop: it reads cases until the terminator,
builds each case's tree, runs its instructions from the root and writes the
visited values. Each case gets its own tree, which is dropped as soon as the
case is written.
"""

import logging
from dataclasses import dataclass, field
from typing import IO, Any, Dict, List, Optional, Tuple

from .config import NavigatorConfig
from .core.adapter import DocumentAdapter, TreeAdapter
from .core.traverser import InstructionTraverser
from .error_policies import ErrorPolicy, FailFastPolicy
from .errors import ConfigurationError, DomNavError, FormatError, TreeStructureError
from .io.reader import CaseReader, RawCase
from .io.writer import CaseWriter

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    """Counters for one batch run."""

    cases_read: int = 0
    cases_written: int = 0
    cases_skipped: int = 0
    instructions_executed: int = 0
    errors: List[Tuple[int, str]] = field(default_factory=list)


class BatchRunner:
    """Validated driver for a batch of cases.

    The configuration is checked when the runner is created, so a bad
    configuration fails before any input is read.
    """

    def __init__(self,
                 config: Optional[NavigatorConfig] = None,
                 policy: Optional[ErrorPolicy] = None,
                 adapter: Optional[TreeAdapter] = None):
        """Create and validate a runner.

        Args:
            config: Input, output and run settings
            policy: What to do with a malformed case (defaults to FailFastPolicy)
            adapter: Navigation adapter (defaults to DocumentAdapter)

        Raises:
            ConfigurationError: If config is invalid
        """
        self.config = config or NavigatorConfig()
        config_errors = self.config.validate()
        if config_errors:
            raise ConfigurationError(
                f"Invalid configuration: {'; '.join(config_errors)}"
            )
        self.policy = policy or FailFastPolicy()
        self.traverser = InstructionTraverser(adapter or DocumentAdapter())
        self.summary = RunSummary()

    def solve_case(self, case: RawCase) -> List[str]:
        """Build the case's tree and return the values visited from its root.

        Raises:
            FormatError: On a malformed value line or instruction
            TreeStructureError: If the tree lines do not balance
        """
        tree = case.build_tree(require_closed=self.config.require_closed_tree)
        instructions = case.instructions()
        values = [node.value for node in self.traverser.traverse(tree.root, instructions)]
        self.summary.instructions_executed += len(instructions)
        return values

    def _limit_reached(self) -> bool:
        if self.config.max_cases is None:
            return False
        return self.summary.cases_read >= self.config.max_cases

    def run(self, in_stream: IO[str], out_stream: IO[str]) -> RunSummary:
        """Process every case in in_stream and write results to out_stream.

        Args:
            in_stream: Case input
            out_stream: Destination for rendered case blocks

        Returns:
            RunSummary for this run

        Raises:
            DomNavError: When the policy decides to abort
        """
        self.summary = RunSummary()
        reader = CaseReader(in_stream, self.config.format)
        writer = CaseWriter(out_stream, self.config.output)

        while not self._limit_reached():
            try:
                case = reader.read_case()
            except DomNavError as e:
                self.summary.errors.append((reader.cases_read + 1, str(e)))
                self.policy.handle(e, reader.cases_read + 1, recoverable=False)
                break
            if case is None:
                break
            self.summary.cases_read += 1

            try:
                values = self.solve_case(case)
            except (FormatError, TreeStructureError) as e:
                self.summary.errors.append((case.number, str(e)))
                self.policy.handle(e, case.number, recoverable=True)
                self.summary.cases_skipped += 1
                continue

            writer.write_case(case.number, values)
            self.summary.cases_written += 1

        logger.info(
            "Processed %d case(s): %d written, %d skipped",
            self.summary.cases_read, self.summary.cases_written, self.summary.cases_skipped,
        )
        return self.summary

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of the runner setup and last run.

        Returns:
            Dictionary with runner details
        """
        return {
            'policy': self.policy.__class__.__name__,
            'adapter': self.traverser.adapter.__class__.__name__,
            'require_closed_tree': self.config.require_closed_tree,
            'max_cases': self.config.max_cases,
            'cases_read': self.summary.cases_read,
            'cases_written': self.summary.cases_written,
            'cases_skipped': self.summary.cases_skipped,
            'instructions_executed': self.summary.instructions_executed,
        }
