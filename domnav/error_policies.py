"""
Case failure policies for DomNav.

When a case in a batch turns out to be malformed, the runner asks a policy
what to do: abort the whole run, or drop the case and carry on with the
next one. Only errors found after the case's lines were fully consumed can
be skipped. A framing error (bad count line, premature end of input, bad
separator) leaves the stream position unknown, so every policy aborts on it.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from .errors import ErrorThresholdExceeded

logger = logging.getLogger(__name__)


class ErrorPolicy(ABC):
    """
    Base class for case failure policies.

    Subclasses decide, per failing case, whether the run continues.
    """

    @abstractmethod
    def handle(self, error: Exception, case_number: int, recoverable: bool) -> None:
        """
        Handle an error raised while reading or building one case.

        Args:
            error: The exception that was raised
            case_number: 1-based number of the failing case
            recoverable: False when the stream framing is lost

        Returns:
            None to skip the case and continue, or re-raises the exception
            to stop the run.
        """
        pass


class FailFastPolicy(ErrorPolicy):
    """
    Policy that stops the run at the first malformed case.

    This is the default: no output is produced for a case that cannot be
    trusted, and nothing after it is processed.
    """

    def handle(self, error: Exception, case_number: int, recoverable: bool) -> None:
        """Re-raise the error immediately."""
        raise error


class SkipCasePolicy(ErrorPolicy):
    """
    Policy that drops malformed cases and continues with the next one.

    Skipped cases are recorded for later inspection. Unrecoverable errors
    are still re-raised.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, log a warning for every skipped case
        """
        self.errors: List[Dict[str, Any]] = []
        self.verbose = verbose

    def handle(self, error: Exception, case_number: int, recoverable: bool) -> None:
        if not recoverable:
            raise error

        self.errors.append({
            'case': case_number,
            'error': error,
            'error_type': type(error).__name__,
            'error_message': str(error),
        })
        if self.verbose:
            logger.warning("Skipping case %d: %s", case_number, error)

    @property
    def skipped_cases(self) -> List[int]:
        return [record['case'] for record in self.errors]

    def get_statistics(self) -> dict:
        """
        Get statistics about skipped cases.

        Returns:
            Dictionary with error counts and details
        """
        by_type: Dict[str, int] = {}
        for record in self.errors:
            by_type[record['error_type']] = by_type.get(record['error_type'], 0) + 1
        return {
            'total_errors': len(self.errors),
            'by_type': by_type,
            'skipped_cases': self.skipped_cases,
            'errors': self.errors,
        }


class ThresholdPolicy(SkipCasePolicy):
    """
    Policy that skips malformed cases up to a threshold, then fails.

    Useful when a few bad cases are expected but many point at a broken
    input file.
    """

    def __init__(self, max_errors: int = 10, verbose: bool = True):
        """
        Initialize threshold policy.

        Args:
            max_errors: Maximum cases to skip before failing
            verbose: If True, log a warning for every skipped case
        """
        super().__init__(verbose=verbose)
        self.max_errors = max_errors

    def handle(self, error: Exception, case_number: int, recoverable: bool) -> None:
        """Skip the case if under threshold, otherwise raise ErrorThresholdExceeded."""
        if recoverable and len(self.errors) >= self.max_errors:
            raise ErrorThresholdExceeded(
                f"Error threshold exceeded ({self.max_errors} skipped cases)"
            ) from error
        super().handle(error, case_number, recoverable)
