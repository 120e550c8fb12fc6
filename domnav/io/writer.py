"""Result rendering and transcript comparison for DomNav."""

from dataclasses import dataclass
from typing import IO, Iterable, Optional

from ..config import OutputConfig


class CaseWriter:
    """Renders visited values, one case block at a time.

    Each block is a header line followed by one value per line.
    """

    def __init__(self, stream: IO[str], config: Optional[OutputConfig] = None):
        self.stream = stream
        self.config = config or OutputConfig()
        self.cases_written = 0

    def render_case(self, number: int, values: Iterable[str]) -> str:
        end = self.config.line_ending
        lines = [self.config.case_header.format(number=number)]
        lines.extend(values)
        return end.join(lines) + end

    def write_case(self, number: int, values: Iterable[str]) -> None:
        """Write one case block.

        The block is rendered completely before anything is written.

        Args:
            number: 1-based case number shown in the header
            values: Visited values in instruction order
        """
        self.stream.write(self.render_case(number, values))
        self.cases_written += 1


@dataclass(frozen=True)
class TranscriptDiff:
    """Outcome of comparing a produced transcript with an expected one."""

    matches: bool
    line_number: Optional[int] = None    # First differing line, 1-based
    actual_line: Optional[str] = None    # None when actual ran out of lines
    expected_line: Optional[str] = None  # None when expected ran out of lines

    def describe(self) -> str:
        if self.matches:
            return "Transcripts match"
        return (
            f"First difference at line {self.line_number}: "
            f"expected {self.expected_line!r}, got {self.actual_line!r}"
        )


def compare_transcripts(actual: str, expected: str) -> TranscriptDiff:
    """Compare two transcripts, ignoring trailing whitespace at the end.

    Args:
        actual: Produced output
        expected: Reference output

    Returns:
        TranscriptDiff locating the first mismatching line, if any
    """
    actual_lines = actual.rstrip().splitlines()
    expected_lines = expected.rstrip().splitlines()
    for index in range(max(len(actual_lines), len(expected_lines))):
        got = actual_lines[index] if index < len(actual_lines) else None
        want = expected_lines[index] if index < len(expected_lines) else None
        if got != want:
            return TranscriptDiff(
                matches=False,
                line_number=index + 1,
                actual_line=got,
                expected_line=want,
            )
    return TranscriptDiff(matches=True)
