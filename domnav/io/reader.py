"""Case input reader for DomNav.

Reads the line-oriented batch format:

    3                       number of tree lines
    <n value='A'>           value line, value between the quote characters
    </n>                    pop marker, closes the current node
    ...
    2                       number of instructions
    first_child
    parent
                            blank separator
    0                       terminator

Reading is split in two. CaseReader only frames the stream: it counts lines
and hands back a RawCase. RawCase parses values, structure and instructions
on demand. A malformed case can therefore be dropped without losing track
of where the next case starts.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import IO, Iterator, List, Optional, Tuple

from ..config import FormatConfig
from ..core.builder import ConstructionEvent, CreateNode, PopToParent, TreeBuilder
from ..core.node import DocumentTree
from ..core.traverser import Instruction
from ..errors import FormatError, UnexpectedEndOfInput, UnknownInstructionError

logger = logging.getLogger(__name__)

_COUNT_PATTERN = re.compile(r"^\s*(\d+)")

NumberedLine = Tuple[int, str]


def parse_node_value(line: str, quote_char: str = "'",
                     line_number: Optional[int] = None) -> str:
    """Extract the value between the first and last quote character.

    Args:
        line: A value line such as "<n value='A'>"
        quote_char: Delimiter around the value
        line_number: Source line, for error messages

    Returns:
        The bare value (may be empty, may contain quote_char)

    Raises:
        FormatError: If the line has fewer than two quote characters
    """
    begin = line.find(quote_char)
    end = line.rfind(quote_char)
    if begin == -1 or begin == end:
        raise FormatError(f"Expected a {quote_char}-quoted value in {line!r}", line_number)
    return line[begin + 1:end]


def parse_count(line: str, line_number: Optional[int] = None) -> int:
    """Parse a count line: a leading non-negative decimal integer.

    Raises:
        FormatError: If the line does not start with a number
    """
    match = _COUNT_PATTERN.match(line)
    if match is None:
        raise FormatError(f"Expected a count, got {line!r}", line_number)
    return int(match.group(1))


def parse_instruction_lines(lines: List[NumberedLine],
                            strict: bool = False) -> List[Instruction]:
    """Turn instruction lines into Instructions.

    Unknown names are skipped with a warning, or rejected when strict.

    Raises:
        UnknownInstructionError: For an unknown name in strict mode
    """
    instructions = []
    for line_number, text in lines:
        try:
            instructions.append(Instruction.from_name(text))
        except UnknownInstructionError as e:
            if strict:
                raise UnknownInstructionError(str(e), line_number) from None
            logger.warning("Ignoring unknown instruction %r on line %d", text.strip(), line_number)
    return instructions


@dataclass
class RawCase:
    """One framed but not yet parsed case."""

    number: int
    tree_lines: List[NumberedLine]
    instruction_lines: List[NumberedLine]
    config: FormatConfig = field(default_factory=FormatConfig)

    def tree_events(self) -> Iterator[ConstructionEvent]:
        """Translate tree lines into construction events.

        A line is a pop when it equals the pop marker once surrounding
        whitespace is stripped, or verbatim when exact_pop_marker is set.

        Raises:
            FormatError: On a value line without a quoted value
        """
        for line_number, text in self.tree_lines:
            marker_text = text if self.config.exact_pop_marker else text.strip()
            if marker_text == self.config.pop_marker:
                yield PopToParent(line_number)
            else:
                yield CreateNode(
                    parse_node_value(text, self.config.quote_char, line_number),
                    line_number,
                )

    def build_tree(self, require_closed: bool = True) -> DocumentTree:
        """Build the case's tree.

        Raises:
            FormatError: On a malformed value line
            StructuralMismatchError: If pops and creates do not balance
        """
        builder = TreeBuilder().feed_all(self.tree_events())
        return builder.finish(require_closed=require_closed)

    def instructions(self) -> List[Instruction]:
        return parse_instruction_lines(
            self.instruction_lines, strict=self.config.strict_instructions
        )


class CaseReader:
    """Frames a text stream into RawCases.

    Every error raised here is a framing error: after it the reader can no
    longer tell where the next case begins.
    """

    def __init__(self, stream: IO[str], config: Optional[FormatConfig] = None):
        """Initialize the reader.

        Args:
            stream: Text stream positioned at the first count line
            config: Input format settings
        """
        self.stream = stream
        self.config = config or FormatConfig()
        self.line_number = 0
        self.cases_read = 0
        self.finished = False

    def _read_line(self, expecting: str) -> str:
        line = self.stream.readline()
        if not line:
            raise UnexpectedEndOfInput(
                f"Input ended while expecting {expecting}", self.line_number + 1
            )
        self.line_number += 1
        return line.rstrip("\r\n")

    def _read_lines(self, count: int, expecting: str) -> List[NumberedLine]:
        lines = []
        for _ in range(count):
            text = self._read_line(expecting)
            lines.append((self.line_number, text))
        return lines

    def _read_count(self, expecting: str) -> int:
        text = self._read_line(expecting)
        return parse_count(text, self.line_number)

    def read_case(self) -> Optional[RawCase]:
        """Read the next case.

        Returns:
            The framed case, or None once the zero terminator is read

        Raises:
            FormatError: On a bad count line or a non-blank separator
            UnexpectedEndOfInput: If the stream ends mid-case
        """
        if self.finished:
            return None

        tree_size = self._read_count("a tree size")
        if tree_size == 0:
            self.finished = True
            return None

        tree_lines = self._read_lines(tree_size, "a tree line")
        instruction_count = self._read_count("an instruction count")
        instruction_lines = self._read_lines(instruction_count, "an instruction")

        separator = self._read_line("a blank separator line")
        if separator.strip() and self.config.strict_separators:
            raise FormatError(
                f"Expected a blank line after the case, got {separator!r}",
                self.line_number,
            )

        self.cases_read += 1
        logger.debug(
            "Read case %d: %d tree lines, %d instructions",
            self.cases_read, tree_size, instruction_count,
        )
        return RawCase(self.cases_read, tree_lines, instruction_lines, self.config)

    def __iter__(self) -> Iterator[RawCase]:
        while True:
            case = self.read_case()
            if case is None:
                return
            yield case
