"""Reading case input and writing case results."""

from .reader import (
    CaseReader,
    RawCase,
    parse_count,
    parse_instruction_lines,
    parse_node_value,
)
from .writer import CaseWriter, TranscriptDiff, compare_transcripts

__all__ = [
    'CaseReader',
    'RawCase',
    'parse_count',
    'parse_instruction_lines',
    'parse_node_value',
    'CaseWriter',
    'TranscriptDiff',
    'compare_transcripts',
]
