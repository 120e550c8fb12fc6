"""Tests for the domnav command line interface."""

import io
import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from domnav.cli import EXIT_INPUT_ERROR, EXIT_MISMATCH, EXIT_OK, build_parser, main
from domnav.testing import TreeShapeHelper

SCENARIO = ("A", [("B", [("D", [])]), ("C", [])])
BATCH = TreeShapeHelper().batch_text([
    (SCENARIO, ["first_child", "first_child", "parent", "next_sibling"]),
])
EXPECTED = "Case 1:\nB\nD\nB\nC\n"


@pytest.fixture
def input_file(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text(BATCH)
    return path


class TestCommandLine:
    """Running batches through main()."""

    def test_prints_results(self, input_file, capsys):
        assert main([str(input_file)]) == EXIT_OK
        assert capsys.readouterr().out == EXPECTED

    def test_reads_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "stdin", io.StringIO(BATCH))
        assert main([]) == EXIT_OK
        assert capsys.readouterr().out == EXPECTED

    def test_output_file(self, input_file, tmp_path, capsys):
        out_path = tmp_path / "out.txt"
        assert main([str(input_file), "-o", str(out_path)]) == EXIT_OK
        assert out_path.read_text() == EXPECTED
        assert capsys.readouterr().out == ""

    def test_expected_transcript_matches(self, input_file, tmp_path):
        expected = tmp_path / "expected.txt"
        expected.write_text(EXPECTED + "\n\n")
        assert main([str(input_file), "--expected", str(expected)]) == EXIT_OK

    def test_expected_transcript_differs(self, input_file, tmp_path, capsys):
        expected = tmp_path / "expected.txt"
        expected.write_text("Case 1:\nB\nD\nA\nC\n")
        assert main([str(input_file), "--expected", str(expected)]) == EXIT_MISMATCH
        assert "line 4" in capsys.readouterr().err

    def test_missing_input_file(self, tmp_path):
        assert main([str(tmp_path / "nope.txt")]) == EXIT_INPUT_ERROR

    def test_malformed_input_prints_nothing(self, tmp_path, capsys):
        path = tmp_path / "bad.txt"
        path.write_text(BATCH.replace("</n>", "", 1))
        assert main([str(path), "-q"]) == EXIT_INPUT_ERROR
        assert capsys.readouterr().out == ""

    def test_skip_bad_cases(self, tmp_path, capsys):
        bad = "2\n<n value='X'>\n<n value='Y'>\n0\n\n"
        path = tmp_path / "mixed.txt"
        path.write_text(bad + BATCH)
        assert main([str(path), "--skip-bad-cases", "-q"]) == EXIT_OK
        assert capsys.readouterr().out == "Case 2:\nB\nD\nB\nC\n"

    def test_max_skipped(self, tmp_path, capsys):
        bad = "2\n<n value='X'>\n<n value='Y'>\n0\n\n"
        path = tmp_path / "mixed.txt"
        path.write_text(bad * 2 + BATCH)
        assert main([str(path), "--skip-bad-cases", "--max-skipped", "2", "-q"]) == EXIT_OK
        capsys.readouterr()
        assert main([str(path), "--skip-bad-cases", "--max-skipped", "1", "-q"]) == EXIT_INPUT_ERROR
        assert capsys.readouterr().out == ""

    def test_strict_instructions(self, tmp_path):
        path = tmp_path / "odd.txt"
        path.write_text(TreeShapeHelper().batch_text([(SCENARIO, ["sideways"])]))
        assert main([str(path), "-q"]) == EXIT_OK
        assert main([str(path), "-q", "--strict-instructions"]) == EXIT_INPUT_ERROR


class TestParser:
    """Argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.input == "-"
        assert args.output is None
        assert not args.skip_bad_cases
        assert args.verbose == 0

    def test_verbose_and_quiet_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["-v", "-q"])
