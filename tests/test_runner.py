"""Tests for batch processing and case failure policies."""

import io
import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from domnav import (
    BatchRunner,
    ConfigurationError,
    DomNavError,
    ErrorThresholdExceeded,
    FailFastPolicy,
    FormatConfig,
    FormatError,
    NavigatorConfig,
    OutputConfig,
    SkipCasePolicy,
    StructuralMismatchError,
    ThresholdPolicy,
    UnexpectedEndOfInput,
    run_batch,
)
from domnav.testing import TreeShapeHelper

SCENARIO = ("A", [("B", [("D", [])]), ("C", [])])

GOOD_CASE = TreeShapeHelper().case_text(SCENARIO, ["first_child", "next_sibling"])
UNBALANCED_CASE = "2\n<n value='X'>\n<n value='Y'>\n1\nparent\n\n"
UNQUOTED_CASE = "2\n<n value=X>\n</n>\n1\nparent\n\n"


class TestBatchOutput:
    """End-to-end batches."""

    def test_reference_batch(self):
        helper = TreeShapeHelper()
        text = helper.batch_text([
            (SCENARIO, ["first_child", "first_child", "parent", "next_sibling"]),
            (SCENARIO, ["parent"]),
            (("solo", []), ["first_child", "next_sibling", "previous_sibling"]),
        ])
        assert run_batch(text) == (
            "Case 1:\nB\nD\nB\nC\n"
            "Case 2:\nA\n"
            "Case 3:\nsolo\nsolo\nsolo\n"
        )

    def test_empty_batch(self):
        assert run_batch("0\n") == ""

    def test_case_without_instructions(self):
        text = TreeShapeHelper().batch_text([(SCENARIO, [])])
        assert run_batch(text) == "Case 1:\n"

    def test_output_config(self):
        config = NavigatorConfig(output=OutputConfig(case_header="== {number} =="))
        text = TreeShapeHelper().batch_text([(SCENARIO, ["first_child"])])
        assert run_batch(text, config) == "== 1 ==\nB\n"

    def test_max_cases(self):
        text = GOOD_CASE * 3 + "0\n"
        runner = BatchRunner(NavigatorConfig(max_cases=2))
        out = io.StringIO()
        summary = runner.run(io.StringIO(text), out)
        assert summary.cases_read == 2
        assert out.getvalue().count("Case ") == 2

    def test_summary_counts(self):
        runner = BatchRunner()
        summary = runner.run(io.StringIO(GOOD_CASE * 2 + "0\n"), io.StringIO())
        assert summary.cases_read == 2
        assert summary.cases_written == 2
        assert summary.cases_skipped == 0
        assert summary.instructions_executed == 4
        assert runner.get_summary()['policy'] == "FailFastPolicy"

    def test_open_tree_allowed_when_closure_not_required(self):
        config = NavigatorConfig(require_closed_tree=False)
        assert run_batch(UNBALANCED_CASE + "0\n", config) == "Case 1:\nX\n"


class TestFailFast:
    """Default behaviour: abort the run on the first bad case."""

    def test_structural_mismatch_aborts(self):
        out = io.StringIO()
        with pytest.raises(StructuralMismatchError):
            BatchRunner().run(io.StringIO(GOOD_CASE + UNBALANCED_CASE + GOOD_CASE + "0\n"), out)
        # Cases before the failure were written; nothing of the bad case
        assert out.getvalue() == "Case 1:\nB\nC\n"

    def test_format_error_aborts(self):
        with pytest.raises(FormatError):
            run_batch(UNQUOTED_CASE + "0\n")

    def test_truncated_input_aborts(self):
        with pytest.raises(UnexpectedEndOfInput):
            run_batch(GOOD_CASE)


class TestSkipCase:
    """Opt-in behaviour: drop bad cases, keep numbering."""

    def test_bad_cases_skipped(self):
        policy = SkipCasePolicy(verbose=False)
        text = GOOD_CASE + UNBALANCED_CASE + UNQUOTED_CASE + GOOD_CASE + "0\n"
        output = run_batch(text, policy=policy)
        assert output == "Case 1:\nB\nC\nCase 4:\nB\nC\n"
        assert policy.skipped_cases == [2, 3]
        stats = policy.get_statistics()
        assert stats['by_type'] == {'StructuralMismatchError': 1, 'FormatError': 1}

    def test_framing_errors_still_abort(self):
        policy = SkipCasePolicy(verbose=False)
        with pytest.raises(UnexpectedEndOfInput):
            run_batch(GOOD_CASE + "3\n<n value='A'>\n", policy=policy)
        assert policy.errors == []

    def test_summary_records_skips(self):
        runner = BatchRunner(policy=SkipCasePolicy(verbose=False))
        summary = runner.run(io.StringIO(UNBALANCED_CASE + GOOD_CASE + "0\n"), io.StringIO())
        assert summary.cases_read == 2
        assert summary.cases_skipped == 1
        assert summary.cases_written == 1
        assert summary.errors[0][0] == 1

    def test_skip_logs_warning(self, caplog):
        with caplog.at_level("WARNING", logger="domnav.error_policies"):
            run_batch(UNBALANCED_CASE + "0\n", policy=SkipCasePolicy())
        assert "Skipping case 1" in caplog.text


class TestThresholdPolicy:
    """Skip up to a limit, then fail."""

    def test_threshold_exceeded(self):
        policy = ThresholdPolicy(max_errors=1, verbose=False)
        with pytest.raises(ErrorThresholdExceeded, match="threshold exceeded") as exc_info:
            run_batch(UNBALANCED_CASE * 2 + "0\n", policy=policy)
        assert policy.skipped_cases == [1]
        assert isinstance(exc_info.value, DomNavError)
        assert isinstance(exc_info.value.__cause__, StructuralMismatchError)

    def test_under_threshold(self):
        policy = ThresholdPolicy(max_errors=2, verbose=False)
        assert run_batch(UNBALANCED_CASE * 2 + GOOD_CASE + "0\n", policy=policy) == "Case 3:\nB\nC\n"


class TestPolicies:
    """Direct policy behaviour."""

    def test_fail_fast_reraises(self):
        with pytest.raises(FormatError):
            FailFastPolicy().handle(FormatError("bad"), 1, recoverable=True)

    def test_skip_reraises_unrecoverable(self):
        policy = SkipCasePolicy(verbose=False)
        with pytest.raises(FormatError):
            policy.handle(FormatError("bad"), 1, recoverable=False)

    def test_skip_records(self):
        policy = SkipCasePolicy(verbose=False)
        assert policy.handle(FormatError("bad"), 4, recoverable=True) is None
        assert policy.errors[0]['case'] == 4
        assert policy.errors[0]['error_message'] == "bad"


class TestConfiguration:
    """Invalid configurations fail before any input is read."""

    @pytest.mark.parametrize("config", [
        NavigatorConfig(format=FormatConfig(quote_char="")),
        NavigatorConfig(format=FormatConfig(quote_char="''")),
        NavigatorConfig(format=FormatConfig(pop_marker="  ")),
        NavigatorConfig(format=FormatConfig(pop_marker="</'n'>")),
        NavigatorConfig(output=OutputConfig(case_header="Case {nope}:")),
        NavigatorConfig(output=OutputConfig(line_ending="\t")),
        NavigatorConfig(max_cases=-1),
    ])
    def test_invalid_config_rejected(self, config):
        assert config.validate()
        with pytest.raises(ConfigurationError):
            BatchRunner(config)

    def test_default_config_valid(self):
        assert NavigatorConfig().validate() == []

    def test_errors_are_joined(self):
        config = NavigatorConfig(format=FormatConfig(quote_char=""), max_cases=-1)
        with pytest.raises(ConfigurationError) as exc_info:
            BatchRunner(config)
        message = str(exc_info.value)
        assert "quote_char" in message and "max_cases" in message
