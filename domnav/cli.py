#!/usr/bin/env python
"""
Command line interface for DomNav
=================================

Runs a batch of navigation cases and prints the visited values.

Usage:
    domnav input.txt                         # Print results to stdout
    domnav input.txt -o output.txt           # Write results to a file
    domnav input.txt --expected output.txt   # Check against a reference
    domnav < input.txt                       # Read cases from stdin
"""

import argparse
import io
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import FormatConfig, NavigatorConfig
from .error_policies import FailFastPolicy, SkipCasePolicy, ThresholdPolicy
from .errors import DomNavError
from .io.writer import compare_transcripts
from .runner import BatchRunner

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_INPUT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="domnav",
        description="Apply relative navigation instructions to document trees.",
    )
    parser.add_argument("input", nargs="?", default="-",
                        help="Case input file ('-' or omitted for stdin)")
    parser.add_argument("-o", "--output",
                        help="Write results to this file instead of stdout")
    parser.add_argument("--expected",
                        help="Compare results with this reference transcript")
    parser.add_argument("--skip-bad-cases", action="store_true",
                        help="Skip malformed cases instead of aborting the run")
    parser.add_argument("--max-skipped", type=int, default=None, metavar="N",
                        help="With --skip-bad-cases, abort once more than N cases were skipped")
    parser.add_argument("--strict-instructions", action="store_true",
                        help="Treat unknown instruction names as errors")
    parser.add_argument("--max-cases", type=int, default=None,
                        help="Stop after this many cases")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="count", default=0,
                           help="More log output (-vv for debug)")
    verbosity.add_argument("-q", "--quiet", action="store_true",
                           help="Only log errors")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: int, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as handle:
        return handle.read()


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI.

    Returns:
        Process exit code: 0 on success, 1 on transcript mismatch,
        2 on unreadable or malformed input
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    config = NavigatorConfig(
        format=FormatConfig(strict_instructions=args.strict_instructions),
        max_cases=args.max_cases,
    )
    if not args.skip_bad_cases:
        policy = FailFastPolicy()
    elif args.max_skipped is not None:
        policy = ThresholdPolicy(max_errors=args.max_skipped)
    else:
        policy = SkipCasePolicy()

    try:
        text = _read_text(args.input)
        runner = BatchRunner(config, policy)
        out = io.StringIO()
        runner.run(io.StringIO(text), out)
    except OSError as e:
        logger.error("Cannot read input: %s", e)
        return EXIT_INPUT_ERROR
    except DomNavError as e:
        # Nothing is printed for a failed run
        logger.error("Malformed input: %s", e)
        return EXIT_INPUT_ERROR

    result = out.getvalue()
    if args.output:
        with open(args.output, "w", encoding="utf-8") as handle:
            handle.write(result)
    else:
        sys.stdout.write(result)

    if args.expected:
        try:
            expected = _read_text(args.expected)
        except OSError as e:
            logger.error("Cannot read expected transcript: %s", e)
            return EXIT_INPUT_ERROR
        diff = compare_transcripts(result, expected)
        if not diff.matches:
            print(diff.describe(), file=sys.stderr)
            return EXIT_MISMATCH
        logger.info(diff.describe())

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
