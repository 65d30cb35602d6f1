#!/usr/bin/env python3
"""
CLI entry for suitest (thin wrapper).
"""

import argparse
import sys

from suitest import __version__ as SUITEST_VERSION
from suitest.errors import ConfigurationError
from suitest.exit_status import ExitStatus
from suitest.result_formatter import ConsoleReporter
from suitest.test_discovery import TestDiscovery
from suitest.test_registry import TestRegistry, default_registry
from suitest.test_result import Colors, RunSummary
from suitest.test_runner import NameFilter, TestRunner, run_all


def get_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Gets and returns command line arguments.
    """
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="suitest",
        description="suitest - Minimal unit-testing engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "pattern",
        nargs="?",
        default="test_*.py",
        help="Test file pattern, directory or specific file (default: test_*.py)",
    )
    parser.add_argument(
        "-f",
        "--filter",
        default="*",
        help="Run only tests whose suite.test name matches "
             "POSITIVE[:POSITIVE...][-NEGATIVE[:NEGATIVE...]] (default: *)",
    )
    parser.add_argument(
        "-l",
        "--list",
        action="store_true",
        help="List tests in run order without running them",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"suitest {SUITEST_VERSION}",
        help="Show program's version number and exit",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """
    Main function for CLI.

    Test files register their tests in the process-wide registry when they
    are imported, then that registry is run.
    """
    args: argparse.Namespace | None = None
    registry: TestRegistry = default_registry
    reporter: ConsoleReporter = ConsoleReporter()
    try:
        args = get_arguments(argv)
        reporter = ConsoleReporter(verbose=args.verbose, color=not args.no_color)

        discovery = TestDiscovery(verbose=args.verbose)
        test_files = discovery.find_test_files(args.pattern)
        if not test_files:
            print(reporter.paint(f"No test files matching '{args.pattern}' found", Colors.YELLOW))
            return ExitStatus.CONFIGURATION_ERROR.value
        discovery.load_all(test_files)

        name_filter = NameFilter(args.filter)
        if args.list:
            runner = TestRunner(registry, verbose=args.verbose, name_filter=name_filter)
            reporter.print_test_list(runner.selected_tests())
            return ExitStatus.SUCCESS.value

        summary: RunSummary = run_all(
            registry,
            verbose=args.verbose,
            listeners=[reporter],
            name_filter=name_filter,
        )
        return reporter.print_final_summary(summary)

    except ConfigurationError as e:
        print(reporter.paint(f"Configuration error: {e}", Colors.RED))
        return ExitStatus.CONFIGURATION_ERROR.value

    except KeyboardInterrupt:
        print(f"\n{reporter.paint('Test execution interrupted by user', Colors.YELLOW)}")
        return ExitStatus.FAILURE.value

    except Exception as e:
        print(reporter.paint(f"Error: {e}", Colors.RED))
        if args is not None and args.verbose:
            import traceback
            traceback.print_exc()
        return ExitStatus.CONFIGURATION_ERROR.value


if __name__ == "__main__":
    sys.exit(main())
