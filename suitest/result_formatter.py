"""
Module for formatting and displaying test results.
"""

import time
from typing import ClassVar

from suitest.exit_status import ExitStatus
from suitest.test_registry import TestDescriptor
from suitest.test_result import Colors, FailureRecord, MessageTag, RunSummary, TestOutcome
from suitest.test_runner import RunListener


class ConsoleReporter(RunListener):
    """
    Formats and displays test results while a run progresses.

    Prints one line per test with its elapsed time, the failures of failed
    tests, and a final summary table.
    """
    INDENT: ClassVar[str] = "       "

    def __init__(self, verbose: bool = False, color: bool = True) -> None:
        """
        Initialize the console reporter.

        Parameters
        ----------
        verbose : bool, optional
            Enable verbose output, by default False
        color : bool, optional
            Use ANSI colors, by default True
        """
        self._verbose: bool = verbose
        self._color: bool = color
        self._started_at: float = 0.0
        self._run_started_at: float = 0.0


    def paint(self, text: str, *colors: Colors) -> str:
        """
        Wrap text in ANSI color codes unless colors are disabled.
        """
        if not self._color or not colors:
            return text
        prefix: str = "".join(c.value for c in colors)
        return f"{prefix}{text}{Colors.RESET.value}"


    def run_started(self, tests: list[TestDescriptor]) -> None:
        suites: int = len(dict.fromkeys(t.suite for t in tests))
        print(self.paint(f"Running {len(tests)} tests from {suites} suites...", Colors.BOLD))
        print()
        self._run_started_at = time.perf_counter()


    def test_started(self, descriptor: TestDescriptor) -> None:
        if self._verbose:
            print(f"{self.paint(MessageTag.RUN.value, Colors.BLUE)} {descriptor.full_name}")
        self._started_at = time.perf_counter()


    def test_finished(self, outcome: TestOutcome) -> None:
        elapsed_ms: float = (time.perf_counter() - self._started_at) * 1000
        timing: str = self.paint(f"({elapsed_ms:.2f} ms)", Colors.GREY)

        if outcome.passed:
            tag: str = self.paint(MessageTag.PASS.value, Colors.GREEN)
        else:
            tag = self.paint(MessageTag.FAIL.value, Colors.RED)
        print(f"{tag} {outcome.full_name} {timing}")

        if outcome.setup_failed:
            print(f"{self.INDENT}setup failed, test body skipped")
        for record in outcome.failures:
            for line in self.format_failure(record):
                print(f"{self.INDENT}{line}")


    def format_failure(self, record: FailureRecord) -> list[str]:
        """
        Format one failure as text lines.

        Parameters
        ----------
        record : FailureRecord
            Failure to format

        Returns
        -------
        list[str]
            Location and message, then source and operands when known
        """
        kind: str = "fatal" if record.fatal else "error"
        lines: list[str] = [f"{record.location}: {kind}: {record.message}"]
        if record.source:
            lines.append(f"  {self.paint(record.source, Colors.GREY)}")
        if record.is_comparison:
            lines.append(f"  left:  {record.lhs}")
            lines.append(f"  right: {record.rhs}")
        return lines


    def print_test_list(self, tests: list[TestDescriptor]) -> None:
        """
        Print registered tests grouped by suite, without running them.

        Parameters
        ----------
        tests : list[TestDescriptor]
            Tests in run order
        """
        current_suite: str | None = None
        for descriptor in tests:
            if descriptor.suite != current_suite:
                current_suite = descriptor.suite
                suffix: str = ""
                if descriptor.fixture is not None:
                    suffix = f" (fixture: {descriptor.fixture.fixture_type.__name__})"
                print(f"{self.paint(current_suite, Colors.BOLD)}{suffix}")
            print(f"  {descriptor.name}")


    def print_final_summary(self, summary: RunSummary) -> int:
        """
        Print final test summary.

        Parameters
        ----------
        summary : RunSummary
            Summary of the run

        Returns
        -------
        int
            Exit code (0 if no failure was recorded, 1 otherwise)
        """
        separator: str = "-" * 60
        separator_table: str = "=" * 50
        total_ms: float = (time.perf_counter() - self._run_started_at) * 1000 \
            if self._run_started_at else 0.0

        print(separator)
        print(f"All tests completed in {total_ms:.2f} ms.")
        print(separator_table)
        print(f"Suites: {summary.suites}")
        print(f"Total tests: {summary.tests_run}")
        print(self.paint(f"{MessageTag.PASS.value}{summary.tests_passed:>4}", Colors.GREEN))
        print(self.paint(f"{MessageTag.FAIL.value}{summary.tests_failed:>4}", Colors.RED))
        print(separator_table)

        if summary.tests_failed:
            print()
            print("Failed tests:")
            for outcome in summary.outcomes:
                if not outcome.passed:
                    print(f"{self.INDENT}{outcome.full_name} ({len(outcome.failures)} failures)")

        status: ExitStatus = ExitStatus.from_summary(summary)
        if status is ExitStatus.SUCCESS:
            print(f"\n{self.paint('All tests passed! ✓', Colors.GREEN, Colors.BOLD)}")
        else:
            print(f"\n{self.paint('Some tests failed ✗', Colors.RED, Colors.BOLD)}")
        return status.value
