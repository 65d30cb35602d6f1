"""
Tests for ConsoleReporter class.
Tests are ordered according to method definitions in result_formatter.py.
"""

import pytest

from suitest.assertion_evaluator import check, check_eq
from suitest.result_formatter import ConsoleReporter
from suitest.test_registry import TestRegistry
from suitest.test_result import Colors, FailureRecord, MessageTag, RunSummary, TaggedFailure, TestOutcome
from suitest.test_runner import TestRunner


@pytest.fixture
def reporter() -> ConsoleReporter:
    """
    Create a ConsoleReporter instance without colors for testing.
    """
    return ConsoleReporter(verbose=False, color=False)


def test_paint() -> None:
    """
    Test paint.
    Verify that colors are only added when enabled and given.
    """
    assert ConsoleReporter(color=False).paint("x") == "x"
    assert ConsoleReporter(color=True).paint("x") == "x"
    assert ConsoleReporter(color=False).paint("x", Colors.RED) == "x"
    assert ConsoleReporter(color=True).paint("x", Colors.RED) == f"{Colors.RED.value}x{Colors.RESET.value}"
    assert ConsoleReporter(color=True).paint("x", Colors.RED, Colors.BOLD) \
        == f"{Colors.RED.value}{Colors.BOLD.value}x{Colors.RESET.value}"


def test_test_finished_pass(reporter: ConsoleReporter, capsys: pytest.CaptureFixture) -> None:
    """
    Test test_finished with a passing outcome.
    Verify that a [PASS] line with timing is printed.
    """
    reporter.test_finished(TestOutcome("foo", "bar"))

    out = capsys.readouterr().out
    assert out.startswith(f"{MessageTag.PASS.value} foo.bar (")
    assert "ms)" in out


def test_test_finished_fail(reporter: ConsoleReporter, capsys: pytest.CaptureFixture) -> None:
    """
    Test test_finished with a failing outcome.
    Verify that failures are printed indented under the test.
    """
    record = FailureRecord(
        "test_x.py", 7, "Expected 13 <= 8", False,
        lhs="13", rhs="8", operator="<=", source="check_le(13, 8)",
    )
    reporter.test_finished(TestOutcome("foo", "bar1", failures=(record,)))

    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith(f"{MessageTag.FAIL.value} foo.bar1")
    assert lines[1] == "       test_x.py:7: error: Expected 13 <= 8"
    assert lines[2] == "         check_le(13, 8)"
    assert lines[3] == "         left:  13"
    assert lines[4] == "         right: 8"


def test_format_failure_fatal(reporter: ConsoleReporter) -> None:
    """
    Test format_failure with a fatal boolean failure.
    """
    lines = reporter.format_failure(FailureRecord("t.py", 1, "stop", True))

    assert lines == ["t.py:1: fatal: stop"]


def test_print_test_list(reporter: ConsoleReporter, capsys: pytest.CaptureFixture) -> None:
    """
    Test print_test_list.
    Verify that tests are grouped under their suite.
    """
    registry = TestRegistry()
    registry.test("foo", "bar1")(lambda: None)
    registry.test("foo", "bar2")(lambda: None)
    registry.fixture_suite("calc", dict).test("adds")(lambda fx: None)

    reporter.print_test_list(registry.all())

    assert capsys.readouterr().out.splitlines() == [
        "foo",
        "  bar1",
        "  bar2",
        "calc (fixture: dict)",
        "  adds",
    ]


def test_print_final_summary_success(
    reporter: ConsoleReporter, capsys: pytest.CaptureFixture
) -> None:
    """
    Test print_final_summary without failures.
    Verify that it returns 0.
    """
    code = reporter.print_final_summary(RunSummary(suites=1, tests_run=2, tests_passed=2))

    out = capsys.readouterr().out
    assert code == 0
    assert "Total tests: 2" in out
    assert "All tests passed!" in out


def test_print_final_summary_failure(
    reporter: ConsoleReporter, capsys: pytest.CaptureFixture
) -> None:
    """
    Test print_final_summary with failures.
    Verify that failed tests are listed and it returns 1.
    """
    record = FailureRecord("t.py", 1, "boom", False)
    summary = RunSummary(
        suites=1,
        tests_run=1,
        tests_failed=1,
        failures=(TaggedFailure("foo", "bar", record),),
        outcomes=(TestOutcome("foo", "bar", failures=(record,)),),
    )

    code = reporter.print_final_summary(summary)

    out = capsys.readouterr().out
    assert code == 1
    assert "foo.bar (1 failures)" in out
    assert "Some tests failed" in out


def test_reporter_as_run_listener(
    reporter: ConsoleReporter, capsys: pytest.CaptureFixture
) -> None:
    """
    Test ConsoleReporter attached to a TestRunner.
    """
    registry = TestRegistry()
    registry.test("foo", "ok")(lambda: check(True))
    registry.test("foo", "ko")(lambda: check_eq(1, 2))

    TestRunner(registry, listeners=[reporter]).run()

    out = capsys.readouterr().out
    assert "Running 2 tests from 1 suites..." in out
    assert f"{MessageTag.PASS.value} foo.ok" in out
    assert f"{MessageTag.FAIL.value} foo.ko" in out
    assert "Expected 1 == 2" in out
