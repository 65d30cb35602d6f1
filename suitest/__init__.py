"""
suitest - Minimal unit-testing engine.

Tests are declared with decorators, grouped into suites, optionally share a
fixture with setup/teardown hooks, and use ``check_*`` (non-fatal) or
``require_*`` (fatal) assertions.
"""

__version__ = "0.1.0"

from suitest.assertion_evaluator import (
    check,
    check_eq,
    check_ge,
    check_gt,
    check_le,
    check_lt,
    check_ne,
    check_streq,
    check_strneq,
    check_substreq,
    check_substrneq,
    fail,
    require,
    require_eq,
    require_ge,
    require_gt,
    require_le,
    require_lt,
    require_ne,
    require_streq,
    require_strneq,
    require_substreq,
    require_substrneq,
)
from suitest.test_registry import TestRegistry, default_registry, entry_point, fixture_suite, test
from suitest.test_result import RunSummary
from suitest.test_runner import NameFilter, RunListener, TestRunner, run_all

__all__ = [
    "check", "require", "fail",
    "check_eq", "check_ne", "check_lt", "check_le", "check_gt", "check_ge",
    "require_eq", "require_ne", "require_lt", "require_le", "require_gt", "require_ge",
    "check_streq", "check_strneq", "check_substreq", "check_substrneq",
    "require_streq", "require_strneq", "require_substreq", "require_substrneq",
    "test", "fixture_suite", "entry_point", "default_registry", "TestRegistry",
    "TestRunner", "RunListener", "NameFilter", "RunSummary", "run_all", "main",
]


def main(argv: list[str] | None = None) -> int:
    """
    Discover test files, run their tests and return the exit code.
    """
    from suitest_cli.main import main as cli_main
    return cli_main(argv)
