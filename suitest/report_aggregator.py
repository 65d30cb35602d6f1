"""
Module aggregating test outcomes into the summary of a run.
"""

from typing import Iterable

from suitest.test_result import FailureRecord, RunSummary, TaggedFailure, TestOutcome


class ReportAggregator:
    """
    Collects the outcome of every test of a run.

    Attributes
    ----------
    tests_run : int
        Number of tests recorded
    tests_passed : int
        Number of recorded tests without failure
    tests_failed : int
        Number of recorded tests with at least one failure
    """
    def __init__(self) -> None:
        self.tests_run: int = 0
        self.tests_passed: int = 0
        self.tests_failed: int = 0
        self._suites: dict[str, None] = {}
        self._failures: list[TaggedFailure] = []
        self._outcomes: list[TestOutcome] = []


    def record_test_outcome(
        self,
        suite: str,
        test: str,
        failures: Iterable[FailureRecord],
        assertions: int = 0,
        setup_failed: bool = False,
    ) -> TestOutcome:
        """
        Fold the failures of a finished test into the run.

        Parameters
        ----------
        suite : str
            Suite name
        test : str
            Test name
        failures : Iterable[FailureRecord]
            Failures recorded by the test, in order
        assertions : int, optional
            Number of assertions that passed, by default 0
        setup_failed : bool, optional
            Whether setup aborted fatally, by default False

        Returns
        -------
        TestOutcome
            Outcome of the test
        """
        outcome: TestOutcome = TestOutcome(
            suite=suite,
            test=test,
            failures=tuple(failures),
            assertions=assertions,
            setup_failed=setup_failed,
        )
        self._suites.setdefault(suite, None)
        self.tests_run += 1
        if outcome.passed:
            self.tests_passed += 1
        else:
            self.tests_failed += 1
        self._failures.extend(TaggedFailure(suite, test, record) for record in outcome.failures)
        self._outcomes.append(outcome)
        return outcome


    def summary(self) -> RunSummary:
        """
        Return the summary of every outcome recorded so far.
        """
        return RunSummary(
            suites=len(self._suites),
            tests_run=self.tests_run,
            tests_passed=self.tests_passed,
            tests_failed=self.tests_failed,
            failures=tuple(self._failures),
            outcomes=tuple(self._outcomes),
        )
