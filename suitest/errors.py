"""
Module defining the exceptions raised by suitest.
"""

# ============================================================================
#                           Configuration errors
# ============================================================================


class SuitestError(Exception):
    """
    Base class for errors raised by suitest.
    """


class ConfigurationError(SuitestError):
    """
    Raised when the test set is misconfigured. Always detected before any test runs.
    """


class DuplicateTestError(ConfigurationError):
    """
    Raised when two different tests are registered under the same suite/test name.
    """
    def __init__(self, suite: str, test: str) -> None:
        super().__init__(f"Test '{suite}.{test}' is registered more than once.")
        self.suite: str = suite
        self.test: str = test


class DuplicateSuiteError(ConfigurationError):
    """
    Raised when a fixture suite is declared twice with different fixtures.
    """
    def __init__(self, suite: str) -> None:
        super().__init__(f"Suite '{suite}' is declared more than once with different fixtures.")
        self.suite: str = suite


class EntryPointConflictError(ConfigurationError):
    """
    Raised when a second custom entry point is declared.
    """
    def __init__(self, existing: str, new: str) -> None:
        super().__init__(
            f"Entry point '{new}' conflicts with already declared entry point '{existing}'."
        )
        self.existing: str = existing
        self.new: str = new


class TestModuleImportError(ConfigurationError):
    """
    Raised when a test file cannot be imported.
    """
    __test__ = False

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to import test file {path}: {reason}")
        self.path: str = path
        self.reason: str = reason


# ============================================================================
#                           Assertion errors
# ============================================================================


class NoActiveTestError(SuitestError):
    """
    Raised when an assertion is evaluated while no test is running.
    """


class FatalFailure(BaseException):
    """
    Aborts the remainder of the current setup, test body or teardown.

    Derives from BaseException so that ``except Exception`` inside a test
    body does not catch it. Only the fixture controller handles it.
    """
