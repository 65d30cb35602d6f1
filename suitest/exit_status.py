"""
Module providing exit status enum.
"""
from enum import Enum

from suitest.test_result import RunSummary


class ExitStatus(Enum):
    """
    Enum of exit status
    """
    SUCCESS = 0
    FAILURE = 1
    CONFIGURATION_ERROR = 2

    @classmethod
    def from_summary(cls, summary: RunSummary) -> "ExitStatus":
        """
        Map a run summary to the process exit status.

        Parameters
        ----------
        summary : RunSummary
            Summary of a finished run

        Returns
        -------
        ExitStatus
            SUCCESS if no failure was recorded, FAILURE otherwise
        """
        return cls.SUCCESS if summary.success else cls.FAILURE
