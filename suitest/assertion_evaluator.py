"""
Module evaluating assertions made inside tests.

Every assertion comes in two flavours:

- ``check_*`` records a failure and lets the test continue.
- ``require_*`` records a failure and aborts the running setup, test body
  or teardown by raising ``FatalFailure``.
"""

import linecache
import operator
import sys
from enum import Enum
from pathlib import Path
from types import FrameType, TracebackType
from typing import Any, Callable, ClassVar

from suitest.errors import FatalFailure
from suitest.test_context import TestContext, current_context
from suitest.test_result import FailureRecord

PACKAGE_DIR: Path = Path(__file__).resolve().parent


class Operator(Enum):
    """
    Relational operators supported by comparison assertions.
    """
    EQ = "=="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="

    def apply(self, lhs: Any, rhs: Any) -> bool:
        return bool(_OPERATOR_FUNCTIONS[self](lhs, rhs))


_OPERATOR_FUNCTIONS: dict[Operator, Callable[[Any, Any], Any]] = {
    Operator.EQ: operator.eq,
    Operator.NE: operator.ne,
    Operator.LT: operator.lt,
    Operator.LE: operator.le,
    Operator.GT: operator.gt,
    Operator.GE: operator.ge,
}


class StringMode(Enum):
    """
    String comparison modes.

    The prefix modes only compare as many characters of the second string as
    the first string holds.
    """
    EQUAL = "streq"
    NOT_EQUAL = "strneq"
    PREFIX_EQUAL = "substreq"
    PREFIX_NOT_EQUAL = "substrneq"

    def apply(self, a: str | bytes, b: str | bytes) -> bool:
        if self in (StringMode.PREFIX_EQUAL, StringMode.PREFIX_NOT_EQUAL):
            equal: bool = b[:len(a)] == a
        else:
            equal = a == b
        return equal if self in (StringMode.EQUAL, StringMode.PREFIX_EQUAL) else not equal


def find_call_site() -> tuple[str, int]:
    """
    Return file and line of the innermost frame outside the suitest package.
    """
    frame: FrameType | None = sys._getframe(1)
    while frame is not None:
        filename: str = frame.f_code.co_filename
        if Path(filename).resolve().parent != PACKAGE_DIR:
            return filename, frame.f_lineno
        frame = frame.f_back
    # Only reached when called from suitest itself without a user frame.
    return __file__, sys._getframe(1).f_lineno


def source_line(filename: str, line: int) -> str | None:
    text: str = linecache.getline(filename, line).strip()
    return text or None


class AssertionEvaluator:
    """
    Evaluates assertions against the context of the running test.

    On success only the pass counter of the test grows. On failure a
    FailureRecord is appended to the test's failure list and, for fatal
    assertions, ``FatalFailure`` is raised to leave the running hook.
    """
    DEFAULT_MESSAGE: ClassVar[str] = "Assertion failed"

    def evaluate(self, condition: Any, is_fatal: bool, message: str | None = None) -> bool:
        """
        Evaluate a boolean assertion.

        Parameters
        ----------
        condition : Any
            Value tested for truth
        is_fatal : bool
            Abort the running hook on failure
        message : str | None, optional
            Message recorded on failure

        Returns
        -------
        bool
            Whether the assertion passed
        """
        context: TestContext = current_context()
        if condition:
            context.record_pass()
            return True

        self._fail(context, is_fatal, message or self.DEFAULT_MESSAGE)
        return False


    def evaluate_comparison(
        self,
        lhs: Any,
        rhs: Any,
        op: Operator,
        is_fatal: bool,
        message: str | None = None,
    ) -> bool:
        """
        Evaluate ``lhs <op> rhs`` using the natural ordering of the operands.

        Parameters
        ----------
        lhs : Any
            Left operand
        rhs : Any
            Right operand
        op : Operator
            Relational operator
        is_fatal : bool
            Abort the running hook on failure
        message : str | None, optional
            Message recorded on failure

        Returns
        -------
        bool
            Whether the assertion passed
        """
        context: TestContext = current_context()
        if op.apply(lhs, rhs):
            context.record_pass()
            return True

        self._fail(
            context,
            is_fatal,
            message or f"Expected {lhs!r} {op.value} {rhs!r}",
            lhs=repr(lhs),
            rhs=repr(rhs),
            operator=op.value,
        )
        return False


    def evaluate_string_comparison(
        self,
        a: str | bytes,
        b: str | bytes,
        mode: StringMode,
        is_fatal: bool,
        message: str | None = None,
    ) -> bool:
        """
        Evaluate a comparison of two character sequences.

        Characters are compared by code point (or byte value), never with
        locale aware collation.

        Parameters
        ----------
        a : str | bytes
            First string. Bounds the compared length in prefix modes.
        b : str | bytes
            Second string
        mode : StringMode
            Comparison mode
        is_fatal : bool
            Abort the running hook on failure
        message : str | None, optional
            Message recorded on failure

        Returns
        -------
        bool
            Whether the assertion passed

        Raises
        ------
        TypeError
            If the operands are not both str or both bytes
        """
        context: TestContext = current_context()
        if not (isinstance(a, str) and isinstance(b, str)) \
        and not (isinstance(a, bytes) and isinstance(b, bytes)):
            raise TypeError(
                f"{mode.value} expects two str or two bytes, "
                f"got {type(a).__name__} and {type(b).__name__}"
            )
        if mode.apply(a, b):
            context.record_pass()
            return True

        self._fail(
            context,
            is_fatal,
            message or f"{mode.value}({a!r}, {b!r}) failed",
            lhs=repr(a),
            rhs=repr(b),
            operator=mode.value,
        )
        return False


    def _fail(
        self,
        context: TestContext,
        is_fatal: bool,
        message: str,
        **operands: str,
    ) -> None:
        filename, line = find_call_site()
        record: FailureRecord = FailureRecord(
            file=filename,
            line=line,
            message=message,
            fatal=is_fatal,
            source=source_line(filename, line),
            **operands,
        )
        context.record_failure(record)
        if is_fatal:
            raise FatalFailure(record)


def exception_record(exc: BaseException) -> FailureRecord:
    """
    Build a fatal FailureRecord for an unexpected exception.

    The record points at the innermost frame outside suitest that the
    exception passed through.

    Parameters
    ----------
    exc : BaseException
        Exception that escaped a hook or test body

    Returns
    -------
    FailureRecord
        Record describing the exception
    """
    filename, line = "<unknown>", 0
    tb: TracebackType | None = exc.__traceback__
    while tb is not None:
        frame_file: str = tb.tb_frame.f_code.co_filename
        if Path(frame_file).resolve().parent != PACKAGE_DIR or filename == "<unknown>":
            filename, line = frame_file, tb.tb_lineno
        tb = tb.tb_next
    return FailureRecord(
        file=filename,
        line=line,
        message=f"Unexpected exception {type(exc).__name__}: {exc}",
        fatal=True,
        source=source_line(filename, line),
    )


_evaluator: AssertionEvaluator = AssertionEvaluator()


# ============================================================================
#                           Boolean assertions
# ============================================================================


def check(condition: Any, message: str | None = None) -> bool:
    """Non-fatal: record a failure if ``condition`` is false."""
    return _evaluator.evaluate(condition, False, message)


def require(condition: Any, message: str | None = None) -> bool:
    """Fatal: abort the test if ``condition`` is false."""
    return _evaluator.evaluate(condition, True, message)


def fail(message: str | None = None) -> None:
    """Record a fatal failure unconditionally."""
    _evaluator.evaluate(False, True, message)


# ============================================================================
#                           Relational assertions
# ============================================================================


def check_eq(lhs: Any, rhs: Any, message: str | None = None) -> bool:
    return _evaluator.evaluate_comparison(lhs, rhs, Operator.EQ, False, message)


def check_ne(lhs: Any, rhs: Any, message: str | None = None) -> bool:
    return _evaluator.evaluate_comparison(lhs, rhs, Operator.NE, False, message)


def check_lt(lhs: Any, rhs: Any, message: str | None = None) -> bool:
    return _evaluator.evaluate_comparison(lhs, rhs, Operator.LT, False, message)


def check_le(lhs: Any, rhs: Any, message: str | None = None) -> bool:
    return _evaluator.evaluate_comparison(lhs, rhs, Operator.LE, False, message)


def check_gt(lhs: Any, rhs: Any, message: str | None = None) -> bool:
    return _evaluator.evaluate_comparison(lhs, rhs, Operator.GT, False, message)


def check_ge(lhs: Any, rhs: Any, message: str | None = None) -> bool:
    return _evaluator.evaluate_comparison(lhs, rhs, Operator.GE, False, message)


def require_eq(lhs: Any, rhs: Any, message: str | None = None) -> bool:
    return _evaluator.evaluate_comparison(lhs, rhs, Operator.EQ, True, message)


def require_ne(lhs: Any, rhs: Any, message: str | None = None) -> bool:
    return _evaluator.evaluate_comparison(lhs, rhs, Operator.NE, True, message)


def require_lt(lhs: Any, rhs: Any, message: str | None = None) -> bool:
    return _evaluator.evaluate_comparison(lhs, rhs, Operator.LT, True, message)


def require_le(lhs: Any, rhs: Any, message: str | None = None) -> bool:
    return _evaluator.evaluate_comparison(lhs, rhs, Operator.LE, True, message)


def require_gt(lhs: Any, rhs: Any, message: str | None = None) -> bool:
    return _evaluator.evaluate_comparison(lhs, rhs, Operator.GT, True, message)


def require_ge(lhs: Any, rhs: Any, message: str | None = None) -> bool:
    return _evaluator.evaluate_comparison(lhs, rhs, Operator.GE, True, message)


# ============================================================================
#                           String assertions
# ============================================================================


def check_streq(a: str | bytes, b: str | bytes, message: str | None = None) -> bool:
    return _evaluator.evaluate_string_comparison(a, b, StringMode.EQUAL, False, message)


def check_strneq(a: str | bytes, b: str | bytes, message: str | None = None) -> bool:
    return _evaluator.evaluate_string_comparison(a, b, StringMode.NOT_EQUAL, False, message)


def check_substreq(a: str | bytes, b: str | bytes, message: str | None = None) -> bool:
    """Non-fatal: ``b`` must start with ``a``."""
    return _evaluator.evaluate_string_comparison(a, b, StringMode.PREFIX_EQUAL, False, message)


def check_substrneq(a: str | bytes, b: str | bytes, message: str | None = None) -> bool:
    """Non-fatal: ``b`` must not start with ``a``."""
    return _evaluator.evaluate_string_comparison(
        a, b, StringMode.PREFIX_NOT_EQUAL, False, message
    )


def require_streq(a: str | bytes, b: str | bytes, message: str | None = None) -> bool:
    return _evaluator.evaluate_string_comparison(a, b, StringMode.EQUAL, True, message)


def require_strneq(a: str | bytes, b: str | bytes, message: str | None = None) -> bool:
    return _evaluator.evaluate_string_comparison(a, b, StringMode.NOT_EQUAL, True, message)


def require_substreq(a: str | bytes, b: str | bytes, message: str | None = None) -> bool:
    """Fatal: ``b`` must start with ``a``."""
    return _evaluator.evaluate_string_comparison(a, b, StringMode.PREFIX_EQUAL, True, message)


def require_substrneq(a: str | bytes, b: str | bytes, message: str | None = None) -> bool:
    """Fatal: ``b`` must not start with ``a``."""
    return _evaluator.evaluate_string_comparison(
        a, b, StringMode.PREFIX_NOT_EQUAL, True, message
    )
