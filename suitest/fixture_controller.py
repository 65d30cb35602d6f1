"""
Module driving the setup / test body / teardown lifecycle of a single test.
"""

import builtins
import dataclasses
import sys
import types
from enum import Enum
from typing import Annotated, Any, Callable, Union, get_args, get_origin, get_type_hints

from suitest.assertion_evaluator import exception_record
from suitest.errors import FatalFailure
from suitest.test_context import TestContext
from suitest.test_registry import FixtureSuite, TestDescriptor


class FixtureState(Enum):
    """
    States of the fixture lifecycle of one test.
    """
    UNINITIALIZED = "uninitialized"
    SETUP_RUNNING = "setup running"
    READY = "ready"
    TEST_RUNNING = "test running"
    TEARDOWN_RUNNING = "teardown running"
    DONE = "done"
    SETUP_FAILED = "setup failed"


# Types whose zero value is obtained by calling them without arguments.
ZERO_CONSTRUCTIBLE: tuple[type, ...] = (
    int, float, complex, bool, str, bytes, bytearray,
    list, dict, set, frozenset, tuple,
)


def zero_value(tp: Any) -> Any:
    """
    Return the zero value of an annotated type.

    Numbers are 0, strings and containers are empty, dataclasses have every
    field zeroed recursively, and anything else is None.

    Parameters
    ----------
    tp : Any
        Type or type annotation

    Returns
    -------
    Any
        Zero value of the type
    """
    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        return _zero_dataclass(tp)

    origin: Any = get_origin(tp)
    if origin is Union or origin is types.UnionType:
        return None
    if origin is Annotated:
        return zero_value(get_args(tp)[0])

    base: Any = origin if origin is not None else tp
    if isinstance(base, type) and base in ZERO_CONSTRUCTIBLE:
        return base()
    return None


def _zero_dataclass(tp: type) -> Any:
    try:
        hints: dict[str, Any] = get_type_hints(tp, include_extras=True)
    except NameError:
        # A name in some annotation is not reachable from the module, e.g. a
        # class local to a function. Resolve the fields one by one instead.
        module_globals: dict[str, Any] = vars(sys.modules.get(tp.__module__, builtins))
        hints = {f.name: _resolve_annotation(f.type, module_globals) for f in dataclasses.fields(tp)}

    init_values: dict[str, Any] = {}
    late_values: dict[str, Any] = {}
    for f in dataclasses.fields(tp):
        value: Any = zero_value(hints.get(f.name, f.type))
        if f.init:
            init_values[f.name] = value
        else:
            late_values[f.name] = value

    instance: Any = tp(**init_values)
    for name, value in late_values.items():
        object.__setattr__(instance, name, value)
    return instance


def _resolve_annotation(annotation: Any, module_globals: dict[str, Any]) -> Any:
    """
    Turn a string annotation into a type, or None if it names nothing known.
    """
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, dict(module_globals))
    except (NameError, SyntaxError, TypeError):
        return getattr(builtins, annotation.strip(), None)


def new_fixture(fixture_type: type) -> Any:
    """
    Create a zero-valued fixture instance.

    Dataclasses get every field zeroed, other types are called without
    arguments.
    """
    if dataclasses.is_dataclass(fixture_type):
        return _zero_dataclass(fixture_type)
    return fixture_type()


class FixtureController:
    """
    Runs one test through its fixture lifecycle.

    Teardown always runs once setup returned, even if the test body aborted
    on a fatal assertion. If the fixture cannot be created or setup aborts,
    neither the body nor teardown run. A SystemExit raised by a hook or body
    is recorded like any other exception.
    Tests without fixture only have their body called.

    Attributes
    ----------
    state : FixtureState
        State reached by the last test driven by this controller
    """
    def __init__(self, verbose: bool = False) -> None:
        """
        Initialize the fixture controller.

        Parameters
        ----------
        verbose : bool, optional
            Enable verbose output, by default False
        """
        self._verbose: bool = verbose
        self.state: FixtureState = FixtureState.UNINITIALIZED


    def run(self, descriptor: TestDescriptor, context: TestContext) -> FixtureState:
        """
        Run setup, body and teardown of a test.

        Parameters
        ----------
        descriptor : TestDescriptor
            Test to run
        context : TestContext
            Context the assertions of the test write to

        Returns
        -------
        FixtureState
            DONE, or SETUP_FAILED if setup aborted
        """
        self._transition(FixtureState.UNINITIALIZED)
        suite: FixtureSuite | None = descriptor.fixture

        if suite is None:
            self._transition(FixtureState.TEST_RUNNING)
            self._call(descriptor.body, context)
            self._transition(FixtureState.DONE)
            return self.state

        self._transition(FixtureState.SETUP_RUNNING)
        built, instance = self._build(suite.fixture_type, context)
        if not built:
            self._transition(FixtureState.SETUP_FAILED)
            return self.state
        if suite.setup_hook is not None and not self._call(suite.setup_hook, context, instance):
            self._transition(FixtureState.SETUP_FAILED)
            return self.state

        self._transition(FixtureState.READY)
        self._transition(FixtureState.TEST_RUNNING)
        try:
            self._call(descriptor.body, context, instance)
        finally:
            self._transition(FixtureState.TEARDOWN_RUNNING)
            if suite.teardown_hook is not None:
                self._call(suite.teardown_hook, context, instance)

        del instance
        self._transition(FixtureState.DONE)
        return self.state


    def _build(self, fixture_type: type, context: TestContext) -> tuple[bool, Any]:
        """
        Create the zero-valued fixture, recording a failure if that raises.

        Returns
        -------
        tuple[bool, Any]
            Whether the fixture was created, and the fixture itself
        """
        with context.activate():
            try:
                return True, new_fixture(fixture_type)
            except (Exception, SystemExit) as e:
                context.record_failure(exception_record(e))
                return False, None


    def _call(self, func: Callable[..., Any], context: TestContext, *args: Any) -> bool:
        """
        Call a hook or test body inside the test context.

        Returns
        -------
        bool
            False if the call was aborted by a fatal assertion or an exception
        """
        with context.activate():
            try:
                func(*args)
            except FatalFailure:
                return False
            except (Exception, SystemExit) as e:
                context.record_failure(exception_record(e))
                return False
        return True


    def _transition(self, state: FixtureState) -> None:
        self.state = state
        if self._verbose:
            print(f"  fixture: {state.value}")
