"""
Shared fixtures of the suitest test suite.
"""
from typing import Iterator

import pytest

from suitest.test_registry import TestRegistry, default_registry


@pytest.fixture
def clean_default_registry() -> Iterator[TestRegistry]:
    """
    Returns the process-wide registry, emptied before and after the test.
    """
    default_registry.clear()
    yield default_registry
    default_registry.clear()
