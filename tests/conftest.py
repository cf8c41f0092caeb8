"""
Shared fixtures for the Simple Test Framework tests.
"""

import pytest

from stf.assertions import get_comparator, set_comparator
from stf.state import FAILURE_SIGNAL


@pytest.fixture(autouse=True)
def clean_failure_signal():
    """Every test starts and ends with the process-wide signal cleared."""
    FAILURE_SIGNAL.clear()
    previous = get_comparator()
    yield
    set_comparator(previous)
    FAILURE_SIGNAL.clear()


class FakeTerminate:
    """Stands in for os._exit; records the status instead of exiting."""

    def __init__(self):
        self.calls = []

    def __call__(self, status):
        self.calls.append(status)


@pytest.fixture
def fake_terminate():
    return FakeTerminate()
