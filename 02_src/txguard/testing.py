"""Test helpers for turning collected violations into failing tests.

Load the fixtures with ``pytest_plugins = ["txguard.testing"]`` in a
conftest.py and request ``violation_check`` (or mark it autouse) in tests
that run code inside transactions. The guard must run with
``mode=ReportMode.COLLECT`` for violations to reach the store.
"""

from collections.abc import Iterator
from contextlib import contextmanager

import pytest

from .config import GuardSettings, get_settings
from .models import Violation
from .reporter import ViolationStore, default_store


class ViolationError(AssertionError):
    """Raised by the harness when a test produced a transaction violation."""

    def __init__(self, violation: Violation):
        super().__init__(violation.message)
        self.violation = violation


class AlwaysInTransaction:
    """Resource manager that always reports an open transaction."""

    name = "mock_transaction"

    def in_transaction(self) -> bool:
        return True


def check_violations(store: ViolationStore | None = None) -> None:
    """Drain the store and raise for the first violation found."""
    store = store if store is not None else default_store
    violations = store.drain()
    if violations:
        raise ViolationError(violations[0])


@contextmanager
def mock_transaction(settings: GuardSettings | None = None) -> Iterator[AlwaysInTransaction]:
    """
    Pretend a transaction is open for the duration of the block.

    Example:
        with mock_transaction():
            telemetry.execute(GRPC_CLIENT_RPC_START, {}, {"service": "Users"})
    """
    settings = settings if settings is not None else get_settings()
    original = list(settings.managers)
    manager = AlwaysInTransaction()
    settings.managers = [manager]
    try:
        yield manager
    finally:
        settings.managers = original


@pytest.fixture
def violation_check() -> Iterator[ViolationStore]:
    """Clear violations before the test and fail it if any were collected."""
    default_store.clear()
    yield default_store
    check_violations(default_store)
