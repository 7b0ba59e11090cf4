"""Violation reporting channels."""

import logging
import threading
from collections.abc import Mapping
from typing import Any, Protocol

from ..config import GuardSettings, get_settings
from ..logging_config import get_logger
from ..models import ReportMode, Violation
from ..oracle import describe_manager

logger = get_logger(__name__)


class ViolationStore:
    """Process-wide, lock-protected list of violations in detection order.

    Written from whichever context detected the violation and read by a
    harness running in another one, so it must not be context-local.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._violations: list[Violation] = []

    def append(self, violation: Violation) -> None:
        """Record a violation."""
        with self._lock:
            self._violations.append(violation)

    def drain(self) -> list[Violation]:
        """Return all violations and clear the store atomically."""
        with self._lock:
            violations = self._violations
            self._violations = []
        return violations

    def snapshot(self) -> list[Violation]:
        """Return a copy of stored violations without clearing."""
        with self._lock:
            return list(self._violations)

    def clear(self) -> None:
        """Discard all stored violations."""
        with self._lock:
            self._violations = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._violations)


default_store = ViolationStore()


def drain_violations() -> list[Violation]:
    """Drain the process-wide violation store."""
    return default_store.drain()


def clear_violations() -> None:
    """Clear the process-wide violation store."""
    default_store.clear()


def build_message(operation: str, manager: Any, metadata: Mapping[str, Any]) -> str:
    """Render the human-readable violation message."""
    return (
        "[txguard] Transaction violation detected!\n"
        "\n"
        f"Operation: {operation}\n"
        f"Manager: {describe_manager(manager)}\n"
        f"Details: {dict(metadata)!r}\n"
        "\n"
        "An external operation was detected within an active database transaction.\n"
        "This can lead to deadlocks, connection pool exhaustion, and long-running "
        "transactions.\n"
        "\n"
        "Consider moving this operation outside the transaction.\n"
    )


class IReporter(Protocol):
    """Delivers a detected violation through one channel."""

    def report(self, violation: Violation) -> None:
        """Make the violation visible."""
        ...


class CollectingReporter:
    """Appends violations to a store for a check harness to drain later."""

    def __init__(self, store: ViolationStore | None = None):
        self._store = store if store is not None else default_store

    @property
    def store(self) -> ViolationStore:
        return self._store

    def report(self, violation: Violation) -> None:
        self._store.append(violation)


class LoggingReporter:
    """Logs violations at the configured level, when logging is enabled."""

    def __init__(
        self,
        settings: GuardSettings | None = None,
        log: logging.Logger | None = None,
    ):
        self._settings = settings
        self._logger = log if log is not None else logger

    @property
    def settings(self) -> GuardSettings:
        return self._settings if self._settings is not None else get_settings()

    def report(self, violation: Violation) -> None:
        settings = self.settings
        if not settings.log:
            return

        self._logger.log(
            settings.log_level_number,
            violation.message,
            extra={
                "context": {
                    "kind": violation.kind,
                    "manager": describe_manager(violation.manager),
                    "metadata": violation.metadata,
                }
            },
        )


def build_reporter(
    mode: ReportMode,
    settings: GuardSettings | None = None,
    store: ViolationStore | None = None,
) -> IReporter:
    """Create the reporter for a reporting mode."""
    if mode == ReportMode.COLLECT:
        return CollectingReporter(store)
    return LoggingReporter(settings)
