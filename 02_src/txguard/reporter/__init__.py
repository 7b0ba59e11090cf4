"""Violation reporter module."""

from .reporter import (
    CollectingReporter,
    IReporter,
    LoggingReporter,
    ViolationStore,
    build_message,
    build_reporter,
    clear_violations,
    default_store,
    drain_violations,
)

__all__ = [
    "CollectingReporter",
    "IReporter",
    "LoggingReporter",
    "ViolationStore",
    "build_message",
    "build_reporter",
    "clear_violations",
    "default_store",
    "drain_violations",
]
