"""Core data models for txguard."""

from .events import EventName, RawEvent, normalize_event_name
from .operations import ClassifiedOperation, ReportMode, TransactionState, Violation

__all__ = [
    # Events
    "EventName",
    "RawEvent",
    "normalize_event_name",
    # Operations
    "ClassifiedOperation",
    "TransactionState",
    "Violation",
    "ReportMode",
]
