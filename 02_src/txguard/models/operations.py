"""Classification, transaction and violation data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ReportMode(str, Enum):
    """How detected violations become visible."""

    LOG = "log"  # direct report to the logging sink
    COLLECT = "collect"  # deferred collection for a check harness


@dataclass(frozen=True)
class ClassifiedOperation:
    """A raw event normalized by exactly one adapter."""

    kind: str  # e.g. "rpc_client_call"
    metadata: dict[str, Any]
    source_adapter: Any


@dataclass(frozen=True)
class TransactionState:
    """Result of querying resource managers for an open transaction."""

    active: bool
    manager: Any = None


@dataclass(frozen=True)
class Violation:
    """A classified operation detected inside an active transaction."""

    message: str
    kind: str = ""
    manager: Any = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message
