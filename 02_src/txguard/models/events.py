"""Raw event data models."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

EventName = tuple[str, ...]


def normalize_event_name(name: Iterable[str] | str) -> EventName:
    """Turn a list/tuple of segments (or a dotted string) into an EventName."""
    if isinstance(name, str):
        return tuple(segment for segment in name.split(".") if segment)
    return tuple(str(segment) for segment in name)


@dataclass(frozen=True)
class RawEvent:
    """A single operation-start event as emitted by an instrumented library."""

    name: EventName  # e.g. ("grpc", "client", "rpc", "start")
    measurements: Mapping[str, Any] = field(default_factory=dict)
    metadata: Mapping[str, Any] = field(default_factory=dict)
