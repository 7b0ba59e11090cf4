"""Telemetry implementation: synchronous in-process pub/sub for operation events."""

import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Callable, Protocol

from ..logging_config import get_logger
from ..models import EventName, RawEvent, normalize_event_name

logger = get_logger(__name__)


EventHandler = Callable[[EventName, Mapping[str, Any], Mapping[str, Any], Any], None]


class AlreadyAttachedError(ValueError):
    """Raised when a handler id is attached twice."""


@dataclass(frozen=True)
class _Attachment:
    handler_id: str
    event_names: frozenset[EventName]
    handler: EventHandler
    config: Any


class ITelemetry(Protocol):
    """In-process pub/sub for named operation events."""

    def attach_many(
        self,
        handler_id: str,
        event_names: Iterable[Iterable[str]],
        handler: EventHandler,
        config: Any = None,
    ) -> None:
        """Attach a handler to several event names."""
        ...

    def detach(self, handler_id: str) -> bool:
        """Detach a handler; return False if it was not attached."""
        ...

    def execute(
        self,
        event_name: Iterable[str],
        measurements: Mapping[str, Any] | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        """Emit an event: calls every handler attached to its name."""
        ...


class Telemetry:
    """Thread-safe synchronous event bus."""

    def __init__(self):
        self._lock = threading.Lock()
        self._attachments: dict[str, _Attachment] = {}

    def attach_many(
        self,
        handler_id: str,
        event_names: Iterable[Iterable[str]],
        handler: EventHandler,
        config: Any = None,
    ) -> None:
        """Attach a handler to several event names."""
        attachment = _Attachment(
            handler_id=handler_id,
            event_names=frozenset(normalize_event_name(name) for name in event_names),
            handler=handler,
            config=config,
        )
        with self._lock:
            if handler_id in self._attachments:
                raise AlreadyAttachedError(f"Handler {handler_id!r} already attached")
            self._attachments[handler_id] = attachment

    def detach(self, handler_id: str) -> bool:
        """Detach a handler; return False if it was not attached."""
        with self._lock:
            return self._attachments.pop(handler_id, None) is not None

    def handlers_for(self, event_name: Iterable[str]) -> list[str]:
        """Ids of handlers attached to an event name, in attachment order."""
        name = normalize_event_name(event_name)
        with self._lock:
            return [
                a.handler_id for a in self._attachments.values() if name in a.event_names
            ]

    def execute(
        self,
        event_name: Iterable[str],
        measurements: Mapping[str, Any] | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        """Emit an event: calls every handler attached to its name."""
        event = RawEvent(
            name=normalize_event_name(event_name),
            measurements=measurements or {},
            metadata=metadata or {},
        )

        with self._lock:
            attachments = [
                a for a in self._attachments.values() if event.name in a.event_names
            ]

        for attachment in attachments:
            try:
                attachment.handler(
                    event.name, event.measurements, event.metadata, attachment.config
                )
            except Exception as e:
                logger.error("Error in handler %s: %s", attachment.handler_id, e)


# Default bus used by library instrumentation
telemetry = Telemetry()
