"""Adapter contract for classifying raw events."""

from collections.abc import Mapping
from typing import Any, Protocol

from ..models import EventName

# (operation_kind, operation_metadata); None means "not mine"
Classification = tuple[str, dict[str, Any]]


class IAdapter(Protocol):
    """Pluggable classifier mapping raw events to normalized operations.

    Adapters are stateless and side-effect free. They must never raise for
    names they do not recognize (including names outside their own
    ``events()``); they return ``None`` instead.
    """

    def events(self) -> list[EventName]:
        """Event names this adapter wants delivered to it."""
        ...

    def handle_event(
        self,
        name: EventName,
        measurements: Mapping[str, Any],
        metadata: Mapping[str, Any],
        config: Any,
    ) -> Classification | None:
        """Classify an event, or return None to skip it."""
        ...

    def format_operation(self, kind: str, metadata: Mapping[str, Any]) -> str:
        """Render a classified operation for a violation message."""
        ...
