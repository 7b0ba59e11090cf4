"""Adapter for outgoing httpx requests."""

from collections.abc import Mapping
from typing import Any

from ..models import EventName
from .base import Classification

HTTPX_REQUEST_START: EventName = ("httpx", "client", "request", "start")

HTTP_CLIENT_REQUEST = "http_client_request"


class HTTPXClientAdapter:
    """Classifies outgoing HTTP requests made through an instrumented httpx client."""

    def events(self) -> list[EventName]:
        return [HTTPX_REQUEST_START]

    def handle_event(
        self,
        name: EventName,
        measurements: Mapping[str, Any],
        metadata: Mapping[str, Any],
        config: Any,
    ) -> Classification | None:
        if tuple(name) != HTTPX_REQUEST_START:
            return None

        return HTTP_CLIENT_REQUEST, {
            "method": metadata.get("method"),
            "url": metadata.get("url"),
        }

    def format_operation(self, kind: str, metadata: Mapping[str, Any]) -> str:
        if kind == HTTP_CLIENT_REQUEST:
            return f"{kind}: {metadata.get('method')} {metadata.get('url')}"
        return str(kind)

    def __repr__(self) -> str:
        return "HTTPXClientAdapter()"
