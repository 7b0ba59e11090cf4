"""Adapter for outgoing gRPC client calls."""

from collections.abc import Mapping
from typing import Any

from ..models import EventName
from .base import Classification

GRPC_CLIENT_RPC_START: EventName = ("grpc", "client", "rpc", "start")
# Incoming requests are not violations, so this one is never subscribed.
GRPC_SERVER_RPC_START: EventName = ("grpc", "server", "rpc", "start")

RPC_CLIENT_CALL = "rpc_client_call"


class GRPCClientAdapter:
    """Classifies outgoing gRPC client calls.

    Only the client-side start event is monitored. Server-side RPC events
    represent incoming requests being processed, not outbound calls made
    during a transaction.
    """

    def events(self) -> list[EventName]:
        return [GRPC_CLIENT_RPC_START]

    def handle_event(
        self,
        name: EventName,
        measurements: Mapping[str, Any],
        metadata: Mapping[str, Any],
        config: Any,
    ) -> Classification | None:
        if tuple(name) != GRPC_CLIENT_RPC_START:
            return None

        return RPC_CLIENT_CALL, {
            "service": metadata.get("service"),
            "method": metadata.get("method"),
        }

    def format_operation(self, kind: str, metadata: Mapping[str, Any]) -> str:
        if kind == RPC_CLIENT_CALL:
            return f"{kind}: {metadata.get('service')}.{metadata.get('method')}"
        return str(kind)

    def __repr__(self) -> str:
        return "GRPCClientAdapter()"
