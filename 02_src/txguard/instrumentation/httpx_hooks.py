"""Emit request-start events from httpx clients."""

import time

import httpx

from ..adapters.http import HTTPX_REQUEST_START
from ..telemetry import ITelemetry, telemetry


def _emit(bus: ITelemetry, request: httpx.Request) -> None:
    bus.execute(
        HTTPX_REQUEST_START,
        {"system_time": time.time_ns()},
        {"method": request.method, "url": str(request.url)},
    )


def instrument_client(
    client: httpx.Client | httpx.AsyncClient, bus: ITelemetry | None = None
) -> httpx.Client | httpx.AsyncClient:
    """
    Install a request hook that reports every outgoing request to the bus.

    Args:
        client: httpx.Client or httpx.AsyncClient to instrument
        bus: Telemetry bus to emit on. Defaults to the module-level bus.

    Returns:
        The same client, for chaining.
    """
    target = bus if bus is not None else telemetry

    if isinstance(client, httpx.AsyncClient):

        async def hook(request: httpx.Request) -> None:
            _emit(target, request)

    else:

        def hook(request: httpx.Request) -> None:
            _emit(target, request)

    hooks = client.event_hooks
    hooks["request"] = [*hooks.get("request", []), hook]
    client.event_hooks = hooks
    return client
