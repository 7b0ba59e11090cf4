"""Guard bootstrap and lifecycle management."""

from collections.abc import Mapping
from typing import Any, Protocol

from .adapters import IAdapter
from .config import GuardSettings, get_settings
from .handler import Dispatcher
from .logging_config import get_logger
from .models import EventName, TransactionState, normalize_event_name
from .oracle import TransactionOracle
from .reporter import IReporter, ViolationStore, build_reporter, default_store
from .telemetry import ITelemetry, telemetry

logger = get_logger(__name__)

HANDLER_ID = "txguard-handler"


class IGuard(Protocol):
    """Bootstrap and lifecycle."""

    def start(self) -> None:
        """Attach the dispatcher to the telemetry bus."""
        ...

    def stop(self) -> None:
        """Detach from the telemetry bus."""
        ...

    def in_transaction(self) -> TransactionState:
        """Query the configured managers."""
        ...


def collect_events(adapters: list[IAdapter]) -> list[EventName]:
    """Union of the adapters' event names, first-seen order, no duplicates."""
    events: list[EventName] = []
    for adapter in adapters:
        for name in adapter.events():
            name = normalize_event_name(name)
            if name not in events:
                events.append(name)
    return events


class Guard:
    """Wires adapters, oracle, reporter and dispatcher onto a telemetry bus."""

    def __init__(
        self,
        settings: GuardSettings | None = None,
        bus: ITelemetry | None = None,
        store: ViolationStore | None = None,
        reporter: IReporter | None = None,
        registry: Mapping[str, Any] | None = None,
        handler_id: str = HANDLER_ID,
    ):
        self._settings = settings if settings is not None else get_settings()
        self._bus = bus if bus is not None else telemetry
        self._store = store if store is not None else default_store
        self._handler_id = handler_id
        self._attached = False

        if reporter is None:
            reporter = build_reporter(self._settings.mode, self._settings, self._store)

        self._oracle = TransactionOracle(self._settings, registry)
        self._dispatcher = Dispatcher(self._settings, self._oracle, reporter)

    def start(self) -> None:
        """Attach the dispatcher for every event the configured adapters declare."""
        if self._attached:
            return
        if not self._settings.enabled:
            logger.debug("[txguard] Disabled, no handlers attached")
            return

        adapters = list(self._settings.adapters)
        events = collect_events(adapters)
        self._bus.attach_many(
            self._handler_id, events, self._dispatcher.handle_event, adapters
        )
        self._attached = True

        logger.debug(
            "[txguard] Attached handler for %s event(s) from %s adapter(s)",
            len(events),
            len(adapters),
        )

    def stop(self) -> None:
        """Detach from the telemetry bus."""
        if self._attached:
            self._bus.detach(self._handler_id)
            self._attached = False

    def in_transaction(self) -> TransactionState:
        """Query the configured managers."""
        return self._oracle.check()

    @property
    def settings(self) -> GuardSettings:
        return self._settings

    @property
    def store(self) -> ViolationStore:
        return self._store

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    @property
    def attached(self) -> bool:
        return self._attached
