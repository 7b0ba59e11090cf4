"""Dispatcher: routes raw events through adapters, the oracle and a reporter."""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Protocol

from ..adapters import IAdapter
from ..config import GuardSettings, get_settings
from ..logging_config import get_logger
from ..models import (
    ClassifiedOperation,
    EventName,
    RawEvent,
    Violation,
    normalize_event_name,
)
from ..oracle import ITransactionOracle, TransactionOracle
from ..reporter import IReporter, LoggingReporter, build_message

logger = get_logger(__name__)


class IDispatcher(Protocol):
    """Entry point invoked once per raw event."""

    def dispatch(
        self,
        name: Iterable[str],
        measurements: Mapping[str, Any] | None,
        metadata: Mapping[str, Any] | None,
        adapters: Sequence[IAdapter] | None = None,
    ) -> None:
        """Classify an event and report it if a transaction is open."""
        ...


class Dispatcher:
    """Detects external operations performed within active transactions.

    Each dispatch is independent: classify with the first matching adapter,
    ask the oracle for an active transaction, and hand a Violation to the
    reporter. Nothing raised along the way escapes ``dispatch``.
    """

    def __init__(
        self,
        settings: GuardSettings | None = None,
        oracle: ITransactionOracle | None = None,
        reporter: IReporter | None = None,
    ):
        self._settings = settings
        self._oracle = oracle if oracle is not None else TransactionOracle(settings)
        self._reporter = reporter if reporter is not None else LoggingReporter(settings)

    @property
    def settings(self) -> GuardSettings:
        return self._settings if self._settings is not None else get_settings()

    @property
    def reporter(self) -> IReporter:
        return self._reporter

    def dispatch(
        self,
        name: Iterable[str],
        measurements: Mapping[str, Any] | None,
        metadata: Mapping[str, Any] | None,
        adapters: Sequence[IAdapter] | None = None,
    ) -> None:
        """Classify an event and report it if a transaction is open."""
        settings = self.settings
        if not settings.enabled:
            return

        event = RawEvent(
            name=normalize_event_name(name),
            measurements=measurements or {},
            metadata=metadata or {},
        )
        if adapters is None:
            adapters = settings.adapters

        operation = self.classify(event, adapters)
        if operation is None:
            return

        state = self._oracle.check()
        if not state.active:
            return

        self._report(operation, state.manager)

    def handle_event(
        self,
        name: EventName,
        measurements: Mapping[str, Any],
        metadata: Mapping[str, Any],
        config: Sequence[IAdapter] | None,
    ) -> None:
        """Telemetry handler signature; the adapter list arrives as static config."""
        self.dispatch(name, measurements, metadata, config)

    def classify(
        self, event: RawEvent, adapters: Sequence[IAdapter]
    ) -> ClassifiedOperation | None:
        """First adapter returning a classification wins; the rest are skipped."""
        for adapter in adapters:
            try:
                result = adapter.handle_event(
                    event.name, event.measurements, event.metadata, self._settings
                )
                if result is None:
                    continue
                kind, operation_metadata = result
                operation_metadata = dict(operation_metadata)
            except Exception:
                logger.warning(
                    "Adapter %r failed to classify %s", adapter, event.name, exc_info=True
                )
                continue

            return ClassifiedOperation(
                kind=kind,
                metadata=operation_metadata,
                source_adapter=adapter,
            )
        return None

    def _report(self, operation: ClassifiedOperation, manager: Any) -> None:
        try:
            description = operation.source_adapter.format_operation(
                operation.kind, operation.metadata
            )
        except Exception:
            logger.warning(
                "Adapter %r failed to format %s",
                operation.source_adapter,
                operation.kind,
                exc_info=True,
            )
            description = str(operation.kind)

        try:
            violation = Violation(
                message=build_message(description, manager, operation.metadata),
                kind=operation.kind,
                manager=manager,
                metadata=operation.metadata,
            )
            self._reporter.report(violation)
        except Exception as e:
            logger.error("Error reporting violation for %s: %s", operation.kind, e)
