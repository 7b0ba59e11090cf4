"""TransactionOracle implementation."""

from collections.abc import Callable, Iterable, Mapping
from typing import Any, Protocol, runtime_checkable

from ..config import GuardSettings, get_settings
from ..logging_config import get_logger
from ..models import TransactionState
from ..toggle import is_disabled

logger = get_logger(__name__)

_INACTIVE = TransactionState(active=False)


@runtime_checkable
class IResourceManager(Protocol):
    """Anything that can tell whether a transaction is open in the current context."""

    def in_transaction(self) -> bool:
        """Return True if a transaction is active for the calling context."""
        ...


class ITransactionOracle(Protocol):
    """Answers whether any monitored resource manager is mid-transaction."""

    def check(self, managers: Iterable[Any] | None = None) -> TransactionState:
        """Return the first active manager, or an inactive state."""
        ...


def describe_manager(manager: Any) -> str:
    """Human readable identity of a manager ref."""
    if isinstance(manager, str):
        return manager
    try:
        name = getattr(manager, "name", None)
        if isinstance(name, str) and name:
            return name
        return repr(manager)
    except Exception:
        return f"<{type(manager).__name__}>"


class TransactionOracle:
    """Scans configured resource managers in order, stopping at the first active one."""

    def __init__(
        self,
        settings: GuardSettings | None = None,
        registry: Mapping[str, Any] | None = None,
    ):
        self._settings = settings
        # Resolves string refs (e.g. "app.repo") to manager objects.
        self._registry = registry if registry is not None else {}

    @property
    def settings(self) -> GuardSettings:
        return self._settings if self._settings is not None else get_settings()

    def check(self, managers: Iterable[Any] | None = None) -> TransactionState:
        """Return the first active manager, or an inactive state."""
        if is_disabled():
            return _INACTIVE

        if managers is None:
            managers = self.settings.managers

        for manager in managers:
            if self._is_active(manager):
                return TransactionState(active=True, manager=manager)
        return _INACTIVE

    def _is_active(self, manager: Any) -> bool:
        """Query one manager; any failure counts as inactive."""
        try:
            query = self._lookup(manager)
            return query() is True
        except Exception as e:
            logger.debug(
                "Transaction lookup failed for %s: %s", describe_manager(manager), e
            )
            return False

    def _lookup(self, manager: Any) -> Callable[[], Any]:
        if isinstance(manager, str):
            manager = self._registry[manager]
        query = getattr(manager, "in_transaction")
        if not callable(query):
            # Plain boolean attribute (e.g. sqlite3.Connection.in_transaction).
            return lambda: query
        return query
