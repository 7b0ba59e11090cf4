"""txguard: detect external operations performed inside open database transactions."""

from .adapters import (
    GRPC_CLIENT_RPC_START,
    HTTPX_REQUEST_START,
    GRPCClientAdapter,
    HTTPXClientAdapter,
    IAdapter,
)
from .app import Guard, IGuard
from .config import GuardSettings, get_settings, load_settings, reset_settings
from .handler import Dispatcher, IDispatcher
from .models import (
    ClassifiedOperation,
    RawEvent,
    ReportMode,
    TransactionState,
    Violation,
)
from .oracle import IResourceManager, ITransactionOracle, TransactionOracle
from .reporter import (
    CollectingReporter,
    IReporter,
    LoggingReporter,
    ViolationStore,
    clear_violations,
    drain_violations,
)
from .telemetry import ITelemetry, Telemetry, telemetry
from .toggle import disabled, is_disabled, run_disabled

__all__ = [
    # Bootstrap
    "Guard",
    "IGuard",
    # Config
    "GuardSettings",
    "get_settings",
    "load_settings",
    "reset_settings",
    # Models
    "RawEvent",
    "ClassifiedOperation",
    "TransactionState",
    "Violation",
    "ReportMode",
    # Components
    "IAdapter",
    "GRPCClientAdapter",
    "GRPC_CLIENT_RPC_START",
    "HTTPXClientAdapter",
    "HTTPX_REQUEST_START",
    "IResourceManager",
    "ITransactionOracle",
    "TransactionOracle",
    "IReporter",
    "CollectingReporter",
    "LoggingReporter",
    "ViolationStore",
    "IDispatcher",
    "Dispatcher",
    "ITelemetry",
    "Telemetry",
    "telemetry",
    # Violation consumption
    "clear_violations",
    "drain_violations",
    # Bypass
    "disabled",
    "is_disabled",
    "run_disabled",
]
