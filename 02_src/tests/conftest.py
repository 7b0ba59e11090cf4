"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from txguard.testing import violation_check  # noqa: E402,F401


class StubManager:
    """Resource manager reporting a fixed transaction state."""

    def __init__(self, name: str, active: bool = False):
        self.name = name
        self.active = active
        self.calls = 0

    def in_transaction(self) -> bool:
        self.calls += 1
        return self.active


class FailingManager:
    """Resource manager whose status lookup blows up."""

    name = "broken"

    def __init__(self):
        self.calls = 0

    def in_transaction(self) -> bool:
        self.calls += 1
        raise RuntimeError("driver exploded")


class SpyAdapter:
    """Adapter recording every invocation; classifies one event name."""

    def __init__(self, event=("svc", "call", "start"), kind="rpc_client_call"):
        self.event = tuple(event)
        self.kind = kind
        self.calls = []

    def events(self):
        return [self.event]

    def handle_event(self, name, measurements, metadata, config):
        self.calls.append(name)
        if tuple(name) != self.event:
            return None
        return self.kind, dict(metadata)

    def format_operation(self, kind, metadata):
        if kind == self.kind:
            return f"{kind}: {metadata.get('service')}.{metadata.get('method')}"
        return str(kind)


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Keep process-wide settings and the default store isolated per test."""
    from txguard.config import reset_settings
    from txguard.reporter import default_store

    reset_settings()
    default_store.clear()
    yield
    reset_settings()
    default_store.clear()


@pytest.fixture
def settings():
    """Fresh settings with no managers."""
    from txguard.config import GuardSettings

    return GuardSettings()


@pytest.fixture
def store():
    """Private violation store."""
    from txguard.reporter import ViolationStore

    return ViolationStore()


@pytest.fixture
def active_manager():
    return StubManager("M", active=True)


@pytest.fixture
def idle_manager():
    return StubManager("M", active=False)


@pytest.fixture
def spy_adapter():
    return SpyAdapter()


@pytest.fixture
def dispatcher(settings, store):
    """Dispatcher in collect mode writing to the private store."""
    from txguard.handler import Dispatcher
    from txguard.oracle import TransactionOracle
    from txguard.reporter import CollectingReporter

    return Dispatcher(
        settings=settings,
        oracle=TransactionOracle(settings),
        reporter=CollectingReporter(store),
    )


@pytest.fixture
def bus():
    """Private telemetry bus."""
    from txguard.telemetry import Telemetry

    return Telemetry()


@pytest_asyncio.fixture
async def repo():
    """In-memory SQLite repo."""
    from txguard.repo import SQLiteRepo

    r = SQLiteRepo(":memory:", name="test_repo")
    await r.init()
    await r.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT)")
    yield r
    await r.close()
