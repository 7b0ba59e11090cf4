"""Execution-context scoped bypass for violation detection.

The flag lives in a ``ContextVar``, so it is local to the current thread or
asyncio task. Entering a scope saves the previous depth and exiting restores
it, which makes nesting safe: leaving an inner scope (normally or via an
exception) never re-enables detection for an enclosing one.
"""

import inspect
from collections.abc import Awaitable, Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, TypeVar

T = TypeVar("T")

_disabled_depth: ContextVar[int] = ContextVar("txguard_disabled_depth", default=0)


def is_disabled() -> bool:
    """Return True when detection is suspended for the current context."""
    return _disabled_depth.get() > 0


@contextmanager
def disabled() -> Iterator[None]:
    """Suspend detection for the dynamic extent of the ``with`` block."""
    token = _disabled_depth.set(_disabled_depth.get() + 1)
    try:
        yield
    finally:
        _disabled_depth.reset(token)


async def _run_disabled_async(fun: Callable[..., Awaitable[T]], *args, **kwargs) -> T:
    with disabled():
        return await fun(*args, **kwargs)


def run_disabled(fun: Callable[..., Any], *args, **kwargs) -> Any:
    """
    Call ``fun`` with detection suspended and return its result.

    For a coroutine function the scope has to cover the awaited body, so a
    coroutine is returned that holds the scope while it runs; await it.

    Example:
        run_disabled(client.get, "https://example.com")
        await run_disabled(async_client.get, "https://example.com")
    """
    if inspect.iscoroutinefunction(fun):
        return _run_disabled_async(fun, *args, **kwargs)

    with disabled():
        return fun(*args, **kwargs)
