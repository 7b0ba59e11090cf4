"""Instrumentation module."""

from .httpx_hooks import instrument_client

__all__ = ["instrument_client"]
