"""Telemetry module."""

from .telemetry import AlreadyAttachedError, EventHandler, ITelemetry, Telemetry, telemetry

__all__ = ["AlreadyAttachedError", "EventHandler", "ITelemetry", "Telemetry", "telemetry"]
