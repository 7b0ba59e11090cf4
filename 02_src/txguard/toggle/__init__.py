"""Runtime toggle module."""

from .toggle import disabled, is_disabled, run_disabled

__all__ = ["disabled", "is_disabled", "run_disabled"]
