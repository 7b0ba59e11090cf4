"""Repo module."""

from .sqlite import SQLiteRepo

__all__ = ["SQLiteRepo"]
