"""Transaction oracle module."""

from .oracle import IResourceManager, ITransactionOracle, TransactionOracle, describe_manager

__all__ = [
    "IResourceManager",
    "ITransactionOracle",
    "TransactionOracle",
    "describe_manager",
]
