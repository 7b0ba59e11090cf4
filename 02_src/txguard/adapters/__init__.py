"""Adapters module."""

from .base import Classification, IAdapter
from .grpc import GRPC_CLIENT_RPC_START, GRPC_SERVER_RPC_START, GRPCClientAdapter
from .http import HTTPX_REQUEST_START, HTTPXClientAdapter

__all__ = [
    "Classification",
    "IAdapter",
    "GRPCClientAdapter",
    "GRPC_CLIENT_RPC_START",
    "GRPC_SERVER_RPC_START",
    "HTTPXClientAdapter",
    "HTTPX_REQUEST_START",
]
