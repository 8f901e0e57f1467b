"""Network client for Base: configuration, connections and dispatch."""

from .client import NetworkClient
from .config import DEFAULT_RECEIPT_TIMEOUT, DEFAULT_REQUEST_TIMEOUT, ClientConfig
from .connections import Web3Connections
from .transactions import TransactionDispatcher, normalise_receipt

__all__ = [
    "ClientConfig",
    "DEFAULT_RECEIPT_TIMEOUT",
    "DEFAULT_REQUEST_TIMEOUT",
    "NetworkClient",
    "TransactionDispatcher",
    "Web3Connections",
    "normalise_receipt",
]
