"""Configuration containers for the Base network client."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from ..constants import BASE_MAINNET_CHAIN_ID
from ..registry import AddressRegistry, default_registry
from ..types import NetworkConfig

DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_RECEIPT_TIMEOUT = 120.0


@dataclass(frozen=True)
class ClientConfig:
    """Aggregated configuration used to construct the network client."""

    network: NetworkConfig
    private_key: str | None = None
    rpc_url: str | None = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT

    @property
    def endpoint(self) -> str:
        """RPC URL to connect to, defaulting to the network's public endpoint."""

        return (self.rpc_url or self.network.rpc_url).rstrip("/")

    @classmethod
    def for_chain(
        cls,
        chain_id: int,
        *,
        registry: AddressRegistry | None = None,
        private_key: str | None = None,
        rpc_url: str | None = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
    ) -> ClientConfig:
        """Build a config for a registered chain id."""

        registry = registry or default_registry()
        network = registry.network(chain_id)
        if network is None:
            raise ValueError(f"Unsupported chain id: {chain_id}")

        return cls(
            network=network,
            private_key=private_key,
            rpc_url=rpc_url,
            request_timeout=request_timeout,
            receipt_timeout=receipt_timeout,
        )

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        registry: AddressRegistry | None = None,
    ) -> ClientConfig:
        """Build a config from ``BASE_*`` environment variables."""

        env = os.environ if environ is None else environ
        chain_id = int(env.get("BASE_CHAIN_ID", BASE_MAINNET_CHAIN_ID))

        return cls.for_chain(
            chain_id,
            registry=registry,
            private_key=env.get("BASE_PRIVATE_KEY") or None,
            rpc_url=env.get("BASE_RPC_URL") or None,
            request_timeout=float(env.get("BASE_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)),
            receipt_timeout=float(env.get("BASE_RECEIPT_TIMEOUT", DEFAULT_RECEIPT_TIMEOUT)),
        )
