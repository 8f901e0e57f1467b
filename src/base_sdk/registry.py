"""Per-chain address registry.

Addresses are the canonical lookup key for protocols. Names form a secondary,
case-insensitive index that is consulted only when the key is not an address.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from .constants import (
    BASE_MAINNET,
    BASE_MAINNET_PROTOCOLS,
    BASE_MAINNET_TOKENS,
    BASE_SEPOLIA,
    BASE_SEPOLIA_PROTOCOLS,
    BASE_SEPOLIA_TOKENS,
    UNISWAP_V3_FEE_TIERS,
)
from .exceptions import UnsupportedProtocolError
from .types import NetworkConfig, OperationKind, ProtocolDescriptor, TokenDescriptor
from .utils import is_valid_address


@dataclass(frozen=True)
class ChainDeployment:
    """Network configuration plus the contracts and tokens known on it."""

    network: NetworkConfig
    protocols: tuple[ProtocolDescriptor, ...] = ()
    tokens: tuple[TokenDescriptor, ...] = ()
    fee_tiers: tuple[int, ...] = UNISWAP_V3_FEE_TIERS
    _by_address: Mapping[str, ProtocolDescriptor] = field(
        init=False, repr=False, compare=False
    )
    _by_name: Mapping[str, ProtocolDescriptor] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_address: dict[str, ProtocolDescriptor] = {}
        by_name: dict[str, ProtocolDescriptor] = {}
        for protocol in self.protocols:
            by_address.setdefault(protocol.address.lower(), protocol)
            by_name.setdefault(protocol.name.lower(), protocol)
        object.__setattr__(self, "_by_address", by_address)
        object.__setattr__(self, "_by_name", by_name)

    @property
    def chain_id(self) -> int:
        return self.network.chain_id

    # ------------------------------------------------------------------
    # Protocol lookups
    # ------------------------------------------------------------------
    def protocol(self, key: str) -> ProtocolDescriptor | None:
        """Look a protocol up by address, or by name when key is not an address."""
        if is_valid_address(key):
            return self.protocol_by_address(key)
        return self.protocol_by_name(key)

    def protocol_by_address(self, address: str) -> ProtocolDescriptor | None:
        return self._by_address.get(address.lower())

    def protocol_by_name(self, name: str) -> ProtocolDescriptor | None:
        return self._by_name.get(name.strip().lower())

    def protocols_for(self, kind: OperationKind) -> list[ProtocolDescriptor]:
        return [protocol for protocol in self.protocols if protocol.supports(kind)]

    def require_protocol(
        self, kind: OperationKind, key: str | None = None
    ) -> ProtocolDescriptor:
        """Resolve the protocol that will receive an intent of the given kind.

        Args:
            kind: Operation being built
            key: Protocol address or name; the first registered protocol
                supporting ``kind`` is used when omitted

        Raises:
            UnsupportedProtocolError: If no registered protocol matches or the
                match does not accept ``kind``
        """
        if key is None:
            candidates = self.protocols_for(kind)
            if not candidates:
                raise UnsupportedProtocolError(
                    f"No protocol registered for {kind.value} on chain {self.chain_id}",
                    kind=kind.value,
                )
            return candidates[0]

        protocol = self.protocol(key)
        if protocol is None:
            raise UnsupportedProtocolError(
                f"Protocol {key} not supported", protocol=key, kind=kind.value
            )
        if not protocol.supports(kind):
            raise UnsupportedProtocolError(
                f"Protocol {protocol.name} does not support {kind.value}",
                protocol=protocol.name,
                kind=kind.value,
            )
        return protocol

    # ------------------------------------------------------------------
    # Token lookups
    # ------------------------------------------------------------------
    def token(self, symbol: str) -> TokenDescriptor | None:
        wanted = symbol.strip().upper()
        for token in self.tokens:
            if token.symbol.upper() == wanted:
                return token
        return None

    def token_by_address(self, address: str) -> TokenDescriptor | None:
        wanted = address.lower()
        for token in self.tokens:
            if token.address.lower() == wanted:
                return token
        return None


class AddressRegistry:
    """Read-only mapping of chain ids to deployments."""

    def __init__(self, deployments: Mapping[int, ChainDeployment] | Iterable[ChainDeployment]):
        if isinstance(deployments, Mapping):
            items = dict(deployments)
        else:
            items = {deployment.chain_id: deployment for deployment in deployments}

        for chain_id, deployment in items.items():
            if chain_id != deployment.chain_id:
                raise ValueError(
                    f"Deployment for chain {deployment.chain_id} registered under {chain_id}"
                )
        self._deployments: Mapping[int, ChainDeployment] = items

    def chain_ids(self) -> list[int]:
        return sorted(self._deployments)

    def deployment(self, chain_id: int) -> ChainDeployment | None:
        return self._deployments.get(chain_id)

    def network(self, chain_id: int) -> NetworkConfig | None:
        deployment = self._deployments.get(chain_id)
        return deployment.network if deployment is not None else None


BASE_MAINNET_DEPLOYMENT = ChainDeployment(
    network=BASE_MAINNET,
    protocols=BASE_MAINNET_PROTOCOLS,
    tokens=BASE_MAINNET_TOKENS,
)

BASE_SEPOLIA_DEPLOYMENT = ChainDeployment(
    network=BASE_SEPOLIA,
    protocols=BASE_SEPOLIA_PROTOCOLS,
    tokens=BASE_SEPOLIA_TOKENS,
)


def default_registry() -> AddressRegistry:
    """Build a registry holding the Base mainnet and Sepolia tables."""
    return AddressRegistry([BASE_MAINNET_DEPLOYMENT, BASE_SEPOLIA_DEPLOYMENT])
