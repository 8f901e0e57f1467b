"""Type definitions and data models for the Base DeFi SDK."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

from eth_typing import HexStr


class ProtocolCategory(str, Enum):
    """Protocol classes known to the registry."""

    EXCHANGE = "exchange"
    LENDING = "lending"
    YIELD = "yield"
    BRIDGE = "bridge"


class OperationKind(str, Enum):
    """High-level operations the intent builder understands."""

    SWAP_EXACT_IN = "swap_exact_in"
    ADD_LIQUIDITY = "add_liquidity"
    REMOVE_LIQUIDITY = "remove_liquidity"
    SUPPLY = "supply"
    BORROW = "borrow"
    STAKE = "stake"
    CLAIM_REWARDS = "claim_rewards"
    BRIDGE = "bridge"


class TxStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


class RebalancingFlag(str, Enum):
    OVER_CONCENTRATION = "over_concentration"
    HIGH_APR = "high_apr"


Address = str  # 0x-prefixed, 40 hex digits
Wei = int


@dataclass(frozen=True)
class NetworkConfig:
    """Connection target for a single chain."""

    chain_id: int
    name: str
    rpc_url: str
    explorer_url: str
    multicall_address: Address
    native_symbol: str = "ETH"
    native_decimals: int = 18


@dataclass(frozen=True)
class ProtocolDescriptor:
    """A known external contract and the operations it accepts."""

    name: str
    address: Address
    category: ProtocolCategory
    operations: frozenset[OperationKind] = frozenset()
    version: str | None = None
    tvl: str | None = None
    apy: float | None = None

    def supports(self, kind: OperationKind) -> bool:
        return kind in self.operations


@dataclass(frozen=True)
class TokenDescriptor:
    address: Address
    symbol: str
    name: str
    decimals: int
    coingecko_id: str | None = None


@dataclass(frozen=True)
class TransactionIntent:
    """An unsubmitted on-chain operation."""

    kind: OperationKind
    protocol: str
    destination: Address
    value: Wei
    payload: bytes
    deadline: int | None = None

    @property
    def payload_hex(self) -> HexStr:
        return HexStr("0x" + self.payload.hex())


@dataclass
class TransactionResult:
    """Normalised outcome of a submitted transaction."""

    tx_hash: str
    status: TxStatus
    block_number: int | None = None
    gas_used: int | None = None
    receipt: dict[str, Any] | None = None
    action: str | None = None

    @property
    def success(self) -> bool:
        return self.status is TxStatus.SUCCESS


@dataclass
class PoolInfo:
    address: Address
    token0: Address
    token1: Address
    fee: int
    liquidity: int
    sqrt_price_x96: int


@dataclass(frozen=True)
class AerodromeRoute:
    from_token: Address
    to_token: Address
    stable: bool
    factory: Address

    def as_tuple(self) -> tuple[str, str, bool, str]:
        return (self.from_token, self.to_token, self.stable, self.factory)


@dataclass
class LendingPosition:
    """Compound V3 account state in raw base-asset units."""

    comet: Address
    asset: Address
    supplied: int
    borrowed: int


@dataclass
class Position:
    """A caller-supplied holding used by the analytics helpers."""

    protocol: str
    value: Decimal
    apr: float = 0.0
    category: ProtocolCategory | None = None


@dataclass
class BreakdownEntry:
    protocol: str
    value: Decimal
    percentage: Decimal
    apr: float = 0.0


@dataclass
class PortfolioSnapshot:
    total_value: Decimal
    breakdown: list[BreakdownEntry] = field(default_factory=list)


@dataclass
class YieldProjection:
    principal: Decimal
    apr: float
    days: int
    total_rewards: Decimal
    daily_rewards: Decimal
