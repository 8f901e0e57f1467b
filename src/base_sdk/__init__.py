"""Base DeFi SDK - protocol integrations for the Base L2 network.

This library provides a Python interface for reading Base chain state and
building, signing and submitting DeFi operations against Uniswap V3,
Aerodrome, Compound V3, staking pools and the standard bridge.
"""

from .analytics import (
    aggregate_value,
    describe_flag,
    health_factor,
    project_yield,
    rebalancing_suggestions,
    risk_score,
    yield_summary,
)
from .base import NetworkClientBase
from .client import ClientConfig, NetworkClient, TransactionDispatcher
from .exceptions import (
    BaseSDKError,
    ConnectivityError,
    ContractCallError,
    InvalidAddressError,
    InvalidParameterError,
    NoSignerError,
    UnsupportedProtocolError,
)
from .integrator import DeFiIntegrator
from .intents import (
    AddLiquidityRequest,
    BorrowRequest,
    BridgeRequest,
    ClaimRewardsRequest,
    IntentBuilder,
    RemoveLiquidityRequest,
    StakeRequest,
    SupplyRequest,
    SwapRequest,
)
from .registry import AddressRegistry, ChainDeployment, default_registry
from .types import (
    Address,
    AerodromeRoute,
    BreakdownEntry,
    LendingPosition,
    NetworkConfig,
    OperationKind,
    PoolInfo,
    PortfolioSnapshot,
    Position,
    ProtocolCategory,
    ProtocolDescriptor,
    RebalancingFlag,
    TokenDescriptor,
    TransactionIntent,
    TransactionResult,
    TxStatus,
    Wei,
    YieldProjection,
)
from .utils import (
    format_address,
    format_units,
    from_base_units,
    is_valid_address,
    to_base_units,
)

__version__ = "0.1.0"

__all__ = [
    # Clients
    "NetworkClientBase",
    "NetworkClient",
    "ClientConfig",
    "TransactionDispatcher",
    "DeFiIntegrator",
    # Registry
    "AddressRegistry",
    "ChainDeployment",
    "default_registry",
    # Intents
    "IntentBuilder",
    "SwapRequest",
    "AddLiquidityRequest",
    "RemoveLiquidityRequest",
    "SupplyRequest",
    "BorrowRequest",
    "StakeRequest",
    "ClaimRewardsRequest",
    "BridgeRequest",
    # Types and enums
    "Address",
    "Wei",
    "NetworkConfig",
    "ProtocolCategory",
    "ProtocolDescriptor",
    "TokenDescriptor",
    "OperationKind",
    "TransactionIntent",
    "TransactionResult",
    "TxStatus",
    "PoolInfo",
    "AerodromeRoute",
    "LendingPosition",
    "Position",
    "BreakdownEntry",
    "PortfolioSnapshot",
    "RebalancingFlag",
    "YieldProjection",
    # Exceptions
    "BaseSDKError",
    "InvalidParameterError",
    "InvalidAddressError",
    "NoSignerError",
    "ConnectivityError",
    "ContractCallError",
    "UnsupportedProtocolError",
    # Analytics
    "aggregate_value",
    "risk_score",
    "rebalancing_suggestions",
    "describe_flag",
    "yield_summary",
    "project_yield",
    "health_factor",
    # Utility functions
    "is_valid_address",
    "format_address",
    "to_base_units",
    "from_base_units",
    "format_units",
]
