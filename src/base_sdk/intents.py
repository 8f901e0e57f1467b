"""Transaction intent construction.

Each builder method validates a request, resolves the destination contract
from the chain deployment and encodes the call data. Nothing here touches the
network, and the payload is a pure function of the validated request.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from web3 import Web3

from .constants import (
    AERODROME,
    AERODROME_FACTORY,
    DEFAULT_BRIDGE_MIN_GAS_LIMIT,
    LEGACY_ETH_ADDRESS,
    ContractFunction,
)
from .exceptions import InvalidParameterError, UnsupportedProtocolError
from .registry import ChainDeployment
from .types import OperationKind, ProtocolDescriptor, TransactionIntent
from .utils import encode_call, parse_uint, require_address, require_fee_tier

logger = logging.getLogger(__name__)

INT24_MIN = -(2**23)
INT24_MAX = 2**23 - 1

Amount = int | str


@dataclass(frozen=True)
class SwapRequest:
    token_in: str
    token_out: str
    amount_in: Amount
    amount_out_minimum: Amount
    recipient: str
    deadline: int
    fee: int = 3000
    sqrt_price_limit_x96: Amount = 0
    stable: bool = False


@dataclass(frozen=True)
class AddLiquidityRequest:
    token0: str
    token1: str
    fee: int
    tick_lower: int
    tick_upper: int
    amount0_desired: Amount
    amount1_desired: Amount
    amount0_min: Amount
    amount1_min: Amount
    recipient: str
    deadline: int


@dataclass(frozen=True)
class RemoveLiquidityRequest:
    token_id: Amount
    liquidity: Amount
    amount0_min: Amount
    amount1_min: Amount
    deadline: int


@dataclass(frozen=True)
class SupplyRequest:
    asset: str
    amount: Amount


@dataclass(frozen=True)
class BorrowRequest:
    asset: str
    amount: Amount


@dataclass(frozen=True)
class StakeRequest:
    pool: str
    amount: Amount


@dataclass(frozen=True)
class ClaimRewardsRequest:
    pool: str


@dataclass(frozen=True)
class BridgeRequest:
    """Withdraw from Base to L1 through the standard bridge.

    ``token`` is the L2 token address; leave it unset to bridge native ETH.
    """

    amount: Amount
    token: str | None = None
    min_gas_limit: int = DEFAULT_BRIDGE_MIN_GAS_LIMIT
    extra_data: bytes = b""


class IntentBuilder:
    """Map operation requests onto (destination, value, payload) intents."""

    def __init__(
        self,
        deployment: ChainDeployment,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._deployment = deployment
        self._clock = clock

    @property
    def deployment(self) -> ChainDeployment:
        return self._deployment

    def build(
        self, kind: OperationKind, request: Any, protocol: str | None = None
    ) -> TransactionIntent:
        """Build an intent for any operation kind."""

        builders: dict[OperationKind, tuple[type, Callable[[], TransactionIntent]]] = {
            OperationKind.SWAP_EXACT_IN: (
                SwapRequest,
                lambda: self.swap_exact_in(request, protocol),
            ),
            OperationKind.ADD_LIQUIDITY: (
                AddLiquidityRequest,
                lambda: self.add_liquidity(request, protocol),
            ),
            OperationKind.REMOVE_LIQUIDITY: (
                RemoveLiquidityRequest,
                lambda: self.remove_liquidity(request, protocol),
            ),
            OperationKind.SUPPLY: (SupplyRequest, lambda: self.supply(request, protocol)),
            OperationKind.BORROW: (BorrowRequest, lambda: self.borrow(request, protocol)),
            OperationKind.STAKE: (StakeRequest, lambda: self.stake(request)),
            OperationKind.CLAIM_REWARDS: (
                ClaimRewardsRequest,
                lambda: self.claim_rewards(request),
            ),
            OperationKind.BRIDGE: (BridgeRequest, lambda: self.bridge(request, protocol)),
        }

        try:
            operation = OperationKind(kind)
        except ValueError as exc:
            raise InvalidParameterError(
                f"Unknown operation kind: {kind!r}", field="kind", value=kind
            ) from exc

        expected, build = builders[operation]
        if not isinstance(request, expected):
            raise InvalidParameterError(
                f"{operation.value} expects a {expected.__name__}",
                field="request",
                value=type(request).__name__,
            )
        return build()

    # ------------------------------------------------------------------
    # Exchange
    # ------------------------------------------------------------------
    def swap_exact_in(self, request: SwapRequest, protocol: str | None = None) -> TransactionIntent:
        token_in = require_address(request.token_in, field="token_in")
        token_out = require_address(request.token_out, field="token_out")
        if token_in == token_out:
            raise InvalidParameterError(
                "token_in and token_out must differ", field="token_out", value=request.token_out
            )
        recipient = require_address(request.recipient, field="recipient")
        amount_in = parse_uint(request.amount_in, "amount_in")
        amount_out_minimum = parse_uint(request.amount_out_minimum, "amount_out_minimum")
        deadline = self._deadline(request.deadline)
        target = self._deployment.require_protocol(OperationKind.SWAP_EXACT_IN, protocol)

        if target.name == AERODROME:
            factory = self._deployment.protocol_by_name(AERODROME_FACTORY)
            if factory is None:
                raise UnsupportedProtocolError(
                    f"{AERODROME_FACTORY} is not registered on chain {self._deployment.chain_id}",
                    protocol=AERODROME_FACTORY,
                    kind=OperationKind.SWAP_EXACT_IN.value,
                )
            route = (
                token_in,
                token_out,
                bool(request.stable),
                Web3.to_checksum_address(factory.address),
            )
            payload = encode_call(
                ContractFunction.AERODROME_SWAP.value,
                [amount_in, amount_out_minimum, [route], recipient, deadline],
            )
        else:
            fee = require_fee_tier(request.fee, self._deployment.fee_tiers)
            sqrt_price_limit = parse_uint(request.sqrt_price_limit_x96, "sqrt_price_limit_x96", 160)
            swap_call = encode_call(
                ContractFunction.EXACT_INPUT_SINGLE.value,
                [
                    (
                        token_in,
                        token_out,
                        fee,
                        recipient,
                        amount_in,
                        amount_out_minimum,
                        sqrt_price_limit,
                    )
                ],
            )
            # SwapRouter02 takes the deadline through multicall
            payload = encode_call(ContractFunction.ROUTER_MULTICALL.value, [deadline, [swap_call]])

        return self._intent(OperationKind.SWAP_EXACT_IN, target, payload, deadline=deadline)

    def add_liquidity(
        self, request: AddLiquidityRequest, protocol: str | None = None
    ) -> TransactionIntent:
        token0 = require_address(request.token0, field="token0")
        token1 = require_address(request.token1, field="token1")
        if token0 == token1:
            raise InvalidParameterError(
                "token0 and token1 must differ", field="token1", value=request.token1
            )
        fee = require_fee_tier(request.fee, self._deployment.fee_tiers)
        tick_lower = self._tick(request.tick_lower, "tick_lower")
        tick_upper = self._tick(request.tick_upper, "tick_upper")
        if tick_lower >= tick_upper:
            raise InvalidParameterError(
                "tick_lower must be below tick_upper", field="tick_lower", value=tick_lower
            )
        amount0_desired = parse_uint(request.amount0_desired, "amount0_desired")
        amount1_desired = parse_uint(request.amount1_desired, "amount1_desired")
        amount0_min = parse_uint(request.amount0_min, "amount0_min")
        amount1_min = parse_uint(request.amount1_min, "amount1_min")
        recipient = require_address(request.recipient, field="recipient")
        deadline = self._deadline(request.deadline)
        target = self._deployment.require_protocol(OperationKind.ADD_LIQUIDITY, protocol)

        payload = encode_call(
            ContractFunction.MINT_POSITION.value,
            [
                (
                    token0,
                    token1,
                    fee,
                    tick_lower,
                    tick_upper,
                    amount0_desired,
                    amount1_desired,
                    amount0_min,
                    amount1_min,
                    recipient,
                    deadline,
                )
            ],
        )
        return self._intent(OperationKind.ADD_LIQUIDITY, target, payload, deadline=deadline)

    def remove_liquidity(
        self, request: RemoveLiquidityRequest, protocol: str | None = None
    ) -> TransactionIntent:
        token_id = parse_uint(request.token_id, "token_id")
        liquidity = parse_uint(request.liquidity, "liquidity", 128)
        amount0_min = parse_uint(request.amount0_min, "amount0_min")
        amount1_min = parse_uint(request.amount1_min, "amount1_min")
        deadline = self._deadline(request.deadline)
        target = self._deployment.require_protocol(OperationKind.REMOVE_LIQUIDITY, protocol)

        payload = encode_call(
            ContractFunction.DECREASE_LIQUIDITY.value,
            [(token_id, liquidity, amount0_min, amount1_min, deadline)],
        )
        return self._intent(OperationKind.REMOVE_LIQUIDITY, target, payload, deadline=deadline)

    # ------------------------------------------------------------------
    # Lending
    # ------------------------------------------------------------------
    def supply(self, request: SupplyRequest, protocol: str | None = None) -> TransactionIntent:
        asset = require_address(request.asset, field="asset")
        amount = parse_uint(request.amount, "amount")
        target = self._deployment.require_protocol(OperationKind.SUPPLY, protocol)
        payload = encode_call(ContractFunction.COMET_SUPPLY.value, [asset, amount])
        return self._intent(OperationKind.SUPPLY, target, payload)

    def borrow(self, request: BorrowRequest, protocol: str | None = None) -> TransactionIntent:
        asset = require_address(request.asset, field="asset")
        amount = parse_uint(request.amount, "amount")
        target = self._deployment.require_protocol(OperationKind.BORROW, protocol)
        # Comet borrows by withdrawing the base asset past the supplied balance
        payload = encode_call(ContractFunction.COMET_WITHDRAW.value, [asset, amount])
        return self._intent(OperationKind.BORROW, target, payload)

    # ------------------------------------------------------------------
    # Yield
    # ------------------------------------------------------------------
    def stake(self, request: StakeRequest) -> TransactionIntent:
        pool = require_address(request.pool, field="pool")
        amount = parse_uint(request.amount, "amount")
        target = self._deployment.require_protocol(OperationKind.STAKE, pool)
        payload = encode_call(ContractFunction.STAKE.value, [amount])
        return self._intent(OperationKind.STAKE, target, payload)

    def claim_rewards(self, request: ClaimRewardsRequest) -> TransactionIntent:
        pool = require_address(request.pool, field="pool")
        target = self._deployment.require_protocol(OperationKind.CLAIM_REWARDS, pool)
        payload = encode_call(ContractFunction.GET_REWARD.value, [])
        return self._intent(OperationKind.CLAIM_REWARDS, target, payload)

    # ------------------------------------------------------------------
    # Bridge
    # ------------------------------------------------------------------
    def bridge(self, request: BridgeRequest, protocol: str | None = None) -> TransactionIntent:
        amount = parse_uint(request.amount, "amount")
        min_gas_limit = parse_uint(request.min_gas_limit, "min_gas_limit", 32)
        if not isinstance(request.extra_data, bytes | bytearray):
            raise InvalidParameterError(
                "extra_data must be bytes", field="extra_data", value=request.extra_data
            )

        if request.token is None:
            l2_token = Web3.to_checksum_address(LEGACY_ETH_ADDRESS)
            value = amount
        else:
            l2_token = require_address(request.token, field="token")
            value = 0

        target = self._deployment.require_protocol(OperationKind.BRIDGE, protocol)
        payload = encode_call(
            ContractFunction.BRIDGE_WITHDRAW.value,
            [l2_token, amount, min_gas_limit, bytes(request.extra_data)],
        )
        return self._intent(OperationKind.BRIDGE, target, payload, value=value)

    # ------------------------------------------------------------------
    # Validation helpers
    # ------------------------------------------------------------------
    def _deadline(self, deadline: Any) -> int:
        value = parse_uint(deadline, "deadline")
        now = int(self._clock())
        if value <= now:
            raise InvalidParameterError(
                f"deadline must be a future Unix timestamp (now={now})",
                field="deadline",
                value=deadline,
            )
        return value

    def _tick(self, tick: Any, field: str) -> int:
        valid = isinstance(tick, int) and not isinstance(tick, bool)
        if not valid or not INT24_MIN <= tick <= INT24_MAX:
            raise InvalidParameterError(f"{field} must be an int24 tick", field=field, value=tick)
        return tick

    def _intent(
        self,
        kind: OperationKind,
        target: ProtocolDescriptor,
        payload: bytes,
        *,
        value: int = 0,
        deadline: int | None = None,
    ) -> TransactionIntent:
        intent = TransactionIntent(
            kind=kind,
            protocol=target.name,
            destination=Web3.to_checksum_address(target.address),
            value=value,
            payload=payload,
            deadline=deadline,
        )
        logger.debug(
            "Built %s intent for %s (%d payload bytes)", kind.value, target.name, len(payload)
        )
        return intent
