"""DeFi protocol integration for a single Base network client."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from .base import NetworkClientBase
from .client.transactions import TransactionDispatcher
from .constants import (
    AERODROME,
    AERODROME_FACTORY,
    COMPOUND_V3,
    UNISWAP_V3,
    UNISWAP_V3_FACTORY,
    ContractFunction,
)
from .exceptions import ContractCallError, UnsupportedProtocolError
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
    AerodromeRoute,
    LendingPosition,
    PoolInfo,
    ProtocolCategory,
    ProtocolDescriptor,
    TransactionResult,
)
from .utils import (
    encode_call,
    is_valid_address,
    parse_uint,
    require_address,
    require_fee_tier,
)

logger = logging.getLogger(__name__)

_SLOT0_TYPES = ["uint160", "int24", "uint16", "uint16", "uint16", "uint8", "bool"]


class DeFiIntegrator:
    """Read protocol state and submit protocol operations through one client."""

    def __init__(
        self,
        client: NetworkClientBase,
        registry: AddressRegistry | None = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        registry = registry or default_registry()
        chain_id = client.network.chain_id
        deployment = registry.deployment(chain_id)
        if deployment is None:
            raise ValueError(f"No deployment registered for chain id {chain_id}")

        self._client = client
        self._deployment = deployment
        self._builder = IntentBuilder(deployment, clock=clock)
        self._dispatcher = TransactionDispatcher(client, self._builder)

    @property
    def deployment(self) -> ChainDeployment:
        return self._deployment

    @property
    def builder(self) -> IntentBuilder:
        return self._builder

    @property
    def dispatcher(self) -> TransactionDispatcher:
        return self._dispatcher

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------
    def protocol_info(self, key: str) -> ProtocolDescriptor:
        protocol = self._deployment.protocol(key)
        if protocol is None:
            raise UnsupportedProtocolError(f"Protocol {key} not supported", protocol=key)
        return protocol

    def protocol_tvl(self, key: str) -> str | None:
        """Return the registered TVL figure for a protocol, if one is recorded."""
        return self.protocol_info(key).tvl

    # ------------------------------------------------------------------
    # Uniswap V3
    # ------------------------------------------------------------------
    def get_pool_info(self, token_a: str, token_b: str, fee: int) -> PoolInfo:
        """Read a Uniswap V3 pool's address, liquidity and price.

        ``token0``/``token1`` on the result echo the argument order, not the
        pool's sorted token order.
        """
        first = require_address(token_a, field="token_a")
        second = require_address(token_b, field="token_b")
        fee = require_fee_tier(fee, self._deployment.fee_tiers)

        factory = self._require_named(UNISWAP_V3_FACTORY)
        (pool,) = self._client.call(
            factory.address, ContractFunction.GET_POOL.value, [first, second, fee], ["address"]
        )
        if int(pool, 16) == 0:
            raise ContractCallError(
                f"No Uniswap V3 pool for {first}/{second} at fee {fee}",
                address=factory.address,
                function=ContractFunction.GET_POOL.value,
            )

        (liquidity,) = self._client.call(
            pool, ContractFunction.POOL_LIQUIDITY.value, [], ["uint128"]
        )
        slot0 = self._client.call(pool, ContractFunction.POOL_SLOT0.value, [], _SLOT0_TYPES)
        logger.debug("Pool %s liquidity=%s", pool, liquidity)

        return PoolInfo(
            address=pool,
            token0=token_a,
            token1=token_b,
            fee=fee,
            liquidity=int(liquidity),
            sqrt_price_x96=int(slot0[0]),
        )

    def swap_exact_input_single(self, request: SwapRequest) -> TransactionResult:
        return self._dispatcher.swap(request, UNISWAP_V3)

    def add_liquidity(self, request: AddLiquidityRequest) -> TransactionResult:
        return self._dispatcher.add_liquidity(request)

    def remove_liquidity(self, request: RemoveLiquidityRequest) -> TransactionResult:
        return self._dispatcher.remove_liquidity(request)

    # ------------------------------------------------------------------
    # Aerodrome
    # ------------------------------------------------------------------
    def get_aerodrome_routes(
        self, token_a: str, token_b: str, stable: bool = False
    ) -> list[AerodromeRoute]:
        factory = self._require_named(AERODROME_FACTORY)
        return [
            AerodromeRoute(
                from_token=require_address(token_a, field="token_a"),
                to_token=require_address(token_b, field="token_b"),
                stable=stable,
                factory=require_address(factory.address, field="factory"),
            )
        ]

    def swap_on_aerodrome(self, request: SwapRequest) -> TransactionResult:
        return self._dispatcher.swap(request, AERODROME)

    # ------------------------------------------------------------------
    # Compound V3
    # ------------------------------------------------------------------
    def supply_to_compound(self, asset: str, amount: int | str) -> TransactionResult:
        return self._dispatcher.supply(SupplyRequest(asset=asset, amount=amount), COMPOUND_V3)

    def borrow_from_compound(self, asset: str, amount: int | str) -> TransactionResult:
        return self._dispatcher.borrow(BorrowRequest(asset=asset, amount=amount), COMPOUND_V3)

    def get_lending_position(self, user: str, protocol: str = COMPOUND_V3) -> LendingPosition:
        """Read a Comet account's base-asset supply and borrow balances."""
        account = require_address(user, field="user")
        comet = self.protocol_info(protocol)
        if comet.category is not ProtocolCategory.LENDING:
            raise UnsupportedProtocolError(
                f"{comet.name} is not a lending protocol", protocol=comet.name
            )

        (base_token,) = self._client.call(
            comet.address, ContractFunction.COMET_BASE_TOKEN.value, [], ["address"]
        )
        (supplied,) = self._client.call(
            comet.address, ContractFunction.BALANCE_OF.value, [account], ["uint256"]
        )
        (borrowed,) = self._client.call(
            comet.address, ContractFunction.COMET_BORROW_BALANCE_OF.value, [account], ["uint256"]
        )
        return LendingPosition(
            comet=require_address(comet.address, field="comet"),
            asset=base_token,
            supplied=int(supplied),
            borrowed=int(borrowed),
        )

    # ------------------------------------------------------------------
    # Yield farming
    # ------------------------------------------------------------------
    def stake_lp_tokens(self, pool: str, amount: int | str) -> TransactionResult:
        return self._dispatcher.stake(StakeRequest(pool=pool, amount=amount))

    def claim_rewards(self, pool: str) -> TransactionResult:
        return self._dispatcher.claim_rewards(ClaimRewardsRequest(pool=pool))

    # ------------------------------------------------------------------
    # Bridge
    # ------------------------------------------------------------------
    def bridge_to_l1(self, amount: int | str, token: str | None = None) -> TransactionResult:
        return self._dispatcher.bridge(BridgeRequest(amount=amount, token=token))

    # ------------------------------------------------------------------
    # Token approvals
    # ------------------------------------------------------------------
    def token_allowance(self, token: str, owner: str, spender: str) -> int:
        token_address = require_address(token, field="token")
        owner_address = require_address(owner, field="owner")
        spender_address = self._spender(spender)
        (allowance,) = self._client.call(
            token_address,
            ContractFunction.ALLOWANCE.value,
            [owner_address, spender_address],
            ["uint256"],
        )
        return int(allowance)

    def approve_token(self, token: str, spender: str, amount: int | str) -> TransactionResult:
        """Grant ``spender`` an ERC-20 allowance.

        ``spender`` may be an address or the name of a registered protocol, so
        ``approve_token(weth, UNISWAP_V3, amount)`` approves the swap router.
        """
        token_address = require_address(token, field="token")
        spender_address = self._spender(spender)
        value = parse_uint(amount, "amount")
        payload = encode_call(ContractFunction.APPROVE.value, [spender_address, value])
        return self._client.submit(token_address, 0, payload, action="approve")

    def _spender(self, spender: str) -> str:
        if is_valid_address(spender):
            return require_address(spender, field="spender")
        return require_address(self.protocol_info(spender).address, field="spender")

    def _require_named(self, name: str) -> ProtocolDescriptor:
        protocol = self._deployment.protocol_by_name(name)
        if protocol is None:
            raise UnsupportedProtocolError(
                f"{name} is not registered on chain {self._deployment.chain_id}", protocol=name
            )
        return protocol
