"""Transaction dispatch helpers for the Base network client."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..base import NetworkClientBase
from ..intents import (
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
from ..types import OperationKind, TransactionIntent, TransactionResult, TxStatus
from ..utils import serialise_receipt

logger = logging.getLogger(__name__)


def normalise_receipt(
    tx_hash: str, receipt: Mapping[str, Any] | None, *, action: str | None = None
) -> TransactionResult:
    """Convert a web3 receipt into a TransactionResult.

    A missing receipt means the transaction never reached confirmation and is
    reported as failed.
    """

    if receipt is None:
        return TransactionResult(tx_hash=tx_hash, status=TxStatus.FAILED, action=action)

    status = TxStatus.SUCCESS if receipt.get("status", 0) == 1 else TxStatus.FAILED
    block_number = receipt.get("blockNumber")
    gas_used = receipt.get("gasUsed")

    return TransactionResult(
        tx_hash=tx_hash,
        status=status,
        block_number=int(block_number) if block_number is not None else None,
        gas_used=int(gas_used) if gas_used is not None else None,
        receipt=serialise_receipt(dict(receipt)),
        action=action,
    )


class TransactionDispatcher:
    """Build intents and hand them to the network client for submission.

    The dispatcher never retries or bumps fees; errors raised by the builder
    or the client reach the caller unchanged.
    """

    def __init__(self, client: NetworkClientBase, builder: IntentBuilder) -> None:
        if client.network.chain_id != builder.deployment.chain_id:
            raise ValueError(
                f"Client chain {client.network.chain_id} does not match "
                f"builder chain {builder.deployment.chain_id}"
            )
        self._client = client
        self._builder = builder

    @property
    def builder(self) -> IntentBuilder:
        return self._builder

    def dispatch(self, intent: TransactionIntent) -> TransactionResult:
        logger.info(
            "Dispatching %s via %s (%s)", intent.kind.value, intent.protocol, intent.destination
        )
        return self._client.submit(
            intent.destination,
            intent.value,
            intent.payload,
            action=intent.kind.value,
        )

    def execute(
        self, kind: OperationKind, request: Any, protocol: str | None = None
    ) -> TransactionResult:
        intent = self._builder.build(kind, request, protocol)
        return self.dispatch(intent)

    # ------------------------------------------------------------------
    # Per-operation helpers
    # ------------------------------------------------------------------
    def swap(self, request: SwapRequest, protocol: str | None = None) -> TransactionResult:
        return self.dispatch(self._builder.swap_exact_in(request, protocol))

    def add_liquidity(
        self, request: AddLiquidityRequest, protocol: str | None = None
    ) -> TransactionResult:
        return self.dispatch(self._builder.add_liquidity(request, protocol))

    def remove_liquidity(
        self, request: RemoveLiquidityRequest, protocol: str | None = None
    ) -> TransactionResult:
        return self.dispatch(self._builder.remove_liquidity(request, protocol))

    def supply(self, request: SupplyRequest, protocol: str | None = None) -> TransactionResult:
        return self.dispatch(self._builder.supply(request, protocol))

    def borrow(self, request: BorrowRequest, protocol: str | None = None) -> TransactionResult:
        return self.dispatch(self._builder.borrow(request, protocol))

    def stake(self, request: StakeRequest) -> TransactionResult:
        return self.dispatch(self._builder.stake(request))

    def claim_rewards(self, request: ClaimRewardsRequest) -> TransactionResult:
        return self.dispatch(self._builder.claim_rewards(request))

    def bridge(self, request: BridgeRequest, protocol: str | None = None) -> TransactionResult:
        return self.dispatch(self._builder.bridge(request, protocol))
