"""Base network client: chain reads and transaction submission."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from hexbytes import HexBytes
from web3 import Web3
from web3.exceptions import TimeExhausted

from ..base import NetworkClientBase
from ..constants import ContractFunction
from ..types import NetworkConfig, TokenDescriptor, TransactionResult, TxStatus
from ..utils import explorer_tx_url, format_units, parse_uint, require_address
from .config import ClientConfig
from .connections import PROVIDER_ERRORS, Web3Connections
from .transactions import normalise_receipt

logger = logging.getLogger(__name__)


class NetworkClient(NetworkClientBase):
    """Hold one RPC connection and at most one signer for a Base network.

    The client keeps no per-call state, so a single instance can serve
    concurrent reads and submissions.
    """

    def __init__(self, config: ClientConfig, *, web3: Web3 | None = None) -> None:
        self._config = config
        self._connections = Web3Connections(config, web3=web3)

    @classmethod
    def for_chain(
        cls, chain_id: int, private_key: str | None = None, **kwargs: Any
    ) -> NetworkClient:
        return cls(ClientConfig.for_chain(chain_id, private_key=private_key, **kwargs))

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def network(self) -> NetworkConfig:
        return self._config.network

    @property
    def web3(self) -> Web3:
        return self._connections.web3

    @property
    def has_signer(self) -> bool:
        return self._connections.has_signer

    @property
    def address(self) -> str | None:
        if not self._connections.has_signer:
            return None
        return self._connections.account.address

    # ------------------------------------------------------------------
    # Network reads
    # ------------------------------------------------------------------
    def current_block_height(self) -> int:
        return int(self._rpc("eth_blockNumber", lambda eth: eth.block_number))

    def gas_price(self) -> int:
        return int(self._rpc("eth_gasPrice", lambda eth: eth.gas_price))

    def native_balance(self, address: str) -> str:
        """Return the ETH balance of ``address`` in whole units."""

        owner = require_address(address, field="address")
        balance = self._rpc("eth_getBalance", lambda eth: eth.get_balance(owner))
        return format_units(balance, self.network.native_decimals)

    def estimate_gas(self, destination: str, payload: bytes = b"", value: int = 0) -> int:
        to = require_address(destination, field="destination")
        tx: dict[str, Any] = {"to": to, "data": HexBytes(payload), "value": value}
        if self._connections.has_signer:
            tx["from"] = self._connections.account.address
        return int(self._rpc("eth_estimateGas", lambda eth: eth.estimate_gas(tx), address=to))

    # ------------------------------------------------------------------
    # Contract reads
    # ------------------------------------------------------------------
    def call(
        self,
        address: str,
        signature: str,
        args: Sequence[Any],
        output_types: Sequence[str],
    ) -> tuple[Any, ...]:
        return self._connections.call_contract(address, signature, args, output_types)

    def token_balance(self, token_address: str, owner_address: str) -> str:
        """Return the raw ERC-20 balance in the token's smallest unit."""

        token = require_address(token_address, field="token_address")
        owner = require_address(owner_address, field="owner_address")
        (balance,) = self.call(token, ContractFunction.BALANCE_OF.value, [owner], ["uint256"])
        return str(balance)

    def token_info(self, token_address: str) -> TokenDescriptor:
        token = require_address(token_address, field="token_address")
        (symbol,) = self.call(token, ContractFunction.SYMBOL.value, [], ["string"])
        (name,) = self.call(token, ContractFunction.NAME.value, [], ["string"])
        (decimals,) = self.call(token, ContractFunction.DECIMALS.value, [], ["uint8"])
        return TokenDescriptor(address=token, symbol=symbol, name=name, decimals=int(decimals))

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------
    def submit(
        self,
        destination: str,
        value: int,
        payload: bytes,
        *,
        action: str = "transaction",
    ) -> TransactionResult:
        """Sign, send and wait for a transaction.

        Args:
            destination: Contract or account receiving the transaction
            value: Wei attached to the transaction
            payload: Call data
            action: Label used in logs and on the result

        Returns:
            TransactionResult with status ``success`` once included, ``failed``
            when the transaction reverted or was not confirmed in time

        Raises:
            NoSignerError: If the client was built without a private key
            InvalidAddressError: If ``destination`` is malformed
            ConnectivityError: If the endpoint cannot be reached
            ContractCallError: If the node rejects the transaction before inclusion
        """

        account = self._connections.account
        to = require_address(destination, field="destination")
        amount = parse_uint(value, field="value")

        tx: dict[str, Any] = {
            "from": account.address,
            "to": to,
            "value": amount,
            "data": HexBytes(payload),
        }
        logger.info("Dispatching %s to %s (value=%s)", action, to, amount)

        web3 = self._connections.web3
        try:
            tx_hash = web3.eth.send_transaction(tx)  # type: ignore[arg-type]
        except PROVIDER_ERRORS as exc:
            raise self._connections.translate_error(
                exc, action=f"submit {action}", address=to
            ) from exc

        tx_hex = HexBytes(tx_hash).to_0x_hex()
        logger.info("Transaction sent for action=%s hash=%s", action, tx_hex)
        return self._await_receipt(tx_hex, action=action)

    def wait_for_transaction(
        self, tx_hash: str, *, action: str | None = None
    ) -> TransactionResult:
        return self._await_receipt(HexBytes(tx_hash).to_0x_hex(), action=action)

    def explorer_tx_url(self, tx_hash: str) -> str:
        return explorer_tx_url(self.network, tx_hash)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _await_receipt(self, tx_hex: str, *, action: str | None) -> TransactionResult:
        web3 = self._connections.web3
        try:
            receipt = web3.eth.wait_for_transaction_receipt(
                HexBytes(tx_hex), timeout=self._config.receipt_timeout
            )
        except TimeExhausted:
            logger.warning(
                "Transaction %s for action=%s not confirmed within %ss",
                tx_hex,
                action,
                self._config.receipt_timeout,
            )
            return TransactionResult(tx_hash=tx_hex, status=TxStatus.FAILED, action=action)
        except PROVIDER_ERRORS as exc:
            raise self._connections.translate_error(
                exc, action=f"receipt for {tx_hex}"
            ) from exc

        result = normalise_receipt(tx_hex, receipt, action=action)
        logger.info(
            "Transaction %s for action=%s hash=%s block=%s",
            result.status.value,
            action,
            tx_hex,
            result.block_number,
        )
        return result

    def _rpc(self, method: str, fn: Any, *, address: str | None = None) -> Any:
        try:
            return fn(self._connections.web3.eth)
        except PROVIDER_ERRORS as exc:
            raise self._connections.translate_error(exc, action=method, address=address) from exc

