from __future__ import annotations

from collections.abc import Callable
from typing import Any, cast

import pytest
from hexbytes import HexBytes
from web3 import Web3

from base_sdk.client import ClientConfig, NetworkClient
from base_sdk.constants import BASE_MAINNET
from base_sdk.utils import function_selector

TEST_PRIVATE_KEY = "0x" + "11" * 32
NOW = 1_700_000_000
FUTURE_DEADLINE = NOW + 600

USDC = "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"
WETH = "0x4200000000000000000000000000000000000006"
RECIPIENT = "0x000000000000000000000000000000000000beef"


class FakeOnion:
    def __init__(self) -> None:
        self.added: list[Any] = []

    def add(self, middleware: Any, name: str | None = None) -> None:
        self.added.append(middleware)


class FakeEth:
    """Records every RPC touch and serves canned responses."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.responses: dict[tuple[str, bytes], Any] = {}
        self.default_account: str | None = None
        self.block_number_value: Any = 123
        self.balances: dict[str, Any] = {}
        self.gas_price_value: Any = 1_000_000
        self.send_result: Any = HexBytes(b"\x11" * 32)
        self.receipt: Any = {
            "status": 1,
            "blockNumber": 456,
            "gasUsed": 21_000,
            "transactionHash": HexBytes(b"\x11" * 32),
        }

    def respond(self, address: str, signature: str, result: Any) -> None:
        self.responses[(address.lower(), function_selector(signature))] = result

    @property
    def block_number(self) -> int:
        self.calls.append(("block_number", None))
        return self._maybe_raise(self.block_number_value)

    @property
    def gas_price(self) -> int:
        self.calls.append(("gas_price", None))
        return self._maybe_raise(self.gas_price_value)

    def get_balance(self, address: str) -> int:
        self.calls.append(("get_balance", address))
        return self._maybe_raise(self.balances.get(address, 0))

    def call(self, tx: dict[str, Any]) -> HexBytes:
        self.calls.append(("call", tx))
        data = bytes(tx["data"])
        result = self.responses.get((tx["to"].lower(), data[:4]), b"")
        return HexBytes(self._maybe_raise(result))

    def estimate_gas(self, tx: dict[str, Any]) -> int:
        self.calls.append(("estimate_gas", tx))
        return 50_000

    def send_transaction(self, tx: dict[str, Any]) -> HexBytes:
        self.calls.append(("send_transaction", tx))
        return self._maybe_raise(self.send_result)

    def wait_for_transaction_receipt(self, tx_hash: Any, timeout: float = 120) -> Any:
        self.calls.append(("wait_for_transaction_receipt", (tx_hash, timeout)))
        return self._maybe_raise(self.receipt)

    @staticmethod
    def _maybe_raise(value: Any) -> Any:
        if isinstance(value, BaseException):
            raise value
        return value


class FakeWeb3:
    def __init__(self) -> None:
        self.eth = FakeEth()
        self.middleware_onion = FakeOnion()


@pytest.fixture
def fake_web3() -> FakeWeb3:
    return FakeWeb3()


@pytest.fixture
def make_client(fake_web3: FakeWeb3) -> Callable[..., NetworkClient]:
    def _make(private_key: str | None = None, **kwargs: Any) -> NetworkClient:
        config = ClientConfig(network=BASE_MAINNET, private_key=private_key, **kwargs)
        return NetworkClient(config, web3=cast(Web3, fake_web3))

    return _make


@pytest.fixture
def clock() -> Callable[[], float]:
    return lambda: float(NOW)
