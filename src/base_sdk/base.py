"""Network client base interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from .types import NetworkConfig, TransactionResult


class NetworkClientBase(ABC):
    """Read and submit operations against a single chain."""

    @property
    @abstractmethod
    def network(self) -> NetworkConfig:
        pass

    @property
    @abstractmethod
    def has_signer(self) -> bool:
        pass

    @abstractmethod
    def current_block_height(self) -> int:
        pass

    @abstractmethod
    def gas_price(self) -> int:
        pass

    @abstractmethod
    def native_balance(self, address: str) -> str:
        pass

    @abstractmethod
    def token_balance(self, token_address: str, owner_address: str) -> str:
        pass

    @abstractmethod
    def call(
        self,
        address: str,
        signature: str,
        args: Sequence[Any],
        output_types: Sequence[str],
    ) -> tuple[Any, ...]:
        pass

    @abstractmethod
    def submit(
        self,
        destination: str,
        value: int,
        payload: bytes,
        *,
        action: str = "transaction",
    ) -> TransactionResult:
        pass
