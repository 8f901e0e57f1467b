"""Connection helpers for the Base network client."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, cast

import requests
from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError
from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import HTTPProvider, Web3
from web3.exceptions import BadFunctionCallOutput, ContractLogicError, Web3Exception
from web3.middleware import SignAndSendRawMiddlewareBuilder

from ..exceptions import (
    BaseSDKError,
    ConnectivityError,
    ContractCallError,
    InvalidParameterError,
    NoSignerError,
)
from ..utils import encode_call, require_address
from .config import ClientConfig

logger = logging.getLogger(__name__)

TRANSPORT_ERRORS: tuple[type[BaseException], ...] = (requests.RequestException, OSError)
CONTRACT_ERRORS: tuple[type[BaseException], ...] = (
    ContractLogicError,
    BadFunctionCallOutput,
    DecodingError,
    Web3Exception,
)
PROVIDER_ERRORS = TRANSPORT_ERRORS + CONTRACT_ERRORS


class Web3Connections:
    """Own the Web3 handle and the optional signing account."""

    def __init__(self, config: ClientConfig, web3: Web3 | None = None):
        self.config = config
        self._account: LocalAccount | None = None

        if web3 is None:
            provider = HTTPProvider(
                config.endpoint, request_kwargs={"timeout": config.request_timeout}
            )
            web3 = Web3(provider)
        self._web3 = web3

        if config.private_key:
            self._account = self._load_account(config.private_key)
            self._apply_account_middleware(web3, self._account)

        logger.info(
            "Configured %s client for %s (signer=%s)",
            config.network.name,
            config.endpoint,
            self._account.address if self._account else None,
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def web3(self) -> Web3:
        return self._web3

    @property
    def endpoint(self) -> str:
        return self.config.endpoint

    @property
    def has_signer(self) -> bool:
        return self._account is not None

    @property
    def account(self) -> LocalAccount:
        if self._account is None:
            raise NoSignerError()
        return self._account

    # ------------------------------------------------------------------
    # Read calls
    # ------------------------------------------------------------------
    def call_contract(
        self,
        address: str,
        signature: str,
        args: Sequence[Any],
        output_types: Sequence[str],
    ) -> tuple[Any, ...]:
        destination = require_address(address, field="address")
        call_data = encode_call(signature, args)

        try:
            result = self._web3.eth.call({"to": destination, "data": call_data})
        except PROVIDER_ERRORS as exc:
            raise self.translate_error(
                exc, action=f"call {signature}", address=destination, function=signature
            ) from exc

        if not output_types:
            return tuple()

        if not result:
            raise ContractCallError(
                f"Contract returned no data for {signature}",
                address=destination,
                function=signature,
            )

        try:
            decoded = abi_decode(list(output_types), bytes(result))
        except DecodingError as exc:
            raise ContractCallError(
                f"Failed to decode response of {signature}",
                address=destination,
                function=signature,
                details={"error": str(exc)},
            ) from exc

        logger.debug("Read %s on %s", signature, destination)
        return tuple(decoded)

    def translate_error(
        self,
        exc: BaseException,
        *,
        action: str,
        address: str | None = None,
        function: str | None = None,
    ) -> BaseSDKError:
        """Map provider exceptions onto the SDK error taxonomy."""

        if isinstance(exc, BaseSDKError):
            return exc
        if isinstance(exc, TRANSPORT_ERRORS):
            return ConnectivityError(
                f"Failed to reach RPC endpoint during {action}",
                endpoint=self.endpoint,
                details={"error": str(exc)},
            )
        return ContractCallError(
            f"Node rejected {action}",
            address=address,
            function=function,
            details={"error": str(exc)},
        )

    # ------------------------------------------------------------------
    # Internal wiring
    # ------------------------------------------------------------------
    def _load_account(self, private_key: str) -> LocalAccount:
        try:
            return cast(LocalAccount, Account.from_key(private_key))
        except Exception as exc:
            raise InvalidParameterError(
                "Failed to derive signer account from provided private key",
                field="private_key",
                details={"error": str(exc)},
            ) from exc

    def _apply_account_middleware(self, web3: Web3, account: LocalAccount) -> None:
        web3.middleware_onion.add(SignAndSendRawMiddlewareBuilder.build(account))  # type: ignore[arg-type]
        web3.eth.default_account = account.address
