"""Exception hierarchy for the Base DeFi SDK."""

from typing import Any


class BaseSDKError(Exception):
    """Base exception for all SDK errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidParameterError(BaseSDKError):
    """Raised when caller input fails validation."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class InvalidAddressError(InvalidParameterError):
    """Raised when an address is not `0x` followed by 40 hex digits."""

    pass


class NoSignerError(BaseSDKError):
    """Raised when a transaction is submitted without a signing credential."""

    def __init__(
        self,
        message: str = "Signer required for transactions",
        details: dict | None = None,
    ):
        super().__init__(message, details)


class ConnectivityError(BaseSDKError):
    """Raised when the RPC endpoint cannot be reached."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint


class ContractCallError(BaseSDKError):
    """Raised when a contract rejects a call or returns an unexpected shape."""

    def __init__(
        self,
        message: str,
        address: str | None = None,
        function: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.address = address
        self.function = function


class UnsupportedProtocolError(BaseSDKError):
    """Raised when an operation targets a protocol missing from the registry."""

    def __init__(
        self,
        message: str,
        protocol: str | None = None,
        kind: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.protocol = protocol
        self.kind = kind
