"""Utility functions for the Base DeFi SDK."""

import re
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

from eth_abi import encode as abi_encode
from eth_abi import grammar as abi_grammar
from hexbytes import HexBytes
from web3 import Web3
from web3.types import ChecksumAddress

from .exceptions import InvalidAddressError, InvalidParameterError
from .types import NetworkConfig

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")
_DIGITS_PATTERN = re.compile(r"^[0-9]+$")


def is_valid_address(address: Any) -> bool:
    """Return True for `0x` followed by exactly 40 hex digits."""
    return isinstance(address, str) and ADDRESS_PATTERN.match(address) is not None


def require_address(address: Any, field: str = "address") -> ChecksumAddress:
    """Validate an address and return its checksummed form."""
    if not is_valid_address(address):
        raise InvalidAddressError(
            f"Invalid address for {field}: {address!r}", field=field, value=address
        )
    return Web3.to_checksum_address(address)


def format_address(address: str) -> str:
    """Shorten an address for display, e.g. `0x1234...abcd`."""
    return f"{address[:6]}...{address[-4:]}"


def parse_uint(value: Any, field: str, bits: int = 256) -> int:
    """Parse an integer amount in the asset's smallest unit."""
    if isinstance(value, bool):
        raise InvalidParameterError(
            f"{field} must be an integer amount", field=field, value=value
        )

    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str) and _DIGITS_PATTERN.match(value.strip()):
        parsed = int(value.strip())
    else:
        raise InvalidParameterError(
            f"{field} must be a non-negative integer in the smallest unit",
            field=field,
            value=value,
        )

    if parsed < 0:
        raise InvalidParameterError(f"{field} cannot be negative", field=field, value=value)
    if parsed > 2**bits - 1:
        raise InvalidParameterError(
            f"{field} exceeds uint{bits} maximum", field=field, value=value
        )
    return parsed


def require_fee_tier(fee: Any, fee_tiers: Sequence[int]) -> int:
    """Validate a Uniswap V3 fee against the registered tiers."""
    valid = isinstance(fee, int) and not isinstance(fee, bool)
    if not valid or fee not in fee_tiers:
        raise InvalidParameterError(
            f"fee must be one of {list(fee_tiers)}", field="fee", value=fee
        )
    return fee


def to_base_units(amount: Decimal | int | str, decimals: int = 18) -> int:
    """Convert a whole-unit amount to the smallest unit."""
    value = Decimal(str(amount))
    if value < 0:
        raise InvalidParameterError("Amount cannot be negative", field="amount", value=amount)
    return int(value.scaleb(decimals))


def from_base_units(amount: int | str, decimals: int = 18) -> Decimal:
    """Convert a smallest-unit amount to whole units."""
    return Decimal(int(amount)).scaleb(-decimals)


def format_units(amount: int | str, decimals: int = 18) -> str:
    """Render a smallest-unit amount as a plain decimal string."""
    value = from_base_units(amount, decimals).normalize()
    return f"{value:f}"


def explorer_tx_url(network: NetworkConfig, tx_hash: str) -> str:
    return f"{network.explorer_url.rstrip('/')}/tx/{tx_hash}"


def explorer_address_url(network: NetworkConfig, address: str) -> str:
    return f"{network.explorer_url.rstrip('/')}/address/{address}"


def function_selector(signature: str) -> bytes:
    """Return the 4-byte selector of a Solidity function signature."""
    return bytes(Web3.keccak(text=signature)[:4])


def signature_arg_types(signature: str) -> list[str]:
    """Return the top-level argument types of `name(a,(b,c)[],d)`."""
    _, paren, args = signature.partition("(")
    if not paren:
        raise ValueError(f"Malformed function signature: {signature}")
    arguments = abi_grammar.parse(paren + args)
    return [component.to_type_str() for component in arguments.components]


def encode_call(signature: str, args: Sequence[Any]) -> bytes:
    """Build call data: selector followed by the ABI-encoded arguments."""
    arg_types = signature_arg_types(signature)
    if len(arg_types) != len(args):
        raise ValueError(f"{signature} expects {len(arg_types)} arguments, got {len(args)}")
    encoded = abi_encode(arg_types, list(args)) if arg_types else b""
    return function_selector(signature) + encoded


def serialise_receipt(receipt: Any) -> Any:
    """Serialise web3 receipt objects into JSON-friendly structures."""
    if receipt is None:
        return None
    if isinstance(receipt, Mapping):
        return {key: serialise_receipt(value) for key, value in receipt.items()}
    if isinstance(receipt, Sequence) and not isinstance(
        receipt, str | bytes | bytearray | HexBytes
    ):
        return [serialise_receipt(item) for item in receipt]
    if isinstance(receipt, bytes | bytearray | HexBytes):
        return HexBytes(receipt).to_0x_hex()
    return receipt
