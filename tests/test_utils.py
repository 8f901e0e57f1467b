"""Tests for utility functions."""

from decimal import Decimal

import pytest
from hexbytes import HexBytes

from base_sdk.constants import BASE_MAINNET, BASE_SEPOLIA
from base_sdk.exceptions import InvalidAddressError, InvalidParameterError
from base_sdk.utils import (
    encode_call,
    explorer_address_url,
    explorer_tx_url,
    format_address,
    format_units,
    from_base_units,
    function_selector,
    is_valid_address,
    parse_uint,
    require_address,
    require_fee_tier,
    serialise_receipt,
    signature_arg_types,
    to_base_units,
)


class TestAddressValidation:
    """Test address validation helpers."""

    def test_valid_addresses(self):
        assert is_valid_address("0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913")
        assert is_valid_address("0x" + "a" * 40)

    @pytest.mark.parametrize(
        "address",
        ["", "0x123", "833589fCD6eDb6E08f4c7C32D4f71b54bdA02913", "0x" + "g" * 40, None, 42],
    )
    def test_invalid_addresses(self, address):
        assert not is_valid_address(address)

    def test_require_address_returns_checksum(self):
        result = require_address("0x833589fcd6edb6e08f4c7c32d4f71b54bda02913")
        assert result == "0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913"

    def test_require_address_reports_field(self):
        with pytest.raises(InvalidAddressError) as exc_info:
            require_address("0xnope", field="recipient")
        assert exc_info.value.field == "recipient"
        assert exc_info.value.value == "0xnope"

    def test_invalid_address_is_parameter_error(self):
        with pytest.raises(InvalidParameterError):
            require_address("not-an-address")

    def test_format_address(self):
        assert format_address("0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913") == "0x8335...2913"


class TestParseUint:
    """Test integer amount parsing."""

    def test_int_and_digit_string(self):
        assert parse_uint(123, "amount") == 123
        assert parse_uint("1000000", "amount") == 1_000_000

    @pytest.mark.parametrize("value", [True, -1, "1.5", "-3", "abc", 1.0, None])
    def test_rejects_non_integer_amounts(self, value):
        with pytest.raises(InvalidParameterError) as exc_info:
            parse_uint(value, "amount")
        assert exc_info.value.field == "amount"

    def test_bit_width(self):
        assert parse_uint(2**160 - 1, "limit", 160) == 2**160 - 1
        with pytest.raises(InvalidParameterError):
            parse_uint(2**160, "limit", 160)


class TestFeeTier:
    def test_registered_tier(self):
        assert require_fee_tier(500, (100, 500, 3000)) == 500

    @pytest.mark.parametrize("fee", [2500, 3000.0, "3000", True, None])
    def test_rejects_unregistered_or_non_int(self, fee):
        with pytest.raises(InvalidParameterError) as exc_info:
            require_fee_tier(fee, (100, 500, 3000))
        assert exc_info.value.field == "fee"


class TestUnits:
    """Test unit conversion."""

    def test_format_units_whole_ether(self):
        assert format_units(10**18) == "1"

    def test_format_units_fraction(self):
        assert format_units(1_500_000, 6) == "1.5"

    def test_format_units_zero(self):
        assert format_units(0) == "0"

    def test_round_trip_helpers(self):
        assert to_base_units("1.5", 6) == 1_500_000
        assert from_base_units(1_500_000, 6) == Decimal("1.5")

    def test_to_base_units_negative_raises_error(self):
        with pytest.raises(InvalidParameterError):
            to_base_units("-1")


class TestAbiHelpers:
    """Test selector and call data helpers."""

    def test_known_selectors(self):
        assert function_selector("balanceOf(address)").hex() == "70a08231"
        assert function_selector("getReward()").hex() == "3d18b912"
        assert function_selector("stake(uint256)").hex() == "a694fc3a"

    def test_signature_arg_types_uses_abi_grammar(self):
        assert signature_arg_types("f(uint256,(address,bool)[],bytes)") == [
            "uint256",
            "(address,bool)[]",
            "bytes",
        ]
        assert signature_arg_types("getReward()") == []

    def test_signature_without_arguments_list(self):
        with pytest.raises(ValueError):
            signature_arg_types("getReward")

    def test_encode_call_layout(self):
        payload = encode_call("stake(uint256)", [5])
        assert payload == bytes.fromhex("a694fc3a") + (5).to_bytes(32, "big")

    def test_encode_call_argument_count(self):
        with pytest.raises(ValueError):
            encode_call("stake(uint256)", [])


class TestExplorerUrls:
    def test_mainnet_urls(self):
        assert explorer_tx_url(BASE_MAINNET, "0xabc") == "https://basescan.org/tx/0xabc"
        assert (
            explorer_address_url(BASE_SEPOLIA, "0xdef")
            == "https://sepolia.basescan.org/address/0xdef"
        )


def test_serialise_receipt_converts_bytes():
    receipt = {"transactionHash": HexBytes(b"\x01\x02"), "logs": [{"data": b"\xff"}], "status": 1}
    assert serialise_receipt(receipt) == {
        "transactionHash": "0x0102",
        "logs": [{"data": "0xff"}],
        "status": 1,
    }
