from __future__ import annotations

import pytest
from conftest import FUTURE_DEADLINE, RECIPIENT, TEST_PRIVATE_KEY, USDC, WETH
from eth_abi import decode, encode

from base_sdk.constants import (
    AERODROME,
    AERODROME_FACTORY,
    COMPOUND_V3,
    MOONWELL,
    UNISWAP_V3,
    UNISWAP_V3_FACTORY,
    ZERO_ADDRESS,
    ContractFunction,
)
from base_sdk.exceptions import (
    ContractCallError,
    InvalidParameterError,
    NoSignerError,
    UnsupportedProtocolError,
)
from base_sdk.integrator import DeFiIntegrator
from base_sdk.intents import SwapRequest
from base_sdk.registry import BASE_MAINNET_DEPLOYMENT, BASE_SEPOLIA_DEPLOYMENT, AddressRegistry
from base_sdk.types import TxStatus
from base_sdk.utils import function_selector

POOL = "0xd0b53d9277642d899df5c87a3966a349a798f224"
USER = "0x000000000000000000000000000000000000dEaD"
SLOT0_TYPES = ["uint160", "int24", "uint16", "uint16", "uint16", "uint8", "bool"]


def _address(name: str) -> str:
    protocol = BASE_MAINNET_DEPLOYMENT.protocol_by_name(name)
    assert protocol is not None
    return protocol.address


@pytest.fixture
def integrator(make_client, clock) -> DeFiIntegrator:
    return DeFiIntegrator(make_client(), clock=clock)


class TestPoolInfo:
    def test_echoes_inputs(self, integrator, fake_web3):
        fake_web3.eth.respond(
            _address(UNISWAP_V3_FACTORY),
            ContractFunction.GET_POOL.value,
            encode(["address"], [POOL]),
        )
        fake_web3.eth.respond(POOL, "liquidity()", encode(["uint128"], [987_654]))
        fake_web3.eth.respond(
            POOL, "slot0()", encode(SLOT0_TYPES, [2**96, -200_000, 1, 100, 100, 0, True])
        )

        info = integrator.get_pool_info(WETH, USDC.lower(), 500)

        assert info.token0 == WETH
        assert info.token1 == USDC.lower()
        assert info.fee == 500
        assert info.address.lower() == POOL.lower()
        assert info.liquidity == 987_654
        assert info.sqrt_price_x96 == 2**96

    def test_undeployed_pool(self, integrator, fake_web3):
        fake_web3.eth.respond(
            _address(UNISWAP_V3_FACTORY),
            ContractFunction.GET_POOL.value,
            encode(["address"], [ZERO_ADDRESS]),
        )
        with pytest.raises(ContractCallError):
            integrator.get_pool_info(WETH, USDC, 3000)

    def test_invalid_fee_tier(self, integrator, fake_web3):
        with pytest.raises(InvalidParameterError) as exc_info:
            integrator.get_pool_info(WETH, USDC, 2500)
        assert exc_info.value.field == "fee"
        assert fake_web3.eth.calls == []

    def test_float_fee_rejected(self, integrator, fake_web3):
        with pytest.raises(InvalidParameterError) as exc_info:
            integrator.get_pool_info(WETH, USDC, 3000.0)
        assert exc_info.value.field == "fee"
        assert fake_web3.eth.calls == []


class TestReads:
    def test_aerodrome_routes(self, integrator):
        (route,) = integrator.get_aerodrome_routes(WETH, USDC, stable=True)

        assert route.stable is True
        assert route.factory.lower() == _address(AERODROME_FACTORY).lower()
        assert route.as_tuple()[:2] == (WETH, USDC)

    def test_lending_position(self, integrator, fake_web3):
        comet = _address(COMPOUND_V3)
        fake_web3.eth.respond(comet, "baseToken()", encode(["address"], [USDC]))
        fake_web3.eth.respond(comet, "balanceOf(address)", encode(["uint256"], [1_000]))
        fake_web3.eth.respond(comet, "borrowBalanceOf(address)", encode(["uint256"], [250]))

        position = integrator.get_lending_position(USER)

        assert position.asset.lower() == USDC.lower()
        assert (position.supplied, position.borrowed) == (1_000, 250)

    def test_lending_position_requires_lending_protocol(self, integrator):
        with pytest.raises(UnsupportedProtocolError):
            integrator.get_lending_position(USER, protocol=UNISWAP_V3)

    def test_protocol_info(self, integrator):
        assert integrator.protocol_info("aerodrome").name == AERODROME
        assert integrator.protocol_tvl(UNISWAP_V3) == "500000000"
        assert integrator.protocol_info(MOONWELL).operations == frozenset()
        with pytest.raises(UnsupportedProtocolError):
            integrator.protocol_info("SushiSwap")


class TestTransactions:
    def test_swap_without_signer(self, integrator, fake_web3):
        request = SwapRequest(
            token_in=WETH,
            token_out=USDC,
            amount_in=1,
            amount_out_minimum=0,
            recipient=RECIPIENT,
            deadline=FUTURE_DEADLINE,
        )
        with pytest.raises(NoSignerError):
            integrator.swap_on_aerodrome(request)
        assert fake_web3.eth.calls == []

    def test_bridge_to_l1(self, make_client, fake_web3, clock):
        integrator = DeFiIntegrator(make_client(private_key=TEST_PRIVATE_KEY), clock=clock)

        result = integrator.bridge_to_l1(10**16)

        assert result.status is TxStatus.SUCCESS
        _, tx = fake_web3.eth.calls[0]
        assert tx["value"] == 10**16
        assert tx["to"] == "0x4200000000000000000000000000000000000010"


class TestApprovals:
    def test_approve_protocol_spender(self, make_client, fake_web3, clock):
        integrator = DeFiIntegrator(make_client(private_key=TEST_PRIVATE_KEY), clock=clock)

        result = integrator.approve_token(USDC, UNISWAP_V3, 5)

        assert result.action == "approve"
        name, tx = fake_web3.eth.calls[0]
        assert name == "send_transaction"
        assert tx["to"] == USDC
        assert tx["value"] == 0
        data = bytes(tx["data"])
        assert data[:4] == function_selector(ContractFunction.APPROVE.value)
        spender, amount = decode(["address", "uint256"], data[4:])
        assert spender.lower() == _address(UNISWAP_V3).lower()
        assert amount == 5

    def test_approve_requires_signer(self, integrator, fake_web3):
        with pytest.raises(NoSignerError):
            integrator.approve_token(USDC, COMPOUND_V3, 5)
        assert fake_web3.eth.calls == []

    def test_approve_unknown_spender(self, make_client, clock):
        integrator = DeFiIntegrator(make_client(private_key=TEST_PRIVATE_KEY), clock=clock)
        with pytest.raises(UnsupportedProtocolError):
            integrator.approve_token(USDC, "SushiSwap", 5)

    def test_token_allowance(self, integrator, fake_web3):
        fake_web3.eth.respond(USDC, ContractFunction.ALLOWANCE.value, encode(["uint256"], [7]))

        assert integrator.token_allowance(USDC, USER, RECIPIENT) == 7


def test_unregistered_chain(make_client):
    registry = AddressRegistry([BASE_SEPOLIA_DEPLOYMENT])
    with pytest.raises(ValueError):
        DeFiIntegrator(make_client(), registry)
