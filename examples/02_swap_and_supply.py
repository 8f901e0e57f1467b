"""Example: Swap WETH to USDC on Uniswap V3, then supply USDC to Compound V3."""

from __future__ import annotations

import logging
import os
import time

from dotenv import load_dotenv

from base_sdk import (
    ClientConfig,
    DeFiIntegrator,
    NetworkClient,
    SwapRequest,
    TransactionResult,
    to_base_units,
)
from base_sdk.constants import COMPOUND_V3, UNISWAP_V3

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOGLEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

SWAP_AMOUNT_WETH = "0.001"
SUPPLY_AMOUNT_USDC = "1"
DEADLINE_SECONDS = 600


def _log_result(prefix: str, result: TransactionResult, client: NetworkClient) -> None:
    if result.success:
        logging.info("%s successful; tx: %s", prefix, client.explorer_tx_url(result.tx_hash))
        logging.info("%s included in block: %s", prefix, result.block_number)
    else:
        logging.error("%s failed; tx hash: %s", prefix, result.tx_hash)


def main() -> None:
    """Run a swap then a Compound supply with the configured signer."""

    config = ClientConfig.from_env()
    if not config.private_key:
        raise ValueError("BASE_PRIVATE_KEY not found in environment variables")

    client = NetworkClient(config)
    integrator = DeFiIntegrator(client)
    deployment = integrator.deployment

    weth = deployment.token("WETH")
    usdc = deployment.token("USDC")
    if weth is None or usdc is None or client.address is None:
        raise ValueError(f"WETH/USDC not registered on chain {deployment.chain_id}")

    amount_in = to_base_units(SWAP_AMOUNT_WETH, weth.decimals)
    supply_amount = to_base_units(SUPPLY_AMOUNT_USDC, usdc.decimals)

    # Router and Comet pull tokens with transferFrom
    if integrator.token_allowance(weth.address, client.address, UNISWAP_V3) < amount_in:
        approval = integrator.approve_token(weth.address, UNISWAP_V3, amount_in)
        _log_result("Approve WETH", approval, client)
    if integrator.token_allowance(usdc.address, client.address, COMPOUND_V3) < supply_amount:
        approval = integrator.approve_token(usdc.address, COMPOUND_V3, supply_amount)
        _log_result("Approve USDC", approval, client)

    swap = SwapRequest(
        token_in=weth.address,
        token_out=usdc.address,
        amount_in=amount_in,
        amount_out_minimum=0,
        recipient=client.address,
        deadline=int(time.time()) + DEADLINE_SECONDS,
        fee=500,
    )
    logging.info("Swapping %s WETH for USDC", SWAP_AMOUNT_WETH)
    _log_result("Swap", integrator.swap_exact_input_single(swap), client)

    logging.info("Supplying %s USDC to Compound V3", SUPPLY_AMOUNT_USDC)
    supply = integrator.supply_to_compound(usdc.address, supply_amount)
    _log_result("Supply", supply, client)

    position = integrator.get_lending_position(client.address)
    logging.info("Comet position: supplied=%s borrowed=%s", position.supplied, position.borrowed)


if __name__ == "__main__":
    main()
