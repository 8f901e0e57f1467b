"""Example: Read Base chain state, a Uniswap pool and a portfolio summary."""

from __future__ import annotations

import logging
import os
from decimal import Decimal

from dotenv import load_dotenv

from base_sdk import (
    ClientConfig,
    DeFiIntegrator,
    NetworkClient,
    Position,
    aggregate_value,
    describe_flag,
    rebalancing_suggestions,
    risk_score,
)
from base_sdk.exceptions import BaseSDKError

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOGLEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

WATCH_ADDRESS = os.getenv("WATCH_ADDRESS", "0x4200000000000000000000000000000000000016")


def main() -> None:
    """Print chain height, balances and WETH/USDC pool state."""

    client = NetworkClient(ClientConfig.from_env())
    integrator = DeFiIntegrator(client)
    deployment = integrator.deployment

    logging.info("Connected to %s at block %s", client.network.name, client.current_block_height())
    logging.info("ETH balance of %s: %s", WATCH_ADDRESS, client.native_balance(WATCH_ADDRESS))

    weth = deployment.token("WETH")
    usdc = deployment.token("USDC")
    if weth is None or usdc is None:
        logging.error("WETH/USDC not registered on chain %s", deployment.chain_id)
        return

    logging.info(
        "USDC balance of %s: %s",
        WATCH_ADDRESS,
        client.token_balance(usdc.address, WATCH_ADDRESS),
    )

    try:
        pool = integrator.get_pool_info(weth.address, usdc.address, 500)
    except BaseSDKError as exc:
        logging.error("Pool lookup failed: %s", exc.message)
    else:
        logging.info(
            "Pool %s liquidity=%s sqrtPriceX96=%s",
            pool.address,
            pool.liquidity,
            pool.sqrt_price_x96,
        )

    positions = [
        Position("Uniswap V3", Decimal("6000"), apr=25.0),
        Position("Compound V3", Decimal("3000"), apr=4.2),
        Position("Aerodrome", Decimal("1000"), apr=31.0),
    ]
    snapshot = aggregate_value(positions)
    logging.info("Portfolio value: %s", snapshot.total_value)
    for entry in snapshot.breakdown:
        logging.info("  %s: %s (%.1f%%)", entry.protocol, entry.value, entry.percentage)
    logging.info("Risk score: %.2f", risk_score(positions))
    for flag in rebalancing_suggestions(snapshot):
        logging.info("Suggestion: %s", describe_flag(flag))


if __name__ == "__main__":
    main()
