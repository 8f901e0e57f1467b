"""Portfolio analytics over caller-supplied positions."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal

from .registry import BASE_MAINNET_DEPLOYMENT, ChainDeployment
from .types import (
    BreakdownEntry,
    PortfolioSnapshot,
    Position,
    ProtocolCategory,
    RebalancingFlag,
    YieldProjection,
)
from .utils import parse_uint

MAX_RISK_SCORE = 10.0
CONCENTRATION_THRESHOLD = Decimal(50)
HIGH_APR_THRESHOLD = 25.0
DAYS_PER_YEAR = 365

_FLAG_MESSAGES = {
    RebalancingFlag.OVER_CONCENTRATION: (
        "Consider diversifying - one protocol holds >50% of portfolio"
    ),
    RebalancingFlag.HIGH_APR: "High APR positions detected - monitor for sustainability",
}

_HUNDRED = Decimal(100)


def aggregate_value(positions: Iterable[Position]) -> PortfolioSnapshot:
    """Sum position values and compute each position's share of the total.

    A zero total yields zero percentages rather than a division error.
    """
    items = list(positions)
    total = sum((Decimal(position.value) for position in items), Decimal(0))

    breakdown = []
    for position in items:
        value = Decimal(position.value)
        percentage = value / total * _HUNDRED if total != 0 else Decimal(0)
        breakdown.append(
            BreakdownEntry(
                protocol=position.protocol,
                value=value,
                percentage=percentage,
                apr=position.apr,
            )
        )

    return PortfolioSnapshot(total_value=total, breakdown=breakdown)


def apr_tier(apr: float) -> int:
    if apr > 20:
        return 3
    if apr >= 10:
        return 2
    return 1


def category_weight(category: ProtocolCategory | None) -> int:
    if category is ProtocolCategory.LENDING:
        return 1
    if category is ProtocolCategory.EXCHANGE:
        return 2
    return 3


def risk_score(
    positions: Sequence[Position], deployment: ChainDeployment | None = None
) -> float:
    """Mean per-position risk contribution, capped at 10.

    Each position scores its APR tier plus a protocol-class weight. The class
    comes from ``position.category`` or, failing that, from the deployment's
    protocol name index (Base mainnet by default).
    """
    if not positions:
        return 0.0

    lookup = deployment or BASE_MAINNET_DEPLOYMENT
    total = 0
    for position in positions:
        category = position.category
        if category is None:
            descriptor = lookup.protocol(position.protocol)
            category = descriptor.category if descriptor is not None else None
        total += apr_tier(position.apr) + category_weight(category)

    return min(total / len(positions), MAX_RISK_SCORE)


def rebalancing_suggestions(snapshot: PortfolioSnapshot) -> list[RebalancingFlag]:
    flags = []
    if any(entry.percentage > CONCENTRATION_THRESHOLD for entry in snapshot.breakdown):
        flags.append(RebalancingFlag.OVER_CONCENTRATION)
    if any(entry.apr > HIGH_APR_THRESHOLD for entry in snapshot.breakdown):
        flags.append(RebalancingFlag.HIGH_APR)
    return flags


def describe_flag(flag: RebalancingFlag) -> str:
    return _FLAG_MESSAGES[flag]


def yield_summary(positions: Sequence[Position]) -> float:
    """Value-weighted average APR of the given positions."""
    total = sum((Decimal(position.value) for position in positions), Decimal(0))
    if total == 0:
        return 0.0
    weighted = sum(
        (Decimal(position.value) * Decimal(str(position.apr)) for position in positions),
        Decimal(0),
    )
    return float(weighted / total)


def project_yield(principal: Decimal | int | str, apr: float, days: int) -> YieldProjection:
    """Simple (non-compounding) reward projection for ``days`` at ``apr`` percent."""
    days = parse_uint(days, "days")
    amount = Decimal(str(principal))
    daily = amount * Decimal(str(apr)) / _HUNDRED / DAYS_PER_YEAR
    return YieldProjection(
        principal=amount,
        apr=apr,
        days=days,
        total_rewards=daily * days,
        daily_rewards=daily,
    )


def health_factor(
    collateral_value: Decimal | int | str,
    collateral_factor: float,
    borrowed_value: Decimal | int | str,
) -> Decimal:
    """Risk-adjusted collateral over debt; at or below 1 the position can be liquidated."""
    borrowed = Decimal(str(borrowed_value))
    if borrowed == 0:
        return Decimal("Infinity")
    return Decimal(str(collateral_value)) * Decimal(str(collateral_factor)) / borrowed
