"""Tests for portfolio analytics helpers."""

from decimal import Decimal

import pytest

from base_sdk.analytics import (
    aggregate_value,
    apr_tier,
    describe_flag,
    health_factor,
    project_yield,
    rebalancing_suggestions,
    risk_score,
    yield_summary,
)
from base_sdk.constants import COMPOUND_V3, UNISWAP_V3
from base_sdk.exceptions import InvalidParameterError
from base_sdk.types import Position, ProtocolCategory, RebalancingFlag


class TestAggregateValue:
    def test_empty(self):
        snapshot = aggregate_value([])
        assert snapshot.total_value == 0
        assert snapshot.breakdown == []

    def test_percentages(self):
        snapshot = aggregate_value(
            [Position("A", Decimal("75"), apr=4.0), Position("B", Decimal("25"))]
        )

        assert snapshot.total_value == Decimal("100")
        assert [entry.percentage for entry in snapshot.breakdown] == [Decimal(75), Decimal(25)]
        assert snapshot.breakdown[0].apr == 4.0
        assert sum(entry.value for entry in snapshot.breakdown) == snapshot.total_value

    def test_zero_total_gives_zero_percentages(self):
        snapshot = aggregate_value([Position("A", Decimal(0)), Position("B", Decimal(0))])
        assert [entry.percentage for entry in snapshot.breakdown] == [0, 0]


class TestRiskScore:
    def test_empty(self):
        assert risk_score([]) == 0.0

    def test_uniswap_high_apr(self):
        assert risk_score([Position(UNISWAP_V3, Decimal(100), apr=25)]) == 5

    @pytest.mark.parametrize(("apr", "tier"), [(0, 1), (9.99, 1), (10, 2), (20, 2), (20.01, 3)])
    def test_apr_tiers(self, apr, tier):
        assert apr_tier(apr) == tier

    def test_lending_and_unknown_protocols(self):
        positions = [
            Position(COMPOUND_V3, Decimal(1), apr=5),
            Position("Unlisted Farm", Decimal(1), apr=5),
        ]
        # (1 + 1) and (1 + 3)
        assert risk_score(positions) == 3.0

    def test_explicit_category_wins(self):
        position = Position("Unlisted", Decimal(1), apr=15, category=ProtocolCategory.LENDING)
        assert risk_score([position]) == 3.0


class TestRebalancing:
    def test_over_concentration_only(self):
        snapshot = aggregate_value(
            [Position("A", Decimal(60), apr=5), Position("B", Decimal(40), apr=8)]
        )
        assert rebalancing_suggestions(snapshot) == [RebalancingFlag.OVER_CONCENTRATION]

    def test_balanced_portfolio(self):
        snapshot = aggregate_value([Position("A", Decimal(50)), Position("B", Decimal(50))])
        assert rebalancing_suggestions(snapshot) == []

    def test_high_apr(self):
        snapshot = aggregate_value(
            [Position("A", Decimal(40), apr=30), Position("B", Decimal(60), apr=1)]
        )
        assert rebalancing_suggestions(snapshot) == [
            RebalancingFlag.OVER_CONCENTRATION,
            RebalancingFlag.HIGH_APR,
        ]

    def test_describe_flag(self):
        assert "diversifying" in describe_flag(RebalancingFlag.OVER_CONCENTRATION)


class TestYield:
    def test_yield_summary(self):
        positions = [Position("A", Decimal(300), apr=10), Position("B", Decimal(100), apr=30)]
        assert yield_summary(positions) == pytest.approx(15.0)
        assert yield_summary([]) == 0.0

    def test_project_yield(self):
        projection = project_yield(Decimal(3650), 10, 30)
        assert projection.daily_rewards == Decimal(1)
        assert projection.total_rewards == Decimal(30)

    def test_negative_days(self):
        with pytest.raises(InvalidParameterError) as exc_info:
            project_yield(100, 5, -1)
        assert exc_info.value.field == "days"


class TestHealthFactor:
    def test_nothing_borrowed(self):
        assert health_factor(1000, 0.8, 0) == Decimal("Infinity")

    def test_ratio(self):
        assert health_factor(1000, 0.8, 400) == Decimal(2)
