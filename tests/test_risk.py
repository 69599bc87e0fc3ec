"""Unit tests for risk analysis (domain/metrics/risk.py)."""

from datetime import timedelta
from decimal import Decimal

import pytest

from journal_analytics.domain.metrics import (
    calculate_exposure,
    calculate_loss_limit_hit_rate,
    calculate_risk_per_trade,
    compute_risk_analysis,
)


class TestRiskPerTrade:
    """Tests for calculate_risk_per_trade."""

    def test_uses_equity_before_trade(self, make_sequence):
        trades = make_sequence(["100", "-220"])
        risk = calculate_risk_per_trade(trades, Decimal("10000"))

        assert risk.min_risk_percent == pytest.approx(1.0)
        assert risk.max_risk_percent == pytest.approx(220 / 10100 * 100)
        assert risk.avg_risk_percent == pytest.approx((1.0 + 220 / 10100 * 100) / 2)

    def test_skips_trades_at_non_positive_equity(self, make_sequence):
        trades = make_sequence(["-100", "-50"])
        risk = calculate_risk_per_trade(trades, Decimal("100"))
        # Second trade is taken with zero equity and is skipped
        assert risk.max_risk_percent == pytest.approx(100.0)
        assert risk.min_risk_percent == pytest.approx(100.0)

    def test_empty(self):
        risk = calculate_risk_per_trade([])
        assert risk.avg_risk_percent == 0.0
        assert risk.min_risk_percent == 0.0
        assert risk.max_risk_percent == 0.0


class TestExposure:
    """Tests for calculate_exposure."""

    def test_volume_share_includes_open_trades(self, make_trade):
        trades = [
            make_trade("5", symbol="XAUUSD", volume="0.30"),
            make_trade("5", symbol="xauusd", volume="0.30", closed=False),
            make_trade("5", symbol="EURUSD", volume="0.40"),
        ]
        exposure = calculate_exposure(trades)

        assert [e.symbol for e in exposure] == ["XAUUSD", "EURUSD"]
        assert exposure[0].volume == Decimal("0.60")
        assert exposure[0].exposure_percent == pytest.approx(60.0)
        assert exposure[1].exposure_percent == pytest.approx(40.0)
        assert sum(e.exposure_percent for e in exposure) == pytest.approx(100.0)

    def test_missing_volumes(self, make_trade):
        assert calculate_exposure([make_trade("5", volume=None)]) == ()
        assert calculate_exposure([make_trade("5", volume="0")]) == ()


class TestLossLimit:
    """Tests for calculate_loss_limit_hit_rate."""

    def test_hit_rate(self, make_trade, base_time):
        next_day = base_time + timedelta(days=1)
        trades = [
            make_trade("-300", open_time=base_time),
            make_trade("-250", open_time=base_time + timedelta(hours=2)),
            make_trade("-500", open_time=next_day),
        ]
        # Day one: -550 breaches the limit; day two: exactly -500 does not
        assert calculate_loss_limit_hit_rate(trades, Decimal("500")) == 0.5

    def test_empty(self):
        assert calculate_loss_limit_hit_rate([]) == 0.0


class TestComputeRiskAnalysis:
    """Tests for compute_risk_analysis."""

    def test_consecutive_losses(self, make_sequence):
        trades = make_sequence(["-1", "-1", "3", "-1", "-1", "-1"])
        analysis = compute_risk_analysis(trades)
        assert analysis.consecutive_losses == 3

    def test_empty(self):
        analysis = compute_risk_analysis([])
        assert analysis.consecutive_losses == 0
        assert analysis.exposure_by_pair == ()
        assert analysis.daily_loss_limit_hit_rate == 0.0
        assert analysis.risk_per_trade.avg_risk_percent == 0.0

    def test_config_values(self, make_sequence):
        trades = make_sequence(["-60"])
        analysis = compute_risk_analysis(
            trades,
            starting_equity=Decimal("1000"),
            daily_loss_limit=Decimal("50"),
        )
        assert analysis.risk_per_trade.max_risk_percent == pytest.approx(6.0)
        assert analysis.daily_loss_limit_hit_rate == 1.0

    def test_idempotent(self, make_sequence, make_trade):
        trades = make_sequence(["5", "-3", "-4", "2"]) + [make_trade("1", closed=False)]
        assert compute_risk_analysis(trades) == compute_risk_analysis(trades)
