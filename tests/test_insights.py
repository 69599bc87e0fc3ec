"""Unit tests for rule-based insights (domain/metrics/insights.py)."""

from datetime import timedelta

from journal_analytics.domain.metrics import generate_insights
from journal_analytics.domain.metrics.insights import (
    best_hour_insight,
    recent_performance_insight,
    top_pair_insight,
)


class TestInsightRules:
    """Tests for the individual insight rules."""

    def test_best_hour_by_open_time(self, make_trade, base_time):
        trades = [
            make_trade("1", open_time=base_time),
            make_trade("1", open_time=base_time + timedelta(days=1)),
            make_trade("1", open_time=base_time + timedelta(hours=5)),
        ]
        insight = best_hour_insight(trades)
        assert insight.type == "time_based"
        assert insight.severity == "info"
        assert insight.message == "Most trades executed at 9:00 with 2 trades"

    def test_best_hour_tie_takes_earliest(self, make_trade, base_time):
        trades = [
            make_trade("1", open_time=base_time + timedelta(hours=5)),
            make_trade("1", open_time=base_time),
        ]
        assert "at 9:00" in best_hour_insight(trades).message

    def test_top_pair_warning_when_losing(self, make_trade):
        trades = [
            make_trade("-30", symbol="XAUUSD"),
            make_trade("10", symbol="XAUUSD"),
            make_trade("50", symbol="EURUSD"),
        ]
        insight = top_pair_insight(trades)
        assert insight.type == "pair_based"
        assert insight.message == "XAUUSD has 2 trades with -20.00 P/L"
        assert insight.severity == "warning"

    def test_top_pair_info_when_profitable(self, make_trade):
        insight = top_pair_insight([make_trade("5", symbol="EURUSD")])
        assert insight.severity == "info"

    def test_recent_performance_warning(self, make_sequence):
        trades = make_sequence(["10", "10", "-1", "-1", "-1", "-1"])
        insight = recent_performance_insight(trades)
        assert insight.type == "behavior"
        assert insight.severity == "warning"
        assert insight.message == "Only 2 wins in last 6 trades. Consider reviewing strategy."

    def test_recent_performance_uses_latest_ten(self, make_sequence):
        """Old wins beyond the ten most recent trades do not count."""
        trades = make_sequence(["10"] * 5 + ["-1"] * 10)
        insight = recent_performance_insight(trades)
        assert insight is not None
        assert insight.message.startswith("Only 0 wins in last 10 trades")

    def test_recent_performance_needs_five_trades(self, make_sequence):
        assert recent_performance_insight(make_sequence(["-1"] * 4)) is None

    def test_recent_performance_ok_with_three_wins(self, make_sequence):
        trades = make_sequence(["10", "10", "10", "-1", "-1"])
        assert recent_performance_insight(trades) is None


class TestGenerateInsights:
    """Tests for generate_insights."""

    def test_empty(self):
        assert generate_insights([]) == ()

    def test_order(self, make_sequence):
        trades = make_sequence(["-1"] * 6)
        types = [i.type for i in generate_insights(trades)]
        assert types == ["time_based", "pair_based", "behavior"]
