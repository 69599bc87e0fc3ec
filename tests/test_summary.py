"""Unit tests for summary metrics (domain/metrics/summary.py).

Tests verify:
1. The worked drawdown scenario (+62.30, -56.00, +30.00)
2. Empty and all-breakeven inputs leave optional fields absent
3. Order independence of totals and chronological drawdown walk
4. Streaks, daily P/L, open-trade fields and overtrading warning
"""

import random
from datetime import timedelta
from decimal import Decimal

import pytest

from journal_analytics.domain.metrics import (
    calculate_max_drawdown,
    compute_summary,
    current_losing_run,
    longest_losing_run,
)
from journal_analytics.domain.models import DateRange


# =============================================================================
# Building Blocks
# =============================================================================

class TestDrawdown:
    """Tests for calculate_max_drawdown."""

    def test_worked_scenario(self):
        profits = [Decimal("62.30"), Decimal("-56.00"), Decimal("30.00")]
        assert calculate_max_drawdown(profits, Decimal("10000")) == Decimal("56.00")

    def test_monotonic_equity_has_no_drawdown(self):
        profits = [Decimal("1"), Decimal("0"), Decimal("5")]
        assert calculate_max_drawdown(profits) == Decimal("0")

    def test_initial_loss_counts(self):
        """A loss before any gain is measured from the starting equity."""
        assert calculate_max_drawdown([Decimal("-40"), Decimal("10")]) == Decimal("40")


class TestStreaks:
    """Tests for losing-run helpers."""

    def test_longest_run(self):
        profits = [Decimal(p) for p in ("-1", "-2", "3", "-4", "-5", "-6", "0")]
        assert longest_losing_run(profits) == 3

    def test_breakeven_breaks_run(self):
        profits = [Decimal(p) for p in ("-1", "0", "-1")]
        assert longest_losing_run(profits) == 1

    def test_current_run_counts_trailing_losses(self):
        profits = [Decimal(p) for p in ("-1", "-1", "5", "-2", "-3")]
        assert current_losing_run(profits) == 2

    def test_current_run_zero_after_win(self):
        assert current_losing_run([Decimal("-1"), Decimal("2")]) == 0
        assert current_losing_run([]) == 0


# =============================================================================
# compute_summary
# =============================================================================

class TestComputeSummary:
    """Tests for compute_summary."""

    def test_worked_scenario(self, make_sequence, base_time):
        """Three trades: pnl 36.30, drawdown 56.00, win rate 2/3."""
        trades = make_sequence(["62.30", "-56.00", "30.00"])
        summary = compute_summary(trades, now=base_time + timedelta(days=1))

        assert summary.pnl_total == Decimal("36.30")
        assert summary.max_drawdown == Decimal("56.00")
        assert summary.win_rate == pytest.approx(2 / 3)
        assert summary.trade_count == 3
        assert summary.equity == Decimal("10036.30")
        assert summary.gross_profit == Decimal("92.30")
        assert summary.gross_loss == Decimal("56.00")
        assert summary.avg_win == Decimal("46.15")
        assert summary.avg_loss == Decimal("56.00")
        assert summary.profit_factor == pytest.approx(92.30 / 56.00)
        assert summary.avg_rr == pytest.approx(46.15 / 56.00)
        assert summary.expectancy == Decimal("12.10")
        assert summary.losing_streak is None
        assert summary.max_losing_streak == 1

    def test_empty(self, base_time):
        """Empty input: zeros and absent optional fields."""
        summary = compute_summary([], now=base_time)

        assert summary.pnl_total == Decimal("0")
        assert summary.win_rate == 0.0
        assert summary.max_drawdown == Decimal("0")
        assert summary.trade_count == 0
        assert summary.equity == Decimal("10000.00")
        assert summary.profit_factor is None
        assert summary.avg_win is None
        assert summary.avg_loss is None
        assert summary.avg_rr is None
        assert summary.losing_streak is None
        assert summary.max_losing_streak is None
        assert summary.overtrade_warning is None

    def test_all_breakeven(self, make_sequence, base_time):
        """Zero profits: win rate 0, no averages, zero expectancy."""
        trades = make_sequence(["0", "0", "0"])
        summary = compute_summary(trades, now=base_time)

        assert summary.win_rate == 0.0
        assert summary.profit_factor is None
        assert summary.avg_win is None
        assert summary.avg_loss is None
        assert summary.expectancy == Decimal("0")
        assert summary.trade_count == 3

    def test_totals_independent_of_order(self, make_sequence, base_time):
        """pnl_total and win_rate do not depend on input ordering."""
        trades = make_sequence(["62.30", "-56.00", "30.00", "-0.01", "12.34"])
        shuffled = list(trades)
        random.Random(3).shuffle(shuffled)

        a = compute_summary(trades, now=base_time)
        b = compute_summary(shuffled, now=base_time)
        assert a == b

    def test_drawdown_walks_chronologically(self, make_sequence, base_time):
        """Newest-first input still yields the chronological drawdown."""
        trades = make_sequence(["62.30", "-56.00", "30.00"])
        summary = compute_summary(list(reversed(trades)), now=base_time)
        assert summary.max_drawdown == Decimal("56.00")

    def test_idempotent(self, make_sequence, base_time):
        trades = make_sequence(["5", "-3", "2"])
        assert compute_summary(trades, now=base_time) == compute_summary(trades, now=base_time)

    def test_losses_without_wins_have_zero_rr(self, make_sequence, base_time):
        """No winners: avg_win absent, avg_rr reads the missing win as 0."""
        summary = compute_summary(make_sequence(["-10", "-30"]), now=base_time)
        assert summary.avg_win is None
        assert summary.avg_loss == Decimal("20.00")
        assert summary.avg_rr == 0.0
        assert summary.profit_factor == 0.0

    def test_missing_profit_counts_as_trade(self, make_sequence, base_time):
        """A closed trade without profit counts in trade_count only."""
        trades = make_sequence(["10", None])
        summary = compute_summary(trades, now=base_time)
        assert summary.trade_count == 2
        assert summary.pnl_total == Decimal("10.00")
        assert summary.win_rate == 0.5

    def test_losing_streak(self, make_sequence, base_time):
        trades = make_sequence(["-1", "-1", "-1", "4", "-2", "-2"])
        summary = compute_summary(trades, now=base_time)
        assert summary.losing_streak == 2
        assert summary.max_losing_streak == 3

    def test_date_range_filters_closed_trades(self, make_sequence, base_time):
        trades = make_sequence(["10", "20", "30"])
        date_range = DateRange(start=base_time + timedelta(hours=2))
        summary = compute_summary(trades, date_range, now=base_time)
        assert summary.trade_count == 2
        assert summary.pnl_total == Decimal("50.00")

    def test_open_trades_feed_floating_and_risk(self, make_trade, base_time):
        trades = [
            make_trade("10"),
            make_trade("-4.50", closed=False),
            make_trade("7.25", closed=False),
        ]
        summary = compute_summary(trades, now=base_time)
        assert summary.trade_count == 1
        assert summary.floating_pnl == Decimal("2.75")
        assert summary.current_risk == Decimal("4.0")

    def test_daily_pnl_and_overtrade_warning(self, make_trade, base_time):
        """Eleven trades closed today trigger the overtrading warning."""
        today = [
            make_trade("1", open_time=base_time + timedelta(minutes=i), hold=timedelta(minutes=1))
            for i in range(11)
        ]
        yesterday = make_trade("100", open_time=base_time - timedelta(days=1))
        summary = compute_summary(today + [yesterday], now=base_time + timedelta(hours=6))

        assert summary.daily_pnl == Decimal("11.00")
        assert summary.overtrade_warning is True

    def test_no_overtrade_warning_at_threshold(self, make_trade, base_time):
        today = [
            make_trade("1", open_time=base_time + timedelta(minutes=i), hold=timedelta(minutes=1))
            for i in range(10)
        ]
        summary = compute_summary(today, now=base_time + timedelta(hours=6))
        assert summary.overtrade_warning is None

    def test_custom_starting_equity(self, make_sequence, base_time):
        trades = make_sequence(["-50"])
        summary = compute_summary(trades, now=base_time, starting_equity=Decimal("500"))
        assert summary.equity == Decimal("450.00")

    def test_win_rate_bounds(self, make_sequence, base_time):
        rng = random.Random(11)
        profits = [str(rng.randint(-100, 100)) for _ in range(40)]
        summary = compute_summary(make_sequence(profits), now=base_time)
        assert 0.0 <= summary.win_rate <= 1.0
        assert summary.loss_rate == pytest.approx(1.0 - summary.win_rate)
        assert summary.max_drawdown >= 0
