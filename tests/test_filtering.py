"""Unit tests for trade selection (domain/filtering.py)."""

from datetime import timedelta

from journal_analytics.domain.filtering import (
    closed_trades,
    filter_trades,
    in_range,
    matches_symbol,
    open_trades,
    sort_chronological,
    sort_recent_first,
)
from journal_analytics.domain.models import DateRange, TradeQuery


class TestSelection:
    """Tests for closed/open splits and ordering."""

    def test_split_open_closed(self, make_trade):
        closed = make_trade("10")
        still_open = make_trade("5", closed=False)
        assert closed_trades([closed, still_open]) == [closed]
        assert open_trades([closed, still_open]) == [still_open]

    def test_sort_by_effective_time(self, make_trade, base_time):
        """Closed trades sort by close time, open trades by open time."""
        late_close = make_trade("1", open_time=base_time, hold=timedelta(hours=5))
        early_close = make_trade("2", open_time=base_time + timedelta(hours=1))
        still_open = make_trade("3", open_time=base_time + timedelta(hours=3), closed=False)

        assert sort_chronological([late_close, early_close, still_open]) == [
            early_close, still_open, late_close,
        ]
        assert sort_recent_first([late_close, early_close, still_open]) == [
            late_close, still_open, early_close,
        ]

    def test_in_range_inclusive(self, make_sequence, base_time):
        trades = make_sequence(["1", "2", "3"])
        # Close times: 10:00, 11:00, 12:00
        date_range = DateRange(
            start=base_time + timedelta(hours=1),
            end=base_time + timedelta(hours=2),
        )
        assert in_range(trades, date_range) == trades[:2]
        assert in_range(trades, None) == trades


class TestSymbolFilter:
    """Tests for symbol matching."""

    def test_case_insensitive_substring(self, make_trade):
        """Symbol filter "xau" matches "XAUUSD"."""
        trade = make_trade(symbol="XAUUSD")
        assert matches_symbol(trade, "xau")
        assert matches_symbol(trade, " usd ")
        assert not matches_symbol(trade, "eur")

    def test_blank_matches_everything(self, make_trade):
        trade = make_trade(symbol="XAUUSD")
        assert matches_symbol(trade, None)
        assert matches_symbol(trade, "   ")


class TestFilterTrades:
    """Tests for filter_trades."""

    def test_newest_first_with_limit(self, make_sequence):
        trades = make_sequence(["1", "2", "3", "4"])
        result = filter_trades(trades, TradeQuery(limit=2))
        assert result == [trades[3], trades[2]]

    def test_outcome_filter(self, make_sequence):
        trades = make_sequence(["10", "-5", "0", None])
        assert filter_trades(trades, TradeQuery(outcome="win")) == [trades[0]]
        assert filter_trades(trades, TradeQuery(outcome="loss")) == [trades[1]]
        # Missing profit reads as zero
        assert filter_trades(trades, TradeQuery(outcome="breakeven")) == [trades[3], trades[2]]

    def test_symbol_and_range_combined(self, make_trade, base_time):
        gold = make_trade("10", symbol="XAUUSD")
        euro = make_trade("10", symbol="EURUSD")
        old_gold = make_trade("10", symbol="XAUUSD", open_time=base_time - timedelta(days=3))

        query = TradeQuery(
            date_range=DateRange(start=base_time - timedelta(days=1)),
            symbol="xau",
        )
        assert filter_trades([gold, euro, old_gold], query) == [gold]

    def test_includes_open_trades(self, make_trade):
        still_open = make_trade("5", closed=False)
        assert filter_trades([still_open]) == [still_open]
