"""Trade selection: range, symbol and outcome filters.

Every view in the engine uses the same effective timestamp:
close_time for closed trades, open_time for open ones.
"""

from datetime import datetime
from typing import Iterable, Sequence

from journal_analytics.domain.models import DateRange, Trade, TradeQuery


def effective_time(trade: Trade) -> datetime:
    """close_time if present, otherwise open_time."""
    return trade.effective_time


def resolve_now(now: datetime | None, trades: Sequence[Trade] = ()) -> datetime:
    """Return the reference clock for "today" / trailing-window checks.

    When now is not given, the current time is taken in the timezone of
    the first trade so naive and aware timestamps never get compared.
    """
    if now is not None:
        return now
    tz = trades[0].open_time.tzinfo if trades else None
    return datetime.now(tz)


def closed_trades(trades: Iterable[Trade]) -> list[Trade]:
    """Closed trades, input order preserved."""
    return [t for t in trades if t.is_closed]


def open_trades(trades: Iterable[Trade]) -> list[Trade]:
    """Open trades, input order preserved."""
    return [t for t in trades if t.is_open]


def in_range(trades: Iterable[Trade], date_range: DateRange | None) -> list[Trade]:
    """Trades whose effective time falls inside the inclusive range."""
    if date_range is None or date_range.is_unbounded:
        return list(trades)
    return [t for t in trades if date_range.contains(t.effective_time)]


def sort_chronological(trades: Iterable[Trade]) -> list[Trade]:
    """Oldest first by effective time (stable)."""
    return sorted(trades, key=effective_time)


def sort_recent_first(trades: Iterable[Trade]) -> list[Trade]:
    """Newest first by effective time (stable)."""
    return sorted(trades, key=effective_time, reverse=True)


def matches_symbol(trade: Trade, symbol: str | None) -> bool:
    """Case-insensitive substring match; blank filters match everything."""
    if symbol is None:
        return True
    needle = symbol.strip().upper()
    if not needle:
        return True
    return needle in trade.symbol.upper()


def matches_outcome(trade: Trade, outcome: str | None) -> bool:
    """Match on profit sign, reading a missing profit as zero."""
    if outcome is None:
        return True
    return trade.outcome == outcome


def filter_trades(trades: Sequence[Trade], query: TradeQuery | None = None) -> list[Trade]:
    """Apply a TradeQuery to a trade list.

    Args:
        trades: Trades in any order
        query: Selection parameters (defaults to TradeQuery())

    Returns:
        Matching trades, newest first, at most query.limit entries

    Example:
        >>> filter_trades(trades, TradeQuery(symbol="xau", outcome="win"))
    """
    query = query or TradeQuery()

    selected = [
        t for t in in_range(trades, query.date_range)
        if matches_symbol(t, query.symbol) and matches_outcome(t, query.outcome)
    ]
    return sort_recent_first(selected)[: max(query.limit, 0)]
