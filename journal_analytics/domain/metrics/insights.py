"""Rule-based insights shown alongside the analytics views.

- Best trading hour: open hour with the most trades
- Top trading pair: symbol with the most trades and its P/L
- Recent performance: fewer than 3 wins among the last 10 trades
"""

from collections import Counter
from typing import Sequence

from journal_analytics.domain.filtering import sort_recent_first
from journal_analytics.domain.models import Trade
from journal_analytics.domain.money import decimal_sum, round_money
from journal_analytics.domain.reports import Insight

RECENT_WINDOW = 10
RECENT_MIN_TRADES = 5
RECENT_MIN_WINS = 3


def best_hour_insight(trades: Sequence[Trade]) -> Insight | None:
    if not trades:
        return None
    counts = Counter(t.open_time.hour for t in trades)
    hour = min(counts, key=lambda h: (-counts[h], h))
    return Insight(
        type="time_based",
        title="Best Trading Hour",
        message=f"Most trades executed at {hour}:00 with {counts[hour]} trades",
        severity="info",
    )


def top_pair_insight(trades: Sequence[Trade]) -> Insight | None:
    if not trades:
        return None
    counts = Counter(t.symbol.upper() for t in trades)
    symbol = min(counts, key=lambda s: (-counts[s], s))
    pnl = round_money(decimal_sum(
        t.profit_or_zero for t in trades if t.symbol.upper() == symbol
    ))
    return Insight(
        type="pair_based",
        title="Top Trading Pair",
        message=f"{symbol} has {counts[symbol]} trades with {pnl} P/L",
        severity="info" if pnl >= 0 else "warning",
    )


def recent_performance_insight(trades: Sequence[Trade]) -> Insight | None:
    recent = sort_recent_first(trades)[:RECENT_WINDOW]
    wins = sum(1 for t in recent if t.profit_or_zero > 0)
    if len(recent) < RECENT_MIN_TRADES or wins >= RECENT_MIN_WINS:
        return None
    return Insight(
        type="behavior",
        title="Recent Performance",
        message=f"Only {wins} wins in last {len(recent)} trades. Consider reviewing strategy.",
        severity="warning",
    )


def generate_insights(trades: Sequence[Trade]) -> tuple[Insight, ...]:
    """Run every insight rule; rules with nothing to say are skipped."""
    candidates = (
        best_hour_insight(trades),
        top_pair_insight(trades),
        recent_performance_insight(trades),
    )
    return tuple(i for i in candidates if i is not None)
