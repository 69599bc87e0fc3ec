"""Pair Analysis: Per-instrument performance and rankings.

Closed trades are grouped by symbol (case-insensitive). The ranked
list is sorted once by descending P/L; top pairs are its head and
worst pairs its tail read backwards, most negative first.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Sequence

from journal_analytics.domain.filtering import closed_trades
from journal_analytics.domain.models import Trade
from journal_analytics.domain.money import ZERO, decimal_sum, round_money
from journal_analytics.domain.reports import PairAnalysis, PairPerformance

PAIR_REPORT_SIZE = 5


def _mean(values: list[Decimal]) -> Decimal:
    return decimal_sum(values) / len(values) if values else ZERO


def calculate_pair_performance(symbol: str, trades: Sequence[Trade]) -> tuple[Decimal, PairPerformance]:
    """Aggregate one symbol's closed trades.

    Returns:
        (unrounded pnl, PairPerformance) so ranking uses exact values
    """
    profits = [t.profit_or_zero for t in trades]
    wins = [p for p in profits if p > 0]
    losses = [abs(p) for p in profits if p < 0]
    pnl = decimal_sum(profits)

    perf = PairPerformance(
        symbol=symbol,
        pnl=round_money(pnl),
        trade_count=len(trades),
        win_rate=len(wins) / len(trades) if trades else 0.0,
        avg_win=round_money(_mean(wins)),
        avg_loss=round_money(_mean(losses)),
    )
    return pnl, perf


def compute_pair_analysis(
    trades: Sequence[Trade],
    *,
    report_size: int = PAIR_REPORT_SIZE,
) -> PairAnalysis:
    """Rank instruments by realized P/L.

    Args:
        trades: Trades of an account (open trades are ignored)
        report_size: Length of the top and worst lists

    Returns:
        PairAnalysis with every pair ranked, plus top and worst slices

    Example:
        >>> analysis = compute_pair_analysis(trades)
        >>> analysis.top_pairs[0].symbol
        'XAUUSD'
    """
    by_symbol: dict[str, list[Trade]] = defaultdict(list)
    for trade in closed_trades(trades):
        by_symbol[trade.symbol.upper()].append(trade)

    scored = [calculate_pair_performance(sym, group) for sym, group in by_symbol.items()]
    scored.sort(key=lambda item: (-item[0], item[1].symbol))
    ranked = tuple(perf for _, perf in scored)

    if report_size <= 0:
        return PairAnalysis(pairs=ranked, top_pairs=(), worst_pairs=())

    return PairAnalysis(
        pairs=ranked,
        top_pairs=ranked[:report_size],
        worst_pairs=tuple(reversed(ranked[-report_size:])),
    )
