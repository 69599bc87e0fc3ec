"""Risk Analysis: Per-trade risk, exposure, loss runs and loss-limit days.

Per-trade risk:
    risk% = |profit| / equity_before_trade × 100
walking closed trades oldest first from the starting equity.

Exposure:
    share of total traded volume per symbol, open trades included.

Daily loss-limit hit rate:
    days with realized P/L < −limit / days with at least one close
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Sequence

from journal_analytics.domain.filtering import closed_trades, sort_chronological
from journal_analytics.domain.models import Trade
from journal_analytics.domain.money import ZERO, decimal_sum
from journal_analytics.domain.reports import PairExposure, RiskAnalysis, RiskPerTrade
from journal_analytics.domain.metrics.streaks import longest_losing_run
from journal_analytics.domain.metrics.summary import STARTING_EQUITY

DAILY_LOSS_LIMIT = Decimal("500")


def calculate_risk_per_trade(
    trades: Sequence[Trade],
    starting_equity: Decimal = STARTING_EQUITY,
) -> RiskPerTrade:
    """Risk percent of each trade against the equity it was taken with.

    Args:
        trades: Closed trades in chronological order

    Returns:
        RiskPerTrade with avg/min/max (all 0.0 when nothing qualifies)
    """
    equity = starting_equity
    risks: list[float] = []

    for trade in trades:
        profit = trade.profit_or_zero
        if equity > 0:
            risks.append(float(abs(profit) / equity * 100))
        equity += profit

    if not risks:
        return RiskPerTrade(avg_risk_percent=0.0, min_risk_percent=0.0, max_risk_percent=0.0)

    return RiskPerTrade(
        avg_risk_percent=sum(risks) / len(risks),
        min_risk_percent=min(risks),
        max_risk_percent=max(risks),
    )


def calculate_exposure(trades: Sequence[Trade]) -> tuple[PairExposure, ...]:
    """Volume share per symbol, descending (ties by symbol)."""
    volumes: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for trade in trades:
        if trade.volume is not None:
            volumes[trade.symbol.upper()] += trade.volume

    total = decimal_sum(volumes.values())
    if total <= 0:
        return ()

    exposure = [
        PairExposure(
            symbol=symbol,
            volume=volume,
            exposure_percent=float(volume / total * 100),
        )
        for symbol, volume in volumes.items()
    ]
    exposure.sort(key=lambda e: (-e.volume, e.symbol))
    return tuple(exposure)


def daily_realized_pnl(trades: Sequence[Trade]) -> dict[date, Decimal]:
    """Realized P/L per calendar day of the close time."""
    per_day: dict[date, Decimal] = defaultdict(lambda: ZERO)
    for trade in closed_trades(trades):
        per_day[trade.close_time.date()] += trade.profit_or_zero
    return dict(per_day)


def calculate_loss_limit_hit_rate(
    trades: Sequence[Trade],
    daily_loss_limit: Decimal = DAILY_LOSS_LIMIT,
) -> float:
    """Share of trading days whose realized P/L fell below −limit."""
    per_day = daily_realized_pnl(trades)
    if not per_day:
        return 0.0
    hits = sum(1 for pnl in per_day.values() if pnl < -daily_loss_limit)
    return hits / len(per_day)


def compute_risk_analysis(
    trades: Sequence[Trade],
    *,
    starting_equity: Decimal = STARTING_EQUITY,
    daily_loss_limit: Decimal = DAILY_LOSS_LIMIT,
) -> RiskAnalysis:
    """Compute risk metrics for an account.

    Args:
        trades: All trades of an account (open trades only feed exposure)
        starting_equity: Equity before the first trade
        daily_loss_limit: Positive loss threshold per calendar day

    Returns:
        RiskAnalysis with zero defaults on empty input
    """
    closed = sort_chronological(closed_trades(trades))
    profits = [t.profit for t in closed if t.profit is not None]

    return RiskAnalysis(
        risk_per_trade=calculate_risk_per_trade(closed, starting_equity),
        exposure_by_pair=calculate_exposure(trades),
        consecutive_losses=longest_losing_run(profits),
        daily_loss_limit_hit_rate=calculate_loss_limit_hit_rate(closed, daily_loss_limit),
    )
