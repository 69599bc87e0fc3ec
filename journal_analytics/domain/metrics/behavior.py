"""Behavior Analysis: Hold times, revenge trading and overtrading.

Revenge trading: losers held much longer than winners,
    avg_loss_hold > 1.8 × avg_win_hold
Overtrading: more than 10 trades closed in the trailing 24 hours.

Breakeven trades are excluded from both hold-time buckets.
"""

from datetime import datetime, timedelta
from typing import Sequence

from journal_analytics.domain.filtering import closed_trades, resolve_now
from journal_analytics.domain.models import Trade
from journal_analytics.domain.reports import BehaviorAnalysis, HoldTimeStats

REVENGE_HOLD_RATIO = 1.8
OVERTRADE_THRESHOLD = 10
OVERTRADING_WINDOW = timedelta(hours=24)


def index_median(values: Sequence[float]) -> float:
    """Element at index len // 2 of the sorted values (0.0 when empty).

    No interpolation: for even counts this is the upper of the two
    middle elements, not their mean.
    """
    if not values:
        return 0.0
    ordered = sorted(values)
    return ordered[len(ordered) // 2]


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def calculate_hold_time_stats(trades: Sequence[Trade]) -> HoldTimeStats:
    """Average and median hold seconds for winners and losers."""
    win_holds = [t.hold_seconds for t in trades if t.profit_or_zero > 0]
    loss_holds = [t.hold_seconds for t in trades if t.profit_or_zero < 0]

    return HoldTimeStats(
        avg_win_hold_time=_mean(win_holds),
        median_win_hold_time=index_median(win_holds),
        win_count=len(win_holds),
        avg_loss_hold_time=_mean(loss_holds),
        median_loss_hold_time=index_median(loss_holds),
        loss_count=len(loss_holds),
    )


def is_revenge_trading(stats: HoldTimeStats, ratio: float = REVENGE_HOLD_RATIO) -> bool:
    """Both buckets populated and losers held longer than ratio × winners."""
    if stats.win_count == 0 or stats.loss_count == 0:
        return False
    return stats.avg_loss_hold_time > ratio * stats.avg_win_hold_time


def count_recent_trades(
    trades: Sequence[Trade],
    now: datetime,
    window: timedelta = OVERTRADING_WINDOW,
) -> int:
    """Closed trades whose close time lies within [now - window, now]."""
    start = now - window
    return sum(1 for t in trades if start <= t.effective_time <= now)


def compute_behavior_analysis(
    trades: Sequence[Trade],
    *,
    now: datetime | None = None,
    revenge_hold_ratio: float = REVENGE_HOLD_RATIO,
    overtrade_threshold: int = OVERTRADE_THRESHOLD,
    overtrading_window: timedelta = OVERTRADING_WINDOW,
) -> BehaviorAnalysis:
    """Detect behavioral patterns in closed trades.

    Args:
        trades: Trades of an account (open trades are ignored)
        now: Reference clock for the trailing window
        revenge_hold_ratio: Loss/win hold ratio that flags revenge trading
        overtrade_threshold: Trade count in the window that flags overtrading
        overtrading_window: Length of the trailing window

    Returns:
        BehaviorAnalysis (slippage and spread impact are always None)
    """
    now = resolve_now(now, trades)
    closed = closed_trades(trades)
    stats = calculate_hold_time_stats(closed)
    recent = count_recent_trades(closed, now, overtrading_window)

    return BehaviorAnalysis(
        hold_time_stats=stats,
        revenge_trading_detected=is_revenge_trading(stats, revenge_hold_ratio),
        overtrading_detected=recent > overtrade_threshold,
    )
