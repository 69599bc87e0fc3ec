"""Time Analysis: P/L by hour of day, weekday and trading session.

All buckets are keyed by the close timestamp of closed trades as
given (no timezone conversion). Sessions are fixed hour ranges:

    asia      [0, 8)
    london    [8, 16)
    new_york  [16, 24)
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from journal_analytics.domain.filtering import closed_trades
from journal_analytics.domain.models import Trade
from journal_analytics.domain.money import ZERO, round_money
from journal_analytics.domain.reports import (
    DayOfWeekPnL,
    HourlyPnL,
    SessionStat,
    SessionStats,
    TimeAnalysis,
)

SESSIONS = {
    "asia": (0, 8),
    "london": (8, 16),
    "new_york": (16, 24),
}

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


@dataclass
class _Bucket:
    """Accumulator for one time bucket."""

    pnl: Decimal = ZERO
    trade_count: int = 0
    wins: int = 0

    def record(self, trade: Trade) -> None:
        self.pnl += trade.profit_or_zero
        self.trade_count += 1
        if trade.profit_or_zero > 0:
            self.wins += 1

    @property
    def win_rate(self) -> float:
        return self.wins / self.trade_count if self.trade_count else 0.0


def session_for_hour(hour: int) -> str:
    """Map an hour of day (0-23) to its session name."""
    for name, (start, end) in SESSIONS.items():
        if start <= hour < end:
            return name
    raise ValueError(f"hour must be in 0-23, got: {hour}")


def compute_time_analysis(trades: Sequence[Trade]) -> TimeAnalysis:
    """Aggregate closed trades by hour, ISO weekday and session.

    Args:
        trades: Trades of an account (open trades are ignored)

    Returns:
        TimeAnalysis with 24 hourly rows, 7 weekday rows (Monday=1)
        and the three session aggregates
    """
    hours = [_Bucket() for _ in range(24)]
    days = [_Bucket() for _ in range(7)]
    sessions = {name: _Bucket() for name in SESSIONS}

    for trade in closed_trades(trades):
        closed_at = trade.close_time
        hours[closed_at.hour].record(trade)
        days[closed_at.isoweekday() - 1].record(trade)
        sessions[session_for_hour(closed_at.hour)].record(trade)

    hourly = tuple(
        HourlyPnL(
            hour=hour,
            pnl=round_money(b.pnl),
            trade_count=b.trade_count,
            win_rate=b.win_rate,
        )
        for hour, b in enumerate(hours)
    )

    weekdays = tuple(
        DayOfWeekPnL(
            weekday=idx + 1,
            name=DAY_NAMES[idx],
            pnl=round_money(b.pnl),
            trade_count=b.trade_count,
            win_rate=b.win_rate,
        )
        for idx, b in enumerate(days)
    )

    stats = {
        name: SessionStat(
            pnl=round_money(b.pnl),
            trade_count=b.trade_count,
            win_rate=b.win_rate,
        )
        for name, b in sessions.items()
    }

    # Best/worst among hours that saw trades; ties go to the earlier hour
    active = [h for h in range(24) if hours[h].trade_count]
    best_hour = min(active, key=lambda h: (-hours[h].pnl, h)) if active else None
    worst_hour = min(active, key=lambda h: (hours[h].pnl, h)) if active else None

    return TimeAnalysis(
        hourly_pnl=hourly,
        day_of_week_pnl=weekdays,
        session_stats=SessionStats(**stats),
        best_hour=best_hour,
        worst_hour=worst_hour,
    )
