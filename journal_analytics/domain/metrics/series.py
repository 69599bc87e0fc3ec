"""P/L and equity series for charting.

Daily buckets use the ISO date of the close time; weekly buckets use
the Monday that starts the ISO week.
"""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Sequence

from journal_analytics.domain.filtering import closed_trades, in_range, sort_chronological
from journal_analytics.domain.models import DateRange, Trade
from journal_analytics.domain.money import ZERO, round_money
from journal_analytics.domain.reports import (
    EquityPoint,
    EquitySeries,
    PnlBucket,
    PnlPoint,
    PnlSeries,
)
from journal_analytics.domain.metrics.summary import STARTING_EQUITY


def bucket_start(day: date, bucket: PnlBucket) -> date:
    """First day of the bucket containing day."""
    if bucket == "daily":
        return day
    if bucket == "weekly":
        return day - timedelta(days=day.weekday())
    raise ValueError(f"bucket must be 'daily' or 'weekly', got: {bucket}")


def compute_pnl_series(
    trades: Sequence[Trade],
    bucket: PnlBucket = "daily",
    date_range: DateRange | None = None,
) -> PnlSeries:
    """Realized P/L per day or week, oldest first."""
    totals: dict[date, Decimal] = defaultdict(lambda: ZERO)
    for trade in in_range(closed_trades(trades), date_range):
        totals[bucket_start(trade.close_time.date(), bucket)] += trade.profit_or_zero

    points = tuple(
        PnlPoint(day_iso=day.isoformat(), pnl=round_money(pnl))
        for day, pnl in sorted(totals.items())
    )
    return PnlSeries(bucket=bucket, points=points)


def compute_equity_series(
    trades: Sequence[Trade],
    date_range: DateRange | None = None,
    *,
    starting_equity: Decimal = STARTING_EQUITY,
) -> EquitySeries:
    """End-of-day equity curve.

    The curve starts at the open day of the first closed trade with the
    starting equity; each close day then carries the running equity
    after its last trade.
    """
    closed = sort_chronological(in_range(closed_trades(trades), date_range))
    if not closed:
        return EquitySeries(points=())

    daily: dict[date, Decimal] = {closed[0].open_time.date(): starting_equity}
    equity = starting_equity
    for trade in closed:
        equity += trade.profit_or_zero
        daily[trade.close_time.date()] = equity

    points = tuple(
        EquityPoint(day_iso=day.isoformat(), equity=round_money(value))
        for day, value in sorted(daily.items())
    )
    return EquitySeries(points=points)
