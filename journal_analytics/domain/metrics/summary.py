"""Summary Metrics: Headline P/L, win rate, drawdown and streaks.

Formulas (over closed trades, optionally range-filtered):
    pnl_total     = Σ profit
    win_rate      = wins / closed
    profit_factor = gross_profit / gross_loss
    expectancy    = win_rate × avg_win − (1 − win_rate) × avg_loss
    max_drawdown  = max(peak − equity) along the chronological equity walk

Missing profits count as zero in sums but still count as closed trades.
Open trades feed floating_pnl and the current_risk placeholder.
"""

from datetime import datetime
from decimal import Decimal
from typing import Sequence

from journal_analytics.domain.filtering import (
    closed_trades,
    in_range,
    open_trades,
    resolve_now,
    sort_chronological,
)
from journal_analytics.domain.models import DateRange, Trade
from journal_analytics.domain.money import (
    ZERO,
    decimal_sum,
    round_money,
    round_optional,
    safe_ratio,
)
from journal_analytics.domain.reports import AnalyticsSummary
from journal_analytics.domain.metrics.streaks import (
    current_losing_run,
    longest_losing_run,
)

STARTING_EQUITY = Decimal("10000")
RISK_PER_OPEN_TRADE = Decimal("2")
OVERTRADE_THRESHOLD = 10


# =============================================================================
# Building Blocks
# =============================================================================

def calculate_max_drawdown(
    profits: Sequence[Decimal],
    starting_equity: Decimal = STARTING_EQUITY,
) -> Decimal:
    """Largest peak-to-trough decline of the running equity.

    Args:
        profits: Trade profits in chronological order (oldest first)
        starting_equity: Equity before the first trade

    Returns:
        Maximum drawdown (unrounded, never negative)

    Example:
        >>> calculate_max_drawdown([Decimal("62.30"), Decimal("-56.00"), Decimal("30.00")])
        Decimal('56.00')
    """
    equity = starting_equity
    peak = starting_equity
    max_dd = ZERO

    for profit in profits:
        equity += profit
        if equity > peak:
            peak = equity
        drawdown = peak - equity
        if drawdown > max_dd:
            max_dd = drawdown

    return max_dd


def calculate_expectancy(
    win_count: int,
    trade_count: int,
    gross_profit: Decimal,
    gross_loss: Decimal,
    loss_count: int,
) -> Decimal:
    """Expected P/L per trade from win rate and average win/loss.

    Absent averages (no wins or no losses) contribute zero.
    """
    if trade_count == 0:
        return ZERO

    win_rate = Decimal(win_count) / Decimal(trade_count)
    loss_rate = 1 - win_rate
    avg_win = gross_profit / win_count if win_count else ZERO
    avg_loss = gross_loss / loss_count if loss_count else ZERO
    return win_rate * avg_win - loss_rate * abs(avg_loss)


# =============================================================================
# Summary
# =============================================================================

def compute_summary(
    trades: Sequence[Trade],
    date_range: DateRange | None = None,
    *,
    now: datetime | None = None,
    starting_equity: Decimal = STARTING_EQUITY,
    risk_per_open_trade: Decimal = RISK_PER_OPEN_TRADE,
    overtrade_threshold: int = OVERTRADE_THRESHOLD,
) -> AnalyticsSummary:
    """Compute the account summary from a trade snapshot.

    Args:
        trades: All trades of an account (open and closed, any order)
        date_range: Optional bounds applied to closed trades
        now: Reference clock for "today" (defaults to the current time)
        starting_equity: Equity before the first trade
        risk_per_open_trade: Risk percent attributed to each open trade
        overtrade_threshold: Trades closed today above which to warn

    Returns:
        AnalyticsSummary; every ratio falls back to 0 or None on empty input
    """
    now = resolve_now(now, trades)
    closed = sort_chronological(in_range(closed_trades(trades), date_range))
    trade_count = len(closed)

    profits = [t.profit for t in closed if t.profit is not None]
    wins = [p for p in profits if p > 0]
    losses = [p for p in profits if p < 0]

    pnl_raw = decimal_sum(profits)
    gross_profit = decimal_sum(wins)
    gross_loss = abs(decimal_sum(losses))

    win_rate = len(wins) / trade_count if trade_count else 0.0

    avg_win = gross_profit / len(wins) if wins else None
    avg_loss = gross_loss / len(losses) if losses else None
    avg_rr = None
    if avg_loss is not None and avg_loss != 0:
        avg_rr = safe_ratio(abs(avg_win or ZERO), abs(avg_loss))

    expectancy = calculate_expectancy(
        len(wins), trade_count, gross_profit, gross_loss, len(losses)
    )

    # Drawdown and streaks need the oldest-first walk
    max_dd = calculate_max_drawdown(profits, starting_equity)
    streak = current_losing_run(profits)
    max_streak = longest_losing_run(profits)

    today = now.date()
    today_trades = [t for t in closed if t.close_time.date() == today]
    daily_pnl = decimal_sum(t.profit_or_zero for t in today_trades)

    still_open = open_trades(trades)
    floating = decimal_sum(t.profit_or_zero for t in still_open)
    current_risk = Decimal(len(still_open)) * risk_per_open_trade

    return AnalyticsSummary(
        pnl_total=round_money(pnl_raw),
        win_rate=win_rate,
        max_drawdown=round_money(max_dd),
        trade_count=trade_count,
        equity=round_money(starting_equity + pnl_raw),
        daily_pnl=round_money(daily_pnl),
        gross_profit=round_money(gross_profit),
        gross_loss=round_money(gross_loss),
        expectancy=round_money(expectancy),
        floating_pnl=round_money(floating),
        current_risk=round_money(current_risk, 1),
        profit_factor=safe_ratio(gross_profit, gross_loss),
        avg_win=round_optional(avg_win),
        avg_loss=round_optional(avg_loss),
        avg_rr=avg_rr,
        losing_streak=streak or None,
        max_losing_streak=max_streak or None,
        overtrade_warning=True if len(today_trades) > overtrade_threshold else None,
    )
