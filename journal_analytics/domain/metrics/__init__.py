"""Trading journal metrics.

This package turns a trade snapshot into the analytics views:

- Summary: P/L, win rate, drawdown, expectancy, streaks
- Time: P/L by hour, weekday and session
- Pairs: per-instrument ranking
- Behavior: hold times, revenge trading, overtrading
- Risk: per-trade risk, exposure, loss runs, loss-limit days
- Series / Insights: chart series and rule-based observations

Usage:
    from journal_analytics.domain.metrics import (
        compute_summary,
        compute_time_analysis,
        compute_pair_analysis,
    )
"""

# Streaks
from journal_analytics.domain.metrics.streaks import (
    longest_losing_run,
    current_losing_run,
)

# Summary
from journal_analytics.domain.metrics.summary import (
    STARTING_EQUITY,
    calculate_max_drawdown,
    calculate_expectancy,
    compute_summary,
)

# Time
from journal_analytics.domain.metrics.time_analysis import (
    SESSIONS,
    DAY_NAMES,
    session_for_hour,
    compute_time_analysis,
)

# Pairs
from journal_analytics.domain.metrics.pair_analysis import (
    calculate_pair_performance,
    compute_pair_analysis,
)

# Behavior
from journal_analytics.domain.metrics.behavior import (
    index_median,
    calculate_hold_time_stats,
    is_revenge_trading,
    count_recent_trades,
    compute_behavior_analysis,
)

# Risk
from journal_analytics.domain.metrics.risk import (
    calculate_risk_per_trade,
    calculate_exposure,
    daily_realized_pnl,
    calculate_loss_limit_hit_rate,
    compute_risk_analysis,
)

# Series / Insights
from journal_analytics.domain.metrics.series import (
    compute_pnl_series,
    compute_equity_series,
)
from journal_analytics.domain.metrics.insights import generate_insights

__all__ = [
    # Streaks
    "longest_losing_run",
    "current_losing_run",
    # Summary
    "STARTING_EQUITY",
    "calculate_max_drawdown",
    "calculate_expectancy",
    "compute_summary",
    # Time
    "SESSIONS",
    "DAY_NAMES",
    "session_for_hour",
    "compute_time_analysis",
    # Pairs
    "calculate_pair_performance",
    "compute_pair_analysis",
    # Behavior
    "index_median",
    "calculate_hold_time_stats",
    "is_revenge_trading",
    "count_recent_trades",
    "compute_behavior_analysis",
    # Risk
    "calculate_risk_per_trade",
    "calculate_exposure",
    "daily_realized_pnl",
    "calculate_loss_limit_hit_rate",
    "compute_risk_analysis",
    # Series / Insights
    "compute_pnl_series",
    "compute_equity_series",
    "generate_insights",
]
