"""Domain Layer: Core business logic and entities.

This layer contains:
- models.py: Trade, DateRange, TradeQuery, TradeAnnotation
- reports.py: Immutable analytics report structures
- filtering.py: Trade selection and ordering
- money.py: Decimal rounding helpers
- metrics/: Summary, time, pair, behavior and risk calculations

Nothing in this layer performs I/O.
"""

from journal_analytics.domain.models import (
    Trade,
    TradeSide,
    TradeOutcome,
    DateRange,
    TradeQuery,
    TradeAnnotation,
    clean_tags,
)
from journal_analytics.domain.reports import (
    AnalyticsSummary,
    TimeAnalysis,
    PairAnalysis,
    BehaviorAnalysis,
    RiskAnalysis,
    PnlSeries,
    EquitySeries,
    Insight,
)
from journal_analytics.domain.filtering import filter_trades
from journal_analytics.domain.metrics import (
    compute_summary,
    compute_time_analysis,
    compute_pair_analysis,
    compute_behavior_analysis,
    compute_risk_analysis,
    compute_pnl_series,
    compute_equity_series,
    generate_insights,
)

__all__ = [
    # Models
    "Trade",
    "TradeSide",
    "TradeOutcome",
    "DateRange",
    "TradeQuery",
    "TradeAnnotation",
    "clean_tags",
    # Reports
    "AnalyticsSummary",
    "TimeAnalysis",
    "PairAnalysis",
    "BehaviorAnalysis",
    "RiskAnalysis",
    "PnlSeries",
    "EquitySeries",
    "Insight",
    # Selection
    "filter_trades",
    # Metrics
    "compute_summary",
    "compute_time_analysis",
    "compute_pair_analysis",
    "compute_behavior_analysis",
    "compute_risk_analysis",
    "compute_pnl_series",
    "compute_equity_series",
    "generate_insights",
]
