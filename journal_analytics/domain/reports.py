"""Report models: immutable projections produced by the analytics engine.

Each report is recomputed on demand from a trade snapshot and has a
to_dict() for printing and export. Optional fields distinguish
"no data" (None) from a genuine zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

InsightType = Literal["time_based", "pair_based", "behavior"]
InsightSeverity = Literal["info", "warning", "critical"]
PnlBucket = Literal["daily", "weekly"]


# =============================================================================
# Summary
# =============================================================================

@dataclass(frozen=True, slots=True)
class AnalyticsSummary:
    """Headline performance metrics for an account.

    Attributes:
        pnl_total: Realized P/L over closed trades
        win_rate: Winning closed trades / closed trades (0 when none)
        max_drawdown: Largest peak-to-trough equity decline
        trade_count: Number of closed trades
        equity: Starting equity + pnl_total
        daily_pnl: Realized P/L of trades closed today
        gross_profit: Sum of winning profits
        gross_loss: Absolute sum of losing profits
        expectancy: Expected P/L per trade
        floating_pnl: Unrealized P/L of open trades
        current_risk: Placeholder risk % from open trade count
        profit_factor: gross_profit / gross_loss (None without losses)
        avg_win: Average winning trade (None without wins)
        avg_loss: Average losing trade, positive (None without losses)
        avg_rr: avg_win / avg_loss (None without both)
        losing_streak: Current run of losses (None when 0)
        max_losing_streak: Longest run of losses (None when 0)
        overtrade_warning: True when too many trades closed today, else None
    """
    pnl_total: Decimal
    win_rate: float
    max_drawdown: Decimal
    trade_count: int
    equity: Decimal
    daily_pnl: Decimal
    gross_profit: Decimal
    gross_loss: Decimal
    expectancy: Decimal
    floating_pnl: Decimal
    current_risk: Decimal
    profit_factor: float | None = None
    avg_win: Decimal | None = None
    avg_loss: Decimal | None = None
    avg_rr: float | None = None
    losing_streak: int | None = None
    max_losing_streak: int | None = None
    overtrade_warning: bool | None = None

    @property
    def loss_rate(self) -> float:
        return 1.0 - self.win_rate if self.trade_count else 0.0

    def to_dict(self) -> dict:
        return {
            "pnl_total": self.pnl_total,
            "win_rate": self.win_rate,
            "max_drawdown": self.max_drawdown,
            "trade_count": self.trade_count,
            "equity": self.equity,
            "daily_pnl": self.daily_pnl,
            "gross_profit": self.gross_profit,
            "gross_loss": self.gross_loss,
            "expectancy": self.expectancy,
            "floating_pnl": self.floating_pnl,
            "current_risk": self.current_risk,
            "profit_factor": self.profit_factor,
            "avg_win": self.avg_win,
            "avg_loss": self.avg_loss,
            "avg_rr": self.avg_rr,
            "losing_streak": self.losing_streak,
            "max_losing_streak": self.max_losing_streak,
            "overtrade_warning": self.overtrade_warning,
        }


# =============================================================================
# Time Analysis
# =============================================================================

@dataclass(frozen=True, slots=True)
class HourlyPnL:
    """Aggregate for trades closed in one hour of the day (0-23)."""
    hour: int
    pnl: Decimal
    trade_count: int
    win_rate: float

    def to_dict(self) -> dict:
        return {
            "hour": self.hour,
            "pnl": self.pnl,
            "trade_count": self.trade_count,
            "win_rate": self.win_rate,
        }


@dataclass(frozen=True, slots=True)
class DayOfWeekPnL:
    """Aggregate for one ISO weekday (Monday=1 ... Sunday=7)."""
    weekday: int
    name: str
    pnl: Decimal
    trade_count: int
    win_rate: float

    def to_dict(self) -> dict:
        return {
            "weekday": self.weekday,
            "name": self.name,
            "pnl": self.pnl,
            "trade_count": self.trade_count,
            "win_rate": self.win_rate,
        }


@dataclass(frozen=True, slots=True)
class SessionStat:
    pnl: Decimal
    trade_count: int
    win_rate: float

    def to_dict(self) -> dict:
        return {
            "pnl": self.pnl,
            "trade_count": self.trade_count,
            "win_rate": self.win_rate,
        }


@dataclass(frozen=True, slots=True)
class SessionStats:
    """Performance per trading session, keyed by close hour.

    Sessions: Asia [0, 8), London [8, 16), New York [16, 24).
    """
    asia: SessionStat
    london: SessionStat
    new_york: SessionStat

    def to_dict(self) -> dict:
        return {
            "asia": self.asia.to_dict(),
            "london": self.london.to_dict(),
            "new_york": self.new_york.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class TimeAnalysis:
    hourly_pnl: tuple[HourlyPnL, ...]
    day_of_week_pnl: tuple[DayOfWeekPnL, ...]
    session_stats: SessionStats
    best_hour: int | None = None
    worst_hour: int | None = None

    def to_dict(self) -> dict:
        return {
            "hourly_pnl": [h.to_dict() for h in self.hourly_pnl],
            "day_of_week_pnl": [d.to_dict() for d in self.day_of_week_pnl],
            "session_stats": self.session_stats.to_dict(),
            "best_hour": self.best_hour,
            "worst_hour": self.worst_hour,
        }


# =============================================================================
# Pair Analysis
# =============================================================================

@dataclass(frozen=True, slots=True)
class PairPerformance:
    """Performance of a single instrument.

    Attributes:
        symbol: Instrument code (upper-cased)
        pnl: Realized P/L
        trade_count: Closed trades on the symbol
        win_rate: Winning share of trade_count
        avg_win: Mean winning profit (0 when none)
        avg_loss: Mean absolute losing profit (0 when none)
    """
    symbol: str
    pnl: Decimal
    trade_count: int
    win_rate: float
    avg_win: Decimal
    avg_loss: Decimal

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "pnl": self.pnl,
            "trade_count": self.trade_count,
            "win_rate": self.win_rate,
            "avg_win": self.avg_win,
            "avg_loss": self.avg_loss,
        }


@dataclass(frozen=True, slots=True)
class PairAnalysis:
    pairs: tuple[PairPerformance, ...]
    top_pairs: tuple[PairPerformance, ...]
    worst_pairs: tuple[PairPerformance, ...]

    def to_dict(self) -> dict:
        return {
            "pairs": [p.to_dict() for p in self.pairs],
            "top_pairs": [p.to_dict() for p in self.top_pairs],
            "worst_pairs": [p.to_dict() for p in self.worst_pairs],
        }


# =============================================================================
# Behavior Analysis
# =============================================================================

@dataclass(frozen=True, slots=True)
class HoldTimeStats:
    """Hold durations in seconds for winning and losing trades."""
    avg_win_hold_time: float
    median_win_hold_time: float
    win_count: int
    avg_loss_hold_time: float
    median_loss_hold_time: float
    loss_count: int

    def to_dict(self) -> dict:
        return {
            "avg_win_hold_time": self.avg_win_hold_time,
            "median_win_hold_time": self.median_win_hold_time,
            "win_count": self.win_count,
            "avg_loss_hold_time": self.avg_loss_hold_time,
            "median_loss_hold_time": self.median_loss_hold_time,
            "loss_count": self.loss_count,
        }


@dataclass(frozen=True, slots=True)
class BehaviorAnalysis:
    """Behavioral pattern flags.

    slippage_impact and spread_impact stay None: trade records carry
    no execution-quality data.
    """
    hold_time_stats: HoldTimeStats
    revenge_trading_detected: bool
    overtrading_detected: bool
    slippage_impact: Decimal | None = None
    spread_impact: Decimal | None = None

    def to_dict(self) -> dict:
        return {
            "hold_time_stats": self.hold_time_stats.to_dict(),
            "revenge_trading_detected": self.revenge_trading_detected,
            "overtrading_detected": self.overtrading_detected,
            "slippage_impact": self.slippage_impact,
            "spread_impact": self.spread_impact,
        }


# =============================================================================
# Risk Analysis
# =============================================================================

@dataclass(frozen=True, slots=True)
class RiskPerTrade:
    avg_risk_percent: float
    min_risk_percent: float
    max_risk_percent: float

    def to_dict(self) -> dict:
        return {
            "avg_risk_percent": self.avg_risk_percent,
            "min_risk_percent": self.min_risk_percent,
            "max_risk_percent": self.max_risk_percent,
        }


@dataclass(frozen=True, slots=True)
class PairExposure:
    symbol: str
    volume: Decimal
    exposure_percent: float

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "volume": self.volume,
            "exposure_percent": self.exposure_percent,
        }


@dataclass(frozen=True, slots=True)
class RiskAnalysis:
    """Risk metrics.

    Attributes:
        risk_per_trade: |profit| / equity-before-trade, in percent
        exposure_by_pair: Volume share per symbol, descending
        consecutive_losses: Longest run of losing trades
        daily_loss_limit_hit_rate: Share of trading days below the loss limit
    """
    risk_per_trade: RiskPerTrade
    exposure_by_pair: tuple[PairExposure, ...]
    consecutive_losses: int
    daily_loss_limit_hit_rate: float

    def to_dict(self) -> dict:
        return {
            "risk_per_trade": self.risk_per_trade.to_dict(),
            "exposure_by_pair": [e.to_dict() for e in self.exposure_by_pair],
            "consecutive_losses": self.consecutive_losses,
            "daily_loss_limit_hit_rate": self.daily_loss_limit_hit_rate,
        }


# =============================================================================
# Series
# =============================================================================

@dataclass(frozen=True, slots=True)
class PnlPoint:
    day_iso: str
    pnl: Decimal


@dataclass(frozen=True, slots=True)
class PnlSeries:
    bucket: PnlBucket
    points: tuple[PnlPoint, ...]

    def to_dict(self) -> dict:
        return {
            "bucket": self.bucket,
            "points": [{"day": p.day_iso, "pnl": p.pnl} for p in self.points],
        }


@dataclass(frozen=True, slots=True)
class EquityPoint:
    day_iso: str
    equity: Decimal


@dataclass(frozen=True, slots=True)
class EquitySeries:
    points: tuple[EquityPoint, ...]

    def to_dict(self) -> dict:
        return {
            "points": [{"day": p.day_iso, "equity": p.equity} for p in self.points],
        }


# =============================================================================
# Insights
# =============================================================================

@dataclass(frozen=True, slots=True)
class Insight:
    type: InsightType
    title: str
    message: str
    severity: InsightSeverity

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "title": self.title,
            "message": self.message,
            "severity": self.severity,
        }
