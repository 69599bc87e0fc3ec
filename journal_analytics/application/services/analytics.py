"""Analytics Service: Account reports from a repository snapshot.

Orchestrates the analytics use cases:
1. Validate the caller's query (date range, limits)
2. Load one snapshot of the account's trades via the repository
3. Run the pure engine functions with the configured thresholds

full_report() computes all five views from a single snapshot, so
one account read serves the whole analytics screen.

Trade detail (lookup by id, note and tags) passes through to the
repository.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable

from journal_analytics.domain.filtering import in_range, resolve_now, sort_recent_first
from journal_analytics.domain.models import DateRange, Trade, TradeAnnotation, TradeQuery
from journal_analytics.domain.reports import (
    AnalyticsSummary,
    BehaviorAnalysis,
    EquitySeries,
    Insight,
    PairAnalysis,
    PnlBucket,
    PnlSeries,
    RiskAnalysis,
    TimeAnalysis,
)
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
from journal_analytics.infrastructure import AnalysisConfig, DEFAULT_CONFIG
from journal_analytics.infrastructure.repositories import (
    TradeRepository,
    validate_date_range,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AccountAnalyticsReport:
    """All analytics views for one account, from one snapshot."""
    account_id: str
    generated_at: datetime
    date_range: DateRange | None
    summary: AnalyticsSummary
    time_analysis: TimeAnalysis
    pair_analysis: PairAnalysis
    behavior_analysis: BehaviorAnalysis
    risk_analysis: RiskAnalysis

    def to_dict(self) -> dict:
        return {
            "account_id": self.account_id,
            "generated_at": self.generated_at.isoformat(),
            "date_range": None if self.date_range is None else {
                "start": self.date_range.start.isoformat() if self.date_range.start else None,
                "end": self.date_range.end.isoformat() if self.date_range.end else None,
            },
            "summary": self.summary.to_dict(),
            "time_analysis": self.time_analysis.to_dict(),
            "pair_analysis": self.pair_analysis.to_dict(),
            "behavior_analysis": self.behavior_analysis.to_dict(),
            "risk_analysis": self.risk_analysis.to_dict(),
        }


class AnalyticsService:
    """Service computing analytics views for trading accounts.

    Example:
        >>> service = AnalyticsService(FileTradeRepository(paths))
        >>> summary = service.summary("acc-001")
        >>> report = service.full_report("acc-001")
        >>> report.pair_analysis.top_pairs[0].symbol
        'XAUUSD'
    """

    def __init__(
        self,
        repository: TradeRepository,
        config: AnalysisConfig | None = None,
    ):
        """Initialize the service.

        Args:
            repository: Source of account trades
            config: Engine thresholds (uses defaults if not provided)
        """
        self._repo = repository
        self._config = config or DEFAULT_CONFIG

    @property
    def config(self) -> AnalysisConfig:
        return self._config

    # --- Snapshot ---

    def snapshot(self, account_id: str) -> list[Trade]:
        """Load an account's trades, capped to the most recent snapshot_limit."""
        trades = self._repo.get_account_trades(account_id)
        if len(trades) > self._config.snapshot_limit:
            logger.warning(
                "Account %s has %d trades; analysing the latest %d",
                account_id, len(trades), self._config.snapshot_limit,
            )
            trades = sort_recent_first(trades)[: self._config.snapshot_limit]
        return trades

    # --- Trade list ---

    def list_trades(self, account_id: str, query: TradeQuery | None = None) -> list[Trade]:
        """Filtered trade list, newest first."""
        query = query or TradeQuery(limit=self._config.default_trade_limit)
        return self._repo.list_trades(account_id, query)

    # --- Trade detail ---

    def trade(self, trade_id: str) -> Trade:
        """Look a trade up by id across accounts."""
        return self._repo.get_trade(trade_id)

    def annotation(self, trade_id: str) -> TradeAnnotation:
        return self._repo.get_annotation(trade_id)

    def annotate(
        self,
        trade_id: str,
        note_text: str | None = None,
        tags: Iterable[str] | None = None,
    ) -> TradeAnnotation:
        """Update a trade's note and tags.

        An argument left as None keeps the stored value.
        """
        current = self._repo.get_annotation(trade_id)
        return self._repo.update_annotation(
            trade_id,
            current.note_text if note_text is None else note_text,
            current.tags if tags is None else tags,
        )

    # --- Individual views ---

    def summary(
        self,
        account_id: str,
        date_range: DateRange | None = None,
        now: datetime | None = None,
    ) -> AnalyticsSummary:
        validate_date_range(date_range)
        return self._summary(self.snapshot(account_id), date_range, now)

    def time_analysis(self, account_id: str) -> TimeAnalysis:
        return compute_time_analysis(self.snapshot(account_id))

    def pair_analysis(self, account_id: str) -> PairAnalysis:
        return self._pairs(self.snapshot(account_id))

    def behavior_analysis(self, account_id: str, now: datetime | None = None) -> BehaviorAnalysis:
        return self._behavior(self.snapshot(account_id), now)

    def risk_analysis(self, account_id: str) -> RiskAnalysis:
        return self._risk(self.snapshot(account_id))

    def pnl_series(
        self,
        account_id: str,
        bucket: PnlBucket = "daily",
        date_range: DateRange | None = None,
    ) -> PnlSeries:
        validate_date_range(date_range)
        return compute_pnl_series(self.snapshot(account_id), bucket, date_range)

    def equity_series(
        self,
        account_id: str,
        date_range: DateRange | None = None,
    ) -> EquitySeries:
        validate_date_range(date_range)
        return compute_equity_series(
            self.snapshot(account_id),
            date_range,
            starting_equity=self._config.starting_equity,
        )

    def insights(self, account_id: str) -> tuple[Insight, ...]:
        return generate_insights(self.snapshot(account_id))

    # --- Full report ---

    def full_report(
        self,
        account_id: str,
        date_range: DateRange | None = None,
        now: datetime | None = None,
    ) -> AccountAnalyticsReport:
        """Compute every view from a single snapshot.

        The summary applies date_range to closed trades itself; the other
        views receive the snapshot pre-filtered to the range.
        """
        validate_date_range(date_range)
        trades = self.snapshot(account_id)
        now = resolve_now(now, trades)
        scoped = in_range(trades, date_range)

        logger.info("Computing analytics for %s (%d trades)", account_id, len(trades))

        return AccountAnalyticsReport(
            account_id=account_id,
            generated_at=now,
            date_range=date_range,
            summary=self._summary(trades, date_range, now),
            time_analysis=compute_time_analysis(scoped),
            pair_analysis=self._pairs(scoped),
            behavior_analysis=self._behavior(scoped, now),
            risk_analysis=self._risk(scoped),
        )

    # --- Engine calls with configured thresholds ---

    def _summary(
        self,
        trades: list[Trade],
        date_range: DateRange | None,
        now: datetime | None,
    ) -> AnalyticsSummary:
        return compute_summary(
            trades,
            date_range,
            now=now,
            starting_equity=self._config.starting_equity,
            risk_per_open_trade=self._config.risk_per_open_trade,
            overtrade_threshold=self._config.overtrade_threshold,
        )

    def _pairs(self, trades: list[Trade]) -> PairAnalysis:
        return compute_pair_analysis(trades, report_size=self._config.pair_report_size)

    def _behavior(self, trades: list[Trade], now: datetime | None) -> BehaviorAnalysis:
        return compute_behavior_analysis(
            trades,
            now=now,
            revenge_hold_ratio=self._config.revenge_hold_ratio,
            overtrade_threshold=self._config.overtrade_threshold,
            overtrading_window=timedelta(hours=self._config.overtrading_window_hours),
        )

    def _risk(self, trades: list[Trade]) -> RiskAnalysis:
        return compute_risk_analysis(
            trades,
            starting_equity=self._config.starting_equity,
            daily_loss_limit=self._config.daily_loss_limit,
        )
