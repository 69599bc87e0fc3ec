"""Unit tests for application/services/ module.

Tests verify:
1. AnalyticsService passes configuration through to the engine
2. full_report computes every view from one snapshot
3. Query validation happens before the engine is reached
4. ReportExporter writes CSV / Parquet / Excel outputs
"""

from dataclasses import replace
from datetime import timedelta
from decimal import Decimal

import polars as pl
import pytest

from journal_analytics.application import (
    AccountAnalyticsReport,
    AnalyticsService,
    ReportExporter,
)
from journal_analytics.application.services import report_tables
from journal_analytics.application.services.export import trades_sheet_frame
from journal_analytics.domain.models import DateRange, TradeQuery
from journal_analytics.infrastructure import (
    AnalysisConfig,
    ExportConfig,
    InMemoryTradeRepository,
    InvalidQueryError,
    TradeNotFoundError,
)


class CountingRepository(InMemoryTradeRepository):
    """In-memory repository that counts account loads."""

    def __init__(self, trades):
        super().__init__(trades)
        self.loads = 0

    def get_account_trades(self, account_id):
        self.loads += 1
        return super().get_account_trades(account_id)


@pytest.fixture
def journal(make_trade, base_time):
    """A small account: three closed trades and one open trade."""
    return [
        make_trade("62.30", symbol="XAUUSD", open_time=base_time),
        make_trade("-56.00", symbol="EURUSD", open_time=base_time + timedelta(hours=1)),
        make_trade("30.00", symbol="XAUUSD", open_time=base_time + timedelta(days=1)),
        make_trade("4.00", symbol="GBPUSD", open_time=base_time + timedelta(days=1), closed=False),
    ]


@pytest.fixture
def service(journal):
    return AnalyticsService(InMemoryTradeRepository(journal))


# =============================================================================
# AnalyticsService Tests
# =============================================================================

class TestAnalyticsService:
    """Tests for AnalyticsService."""

    def test_summary(self, service, base_time):
        summary = service.summary("acc-001", now=base_time + timedelta(days=1, hours=3))
        assert summary.pnl_total == Decimal("36.30")
        assert summary.max_drawdown == Decimal("56.00")
        assert summary.floating_pnl == Decimal("4.00")
        assert summary.daily_pnl == Decimal("30.00")

    def test_summary_rejects_inverted_range(self, service, base_time):
        inverted = DateRange(start=base_time, end=base_time - timedelta(hours=1))
        with pytest.raises(InvalidQueryError):
            service.summary("acc-001", inverted)

    def test_config_is_passed_to_engine(self, journal, base_time):
        config = replace(AnalysisConfig(), starting_equity=Decimal("1000"), pair_report_size=1)
        service = AnalyticsService(InMemoryTradeRepository(journal), config)

        assert service.summary("acc-001", now=base_time).equity == Decimal("1036.30")
        pairs = service.pair_analysis("acc-001")
        assert [p.symbol for p in pairs.top_pairs] == ["XAUUSD"]
        assert [p.symbol for p in pairs.worst_pairs] == ["EURUSD"]

    def test_views(self, service, base_time):
        assert service.time_analysis("acc-001").best_hour == 10
        assert service.risk_analysis("acc-001").consecutive_losses == 1
        behavior = service.behavior_analysis("acc-001", now=base_time)
        assert behavior.hold_time_stats.win_count == 2
        assert len(service.insights("acc-001")) == 2

    def test_series(self, service):
        pnl = service.pnl_series("acc-001")
        assert [p.pnl for p in pnl.points] == [Decimal("6.30"), Decimal("30.00")]
        equity = service.equity_series("acc-001")
        assert equity.points[-1].equity == Decimal("10036.30")

    def test_list_trades(self, service):
        trades = service.list_trades("acc-001", TradeQuery(symbol="xau"))
        assert [t.symbol for t in trades] == ["XAUUSD", "XAUUSD"]
        assert trades[0].profit == Decimal("30.00")
        assert len(service.list_trades("acc-001")) == 4

    def test_snapshot_limit_keeps_latest(self, journal):
        config = replace(AnalysisConfig(), snapshot_limit=2)
        service = AnalyticsService(InMemoryTradeRepository(journal), config)
        snapshot = service.snapshot("acc-001")
        assert {t.profit for t in snapshot} == {Decimal("30.00"), Decimal("4.00")}

    def test_trade_detail(self, service, journal):
        assert service.trade(journal[1].id) == journal[1]
        with pytest.raises(TradeNotFoundError):
            service.trade("ghost")

    def test_annotate_keeps_omitted_parts(self, service, journal):
        trade_id = journal[0].id
        service.annotate(trade_id, "Good entry point", ["trend"])

        updated = service.annotate(trade_id, tags=["scalping", " trend "])
        assert updated.note_text == "Good entry point"
        assert updated.tags == ("scalping", "trend")

        updated = service.annotate(trade_id, note_text="Held too long")
        assert updated.tags == ("scalping", "trend")
        assert service.annotation(trade_id) == updated


class TestFullReport:
    """Tests for AnalyticsService.full_report."""

    def test_single_snapshot(self, journal, base_time):
        repo = CountingRepository(journal)
        report = AnalyticsService(repo).full_report("acc-001", now=base_time + timedelta(days=2))

        assert repo.loads == 1
        assert isinstance(report, AccountAnalyticsReport)
        assert report.summary.trade_count == 3
        assert len(report.pair_analysis.pairs) == 2
        exposure = report.risk_analysis.exposure_by_pair
        assert [e.symbol for e in exposure] == ["XAUUSD", "EURUSD", "GBPUSD"]

    def test_matches_individual_views(self, service, base_time):
        now = base_time + timedelta(days=2)
        report = service.full_report("acc-001", now=now)
        assert report.summary == service.summary("acc-001", now=now)
        assert report.time_analysis == service.time_analysis("acc-001")
        assert report.pair_analysis == service.pair_analysis("acc-001")
        assert report.behavior_analysis == service.behavior_analysis("acc-001", now=now)
        assert report.risk_analysis == service.risk_analysis("acc-001")

    def test_date_range_scopes_views(self, service, base_time):
        date_range = DateRange(start=base_time + timedelta(hours=12))
        report = service.full_report("acc-001", date_range, now=base_time + timedelta(days=2))

        assert report.summary.trade_count == 1
        assert [p.symbol for p in report.pair_analysis.pairs] == ["XAUUSD"]
        # Open trade still counts toward floating P/L
        assert report.summary.floating_pnl == Decimal("4.00")

    def test_to_dict(self, service, base_time):
        d = service.full_report("acc-001", now=base_time).to_dict()
        assert d["account_id"] == "acc-001"
        assert d["date_range"] is None
        assert set(d) >= {"summary", "time_analysis", "pair_analysis",
                          "behavior_analysis", "risk_analysis"}


# =============================================================================
# ReportExporter Tests
# =============================================================================

class TestReportExporter:
    """Tests for ReportExporter."""

    @pytest.fixture
    def report(self, service, base_time):
        return service.full_report("acc-001", now=base_time + timedelta(days=2))

    def test_tables(self, report):
        tables = report_tables(report)
        assert list(tables) == ["summary", "pairs", "hourly", "weekday", "exposure"]
        assert len(tables["hourly"]) == 24
        assert len(tables["weekday"]) == 7

        summary = dict(tables["summary"].iter_rows())
        assert summary["pnl_total"] == pytest.approx(36.30)
        assert summary["overtrade_warning"] is None

    def test_save_csv_and_parquet(self, report, tmp_path):
        exporter = ReportExporter(ExportConfig(output_dir=tmp_path))
        saved = exporter.save_report(report)

        assert len(saved) == 10
        assert all(p.exists() for p in saved)
        pairs = pl.read_parquet(tmp_path / "acc-001_pairs.parquet")
        assert pairs["symbol"].to_list() == ["XAUUSD", "EURUSD"]
        assert pairs["pnl"].to_list() == pytest.approx([92.30, -56.00])

    def test_save_xlsx(self, report, tmp_path):
        exporter = ReportExporter(ExportConfig(output_dir=tmp_path))
        saved = exporter.save_report(report, "journal", formats=("xlsx",))
        assert saved == [tmp_path / "journal.xlsx"]
        assert saved[0].stat().st_size > 0

    def test_save_trades(self, service, tmp_path):
        exporter = ReportExporter(ExportConfig(output_dir=tmp_path, output_formats=("csv",)))
        (path,) = exporter.save_trades(service.list_trades("acc-001"))
        df = pl.read_csv(path, infer_schema_length=0)
        assert len(df) == 4
        assert df["profit"].to_list()[0] == "30.00"

    def test_unknown_format(self, report, tmp_path):
        exporter = ReportExporter(ExportConfig(output_dir=tmp_path))
        with pytest.raises(ValueError, match="Unknown format: json"):
            exporter.save_report(report, formats=("json",))

    def test_trades_sheet_is_numeric(self, journal):
        """Workbook trade sheets carry numbers, not text, in decimal columns."""
        df = trades_sheet_frame(journal)
        assert df["profit"].dtype == pl.Float64
        assert df["volume"].dtype == pl.Float64
        assert df["commission"].dtype == pl.Float64
        assert df["profit"].to_list() == pytest.approx([62.30, -56.00, 30.00, 4.00])
        assert df["open_time"].dtype == pl.Utf8

    def test_save_trades_xlsx(self, service, tmp_path):
        exporter = ReportExporter(ExportConfig(output_dir=tmp_path))
        (path,) = exporter.save_trades(service.list_trades("acc-001"), formats=("xlsx",))
        assert path == tmp_path / "trades.xlsx"
        assert path.stat().st_size > 0
