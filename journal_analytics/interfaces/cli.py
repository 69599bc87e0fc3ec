"""Command Line Interface for Journal Analytics.

Provides CLI access to analytics functions:
- summary / time / pairs / behavior / risk: Analytics views
- series: Daily or weekly P/L and equity curve
- trades: Filtered trade list
- trade / annotate: Trade detail with its note and tags
- insights: Rule-based observations
- export: Write a full report to CSV / Parquet / Excel
- seed: Generate a reproducible demo account
- accounts: List accounts with trade files

Usage:
    python -m journal_analytics summary ACCOUNT [--from DATE] [--to DATE]
    python -m journal_analytics trades ACCOUNT --symbol XAU --outcome loss
    python -m journal_analytics annotate TRADE_ID --note "Late entry" --tag fomo
    python -m journal_analytics export ACCOUNT -f csv,xlsx -o reports
    python -m journal_analytics seed demo --seed 7
"""

import argparse
import json
import logging
import sys
from datetime import datetime, time, timezone
from pathlib import Path

from journal_analytics import __version__
from journal_analytics.domain.models import DateRange, TradeQuery, TRADE_OUTCOMES
from journal_analytics.domain.money import decimal_sum, round_money
from journal_analytics.infrastructure import (
    DataPaths,
    ExportConfig,
    FileTradeRepository,
    FixtureConfig,
    RepositoryError,
    generate_trades,
)
from journal_analytics.application import AnalyticsService, ReportExporter

logger = logging.getLogger(__name__)


# =============================================================================
# Argument helpers
# =============================================================================

def _parse_time(value: str, end_of_day: bool = False) -> datetime:
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date: {value}")
    # A bare date on --to covers the whole day
    if end_of_day and len(value) == 10:
        parsed = datetime.combine(parsed.date(), time.max)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_start(value: str) -> datetime:
    return _parse_time(value)


def _parse_end(value: str) -> datetime:
    return _parse_time(value, end_of_day=True)


def _date_range(args: argparse.Namespace) -> DateRange | None:
    start = getattr(args, "start", None)
    end = getattr(args, "end", None)
    if start is None and end is None:
        return None
    return DateRange(start=start, end=end)


def _service(args: argparse.Namespace) -> AnalyticsService:
    return AnalyticsService(FileTradeRepository(DataPaths(root=Path(args.root))))


def _print_json(payload) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _pct(value: float | None) -> str:
    return "-" if value is None else f"{value * 100:.1f}%"


def _opt(value) -> str:
    return "-" if value is None else str(value)


def _hours(seconds: float) -> str:
    return f"{seconds / 3600:.2f}h"


# =============================================================================
# Commands
# =============================================================================

def cmd_summary(args: argparse.Namespace) -> int:
    """Show headline metrics."""
    summary = _service(args).summary(args.account, _date_range(args))

    if args.json:
        _print_json(summary.to_dict())
        return 0

    print(f"Summary: {args.account}")
    print("=" * 50)
    print(f"  Total P/L:        {summary.pnl_total:+}")
    print(f"  Equity:           {summary.equity}")
    print(f"  Today's P/L:      {summary.daily_pnl:+}")
    print(f"  Closed trades:    {summary.trade_count:,}")
    print(f"  Win rate:         {_pct(summary.win_rate)}")
    print(f"  Max drawdown:     {summary.max_drawdown}")
    print(f"  Gross profit:     {summary.gross_profit}")
    print(f"  Gross loss:       {summary.gross_loss}")
    print(f"  Profit factor:    {_opt(summary.profit_factor)}")
    print(f"  Expectancy:       {summary.expectancy}")
    print(f"  Avg win / loss:   {_opt(summary.avg_win)} / {_opt(summary.avg_loss)}")
    print(f"  Avg R:R:          {_opt(summary.avg_rr)}")
    print(f"  Losing streak:    {_opt(summary.losing_streak)} "
          f"(max {_opt(summary.max_losing_streak)})")
    print(f"  Floating P/L:     {summary.floating_pnl:+}")
    print(f"  Current risk:     {summary.current_risk}%")
    if summary.overtrade_warning:
        print()
        print("  Warning: trade count today is above the overtrading threshold")

    return 0


def cmd_time(args: argparse.Namespace) -> int:
    """Show P/L by hour, weekday and session."""
    analysis = _service(args).time_analysis(args.account)

    if args.json:
        _print_json(analysis.to_dict())
        return 0

    print(f"Time Analysis: {args.account}")
    print("=" * 50)
    print(f"{'Hour':<6} {'Trades':>7} {'P/L':>12} {'Win rate':>9}")
    print("-" * 50)
    for row in analysis.hourly_pnl:
        if row.trade_count:
            print(f"{row.hour:02d}:00  {row.trade_count:>7} {row.pnl:>12} "
                  f"{_pct(row.win_rate):>9}")
    print(f"Best hour: {_opt(analysis.best_hour)}  Worst hour: {_opt(analysis.worst_hour)}")

    print()
    print(f"{'Day':<10} {'Trades':>7} {'P/L':>12} {'Win rate':>9}")
    print("-" * 50)
    for row in analysis.day_of_week_pnl:
        print(f"{row.name:<10} {row.trade_count:>7} {row.pnl:>12} {_pct(row.win_rate):>9}")

    print()
    print("Sessions")
    print("-" * 50)
    sessions = analysis.session_stats
    for name, stat in (("Asia", sessions.asia), ("London", sessions.london),
                       ("New York", sessions.new_york)):
        print(f"{name:<10} {stat.trade_count:>7} {stat.pnl:>12} {_pct(stat.win_rate):>9}")

    return 0


def cmd_pairs(args: argparse.Namespace) -> int:
    """Show per-symbol ranking."""
    analysis = _service(args).pair_analysis(args.account)

    if args.json:
        _print_json(analysis.to_dict())
        return 0

    print(f"Pair Analysis: {args.account}")
    print("=" * 60)
    print(f"{'Symbol':<10} {'Trades':>7} {'P/L':>12} {'Win rate':>9} "
          f"{'Avg win':>10} {'Avg loss':>10}")
    print("-" * 60)
    for pair in analysis.pairs:
        print(f"{pair.symbol:<10} {pair.trade_count:>7} {pair.pnl:>12} "
              f"{_pct(pair.win_rate):>9} {pair.avg_win:>10} {pair.avg_loss:>10}")

    print()
    print("Top: " + ", ".join(p.symbol for p in analysis.top_pairs))
    print("Worst: " + ", ".join(p.symbol for p in analysis.worst_pairs))
    return 0


def cmd_behavior(args: argparse.Namespace) -> int:
    """Show hold times and behavior flags."""
    analysis = _service(args).behavior_analysis(args.account)

    if args.json:
        _print_json(analysis.to_dict())
        return 0

    stats = analysis.hold_time_stats
    print(f"Behavior Analysis: {args.account}")
    print("=" * 50)
    print(f"  Winning holds:  avg {_hours(stats.avg_win_hold_time)}, "
          f"median {_hours(stats.median_win_hold_time)} ({stats.win_count} trades)")
    print(f"  Losing holds:   avg {_hours(stats.avg_loss_hold_time)}, "
          f"median {_hours(stats.median_loss_hold_time)} ({stats.loss_count} trades)")
    print(f"  Revenge trading: {'yes' if analysis.revenge_trading_detected else 'no'}")
    print(f"  Overtrading:     {'yes' if analysis.overtrading_detected else 'no'}")
    return 0


def cmd_risk(args: argparse.Namespace) -> int:
    """Show risk per trade and exposure."""
    analysis = _service(args).risk_analysis(args.account)

    if args.json:
        _print_json(analysis.to_dict())
        return 0

    risk = analysis.risk_per_trade
    print(f"Risk Analysis: {args.account}")
    print("=" * 50)
    print(f"  Risk per trade:  avg {risk.avg_risk_percent:.2f}%, "
          f"min {risk.min_risk_percent:.2f}%, max {risk.max_risk_percent:.2f}%")
    print(f"  Longest losing run: {analysis.consecutive_losses}")
    print(f"  Loss-limit days:    {_pct(analysis.daily_loss_limit_hit_rate)}")

    print()
    print(f"{'Symbol':<10} {'Volume':>10} {'Exposure':>9}")
    print("-" * 50)
    for exposure in analysis.exposure_by_pair:
        print(f"{exposure.symbol:<10} {exposure.volume:>10} "
              f"{exposure.exposure_percent:>8.1f}%")
    return 0


def cmd_series(args: argparse.Namespace) -> int:
    """Show the P/L or equity series."""
    service = _service(args)
    date_range = _date_range(args)

    if args.equity:
        series = service.equity_series(args.account, date_range)
        rows = [(p.day_iso, p.equity) for p in series.points]
    else:
        series = service.pnl_series(args.account, args.bucket, date_range)
        rows = [(p.day_iso, p.pnl) for p in series.points]

    if args.json:
        _print_json(series.to_dict())
        return 0

    for day, value in rows:
        print(f"{day}  {value:>12}")
    return 0


def cmd_trades(args: argparse.Namespace) -> int:
    """List trades, newest first."""
    query = TradeQuery(
        date_range=_date_range(args),
        symbol=args.symbol,
        outcome=args.outcome,
        limit=args.limit,
    )
    trades = _service(args).list_trades(args.account, query)

    if args.json:
        _print_json([t.to_dict() for t in trades])
        return 0

    print(f"{'Opened':<20} {'Symbol':<8} {'Side':<5} {'Volume':>8} {'Profit':>10} {'Status':<6}")
    print("-" * 64)
    for trade in trades:
        profit = "-" if trade.profit is None else f"{trade.profit:+}"
        volume = "-" if trade.volume is None else str(trade.volume)
        status = "open" if trade.is_open else "closed"
        print(f"{trade.open_time:%Y-%m-%d %H:%M}     {trade.symbol:<8} {trade.side:<5} "
              f"{volume:>8} {profit:>10} {status:<6}")
    print(f"{len(trades)} trades")
    return 0


def _print_annotation(annotation) -> None:
    print(f"  Note:           {annotation.note_text or '-'}")
    print(f"  Tags:           {', '.join(annotation.tags) or '-'}")


def cmd_trade(args: argparse.Namespace) -> int:
    """Show one trade with its annotation."""
    service = _service(args)
    trade = service.trade(args.trade_id)
    annotation = service.annotation(args.trade_id)

    if args.json:
        _print_json({**trade.to_dict(), "annotation": annotation.to_dict()})
        return 0

    print(f"Trade: {trade.id} ({trade.account_id})")
    print("=" * 50)
    print(f"  Symbol / side:  {trade.symbol} {trade.side}")
    print(f"  Opened:         {trade.open_time:%Y-%m-%d %H:%M}")
    closed = "-" if trade.close_time is None else f"{trade.close_time:%Y-%m-%d %H:%M}"
    print(f"  Closed:         {closed}")
    print(f"  Volume:         {_opt(trade.volume)}")
    print(f"  Open / close:   {_opt(trade.open_price)} / {_opt(trade.close_price)}")
    print(f"  SL / TP:        {_opt(trade.sl)} / {_opt(trade.tp)}")
    print(f"  Commission:     {_opt(trade.commission)}")
    print(f"  Swap:           {_opt(trade.swap)}")
    print(f"  Profit:         {_opt(trade.profit)}")
    _print_annotation(annotation)
    return 0


def cmd_annotate(args: argparse.Namespace) -> int:
    """Set a trade's note and tags."""
    tags = [] if args.clear_tags else args.tags
    annotation = _service(args).annotate(args.trade_id, args.note, tags)

    if args.json:
        _print_json(annotation.to_dict())
        return 0

    print(f"Annotated {args.trade_id}")
    _print_annotation(annotation)
    return 0


def cmd_insights(args: argparse.Namespace) -> int:
    """Show rule-based insights."""
    insights = _service(args).insights(args.account)

    if args.json:
        _print_json([i.to_dict() for i in insights])
        return 0

    if not insights:
        print("No insights yet")
        return 0

    for insight in insights:
        print(f"[{insight.severity}] {insight.title}: {insight.message}")
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    """Export a full report (and optionally the trade list)."""
    service = _service(args)
    report = service.full_report(args.account, _date_range(args))

    output_dir = Path(args.output) if args.output else DataPaths(root=Path(args.root)).reports_dir
    exporter = ReportExporter(ExportConfig(
        output_dir=output_dir,
        output_formats=tuple(args.formats.split(",")),
    ))

    saved = exporter.save_report(report)
    if args.trades:
        trades = service.list_trades(
            args.account, TradeQuery(limit=service.config.snapshot_limit)
        )
        saved += exporter.save_trades(trades, f"{args.account}_trades")

    for path in saved:
        print(f"Saved: {path}")
    return 0


def cmd_seed(args: argparse.Namespace) -> int:
    """Write a generated demo account."""
    now = datetime.now(timezone.utc).replace(minute=0, second=0, microsecond=0)
    trades = generate_trades(
        args.account,
        seed=args.seed,
        now=now,
        config=FixtureConfig(days=args.days),
    )

    repo = FileTradeRepository(DataPaths(root=Path(args.root)))
    path = repo.save_trades(args.account, trades, fmt=args.format)

    pnl = round_money(decimal_sum(t.profit_or_zero for t in trades if t.is_closed))
    print(f"Seeded {len(trades)} trades for {args.account} (realized P/L {pnl:+})")
    print(f"Saved: {path}")
    return 0


def cmd_accounts(args: argparse.Namespace) -> int:
    """List accounts with trade files."""
    paths = DataPaths(root=Path(args.root))
    accounts = FileTradeRepository(paths).list_accounts()

    if not accounts:
        print(f"No accounts under {paths.trades_dir}")
        return 0

    for account in accounts:
        print(account)
    return 0


# =============================================================================
# Parser
# =============================================================================

def _add_account(parser: argparse.ArgumentParser, json_output: bool = True) -> None:
    parser.add_argument("account", help="Account id (e.g., acc-001)")
    if json_output:
        parser.add_argument("--json", action="store_true", help="Print JSON")


def _add_range(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--from", dest="start", type=_parse_start,
                        help="Start date/time (ISO, inclusive)")
    parser.add_argument("--to", dest="end", type=_parse_end,
                        help="End date/time (ISO, inclusive)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="journal_analytics",
        description="Journal Analytics - Trading Journal Performance Analysis",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--root",
        default=".",
        help="Project root containing data/trades (default: .)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    summary_parser = subparsers.add_parser("summary", help="Headline metrics")
    _add_account(summary_parser)
    _add_range(summary_parser)

    _add_account(subparsers.add_parser("time", help="P/L by hour, weekday and session"))
    _add_account(subparsers.add_parser("pairs", help="Per-symbol ranking"))
    _add_account(subparsers.add_parser("behavior", help="Hold times and behavior flags"))
    _add_account(subparsers.add_parser("risk", help="Risk per trade and exposure"))
    _add_account(subparsers.add_parser("insights", help="Rule-based insights"))

    series_parser = subparsers.add_parser("series", help="P/L or equity series")
    _add_account(series_parser)
    _add_range(series_parser)
    series_parser.add_argument(
        "--bucket",
        choices=("daily", "weekly"),
        default="daily",
        help="P/L bucket size",
    )
    series_parser.add_argument(
        "--equity",
        action="store_true",
        help="Show the equity curve instead of P/L",
    )

    trades_parser = subparsers.add_parser("trades", help="List trades")
    _add_account(trades_parser)
    _add_range(trades_parser)
    trades_parser.add_argument("--symbol", help="Symbol substring (case-insensitive)")
    trades_parser.add_argument("--outcome", choices=TRADE_OUTCOMES, help="Trade outcome")
    trades_parser.add_argument("--limit", type=int, default=100, help="Maximum trades")

    trade_parser = subparsers.add_parser("trade", help="Trade detail and annotation")
    trade_parser.add_argument("trade_id", help="Trade id")
    trade_parser.add_argument("--json", action="store_true", help="Print JSON")

    annotate_parser = subparsers.add_parser("annotate", help="Set a trade's note and tags")
    annotate_parser.add_argument("trade_id", help="Trade id")
    annotate_parser.add_argument("--note", help="Note text (keeps the current note if omitted)")
    annotate_parser.add_argument(
        "--tag",
        dest="tags",
        action="append",
        help="Tag; repeat for several (replaces the current tags)",
    )
    annotate_parser.add_argument(
        "--clear-tags",
        action="store_true",
        help="Remove all tags",
    )
    annotate_parser.add_argument("--json", action="store_true", help="Print JSON")

    export_parser = subparsers.add_parser("export", help="Export a full report")
    _add_account(export_parser, json_output=False)
    _add_range(export_parser)
    export_parser.add_argument(
        "-f", "--formats",
        default="csv,parquet",
        help="Output formats (comma-separated: csv, parquet, xlsx)",
    )
    export_parser.add_argument(
        "-o", "--output",
        help="Output directory (default: data/reports)",
    )
    export_parser.add_argument(
        "--trades",
        action="store_true",
        help="Also export the trade list",
    )

    seed_parser = subparsers.add_parser("seed", help="Generate a demo account")
    _add_account(seed_parser, json_output=False)
    seed_parser.add_argument("--seed", type=int, default=42, help="Random seed")
    seed_parser.add_argument("--days", type=int, default=30, help="Days of history")
    seed_parser.add_argument(
        "--format",
        choices=("parquet", "csv"),
        default="parquet",
        help="Trade file format",
    )

    subparsers.add_parser("accounts", help="List accounts")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "summary": cmd_summary,
        "time": cmd_time,
        "pairs": cmd_pairs,
        "behavior": cmd_behavior,
        "risk": cmd_risk,
        "series": cmd_series,
        "trades": cmd_trades,
        "trade": cmd_trade,
        "annotate": cmd_annotate,
        "insights": cmd_insights,
        "export": cmd_export,
        "seed": cmd_seed,
        "accounts": cmd_accounts,
    }

    try:
        return commands[args.command](args)
    except RepositoryError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
