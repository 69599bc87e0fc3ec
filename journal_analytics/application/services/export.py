"""Report Exporter: Write analytics reports to CSV, Parquet or Excel.

Each report is flattened into tables:
- summary: one row per headline metric
- pairs: full pair ranking
- hourly / weekday: time-of-day and day-of-week aggregates
- exposure: volume share per symbol

CSV and Parquet get one file per table ({base}_{table}.{fmt});
Excel gets one workbook with a sheet per table.
"""

import logging
from decimal import Decimal
from pathlib import Path
from typing import Sequence

import polars as pl

from journal_analytics.application.services.analytics import AccountAnalyticsReport
from journal_analytics.domain.models import Trade
from journal_analytics.infrastructure.config import ExportConfig
from journal_analytics.infrastructure.repositories.file_repo import (
    DECIMAL_COLUMNS,
    trades_to_frame,
)

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("csv", "parquet", "xlsx")

SUMMARY_METRICS = (
    "pnl_total", "win_rate", "max_drawdown", "trade_count", "equity",
    "daily_pnl", "gross_profit", "gross_loss", "expectancy",
    "floating_pnl", "current_risk", "profit_factor", "avg_win",
    "avg_loss", "avg_rr", "losing_streak", "max_losing_streak",
    "overtrade_warning",
)

TABLE_SCHEMAS = {
    "pairs": {
        "symbol": pl.Utf8,
        "pnl": pl.Float64,
        "trade_count": pl.Int64,
        "win_rate": pl.Float64,
        "avg_win": pl.Float64,
        "avg_loss": pl.Float64,
    },
    "hourly": {
        "hour": pl.Int64,
        "pnl": pl.Float64,
        "trade_count": pl.Int64,
        "win_rate": pl.Float64,
    },
    "weekday": {
        "weekday": pl.Int64,
        "name": pl.Utf8,
        "pnl": pl.Float64,
        "trade_count": pl.Int64,
        "win_rate": pl.Float64,
    },
    "exposure": {
        "symbol": pl.Utf8,
        "volume": pl.Float64,
        "exposure_percent": pl.Float64,
    },
}

MONEY_COLUMNS = {
    "pnl", "avg_win", "avg_loss", "volume", "value", "profit", "commission", "swap",
}
RATE_COLUMNS = {"win_rate"}


def _export_value(value):
    if isinstance(value, Decimal):
        return float(value)
    return value


def _frame(rows: list[dict], schema: dict) -> pl.DataFrame:
    return pl.DataFrame(
        {col: [_export_value(row[col]) for row in rows] for col in schema},
        schema=schema,
    )


def summary_frame(report: AccountAnalyticsReport) -> pl.DataFrame:
    """Headline metrics as (metric, value) rows; missing values stay null."""
    data = report.summary.to_dict()
    values = [data[m] for m in SUMMARY_METRICS]
    return pl.DataFrame(
        {
            "metric": list(SUMMARY_METRICS),
            "value": [None if v is None else float(v) for v in values],
        },
        schema={"metric": pl.Utf8, "value": pl.Float64},
    )


def trades_sheet_frame(trades: Sequence[Trade]) -> pl.DataFrame:
    """Trade list for a workbook sheet: ISO times, numeric decimal columns."""
    return trades_to_frame(trades, iso_times=True).with_columns(
        [pl.col(c).cast(pl.Float64) for c in DECIMAL_COLUMNS]
    )


def report_tables(report: AccountAnalyticsReport) -> dict[str, pl.DataFrame]:
    """Flatten a report into named tables.

    Example:
        >>> tables = report_tables(service.full_report("acc-001"))
        >>> list(tables)
        ['summary', 'pairs', 'hourly', 'weekday', 'exposure']
    """
    return {
        "summary": summary_frame(report),
        "pairs": _frame(
            [p.to_dict() for p in report.pair_analysis.pairs],
            TABLE_SCHEMAS["pairs"],
        ),
        "hourly": _frame(
            [h.to_dict() for h in report.time_analysis.hourly_pnl],
            TABLE_SCHEMAS["hourly"],
        ),
        "weekday": _frame(
            [d.to_dict() for d in report.time_analysis.day_of_week_pnl],
            TABLE_SCHEMAS["weekday"],
        ),
        "exposure": _frame(
            [e.to_dict() for e in report.risk_analysis.exposure_by_pair],
            TABLE_SCHEMAS["exposure"],
        ),
    }


class ReportExporter:
    """Writes analytics reports and trade lists to disk.

    Example:
        >>> exporter = ReportExporter(ExportConfig(output_dir=Path("out")))
        >>> exporter.save_report(report, "acc-001", formats=("xlsx",))
        [PosixPath('out/acc-001.xlsx')]
    """

    def __init__(self, config: ExportConfig | None = None):
        self._config = config or ExportConfig()

    def save_report(
        self,
        report: AccountAnalyticsReport,
        base_name: str | None = None,
        formats: tuple[str, ...] | None = None,
    ) -> list[Path]:
        """Save report tables to the specified formats.

        Args:
            report: Report to export
            base_name: Base filename without extension (defaults to account id)
            formats: Output formats (uses config if not provided)

        Returns:
            List of saved file paths

        Raises:
            ValueError: If a format is not csv, parquet or xlsx
        """
        return self._save_tables(
            report_tables(report),
            base_name or report.account_id,
            formats,
        )

    def save_trades(
        self,
        trades: Sequence[Trade],
        base_name: str = "trades",
        formats: tuple[str, ...] | None = None,
    ) -> list[Path]:
        """Save a trade list, one table named "trades"."""
        formats = formats or self._config.output_formats
        self._check_formats(formats)
        output_dir = self._config.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        saved = []

        for fmt in formats:
            path = output_dir / f"{base_name}.{fmt}"
            if fmt == "csv":
                trades_to_frame(trades, iso_times=True).write_csv(path)
            elif fmt == "parquet":
                trades_to_frame(trades).write_parquet(path)
            else:
                self._save_excel({"trades": trades_sheet_frame(trades)}, path)
            saved.append(path)

        logger.info("Exported %d trades to %s", len(trades), output_dir)
        return saved

    def _save_tables(
        self,
        tables: dict[str, pl.DataFrame],
        base_name: str,
        formats: tuple[str, ...] | None,
    ) -> list[Path]:
        formats = formats or self._config.output_formats
        self._check_formats(formats)
        output_dir = self._config.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        saved = []

        for fmt in formats:
            if fmt == "xlsx":
                path = output_dir / f"{base_name}.xlsx"
                self._save_excel(tables, path)
                saved.append(path)
                continue

            for name, df in tables.items():
                path = output_dir / f"{base_name}_{name}.{fmt}"
                if fmt == "csv":
                    df.write_csv(path)
                else:
                    df.write_parquet(path)
                saved.append(path)

        logger.info("Exported %d files for %s", len(saved), base_name)
        return saved

    @staticmethod
    def _check_formats(formats: tuple[str, ...]) -> None:
        for fmt in formats:
            if fmt not in EXPORT_FORMATS:
                raise ValueError(f"Unknown format: {fmt}")

    def _save_excel(self, tables: dict[str, pl.DataFrame], path: Path) -> None:
        """Save tables to one Excel workbook, one formatted sheet per table."""
        import xlsxwriter

        workbook = xlsxwriter.Workbook(str(path))
        for name, df in tables.items():
            worksheet = workbook.add_worksheet(name.capitalize())
            self._write_sheet(workbook, worksheet, df, df.columns)
        workbook.close()

    def _write_sheet(
        self,
        workbook,
        worksheet,
        df: pl.DataFrame,
        columns: list[str],
    ) -> None:
        """Write DataFrame columns to Excel worksheet."""
        header_fmt = workbook.add_format({
            "bold": True,
            "bg_color": "#4472C4",
            "font_color": "white",
            "border": 1,
        })
        money_fmt = workbook.add_format({"num_format": "#,##0.00"})
        pct_fmt = workbook.add_format({"num_format": "0.00%"})

        for col_idx, col_name in enumerate(columns):
            worksheet.write(0, col_idx, col_name, header_fmt)

        for row_idx, row in enumerate(df.select(columns).iter_rows(named=True), 1):
            for col_idx, col_name in enumerate(columns):
                value = row[col_name]
                if value is None:
                    worksheet.write(row_idx, col_idx, "")
                elif col_name in MONEY_COLUMNS:
                    worksheet.write(row_idx, col_idx, value, money_fmt)
                elif col_name in RATE_COLUMNS:
                    worksheet.write(row_idx, col_idx, value, pct_fmt)
                else:
                    worksheet.write(row_idx, col_idx, value)

        for col_idx, col_name in enumerate(columns):
            worksheet.set_column(col_idx, col_idx, max(len(col_name), 10))
