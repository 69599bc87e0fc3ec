"""File Trade Repository: Per-account trade files on local disk.

Provides read access to data/trades/{account_id}.parquet (or .csv)
and writes fixture files for the same layout. Trade annotations live
in data/annotations.parquet.

Columns:
    id, account_id, symbol, side, open_time, close_time, volume, profit,
    open_price, close_price, sl, tp, commission, swap

Decimal columns are stored as strings so values survive the round
trip exactly; float columns written by other tools are also accepted.
Timestamps are UTC; naive values in a file are read as UTC.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

import polars as pl

from journal_analytics.domain.models import Trade, TradeAnnotation
from journal_analytics.domain.money import to_decimal
from journal_analytics.infrastructure.config import (
    DataPaths,
    DEFAULT_PATHS,
    TRADE_FILE_FORMATS,
)
from journal_analytics.infrastructure.repositories.base import (
    AccountNotFoundError,
    RepositoryError,
)
from journal_analytics.infrastructure.repositories.trade_repo import TradeRepository

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("id", "account_id", "symbol", "side", "open_time")
DECIMAL_COLUMNS = (
    "volume", "profit", "open_price", "close_price", "sl", "tp", "commission", "swap",
)
OPTIONAL_COLUMNS = ("close_time",) + DECIMAL_COLUMNS
TRADE_COLUMNS = REQUIRED_COLUMNS + OPTIONAL_COLUMNS

ANNOTATION_SCHEMA = {
    "trade_id": pl.Utf8,
    "note_text": pl.Utf8,
    "tags": pl.List(pl.Utf8),
}


def _to_datetime(value) -> datetime | None:
    """Parse a stored timestamp; naive values are read as UTC."""
    if value is None:
        return None
    if not isinstance(value, datetime):
        value = str(value).strip()
        if not value:
            return None
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def row_to_trade(row: dict) -> Trade:
    """Convert one stored row to a Trade.

    Raises:
        ValueError: If a value cannot be parsed or fails validation
    """
    return Trade(
        id=str(row["id"]),
        account_id=str(row["account_id"]),
        symbol=str(row["symbol"]).strip(),
        side=str(row["side"]).strip().lower(),
        open_time=_to_datetime(row["open_time"]),
        close_time=_to_datetime(row.get("close_time")),
        **{col: to_decimal(row.get(col)) for col in DECIMAL_COLUMNS},
    )


def trades_to_frame(trades: Sequence[Trade], *, iso_times: bool = False) -> pl.DataFrame:
    """Build a polars DataFrame in the stored column layout.

    Args:
        trades: Trades to convert
        iso_times: Store timestamps as ISO strings (for CSV)
    """
    tz = trades[0].open_time.tzinfo if trades else None
    time_dtype = pl.Utf8 if iso_times else pl.Datetime("us", "UTC" if tz else None)

    def fmt_time(ts: datetime | None):
        if ts is None:
            return None
        return ts.isoformat() if iso_times else ts

    data = {
        "id": [t.id for t in trades],
        "account_id": [t.account_id for t in trades],
        "symbol": [t.symbol for t in trades],
        "side": [t.side for t in trades],
        "open_time": [fmt_time(t.open_time) for t in trades],
        "close_time": [fmt_time(t.close_time) for t in trades],
    }
    for col in DECIMAL_COLUMNS:
        values = (getattr(t, col) for t in trades)
        data[col] = [None if v is None else str(v) for v in values]

    schema = {
        "id": pl.Utf8,
        "account_id": pl.Utf8,
        "symbol": pl.Utf8,
        "side": pl.Utf8,
        "open_time": time_dtype,
        "close_time": time_dtype,
    }
    schema.update({col: pl.Utf8 for col in DECIMAL_COLUMNS})
    return pl.DataFrame(data, schema=schema)

class FileTradeRepository(TradeRepository):
    """Repository for per-account trade files.

    Loads data from trades/{account_id}.parquet, falling back to .csv.
    Loaded accounts and annotations are cached until clear_cache().

    Example:
        >>> repo = FileTradeRepository(DataPaths(root=Path("journal")))
        >>> repo.list_accounts()
        ['acc-001']
        >>> closed = repo.get_closed_trades("acc-001")
    """

    def __init__(self, paths: DataPaths = DEFAULT_PATHS):
        self._paths = paths
        self._cache: dict[str, list[Trade]] = {}
        self._annotations: dict[str, TradeAnnotation] | None = None

    def get_account_trades(self, account_id: str) -> list[Trade]:
        """Load all trades for an account.

        Raises:
            AccountNotFoundError: If no trade file exists
            RepositoryError: If the file cannot be read or parsed
        """
        if account_id in self._cache:
            logger.debug("Cache hit for account %s", account_id)
            return list(self._cache[account_id])

        path = self._paths.find_account_file(account_id)
        if path is None:
            raise AccountNotFoundError(account_id, str(self._paths.trades_dir))

        df = self._read_frame(path)
        trades = self._to_trades(df, path)
        logger.debug("Loaded %d trades for %s from %s", len(trades), account_id, path)

        self._cache[account_id] = trades
        return list(trades)

    def list_accounts(self) -> list[str]:
        return self._paths.list_accounts()

    def save_trades(
        self,
        account_id: str,
        trades: Sequence[Trade],
        fmt: str = "parquet",
    ) -> Path:
        """Write an account's trades, replacing any existing file.

        Returns:
            Path of the written file
        """
        path = self._paths.account_trades_path(account_id, fmt)
        path.parent.mkdir(parents=True, exist_ok=True)

        if fmt == "csv":
            trades_to_frame(trades, iso_times=True).write_csv(path)
        else:
            trades_to_frame(trades).write_parquet(path)

        # A leftover file in the other format would shadow or be shadowed by this one
        for other_fmt in TRADE_FILE_FORMATS:
            other = self._paths.account_trades_path(account_id, other_fmt)
            if other != path and other.exists():
                other.unlink()

        self._cache.pop(account_id, None)
        logger.info("Saved %d trades for %s to %s", len(trades), account_id, path)
        return path

    def get_annotation(self, trade_id: str) -> TradeAnnotation:
        return self._load_annotations().get(trade_id, TradeAnnotation())

    def save_annotation(self, trade_id: str, annotation: TradeAnnotation) -> None:
        """Store an annotation and rewrite the annotations file.

        An empty annotation removes the stored entry.
        """
        annotations = dict(self._load_annotations())
        if annotation.is_empty:
            annotations.pop(trade_id, None)
        else:
            annotations[trade_id] = annotation

        path = self._paths.annotations_path
        path.parent.mkdir(parents=True, exist_ok=True)
        ids = sorted(annotations)
        pl.DataFrame(
            {
                "trade_id": ids,
                "note_text": [annotations[i].note_text for i in ids],
                "tags": [list(annotations[i].tags) for i in ids],
            },
            schema=ANNOTATION_SCHEMA,
        ).write_parquet(path)

        self._annotations = annotations
        logger.debug("Saved %d annotations to %s", len(annotations), path)

    def clear_cache(self) -> None:
        """Clear cached data."""
        self._cache.clear()
        self._annotations = None

    def _load_annotations(self) -> dict[str, TradeAnnotation]:
        if self._annotations is not None:
            return self._annotations

        path = self._paths.annotations_path
        if not path.exists():
            self._annotations = {}
            return self._annotations

        try:
            df = pl.read_parquet(path)
        except Exception as e:
            raise RepositoryError(f"Failed to read annotations: {e}", str(path))

        missing = [c for c in ANNOTATION_SCHEMA if c not in df.columns]
        if missing:
            raise RepositoryError(
                f"Annotation data missing columns: {', '.join(missing)}", str(path)
            )

        self._annotations = {
            row["trade_id"]: TradeAnnotation(
                note_text=row["note_text"] or "",
                tags=tuple(row["tags"] or ()),
            )
            for row in df.iter_rows(named=True)
        }
        logger.debug("Loaded %d annotations from %s", len(self._annotations), path)
        return self._annotations

    def _read_frame(self, path: Path) -> pl.DataFrame:
        try:
            if path.suffix == ".csv":
                df = pl.read_csv(path, infer_schema_length=0)
            else:
                df = pl.read_parquet(path)
        except Exception as e:
            raise RepositoryError(f"Failed to read trade data: {e}", str(path))

        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise RepositoryError(
                f"Trade data missing columns: {', '.join(missing)}", str(path)
            )

        absent = [c for c in OPTIONAL_COLUMNS if c not in df.columns]
        if absent:
            df = df.with_columns([pl.lit(None).alias(c) for c in absent])

        return df.select(list(TRADE_COLUMNS))

    def _to_trades(self, df: pl.DataFrame, path: Path) -> list[Trade]:
        trades = []
        for idx, row in enumerate(df.iter_rows(named=True)):
            try:
                trades.append(row_to_trade(row))
            except (ValueError, ArithmeticError, TypeError) as e:
                raise RepositoryError(f"Invalid trade at row {idx}: {e}", str(path))
        return trades
