"""Configuration: Centralized paths and settings.

This module provides:
- DataPaths: File paths for journal data and reports
- AnalysisConfig: Thresholds and constants for the analytics engine
- ExportConfig: Report output settings

Directory Structure:
    data/
    ├── annotations.parquet      # Trade notes and tags
    ├── trades/                  # One file per trading account
    │   ├── acc-001.parquet
    │   └── acc-002.csv
    └── reports/                 # Exported analytics
"""

from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path

TRADE_FILE_FORMATS = ("parquet", "csv")


@dataclass(frozen=True)
class DataPaths:
    """File paths for data sources.

    Attributes:
        root: Project root directory
    """

    root: Path = Path(".")

    # --- Directories ---

    @property
    def data_dir(self) -> Path:
        """Main data directory."""
        return self.root / "data"

    @property
    def trades_dir(self) -> Path:
        """Per-account trade files."""
        return self.data_dir / "trades"

    @property
    def reports_dir(self) -> Path:
        """Exported reports."""
        return self.data_dir / "reports"

    @property
    def annotations_path(self) -> Path:
        """Trade notes and tags, keyed by trade id."""
        return self.data_dir / "annotations.parquet"

    # --- Helper Methods ---

    def account_trades_path(self, account_id: str, fmt: str = "parquet") -> Path:
        """Path to an account's trade file in the given format."""
        if fmt not in TRADE_FILE_FORMATS:
            raise ValueError(f"Unknown trade file format: {fmt}")
        return self.trades_dir / f"{account_id}.{fmt}"

    def find_account_file(self, account_id: str) -> Path | None:
        """Existing trade file for an account (parquet preferred)."""
        for fmt in TRADE_FILE_FORMATS:
            path = self.account_trades_path(account_id, fmt)
            if path.exists():
                return path
        return None

    def list_accounts(self) -> list[str]:
        """List all accounts with a trade file."""
        if not self.trades_dir.exists():
            return []
        return sorted({
            p.stem for p in self.trades_dir.iterdir()
            if p.suffix.lstrip(".") in TRADE_FILE_FORMATS
        })

    def validate(self) -> list[str]:
        """Check which required paths are missing.

        Returns:
            List of missing paths (empty if all exist)
        """
        missing = []
        if not self.trades_dir.exists():
            missing.append(str(self.trades_dir))
        return missing

    def ensure_dirs(self) -> None:
        """Create all required directories."""
        self.trades_dir.mkdir(parents=True, exist_ok=True)
        self.reports_dir.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for the analytics engine.

    Attributes:
        starting_equity: Account equity before the first trade
        risk_per_open_trade: Risk percent attributed to each open trade
        overtrade_threshold: Trades per day / 24h above which to warn
        overtrading_window_hours: Trailing window for overtrading detection
        revenge_hold_ratio: Loss/win hold-time ratio that flags revenge trading
        daily_loss_limit: Daily realized loss that counts as a limit hit
        pair_report_size: Length of the top and worst pair lists
        default_trade_limit: Default cap when listing trades
        snapshot_limit: Cap on trades loaded for analytics
    """

    starting_equity: Decimal = Decimal("10000")
    risk_per_open_trade: Decimal = Decimal("2")
    overtrade_threshold: int = 10
    overtrading_window_hours: int = 24
    revenge_hold_ratio: float = 1.8
    daily_loss_limit: Decimal = Decimal("500")
    pair_report_size: int = 5
    default_trade_limit: int = 100
    snapshot_limit: int = 10_000


@dataclass(frozen=True)
class ExportConfig:
    """Configuration for report export.

    Attributes:
        output_dir: Directory for output files
        output_formats: Formats to write ("csv", "parquet", "xlsx")
    """

    output_dir: Path = Path(".")
    output_formats: tuple[str, ...] = ("csv", "parquet")


# Default instances
DEFAULT_PATHS = DataPaths()
DEFAULT_CONFIG = AnalysisConfig()
