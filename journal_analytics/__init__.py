"""Journal Analytics: Trading journal performance analysis.

Turns a trader's journal of closed and open trades into performance
reports: headline summary, time-of-day and weekday breakdowns,
per-instrument ranking, behavioral flags and risk metrics.

Architecture:
- domain/: Core business logic (models, calculations)
- infrastructure/: I/O and external dependencies
- application/: Use cases and services
- interfaces/: CLI
"""

__version__ = "0.1.0"

from journal_analytics.domain import (
    Trade,
    DateRange,
    TradeQuery,
    AnalyticsSummary,
)
from journal_analytics.infrastructure import (
    DataPaths,
    AnalysisConfig,
    DEFAULT_PATHS,
    RepositoryError,
)

__all__ = [
    # Version
    "__version__",
    # Domain models
    "Trade",
    "DateRange",
    "TradeQuery",
    "AnalyticsSummary",
    # Infrastructure
    "DataPaths",
    "AnalysisConfig",
    "DEFAULT_PATHS",
    "RepositoryError",
]
