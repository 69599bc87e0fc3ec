"""Infrastructure layer for Journal Analytics.

Contains:
- config: Data paths and analysis configuration
- repositories: Data access abstractions
- fixtures: Seeded trade generator for demos and tests
"""

from journal_analytics.infrastructure.config import (
    DataPaths,
    AnalysisConfig,
    ExportConfig,
    DEFAULT_PATHS,
    DEFAULT_CONFIG,
)
from journal_analytics.infrastructure.repositories import (
    Repository,
    RepositoryError,
    InvalidQueryError,
    AccountNotFoundError,
    TradeNotFoundError,
    TradeRepository,
    InMemoryTradeRepository,
    FileTradeRepository,
)
from journal_analytics.infrastructure.fixtures import FixtureConfig, generate_trades

__all__ = [
    # Config
    "DataPaths",
    "AnalysisConfig",
    "ExportConfig",
    "DEFAULT_PATHS",
    "DEFAULT_CONFIG",
    # Repositories
    "Repository",
    "RepositoryError",
    "InvalidQueryError",
    "AccountNotFoundError",
    "TradeNotFoundError",
    "TradeRepository",
    "InMemoryTradeRepository",
    "FileTradeRepository",
    # Fixtures
    "FixtureConfig",
    "generate_trades",
]
