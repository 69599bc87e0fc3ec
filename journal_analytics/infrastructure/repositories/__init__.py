"""Data repositories for Journal Analytics.

Provides abstracted data access through the Repository pattern:
- TradeRepository: Data-access contract consumed by the analytics engine
- InMemoryTradeRepository: Trades held in memory (tests, fixtures)
- FileTradeRepository: Per-account parquet/csv trade files
"""

from journal_analytics.infrastructure.repositories.base import (
    Repository,
    RepositoryError,
    InvalidQueryError,
    AccountNotFoundError,
    TradeNotFoundError,
)
from journal_analytics.infrastructure.repositories.trade_repo import (
    TradeRepository,
    InMemoryTradeRepository,
    validate_date_range,
    validate_query,
)
from journal_analytics.infrastructure.repositories.file_repo import FileTradeRepository

__all__ = [
    "Repository",
    "RepositoryError",
    "InvalidQueryError",
    "AccountNotFoundError",
    "TradeNotFoundError",
    "TradeRepository",
    "InMemoryTradeRepository",
    "FileTradeRepository",
    "validate_date_range",
    "validate_query",
]
