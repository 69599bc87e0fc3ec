"""Base Repository: Abstract interface and errors for data access.

Repositories hide where trades come from (memory, local files, a
future broker-sync backend) and hand the engine plain Trade lists.
Validation of caller input (date ranges, limits) happens here so the
engine never has to.
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic

T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """Abstract base class for repositories.

    Implementations:
    1. Return the complete dataset from get_all()
    2. Cache loaded data and drop it on clear_cache()
    3. Raise RepositoryError (or a subclass) on failures
    """

    @abstractmethod
    def get_all(self) -> T:
        """Retrieve all data from the repository.

        Raises:
            RepositoryError: If data cannot be loaded
        """

    @abstractmethod
    def clear_cache(self) -> None:
        """Clear any cached data."""


class RepositoryError(Exception):
    """Exception raised when repository operations fail."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(f"{message}" + (f" (path: {path})" if path else ""))


class InvalidQueryError(RepositoryError):
    """Caller passed an invalid query (inverted range, bad limit or outcome)."""


class AccountNotFoundError(RepositoryError):
    """No trades are stored for the requested account."""

    def __init__(self, account_id: str, path: str | None = None):
        self.account_id = account_id
        super().__init__(f"Account not found: {account_id}", path)


class TradeNotFoundError(RepositoryError):
    """No account holds a trade with the requested id."""

    def __init__(self, trade_id: str, path: str | None = None):
        self.trade_id = trade_id
        super().__init__(f"Trade not found: {trade_id}", path)
