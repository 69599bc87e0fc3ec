"""Trade Repository: Data-access contract for journal trades.

The analytics engine consumes two reads:
- get_closed_trades(account_id, date_range) -> closed trades, oldest first
- get_open_trades(account_id) -> open trades

plus list_trades(account_id, query) for the trade list view and
get_trade(trade_id) / annotations for the trade detail view.
Concrete repositories implement account loading and annotation
storage; selection and query validation live here.
"""

import logging
from abc import abstractmethod
from collections import defaultdict
from typing import Iterable

from journal_analytics.domain.filtering import (
    closed_trades,
    filter_trades,
    in_range,
    open_trades,
    sort_chronological,
)
from journal_analytics.domain.models import (
    TRADE_OUTCOMES,
    DateRange,
    Trade,
    TradeAnnotation,
    TradeQuery,
)
from journal_analytics.infrastructure.repositories.base import (
    AccountNotFoundError,
    InvalidQueryError,
    Repository,
    TradeNotFoundError,
)

logger = logging.getLogger(__name__)


def validate_date_range(date_range: DateRange | None) -> None:
    """Reject ranges whose start comes after their end.

    Raises:
        InvalidQueryError: If the range is inverted
    """
    if date_range is not None and not date_range.is_valid:
        raise InvalidQueryError(
            f"Invalid date range: start {date_range.start.isoformat()} "
            f"is after end {date_range.end.isoformat()}"
        )


def validate_query(query: TradeQuery) -> None:
    """Check a TradeQuery before it reaches the engine.

    Raises:
        InvalidQueryError: On inverted range, non-positive limit or unknown outcome
    """
    validate_date_range(query.date_range)
    if query.limit <= 0:
        raise InvalidQueryError(f"limit must be positive, got: {query.limit}")
    if query.outcome is not None and query.outcome not in TRADE_OUTCOMES:
        raise InvalidQueryError(
            f"outcome must be one of {', '.join(TRADE_OUTCOMES)}, got: {query.outcome}"
        )


class TradeRepository(Repository[list[Trade]]):
    """Abstract repository of trades grouped by account.

    Subclasses implement get_account_trades(), list_accounts(),
    get_annotation() and save_annotation().

    Example:
        >>> repo = InMemoryTradeRepository(trades)
        >>> closed = repo.get_closed_trades("acc-1")
        >>> wins = repo.list_trades("acc-1", TradeQuery(outcome="win"))
        >>> repo.update_annotation("t-1", "Good entry", ["trend", " scalping"]).tags
        ('scalping', 'trend')
    """

    @abstractmethod
    def get_account_trades(self, account_id: str) -> list[Trade]:
        """Load every trade of an account, open and closed.

        Raises:
            AccountNotFoundError: If the account has no stored trades
            RepositoryError: If the source cannot be read
        """

    @abstractmethod
    def list_accounts(self) -> list[str]:
        """Get list of all accounts with trades."""

    @abstractmethod
    def get_annotation(self, trade_id: str) -> TradeAnnotation:
        """Stored annotation of a trade, the empty annotation if none."""

    @abstractmethod
    def save_annotation(self, trade_id: str, annotation: TradeAnnotation) -> None:
        """Store an annotation, replacing any previous one."""

    def get_trade(self, trade_id: str) -> Trade:
        """Look a trade up by id across all accounts.

        Raises:
            TradeNotFoundError: If no account holds the trade
        """
        for account_id in self.list_accounts():
            for trade in self.get_account_trades(account_id):
                if trade.id == trade_id:
                    return trade
        raise TradeNotFoundError(trade_id)

    def update_annotation(
        self,
        trade_id: str,
        note_text: str,
        tags: Iterable[str],
    ) -> TradeAnnotation:
        """Replace a trade's note and tags.

        Tags are trimmed, blanks dropped, de-duplicated and sorted.

        Raises:
            TradeNotFoundError: If the trade does not exist
        """
        self.get_trade(trade_id)
        annotation = TradeAnnotation.create(note_text, tags)
        self.save_annotation(trade_id, annotation)
        logger.debug("Annotated trade %s with %d tags", trade_id, len(annotation.tags))
        return annotation

    def get_all(self) -> list[Trade]:
        """Load all trades of all accounts."""
        trades: list[Trade] = []
        for account_id in self.list_accounts():
            trades.extend(self.get_account_trades(account_id))
        return trades

    def get_closed_trades(
        self,
        account_id: str,
        date_range: DateRange | None = None,
    ) -> list[Trade]:
        """Closed trades of an account, oldest first.

        Args:
            account_id: Trading account
            date_range: Optional inclusive bounds on close time

        Raises:
            InvalidQueryError: If the date range is inverted
        """
        validate_date_range(date_range)
        trades = self.get_account_trades(account_id)
        return sort_chronological(in_range(closed_trades(trades), date_range))

    def get_open_trades(self, account_id: str) -> list[Trade]:
        """Open trades of an account."""
        return open_trades(self.get_account_trades(account_id))

    def list_trades(self, account_id: str, query: TradeQuery | None = None) -> list[Trade]:
        """Filtered trade list, newest first.

        Raises:
            InvalidQueryError: If the query is invalid
        """
        query = query or TradeQuery()
        validate_query(query)
        return filter_trades(self.get_account_trades(account_id), query)


class InMemoryTradeRepository(TradeRepository):
    """Trades held in memory, grouped by account_id.

    Used as the test double and for freshly generated fixtures.
    """

    def __init__(self, trades: Iterable[Trade] = ()):
        self._trades: dict[str, list[Trade]] = defaultdict(list)
        self._annotations: dict[str, TradeAnnotation] = {}
        for trade in trades:
            self._trades[trade.account_id].append(trade)
        logger.debug("In-memory repository holds %d accounts", len(self._trades))

    def get_account_trades(self, account_id: str) -> list[Trade]:
        if account_id not in self._trades:
            raise AccountNotFoundError(account_id)
        return list(self._trades[account_id])

    def list_accounts(self) -> list[str]:
        return sorted(self._trades)

    def get_annotation(self, trade_id: str) -> TradeAnnotation:
        return self._annotations.get(trade_id, TradeAnnotation())

    def save_annotation(self, trade_id: str, annotation: TradeAnnotation) -> None:
        self._annotations[trade_id] = annotation

    def clear_cache(self) -> None:
        """Nothing to clear: memory is the source of truth."""
