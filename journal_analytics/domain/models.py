"""Domain Models: Core data structures for journal analytics.

These models represent the fundamental business entities:
- Trade: A single journal trade, open or closed
- DateRange: Inclusive time window on a trade's effective timestamp
- TradeQuery: Selection parameters for listing trades
- TradeAnnotation: Journal note and tags attached to a trade
- TradeSide / TradeOutcome: Literal types for direction and outcome

Design Principles:
- Immutable (frozen dataclass)
- Validation in __post_init__
- Computed properties for derived values
- Money as Decimal, never float
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Literal

from journal_analytics.domain.money import ZERO

TradeSide = Literal["buy", "sell"]
TradeOutcome = Literal["win", "loss", "breakeven"]

TRADE_SIDES: tuple[str, ...] = ("buy", "sell")
TRADE_OUTCOMES: tuple[str, ...] = ("win", "loss", "breakeven")


def _validate_not_empty(value: str, field_name: str) -> None:
    """Validate that a string field is set."""
    if not value or not value.strip():
        raise ValueError(f"{field_name} cannot be empty")


def _validate_finite(value: Decimal | None, field_name: str) -> None:
    """Reject NaN and infinite decimals."""
    if value is not None and not value.is_finite():
        raise ValueError(f"{field_name} must be a finite number, got: {value}")


def _validate_non_negative(value: Decimal | None, field_name: str) -> None:
    _validate_finite(value, field_name)
    if value is not None and value < 0:
        raise ValueError(f"{field_name} must be non-negative, got: {value}")


@dataclass(frozen=True, slots=True)
class Trade:
    """A trade recorded in the journal.

    A trade is closed iff close_time is set. Profit is the realized
    P/L for closed trades and the floating P/L for open ones.

    Attributes:
        id: Unique trade identifier
        account_id: Owning trading account
        symbol: Instrument code (e.g., "XAUUSD")
        side: "buy" or "sell"
        open_time: When the position was opened
        close_time: When the position was closed (None while open)
        volume: Traded lots (optional)
        profit: P/L in account currency (optional)
        open_price / close_price: Fill prices (optional)
        sl / tp: Stop-loss and take-profit levels (optional)
        commission / swap: Trading costs, usually negative (optional)

    Example:
        >>> trade = Trade(
        ...     id="t-1", account_id="acc-1", symbol="EURUSD", side="buy",
        ...     open_time=datetime(2024, 1, 15, 9, 0),
        ...     close_time=datetime(2024, 1, 15, 10, 30),
        ...     volume=Decimal("0.10"), profit=Decimal("62.30"),
        ... )
        >>> trade.hold_seconds
        5400.0
    """

    id: str
    account_id: str
    symbol: str
    side: TradeSide
    open_time: datetime
    close_time: datetime | None = None
    volume: Decimal | None = None
    profit: Decimal | None = None
    open_price: Decimal | None = None
    close_price: Decimal | None = None
    sl: Decimal | None = None
    tp: Decimal | None = None
    commission: Decimal | None = None
    swap: Decimal | None = None

    def __post_init__(self) -> None:
        """Validate all fields after initialization."""
        _validate_not_empty(self.id, "id")
        _validate_not_empty(self.account_id, "account_id")
        _validate_not_empty(self.symbol, "symbol")
        if self.side not in TRADE_SIDES:
            raise ValueError(f"side must be 'buy' or 'sell', got: {self.side}")
        if self.close_time is not None and self.close_time < self.open_time:
            raise ValueError(
                f"close_time must not precede open_time: "
                f"{self.close_time.isoformat()} < {self.open_time.isoformat()}"
            )
        for name in ("volume", "open_price", "close_price", "sl", "tp"):
            _validate_non_negative(getattr(self, name), name)
        for name in ("profit", "commission", "swap"):
            _validate_finite(getattr(self, name), name)

    @property
    def is_open(self) -> bool:
        """Whether the position is still open."""
        return self.close_time is None

    @property
    def is_closed(self) -> bool:
        """Whether the position has been closed."""
        return self.close_time is not None

    @property
    def effective_time(self) -> datetime:
        """Timestamp used for ordering and range filtering."""
        return self.close_time if self.close_time is not None else self.open_time

    @property
    def profit_or_zero(self) -> Decimal:
        """Profit with a missing value read as zero."""
        return self.profit if self.profit is not None else ZERO

    @property
    def hold_seconds(self) -> float | None:
        """Seconds between open and close, None for open trades."""
        if self.close_time is None:
            return None
        return (self.close_time - self.open_time).total_seconds()

    @property
    def outcome(self) -> TradeOutcome:
        """Classify the trade by the sign of its profit."""
        p = self.profit_or_zero
        if p > 0:
            return "win"
        if p < 0:
            return "loss"
        return "breakeven"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "account_id": self.account_id,
            "symbol": self.symbol,
            "side": self.side,
            "open_time": self.open_time,
            "close_time": self.close_time,
            "volume": self.volume,
            "profit": self.profit,
            "open_price": self.open_price,
            "close_price": self.close_price,
            "sl": self.sl,
            "tp": self.tp,
            "commission": self.commission,
            "swap": self.swap,
        }


@dataclass(frozen=True, slots=True)
class DateRange:
    """Inclusive bounds on a trade's effective timestamp.

    Either bound may be None (unbounded on that side). The range does
    not validate ordering itself; repositories reject inverted ranges.
    """

    start: datetime | None = None
    end: datetime | None = None

    @property
    def is_valid(self) -> bool:
        """Check that start does not come after end."""
        if self.start is None or self.end is None:
            return True
        return self.start <= self.end

    @property
    def is_unbounded(self) -> bool:
        return self.start is None and self.end is None

    def contains(self, ts: datetime) -> bool:
        """Check whether a timestamp falls within the range."""
        if self.start is not None and ts < self.start:
            return False
        if self.end is not None and ts > self.end:
            return False
        return True


@dataclass(frozen=True, slots=True)
class TradeQuery:
    """Selection parameters for listing trades.

    Attributes:
        date_range: Optional bounds on effective time
        symbol: Case-insensitive substring filter on the symbol
        outcome: "win", "loss" or "breakeven"
        limit: Maximum number of trades returned
    """

    date_range: DateRange | None = None
    symbol: str | None = None
    outcome: TradeOutcome | None = None
    limit: int = 100


def clean_tags(tags: Iterable[str]) -> tuple[str, ...]:
    """Normalize annotation tags: trimmed, blanks dropped, unique, sorted.

    Example:
        >>> clean_tags([" trend", "scalping", "", "trend "])
        ('scalping', 'trend')
    """
    return tuple(sorted({t.strip() for t in tags if t.strip()}))


@dataclass(frozen=True, slots=True)
class TradeAnnotation:
    """Free-text note and tags a trader attaches to a trade.

    A trade without a stored annotation reads as the empty annotation.
    """

    note_text: str = ""
    tags: tuple[str, ...] = ()

    @classmethod
    def create(cls, note_text: str, tags: Iterable[str]) -> "TradeAnnotation":
        """Build an annotation with cleaned tags; the note is kept verbatim."""
        return cls(note_text=note_text, tags=clean_tags(tags))

    @property
    def is_empty(self) -> bool:
        return not self.note_text and not self.tags

    def to_dict(self) -> dict:
        return {"note_text": self.note_text, "tags": list(self.tags)}
