"""Shared fixtures for journal analytics tests."""

import itertools
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from journal_analytics.domain.models import Trade

# Monday 2024-03-04 09:00 UTC
BASE_TIME = datetime(2024, 3, 4, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def base_time() -> datetime:
    return BASE_TIME


@pytest.fixture
def make_trade():
    """Factory for trades with sensible defaults.

    make_trade("62.30") is a closed EURUSD buy opened at BASE_TIME and
    held one hour; pass closed=False for an open trade.
    """
    ids = itertools.count(1)

    def factory(
        profit: str | None = "0",
        *,
        symbol: str = "EURUSD",
        side: str = "buy",
        open_time: datetime = BASE_TIME,
        hold: timedelta = timedelta(hours=1),
        closed: bool = True,
        volume: str | None = "0.10",
        account_id: str = "acc-001",
    ) -> Trade:
        return Trade(
            id=f"t-{next(ids)}",
            account_id=account_id,
            symbol=symbol,
            side=side,
            open_time=open_time,
            close_time=open_time + hold if closed else None,
            volume=None if volume is None else Decimal(volume),
            profit=None if profit is None else Decimal(profit),
        )

    return factory


@pytest.fixture
def make_sequence(make_trade):
    """Closed trades with the given profits, one hour apart, oldest first."""

    def factory(profits, *, symbol: str = "EURUSD", start: datetime = BASE_TIME):
        return [
            make_trade(p, symbol=symbol, open_time=start + timedelta(hours=i))
            for i, p in enumerate(profits)
        ]

    return factory
