"""Deterministic trade fixtures.

Generates a plausible month of journal trades from a seed so demo
data and test scenarios are reproducible:

- 1-5 trades per day over the last `days` days
- opens spaced two hours apart from the day's reference time
- holds of 15-120 minutes
- profits in [-100, 200], volumes in [0.01, 0.5] lots
- fill prices within 2% of a per-symbol reference, SL/TP 1% away
- commission in [-1, 0], swap in [-0.5, 0.5]
- up to `max_open` trades still open at `now`
"""

import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal

from journal_analytics.domain.models import Trade
from journal_analytics.domain.money import round_money

DEFAULT_SYMBOLS = ("XAUUSD", "EURUSD", "GBPUSD", "USDJPY", "US30", "BTCUSD", "ETHUSD")

REFERENCE_PRICES = {
    "XAUUSD": Decimal("2050"),
    "EURUSD": Decimal("1.085"),
    "GBPUSD": Decimal("1.265"),
    "USDJPY": Decimal("150.2"),
    "US30": Decimal("38000"),
    "BTCUSD": Decimal("52000"),
    "ETHUSD": Decimal("2900"),
}


@dataclass(frozen=True)
class FixtureConfig:
    """Parameters for generated trades.

    Attributes:
        days: Number of calendar days of history
        min_trades_per_day: Lower bound of daily trade count
        max_trades_per_day: Upper bound of daily trade count
        max_open: Maximum number of open trades
        symbols: Instruments to draw from
    """

    days: int = 30
    min_trades_per_day: int = 1
    max_trades_per_day: int = 5
    max_open: int = 3
    symbols: tuple[str, ...] = DEFAULT_SYMBOLS


def _random_amount(rng: random.Random, low: float, high: float) -> Decimal:
    return round_money(Decimal(str(rng.uniform(low, high))))


def _price_places(symbol: str) -> int:
    """Quote precision: 2 places for metals, indices and crypto, else 3 (JPY) or 5."""
    if symbol.startswith(("XAU", "US30", "BTC", "ETH")):
        return 2
    return 3 if symbol.endswith("JPY") else 5


def _price_levels(rng: random.Random, symbol: str, side: str) -> dict[str, Decimal]:
    """Open and close prices with stop-loss and take-profit 1% away."""
    places = _price_places(symbol)
    base = REFERENCE_PRICES.get(symbol, Decimal("100"))
    change = Decimal(str(rng.uniform(-0.02, 0.02)))
    below, above = base * Decimal("0.99"), base * Decimal("1.01")
    return {
        "open_price": round_money(base, places),
        "close_price": round_money(base * (1 + change), places),
        "sl": round_money(below if side == "buy" else above, places),
        "tp": round_money(above if side == "buy" else below, places),
    }


def generate_trades(
    account_id: str,
    seed: int,
    now: datetime,
    config: FixtureConfig = FixtureConfig(),
) -> list[Trade]:
    """Generate a reproducible trade history for an account.

    Args:
        account_id: Account the trades belong to
        seed: Random seed; equal seeds give equal trades
        now: Reference time; history runs backwards from here
        config: Generation parameters

    Returns:
        Closed trades (newest day first) followed by open trades

    Example:
        >>> trades = generate_trades("acc-001", seed=7, now=datetime(2024, 3, 1, 8))
        >>> trades == generate_trades("acc-001", seed=7, now=datetime(2024, 3, 1, 8))
        True
    """
    rng = random.Random(seed)
    trades: list[Trade] = []
    counter = 0

    for day_offset in range(config.days):
        day = now - timedelta(days=day_offset)
        per_day = rng.randint(config.min_trades_per_day, config.max_trades_per_day)

        for idx in range(per_day):
            open_time = day + timedelta(hours=idx * 2)
            close_time = open_time + timedelta(minutes=rng.randint(15, 120))
            if close_time > now:
                continue

            counter += 1
            symbol = rng.choice(config.symbols)
            side = rng.choice(("buy", "sell"))
            trades.append(Trade(
                id=f"{account_id}-{counter:05d}",
                account_id=account_id,
                symbol=symbol,
                side=side,
                open_time=open_time,
                close_time=close_time,
                volume=_random_amount(rng, 0.01, 0.5),
                profit=_random_amount(rng, -100, 200),
                commission=_random_amount(rng, -1, 0),
                swap=_random_amount(rng, -0.5, 0.5),
                **_price_levels(rng, symbol, side),
            ))

    for idx in range(rng.randint(0, config.max_open)):
        counter += 1
        symbol = rng.choice(config.symbols[:3])
        side = "buy" if idx % 2 == 0 else "sell"
        levels = _price_levels(rng, symbol, side)
        del levels["close_price"]
        trades.append(Trade(
            id=f"{account_id}-{counter:05d}",
            account_id=account_id,
            symbol=symbol,
            side=side,
            open_time=now - timedelta(hours=idx),
            volume=_random_amount(rng, 0.01, 0.5),
            profit=_random_amount(rng, -20, 30),
            **levels,
        ))

    return trades
