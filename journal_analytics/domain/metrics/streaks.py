"""Losing streaks over a profit sequence.

Shared by the summary and risk views so both report the same
longest run of losses for the same trade history.
"""

from decimal import Decimal
from typing import Sequence


def longest_losing_run(profits: Sequence[Decimal]) -> int:
    """Length of the longest run of consecutive losses (profit < 0).

    The result does not depend on whether the sequence is walked
    forwards or backwards.

    Example:
        >>> longest_losing_run([Decimal("-1"), Decimal("-2"), Decimal("3"), Decimal("-4")])
        2
    """
    longest = 0
    run = 0
    for profit in profits:
        if profit < 0:
            run += 1
            longest = max(longest, run)
        else:
            run = 0
    return longest


def current_losing_run(profits: Sequence[Decimal]) -> int:
    """Consecutive losses counted back from the most recent trade.

    Args:
        profits: Profits in chronological order (oldest first)

    Returns:
        Number of trailing losses; 0 if the latest trade is not a loss
    """
    run = 0
    for profit in reversed(profits):
        if profit >= 0:
            break
        run += 1
    return run
