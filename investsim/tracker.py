"""
tracker.py - Portfolio wealth over time, for the portfolio graph

Every `interval` ticks the tracker stores total wealth (cash + portfolio value)
and net investment gain. At most `max_points` snapshots are kept, oldest dropped.
"""
from __future__ import annotations
from collections import deque
from decimal import Decimal
from typing import TYPE_CHECKING, Deque, List

from .core import SNAPSHOT_INTERVAL, MAX_SNAPSHOTS

if TYPE_CHECKING:
    from .system import InvestmentSystem


class PortfolioHistoryTracker:
    """
    Bounded series of wealth and net-gain snapshots for the portfolio graph.

    Args:
        interval: Snapshot every `interval` ticks (tick % interval == 0)
        max_points: Snapshots kept; the oldest are dropped beyond this

    Example:
        tracker = PortfolioHistoryTracker()
        system = InvestmentSystem(wallet, [acme], tracker=tracker)
        system.start_game()                # initial snapshot
        for _ in range(10):
            system.advance_day()           # snapshots at ticks 5 and 10
        tracker.total_wealth_history       # 3 points
    """

    def __init__(self, interval: int = SNAPSHOT_INTERVAL, max_points: int = MAX_SNAPSHOTS):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        if max_points <= 0:
            raise ValueError(f"max_points must be positive, got {max_points}")
        self.interval = interval
        self.max_points = max_points
        self._wealth: Deque[Decimal] = deque(maxlen=max_points)
        self._net_gain: Deque[Decimal] = deque(maxlen=max_points)

    @property
    def total_wealth_history(self) -> List[Decimal]:
        return list(self._wealth)

    @property
    def net_gain_history(self) -> List[Decimal]:
        return list(self._net_gain)

    def __len__(self) -> int:
        return len(self._wealth)

    def snapshot(self, system: 'InvestmentSystem') -> None:
        self._wealth.append(system.account.balance() + system.total_portfolio_value)
        self._net_gain.append(system.total_gain)

    def on_tick(self, tick: int, system: 'InvestmentSystem') -> bool:
        """Snapshot if `tick` falls on the interval. Returns True if one was taken."""
        if tick % self.interval != 0:
            return False
        self.snapshot(system)
        return True

    def restart(self, system: 'InvestmentSystem') -> None:
        """Clear and take the initial snapshot."""
        self._wealth.clear()
        self._net_gain.clear()
        self.snapshot(system)
