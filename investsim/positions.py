"""
positions.py - Open positions and the realized-gain log

A Position is one holding: integer shares and a shares-weighted average cost.
Buys blend the average; sells never change it. A position sold down to zero
shares stays in its slot as a closed tombstone until purge_closed() runs, and a
later buy into a tombstone opens a fresh position.

Every sell appends an immutable SellTransactionRecord. All money is Decimal.
"""
from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from .core import Category, ZERO, to_decimal

if TYPE_CHECKING:
    from .instruments import Instrument


# =============================================================================
# POSITION
# =============================================================================

@dataclass(slots=True, eq=False)
class Position:
    """
    An open holding in one instrument.

    Attributes:
        instrument: The live instrument (read for current price)
        shares: Shares held; 0 means closed
        avg_purchase_price: Weighted-average cost per share
        created_at_tick: Tick of the opening buy
    """
    instrument: 'Instrument'
    shares: int
    avg_purchase_price: Decimal
    created_at_tick: int

    @property
    def symbol(self) -> str:
        return self.instrument.symbol

    @property
    def is_open(self) -> bool:
        return self.shares > 0

    @property
    def current_price(self) -> Decimal:
        return to_decimal(self.instrument.current_price)

    @property
    def cost_basis(self) -> Decimal:
        return self.shares * self.avg_purchase_price

    @property
    def current_value(self) -> Decimal:
        return self.shares * self.current_price

    @property
    def unrealized_gain(self) -> Decimal:
        return self.current_value - self.cost_basis

    @property
    def percentage_return(self) -> Decimal:
        """Unrealized return as a fraction of cost (0 when cost is 0)."""
        cost = self.cost_basis
        if cost == ZERO:
            return ZERO
        return self.unrealized_gain / cost

    def __repr__(self) -> str:
        return (f"Position({self.symbol}: {self.shares} @ {self.avg_purchase_price}, "
                f"opened tick {self.created_at_tick})")


# =============================================================================
# SELL RECORD
# =============================================================================

@dataclass(frozen=True, slots=True)
class SellTransactionRecord:
    """
    Snapshot of one sell, taken at the moment of sale.

    Attributes:
        symbol: Instrument symbol
        instrument_name: Display name at sale time
        category: Instrument category
        shares_sold: Number of shares sold (> 0)
        day_sold: Tick of the sale
        sell_price: Price per share received
        cost_basis_per_share: Position's average cost at sale time
        gain: shares_sold * (sell_price - cost_basis_per_share)
        percentage_return: gain / (shares_sold * cost_basis_per_share), 0 if that is 0
    """
    symbol: str
    instrument_name: str
    category: Category
    shares_sold: int
    day_sold: int
    sell_price: Decimal
    cost_basis_per_share: Decimal
    gain: Decimal
    percentage_return: Decimal

    def __post_init__(self):
        if self.shares_sold <= 0:
            raise ValueError(f"shares_sold must be positive, got {self.shares_sold}")
        for name in ("sell_price", "cost_basis_per_share", "gain", "percentage_return"):
            if not isinstance(getattr(self, name), Decimal):
                raise ValueError(f"{name} must be Decimal, got {type(getattr(self, name))}")

    @property
    def proceeds(self) -> Decimal:
        return self.shares_sold * self.sell_price

    def __repr__(self) -> str:
        return (f"Sell({self.symbol}: {self.shares_sold} @ {self.sell_price} "
                f"day {self.day_sold}, gain={self.gain})")


def realized_gain(shares: int, sell_price: Decimal, cost_per_share: Decimal) -> Decimal:
    return shares * (sell_price - cost_per_share)


def realized_return(gain: Decimal, shares: int, cost_per_share: Decimal) -> Decimal:
    """Gain as a fraction of cost; a zero cost basis yields 0, not a division error."""
    cost = shares * cost_per_share
    if cost == ZERO:
        return ZERO
    return gain / cost


# =============================================================================
# LEDGER
# =============================================================================

class PortfolioLedger:
    """
    Slot map of positions keyed by symbol plus the append-only sell log.

    investments_opened counts first buys into an empty (or closed) slot and is
    not affected by selling out.
    """

    def __init__(self):
        self._positions: Dict[str, Position] = {}
        self._sales: List[SellTransactionRecord] = []
        self.investments_opened: int = 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_position(self, symbol: str) -> Optional[Position]:
        """Open position for `symbol`, or None (closed tombstones included)."""
        position = self._positions.get(symbol)
        if position is None or not position.is_open:
            return None
        return position

    def owns(self, position: Position) -> bool:
        """True if `position` is the live slot for its symbol."""
        return self._positions.get(position.symbol) is position

    def open_positions(self) -> List[Position]:
        return [p for p in self._positions.values() if p.is_open]

    @property
    def sales(self) -> Tuple[SellTransactionRecord, ...]:
        return tuple(self._sales)

    def realized_gain(self) -> Decimal:
        return sum((r.gain for r in self._sales), ZERO)

    def unrealized_gain(self) -> Decimal:
        return sum((p.unrealized_gain for p in self.open_positions()), ZERO)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def open_or_add(self, instrument: 'Instrument', shares: int, price_per_share, tick: int) -> Position:
        """
        Buy `shares` at `price_per_share` into the position for `instrument`.

        A missing or closed slot opens a new position (and counts as an
        investment made); an open one blends its average cost:

            new_avg = (old_avg * old_shares + price * shares) / (old_shares + shares)

        Raises:
            ValueError: If shares is not a positive integer
        """
        if not isinstance(shares, int) or isinstance(shares, bool) or shares <= 0:
            raise ValueError(f"shares must be a positive integer, got {shares!r}")
        price = to_decimal(price_per_share)

        position = self._positions.get(instrument.symbol)
        if position is None or not position.is_open:
            position = Position(instrument, shares, price, tick)
            self._positions[instrument.symbol] = position
            self.investments_opened += 1
            return position

        total = position.shares + shares
        position.avg_purchase_price = (
            position.avg_purchase_price * position.shares + price * shares
        ) / total
        position.shares = total
        return position

    def sell(self, position: Position, shares: int, current_price, tick: int) -> Optional[SellTransactionRecord]:
        """
        Sell `shares` out of `position` at `current_price`.

        Returns None (and changes nothing) unless 0 < shares <= position.shares.
        The average cost of the remaining shares is unchanged.
        """
        if not isinstance(shares, int) or isinstance(shares, bool):
            return None
        if shares <= 0 or shares > position.shares:
            return None

        price = to_decimal(current_price)
        cost = position.avg_purchase_price
        gain = realized_gain(shares, price, cost)
        record = SellTransactionRecord(
            symbol=position.symbol,
            instrument_name=position.instrument.name,
            category=position.instrument.category,
            shares_sold=shares,
            day_sold=tick,
            sell_price=price,
            cost_basis_per_share=cost,
            gain=gain,
            percentage_return=realized_return(gain, shares, cost),
        )
        self._sales.append(record)
        position.shares -= shares
        return record

    def purge_closed(self) -> int:
        """Drop closed tombstones. Returns how many were removed."""
        closed = [s for s, p in self._positions.items() if not p.is_open]
        for symbol in closed:
            del self._positions[symbol]
        return len(closed)

    def clear(self) -> None:
        self._positions.clear()
        self._sales.clear()
        self.investments_opened = 0

    def __repr__(self) -> str:
        return (f"PortfolioLedger({len(self.open_positions())} open, "
                f"{len(self._sales)} sales, {self.investments_opened} opened)")
