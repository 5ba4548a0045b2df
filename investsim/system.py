"""
system.py - Investment orchestrator

InvestmentSystem is the stateful centre of the simulation. It owns:
    - the registered instruments (symbol -> Instrument)
    - the PortfolioLedger (open positions + sell log)
    - the HistoryStore and PortfolioHistoryTracker
    - lifetime aggregates used for end-of-game scoring

and talks to the player's cash only through the CashAccount protocol.

Key responsibilities:
    - advance_day(): one tick -> update every price, record history, track peak
    - buy_shares() / sell_shares() / sell_all_shares(): trades against cash
    - reset() / start_game(): restart signal

Trades never raise. A rejected trade returns None and leaves the reason in
last_trade_result.

Thread Safety:
    Not thread-safe. Ticks and trades must be serialized onto one game loop.
"""
from __future__ import annotations
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .core import (
    TradeResult, InstrumentNotRegistered,
    DEFAULT_BACKFILL_DAYS, ZERO, to_decimal,
)
from .account import CashAccount
from .history import HistoryStore
from .instruments import Instrument
from .positions import PortfolioLedger, Position, SellTransactionRecord
from .tracker import PortfolioHistoryTracker


InstrumentRef = Union[Instrument, str]


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _is_live(position, ledger: PortfolioLedger) -> bool:
    """An open Position that is still the ledger's slot for its symbol."""
    return isinstance(position, Position) and ledger.owns(position) and position.is_open


class InvestmentSystem:
    """
    Buy/sell orchestration, tick fan-out and lifetime statistics.

    Args:
        account: Cash account debited by buys and credited by sells
        instruments: Instruments to register, in display order
        history: Price history store (default: new HistoryStore)
        tracker: Wealth snapshot tracker (default: new PortfolioHistoryTracker)
        verbose: Print trades, rejections and resets

    Example:
        wallet = Wallet(Decimal("10000"))
        system = InvestmentSystem(wallet, [acme, tbill])
        system.start_game()

        position = system.buy_shares(acme, 5)
        system.advance_day()
        record = system.sell_all_shares(position)
    """

    def __init__(
        self,
        account: CashAccount,
        instruments: Iterable[Instrument] = (),
        history: Optional[HistoryStore] = None,
        tracker: Optional[PortfolioHistoryTracker] = None,
        verbose: bool = False,
    ):
        self.account = account
        self.instruments: Dict[str, Instrument] = {}
        self.history = history if history is not None else HistoryStore()
        self.tracker = tracker if tracker is not None else PortfolioHistoryTracker()
        self.ledger = PortfolioLedger()
        self.verbose = verbose

        self.current_tick: int = 0
        self.lifetime_principal_invested: Decimal = ZERO
        self.peak_portfolio_value: Decimal = ZERO
        self.last_trade_result: Optional[TradeResult] = None

        for instrument in instruments:
            self.register_instrument(instrument)

    # ========================================================================
    # REGISTRATION AND LOOKUP
    # ========================================================================

    def register_instrument(self, instrument: Instrument) -> None:
        """
        Make an instrument tradable and tick it every day.

        Raises:
            ValueError: If the symbol is already registered
        """
        if instrument.symbol in self.instruments:
            raise ValueError(f"Instrument {instrument.symbol} already registered")
        self.instruments[instrument.symbol] = instrument
        self.history.track(instrument)
        if self.verbose:
            print(f"📝 Registered: {instrument.symbol} ({instrument.name}) "
                  f"[{instrument.category.name}/{instrument.risk.name}]")

    def get_instrument(self, symbol: str) -> Instrument:
        """
        Raises:
            InstrumentNotRegistered: If no instrument has this symbol
        """
        try:
            return self.instruments[symbol]
        except KeyError:
            raise InstrumentNotRegistered(f"Instrument {symbol} not registered") from None

    @property
    def available_instruments(self) -> List[Instrument]:
        return list(self.instruments.values())

    def current_price(self, symbol: str) -> float:
        return self.get_instrument(symbol).current_price

    @property
    def positions(self) -> List[Position]:
        """Open positions only (closed ones are never listed)."""
        return self.ledger.open_positions()

    def get_position(self, symbol: str) -> Optional[Position]:
        return self.ledger.get_position(symbol)

    @property
    def sell_transactions(self) -> Tuple[SellTransactionRecord, ...]:
        return self.ledger.sales

    # ========================================================================
    # AGGREGATES
    # ========================================================================

    @property
    def total_portfolio_value(self) -> Decimal:
        return sum((p.current_value for p in self.positions), ZERO)

    @property
    def total_principal(self) -> Decimal:
        """Cost basis of the shares still held."""
        return sum((p.cost_basis for p in self.positions), ZERO)

    @property
    def total_gain(self) -> Decimal:
        return self.total_portfolio_value - self.total_principal

    @property
    def total_percentage_return(self) -> Decimal:
        principal = self.total_principal
        if principal == ZERO:
            return ZERO
        return self.total_gain / principal

    @property
    def lifetime_investments_made(self) -> int:
        return self.ledger.investments_opened

    @property
    def lifetime_realized_gain(self) -> Decimal:
        return self.ledger.realized_gain()

    @property
    def lifetime_total_gain(self) -> Decimal:
        """Every realized gain so far plus the unrealized gain still open."""
        return self.ledger.realized_gain() + self.ledger.unrealized_gain()

    def _update_peak(self) -> None:
        value = self.total_portfolio_value
        if value > self.peak_portfolio_value:
            self.peak_portfolio_value = value

    # ========================================================================
    # TICK
    # ========================================================================

    def advance_day(self) -> int:
        """
        Run one tick: move every price, record history, clean up sold-out
        positions, update the peak and let the tracker snapshot.

        Returns:
            The new tick number
        """
        self.current_tick += 1
        for instrument in self.instruments.values():
            instrument.update_price()
        self.history.record_tick()
        self.ledger.purge_closed()
        self._update_peak()
        self.tracker.on_tick(self.current_tick, self)
        return self.current_tick

    # ========================================================================
    # TRADES
    # ========================================================================

    def _reject(self, result: TradeResult, reason: str) -> None:
        self.last_trade_result = result
        if self.verbose:
            print(f"✗ REJECTED: {reason}")
        return None

    def _resolve(self, instrument: InstrumentRef) -> Optional[Instrument]:
        symbol = instrument if isinstance(instrument, str) else instrument.symbol
        registered = self.instruments.get(symbol)
        if registered is None:
            return None
        if not isinstance(instrument, str) and registered is not instrument:
            return None
        return registered

    def buy_shares(self, instrument: InstrumentRef, quantity: int) -> Optional[Position]:
        """
        Buy `quantity` shares at the instrument's current price.

        Returns:
            The (new or topped-up) Position, or None if the quantity is invalid,
            the instrument is unknown, or the account cannot cover the cost.
        """
        if not _is_positive_int(quantity):
            return self._reject(TradeResult.INVALID_QUANTITY, f"invalid quantity {quantity!r}")

        resolved = self._resolve(instrument)
        if resolved is None:
            return self._reject(TradeResult.UNKNOWN_INSTRUMENT, f"instrument not registered: {instrument!r}")

        price = to_decimal(resolved.current_price)
        cost = quantity * price
        if not self.account.try_debit(cost):
            return self._reject(
                TradeResult.INSUFFICIENT_FUNDS,
                f"cannot afford {quantity} {resolved.symbol} for {cost} (balance {self.account.balance()})",
            )

        position = self.ledger.open_or_add(resolved, quantity, price, self.current_tick)
        self.lifetime_principal_invested += cost
        self._update_peak()
        self.last_trade_result = TradeResult.APPLIED
        if self.verbose:
            print(f"✓ BUY {quantity} {resolved.symbol} @ {price} = {cost} "
                  f"(holding {position.shares} @ {position.avg_purchase_price})")
        return position

    def sell_shares(self, position: Optional[Position], quantity: int) -> Optional[SellTransactionRecord]:
        """
        Sell `quantity` shares of `position` at the current price and credit
        the proceeds.

        Returns:
            The SellTransactionRecord, or None if the quantity is invalid, exceeds
            the shares held, or the position is None, closed or no longer tracked.
        """
        if not _is_positive_int(quantity):
            return self._reject(TradeResult.INVALID_QUANTITY, f"invalid quantity {quantity!r}")
        if not _is_live(position, self.ledger):
            return self._reject(TradeResult.POSITION_CLOSED, f"position closed: {position!r}")
        if quantity > position.shares:
            return self._reject(
                TradeResult.INSUFFICIENT_SHARES,
                f"cannot sell {quantity} {position.symbol}, holding {position.shares}",
            )

        record = self.ledger.sell(position, quantity, position.current_price, self.current_tick)
        self.account.credit(record.proceeds)
        self._update_peak()
        self.last_trade_result = TradeResult.APPLIED
        if self.verbose:
            print(f"✓ SELL {quantity} {record.symbol} @ {record.sell_price} = {record.proceeds} "
                  f"(gain {record.gain})")
        return record

    def sell_all_shares(self, position: Optional[Position]) -> Optional[SellTransactionRecord]:
        if not isinstance(position, Position) or not position.is_open:
            return self._reject(TradeResult.POSITION_CLOSED, f"position closed: {position!r}")
        return self.sell_shares(position, position.shares)

    # ========================================================================
    # RESTART
    # ========================================================================

    def reset(self) -> None:
        """Drop all positions, the sell log and every lifetime aggregate."""
        self.ledger.clear()
        self.lifetime_principal_invested = ZERO
        self.peak_portfolio_value = ZERO
        self.last_trade_result = None
        if self.verbose:
            print("↺ Investment system reset")

    def start_game(self, backfill_days: int = DEFAULT_BACKFILL_DAYS) -> None:
        """
        Restart signal: reset(), rewind the clock and every live price, then
        seed `backfill_days` of synthetic history and the first wealth snapshot.
        """
        self.reset()
        self.current_tick = 0
        for instrument in self.instruments.values():
            instrument.initialize_price()
        self.history.clear()
        self.history.prefill(self.instruments.values(), backfill_days)
        self.tracker.restart(self)

    # ========================================================================
    # PLAYER-FACING SUMMARIES
    # ========================================================================

    def portfolio_risk_label(self) -> str:
        """
        Share-weighted risk of the open positions (LOW=1, MEDIUM=2, HIGH=3).

        < 1.5 "Low Risk", < 2.5 "Medium Risk", else "High Risk".
        """
        total_shares = 0
        weighted = 0
        for position in self.positions:
            weighted += position.shares * position.instrument.risk.score
            total_shares += position.shares
        if total_shares == 0:
            return "No Holdings"
        average = weighted / total_shares
        if average < 1.5:
            return "Low Risk"
        if average < 2.5:
            return "Medium Risk"
        return "High Risk"

    def holdings_summary(self) -> str:
        positions = self.positions
        if not positions:
            return "No holdings yet.\nBuy shares in the Invest tab."
        return "\n".join(f"{p.instrument.name}: {p.shares} shares" for p in positions)

    def portfolio_summary(self) -> str:
        positions = self.positions
        if not positions:
            return ("You have no active investments.\n"
                    "Investing allows your money to grow over time through compound interest!")

        lines = [
            f"Portfolio: {len(positions)} investment(s)",
            f"Total invested: ${self.total_principal:,.0f}",
            f"Current value: ${self.total_portfolio_value:,.0f}",
            f"Total gain/loss: ${self.total_gain:,.0f} ({self.total_percentage_return * 100:.1f}%)",
            "",
        ]
        for p in positions:
            sign = "+" if p.unrealized_gain >= 0 else ""
            lines.append(f"• {p.instrument.name}: ${p.current_value:,.0f} ({sign}{p.unrealized_gain:,.0f})")
        return "\n".join(lines)

    def investment_vs_saving(self, instrument: Instrument, amount: float, ticks: int) -> str:
        projected = instrument.project_value(amount, ticks)
        return (
            f"If you invest ${amount:,.0f} in {instrument.name}:\n"
            f"• After {ticks} days: ~${projected:,.0f}\n"
            f"• Potential gain: ~${projected - amount:,.0f}\n\n"
            f"If you keep ${amount:,.0f} in your wallet:\n"
            f"• After {ticks} days: ${amount:,.0f}\n"
            f"• Gain: $0"
        )

    def __repr__(self) -> str:
        return (f"InvestmentSystem(tick={self.current_tick}, {len(self.instruments)} instruments, "
                f"{len(self.positions)} open, value={self.total_portfolio_value})")
