"""
account.py - Cash account interface

The investment system never looks inside the player's cash. It only calls:

    balance() -> Decimal
    try_debit(amount) -> bool
    credit(amount)

CashAccount is the protocol; Wallet is the in-memory implementation used by
the game loop and the tests.
"""
from __future__ import annotations
from decimal import Decimal
from typing import Protocol, Union, runtime_checkable

from .core import ZERO, to_decimal


Amount = Union[Decimal, float, int]


@runtime_checkable
class CashAccount(Protocol):
    """Protocol for the external cash balance debited by buys and credited by sells."""

    def balance(self) -> Decimal:
        ...

    def try_debit(self, amount: Decimal) -> bool:
        """Remove `amount` if the balance covers it. Returns False otherwise."""
        ...

    def credit(self, amount: Decimal) -> None:
        ...


class Wallet:
    """
    Single-currency cash balance.

    Args:
        starting_balance: Balance restored by reset()
        verbose: Print each debit and credit
    """

    def __init__(self, starting_balance: Amount = ZERO, verbose: bool = False):
        starting = to_decimal(starting_balance)
        if starting < ZERO:
            raise ValueError(f"starting_balance cannot be negative, got {starting}")
        self.starting_balance = starting
        self._balance = starting
        self.verbose = verbose

    def balance(self) -> Decimal:
        return self._balance

    def can_afford(self, amount: Amount) -> bool:
        return self._balance >= to_decimal(amount)

    def try_debit(self, amount: Amount) -> bool:
        amount = to_decimal(amount)
        if amount <= ZERO:
            if self.verbose:
                print(f"✗ REJECTED: non-positive debit {amount}")
            return False
        if self._balance < amount:
            if self.verbose:
                print(f"✗ REJECTED: cannot debit {amount}, balance {self._balance}")
            return False
        self._balance -= amount
        if self.verbose:
            print(f"-{amount} -> balance {self._balance}")
        return True

    def credit(self, amount: Amount) -> None:
        """
        Add `amount` to the balance.

        Raises:
            ValueError: If amount is negative
        """
        amount = to_decimal(amount)
        if amount < ZERO:
            raise ValueError(f"Cannot credit a negative amount: {amount}")
        self._balance += amount
        if self.verbose:
            print(f"+{amount} -> balance {self._balance}")

    def reset(self) -> None:
        self._balance = self.starting_balance

    def __repr__(self) -> str:
        return f"Wallet(balance={self._balance})"
