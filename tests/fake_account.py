"""
fake_account.py - Test helper for CashAccount

A minimal CashAccount that records every call, for checking exactly what the
investment system debits and credits.
"""

from __future__ import annotations
from decimal import Decimal
from typing import List, Tuple


class FakeAccount:
    """
    Recording CashAccount.

    Example:
        account = FakeAccount(Decimal("1000"))
        system = InvestmentSystem(account, [acme])
        system.buy_shares(acme, 2)
        account.calls   # [("debit", Decimal("200.0"), True)]
    """

    def __init__(self, balance: Decimal = Decimal("0")):
        self._balance = Decimal(balance)
        self.calls: List[Tuple[str, Decimal, bool]] = []

    def balance(self) -> Decimal:
        return self._balance

    def try_debit(self, amount: Decimal) -> bool:
        ok = self._balance >= amount
        if ok:
            self._balance -= amount
        self.calls.append(("debit", amount, ok))
        return ok

    def credit(self, amount: Decimal) -> None:
        self._balance += amount
        self.calls.append(("credit", amount, True))

    @property
    def debits(self) -> List[Decimal]:
        return [amount for kind, amount, ok in self.calls if kind == "debit" and ok]

    @property
    def credits(self) -> List[Decimal]:
        return [amount for kind, amount, _ in self.calls if kind == "credit"]
