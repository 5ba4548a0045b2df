"""
test_wallet.py - Unit tests for Wallet and the CashAccount protocol
"""

import pytest
from decimal import Decimal

from investsim import Wallet, CashAccount

from tests.fake_account import FakeAccount


class TestWallet:

    def test_starting_balance(self):
        assert Wallet(Decimal("250")).balance() == Decimal("250")

    def test_float_balance_converted_exactly(self):
        assert Wallet(0.1).balance() == Decimal("0.1")

    def test_negative_start_rejected(self):
        with pytest.raises(ValueError):
            Wallet(Decimal("-1"))

    def test_debit_within_balance(self):
        w = Wallet(Decimal("100"))
        assert w.try_debit(Decimal("60"))
        assert w.balance() == Decimal("40")

    def test_debit_exact_balance(self):
        w = Wallet(Decimal("100"))
        assert w.try_debit(Decimal("100"))
        assert w.balance() == Decimal("0")

    def test_debit_over_balance(self):
        w = Wallet(Decimal("100"))
        assert not w.try_debit(Decimal("100.01"))
        assert w.balance() == Decimal("100")

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5")])
    def test_non_positive_debit(self, amount):
        w = Wallet(Decimal("100"))
        assert not w.try_debit(amount)
        assert w.balance() == Decimal("100")

    def test_credit(self):
        w = Wallet()
        w.credit(Decimal("12.50"))
        assert w.balance() == Decimal("12.50")

    def test_negative_credit_rejected(self):
        with pytest.raises(ValueError):
            Wallet().credit(Decimal("-1"))

    def test_can_afford(self):
        w = Wallet(Decimal("10"))
        assert w.can_afford(10)
        assert not w.can_afford(Decimal("10.01"))

    def test_reset(self):
        w = Wallet(Decimal("10"))
        w.credit(Decimal("5"))
        w.reset()
        assert w.balance() == Decimal("10")

    def test_verbose_rejection(self, capsys):
        w = Wallet(Decimal("1"), verbose=True)
        w.try_debit(Decimal("5"))
        assert "REJECTED" in capsys.readouterr().out


class TestProtocol:

    def test_wallet_is_cash_account(self):
        assert isinstance(Wallet(), CashAccount)

    def test_fake_is_cash_account(self):
        assert isinstance(FakeAccount(), CashAccount)
