"""Mutable per-run working copies of debt records."""

from typing import List, Sequence, Union

from ..debt import InstallmentDebt, RevolvingDebt
from ..payment_calculator import PaymentCalculator
from .result import MonthlyDebtPayment


class DebtAccount:
    """
    Working state for one debt during a single simulation run.

    The caller's debt record is never touched; the account tracks the running
    balance and what happened to it in the current month.
    """

    def __init__(self, debt: Union[RevolvingDebt, InstallmentDebt], index: int):
        self.debt = debt
        self.index = index
        self.balance = PaymentCalculator.snap_to_zero(debt.balance)
        self.interest_charged = 0.0
        self.minimum_applied = 0.0
        self.extra_applied = 0.0

    @property
    def debt_id(self) -> str:
        return self.debt.id

    @property
    def apr(self) -> float:
        return self.debt.apr

    @property
    def is_paid_off(self) -> bool:
        return self.balance <= 0

    def start_month(self) -> None:
        """Clear the current month's activity."""
        self.interest_charged = 0.0
        self.minimum_applied = 0.0
        self.extra_applied = 0.0

    def accrue_interest(self) -> float:
        """Add a month of interest to the balance and return it."""
        interest = PaymentCalculator.calculate_monthly_interest(
            self.balance, self.debt.apr
        )
        self.balance += interest
        self.interest_charged = interest
        return interest

    def pay_minimum(self) -> float:
        """Apply this month's minimum to the post-interest balance."""
        minimum = self.debt.calculate_minimum_payment(self.balance)
        applied = min(minimum, self.balance)
        self.balance = PaymentCalculator.snap_to_zero(self.balance - applied)
        self.minimum_applied = applied
        return applied

    def pay_extra(self, amount: float) -> float:
        """Apply up to ``amount`` of surplus and return what was used."""
        applied = min(amount, self.balance)
        self.balance = PaymentCalculator.snap_to_zero(self.balance - applied)
        self.extra_applied += applied
        return applied

    def to_payment_record(self) -> MonthlyDebtPayment:
        return MonthlyDebtPayment(
            debt_id=self.debt_id,
            payment=self.minimum_applied + self.extra_applied,
            minimum_payment=self.minimum_applied,
            extra_payment=self.extra_applied,
            balance=self.balance,
            interest_charged=self.interest_charged,
        )


def open_accounts(
    debts: Sequence[Union[RevolvingDebt, InstallmentDebt]]
) -> List[DebtAccount]:
    """Clone debts into fresh working accounts, preserving input order."""
    return [DebtAccount(debt, index) for index, debt in enumerate(debts)]


def calculate_starting_minimum(debt: Union[RevolvingDebt, InstallmentDebt]) -> float:
    """
    Calculate a debt's first-month minimum against its starting balance.

    Interest is accrued on the starting balance first, matching the order the
    month stepper applies it.
    """
    balance = PaymentCalculator.snap_to_zero(debt.balance)
    if balance <= 0:
        return 0.0
    # Minimums use the post-interest balance, not the starting one:
    # $1,000 at 24% gives $30.60 rather than $30.00
    balance += PaymentCalculator.calculate_monthly_interest(balance, debt.apr)
    return min(debt.calculate_minimum_payment(balance), balance)
