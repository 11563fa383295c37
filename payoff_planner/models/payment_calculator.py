"""
Interest and minimum-payment calculations for debt repayment planning.

This module provides the per-debt, per-month arithmetic used by the repayment
simulator: simple monthly interest accrual on a nominal APR, the dynamic
credit-card style minimum for revolving debts and the fixed contractual
minimum for installment debts.
"""

# Balances (and surplus) below one cent are treated as exactly zero.
PAYOFF_EPSILON = 0.01

# Revolving minimum: 1% of the balance plus the month's interest, never
# less than $25 unless the balance itself is smaller.
REVOLVING_MINIMUM_RATE = 0.01
REVOLVING_MINIMUM_FLOOR = 25.0


class PaymentCalculator:
    """Calculator for monthly interest and minimum payments."""

    @staticmethod
    def calculate_monthly_interest(balance: float, apr: float) -> float:
        """
        Calculate one month of interest on a balance.

        Args:
            balance: Current balance
            apr: Annual percentage rate as a percentage (e.g., 24.99)

        Returns:
            Interest charged for the month
        """
        if balance <= 0:
            return 0.0
        return balance * (apr / 100) / 12

    @staticmethod
    def calculate_revolving_minimum(balance: float, apr: float) -> float:
        """
        Calculate the minimum due on a revolving (credit card) balance.

        The balance passed in is the balance after this month's interest has
        been added. The minimum is 1% of that balance plus a month of interest
        on it, floored at $25 (or the balance, when smaller) and capped at the
        balance so it never overpays.

        Args:
            balance: Post-interest balance
            apr: Annual percentage rate as a percentage

        Returns:
            Minimum payment due
        """
        if balance <= 0:
            return 0.0

        percentage_of_balance = balance * REVOLVING_MINIMUM_RATE
        monthly_interest = PaymentCalculator.calculate_monthly_interest(balance, apr)
        calculated_minimum = percentage_of_balance + monthly_interest
        floor = balance if balance < REVOLVING_MINIMUM_FLOOR else REVOLVING_MINIMUM_FLOOR

        return min(max(calculated_minimum, floor), balance)

    @staticmethod
    def calculate_installment_minimum(
        balance: float, fixed_minimum_payment: float
    ) -> float:
        """
        Calculate the minimum due on an installment loan.

        Args:
            balance: Post-interest balance
            fixed_minimum_payment: Contractual monthly payment

        Returns:
            The fixed payment, capped at the balance
        """
        if balance <= 0:
            return 0.0
        return min(fixed_minimum_payment, balance)

    @staticmethod
    def snap_to_zero(amount: float) -> float:
        """Treat sub-cent amounts as fully paid off."""
        if amount < PAYOFF_EPSILON:
            return 0.0
        return amount
