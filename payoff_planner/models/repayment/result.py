"""
Repayment simulation result model.

This module provides the result models produced by one run of the repayment
simulator: a per-debt payment record for every simulated month, the month's
ledger entry with running totals, and the overall result with helper
methods for common queries (payoff months, ledger matrices, sampled views).

All matrices follow the convention (months × debts), with debt columns in
the order the debts were supplied.
"""

from enum import Enum
from typing import Dict, List, Optional

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field, computed_field


class RepaymentStrategy(str, Enum):
    """Repayment policy used for a simulation run."""

    MINIMUM = "minimum"
    AVALANCHE = "avalanche"
    SNOWBALL = "snowball"


class PlanStatus(str, Enum):
    """Terminal state of a simulation run."""

    COMPLETE = "complete"
    ABORTED = "aborted"


SCHEDULE_FREQUENCIES: Dict[str, int] = {"monthly": 1, "biannual": 6, "yearly": 12}


class MonthlyDebtPayment(BaseModel):
    """Payment applied to a single debt in a single month."""

    model_config = ConfigDict(frozen=True)

    debt_id: str = Field(..., description="Identifier of the debt")
    payment: float = Field(..., ge=0, description="Total payment applied")
    minimum_payment: float = Field(..., ge=0, description="Minimum portion applied")
    extra_payment: float = Field(
        default=0.0, ge=0, description="Surplus allocated on top of the minimum"
    )
    balance: float = Field(..., ge=0, description="Balance after payment")
    interest_charged: float = Field(
        ..., ge=0, description="Interest accrued this month"
    )


class MonthlySnapshot(BaseModel):
    """Ledger entry for one simulated month."""

    model_config = ConfigDict(frozen=True)

    month: int = Field(..., ge=1, description="Month number (1-based)")
    debt_payments: List[MonthlyDebtPayment] = Field(
        ..., description="One payment record per debt, in input order"
    )
    total_paid: float = Field(..., ge=0, description="Cumulative amount paid")
    total_interest: float = Field(
        ..., ge=0, description="Cumulative interest charged"
    )
    remaining_debt: float = Field(
        ..., ge=0, description="Sum of balances at month end"
    )

    @computed_field  # type: ignore[misc]
    @property
    def month_payment(self) -> float:
        """Total paid across all debts this month."""
        return sum(p.payment for p in self.debt_payments)

    def get_payment(self, debt_id: str) -> Optional[MonthlyDebtPayment]:
        """Get the payment record for a debt, if present."""
        for payment in self.debt_payments:
            if payment.debt_id == debt_id:
                return payment
        return None


class SimulationResult(BaseModel):
    """
    Result of one repayment simulation run.

    Example:
        ```python
        result = compute_avalanche_plan(debts, extra_monthly_budget=200.0)

        if result.is_complete:
            print(f"Debt free in {result.months} months")
        balances = result.balance_matrix()  # (months × debts)
        ```
    """

    model_config = ConfigDict(frozen=True)

    strategy: RepaymentStrategy = Field(..., description="Repayment policy")
    status: PlanStatus = Field(..., description="Complete or aborted at the cap")
    total_paid: float = Field(..., ge=0, description="Sum of all payments")
    total_interest: float = Field(..., ge=0, description="Sum of interest charged")
    months: int = Field(..., ge=0, description="Number of simulated months")
    monthly_budget: float = Field(
        ..., ge=0, description="Fixed monthly budget established at start"
    )
    extra_monthly_budget: float = Field(
        default=0.0, ge=0, description="Extra payment on top of minimums"
    )
    debt_ids: List[str] = Field(..., description="Debt identifiers in input order")
    monthly_payments: List[MonthlySnapshot] = Field(
        default_factory=list, description="Ordered monthly ledger"
    )

    @property
    def is_complete(self) -> bool:
        """Whether every balance reached zero before the cap."""
        return self.status == PlanStatus.COMPLETE

    @property
    def years_to_payoff(self) -> float:
        """Payoff duration in years."""
        return self.months / 12

    def _ledger_matrix(self, field_name: str) -> NDArray[np.float64]:
        matrix = np.zeros((len(self.monthly_payments), len(self.debt_ids)))
        for row, snapshot in enumerate(self.monthly_payments):
            for col, payment in enumerate(snapshot.debt_payments):
                matrix[row, col] = getattr(payment, field_name)
        return matrix

    def balance_matrix(self) -> NDArray[np.float64]:
        """Get month-end balances (months × debts)."""
        return self._ledger_matrix("balance")

    def payment_matrix(self) -> NDArray[np.float64]:
        """Get total payments (months × debts)."""
        return self._ledger_matrix("payment")

    def interest_matrix(self) -> NDArray[np.float64]:
        """Get interest charged (months × debts)."""
        return self._ledger_matrix("interest_charged")

    def monthly_totals(self) -> NDArray[np.float64]:
        """Get the total paid across all debts for each month."""
        return self.payment_matrix().sum(axis=1)

    def get_payoff_month(self, debt_id: str) -> Optional[int]:
        """
        Get the month a debt was paid off.

        Args:
            debt_id: Identifier of the debt

        Returns:
            1-based month of the final payment, 0 if the debt started at a
            zero balance, or None if it was never paid off
        """
        if debt_id not in self.debt_ids:
            raise KeyError(f"Unknown debt id: {debt_id}")

        for snapshot in self.monthly_payments:
            payment = snapshot.get_payment(debt_id)
            if payment is None:
                continue
            if payment.balance == 0:
                return snapshot.month if payment.payment > 0 else 0
        return 0 if not self.monthly_payments and self.is_complete else None

    def sample_schedule(self, frequency: str = "monthly") -> List[MonthlySnapshot]:
        """
        Get a sampled view of the ledger.

        Args:
            frequency: One of "monthly", "biannual" or "yearly"

        Returns:
            Every month, or the first month of each 6 or 12 month period
        """
        if frequency not in SCHEDULE_FREQUENCIES:
            raise ValueError(
                f"frequency must be one of {sorted(SCHEDULE_FREQUENCIES)}, "
                f"got {frequency!r}"
            )
        step = SCHEDULE_FREQUENCIES[frequency]
        return self.monthly_payments[::step]
