"""
Analysis helpers for repayment plans.

This module compares the repayment strategies against paying minimums only,
works out when each debt is paid off, checks that accelerated plans keep
their monthly payment constant, and summarizes a plan's payment ledger.
"""

from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from .repayment.engine import (
    MAX_SIMULATION_MONTHS,
    DebtInput,
    compute_plan,
    validate_plan_inputs,
)
from .repayment.result import RepaymentStrategy, SimulationResult


class StrategySavings(BaseModel):
    """Savings of a strategy relative to paying minimums only."""

    model_config = ConfigDict(frozen=True)

    strategy: RepaymentStrategy = Field(..., description="Compared strategy")
    interest_saved: float = Field(..., description="Interest saved (may be negative)")
    months_saved: int = Field(..., description="Months saved (may be negative)")
    interest_saved_percent: float = Field(
        ..., description="Interest saved as a percentage of minimum-only interest"
    )


class PlanComparison(BaseModel):
    """Results of all three strategies for the same debt snapshot."""

    model_config = ConfigDict(frozen=True)

    minimum: SimulationResult = Field(..., description="Minimum payments only")
    avalanche: SimulationResult = Field(..., description="Highest APR first")
    snowball: SimulationResult = Field(..., description="Lowest balance first")

    def get_result(self, strategy: RepaymentStrategy) -> SimulationResult:
        """Get the result for a strategy."""
        return getattr(self, RepaymentStrategy(strategy).value)

    def savings(self, strategy: RepaymentStrategy) -> StrategySavings:
        """Calculate a strategy's savings relative to minimum payments."""
        result = self.get_result(strategy)
        interest_saved = self.minimum.total_interest - result.total_interest
        if self.minimum.total_interest > 0:
            percent = interest_saved / self.minimum.total_interest * 100
        else:
            percent = 0.0

        return StrategySavings(
            strategy=result.strategy,
            interest_saved=interest_saved,
            months_saved=self.minimum.months - result.months,
            interest_saved_percent=percent,
        )


class DebtPayoff(BaseModel):
    """When a single debt is paid off within a plan."""

    model_config = ConfigDict(frozen=True)

    debt_id: str
    name: str
    apr: float
    starting_balance: float
    payoff_month: int = Field(
        ..., ge=0, description="Month of final payment (plan length if never)"
    )
    paid_off: bool = Field(..., description="Whether the debt reached zero")


def compare_strategies(
    debts: Sequence[DebtInput],
    extra_monthly_budget: float = 0.0,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> Optional[PlanComparison]:
    """
    Run every strategy against the same debt snapshot.

    Args:
        debts: Debt snapshot
        extra_monthly_budget: Extra monthly payment for accelerated strategies
        max_months: Month cap for every run

    Returns:
        Comparison of the three plans, or None when there are no debts
    """
    validated = validate_plan_inputs(debts, extra_monthly_budget)
    if not validated:
        return None

    return PlanComparison(
        **{
            strategy.value: compute_plan(
                validated, strategy, extra_monthly_budget, max_months=max_months
            )
            for strategy in RepaymentStrategy
        }
    )


def get_debt_payoff_order(
    result: SimulationResult, debts: Sequence[DebtInput]
) -> List[DebtPayoff]:
    """
    List debts with their payoff month, in the order the strategy targets them.

    Avalanche plans are ordered by highest APR, snowball plans by lowest
    starting balance, and minimum-only plans by payoff month.

    Debts are matched to the result's ledger columns by position, so mappings
    without an ``id`` line up with the ids generated for the run.

    Args:
        result: Simulation result
        debts: The debt snapshot the result was computed from

    Returns:
        Debt payoff entries

    Raises:
        ValueError: If the snapshot has a different number of debts
    """
    validated = validate_plan_inputs(debts)
    if len(validated) != len(result.debt_ids):
        raise ValueError(
            f"Expected {len(result.debt_ids)} debts for this result, "
            f"got {len(validated)}"
        )

    payoffs = []
    for debt, debt_id in zip(validated, result.debt_ids):
        payoff_month = result.get_payoff_month(debt_id)
        payoffs.append(
            DebtPayoff(
                debt_id=debt_id,
                name=debt.name,
                apr=debt.apr,
                starting_balance=debt.balance,
                payoff_month=result.months if payoff_month is None else payoff_month,
                paid_off=payoff_month is not None,
            )
        )

    if result.strategy == RepaymentStrategy.AVALANCHE:
        return sorted(payoffs, key=lambda p: -p.apr)
    if result.strategy == RepaymentStrategy.SNOWBALL:
        return sorted(payoffs, key=lambda p: p.starting_balance)
    return sorted(payoffs, key=lambda p: p.payoff_month)


def find_inconsistent_months(
    result: SimulationResult, tolerance: float = 0.10
) -> List[Dict[str, float]]:
    """
    Find months whose total payment differs from the fixed monthly budget.

    The final month may fall short of the budget when the remaining balance is
    smaller than it; that is not an inconsistency.

    Args:
        result: Simulation result
        tolerance: Allowed absolute difference

    Returns:
        One entry per inconsistent month with actual, expected and difference
    """
    totals = result.monthly_totals()
    inconsistent = []

    for index, actual in enumerate(totals):
        difference = abs(actual - result.monthly_budget)
        is_last_month = index == len(totals) - 1
        if difference > tolerance and not (
            is_last_month and actual < result.monthly_budget
        ):
            inconsistent.append(
                {
                    "month": result.monthly_payments[index].month,
                    "actual": float(actual),
                    "expected": result.monthly_budget,
                    "difference": float(difference),
                }
            )

    return inconsistent


def validate_payment_consistency(
    result: SimulationResult, tolerance: float = 0.10
) -> Tuple[bool, str]:
    """
    Check that an accelerated plan pays its full budget every month.

    Args:
        result: Simulation result
        tolerance: Allowed absolute difference per month

    Returns:
        Tuple of (is_valid, message)
    """
    if result.strategy == RepaymentStrategy.MINIMUM:
        return False, "Minimum-only plans do not hold a fixed monthly budget"
    if not result.monthly_payments:
        return False, "No monthly payments to check"

    inconsistent = find_inconsistent_months(result, tolerance)
    if inconsistent:
        return False, f"{len(inconsistent)} months with inconsistent payments"

    return True, f"All {result.months} months have consistent payments"


def calculate_plan_statistics(result: SimulationResult) -> Dict[str, float]:
    """
    Calculate summary statistics from a plan's ledger.

    Args:
        result: Simulation result

    Returns:
        Dictionary of plan statistics
    """
    totals = result.monthly_totals()
    if len(totals) == 0:
        return {
            "months": 0,
            "years": 0.0,
            "total_paid": 0.0,
            "total_interest": 0.0,
            "principal_paid": 0.0,
            "interest_share": 0.0,
            "average_monthly_payment": 0.0,
            "max_monthly_payment": 0.0,
            "min_monthly_payment": 0.0,
            "final_remaining_debt": 0.0,
        }

    principal_paid = result.total_paid - result.total_interest
    return {
        "months": result.months,
        "years": result.years_to_payoff,
        "total_paid": result.total_paid,
        "total_interest": result.total_interest,
        "principal_paid": principal_paid,
        "interest_share": (
            result.total_interest / result.total_paid if result.total_paid > 0 else 0.0
        ),
        "average_monthly_payment": float(np.mean(totals)),
        "max_monthly_payment": float(np.max(totals)),
        "min_monthly_payment": float(np.min(totals)),
        "final_remaining_debt": result.monthly_payments[-1].remaining_debt,
    }
