"""
Repayment simulation engine.

This module advances a debt set one month at a time under a repayment
policy. Every month each open debt accrues interest and receives its minimum
payment. For the avalanche and snowball policies, whatever is left of the
fixed monthly budget is then allocated to priority debts.

The fixed monthly budget is the sum of every debt's first-month minimum plus
the extra monthly budget, and it stays constant for the whole run. When a
debt is paid off, or a revolving minimum shrinks with its balance, the freed
capacity rolls over to the priority debt instead of disappearing.

Runs stop when every balance is zero (complete), or at the month cap or the
last month whose totals are still finite floats (aborted). An aborted run is
returned as a normal result.
"""

import logging
import math
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from ..debt import InstallmentDebt, RevolvingDebt, parse_debts
from .accounts import DebtAccount, calculate_starting_minimum, open_accounts
from .allocation import (
    AllocationPolicy,
    AvalanchePolicy,
    SnowballPolicy,
    allocate_surplus,
)
from .result import (
    MonthlySnapshot,
    PlanStatus,
    RepaymentStrategy,
    SimulationResult,
)

logger = logging.getLogger(__name__)

# 100 years; bounds runs whose minimums never outpace interest.
MAX_SIMULATION_MONTHS = 1200

_POLICIES: Dict[RepaymentStrategy, Optional[AllocationPolicy]] = {
    RepaymentStrategy.MINIMUM: None,
    RepaymentStrategy.AVALANCHE: AvalanchePolicy(),
    RepaymentStrategy.SNOWBALL: SnowballPolicy(),
}


class PlanInputError(ValueError):
    """Raised when a debt snapshot or budget cannot be simulated."""


DebtInput = Union[RevolvingDebt, InstallmentDebt, Dict[str, Any]]


def validate_plan_inputs(
    debts: Sequence[DebtInput], extra_monthly_budget: float = 0.0
) -> List[Union[RevolvingDebt, InstallmentDebt]]:
    """
    Validate a debt snapshot and budget before simulating.

    Args:
        debts: Debt models or mappings with a ``kind`` key
        extra_monthly_budget: Extra monthly payment

    Returns:
        Validated debt models in input order

    Raises:
        PlanInputError: If any input is invalid
    """
    if isinstance(extra_monthly_budget, bool) or not isinstance(
        extra_monthly_budget, (int, float)
    ):
        raise PlanInputError(
            f"extra_monthly_budget must be a number, got {extra_monthly_budget!r}"
        )
    if not math.isfinite(extra_monthly_budget) or extra_monthly_budget < 0:
        raise PlanInputError(
            f"extra_monthly_budget must be a finite non-negative amount, "
            f"got {extra_monthly_budget}"
        )

    try:
        parsed = parse_debts(debts)
    except ValidationError as e:
        raise PlanInputError(f"Invalid debt data: {e}") from e

    seen_ids = set()
    for debt in parsed:
        if debt.id in seen_ids:
            raise PlanInputError(f"Duplicate debt id: {debt.id}")
        seen_ids.add(debt.id)

    return parsed


class RepaymentSimulator:
    """Simulates month-by-month repayment of a debt set under one policy."""

    def __init__(
        self,
        strategy: RepaymentStrategy,
        max_months: int = MAX_SIMULATION_MONTHS,
        policy: Optional[AllocationPolicy] = None,
    ):
        """Initialize the simulator.

        Args:
            strategy: Repayment policy to simulate
            max_months: Month cap after which the run is aborted
            policy: Allocation policy override (defaults to the strategy's)
        """
        strategy = RepaymentStrategy(strategy)
        if not 1 <= max_months <= MAX_SIMULATION_MONTHS:
            raise ValueError(
                f"max_months must be between 1 and {MAX_SIMULATION_MONTHS}, "
                f"got {max_months}"
            )
        if strategy == RepaymentStrategy.MINIMUM and policy is not None:
            raise ValueError("The minimum strategy does not allocate surplus")

        self.strategy = strategy
        self.max_months = max_months
        self.policy = policy if policy is not None else _POLICIES[strategy]

    @staticmethod
    def calculate_monthly_budget(
        debts: Sequence[Union[RevolvingDebt, InstallmentDebt]],
        extra_monthly_budget: float = 0.0,
    ) -> float:
        """Calculate the fixed monthly budget established at the start of a run."""
        return (
            sum(calculate_starting_minimum(debt) for debt in debts)
            + extra_monthly_budget
        )

    def run(
        self, debts: Sequence[DebtInput], extra_monthly_budget: float = 0.0
    ) -> Optional[SimulationResult]:
        """
        Run the simulation.

        Args:
            debts: Debt snapshot; never mutated
            extra_monthly_budget: Extra payment applied every month

        Returns:
            The simulation result, or None when there are no debts

        Raises:
            PlanInputError: If the inputs are invalid
        """
        validated = validate_plan_inputs(debts, extra_monthly_budget)
        if not validated:
            return None

        if self.strategy == RepaymentStrategy.MINIMUM:
            extra_monthly_budget = 0.0
        extra_monthly_budget = float(extra_monthly_budget)

        accounts = open_accounts(validated)
        monthly_budget = self.calculate_monthly_budget(validated, extra_monthly_budget)

        total_paid = 0.0
        total_interest = 0.0
        months = 0
        monthly_payments: List[MonthlySnapshot] = []

        while any(not account.is_paid_off for account in accounts):
            if months >= self.max_months:
                break

            month_paid, month_interest = self.step_month(
                accounts, monthly_budget, months + 1
            )
            remaining_debt = sum(account.balance for account in accounts)

            # Underwater debts at extreme rates can compound past float range
            if not all(
                math.isfinite(value)
                for value in (
                    total_paid + month_paid,
                    total_interest + month_interest,
                    remaining_debt,
                )
            ):
                logger.warning(
                    f"{self.strategy.value} plan balances overflowed in month "
                    f"{months + 1}; stopping at month {months}"
                )
                break

            months += 1
            total_paid += month_paid
            total_interest += month_interest

            monthly_payments.append(
                MonthlySnapshot(
                    month=months,
                    debt_payments=[
                        account.to_payment_record() for account in accounts
                    ],
                    total_paid=total_paid,
                    total_interest=total_interest,
                    remaining_debt=remaining_debt,
                )
            )

        if any(not account.is_paid_off for account in accounts):
            status = PlanStatus.ABORTED
            logger.warning(
                f"{self.strategy.value} plan did not pay off all debts after "
                f"{months} months (cap {self.max_months})"
            )
        else:
            status = PlanStatus.COMPLETE

        return SimulationResult(
            strategy=self.strategy,
            status=status,
            total_paid=total_paid,
            total_interest=total_interest,
            months=months,
            monthly_budget=monthly_budget,
            extra_monthly_budget=extra_monthly_budget,
            debt_ids=[account.debt_id for account in accounts],
            monthly_payments=monthly_payments,
        )

    def step_month(
        self, accounts: Sequence[DebtAccount], monthly_budget: float, month: int
    ) -> Tuple[float, float]:
        """
        Advance every account by one month.

        Args:
            accounts: Working accounts, updated in place
            monthly_budget: Fixed monthly budget for the run
            month: Month number (1-based)

        Returns:
            Tuple of (amount paid this month, interest charged this month)
        """
        minimums_paid = 0.0
        interest = 0.0

        for account in accounts:
            account.start_month()
            if account.is_paid_off:
                continue
            interest += account.accrue_interest()
            minimums_paid += account.pay_minimum()

        extra_paid = 0.0
        if self.policy is not None:
            surplus = max(monthly_budget - minimums_paid, 0.0)
            leftover = allocate_surplus(accounts, surplus, self.policy, month)
            extra_paid = surplus - leftover

        return minimums_paid + extra_paid, interest


def compute_plan(
    debts: Sequence[DebtInput],
    strategy: RepaymentStrategy,
    extra_monthly_budget: float = 0.0,
    max_months: int = MAX_SIMULATION_MONTHS,
) -> Optional[SimulationResult]:
    """Simulate a debt set under the given strategy."""
    simulator = RepaymentSimulator(strategy, max_months=max_months)
    return simulator.run(debts, extra_monthly_budget)


def compute_minimum_plan(debts: Sequence[DebtInput]) -> Optional[SimulationResult]:
    """Simulate paying only the minimum on every debt."""
    return compute_plan(debts, RepaymentStrategy.MINIMUM)


def compute_avalanche_plan(
    debts: Sequence[DebtInput], extra_monthly_budget: float = 0.0
) -> Optional[SimulationResult]:
    """Simulate the avalanche method (highest APR first)."""
    return compute_plan(debts, RepaymentStrategy.AVALANCHE, extra_monthly_budget)


def compute_snowball_plan(
    debts: Sequence[DebtInput], extra_monthly_budget: float = 0.0
) -> Optional[SimulationResult]:
    """Simulate the snowball method (smallest balance first)."""
    return compute_plan(debts, RepaymentStrategy.SNOWBALL, extra_monthly_budget)
