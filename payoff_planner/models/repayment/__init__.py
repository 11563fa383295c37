"""
Repayment simulation module.

This module provides the month-by-month repayment simulator that pays down a
set of debts under a repayment policy.

Key Components:
- accounts: Mutable per-run working copies of debt records
- allocation: Surplus allocation policies (avalanche, snowball)
- engine: Month stepper, termination and the compute_*_plan entry points
- result: Result models for the monthly ledger and run totals
"""

from .allocation import AllocationPolicy, AvalanchePolicy, SnowballPolicy
from .engine import (
    MAX_SIMULATION_MONTHS,
    PlanInputError,
    RepaymentSimulator,
    compute_avalanche_plan,
    compute_minimum_plan,
    compute_plan,
    compute_snowball_plan,
    validate_plan_inputs,
)
from .result import (
    MonthlyDebtPayment,
    MonthlySnapshot,
    PlanStatus,
    RepaymentStrategy,
    SimulationResult,
)

__all__ = [
    "AllocationPolicy",
    "AvalanchePolicy",
    "SnowballPolicy",
    "MAX_SIMULATION_MONTHS",
    "PlanInputError",
    "RepaymentSimulator",
    "compute_avalanche_plan",
    "compute_minimum_plan",
    "compute_plan",
    "compute_snowball_plan",
    "validate_plan_inputs",
    "MonthlyDebtPayment",
    "MonthlySnapshot",
    "PlanStatus",
    "RepaymentStrategy",
    "SimulationResult",
]
