"""Data models and calculations for debt repayment planning."""

from .debt import (
    Debt,
    InstallmentDebt,
    RevolvingDebt,
    create_sample_debts,
    parse_debts,
)
from .payment_calculator import PAYOFF_EPSILON, PaymentCalculator
from .repayment import (
    MAX_SIMULATION_MONTHS,
    MonthlyDebtPayment,
    MonthlySnapshot,
    PlanInputError,
    PlanStatus,
    RepaymentSimulator,
    RepaymentStrategy,
    SimulationResult,
    compute_avalanche_plan,
    compute_minimum_plan,
    compute_plan,
    compute_snowball_plan,
)
from .plan_analysis import (
    DebtPayoff,
    PlanComparison,
    StrategySavings,
    calculate_plan_statistics,
    compare_strategies,
    find_inconsistent_months,
    get_debt_payoff_order,
    validate_payment_consistency,
)

__all__ = [
    "Debt",
    "InstallmentDebt",
    "RevolvingDebt",
    "create_sample_debts",
    "parse_debts",
    "PAYOFF_EPSILON",
    "PaymentCalculator",
    "MAX_SIMULATION_MONTHS",
    "MonthlyDebtPayment",
    "MonthlySnapshot",
    "PlanInputError",
    "PlanStatus",
    "RepaymentSimulator",
    "RepaymentStrategy",
    "SimulationResult",
    "compute_avalanche_plan",
    "compute_minimum_plan",
    "compute_plan",
    "compute_snowball_plan",
    "DebtPayoff",
    "PlanComparison",
    "StrategySavings",
    "calculate_plan_statistics",
    "compare_strategies",
    "find_inconsistent_months",
    "get_debt_payoff_order",
    "validate_payment_consistency",
]
