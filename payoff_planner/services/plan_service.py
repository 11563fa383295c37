"""
Plan service for running repayment simulations on request payloads.

This service turns a posted debt snapshot into simulation results for one or
all repayment strategies, along with the savings and payoff order views the
planner UI displays.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from payoff_planner.models.plan_analysis import (
    compare_strategies,
    get_debt_payoff_order,
)
from payoff_planner.models.repayment.engine import (
    MAX_SIMULATION_MONTHS,
    PlanInputError,
    compute_plan,
    validate_plan_inputs,
)
from payoff_planner.models.repayment.result import RepaymentStrategy, SimulationResult

logger = logging.getLogger(__name__)


class PlanService:
    """Service for building repayment plans from request payloads."""

    def __init__(self, max_months: int = MAX_SIMULATION_MONTHS) -> None:
        """Initialize the plan service.

        Args:
            max_months: Month cap passed to every simulation
        """
        self.max_months = max_months
        self.logger = logging.getLogger(__name__)

    def parse_request(self, payload: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """Extract and validate debts and the extra payment from a payload.

        Raises:
            PlanInputError: If the payload is malformed or has no debts
        """
        if payload is None or not isinstance(payload, Mapping):
            raise PlanInputError("Request body must be a JSON object")

        raw_debts = payload.get("debts")
        if not isinstance(raw_debts, list):
            raise PlanInputError("debts must be a list")

        extra_payment = payload.get("extra_monthly_payment", 0)
        debts = validate_plan_inputs(raw_debts, extra_payment)
        if not debts:
            raise PlanInputError("At least one debt is required")

        return {"debts": debts, "extra_monthly_payment": float(extra_payment)}

    def build_plan(
        self,
        payload: Optional[Mapping[str, Any]],
        strategy: RepaymentStrategy,
        include_ledger: bool = True,
    ) -> Dict[str, Any]:
        """Run a single strategy for a payload.

        Args:
            payload: Request body with ``debts`` and ``extra_monthly_payment``
            strategy: Strategy to simulate
            include_ledger: Whether to include the monthly ledger

        Returns:
            JSON-serializable plan dictionary
        """
        request = self.parse_request(payload)
        debts = request["debts"]

        self.logger.info(f"Building {strategy.value} plan for {len(debts)} debts")
        result = compute_plan(
            debts,
            strategy,
            request["extra_monthly_payment"],
            max_months=self.max_months,
        )
        return self._serialize_result(result, debts, include_ledger)

    def build_comparison(
        self, payload: Optional[Mapping[str, Any]], include_ledger: bool = True
    ) -> Dict[str, Any]:
        """Run every strategy for a payload and compare them.

        Args:
            payload: Request body with ``debts`` and ``extra_monthly_payment``
            include_ledger: Whether to include monthly ledgers

        Returns:
            JSON-serializable comparison dictionary
        """
        request = self.parse_request(payload)
        debts = request["debts"]
        extra_payment = request["extra_monthly_payment"]

        self.logger.info(
            f"Comparing strategies for {len(debts)} debts "
            f"with extra payment {extra_payment:.2f}"
        )
        comparison = compare_strategies(
            debts, extra_payment, max_months=self.max_months
        )

        plans = {}
        for strategy in RepaymentStrategy:
            plan = self._serialize_result(
                comparison.get_result(strategy), debts, include_ledger
            )
            if strategy != RepaymentStrategy.MINIMUM:
                plan["savings"] = comparison.savings(strategy).model_dump(mode="json")
            plans[strategy.value] = plan

        return {"extra_monthly_payment": extra_payment, "plans": plans}

    def _serialize_result(
        self,
        result: SimulationResult,
        debts: List[Any],
        include_ledger: bool,
    ) -> Dict[str, Any]:
        exclude = None if include_ledger else {"monthly_payments"}
        data = result.model_dump(mode="json", exclude=exclude)
        data["years_to_payoff"] = round(result.years_to_payoff, 1)
        data["payoff_order"] = [
            payoff.model_dump(mode="json")
            for payoff in get_debt_payoff_order(result, debts)
        ]
        return data
