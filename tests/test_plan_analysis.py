"""
Tests for repayment plan analysis.

This module tests strategy comparison, payoff ordering, payment consistency
checks and ledger statistics.
"""

import pytest

from payoff_planner.models.debt import InstallmentDebt, RevolvingDebt
from payoff_planner.models.plan_analysis import (
    compare_strategies,
    calculate_plan_statistics,
    find_inconsistent_months,
    get_debt_payoff_order,
    validate_payment_consistency,
)
from payoff_planner.models.repayment.engine import (
    PlanInputError,
    compute_avalanche_plan,
    compute_minimum_plan,
    compute_snowball_plan,
)
from payoff_planner.models.repayment.result import (
    MonthlyDebtPayment,
    MonthlySnapshot,
    PlanStatus,
    RepaymentStrategy,
    SimulationResult,
)


class TestCompareStrategies:
    """Test cases for running every strategy side by side."""

    def test_comparison_has_every_strategy(self, mixed_debts):
        """Test that all three plans are computed for the same snapshot."""
        comparison = compare_strategies(mixed_debts, 200.0)

        assert comparison.minimum.strategy == RepaymentStrategy.MINIMUM
        assert comparison.avalanche.strategy == RepaymentStrategy.AVALANCHE
        assert comparison.snowball.strategy == RepaymentStrategy.SNOWBALL
        assert comparison.minimum.extra_monthly_budget == 0.0
        assert comparison.avalanche.extra_monthly_budget == 200.0

    def test_accelerated_plans_save_interest_and_time(self, mixed_debts):
        """Test that extra payments beat paying minimums only."""
        comparison = compare_strategies(mixed_debts, 200.0)

        for strategy in (RepaymentStrategy.AVALANCHE, RepaymentStrategy.SNOWBALL):
            savings = comparison.savings(strategy)
            assert savings.interest_saved > 0
            assert savings.months_saved > 0
            assert 0 < savings.interest_saved_percent < 100

    def test_avalanche_interest_never_exceeds_snowball(self, mixed_debts):
        """Test that targeting the highest APR costs no more interest."""
        comparison = compare_strategies(mixed_debts, 200.0)
        assert (
            comparison.avalanche.total_interest
            <= comparison.snowball.total_interest + 0.01
        )

    def test_savings_without_interest(self):
        """Test savings when no interest is ever charged."""
        debts = [
            InstallmentDebt(
                id="zero", name="Zero Rate", balance=1200.0, apr=0.0,
                fixed_minimum_payment=100.0,
            )
        ]
        comparison = compare_strategies(debts, 100.0)
        savings = comparison.savings(RepaymentStrategy.AVALANCHE)

        assert comparison.minimum.months == 12
        assert comparison.avalanche.months == 6
        assert savings.months_saved == 6
        assert savings.interest_saved == 0.0
        assert savings.interest_saved_percent == 0.0

    def test_get_result_accepts_strategy_value(self, rollover_debts):
        """Test that results can be looked up by strategy name."""
        comparison = compare_strategies(rollover_debts)
        assert comparison.get_result("snowball") is comparison.snowball

    def test_empty_snapshot_returns_none(self):
        """Test that there is nothing to compare without debts."""
        assert compare_strategies([]) is None

    def test_invalid_extra_payment_rejected(self, rollover_debts):
        """Test that a negative extra payment is rejected."""
        with pytest.raises(PlanInputError):
            compare_strategies(rollover_debts, -5.0)


class TestDebtPayoffOrder:
    """Test cases for listing debts in payoff order."""

    def test_avalanche_order_by_apr(self, mixed_debts):
        """Test that avalanche plans list debts by highest APR."""
        result = compute_avalanche_plan(mixed_debts, 200.0)
        order = get_debt_payoff_order(result, mixed_debts)

        assert [p.debt_id for p in order] == ["card-1", "card-2", "loan-1"]
        assert all(p.paid_off for p in order)

    def test_snowball_order_by_balance(self, mixed_debts):
        """Test that snowball plans list debts by smallest starting balance."""
        result = compute_snowball_plan(mixed_debts, 200.0)
        order = get_debt_payoff_order(result, mixed_debts)

        assert [p.debt_id for p in order] == ["card-2", "card-1", "loan-1"]
        assert order[0].starting_balance == 3000.0

    def test_minimum_order_by_payoff_month(self, rollover_debts):
        """Test that minimum-only plans list debts by payoff month."""
        result = compute_minimum_plan(rollover_debts)
        order = get_debt_payoff_order(result, rollover_debts)

        assert [p.debt_id for p in order] == ["debt-a", "debt-b"]
        assert order[0].payoff_month == 6
        assert order[0].payoff_month < order[1].payoff_month
        assert order[1].payoff_month == result.months

    def test_mappings_without_ids(self):
        """Test that id-less mappings match the ids generated for the run."""
        debts = [
            {"kind": "revolving", "name": "Card", "balance": 500, "apr": 20},
            {"kind": "revolving", "name": "Store Card", "balance": 200, "apr": 26},
        ]
        result = compute_avalanche_plan(debts, 50)
        order = get_debt_payoff_order(result, debts)

        assert {p.debt_id for p in order} == set(result.debt_ids)
        assert [p.name for p in order] == ["Store Card", "Card"]
        assert all(p.paid_off for p in order)

    def test_mismatched_snapshot_rejected(self, rollover_debts):
        """Test that a snapshot of a different size is rejected."""
        result = compute_avalanche_plan(rollover_debts, 0)
        with pytest.raises(ValueError, match="Expected 2 debts"):
            get_debt_payoff_order(result, rollover_debts[:1])

    def test_unpaid_debt_uses_plan_length(self):
        """Test that debts still open at the cap report the plan length."""
        debts = [
            InstallmentDebt(
                id="underwater", name="Underwater", balance=10000.0, apr=12.0,
                fixed_minimum_payment=50.0,
            )
        ]
        result = compute_minimum_plan(debts)
        order = get_debt_payoff_order(result, debts)

        assert result.status == PlanStatus.ABORTED
        assert order[0].paid_off is False
        assert order[0].payoff_month == result.months


def _budget_result(strategy, budget, totals):
    snapshots = []
    paid = 0.0
    for month, amount in enumerate(totals, start=1):
        paid += amount
        snapshots.append(
            MonthlySnapshot(
                month=month,
                debt_payments=[
                    MonthlyDebtPayment(
                        debt_id="only",
                        payment=amount,
                        minimum_payment=amount,
                        balance=0.0 if month == len(totals) else 100.0,
                        interest_charged=0.0,
                    )
                ],
                total_paid=paid,
                total_interest=0.0,
                remaining_debt=0.0 if month == len(totals) else 100.0,
            )
        )
    return SimulationResult(
        strategy=strategy,
        status=PlanStatus.COMPLETE,
        total_paid=paid,
        total_interest=0.0,
        months=len(totals),
        monthly_budget=budget,
        debt_ids=["only"],
        monthly_payments=snapshots,
    )


class TestPaymentConsistency:
    """Test cases for fixed-budget consistency checks."""

    def test_accelerated_plans_are_consistent(self, mixed_debts):
        """Test that avalanche and snowball pay the full budget each month."""
        for plan in (compute_avalanche_plan, compute_snowball_plan):
            result = plan(mixed_debts, 200.0)
            is_valid, message = validate_payment_consistency(result)

            assert is_valid, message
            assert message == f"All {result.months} months have consistent payments"

    def test_short_final_month_is_allowed(self):
        """Test that a smaller last payment is not flagged."""
        result = _budget_result(RepaymentStrategy.AVALANCHE, 150.0, [150.0, 150.0, 80.0])
        assert find_inconsistent_months(result) == []

    def test_inconsistent_month_flagged(self):
        """Test that a month paying less than the budget is reported."""
        result = _budget_result(
            RepaymentStrategy.SNOWBALL, 150.0, [150.0, 120.0, 150.0, 80.0]
        )

        inconsistent = find_inconsistent_months(result)
        assert len(inconsistent) == 1
        assert inconsistent[0]["month"] == 2
        assert inconsistent[0]["difference"] == pytest.approx(30.0)

        is_valid, message = validate_payment_consistency(result)
        assert is_valid is False
        assert message == "1 months with inconsistent payments"

    def test_tolerance_absorbs_small_differences(self):
        """Test that differences within the tolerance are ignored."""
        result = _budget_result(RepaymentStrategy.AVALANCHE, 150.0, [150.05, 149.95, 40.0])
        assert validate_payment_consistency(result)[0] is True

    def test_minimum_plan_not_checked(self, rollover_debts):
        """Test that minimum-only plans have no fixed budget to check."""
        result = compute_minimum_plan(rollover_debts)
        is_valid, _ = validate_payment_consistency(result)
        assert is_valid is False

    def test_empty_ledger_not_checked(self):
        """Test that a plan with no months cannot be checked."""
        result = compute_avalanche_plan(
            [RevolvingDebt(id="paid", name="Paid", balance=0.0, apr=20.0)], 100.0
        )
        assert validate_payment_consistency(result) == (
            False,
            "No monthly payments to check",
        )


class TestPlanStatistics:
    """Test cases for ledger summary statistics."""

    def test_statistics_for_completed_plan(self, rollover_debts):
        """Test that statistics agree with the plan totals."""
        result = compute_avalanche_plan(rollover_debts, 0.0)
        stats = calculate_plan_statistics(result)

        assert stats["months"] == result.months
        assert stats["years"] == pytest.approx(result.months / 12)
        assert stats["principal_paid"] == pytest.approx(3500.0, abs=0.05)
        assert stats["interest_share"] == pytest.approx(
            result.total_interest / result.total_paid
        )
        assert stats["max_monthly_payment"] == pytest.approx(result.monthly_budget)
        assert stats["min_monthly_payment"] <= stats["average_monthly_payment"]
        assert stats["average_monthly_payment"] <= stats["max_monthly_payment"]
        assert stats["final_remaining_debt"] == 0.0

    def test_statistics_for_empty_ledger(self):
        """Test that a plan with no months reports zeros."""
        result = compute_minimum_plan(
            [RevolvingDebt(id="paid", name="Paid", balance=0.0, apr=20.0)]
        )
        stats = calculate_plan_statistics(result)

        assert stats["months"] == 0
        assert stats["total_paid"] == 0.0
        assert stats["average_monthly_payment"] == 0.0
