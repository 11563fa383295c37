"""
Extra-payment allocation policies.

Each month the surplus left after minimum payments is spent on one debt at a
time, chosen by the active policy. The target is re-selected whenever a debt
is paid off, so a large surplus can clear several debts in the same month.
"""

import logging
from typing import Protocol, Sequence

from ..payment_calculator import PAYOFF_EPSILON
from .accounts import DebtAccount

logger = logging.getLogger(__name__)


class AllocationPolicy(Protocol):
    """Chooses which debt receives the next slice of surplus."""

    def select_target(self, candidates: Sequence[DebtAccount]) -> DebtAccount:
        """
        Select the priority debt.

        Args:
            candidates: Accounts with a positive balance, in input order

        Returns:
            The account to pay next
        """
        ...


class AvalanchePolicy:
    """Highest APR first; ties go to the earliest debt."""

    def select_target(self, candidates: Sequence[DebtAccount]) -> DebtAccount:
        # max() keeps the first of equal keys
        return max(candidates, key=lambda account: account.apr)


class SnowballPolicy:
    """Lowest balance first; ties go to the higher APR, then the earliest debt."""

    def select_target(self, candidates: Sequence[DebtAccount]) -> DebtAccount:
        return min(candidates, key=lambda account: (account.balance, -account.apr))


def allocate_surplus(
    accounts: Sequence[DebtAccount],
    surplus: float,
    policy: AllocationPolicy,
    month: int = 0,
) -> float:
    """
    Spend a month's surplus on debts in policy order.

    Args:
        accounts: Working accounts for the run
        surplus: Amount available beyond this month's minimums
        policy: Target selection policy
        month: Month number, used for logging only

    Returns:
        Surplus left unapplied (below one cent unless every debt is paid off)
    """
    while surplus >= PAYOFF_EPSILON:
        candidates = [account for account in accounts if not account.is_paid_off]
        if not candidates:
            break

        target = policy.select_target(candidates)
        applied = target.pay_extra(surplus)
        surplus -= applied

        logger.debug(
            f"Month {month}: applied {applied:.2f} extra to {target.debt.name}, "
            f"balance now {target.balance:.2f}"
        )
        if target.is_paid_off:
            logger.debug(f"Month {month}: paid off {target.debt.name}")

    return max(surplus, 0.0)
