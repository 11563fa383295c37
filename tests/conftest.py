"""
Pytest configuration and shared fixtures for the debt payoff planner tests.
"""

import os

import pytest

from payoff_planner.config import reset_global_settings
from payoff_planner.models.debt import InstallmentDebt, RevolvingDebt


@pytest.fixture(autouse=True)
def app_settings_env(monkeypatch):
    """Provide a valid SECRET_KEY and fresh global settings for every test."""
    if "SECRET_KEY" not in os.environ:
        monkeypatch.setenv("SECRET_KEY", "test-secret-key")
    reset_global_settings()
    yield
    reset_global_settings()


@pytest.fixture
def rollover_debts():
    """Two installment debts where the smaller, pricier one pays off first."""
    return [
        InstallmentDebt(
            id="debt-a",
            name="Debt A",
            balance=500.0,
            apr=20.0,
            fixed_minimum_payment=100.0,
        ),
        InstallmentDebt(
            id="debt-b",
            name="Debt B",
            balance=3000.0,
            apr=10.0,
            fixed_minimum_payment=50.0,
        ),
    ]


@pytest.fixture
def mixed_debts():
    """Two credit cards and a personal loan."""
    return [
        RevolvingDebt(id="card-1", name="Credit Card 1", balance=5000.0, apr=24.99),
        RevolvingDebt(id="card-2", name="Credit Card 2", balance=3000.0, apr=18.99),
        InstallmentDebt(
            id="loan-1",
            name="Personal Loan",
            balance=10000.0,
            apr=12.5,
            fixed_minimum_payment=250.0,
        ),
    ]
