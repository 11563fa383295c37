"""Debt records supplied to the repayment simulator."""

from typing import Annotated, Any, Iterable, List, Literal, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .payment_calculator import PaymentCalculator


def _new_debt_id() -> str:
    return uuid4().hex


class DebtBase(BaseModel):
    """Fields shared by every kind of debt."""

    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)

    id: str = Field(
        default_factory=_new_debt_id, min_length=1, description="Opaque debt id"
    )
    name: str = Field(..., min_length=1, description="Display name")
    balance: float = Field(..., ge=0, description="Current owed principal")
    apr: float = Field(
        ..., ge=0, description="Annual percentage rate as a percentage (24.99)"
    )


class RevolvingDebt(DebtBase):
    """Credit card style debt whose minimum follows the balance."""

    kind: Literal["revolving"] = "revolving"

    @property
    def is_revolving(self) -> bool:
        return True

    def calculate_minimum_payment(self, balance: float) -> float:
        return PaymentCalculator.calculate_revolving_minimum(balance, self.apr)


class InstallmentDebt(DebtBase):
    """Amortized loan with a fixed contractual payment."""

    kind: Literal["installment"] = "installment"
    fixed_minimum_payment: float = Field(
        ..., ge=0, description="Contractual monthly payment"
    )

    @property
    def is_revolving(self) -> bool:
        return False

    def calculate_minimum_payment(self, balance: float) -> float:
        return PaymentCalculator.calculate_installment_minimum(
            balance, self.fixed_minimum_payment
        )


Debt = Annotated[Union[RevolvingDebt, InstallmentDebt], Field(discriminator="kind")]

_debt_list_adapter: TypeAdapter = TypeAdapter(List[Debt])


def parse_debts(data: Iterable[Any]) -> List[Union[RevolvingDebt, InstallmentDebt]]:
    """
    Parse debt records from plain mappings or existing models.

    Mappings select their variant with the ``kind`` key
    (``"revolving"`` or ``"installment"``).

    Raises:
        pydantic.ValidationError: If any record is invalid
    """
    items = [
        item.model_dump() if isinstance(item, DebtBase) else item for item in data
    ]
    return _debt_list_adapter.validate_python(items)


def create_sample_debts() -> List[Union[RevolvingDebt, InstallmentDebt]]:
    """Create a sample debt set for testing purposes."""
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
