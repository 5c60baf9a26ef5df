"""Input validation for simulation entry points.

Checks run once per call, before any monthly loop. The per-step arithmetic in
``amortization.compute_breakdown`` is left unchecked.
"""

from decimal import Decimal
from typing import Iterable

from debtease.engine.interest import payoff_amount
from debtease.models.debt import Debt

MAX_RATE_PERCENT = Decimal("100")
LARGE_PAYMENT_SHARE = Decimal("0.5")


class ValidationError(ValueError):
    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


def _debt_errors(debt: Debt) -> list[str]:
    errors = []
    if debt.current_balance < 0:
        errors.append(f"Debt {debt.id}: current balance must not be negative")
    if debt.annual_rate_percent < 0:
        errors.append(f"Debt {debt.id}: interest rate must not be negative")
    if debt.minimum_payment < 0:
        errors.append(f"Debt {debt.id}: minimum payment must not be negative")
    return errors


def validate_simulation_inputs(
    debts: Iterable[Debt],
    extra_payment: Decimal = Decimal("0"),
    months: int | None = None,
) -> None:
    """Raise ValidationError if any simulation input is negative or ids repeat."""
    errors: list[str] = []
    seen: set[str] = set()
    for debt in debts:
        errors.extend(_debt_errors(debt))
        if debt.id in seen:
            errors.append(f"Duplicate debt id: {debt.id}")
        seen.add(debt.id)

    if extra_payment < 0:
        errors.append("Extra payment must not be negative")
    if months is not None and months < 0:
        errors.append("Months must not be negative")

    if errors:
        raise ValidationError(errors)


def validate_debt(debt: Debt) -> None:
    """Simulation checks plus the business rule that APR is at most 100%."""
    errors = _debt_errors(debt)
    if debt.annual_rate_percent > MAX_RATE_PERCENT:
        errors.append(f"Debt {debt.id}: interest rate must be between 0% and 100%")
    if errors:
        raise ValidationError(errors)


def validate_payment(debt: Debt, amount: Decimal) -> list[str]:
    """Validate a one-off payment against a debt.

    Raises ValidationError for amounts that cannot be recorded. Returns a
    (possibly empty) list of warnings for amounts that are allowed but unusual.
    """
    owed = payoff_amount(debt.current_balance, debt.annual_rate_percent)
    if amount <= 0:
        raise ValidationError(["Payment amount must be greater than 0"])
    if amount > owed:
        raise ValidationError([f"Payment amount cannot exceed the payoff amount of {owed}"])

    warnings = []
    if amount > debt.current_balance * LARGE_PAYMENT_SHARE:
        warnings.append("This payment is more than 50% of the current balance")
    return warnings
