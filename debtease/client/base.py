"""Protocol for the store that owns the user's debts.

The payoff engine never persists anything; whatever implements this protocol
does.
"""

from datetime import date
from decimal import Decimal
from typing import Protocol, runtime_checkable

from debtease.models.debt import Debt


@runtime_checkable
class DebtStore(Protocol):
    async def get_debts(self, active_only: bool = True) -> list[Debt]:
        """Fetch the user's debts."""
        ...

    async def record_payment(
        self,
        debt_id: str,
        amount: Decimal,
        payment_date: date | None = None,
        notes: str | None = None,
    ) -> dict:
        """Record a payment against a debt."""
        ...
