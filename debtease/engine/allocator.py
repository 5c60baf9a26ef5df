"""Extra-payment allocation across open debts.

The only place a Strategy is dispatched on. Pure functions, no I/O.
"""

from decimal import Decimal
from typing import Callable, Iterable, Sequence

from debtease.engine.validation import ValidationError
from debtease.models.debt import Debt, Strategy

ZERO = Decimal("0")


def _avalanche_order(debts: Sequence[Debt], priority: Sequence[str] | None) -> list[Debt]:
    return sorted(debts, key=lambda d: (-d.annual_rate_percent, d.id))


def _snowball_order(debts: Sequence[Debt], priority: Sequence[str] | None) -> list[Debt]:
    return sorted(debts, key=lambda d: (d.current_balance, d.id))


def _custom_order(debts: Sequence[Debt], priority: Sequence[str] | None) -> list[Debt]:
    if priority is None:
        raise ValidationError(["Custom strategy requires a priority order of debt ids"])
    rank = {debt_id: i for i, debt_id in enumerate(priority)}
    # Unranked debts go last, by id
    return sorted(debts, key=lambda d: (rank.get(d.id, len(rank)), d.id))


ORDERINGS: dict[Strategy, Callable[[Sequence[Debt], Sequence[str] | None], list[Debt]]] = {
    Strategy.AVALANCHE: _avalanche_order,
    Strategy.SNOWBALL: _snowball_order,
    Strategy.CUSTOM: _custom_order,
}


def payoff_priority(
    debts: Iterable[Debt],
    strategy: Strategy,
    priority: Sequence[str] | None = None,
) -> list[Debt]:
    """Debts in the order a strategy directs extra money to them.

    Minimum-only keeps the input order since it never directs extra money.
    """
    debts = list(debts)
    order = ORDERINGS.get(strategy)
    if order is None:
        return debts
    return order(debts, priority)


def allocate_extra_payment(
    open_debts: Iterable[Debt],
    extra_amount: Decimal,
    strategy: Strategy,
    priority: Sequence[str] | None = None,
) -> dict[str, Decimal]:
    """Split ``extra_amount`` across open debts according to ``strategy``.

    Each debt's ``current_balance`` is taken as what is still owed after this
    month's minimum payment, and caps what that debt can receive. Whatever a
    debt cannot absorb cascades to the next one in strategy order.

    Returns ``{debt_id: amount}`` containing only debts that receive money.
    Minimum-only, no open debts, or no extra money give an empty map.
    """
    open_debts = list(open_debts)
    if strategy is Strategy.MINIMUM or not open_debts or extra_amount <= 0:
        return {}

    allocation: dict[str, Decimal] = {}
    remaining = extra_amount
    for debt in payoff_priority(open_debts, strategy, priority):
        if remaining <= 0:
            break
        share = min(remaining, max(ZERO, debt.current_balance))
        if share > 0:
            allocation[debt.id] = share
            remaining -= share
    return allocation
