"""Multi-debt payoff simulation: timelines, strategy runs and comparisons.

Pure computation. No I/O. Every run works on its own copy of the balances,
so concurrent calls never share state.
"""

import copy
import logging
from dataclasses import replace
from decimal import Decimal
from typing import Iterable, Iterator, Sequence

from debtease.config import settings
from debtease.engine.allocator import allocate_extra_payment
from debtease.engine.amortization import compute_breakdown
from debtease.engine.interest import payoff_amount
from debtease.engine.validation import ValidationError, validate_simulation_inputs
from debtease.models.debt import Debt, Strategy
from debtease.models.results import (
    INFINITE_AMOUNT,
    NEVER,
    PayoffScenario,
    ProjectionPoint,
    ProjectionTimeline,
    StrategyComparison,
    StrategyResult,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _check_strategy(strategy: Strategy, priority: Sequence[str] | None) -> None:
    if strategy is Strategy.CUSTOM and priority is None:
        raise ValidationError(["Custom strategy requires a priority order of debt ids"])


def _simulate_months(
    debts: list[Debt],
    extra_payment: Decimal,
    strategy: Strategy,
    priority: Sequence[str] | None,
) -> Iterator[tuple[ProjectionPoint, list[str]]]:
    """Yield (point, ids closed that month) until every debt is closed.

    Each month every open debt gets its minimum (capped at what it owes),
    then the extra capacity is split by the allocator. Under every strategy
    except minimum-only, the extra capacity is the extra payment plus the
    minimums of debts already closed plus any minimum a debt could not
    absorb, so the monthly budget stays constant.
    """
    threshold = settings.closed_balance_threshold
    balances = {d.id: d.current_balance for d in debts}
    rolled_over = ZERO
    cumulative = ZERO
    month = 0

    while True:
        open_debts = [d for d in debts if balances[d.id] > threshold]
        if not open_debts:
            return
        month += 1

        minimums: dict[str, Decimal] = {}
        still_owed: list[Debt] = []
        unused_minimums = ZERO
        for debt in open_debts:
            owed = payoff_amount(balances[debt.id], debt.annual_rate_percent)
            paid = min(debt.minimum_payment, owed)
            minimums[debt.id] = paid
            unused_minimums += debt.minimum_payment - paid
            still_owed.append(replace(debt, current_balance=owed - paid))

        if strategy is Strategy.MINIMUM:
            capacity = ZERO
        else:
            capacity = extra_payment + rolled_over + unused_minimums
        extra = allocate_extra_payment(still_owed, capacity, strategy, priority)

        total_payment = ZERO
        total_interest = ZERO
        total_principal = ZERO
        closed: list[str] = []
        for debt in open_debts:
            payment = minimums[debt.id] + extra.get(debt.id, ZERO)
            step = compute_breakdown(balances[debt.id], debt.annual_rate_percent, payment)
            balances[debt.id] = step.new_balance

            total_payment += payment
            total_interest += step.interest_portion
            total_principal += step.principal_portion

            if step.new_balance <= threshold:
                closed.append(debt.id)
                if strategy is not Strategy.MINIMUM:
                    rolled_over += debt.minimum_payment

        cumulative += total_payment
        remaining = sum(
            (balances[d.id] for d in open_debts if balances[d.id] > threshold), ZERO
        )
        yield ProjectionPoint(
            month=month,
            total_balance=remaining,
            total_payment=total_payment,
            total_interest=total_interest,
            total_principal=total_principal,
            cumulative_payments=cumulative,
        ), closed


def generate_projection_timeline(
    debts: Iterable[Debt],
    extra_payment: Decimal,
    strategy: Strategy,
    months: int,
    priority: Sequence[str] | None = None,
) -> ProjectionTimeline:
    """Project combined balances month by month.

    Args:
        debts: Starting debt snapshot; not modified.
        extra_payment: Monthly amount on top of the minimums.
        strategy: How extra money is directed.
        months: Number of months to project, capped at
            ``settings.max_simulation_months``.
        priority: Debt ids in payoff order, for the custom strategy.

    The timeline ends early once every debt is closed. ``completed`` tells
    whether that happened within the projected months.
    """
    debts = list(debts)
    validate_simulation_inputs(debts, extra_payment, months)
    _check_strategy(strategy, priority)
    if not debts:
        return ProjectionTimeline(points=[], completed=True)

    limit = min(months, settings.max_simulation_months)
    points: list[ProjectionPoint] = []
    if limit > 0:
        for point, _ in _simulate_months(debts, extra_payment, strategy, priority):
            points.append(point)
            if len(points) >= limit:
                break

    if points:
        completed = points[-1].total_balance == 0
    else:
        completed = all(d.current_balance <= settings.closed_balance_threshold for d in debts)
    return ProjectionTimeline(points=points, completed=completed)


def simulate_strategy(
    debts: Iterable[Debt],
    extra_payment: Decimal,
    strategy: Strategy,
    priority: Sequence[str] | None = None,
) -> StrategyResult:
    """Run a strategy to the end and summarise it.

    Stops at debt-free, at ``settings.max_simulation_months``, or at the first
    month with no principal paid and no debt closed (every later month would
    be identical). The last two report ``NEVER`` months and infinite totals.
    """
    debts = list(debts)
    validate_simulation_inputs(debts, extra_payment)
    _check_strategy(strategy, priority)

    months = 0
    total_interest = ZERO
    total_payments = ZERO
    payoff_order: list[str] = []
    completed = all(d.current_balance <= settings.closed_balance_threshold for d in debts)

    for point, closed in _simulate_months(debts, extra_payment, strategy, priority):
        months = point.month
        total_interest += point.total_interest
        total_payments += point.total_payment
        payoff_order.extend(closed)

        if point.total_balance == 0:
            completed = True
            break
        if point.total_principal == 0 and not closed:
            logger.debug("%s run stalled in month %d", strategy.value, months)
            break
        if months >= settings.max_simulation_months:
            logger.debug("%s run hit the %d month cap", strategy.value, months)
            break

    if not completed:
        return StrategyResult(
            strategy=strategy,
            total_months=NEVER,
            total_interest_paid=INFINITE_AMOUNT,
            total_payments=INFINITE_AMOUNT,
            completed=False,
            payoff_order=payoff_order,
        )
    return StrategyResult(
        strategy=strategy,
        total_months=months,
        total_interest_paid=total_interest,
        total_payments=total_payments,
        completed=True,
        payoff_order=payoff_order,
    )


def compare_strategies(debts: Iterable[Debt], extra_payment: Decimal) -> StrategyComparison:
    """Run avalanche and snowball on the same snapshot and pick the cheaper.

    Ties go to avalanche.
    """
    debts = list(debts)
    validate_simulation_inputs(debts, extra_payment)

    avalanche = simulate_strategy(copy.deepcopy(debts), extra_payment, Strategy.AVALANCHE)
    snowball = simulate_strategy(copy.deepcopy(debts), extra_payment, Strategy.SNOWBALL)

    if not avalanche.completed and not snowball.completed:
        savings = ZERO
    else:
        savings = snowball.total_interest_paid - avalanche.total_interest_paid

    if avalanche.total_interest_paid <= snowball.total_interest_paid:
        recommended = Strategy.AVALANCHE
    else:
        recommended = Strategy.SNOWBALL

    return StrategyComparison(
        avalanche=avalanche,
        snowball=snowball,
        recommended=recommended,
        savings=savings,
    )


def payoff_scenarios(
    debts: Iterable[Debt],
    extra_amounts: Sequence[Decimal] | None = None,
) -> list[PayoffScenario]:
    """Minimum-only plus snowball and avalanche at each extra amount.

    Scenarios that never finish are left out. ``interest_saved`` is measured
    against minimum-only, and is infinite when minimum-only never finishes.
    """
    debts = list(debts)
    amounts = settings.scenario_extra_amounts if extra_amounts is None else extra_amounts
    validate_simulation_inputs(debts)
    for amount in amounts:
        if amount < 0:
            raise ValidationError(["Extra payment must not be negative"])

    baseline = simulate_strategy(debts, ZERO, Strategy.MINIMUM)
    scenarios = [
        PayoffScenario(
            id="minimum",
            strategy=Strategy.MINIMUM,
            extra_payment=ZERO,
            result=baseline,
            interest_saved=ZERO,
        )
    ]

    for amount in amounts:
        for strategy in (Strategy.SNOWBALL, Strategy.AVALANCHE):
            result = simulate_strategy(debts, amount, strategy)
            if result.completed and baseline.completed:
                saved = baseline.total_interest_paid - result.total_interest_paid
            else:
                saved = INFINITE_AMOUNT
            scenarios.append(PayoffScenario(
                id=f"{strategy.value}_{amount}",
                strategy=strategy,
                extra_payment=amount,
                result=result,
                interest_saved=saved,
            ))

    return [s for s in scenarios if s.result.completed]
