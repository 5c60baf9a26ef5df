"""Single-debt amortization math.

Pure functions: Decimal in, dataclass out. No I/O.
"""

import logging
from decimal import Decimal

from debtease.config import settings
from debtease.engine.interest import interest_due, monthly_rate, payoff_amount
from debtease.engine.validation import ValidationError, validate_simulation_inputs
from debtease.models.debt import Debt
from debtease.models.results import (
    INFINITE_AMOUNT,
    NEVER,
    ExtraPaymentSavings,
    PaymentBreakdown,
    PaymentSuggestion,
    PayoffEstimate,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
INTEREST_PLUS_MARGIN = Decimal("100")  # "Interest + 100" suggestion


def compute_breakdown(
    balance: Decimal, annual_rate_percent: Decimal, payment_amount: Decimal
) -> PaymentBreakdown:
    """Split a single payment into interest and principal.

    Interest is paid first and never exceeds the payment. A payment below the
    interest due is all interest and leaves the balance unchanged. Inputs are
    not validated: negative values produce meaningless but finite output.
    """
    rate = monthly_rate(annual_rate_percent)
    due = interest_due(balance, annual_rate_percent)

    interest = min(due, payment_amount)
    principal = max(ZERO, payment_amount - interest)
    new_balance = max(ZERO, balance - principal)

    return PaymentBreakdown(
        interest_portion=interest,
        principal_portion=principal,
        new_balance=new_balance,
        is_full_payoff=new_balance == 0,
        monthly_interest_amount=due,
        effective_monthly_rate_percent=rate * 100,
    )


def estimate_payoff_time(
    debt: Debt,
    payment: Decimal | None = None,
    max_months: int | None = None,
) -> PayoffEstimate:
    """Months and total interest to clear ``debt`` at a fixed monthly payment.

    Args:
        debt: The debt to pay down.
        payment: Monthly payment; defaults to the debt's minimum payment.
        max_months: Iteration cap, never above ``settings.max_simulation_months``.

    Returns ``PayoffEstimate(NEVER, Infinity)`` when the payment does not
    exceed the interest due or the cap is reached first.
    """
    validate_simulation_inputs([debt], months=max_months)
    if payment is not None and payment < 0:
        raise ValidationError(["Payment must not be negative"])

    amount = debt.minimum_payment if payment is None else payment
    limit = settings.max_simulation_months
    if max_months is not None:
        limit = min(max_months, limit)
    balance = debt.current_balance
    rate = debt.annual_rate_percent
    total_interest = ZERO

    if balance == 0:
        return PayoffEstimate(months=0, total_interest=ZERO)

    for month in range(1, limit + 1):
        due = interest_due(balance, rate)
        if amount <= due:
            # Balance can no longer fall, so interest due can no longer fall either
            return PayoffEstimate(months=NEVER, total_interest=INFINITE_AMOUNT)

        step = compute_breakdown(balance, rate, min(amount, balance + due))
        total_interest += step.interest_portion
        balance = step.new_balance
        if step.is_full_payoff:
            return PayoffEstimate(months=month, total_interest=total_interest)

    logger.debug("Debt %s not paid off within %d months", debt.id, limit)
    return PayoffEstimate(months=NEVER, total_interest=INFINITE_AMOUNT)


def extra_payment_savings(debt: Debt, extra: Decimal) -> ExtraPaymentSavings:
    """Effect of paying ``extra`` on top of the minimum every month."""
    if extra < 0:
        raise ValidationError(["Extra payment must not be negative"])
    baseline = estimate_payoff_time(debt)
    with_extra = estimate_payoff_time(debt, payment=debt.minimum_payment + extra)

    if not with_extra.pays_off:
        return ExtraPaymentSavings(months_saved=0, interest_saved=ZERO, new_payoff_months=NEVER)
    if not baseline.pays_off:
        return ExtraPaymentSavings(
            months_saved=NEVER,
            interest_saved=INFINITE_AMOUNT,
            new_payoff_months=with_extra.months,
        )
    return ExtraPaymentSavings(
        months_saved=baseline.months - with_extra.months,
        interest_saved=baseline.total_interest - with_extra.total_interest,
        new_payoff_months=with_extra.months,
    )


def payment_suggestions(debt: Debt) -> list[PaymentSuggestion]:
    """Quick-pick payment amounts for a debt, smallest first.

    Amounts above what it takes to clear the debt this month are dropped.
    """
    if debt.current_balance <= 0:
        return []

    due = interest_due(debt.current_balance, debt.annual_rate_percent)
    owed = debt.current_balance + due
    candidates = [
        ("minimum", debt.minimum_payment),
        ("double_minimum", debt.minimum_payment * 2),
        ("interest_plus", due + INTEREST_PLUS_MARGIN),
        ("full_payoff", owed),
    ]

    suggestions = [
        PaymentSuggestion(
            kind=kind,
            amount=amount,
            payoff=estimate_payoff_time(debt, payment=amount),
        )
        for kind, amount in candidates
        if 0 < amount <= owed
    ]
    return sorted(suggestions, key=lambda s: s.amount)
