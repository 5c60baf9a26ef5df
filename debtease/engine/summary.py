"""Dashboard summary figures: totals, monthly obligations and DTI.

Pure functions. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from debtease.config import settings
from debtease.models.debt import Debt, PaymentFrequency
from debtease.models.results import DebtSummary, DTIMetrics

TWO_PLACES = Decimal("0.01")

# Payments per month for each frequency
MONTHLY_FACTORS = {
    PaymentFrequency.WEEKLY: Decimal("4.33"),
    PaymentFrequency.BIWEEKLY: Decimal("2.17"),
    PaymentFrequency.MONTHLY: Decimal("1"),
    PaymentFrequency.QUARTERLY: Decimal("1") / 3,
}


def monthly_equivalent(amount: Decimal, frequency: PaymentFrequency) -> Decimal:
    """Convert a per-period payment into its monthly equivalent."""
    return (amount * MONTHLY_FACTORS[frequency]).quantize(TWO_PLACES, ROUND_HALF_UP)


def total_monthly_payments(debts: Iterable[Debt]) -> Decimal:
    return sum(
        (monthly_equivalent(d.minimum_payment, d.payment_frequency) for d in debts if d.is_active),
        Decimal("0"),
    )


def debt_summary(debts: Iterable[Debt]) -> DebtSummary:
    """Aggregate active debts for the dashboard header."""
    active = [d for d in debts if d.is_active]
    if not active:
        return DebtSummary()

    average_rate = sum((d.annual_rate_percent for d in active), Decimal("0")) / len(active)
    return DebtSummary(
        total_debt=sum((d.current_balance for d in active), Decimal("0")),
        total_minimum_payments=total_monthly_payments(active),
        average_interest_rate=average_rate.quantize(TWO_PLACES, ROUND_HALF_UP),
        debt_count=len(active),
        high_priority_count=sum(1 for d in active if d.is_high_priority),
    )


def calculate_dti(debts: Iterable[Debt], monthly_income: Decimal) -> DTIMetrics:
    """Back-end debt-to-income ratio: monthly debt payments / monthly income.

    Ratio is a percentage; zero income gives a zero ratio.
    """
    payments = total_monthly_payments(debts)
    if monthly_income > 0:
        ratio = (payments / monthly_income * 100).quantize(TWO_PLACES, ROUND_HALF_UP)
    else:
        ratio = Decimal("0")

    return DTIMetrics(
        total_monthly_debt_payments=payments,
        monthly_income=monthly_income,
        dti_ratio=ratio,
        is_healthy=ratio <= settings.healthy_dti_threshold,
    )
