import math
from dataclasses import dataclass, field
from decimal import Decimal

from debtease.models.debt import Strategy

NEVER = math.inf  # Month count for a debt that is never paid off
INFINITE_AMOUNT = Decimal("Infinity")


@dataclass(frozen=True)
class PaymentBreakdown:
    interest_portion: Decimal
    principal_portion: Decimal
    new_balance: Decimal
    is_full_payoff: bool

    # Context for the payment dialog
    monthly_interest_amount: Decimal = Decimal("0")  # Interest due this month
    effective_monthly_rate_percent: Decimal = Decimal("0")


@dataclass(frozen=True)
class PayoffEstimate:
    months: int | float  # NEVER when the payment cannot outpace interest
    total_interest: Decimal

    @property
    def pays_off(self) -> bool:
        return self.months != NEVER


@dataclass(frozen=True)
class ExtraPaymentSavings:
    months_saved: int | float
    interest_saved: Decimal
    new_payoff_months: int | float


@dataclass(frozen=True)
class PaymentSuggestion:
    kind: str  # "minimum" | "double_minimum" | "interest_plus" | "full_payoff"
    amount: Decimal
    payoff: PayoffEstimate


@dataclass(frozen=True)
class ProjectionPoint:
    month: int
    total_balance: Decimal
    total_payment: Decimal
    total_interest: Decimal
    total_principal: Decimal
    cumulative_payments: Decimal


@dataclass(frozen=True)
class ProjectionTimeline:
    """Month-by-month projection.

    ``completed`` is False when the month limit was reached before every
    debt closed, so callers can tell "debt-free early" from "gave up".
    """

    points: list[ProjectionPoint] = field(default_factory=list)
    completed: bool = False

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def __getitem__(self, index):
        return self.points[index]


@dataclass(frozen=True)
class StrategyResult:
    strategy: Strategy
    total_months: int | float  # NEVER if the run did not finish
    total_interest_paid: Decimal
    total_payments: Decimal
    completed: bool
    payoff_order: list[str] = field(default_factory=list)  # Debt ids, in closing order


@dataclass(frozen=True)
class StrategyComparison:
    avalanche: StrategyResult
    snowball: StrategyResult
    recommended: Strategy
    savings: Decimal  # Snowball interest minus avalanche interest


@dataclass(frozen=True)
class PayoffScenario:
    id: str  # e.g. "minimum", "avalanche_5000"
    strategy: Strategy
    extra_payment: Decimal
    result: StrategyResult
    interest_saved: Decimal  # Versus minimum payments only


@dataclass
class DebtSummary:
    total_debt: Decimal = Decimal("0")
    total_minimum_payments: Decimal = Decimal("0")  # Monthly equivalent
    average_interest_rate: Decimal = Decimal("0")
    debt_count: int = 0
    high_priority_count: int = 0


@dataclass(frozen=True)
class DTIMetrics:
    total_monthly_debt_payments: Decimal
    monthly_income: Decimal
    dti_ratio: Decimal  # Percent
    is_healthy: bool
