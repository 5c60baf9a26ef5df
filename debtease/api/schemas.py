"""Pydantic schemas for API request/response models."""

from decimal import Decimal

from pydantic import BaseModel, Field

from debtease.config import settings
from debtease.models.debt import Debt, PaymentFrequency, Strategy
from debtease.models.results import (
    ProjectionTimeline,
    PayoffEstimate,
    StrategyResult,
)


# ---- Request schemas ----

class DebtInput(BaseModel):
    id: str
    current_balance: Decimal
    annual_rate_percent: Decimal = Field(..., description="APR as a percent, e.g. 18.5")
    minimum_payment: Decimal

    name: str = ""
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    is_high_priority: bool = False
    is_active: bool = True

    def to_debt(self) -> Debt:
        return Debt(
            id=self.id,
            current_balance=self.current_balance,
            annual_rate_percent=self.annual_rate_percent,
            minimum_payment=self.minimum_payment,
            name=self.name,
            payment_frequency=self.payment_frequency,
            is_high_priority=self.is_high_priority,
            is_active=self.is_active,
        )


class BreakdownRequest(BaseModel):
    debt: DebtInput
    payment_amount: Decimal


class SuggestionsRequest(BaseModel):
    debt: DebtInput


class PayoffEstimateRequest(BaseModel):
    debt: DebtInput
    payment: Decimal | None = Field(None, description="Defaults to the minimum payment")
    max_months: int | None = Field(None, ge=0, le=settings.max_simulation_months)


class ExtraSavingsRequest(BaseModel):
    debt: DebtInput
    extra: Decimal


class TimelineRequest(BaseModel):
    debts: list[DebtInput]
    extra_payment: Decimal = Decimal("0")
    strategy: Strategy = Strategy.AVALANCHE
    months: int = 60
    priority: list[str] | None = Field(None, description="Debt ids in payoff order (custom strategy)")


class SimulateRequest(BaseModel):
    debts: list[DebtInput]
    extra_payment: Decimal = Decimal("0")
    strategy: Strategy = Strategy.AVALANCHE
    priority: list[str] | None = None


class CompareRequest(BaseModel):
    debts: list[DebtInput]
    extra_payment: Decimal = Decimal("0")


class ScenariosRequest(BaseModel):
    debts: list[DebtInput]
    extra_amounts: list[Decimal] | None = None


class SummaryRequest(BaseModel):
    debts: list[DebtInput]
    monthly_income: Decimal | None = None


# ---- Response schemas ----
# Months and amounts that are unbounded are sent as null.

class BreakdownResponse(BaseModel):
    interest_portion: Decimal
    principal_portion: Decimal
    new_balance: Decimal
    is_full_payoff: bool
    monthly_interest_amount: Decimal
    effective_monthly_rate_percent: Decimal
    warnings: list[str] = []


class PayoffEstimateResponse(BaseModel):
    months: int | None
    total_interest: Decimal | None
    pays_off: bool


class ExtraSavingsResponse(BaseModel):
    months_saved: int | None
    interest_saved: Decimal | None
    new_payoff_months: int | None
    pays_off: bool


class SuggestionResponse(BaseModel):
    kind: str
    amount: Decimal
    payoff: PayoffEstimateResponse


class ProjectionPointResponse(BaseModel):
    month: int
    total_balance: Decimal
    total_payment: Decimal
    total_interest: Decimal
    total_principal: Decimal
    cumulative_payments: Decimal


class TimelineResponse(BaseModel):
    points: list[ProjectionPointResponse]
    completed: bool


class StrategyResultResponse(BaseModel):
    strategy: Strategy
    total_months: int | None
    total_interest_paid: Decimal | None
    total_payments: Decimal | None
    completed: bool
    payoff_order: list[str]


class ComparisonResponse(BaseModel):
    avalanche: StrategyResultResponse
    snowball: StrategyResultResponse
    recommended: Strategy
    savings: Decimal | None  # Null when only one strategy finishes


class ScenarioResponse(BaseModel):
    id: str
    strategy: Strategy
    extra_payment: Decimal
    result: StrategyResultResponse
    interest_saved: Decimal | None


class DTIResponse(BaseModel):
    total_monthly_debt_payments: Decimal
    monthly_income: Decimal
    dti_ratio: Decimal
    is_healthy: bool


class SummaryResponse(BaseModel):
    total_debt: Decimal
    total_minimum_payments: Decimal
    average_interest_rate: Decimal
    debt_count: int
    high_priority_count: int
    dti: DTIResponse | None = None


# ---- Converters ----

def finite(value):
    """None for infinite months or amounts, the value otherwise."""
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, float):
        return None if value == float("inf") else int(value)
    return value


def estimate_response(estimate: PayoffEstimate) -> PayoffEstimateResponse:
    return PayoffEstimateResponse(
        months=finite(estimate.months),
        total_interest=finite(estimate.total_interest),
        pays_off=estimate.pays_off,
    )


def timeline_response(timeline: ProjectionTimeline) -> TimelineResponse:
    return TimelineResponse(
        points=[
            ProjectionPointResponse(
                month=p.month,
                total_balance=p.total_balance,
                total_payment=p.total_payment,
                total_interest=p.total_interest,
                total_principal=p.total_principal,
                cumulative_payments=p.cumulative_payments,
            )
            for p in timeline
        ],
        completed=timeline.completed,
    )


def strategy_response(result: StrategyResult) -> StrategyResultResponse:
    return StrategyResultResponse(
        strategy=result.strategy,
        total_months=finite(result.total_months),
        total_interest_paid=finite(result.total_interest_paid),
        total_payments=finite(result.total_payments),
        completed=result.completed,
        payoff_order=result.payoff_order,
    )
