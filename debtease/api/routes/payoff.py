"""Single-debt payoff routes."""

from fastapi import APIRouter, HTTPException

from debtease.api.schemas import (
    ExtraSavingsRequest,
    ExtraSavingsResponse,
    PayoffEstimateRequest,
    PayoffEstimateResponse,
    estimate_response,
    finite,
)
from debtease.engine.amortization import estimate_payoff_time, extra_payment_savings
from debtease.engine.validation import ValidationError
from debtease.models.results import NEVER

router = APIRouter(prefix="/api/v1/payoff", tags=["payoff"])


@router.post("/estimate", response_model=PayoffEstimateResponse)
async def estimate(req: PayoffEstimateRequest):
    """Months and interest to clear one debt at a fixed monthly payment."""
    try:
        result = estimate_payoff_time(req.debt.to_debt(), req.payment, req.max_months)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors)
    return estimate_response(result)


@router.post("/extra-savings", response_model=ExtraSavingsResponse)
async def extra_savings(req: ExtraSavingsRequest):
    try:
        result = extra_payment_savings(req.debt.to_debt(), req.extra)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.errors)

    return ExtraSavingsResponse(
        months_saved=finite(result.months_saved),
        interest_saved=finite(result.interest_saved),
        new_payoff_months=finite(result.new_payoff_months),
        pays_off=result.new_payoff_months != NEVER,
    )
